"""User and status output models."""

from pydantic import Field

from gong_mcp.models.base import GongBaseModel


class UserRecord(GongBaseModel):
    """A Gong user as emitted by ``gong://users``."""

    id: str = ""
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    active: bool = False


class UserList(GongBaseModel):
    """One page of users."""

    users: list[UserRecord] = Field(default_factory=list)
    count: int = Field(0, ge=0)
    has_more: bool = False
    next_cursor: str | None = None
    message: str = ""


class StatusRecord(GongBaseModel):
    """Configuration status reported by ``gong://status``."""

    configured: bool
    base_url: str | None = None
    message: str
