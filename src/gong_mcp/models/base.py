"""Base model configuration for all Pydantic models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class GongBaseModel(BaseModel):
    """Base model for every record the server emits.

    Configuration:
    - extra="forbid": Reject unexpected fields (strict validation)
    - validate_assignment=True: Validate on attribute assignment
    - alias_generator=to_camel: Serialize with camelCase keys
    - populate_by_name=True: Construct with snake_case field names
    """

    model_config = ConfigDict(
        frozen=False,
        extra="forbid",
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json(self) -> str:
        """Render the record as pretty-printed camelCase JSON."""
        return self.model_dump_json(by_alias=True, indent=2)


class UpstreamBaseModel(BaseModel):
    """Base model for Gong API payloads.

    Ignores fields we don't model and accepts numeric identifiers as strings.
    """

    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )
