"""
Shared model configuration.

The data API speaks camelCase; Python code uses snake_case. Models accept
either on input and serialize with aliases for the wire.

Dependencies: pydantic
System role: Base class for data API contracts
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    def to_api(self) -> dict:
        """Serialize for a GraphQL variables payload."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
