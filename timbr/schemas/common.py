"""
Shared Pydantic base for request and response schemas.
The wire format uses camelCase keys; Python code uses snake_case attributes.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema with camelCase aliases; unknown input keys are ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


# Largest value an INTEGER column holds
MAX_INT32 = 2_147_483_647
