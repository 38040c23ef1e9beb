"""
Base schema: snake_case attributes, camelCase JSON
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts either spelling on input, always emits camelCase"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class MessageResponse(CamelModel):
    message: str
