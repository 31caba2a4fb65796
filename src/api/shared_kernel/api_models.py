"""Pydantic base for HTTP request and response bodies.

The API speaks camelCase JSON (``allowedGroupId``, ``isSidelined``) while
Python code keeps snake_case attribute names.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing fields under camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MessageResponse(CamelModel):
    """Plain acknowledgement body."""

    message: str
