"""
Pydantic models for memo payloads.

Request bodies are deliberately loose (every field optional) so that
the rules live in one place, ``MemoValidationService``, and produce
the same messages for every client.  Responses use camelCase names
on the wire (``wordCount``, ``canBeModified``, ``isExpired``,
``isSuccess``) while the Python side keeps snake_case.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MemoCreate(BaseModel):
    """Schema for creating a memo."""

    title: Optional[str] = Field(None, examples=["Shopping list"])
    content: Optional[str] = Field(None, examples=["Milk, eggs and bread"])


class MemoUpdate(BaseModel):
    """Schema for updating a memo.

    Both fields are optional; only provided values are updated.
    """

    title: Optional[str] = None
    content: Optional[str] = None


class MemoRecord(CamelModel):
    """Stored shape of a memo."""

    id: str = Field(..., examples=["c3fe2b14-ff09-4396-a3c3-c48b393b2db6"])
    title: str
    content: str
    regdate: int = Field(..., description="Creation time in milliseconds since the epoch")


class MemoRead(MemoRecord):
    """Memo decorated with the values derived from its lifecycle rules."""

    word_count: int
    can_be_modified: bool = Field(..., description="True during the first 24 hours")
    is_expired: bool = Field(..., description="True once the memo is older than 30 days")


class MemoResponse(CamelModel, Generic[T]):
    """Envelope returned by mutating endpoints."""

    is_success: bool = True
    message: str
    item: Optional[T] = None


class MemoDeleteResponse(CamelModel):
    """Envelope returned by the delete endpoint; it carries no item."""

    is_success: bool = True
    message: str


class ErrorResponse(CamelModel):
    is_success: bool = False
    message: str
    errors: List[str] = Field(default_factory=list)
