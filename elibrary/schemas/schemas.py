from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _as_utc(value: datetime) -> datetime:
    # stored timestamps are naive UTC
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


# Request bodies only describe shape; field rules live in services.validation
# so create and partial update report errors the same way.
class BookCreate(CamelModel):
    title: str
    author: str
    genre: str
    isbn: str
    description: str = ""
    copies: StrictInt


class BookUpdate(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    title: Optional[str] = None
    author: Optional[str] = None
    genre: Optional[str] = None
    isbn: Optional[str] = None
    description: Optional[str] = None
    copies: Optional[StrictInt] = None


class BookOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    title: str
    author: str
    genre: str
    isbn: str
    description: str
    copies: int
    available: bool
    created_at: UtcDatetime
    updated_at: UtcDatetime


class BorrowCreate(CamelModel):
    book: str = Field(..., min_length=1)
    quantity: StrictInt
    due_date: datetime


class BorrowOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    book: str = Field(validation_alias="book_id")
    quantity: int
    due_date: UtcDatetime
    created_at: UtcDatetime
    updated_at: UtcDatetime


class SummaryBook(BaseModel):
    title: str
    isbn: str


class BorrowSummaryOut(CamelModel):
    book: SummaryBook
    total_quantity: int
