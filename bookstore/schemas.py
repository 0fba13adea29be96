"""
Request/response shapes for the books API.

Every field of a book is required and strictly typed: ``"264"`` is not a
page count and ``2017`` is not a title. Request bodies wrap the book in a
``{"book": {...}}`` envelope, responses do the same (or use ``books`` for
the listing).
"""
from __future__ import annotations
from typing import List, Sequence

from pydantic import BaseModel, ConfigDict, Field


class BookIn(BaseModel):
    isbn: str = Field(..., strict=True, min_length=1)
    amazon_url: str = Field(..., strict=True)
    author: str = Field(..., strict=True)
    language: str = Field(..., strict=True)
    pages: int = Field(..., strict=True, gt=0)
    publisher: str = Field(..., strict=True)
    title: str = Field(..., strict=True)
    year: int = Field(..., strict=True)


class BookOut(BookIn):
    model_config = ConfigDict(from_attributes=True)


class BookPayload(BaseModel):
    book: BookIn


class BookResponse(BaseModel):
    book: BookOut


class BookListResponse(BaseModel):
    books: List[BookOut]


class MessageResponse(BaseModel):
    message: str


def validation_messages(errors: Sequence[dict]) -> List[str]:
    """
    Flatten pydantic error dicts into "<path>: <reason>" strings.
    The leading "body" segment FastAPI adds to locations is dropped.
    """
    out: List[str] = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ())]
        if loc and loc[0] == "body":
            loc = loc[1:]
        path = ".".join(loc) or "body"
        out.append(f"{path}: {err.get('msg', 'invalid value')}")
    return out
