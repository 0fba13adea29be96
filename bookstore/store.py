"""
Persistence for the ``books`` table.

``BookStore`` is the interface the API depends on; ``SqlBookStore`` is the
SQLAlchemy implementation used in production. Each mutating call commits
its own unit of work since every operation touches a single row.
"""
from __future__ import annotations
import logging
from typing import List, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.errors import ConflictError, NotFoundError
from bookstore.models.book import Book
from bookstore.schemas import BookIn, BookOut

logger = logging.getLogger("bookstore.store")

# every column except the primary key
MUTABLE_FIELDS = ("amazon_url", "author", "language", "pages", "publisher", "title", "year")


class BookStore(Protocol):
    def find_all(self) -> List[BookOut]: ...

    def find_one(self, isbn: str) -> BookOut: ...

    def create(self, book: BookIn) -> BookOut: ...

    def update(self, isbn: str, book: BookIn) -> BookOut: ...

    def remove(self, isbn: str) -> None: ...


def not_found(isbn: str) -> NotFoundError:
    return NotFoundError(f"There is no book with an isbn '{isbn}'")


def duplicate(isbn: str) -> ConflictError:
    return ConflictError(f"A book with isbn '{isbn}' already exists")


class SqlBookStore:
    def __init__(self, db: Session) -> None:
        self._db = db

    def _get(self, isbn: str) -> Book:
        row = self._db.get(Book, isbn)
        if row is None:
            raise not_found(isbn)
        return row

    def find_all(self) -> List[BookOut]:
        rows = self._db.scalars(select(Book).order_by(Book.title, Book.isbn)).all()
        return [BookOut.model_validate(b) for b in rows]

    def find_one(self, isbn: str) -> BookOut:
        return BookOut.model_validate(self._get(isbn))

    def create(self, book: BookIn) -> BookOut:
        if self._db.get(Book, book.isbn) is not None:
            logger.info("book.duplicate isbn=%s", book.isbn)
            raise duplicate(book.isbn)

        row = Book(**book.model_dump())
        self._db.add(row)
        try:
            self._db.commit()
        except IntegrityError:
            # lost a race with a concurrent insert of the same isbn
            self._db.rollback()
            logger.info("book.duplicate isbn=%s", book.isbn)
            raise duplicate(book.isbn) from None
        logger.info("book.created isbn=%s", row.isbn)
        return BookOut.model_validate(row)

    def update(self, isbn: str, book: BookIn) -> BookOut:
        row = self._get(isbn)
        for field in MUTABLE_FIELDS:
            setattr(row, field, getattr(book, field))
        self._db.commit()
        logger.info("book.updated isbn=%s", isbn)
        return BookOut.model_validate(row)

    def remove(self, isbn: str) -> None:
        row = self._get(isbn)
        self._db.delete(row)
        self._db.commit()
        logger.info("book.deleted isbn=%s", isbn)
