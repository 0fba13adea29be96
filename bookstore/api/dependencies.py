from fastapi import Depends
from sqlalchemy.orm import Session

from bookstore.db import get_db
from bookstore.store import BookStore, SqlBookStore


def book_store(db: Session = Depends(get_db)) -> BookStore:
    return SqlBookStore(db)
