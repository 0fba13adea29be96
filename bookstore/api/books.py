from fastapi import APIRouter, Depends, status

from bookstore.api.dependencies import book_store
from bookstore.schemas import (
    BookListResponse,
    BookPayload,
    BookResponse,
    MessageResponse,
)
from bookstore.store import BookStore

router = APIRouter(prefix="/books", tags=["books"])

@router.get("", response_model=BookListResponse)
def list_books(store: BookStore = Depends(book_store)):
    return {"books": store.find_all()}

@router.get("/{isbn}", response_model=BookResponse)
def get_book(isbn: str, store: BookStore = Depends(book_store)):
    return {"book": store.find_one(isbn)}

@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
def create_book(payload: BookPayload, store: BookStore = Depends(book_store)):
    """
    Create a book. The body is validated before the store is touched;
    a duplicate isbn is reported as 400.
    """
    return {"book": store.create(payload.book)}

@router.put("/{isbn}", response_model=BookResponse)
def update_book(isbn: str, payload: BookPayload, store: BookStore = Depends(book_store)):
    """
    Replace every field of an existing book. The path isbn identifies the
    row; an isbn inside the body is validated but never changes identity.
    """
    return {"book": store.update(isbn, payload.book)}

@router.delete("/{isbn}", response_model=MessageResponse)
def delete_book(isbn: str, store: BookStore = Depends(book_store)):
    store.remove(isbn)
    return {"message": "Book deleted"}
