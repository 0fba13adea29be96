import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine, delete
from sqlalchemy.orm import Session, sessionmaker

from bookstore.api.dependencies import book_store
from bookstore.db import Base, get_db
from bookstore.main import app
from bookstore.models import Book
from bookstore.schemas import BookIn
from bookstore.store import SqlBookStore
from tests.dsl import BooksApi
from tests.fakes import InMemoryBookStore

POWER_UP = {
    "isbn": "0691161518",
    "amazon_url": "http://a.co/eobPtX2",
    "author": "Matthew Lane",
    "language": "english",
    "pages": 264,
    "publisher": "Princeton University Press",
    "title": "Power-Up: Unlocking Hidden Math in Video Games",
    "year": 2017,
}


@pytest.fixture(scope="session")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture()
def db(engine) -> Iterator[Session]:
    session = sessionmaker(bind=engine, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.rollback()
        session.execute(delete(Book))
        session.commit()
        session.close()


@pytest.fixture()
def sql_store(db: Session) -> SqlBookStore:
    store = SqlBookStore(db)
    store.create(BookIn(**POWER_UP))
    return store


@pytest.fixture()
def client(engine, sql_store) -> Iterator[TestClient]:
    factory = sessionmaker(bind=engine, expire_on_commit=False)

    def test_db() -> Iterator[Session]:
        session = factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = test_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def api(client: TestClient) -> BooksApi:
    return BooksApi(client)


@pytest.fixture()
def fake_store() -> InMemoryBookStore:
    return InMemoryBookStore([BookIn(**POWER_UP)])


@pytest.fixture()
def fake_api(fake_store: InMemoryBookStore) -> Iterator[BooksApi]:
    app.dependency_overrides[book_store] = lambda: fake_store
    yield BooksApi(TestClient(app))
    app.dependency_overrides.clear()
