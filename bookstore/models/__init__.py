from bookstore.models.book import Book  # noqa: F401
