from sqlalchemy import Column, Integer, Text
from bookstore.db import Base

class Book(Base):
    __tablename__ = "books"
    isbn = Column(Text, primary_key=True)
    amazon_url = Column(Text, nullable=False)
    author = Column(Text, nullable=False)
    language = Column(Text, nullable=False)
    pages = Column(Integer, nullable=False)
    publisher = Column(Text, nullable=False)
    title = Column(Text, nullable=False)
    year = Column(Integer, nullable=False)
