from __future__ import annotations
import argparse
from typing import Tuple

import pandas as pd
from pydantic import ValidationError
from sqlalchemy.orm import Session

from bookstore.db import SessionLocal
from bookstore.errors import ConflictError
from bookstore.schemas import BookIn
from bookstore.store import SqlBookStore

INT_COLUMNS = ("pages", "year")

def read_books_csv(path: str) -> pd.DataFrame:
    # everything as text so isbns keep their leading zeros
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [c.strip().lower() for c in df.columns]
    return df

def _row_to_book(row: dict) -> dict:
    out = {k: (v.strip() if isinstance(v, str) else v) for k, v in row.items()}
    for col in INT_COLUMNS:
        v = out.get(col)
        if isinstance(v, str):
            try:
                out[col] = int(v)
            except ValueError:
                pass  # left as text so validation rejects the row
    return out

def load_csv(db: Session, path: str) -> Tuple[int, int, int]:
    """Returns (inserted, duplicates, invalid)."""
    store = SqlBookStore(db)
    inserted = duplicates = invalid = 0
    for _, r in read_books_csv(path).iterrows():
        try:
            book = BookIn.model_validate(_row_to_book(r.to_dict()))
        except ValidationError as e:
            invalid += 1
            print(f"• Skipped row {r.get('isbn') or '?'}: {e.error_count()} invalid field(s)")
            continue
        try:
            store.create(book)
            inserted += 1
        except ConflictError:
            duplicates += 1
    return inserted, duplicates, invalid

if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Load books from a CSV file")
    ap.add_argument("csv", help="CSV with isbn,amazon_url,author,language,pages,publisher,title,year")
    args = ap.parse_args()

    with SessionLocal() as db:
        inserted, duplicates, invalid = load_csv(db, args.csv)
    print(f"Seed complete — inserted: {inserted}, duplicates: {duplicates}, invalid: {invalid}")
