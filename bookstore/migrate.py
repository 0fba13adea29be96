from __future__ import annotations
import hashlib
from pathlib import Path
from datetime import datetime, timezone

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

from bookstore.db import engine as default_engine

MIGRATIONS_DIR = Path(__file__).with_name("migrations")

def sha256(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()

def ensure_schema_table(conn: Connection):
    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS schema_migrations (
          filename TEXT PRIMARY KEY,
          checksum TEXT NOT NULL,
          applied_at TIMESTAMP NOT NULL
        )
    """))

def applied_checksum(conn: Connection, filename: str) -> str | None:
    return conn.execute(
        text("SELECT checksum FROM schema_migrations WHERE filename = :f"),
        {"f": filename}
    ).scalar()

def record_applied(conn: Connection, filename: str, checksum: str):
    conn.execute(
        text("INSERT INTO schema_migrations (filename, checksum, applied_at) VALUES (:f, :c, :t)"),
        {"f": filename, "c": checksum, "t": datetime.now(timezone.utc)}
    )

def run(engine: Engine | None = None, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
    """Apply pending *.sql files in name order; returns the filenames applied."""
    engine = engine or default_engine
    files = sorted(p for p in migrations_dir.glob("*.sql"))
    if not files:
        print("No migrations found.")
        return []

    applied: list[str] = []
    with engine.begin() as conn:
        ensure_schema_table(conn)

        for f in files:
            filename = f.name
            sql = f.read_text()
            checksum = sha256(sql)
            previous = applied_checksum(conn, filename)
            if previous is not None:
                if previous != checksum:
                    print(f"Warning: {filename} changed since it was applied")
                print(f"Skip {filename} (already applied)")
                continue

            conn.execute(text(sql))
            record_applied(conn, filename, checksum)
            applied.append(filename)
            print(f"Applied {filename}")

    print("All migrations up to date.")
    return applied

if __name__ == "__main__":
    run()
