from __future__ import annotations
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from bookstore.api.books import router as books_router
from bookstore.config import FRONTEND_ORIGIN, LOG_LEVEL
from bookstore.db import Base, engine, get_db
from bookstore.errors import register_error_handlers
from bookstore import models  # noqa: F401

logging.basicConfig(level=getattr(logging, LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger("bookstore")

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fresh databases work without running migrations first
    Base.metadata.create_all(bind=engine)
    logger.info("bookstore.startup tables=%s", ",".join(sorted(Base.metadata.tables)))
    yield


app = FastAPI(title="Bookstore API", lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=[FRONTEND_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    started = time.perf_counter()
    logger.info("request.started method=%s path=%s", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.exception("request.failed method=%s path=%s elapsed_ms=%.2f", request.method, request.url.path, elapsed_ms)
        raise
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "request.completed method=%s path=%s status=%s elapsed_ms=%.2f",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


register_error_handlers(app)
app.include_router(books_router)

@app.get("/")
def root():
    return {"message": "Bookstore API is up. Try /books, /health or /docs."}

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    db.execute(text("select 1")).scalar()
    return {"db": "ok"}
