"""FastAPI application serving the page navigation."""

from __future__ import annotations

from fastapi import FastAPI  # type: ignore[import-not-found]

from .routes.sections import router as sections_router

app = FastAPI(title="pagenav")
app.include_router(sections_router)
