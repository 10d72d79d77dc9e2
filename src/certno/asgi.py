"""
FastAPI + Uvicorn ASGI application.

HTTP surface for the three callers of the codec:
  - the number form's live preview      → POST /certificate-numbers/preview
  - the public verification lookup      → GET  /certificate-numbers/{number}
  - the admin verification step         → POST /certificate-numbers/assign

Preview and lookup are pure codec calls. Assignment needs the PostgreSQL
duplicate checker, created during the lifespan startup and run in a worker
thread so the event loop never blocks on the database.

Entry point for production: uvicorn certno.asgi:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from railway.http_support import build_response

from certno import __version__
from certno.assignment import assign_certificate_number
from certno.codec import DEFAULT_IDENTIFIER, encode, lookup_key, parse
from certno.config import AppSettings
from certno.detection import detect_format
from certno.domain.models import DEFAULT_BOOK_NUMBER, CertificateIdentifier
from certno.domain.ports import DuplicateChecker
from certno.formatting import identifier_fields
from certno.main import configure_structlog, create_duplicate_checker

# Set during startup; tests replace it directly.
_checker: DuplicateChecker | None = None
log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load settings, configure logging and create the duplicate checker."""
    global _checker

    settings = AppSettings()
    configure_structlog(settings.log_level, settings.json_logs)
    _checker = create_duplicate_checker(settings)
    log.info("asgi.startup_complete", version=__version__)

    yield

    _checker = None
    log.info("asgi.shutdown_complete")


app = FastAPI(
    title="certno",
    description="Marriage registration certificate number codec",
    version=__version__,
    lifespan=lifespan,
)


class IdentifierFields(BaseModel):
    """Form fields of a certificate number; empty string means absent."""

    book_number: str = DEFAULT_BOOK_NUMBER
    volume_number: str = ""
    volume_letter: str = ""
    volume_year: str = ""
    serial_number: str = ""
    serial_year: str = ""
    page_number: str = ""

    def to_identifier(self) -> CertificateIdentifier:
        values = self.model_dump(include=set(IdentifierFields.model_fields))
        return CertificateIdentifier(**{name: value.strip() for name, value in values.items()})


class AssignRequest(IdentifierFields):
    application_id: str | None = Field(default=None, description="Application being verified")


@app.get("/health")
async def health() -> dict[str, Any]:
    """Liveness probe."""
    return {"status": "healthy", "version": __version__}


@app.post("/certificate-numbers/preview")
async def preview(fields: IdentifierFields) -> dict[str, str]:
    """
    Live preview of the compact number while the form is being filled.

    `certificate_number` stays "" until volume, serial and page are given.
    """
    return {"certificate_number": encode(fields.to_identifier())}


@app.get("/certificate-numbers/{number}")
async def lookup(number: str) -> dict[str, Any]:
    """
    Decode a number of any generation for display and lookup.

    Always 200: unrecognized numbers report `recognized: false` and the
    default fields.
    """
    result = parse(number)
    identifier = result.get_or_else(DEFAULT_IDENTIFIER)
    return {
        "recognized": result.is_success(),
        "canonical": result.map(encode).get_or_else(""),
        "lookup_key": lookup_key(number),
        **identifier_fields(identifier, detect_format(number)),
    }


@app.post("/certificate-numbers/assign")
async def assign(request: AssignRequest) -> JSONResponse:
    """
    Validate the fields and check the resulting number is free.

    Returns 200 with the number, or the railway error body:
    400 invalid fields, 409 ambiguous or already assigned, 500 database error,
    503 before startup has created the checker.
    """
    checker = _checker
    if checker is None:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "reason": "Duplicate checker not initialized"},
        )

    fields = request.to_identifier()
    result = await asyncio.to_thread(
        lambda: CertificateIdentifier.create(
            book_number=fields.book_number,
            volume_number=fields.volume_number,
            volume_letter=fields.volume_letter,
            volume_year=fields.volume_year,
            serial_number=fields.serial_number,
            serial_year=fields.serial_year,
            page_number=fields.page_number,
        ).flat_map(lambda ident: assign_certificate_number(ident, request.application_id, checker))
    )
    body, status = build_response(result.map(lambda number: {"certificate_number": number}))
    return JSONResponse(status_code=status, content=body)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("certno.asgi:app", host="0.0.0.0", port=8000, log_level="info")
