"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from fastapi import FastAPI, HTTPException, status

from . import config
from .config import ConfigError
from .logging_utils import configure_logging
from .routes import router as ledger_router
from .store import LedgerStore

app = FastAPI(title="Transaction Ledger Service", version="1.0.0")


@app.on_event("startup")
async def startup_event() -> None:
    try:
        settings = config.get_settings()
    except ConfigError as exc:
        app.state.startup_error = str(exc)
        logging.getLogger(__name__).error("startup configuration error", extra={"error": str(exc)})
        return

    configure_logging(settings)
    app.state.settings = settings
    app.state.ledger_store = LedgerStore(settings.log_dir, settings.output_dirname, settings.log_pattern)
    app.state.startup_error = None


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    valid, reason = config.is_environment_valid()
    if not valid:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=reason or "invalid configuration")
    return {"status": "ok"}


app.include_router(ledger_router)
