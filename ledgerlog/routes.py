"""Ledger endpoints and dependencies."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel

from .accounts import UserLedger
from .config import Settings
from .events import format_amount
from .processor import process_sources
from .store import IoFailure, LedgerStore

logger = logging.getLogger(__name__)

router = APIRouter()


class LedgerRequest(BaseModel):
    sources: List[List[str]]


def get_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Configuration unavailable")
    return settings


def get_ledger_store(request: Request) -> LedgerStore:
    store = getattr(request.app.state, "ledger_store", None)
    if store is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Ledger store unavailable")
    return store


def _serialize(ledgers: Dict[str, UserLedger]) -> Dict[str, Any]:
    return {
        user: {"lines": list(ledger.lines), "balance": format_amount(ledger.balance)}
        for user, ledger in ledgers.items()
    }


@router.post("/ledgers")
async def build_ledgers(
    payload: LedgerRequest,
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    ledgers = process_sources(payload.sources, parse_workers=settings.parse_workers)
    return {"users": _serialize(ledgers)}


@router.post("/ledgers/run")
async def run_directory(
    settings: Settings = Depends(get_settings),
    store: LedgerStore = Depends(get_ledger_store),
) -> Dict[str, Any]:
    try:
        ledgers = store.run(parse_workers=settings.parse_workers)
    except IoFailure as exc:
        logger.error("ledger run failed", extra={"path": exc.path, "error": exc.reason})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return {"written": list(ledgers)}
