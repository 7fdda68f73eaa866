"""FastAPI application: ingestion and analytics endpoints over a TradeStore."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dual_tracker.config.loader import load_config
from dual_tracker.config.schema import AppConfig
from dual_tracker.engine import (
    annotate_all,
    apply_filters,
    asset_returns,
    available_assets,
    build_ledger,
    build_report,
    compute_stats,
    make_filter_config,
)
from dual_tracker.errors import ConfigError, ValidationError
from dual_tracker.models import FilterConfig
from dual_tracker.store import TradeStore

logger = structlog.get_logger("api")

router = APIRouter()


def get_config(request: Request) -> AppConfig:
    """Dependency returning the configuration the app was built with."""
    return request.app.state.config


def get_store(request: Request) -> TradeStore:
    """Dependency returning the app's trade store."""
    return request.app.state.store


def get_filters(
    time_window: Optional[str] = Query(None),
    asset: Optional[str] = Query(None),
    direction: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    config: AppConfig = Depends(get_config),
) -> FilterConfig:
    """Dependency merging query parameters over the configured default filters."""
    return make_filter_config(
        config.filters,
        time_window=time_window,
        asset=asset,
        direction=direction,
        status=status,
    )


def _dump(model) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


async def config_error_handler(request: Request, exc: ConfigError):
    logger.info("config_error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@router.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


# ═══════════════════════════════════════════════════════════════
# Ingestion
# ═══════════════════════════════════════════════════════════════


@router.post("/api/batches", status_code=201)
async def submit_batch(payload: Any = Body(...), store: TradeStore = Depends(get_store)):
    """Merge one raw export batch into the store."""
    try:
        entry, errors = store.add_batch(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.to_dict())
    return {
        "upload": _dump(entry),
        "errors": [e.to_dict() for e in errors],
        "totalTrades": len(store),
    }


@router.get("/api/uploads")
async def list_uploads(store: TradeStore = Depends(get_store)):
    """Upload history, newest first."""
    return {"uploads": [_dump(u) for u in store.uploads()]}


@router.delete("/api/trades")
async def clear_trades(store: TradeStore = Depends(get_store)):
    """Drop every stored trade and the upload history."""
    store.clear()
    return {"status": "cleared"}


# ═══════════════════════════════════════════════════════════════
# Analytics
# ═══════════════════════════════════════════════════════════════


@router.get("/api/assets")
async def list_assets(store: TradeStore = Depends(get_store)):
    """Distinct underlyings available to the asset filter."""
    return {"assets": available_assets(store.trades())}


@router.get("/api/stats")
async def get_stats(
    filters: FilterConfig = Depends(get_filters),
    store: TradeStore = Depends(get_store),
    config: AppConfig = Depends(get_config),
):
    """Summary statistics for the filtered trade set."""
    classified = annotate_all(apply_filters(store.trades(), filters), config.assets.stable_assets)
    return {"stats": _dump(compute_stats(classified)), "filters": _dump(filters)}


@router.get("/api/trades")
async def list_trades(
    filters: FilterConfig = Depends(get_filters),
    store: TradeStore = Depends(get_store),
    config: AppConfig = Depends(get_config),
):
    """Filtered trades annotated with outcome and return."""
    classified = annotate_all(apply_filters(store.trades(), filters), config.assets.stable_assets)
    return {"trades": [_dump(t) for t in classified], "count": len(classified)}


@router.get("/api/returns")
async def list_asset_returns(
    sort_by: str = Query("return_rate"),
    filters: FilterConfig = Depends(get_filters),
    store: TradeStore = Depends(get_store),
    config: AppConfig = Depends(get_config),
):
    """Per-asset return breakdown over settled trades."""
    classified = annotate_all(apply_filters(store.trades(), filters), config.assets.stable_assets)
    return {"assetReturns": [_dump(r) for r in asset_returns(classified, sort_by)]}


@router.get("/api/ledger")
async def get_ledger(
    filters: FilterConfig = Depends(get_filters),
    store: TradeStore = Depends(get_store),
):
    """Per-asset acquisition ledger with its cumulative history."""
    ledger_filters = FilterConfig(time_window=filters.time_window, asset=filters.asset)
    return {"ledger": [_dump(e) for e in build_ledger(store.trades(), ledger_filters)]}


@router.get("/api/report")
async def get_report(
    filters: FilterConfig = Depends(get_filters),
    store: TradeStore = Depends(get_store),
    config: AppConfig = Depends(get_config),
):
    """Stats, trades, asset returns and ledger from a single recomputation."""
    report = build_report(store.trades(), filters, stable_assets=config.assets.stable_assets)
    return report.to_dict()


def create_app(config: AppConfig | None = None, store: TradeStore | None = None) -> FastAPI:
    """Build the API around *config* (defaults when None) and a fresh store."""
    config = config or load_config()
    app = FastAPI(
        title="Dual Investment Tracker API",
        description="Win/loss, prorated return and cost-basis analytics for dual investment contracts",
        version="0.1.0",
    )
    app.state.config = config
    app.state.store = store if store is not None else TradeStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ConfigError, config_error_handler)
    app.include_router(router)
    return app


app = create_app()
