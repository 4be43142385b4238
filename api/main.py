from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np
import pandas as pd
from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import ListViewParamsModel
from core.config import ALL_CATEGORIES, ConfigError, load_config
from core.filters import normalize_view_params
from core.list_view import configure_collation
from core.loader import DashboardLoader
from core.metrics_keywords import compute_keyword_list
from core.metrics_summary import compute_summary
from core.models import AggregatedDataset
from core.selection import select
from core.sources import source_from_config
from core.tables import keywords_frame, to_csv_bytes


app = FastAPI(title="Keyword Exposure API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_loader: Optional[DashboardLoader] = None


def get_loader() -> DashboardLoader:
    global _loader
    if _loader is None:
        configure_collation()
        config = load_config()
        _loader = DashboardLoader(config, source_from_config(config))
    return _loader


def set_loader(loader: Optional[DashboardLoader]) -> None:
    global _loader
    _loader = loader


def _json(data: object, status_code: int = 200) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        ),
    )


def _error(exc: Exception, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


def _unknown_category(loader: DashboardLoader, category: str) -> Optional[JSONResponse]:
    if category == ALL_CATEGORIES or category in loader.config.category_ids:
        return None
    return JSONResponse(status_code=404, content={"error": f"Unknown category: {category}", "type": "UnknownCategory"})


async def _current_dataset(loader: DashboardLoader) -> AggregatedDataset:
    dataset = await loader.current_dataset()
    if dataset is None:
        raise RuntimeError(loader.error or "Data failed to load")
    return dataset


def _status(loader: DashboardLoader) -> dict:
    dataset = loader.dataset
    return {
        "loading": loader.loading,
        "error": loader.error,
        "generation": loader.generation,
        "failedCategories": loader.failed_categories,
        "timestamps": dataset.timestamps if dataset is not None else {},
    }


@app.get("/meta/categories")
def meta_categories():
    try:
        loader = get_loader()
        return _json({"categories": loader.config.category_list()})
    except ConfigError as exc:
        logger.exception("meta_categories failed")
        return _error(exc)


@app.get("/status")
def status():
    try:
        return _json(_status(get_loader()))
    except ConfigError as exc:
        logger.exception("status failed")
        return _error(exc)


@app.post("/reload")
async def reload():
    try:
        loader = get_loader()
        await loader.reload()
        return _json(_status(loader))
    except Exception as exc:
        logger.exception("reload failed")
        return _error(exc)


@app.get("/summary")
async def summary(category: str = Query(default=ALL_CATEGORIES)):
    try:
        loader = get_loader()
        not_found = _unknown_category(loader, category)
        if not_found is not None:
            return not_found
        dataset = await _current_dataset(loader)
        return _json(compute_summary(dataset, loader.config, category))
    except Exception as exc:
        logger.exception("summary failed")
        return _error(exc)


@app.post("/keywords")
async def keywords(params: ListViewParamsModel):
    try:
        loader = get_loader()
        not_found = _unknown_category(loader, params.category)
        if not_found is not None:
            return not_found
        dataset = await _current_dataset(loader)
        view_params = normalize_view_params(params.model_dump())
        return _json(compute_keyword_list(dataset, loader.config, params.category, view_params))
    except Exception as exc:
        logger.exception("keywords failed")
        return _error(exc)


@app.get("/export/keywords")
async def export_keywords(category: str = Query(default=ALL_CATEGORIES)):
    loader = get_loader()
    not_found = _unknown_category(loader, category)
    if not_found is not None:
        return not_found
    dataset = await _current_dataset(loader)
    selection = select(dataset, category, loader.config)
    csv_bytes = to_csv_bytes(keywords_frame(selection.keywords_data))
    filename = f"keywords_{category}.csv"
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={filename}"})
