from __future__ import annotations

import logging
import math
from typing import Any, Dict, List

import numpy as np
import pandas as pd
import uvicorn
from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from api.schemas import ROW_MODELS, DatasetInfoModel, DatasetName, MetaDatasetsResponse
from core.dashboard import compute_dashboard
from core.data import DATASETS, load_dataset
from core.logging_config import configure_logging
from core.records import InvalidCategorySelector, MalformedRow
from core.settings import get_settings


app = FastAPI(title="ACV Mix Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _error(status_code: int, message: str, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "type": type(exc).__name__})


def _raw_dataset(name: str) -> JSONResponse:
    try:
        return _json(load_dataset(name))
    except Exception as exc:
        logger.exception("reading dataset %s failed", name)
        return _error(500, "Unable to read file", exc)


def _validated_rows(name: str, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    model = ROW_MODELS[name]
    return [model.model_validate(row).model_dump() for row in rows]


@app.get("/api/accountIndustry")
def account_industry():
    return _raw_dataset("accountIndustry")


@app.get("/api/customerType")
def customer_type():
    return _raw_dataset("customerType")


@app.get("/api/team")
def team():
    return _raw_dataset("team")


@app.get("/api/dashboard/{dataset}")
def dashboard(dataset: DatasetName, charts: bool = Query(default=True)):
    try:
        rows = _validated_rows(dataset, load_dataset(dataset))
        return _json(compute_dashboard(rows, dataset, include_charts=charts))
    except ValidationError as exc:
        logger.warning("dataset %s has malformed rows: %s", dataset, exc)
        return JSONResponse(
            status_code=422,
            content={"error": "Malformed dataset rows", "type": type(exc).__name__, "detail": exc.errors(include_url=False, include_context=False)},
        )
    except InvalidCategorySelector as exc:
        logger.warning("dashboard %s: %s", dataset, exc)
        return _error(400, str(exc), exc)
    except MalformedRow as exc:
        logger.warning("dataset %s has a malformed row: %s", dataset, exc)
        return _error(422, str(exc), exc)
    except Exception as exc:
        logger.exception("dashboard %s failed", dataset)
        return _error(500, str(exc), exc)


@app.get("/meta/datasets", response_model=MetaDatasetsResponse)
def meta_datasets():
    return MetaDatasetsResponse(
        datasets=[
            DatasetInfoModel(
                name=spec.name,
                title=spec.title,
                category_key=spec.kind.field,
                category_label=spec.category_label,
            )
            for spec in DATASETS.values()
        ]
    )


def main() -> None:
    """Run the API with uvicorn on the configured host and port."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Server is running on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
