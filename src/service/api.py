from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, Response
from pydantic import BaseModel

from pricing.config import PricingConfig
from pricing.data_models import InvalidSelectionError
from service.dataset import DatasetLoader
from service.logging_config import configure_logging, correlation_id
from service.predictor import PredictionRequestor
from service.session import PredictorSession
from service.settings import ServiceSettings


# ── Request / Response Models ───────────────────────────────────────

class HealthResponse(BaseModel):
    status: str


class OptionsResponse(BaseModel):
    loading: bool
    status_message: str | None
    companies: list[str]
    fuel_types: list[str]
    years: list[str]
    models_by_company: dict[str, list[str]]


class ModelsResponse(BaseModel):
    company: str
    models: list[str]


class SelectionUpdate(BaseModel):
    company: str | None = None
    model: str | None = None
    year: str | None = None
    fuel_type: str | None = None
    kms_driven: int | float | str | None = None


class OutcomeResponse(BaseModel):
    status: str
    value: str | None = None
    display: str | None = None
    message: str | None = None


# ── App Factory ─────────────────────────────────────────────────────

def create_app(
    settings: ServiceSettings | None = None,
    session: PredictorSession | None = None,
) -> FastAPI:
    settings = settings or ServiceSettings()
    configure_logging(level=settings.log_level, fmt=settings.log_format)

    cfg = PricingConfig(currency_prefix=settings.currency_prefix)
    if session is None:
        session = PredictorSession(
            loader=DatasetLoader(source=settings.dataset_source, config=cfg),
            requestor=PredictionRequestor(
                base_url=settings.prediction_base_url,
                config=cfg,
                timeout=settings.prediction_timeout_seconds,
            ),
            config=cfg,
        )

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        await session.load()
        yield

    app = FastAPI(title="Car Price Predictor", version="0.1.0", lifespan=lifespan)
    app.state.session = session

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next: Any) -> Response:
        cid = request.headers.get("X-Correlation-ID") or uuid.uuid4().hex[:12]
        correlation_id.set(cid)
        response = await call_next(request)
        response.headers["X-Correlation-ID"] = cid
        return response

    # ── Health ──────────────────────────────────────────────────────

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    # ── Options ─────────────────────────────────────────────────────

    @app.get("/options", response_model=OptionsResponse)
    async def get_options() -> OptionsResponse:
        return OptionsResponse(
            loading=session.loading,
            status_message=session.status_message,
            **session.options.as_dict(),
        )

    @app.get("/options/models", response_model=ModelsResponse)
    async def get_models(company: str = "") -> ModelsResponse:
        return ModelsResponse(company=company, models=list(session.options.models_for(company)))

    @app.post("/dataset/reload", response_model=OptionsResponse)
    async def reload_dataset() -> OptionsResponse:
        index = await session.load()
        return OptionsResponse(
            loading=session.loading,
            status_message=session.status_message,
            **index.as_dict(),
        )

    # ── Selection / Prediction ──────────────────────────────────────

    @app.get("/selection")
    async def get_selection() -> dict[str, Any]:
        return session.snapshot()

    @app.patch("/selection")
    async def update_selection(update: SelectionUpdate) -> dict[str, Any]:
        changes = update.model_dump(exclude_unset=True)
        try:
            session.update(**changes)
        except InvalidSelectionError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return session.snapshot()

    @app.post("/predict", response_model=OutcomeResponse)
    async def predict() -> OutcomeResponse:
        outcome = await session.submit()
        return OutcomeResponse(
            status=outcome.status,
            value=outcome.value,
            display=outcome.display_text(cfg.currency_prefix),
            message=outcome.message,
        )

    return app
