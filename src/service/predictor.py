from __future__ import annotations

import logging
import math
from urllib.parse import urlencode

import httpx

from pricing.config import REQUEST_FIELD_MAP, PricingConfig
from pricing.data_models import (
    PredictionOutcome,
    PredictionPreconditionError,
    PredictionTransportError,
    Selection,
)
from pricing.option_index import OptionIndex, parse_year
from pricing.selection import missing_fields, validate_against_index

logger = logging.getLogger(__name__)


def build_form_fields(selection: Selection) -> dict[str, str]:
    """Map a complete selection onto the scoring endpoint's form fields."""
    year = parse_year(selection.year)
    values = {
        "company": selection.company,
        "model": selection.model,
        "year": str(year) if year is not None else selection.year,
        "fuel_type": selection.fuel_type,
        "kms_driven": str(selection.kms_driven),
    }
    return {REQUEST_FIELD_MAP[name]: values[name] for name in REQUEST_FIELD_MAP}


def encode_form(selection: Selection) -> str:
    return urlencode(build_form_fields(selection))


def _is_numeric(text: str) -> bool:
    try:
        return math.isfinite(float(text))
    except ValueError:
        return False


class PredictionRequestor:
    """Sends one selection to the scoring endpoint and resolves an outcome.

    Exactly one attempt is made per call. Failures of any kind resolve to a
    generic failure outcome; the cause goes to the log only.
    """

    def __init__(
        self,
        base_url: str,
        config: PricingConfig | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.config = config or PricingConfig()
        self.timeout = timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{self.config.predict_path}"

    def check_preconditions(self, selection: Selection, index: OptionIndex | None = None) -> None:
        missing = missing_fields(selection)
        if missing:
            raise PredictionPreconditionError(f"Missing selection fields: {', '.join(missing)}")
        if index is not None:
            validate_against_index(selection, index)

    async def _post(self, body: str) -> str:
        client_kwargs: dict = {"transport": self._transport}
        if self.timeout is not None:
            client_kwargs["timeout"] = self.timeout
        try:
            async with httpx.AsyncClient(**client_kwargs) as client:
                resp = await client.post(
                    self.endpoint,
                    content=body,
                    headers={"Content-Type": self.config.form_content_type},
                )
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise PredictionTransportError(f"{type(exc).__name__}: {exc}") from exc

        text = resp.text.strip()
        if not _is_numeric(text):
            raise PredictionTransportError(f"non-numeric response body: {text[:80]!r}")
        return text

    async def predict(self, selection: Selection, index: OptionIndex | None = None) -> PredictionOutcome:
        try:
            self.check_preconditions(selection, index)
        except PredictionPreconditionError as exc:
            logger.info("Prediction rejected before request: %s", exc)
            message = (
                self.config.incomplete_selection_message
                if not selection.is_complete
                else self.config.unknown_option_message
            )
            return PredictionOutcome.failure(message)

        try:
            value = await self._post(encode_form(selection))
        except PredictionTransportError as exc:
            logger.warning("Prediction request to %s failed: %s", self.endpoint, exc)
            return PredictionOutcome.failure(self.config.request_failed_message)

        logger.info("Prediction for %s %s (%s): %s", selection.company, selection.model, selection.year, value)
        return PredictionOutcome.success(value)
