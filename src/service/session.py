from __future__ import annotations

import logging
from typing import Any

from pricing.config import PricingConfig
from pricing.data_models import PredictionOutcome, Row, Selection
from pricing.option_index import OptionIndex, build_option_index
from pricing.selection import apply_changes
from service.dataset import DatasetLoader
from service.predictor import PredictionRequestor

logger = logging.getLogger(__name__)


class PredictorSession:
    """One user's in-memory session: dataset, options, selection and outcome."""

    def __init__(
        self,
        loader: DatasetLoader,
        requestor: PredictionRequestor,
        config: PricingConfig | None = None,
    ) -> None:
        self.loader = loader
        self.requestor = requestor
        self.config = config or PricingConfig()
        self.selection = Selection()
        self.outcome: PredictionOutcome | None = None
        self._rows: tuple[Row, ...] = ()
        self._index = build_option_index(self._rows)
        self._index_rows: tuple[Row, ...] = self._rows

    @property
    def rows(self) -> tuple[Row, ...]:
        return self._rows

    @property
    def loading(self) -> bool:
        return self.loader.loading

    @property
    def load_error(self) -> str | None:
        return self.loader.error

    @property
    def status_message(self) -> str | None:
        if self.loading:
            return self.config.dataset_loading_message
        return self.load_error

    @property
    def options(self) -> OptionIndex:
        if self._index_rows is not self._rows:
            self._index = build_option_index(self._rows)
            self._index_rows = self._rows
        return self._index

    async def load(self) -> OptionIndex:
        self._rows = await self.loader.load()
        index = self.options
        logger.info(
            "Option index rebuilt: %d companies, %d fuel types, %d years",
            len(index.companies), len(index.fuel_types), len(index.years),
        )
        return index

    def update(self, **changes: Any) -> Selection:
        self.selection = apply_changes(self.selection, **changes)
        return self.selection

    async def submit(self) -> PredictionOutcome:
        if not self.selection.is_complete:
            self.outcome = await self.requestor.predict(self.selection)
            return self.outcome

        self.outcome = PredictionOutcome.pending()
        outcome = await self.requestor.predict(self.selection, self.options)
        # No cancellation of earlier calls: whichever resolves last is kept.
        self.outcome = outcome
        return outcome

    def snapshot(self) -> dict[str, Any]:
        outcome = self.outcome
        return {
            "loading": self.loading,
            "status_message": self.status_message,
            "selection": {
                "company": self.selection.company,
                "model": self.selection.model,
                "year": self.selection.year,
                "fuel_type": self.selection.fuel_type,
                "kms_driven": self.selection.kms_driven,
                "complete": self.selection.is_complete,
            },
            "models": list(self.options.models_for(self.selection.company)),
            "outcome": None if outcome is None else {
                "status": outcome.status,
                "value": outcome.value,
                "display": outcome.display_text(self.config.currency_prefix),
                "message": outcome.message,
            },
        }
