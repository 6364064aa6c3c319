from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


OutcomeStatus = Literal["pending", "success", "failure"]


class PricingError(Exception):
    """Base class for failures surfaced by the pricing workflow."""


class DatasetLoadError(PricingError):
    pass


class PredictionPreconditionError(PricingError):
    pass


class PredictionTransportError(PricingError):
    pass


class InvalidSelectionError(PricingError, ValueError):
    pass


@dataclass(frozen=True)
class Row:
    name: str = ""
    company: str = ""
    year: int | str = ""
    kms_driven: int | str = ""
    fuel_type: str = ""


@dataclass(frozen=True)
class Selection:
    company: str = ""
    model: str = ""
    year: str = ""
    fuel_type: str = ""
    kms_driven: int | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.company and self.model and self.year and self.fuel_type) and self.kms_driven is not None


@dataclass(frozen=True)
class PredictionOutcome:
    status: OutcomeStatus
    value: str | None = None
    message: str | None = None

    @classmethod
    def pending(cls) -> "PredictionOutcome":
        return cls(status="pending")

    @classmethod
    def success(cls, value: str) -> "PredictionOutcome":
        return cls(status="success", value=value)

    @classmethod
    def failure(cls, message: str) -> "PredictionOutcome":
        return cls(status="failure", message=message)

    def display_text(self, currency_prefix: str = "₹") -> str | None:
        if self.status != "success":
            return None
        return f"{currency_prefix} {self.value}"
