from __future__ import annotations

import math
from dataclasses import replace
from typing import Any

from pricing.data_models import InvalidSelectionError, PredictionPreconditionError, Selection
from pricing.option_index import OptionIndex


def set_company(selection: Selection, company: str) -> Selection:
    company = (company or "").strip()
    if company == selection.company:
        return selection
    return replace(selection, company=company, model="")


def set_model(selection: Selection, model: str) -> Selection:
    return replace(selection, model=(model or "").strip())


def set_year(selection: Selection, year: str | int) -> Selection:
    return replace(selection, year="" if year is None else str(year).strip())


def set_fuel_type(selection: Selection, fuel_type: str) -> Selection:
    return replace(selection, fuel_type=(fuel_type or "").strip())


def parse_kms_driven(raw: Any) -> int | None:
    """Odometer input as a non-negative integer; empty input means unset."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise InvalidSelectionError(f"kms_driven must be numeric, got {raw!r}")
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
        try:
            number = float(raw)
        except ValueError as exc:
            raise InvalidSelectionError(f"kms_driven must be numeric, got {raw!r}") from exc
    elif isinstance(raw, (int, float)):
        number = float(raw)
    else:
        raise InvalidSelectionError(f"kms_driven must be numeric, got {raw!r}")

    if not math.isfinite(number) or not number.is_integer():
        raise InvalidSelectionError(f"kms_driven must be a whole number, got {raw!r}")
    if number < 0:
        raise InvalidSelectionError(f"kms_driven must be non-negative, got {raw!r}")
    return int(number)


def set_kms_driven(selection: Selection, raw: Any) -> Selection:
    return replace(selection, kms_driven=parse_kms_driven(raw))


_SETTERS = {
    "company": set_company,
    "model": set_model,
    "year": set_year,
    "fuel_type": set_fuel_type,
    "kms_driven": set_kms_driven,
}


def apply_changes(selection: Selection, **changes: Any) -> Selection:
    """Apply several field changes at once.

    ``company`` is applied first so that a model chosen in the same batch
    survives the implicit model reset.
    """
    unknown = set(changes) - set(_SETTERS)
    if unknown:
        raise InvalidSelectionError(f"Unknown selection fields: {', '.join(sorted(unknown))}")

    ordered = sorted(changes, key=lambda name: name != "company")
    for name in ordered:
        selection = _SETTERS[name](selection, changes[name])
    return selection


def missing_fields(selection: Selection) -> list[str]:
    missing = [name for name in ("company", "model", "year", "fuel_type") if not getattr(selection, name)]
    if selection.kms_driven is None:
        missing.append("kms_driven")
    return missing


def validate_against_index(selection: Selection, index: OptionIndex) -> None:
    invalid: list[str] = []
    if selection.company not in index.companies:
        invalid.append("company")
    if selection.model not in index.models_for(selection.company):
        invalid.append("model")
    if selection.year not in index.years:
        invalid.append("year")
    if selection.fuel_type not in index.fuel_types:
        invalid.append("fuel_type")
    if invalid:
        raise PredictionPreconditionError(f"Values outside the option index: {', '.join(invalid)}")
