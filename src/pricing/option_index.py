from __future__ import annotations

import math
import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Sequence

from pricing.data_models import Row


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class OptionIndex:
    companies: tuple[str, ...] = ()
    fuel_types: tuple[str, ...] = ()
    years: tuple[str, ...] = ()
    models_by_company: Dict[str, tuple[str, ...]] = field(default_factory=dict)

    def models_for(self, company: str) -> tuple[str, ...]:
        if not company:
            return ()
        return self.models_by_company.get(company, ())

    def as_dict(self) -> dict[str, Any]:
        return {
            "companies": list(self.companies),
            "fuel_types": list(self.fuel_types),
            "years": list(self.years),
            "models_by_company": {k: list(v) for k, v in self.models_by_company.items()},
        }


def _collation_key(value: str) -> tuple[str, str]:
    # Case-insensitive first; on ties lowercase sorts ahead of uppercase.
    return value.casefold(), value.swapcase()


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def unique_sorted(values: Iterable[Any]) -> list[str]:
    """Distinct, non-empty, trimmed string forms of ``values`` in ascending order."""
    cleaned = {_clean(v) for v in values}
    cleaned.discard("")
    return sorted(cleaned, key=_collation_key)


def parse_year(value: Any) -> int | None:
    """Integer year from an int or a string with leading digits, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def build_option_index(rows: Sequence[Row]) -> OptionIndex:
    companies = unique_sorted(r.company for r in rows)
    fuel_types = unique_sorted(r.fuel_type for r in rows)

    parsed_years = {parse_year(r.year) for r in rows}
    parsed_years.discard(None)
    years = [str(y) for y in sorted(parsed_years, reverse=True)]

    grouped: dict[str, set[str]] = defaultdict(set)
    for row in rows:
        company = _clean(row.company)
        model = _clean(row.name)
        if not company or not model:
            continue
        grouped[company].add(model)

    models_by_company = {
        company: tuple(sorted(models, key=_collation_key)) for company, models in grouped.items()
    }

    return OptionIndex(
        companies=tuple(companies),
        fuel_types=tuple(fuel_types),
        years=tuple(years),
        models_by_company=models_by_company,
    )
