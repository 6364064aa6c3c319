from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


DATASET_COLUMNS: tuple[str, ...] = ("name", "company", "year", "kms_driven", "fuel_type")

# Selection field -> form field expected by the scoring endpoint.
REQUEST_FIELD_MAP: Dict[str, str] = {
    "company": "company",
    "model": "car_models",
    "year": "year",
    "fuel_type": "fuel_type",
    "kms_driven": "kilo_driven",
}


@dataclass(frozen=True)
class PricingConfig:
    currency_prefix: str = "₹"
    predict_path: str = "/predict"
    form_content_type: str = "application/x-www-form-urlencoded"
    dataset_load_error: str = "Failed to load dataset"
    dataset_loading_message: str = "Loading dataset..."
    incomplete_selection_message: str = "Please select Company, Model, Year, Fuel and enter Kms Driven."
    unknown_option_message: str = "Selected values are not available in the loaded dataset."
    request_failed_message: str = "Prediction request failed. Backend may not be running yet."
