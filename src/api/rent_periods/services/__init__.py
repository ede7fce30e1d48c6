"""Rent period engine: scheduling, payment matching and status classification."""
from src.api.rent_periods.services.period_scheduler import (
    calculate_due_date, expected_cycle_amount, generate_periods
)
from src.api.rent_periods.services.payment_matcher import (
    auto_match_back_payments, compute_periods, match_payments
)
from src.api.rent_periods.services.anomaly_detector import has_amount_mismatch
from src.api.rent_periods.services.status_classifier import (
    classify_contract, classify_contracts, classify_period
)

__all__ = [
    "calculate_due_date", "expected_cycle_amount", "generate_periods",
    "auto_match_back_payments", "compute_periods", "match_payments",
    "has_amount_mismatch",
    "classify_contract", "classify_contracts", "classify_period",
]
