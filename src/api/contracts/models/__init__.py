"""Contracts models package."""
from src.api.contracts.models.contract import AnnualPaymentSchedule, Contract, PaymentRecord

__all__ = ["AnnualPaymentSchedule", "Contract", "PaymentRecord"]
