from datetime import date
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from src.api.contracts.schemas.payment_record import PaymentRecordRead
from src.api.rent_periods.constants import (
    STATUS_LABELS, STATUS_SEVERITY, Severity, StatusKind
)


class RentPeriod(BaseModel):
    """One billing interval of a contract. Derived on every query, never stored."""
    period_number: int
    start_date: date
    end_date: date
    due_date: date
    amount: float
    is_paid: bool = False
    matched_payment: Optional[PaymentRecordRead] = None

    model_config = ConfigDict(frozen=True)


class StatusResult(BaseModel):
    kind: StatusKind
    severity: Severity
    label: str

    @classmethod
    def of(cls, kind: StatusKind) -> "StatusResult":
        return cls(kind=kind, severity=STATUS_SEVERITY[kind], label=STATUS_LABELS[kind])


class ContractStatusResult(BaseModel):
    """Outcome of classifying one contract in a batch: a status or an error."""
    contract_id: Optional[int] = None
    status: StatusResult
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class RentPeriodView(RentPeriod):
    """Rent period annotated with its display status"""
    status: StatusResult


class ContractPeriodsResponse(BaseModel):
    contract_id: int
    today: date
    expected_cycle_amount: float
    periods: List[RentPeriodView]


class BackPaymentMatch(BaseModel):
    """Periods newly satisfied by a payment, for confirmation messaging"""
    payment_record_id: int
    period_numbers: List[int]
    total_amount: float
    message: str


class ExpiringContract(BaseModel):
    contract_id: int
    contract_internal_id: str
    end_date: date
    days_left: int


class DashboardSummary(BaseModel):
    today: date
    active_contracts: int
    expiring_contracts: List[ExpiringContract] = Field(default_factory=list)
    payment_due_contract_ids: List[int] = Field(default_factory=list)
    failed_contract_ids: List[int] = Field(default_factory=list)


class PaymentRecordSaveResponse(BaseModel):
    payment_record: PaymentRecordRead
    back_payment_match: Optional[BackPaymentMatch] = None
