from datetime import date
from typing import Any, Iterable, List, Optional
from fastapi.logger import logger

from src.api.common.constants.contracts import PaymentCycle
from src.api.contracts.schemas.contract import ContractRead
from src.api.rent_periods.constants import ReconciliationConstants, StatusKind
from src.api.rent_periods.schemas import ContractStatusResult, RentPeriod, StatusResult
from src.api.rent_periods.services.anomaly_detector import has_amount_mismatch
from src.api.rent_periods.services.payment_matcher import (
    TOLERANCE, compute_periods, confirmed_payments
)


def _unpaid_status(due_date: date, today: date) -> StatusKind:
    return StatusKind.PAYMENT_DUE if today > due_date else StatusKind.NOT_YET_DUE


def _annual_due_status(contract: ContractRead, periods: List[RentPeriod], today: date) -> Optional[StatusKind]:
    if not periods:
        # No schedule configured: only an absence of payments is actionable
        if not confirmed_payments(contract.payment_records):
            return StatusKind.PAYMENT_DUE
        return None

    if any(today > period.due_date for period in periods if not period.is_paid):
        return StatusKind.PAYMENT_DUE
    # A future entry keeps the contract pending even when paid in advance
    if any(today <= period.due_date for period in periods):
        return StatusKind.NOT_YET_DUE
    return None


def _current_or_next_period(periods: List[RentPeriod], today: date) -> Optional[RentPeriod]:
    current = next(
        (p for p in periods if p.start_date <= today <= p.end_date), None)
    if current is not None:
        return current
    return next(
        (p for p in periods if p.start_date > today and not p.is_paid), None)


def _stepped_due_status(periods: List[RentPeriod], today: date) -> Optional[StatusKind]:
    if any(today > period.end_date and not period.is_paid for period in periods):
        return StatusKind.PAYMENT_DUE

    period = _current_or_next_period(periods, today)
    if period is not None and not period.is_paid:
        return _unpaid_status(period.due_date, today)
    return None


def classify_contract(contract: ContractRead, today: date) -> StatusResult:
    """
    Derive the contract-level status. The first matching rule wins:
    expired, expiring soon, payment anomaly, then the cycle's due check.
    """
    if contract.end_date:
        days_left = (contract.end_date - today).days
        if days_left < 0:
            return StatusResult.of(StatusKind.EXPIRED)
        if days_left <= ReconciliationConstants.EXPIRING_SOON_DAYS:
            return StatusResult.of(StatusKind.EXPIRING_SOON)

    if has_amount_mismatch(contract):
        return StatusResult.of(StatusKind.PAYMENT_ANOMALY)

    periods = compute_periods(contract, today)
    if contract.payment_cycle == PaymentCycle.ANNUALLY:
        due_status = _annual_due_status(contract, periods, today)
    else:
        due_status = _stepped_due_status(periods, today)

    return StatusResult.of(due_status or StatusKind.NORMAL)


def classify_period(period: RentPeriod, today: date) -> StatusResult:
    """
    Display status of a single period.

    A payment spanning several periods counts as paid when it is a whole
    multiple of the period amount within tolerance.
    """
    payment = period.matched_payment
    if period.is_paid and payment is not None:
        if period.amount <= 0:
            return StatusResult.of(StatusKind.PAID)
        periods_paid = max(1, round(payment.amount / period.amount))
        if abs(payment.amount - periods_paid * period.amount) <= TOLERANCE:
            return StatusResult.of(StatusKind.PAID)
        return StatusResult.of(StatusKind.PAYMENT_ANOMALY)

    return StatusResult.of(_unpaid_status(period.due_date, today))


def classify_contracts(contracts: Iterable[Any], today: date) -> List[ContractStatusResult]:
    """
    Classify a batch of contracts, isolating failures per contract.

    Args:
        contracts: ContractRead objects, or ORM rows convertible to one
        today: Reference date shared by the whole batch

    Returns:
        One result per contract; a contract that cannot be classified gets an
        ERROR status and the error message instead of aborting the batch.
    """
    results: List[ContractStatusResult] = []
    for contract in contracts:
        contract_id = getattr(contract, "id", None)
        try:
            if not isinstance(contract, ContractRead):
                contract = ContractRead.model_validate(contract)
            results.append(ContractStatusResult(
                contract_id=contract_id,
                status=classify_contract(contract, today)
            ))
        except Exception as e:
            logger.error(f"Error calculating status for contract {contract_id}: {e}")
            results.append(ContractStatusResult(
                contract_id=contract_id,
                status=StatusResult.of(StatusKind.ERROR),
                error=str(e)
            ))
    return results
