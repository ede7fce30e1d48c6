import math
from datetime import date
from typing import Dict, Iterable, List, Optional, Set
from fastapi.logger import logger

from src.api.common.constants.contracts import PaymentCycle
from src.api.contracts.schemas.contract import ContractRead
from src.api.contracts.schemas.payment_record import PaymentRecordRead
from src.api.rent_periods.constants import ReconciliationConstants
from src.api.rent_periods.schemas import RentPeriod
from src.api.rent_periods.services.period_scheduler import generate_periods

TOLERANCE = ReconciliationConstants.AMOUNT_TOLERANCE


def amounts_match(actual: float, expected: float) -> bool:
    return abs(actual - expected) <= TOLERANCE


def confirmed_payments(payment_records: Iterable[PaymentRecordRead]) -> List[PaymentRecordRead]:
    """Records that take part in matching: confirmed, dated and positive."""
    return [
        record for record in payment_records
        if record.is_confirmed and record.payment_date and record.amount and record.amount > 0
    ]


def periods_covered(payment: PaymentRecordRead, period_amount: float) -> int:
    """How many periods of the given amount a single payment can pay for."""
    if period_amount <= 0:
        return 0
    return math.floor((payment.amount + TOLERANCE) / period_amount)


def _direct_payment(
    period: RentPeriod,
    payments: List[PaymentRecordRead],
    allocations: Dict[int, int]
) -> Optional[PaymentRecordRead]:
    """First payment dated inside the period that is not used up by earlier periods."""
    for payment in payments:
        if not period.start_date <= payment.payment_date <= period.end_date:
            continue
        # A short payment still settles its own period, shown as an anomaly
        capacity = max(1, periods_covered(payment, period.amount))
        if allocations.get(payment.id, 0) < capacity:
            return payment
    return None


def _back_payment(
    period: RentPeriod,
    payments: List[PaymentRecordRead],
    allocations: Dict[int, int]
) -> Optional[PaymentRecordRead]:
    """First later payment that still has enough unallocated amount for the period."""
    for payment in payments:
        if payment.payment_date <= period.end_date:
            continue
        already_allocated = allocations.get(payment.id, 0)
        if already_allocated >= periods_covered(payment, period.amount):
            continue
        remaining = payment.amount - already_allocated * period.amount
        if remaining >= period.amount - TOLERANCE:
            return payment
    return None


def _match_stepped_periods(
    periods: List[RentPeriod],
    payments: List[PaymentRecordRead],
    today: date
) -> List[RentPeriod]:
    # Fold over periods oldest first, carrying per-payment allocation counts
    allocations: Dict[int, int] = {}
    matched: List[RentPeriod] = []

    for period in periods:
        payment = _direct_payment(period, payments, allocations)
        if payment is None and today > period.end_date:
            payment = _back_payment(period, payments, allocations)

        if payment is not None:
            allocations = {**allocations,
                           payment.id: allocations.get(payment.id, 0) + 1}

        matched.append(period.model_copy(update={
            "is_paid": payment is not None,
            "matched_payment": payment,
        }))

    return matched


def _match_annual_periods(
    periods: List[RentPeriod],
    payments: List[PaymentRecordRead]
) -> List[RentPeriod]:
    window = ReconciliationConstants.ANNUAL_MATCH_WINDOW_DAYS
    used: Set[int] = set()
    matched: List[RentPeriod] = []

    for period in periods:
        payment = next(
            (
                candidate for candidate in payments
                if candidate.id not in used
                and abs((candidate.payment_date - period.due_date).days) <= window
                and amounts_match(candidate.amount, period.amount)
            ),
            None
        )
        if payment is not None:
            used = used | {payment.id}

        matched.append(period.model_copy(update={
            "is_paid": payment is not None,
            "matched_payment": payment,
        }))

    return matched


def match_payments(
    periods: List[RentPeriod],
    payment_records: Iterable[PaymentRecordRead],
    today: date,
    payment_cycle: PaymentCycle = PaymentCycle.MONTHLY
) -> List[RentPeriod]:
    """
    Annotate periods with the confirmed payment that satisfies each of them.

    Non-annual periods take a payment dated inside the period, or for periods
    that already ended, a later payment with unallocated amount left (a back
    payment, which may cover several periods). Annual schedule entries take
    the first unused payment within the match window and tolerance.

    Returns:
        New period objects; the inputs are left untouched.
    """
    payments = confirmed_payments(payment_records)
    if payment_cycle == PaymentCycle.ANNUALLY:
        return _match_annual_periods(periods, payments)
    return _match_stepped_periods(periods, payments, today)


def compute_periods(contract: ContractRead, today: date) -> List[RentPeriod]:
    """Generate the contract's periods and match its payment history against them."""
    return match_payments(
        generate_periods(contract, today),
        contract.payment_records,
        today,
        contract.payment_cycle
    )


def auto_match_back_payments(
    contract: ContractRead,
    new_payment: PaymentRecordRead,
    today: date
) -> List[RentPeriod]:
    """
    Allocate a newly recorded payment across the oldest unpaid past periods.

    The payment pays for whole periods oldest first. The match only stands
    when what is left over after the last covered period is within tolerance,
    so a payment of 2.5 periods matches nothing.

    Returns:
        The periods newly satisfied by the payment, attributed to it.
    """
    if contract.payment_cycle == PaymentCycle.ANNUALLY:
        return []
    if not new_payment.is_confirmed or not new_payment.amount or new_payment.amount <= 0:
        return []

    other_records = [r for r in contract.payment_records if r.id != new_payment.id]
    periods = match_payments(
        generate_periods(contract, today), other_records, today, contract.payment_cycle)
    unpaid_past_periods = [
        period for period in periods
        if today > period.end_date
        and period.end_date < new_payment.payment_date
        and not period.is_paid
    ]
    if not unpaid_past_periods:
        return []

    matched_periods: List[RentPeriod] = []
    remaining_amount = new_payment.amount
    for period in unpaid_past_periods:
        if remaining_amount < period.amount - TOLERANCE:
            break
        matched_periods.append(period.model_copy(update={
            "is_paid": True,
            "matched_payment": new_payment,
        }))
        remaining_amount -= period.amount

    if matched_periods and abs(remaining_amount) <= TOLERANCE:
        logger.info(
            f"Contract {contract.id}: payment {new_payment.id} covers periods "
            f"{[p.period_number for p in matched_periods]}")
        return matched_periods

    return []
