from datetime import date
from typing import List
from fastapi.logger import logger

from src.api.common.constants.contracts import CYCLE_MONTHS, PaymentCycle
from src.api.common.utils.datetime import add_months, day_in_month, get_month_end, next_day
from src.api.contracts.schemas.contract import ContractRead
from src.api.rent_periods.constants import ReconciliationConstants
from src.api.rent_periods.schemas import RentPeriod


def get_cycle_months(payment_cycle: PaymentCycle) -> int:
    return CYCLE_MONTHS.get(payment_cycle, 1)


def expected_cycle_amount(contract: ContractRead) -> float:
    """
    Amount a tenant owes per billing period of the contract's cycle.
    Annual contracts may carry a half-month discount.
    """
    if contract.payment_cycle == PaymentCycle.ANNUALLY:
        months = (ReconciliationConstants.DISCOUNTED_ANNUAL_MONTHS
                  if contract.annual_discount
                  else ReconciliationConstants.ANNUAL_MONTHS)
        return contract.rent_amount * months
    return contract.rent_amount * get_cycle_months(contract.payment_cycle)


def calculate_due_date(period_start: date, payment_cycle: PaymentCycle, payment_due_day: int) -> date:
    """
    Due date of a non-annual period.

    Monthly periods are due in their own start month, quarterly periods in the
    first month of the calendar quarter, semi-annual periods in January or July.
    The due day is clamped to the length of that month.
    """
    due_day = max(1, payment_due_day or 1)
    if payment_cycle == PaymentCycle.QUARTERLY:
        due_month = ((period_start.month - 1) // 3) * 3 + 1
    elif payment_cycle == PaymentCycle.SEMIANNUALLY:
        due_month = 1 if period_start.month <= 6 else 7
    else:
        due_month = period_start.month
    return day_in_month(period_start.year, due_month, due_day)


def _annual_periods(contract: ContractRead) -> List[RentPeriod]:
    return [
        RentPeriod(
            period_number=number,
            start_date=contract.start_date,
            end_date=contract.end_date,
            due_date=entry.due_date,
            amount=entry.amount,
        )
        for number, entry in enumerate(contract.annual_payment_dates, start=1)
    ]


def generate_periods(contract: ContractRead, today: date) -> List[RentPeriod]:
    """
    Build the ordered billing periods of a contract, without payment matching.

    Args:
        contract: Contract with its dates, rent and cycle
        today: Reference date of the calling request

    Returns:
        Contiguous periods from start_date up to end_date, or one period per
        schedule entry for annual contracts. Empty when dates are missing.
    """
    if not contract.start_date or not contract.end_date:
        return []

    if contract.payment_cycle == PaymentCycle.ANNUALLY:
        return _annual_periods(contract)

    if contract.rent_amount <= 0:
        return []

    months = get_cycle_months(contract.payment_cycle)
    amount = expected_cycle_amount(contract)
    periods: List[RentPeriod] = []
    current = contract.start_date

    while current < contract.end_date:
        if len(periods) >= ReconciliationConstants.MAX_PERIODS:
            logger.warning(
                f"Contract {contract.id}: stopped after {len(periods)} periods")
            break

        period_end = get_month_end(add_months(current.replace(day=1), months - 1))
        period_end = min(period_end, contract.end_date)

        periods.append(RentPeriod(
            period_number=len(periods) + 1,
            start_date=current,
            end_date=period_end,
            due_date=calculate_due_date(
                current, contract.payment_cycle, contract.payment_due_day),
            amount=amount,
        ))

        following = next_day(period_end)
        if following <= current:
            logger.warning(
                f"Contract {contract.id}: period starting {current} did not advance")
            break
        current = following

    return periods
