from src.api.common.constants.contracts import PaymentCycle
from src.api.contracts.schemas.contract import ContractRead
from src.api.rent_periods.services.payment_matcher import amounts_match
from src.api.rent_periods.services.period_scheduler import expected_cycle_amount


def has_amount_mismatch(contract: ContractRead) -> bool:
    """
    Check confirmed payments against the amount the cycle expects.

    Monthly contracts are checked payment by payment, every other cycle
    compares the sum of confirmed payments with one cycle's rent.
    """
    confirmed = [record for record in contract.payment_records if record.is_confirmed]
    if not confirmed:
        return False

    if contract.payment_cycle == PaymentCycle.MONTHLY:
        return any(
            not amounts_match(record.amount or 0, contract.rent_amount)
            for record in confirmed
        )

    total_paid = sum(record.amount or 0 for record in confirmed)
    return not amounts_match(total_paid, expected_cycle_amount(contract))
