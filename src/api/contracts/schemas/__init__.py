# Import schema classes directly
from src.api.contracts.schemas.contract import (
    ContractBase, ContractCreate, ContractRead, ContractUpdate
)
from src.api.contracts.schemas.payment_record import (
    AnnualPaymentScheduleEntry, PaymentRecordBase, PaymentRecordCreate,
    PaymentRecordRead, PaymentRecordUpdate
)

# Export all schema classes
__all__ = [
    "ContractBase", "ContractCreate", "ContractRead", "ContractUpdate",
    "AnnualPaymentScheduleEntry", "PaymentRecordBase", "PaymentRecordCreate",
    "PaymentRecordRead", "PaymentRecordUpdate"
]
