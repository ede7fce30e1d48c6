from enum import Enum

# Python enums for type hints and constants


class PaymentCycle(str, Enum):
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    SEMIANNUALLY = "SEMIANNUALLY"
    ANNUALLY = "ANNUALLY"


# Months covered by one billing period of each cycle
CYCLE_MONTHS = {
    PaymentCycle.MONTHLY: 1,
    PaymentCycle.QUARTERLY: 3,
    PaymentCycle.SEMIANNUALLY: 6,
    PaymentCycle.ANNUALLY: 12,
}

DEFAULT_PAYMENT_METHOD = "transfer"
