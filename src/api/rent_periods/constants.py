from enum import Enum


class StatusKind(str, Enum):
    EXPIRED = "EXPIRED"
    EXPIRING_SOON = "EXPIRING_SOON"
    PAYMENT_ANOMALY = "PAYMENT_ANOMALY"
    PAYMENT_DUE = "PAYMENT_DUE"
    NOT_YET_DUE = "NOT_YET_DUE"
    NORMAL = "NORMAL"
    PAID = "PAID"
    ERROR = "ERROR"


class Severity(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


STATUS_SEVERITY = {
    StatusKind.EXPIRED: Severity.DANGER,
    StatusKind.EXPIRING_SOON: Severity.WARNING,
    StatusKind.PAYMENT_ANOMALY: Severity.DANGER,
    StatusKind.PAYMENT_DUE: Severity.WARNING,
    StatusKind.NOT_YET_DUE: Severity.INFO,
    StatusKind.NORMAL: Severity.SUCCESS,
    StatusKind.PAID: Severity.SUCCESS,
    StatusKind.ERROR: Severity.DANGER,
}

STATUS_LABELS = {
    StatusKind.EXPIRED: "Expired",
    StatusKind.EXPIRING_SOON: "Expiring Soon",
    StatusKind.PAYMENT_ANOMALY: "Payment Anomaly",
    StatusKind.PAYMENT_DUE: "Payment Due",
    StatusKind.NOT_YET_DUE: "Not Yet Due",
    StatusKind.NORMAL: "Normal",
    StatusKind.PAID: "Paid",
    StatusKind.ERROR: "Error",
}


class ReconciliationConstants:
    """Thresholds used by period generation, matching and classification."""

    # Any two amounts within this many currency units are equal
    AMOUNT_TOLERANCE = 1

    # A contract ending within this many days is expiring soon
    EXPIRING_SOON_DAYS = 30

    # Annual payments match a scheduled entry dated within this many days
    ANNUAL_MATCH_WINDOW_DAYS = 30

    # Hard stop for period generation on malformed dates
    MAX_PERIODS = 1000

    # Months of rent charged for a year paid upfront with the discount
    DISCOUNTED_ANNUAL_MONTHS = 11.5
    ANNUAL_MONTHS = 12
