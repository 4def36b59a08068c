"""Enumeration types for loan operations entities."""

from enum import Enum


class LoanStatus(str, Enum):
    WAITING_FOR_APPROVAL = "waiting for approval"
    APPROVED = "approved"
    REJECTED = "rejected"
    ACTIVE = "active loan"
    FULLY_PAID = "fully paid"


class PaymentMode(str, Enum):
    """How the repayment amount is chosen on the payment form."""

    DUE = "due"
    CUSTOM = "custom"


class RemittanceState(str, Enum):
    """Reconciliation state of a CSO's remittance for a past business day."""

    NONE = "none"
    RESOLVED = "resolved"
    PARTIAL = "partial"
    COMPLETE = "complete"


class TodayRemittanceState(str, Enum):
    NONE = "none"
    PARTIAL = "partial"
    FULL = "full"
