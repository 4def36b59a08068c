"""Domain models for microloan operations."""

from loan_ops.models.base import CustomerDetails, to_decimal
from loan_ops.models.cso import Cso
from loan_ops.models.enums import (
    LoanStatus,
    PaymentMode,
    RemittanceState,
    TodayRemittanceState,
)
from loan_ops.models.loan import Loan, LoanDetails, LoanMetrics, LoanPayment
from loan_ops.models.remittance import (
    Remittance,
    RemittanceCheck,
    RemittanceSubmission,
    TodayRemittanceStatus,
)

__all__ = [
    "Cso",
    "CustomerDetails",
    "Loan",
    "LoanDetails",
    "LoanMetrics",
    "LoanPayment",
    "LoanStatus",
    "PaymentMode",
    "Remittance",
    "RemittanceCheck",
    "RemittanceState",
    "RemittanceSubmission",
    "TodayRemittanceState",
    "TodayRemittanceStatus",
    "to_decimal",
]
