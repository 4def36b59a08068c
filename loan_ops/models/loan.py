"""Loan models for microloan operations."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from loan_ops.business_days import to_date_or_none
from loan_ops.models.base import ZERO, CustomerDetails, to_decimal
from loan_ops.models.enums import LoanStatus


@dataclass
class LoanDetails:
    """Amounts agreed for a loan (backend ``loanDetails``)."""

    amount_requested: Decimal = ZERO
    amount_disbursed: Decimal = ZERO
    amount_to_be_paid: Decimal = ZERO  # Principal + interest
    amount_paid_so_far: Decimal = ZERO  # Never decreases
    daily_amount: Decimal = ZERO  # Expected per business day

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "LoanDetails":
        data = data or {}
        return cls(
            amount_requested=to_decimal(data.get("amountRequested")),
            amount_disbursed=to_decimal(data.get("amountDisbursed")),
            amount_to_be_paid=to_decimal(data.get("amountToBePaid")),
            amount_paid_so_far=to_decimal(data.get("amountPaidSoFar")),
            daily_amount=to_decimal(data.get("dailyAmount")),
        )


@dataclass
class Loan:
    """Loan record as served by the backend."""

    record_id: str  # Backend ``_id``
    loan_id: str  # Human-facing reference
    cso_id: str | None
    status: LoanStatus | None
    customer: CustomerDetails
    details: LoanDetails
    disbursed_at: datetime | None  # Set once on disbursement
    created_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Loan":
        """Build a loan from backend JSON.

        Unknown statuses and malformed timestamps or amounts are tolerated;
        they come through as None or zero.
        """
        try:
            status = LoanStatus(data.get("status"))
        except ValueError:
            status = None

        cso = data.get("csoId")
        if isinstance(cso, dict):
            cso = cso.get("_id")

        return cls(
            record_id=str(data.get("_id") or data.get("loanId") or ""),
            loan_id=str(data.get("loanId") or ""),
            cso_id=str(cso) if cso else None,
            status=status,
            customer=CustomerDetails.from_dict(data.get("customerDetails")),
            details=LoanDetails.from_dict(data.get("loanDetails")),
            disbursed_at=to_date_or_none(data.get("disbursedAt")),
            created_at=to_date_or_none(data.get("createdAt")),
        )


@dataclass
class LoanMetrics:
    """Repayment metrics derived from a loan; never persisted."""

    disbursed_at: datetime | None = None
    projected_end_date: datetime | None = None
    amount_disbursed: Decimal = ZERO
    amount_to_be_paid: Decimal = ZERO
    amount_paid_so_far: Decimal = ZERO
    daily_amount: Decimal = ZERO
    business_days_since_disbursement: int = 0
    expected_repayments_by_now: Decimal = ZERO
    outstanding_due: Decimal = ZERO
    balance_remaining: Decimal = ZERO
    loan_id: str | None = None

    @property
    def is_ready(self) -> bool:
        """Whether the schedule-based figures can be trusted.

        Without a disbursement date the due amounts are zero because the
        data is missing, not because nothing is owed.
        """
        return self.disbursed_at is not None

    @property
    def is_overdue(self) -> bool:
        return self.outstanding_due > 0


@dataclass
class LoanPayment:
    """A validated repayment ready to be posted to the backend."""

    record_id: str
    amount: Decimal
    payment_date: datetime | None = None

    def to_payload(self) -> dict[str, Any]:
        """Get the request body for ``POST /api/loans/{id}/payments``."""
        payload: dict[str, Any] = {"amount": float(self.amount)}
        if self.payment_date is not None:
            payload["date"] = self.payment_date.isoformat()
        return payload
