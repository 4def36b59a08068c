"""Remittance models: a CSO's daily hand-over of collected cash."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from loan_ops.business_days import to_date_or_none
from loan_ops.models.base import ZERO, to_decimal
from loan_ops.models.enums import RemittanceState, TodayRemittanceState


@dataclass
class Remittance:
    """One remittance record.

    A day may have several records when the CSO pays in parts; each record
    carries the incremental ``amount_paid`` and the day's ``amount_collected``.
    """

    remittance_date: datetime | None
    amount_collected: Decimal
    amount_paid: Decimal
    resolved_issue: bool = False  # Cleared manually by an admin
    image: str = ""
    remark: str = ""
    cso_id: str | None = None
    remittance_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], cso_id: str | None = None) -> "Remittance":
        return cls(
            remittance_date=to_date_or_none(data.get("date")),
            amount_collected=to_decimal(data.get("amountCollected")),
            amount_paid=to_decimal(data.get("amountPaid")),
            resolved_issue=bool(data.get("resolvedIssue", False)),
            image=str(data.get("image") or ""),
            remark=str(data.get("remark") or ""),
            cso_id=cso_id,
            remittance_id=str(data["_id"]) if data.get("_id") else None,
        )


@dataclass
class RemittanceCheck:
    """Outcome of checking the last business day's remittance."""

    state: RemittanceState
    reference_date: date
    amount_collected: Decimal = ZERO
    amount_paid: Decimal = ZERO
    records: int = 0

    @property
    def remaining(self) -> Decimal:
        return max(self.amount_collected - self.amount_paid, ZERO)

    @property
    def blocking(self) -> bool:
        """Whether the CSO must act before using the dashboard.

        A missing record needs an admin; a partial one needs the remainder paid.
        """
        return self.state in (RemittanceState.NONE, RemittanceState.PARTIAL)


@dataclass
class TodayRemittanceStatus:
    state: TodayRemittanceState
    paid: Decimal = ZERO


@dataclass
class RemittanceSubmission:
    """A validated part-payment ready to be posted to the backend."""

    amount_collected: Decimal
    amount_paid: Decimal  # Incremental, not cumulative
    remittance_date: datetime
    image: str = ""
    remark: str = ""

    def to_payload(self) -> dict[str, Any]:
        """Get the request body for the CSO remittance endpoint."""
        return {
            "amountCollected": float(self.amount_collected),
            "amountPaid": float(self.amount_paid),
            "image": self.image,
            "date": self.remittance_date.isoformat(),
            "remark": self.remark,
        }
