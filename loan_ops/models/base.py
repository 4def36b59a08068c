"""Base models and value coercion shared across entities."""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    """Coerce a JSON amount into a Decimal.

    Missing, non-numeric and non-finite values yield ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value if value.is_finite() else default
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        logger.debug("Non-numeric amount: %r", value)
        return default
    return result if result.is_finite() else default


def quantize_cents(value: Decimal) -> Decimal:
    """Round an amount to two decimal places."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class CustomerDetails:
    """Loan applicant identity as captured by the CSO."""

    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    address: str = ""
    bvn: str = ""  # Bank Verification Number

    @property
    def full_name(self) -> str:
        """Get the display name, falling back to ``Customer``."""
        return " ".join(part for part in (self.first_name, self.last_name) if part) or "Customer"

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "CustomerDetails":
        """Build from the backend ``customerDetails`` object."""
        data = data or {}
        return cls(
            first_name=str(data.get("firstName") or ""),
            last_name=str(data.get("lastName") or ""),
            phone=str(data.get("phoneOne") or ""),
            address=str(data.get("address") or ""),
            bvn=str(data.get("bvn") or ""),
        )
