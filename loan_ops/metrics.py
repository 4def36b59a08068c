"""Loan repayment metrics derived from the daily installment schedule.

A disbursed loan is repaid in fixed daily installments on business days,
starting the business day after disbursement. From the disbursement date,
the daily amount and the cumulative amount paid, this module derives the
projected completion date, how much should have been repaid by now, what
is outstanding today and what is left on the loan.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any
from zoneinfo import ZoneInfo

from loan_ops.business_days import (
    add_business_days,
    add_days,
    count_business_days,
    to_date_or_none,
)
from loan_ops.config import MetricsConfig
from loan_ops.models import Loan, LoanMetrics
from loan_ops.models.base import CENT, ZERO

logger = logging.getLogger(__name__)

PLACEHOLDER = "—"


def compute_loan_metrics(
    loan: Loan | Mapping[str, Any] | None,
    now: datetime | date | str | None = None,
    config: MetricsConfig | None = None,
) -> LoanMetrics:
    """Derive repayment metrics for a loan.

    Parameters
    ----------
    loan : Loan | Mapping | None
        Loan model or backend JSON. None yields an all-zero result.
    now : datetime | date | str | None
        Reference time; defaults to the current time in the configured
        timezone. An unparseable value is logged and replaced by the
        current time.
    config : MetricsConfig | None
        Installment count and timezone settings.

    Returns
    -------
    LoanMetrics
        Derived metrics. Never raises on malformed data: a missing or
        unparseable disbursement date gives ``is_ready == False`` with no
        elapsed business days and nothing due.
    """
    config = config or MetricsConfig()

    if loan is None:
        return LoanMetrics()

    if isinstance(loan, Mapping):
        loan = Loan.from_dict(dict(loan))

    zone = config.zone
    details = loan.details
    disbursed_at = _to_local(loan.disbursed_at, zone)

    projected_end_date = None
    business_days = 0

    if disbursed_at is not None:
        projected_end_date = add_business_days(disbursed_at, config.installment_count)
        reference = _reference_time(now, config)
        business_days = max(
            count_business_days(add_days(disbursed_at, 1), _to_local(reference, zone)),
            0,
        )
    else:
        logger.debug("Loan %s has no usable disbursement date", loan.loan_id or loan.record_id)

    expected = details.daily_amount * business_days
    outstanding_due = max(expected - details.amount_paid_so_far, ZERO)
    balance_remaining = max(details.amount_to_be_paid - details.amount_paid_so_far, ZERO)

    return LoanMetrics(
        disbursed_at=disbursed_at,
        projected_end_date=projected_end_date,
        amount_disbursed=details.amount_disbursed,
        amount_to_be_paid=details.amount_to_be_paid,
        amount_paid_so_far=details.amount_paid_so_far,
        daily_amount=details.daily_amount,
        business_days_since_disbursement=business_days,
        expected_repayments_by_now=expected,
        outstanding_due=outstanding_due,
        balance_remaining=balance_remaining,
        loan_id=loan.loan_id or loan.record_id or None,
    )


def find_overdue_loans(
    loans: Iterable[Loan],
    now: datetime | date | str | None = None,
    config: MetricsConfig | None = None,
) -> list[tuple[Loan, LoanMetrics]]:
    """Get loans with an outstanding due amount, largest first."""
    overdue = []
    for loan in loans:
        metrics = compute_loan_metrics(loan, now=now, config=config)
        if metrics.is_overdue:
            overdue.append((loan, metrics))

    overdue.sort(key=lambda pair: pair[1].outstanding_due, reverse=True)
    return overdue


def format_currency(value: Any, config: MetricsConfig | None = None) -> str:
    """Format an amount in the configured currency, e.g. ``₦1,500.00``.

    Non-numeric and non-finite values render as a dash.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return PLACEHOLDER
    if isinstance(value, float) and not math.isfinite(value):
        return PLACEHOLDER
    if isinstance(value, Decimal) and not value.is_finite():
        return PLACEHOLDER

    symbol = (config or MetricsConfig()).currency_symbol
    amount = Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_date_with_time(value: Any) -> str:
    """Format a timestamp for display; unparseable input is echoed back."""
    if not value:
        return PLACEHOLDER

    parsed = to_date_or_none(value)
    if parsed is None:
        return str(value)
    return parsed.strftime("%d/%m/%Y, %H:%M:%S")


def _reference_time(now: datetime | date | str | None, config: MetricsConfig) -> datetime:
    """Parse ``now``, falling back to the current time when it is unusable."""
    reference = to_date_or_none(now) if now is not None else None
    if reference is None:
        if now is not None:
            logger.warning("Unparseable reference time %r, using the current time", now)
        reference = config.now()
    return reference


def _to_local(value: datetime | None, zone: ZoneInfo) -> datetime | None:
    """Convert aware datetimes to the local zone; naive ones are taken as local."""
    if isinstance(value, datetime) and value.tzinfo is not None:
        try:
            return value.astimezone(zone)
        except OverflowError:
            logger.debug("Cannot convert %r to %s", value, zone)
    return value
