"""Daily remittance reconciliation for CSOs.

Every business day a CSO hands the cash collected from customers over to
the organization. Before a CSO can keep working, the previous business
day's remittance must be complete (or cleared by an admin). Field
collection does not happen on weekends, so the day checked on a Monday is
the previous Friday.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

from loan_ops.business_days import to_date_or_none
from loan_ops.config import MetricsConfig
from loan_ops.exceptions import RemittanceValidationError
from loan_ops.metrics import format_currency
from loan_ops.models import (
    Remittance,
    RemittanceCheck,
    RemittanceState,
    RemittanceSubmission,
    TodayRemittanceState,
    TodayRemittanceStatus,
)
from loan_ops.models.base import ZERO, to_decimal

logger = logging.getLogger(__name__)

MONDAY = 0
SUNDAY = 6

RemittanceRecords = Iterable[Remittance | Mapping[str, Any]]


def remittance_reference_date(
    base: datetime | date | str | None = None,
    config: MetricsConfig | None = None,
) -> date:
    """Get the business day whose remittance must be settled.

    Monday looks back to Friday, Sunday two days to Friday, every other day
    (Saturday included) one day to yesterday.

    Parameters
    ----------
    base : datetime | date | str | None
        Day to look back from; defaults to today in the configured timezone.
    config : MetricsConfig | None
        Timezone settings.
    """
    config = config or MetricsConfig()
    day = _base_day(base, config)

    weekday = day.weekday()
    if weekday == MONDAY:
        days_back = 3
    elif weekday == SUNDAY:
        days_back = 2
    else:
        days_back = 1

    return day - timedelta(days=days_back)


def check_outstanding_remittance(
    remittances: RemittanceRecords | None,
    now: datetime | date | str | None = None,
    config: MetricsConfig | None = None,
) -> RemittanceCheck:
    """Classify the CSO's remittance for the reference business day.

    Parameters
    ----------
    remittances : Iterable[Remittance | Mapping] | None
        The CSO's remittance history. None means the profile carries no
        history yet and nothing is checked.
    now : datetime | date | str | None
        Reference time; defaults to the current time.
    config : MetricsConfig | None
        Timezone settings.

    Returns
    -------
    RemittanceCheck
        ``NONE`` when no record exists for the day, ``RESOLVED`` when an admin
        cleared it, ``PARTIAL`` when less was paid than collected and
        ``COMPLETE`` otherwise.
    """
    config = config or MetricsConfig()
    reference = remittance_reference_date(now, config)

    if remittances is None:
        return RemittanceCheck(state=RemittanceState.COMPLETE, reference_date=reference)

    records = _records_for_day(remittances, reference, config)

    if not records:
        logger.debug("No remittance recorded for %s", reference.isoformat())
        return RemittanceCheck(state=RemittanceState.NONE, reference_date=reference)

    amount_collected = max(record.amount_collected for record in records)
    amount_paid = sum((record.amount_paid for record in records), ZERO)

    if any(record.resolved_issue for record in records):
        state = RemittanceState.RESOLVED
    elif amount_paid < amount_collected:
        state = RemittanceState.PARTIAL
    else:
        state = RemittanceState.COMPLETE

    return RemittanceCheck(
        state=state,
        reference_date=reference,
        amount_collected=amount_collected,
        amount_paid=amount_paid,
        records=len(records),
    )


def today_remittance_status(
    remittances: RemittanceRecords | None,
    total_collected: Decimal | float | int | str,
    now: datetime | date | str | None = None,
    config: MetricsConfig | None = None,
) -> TodayRemittanceStatus:
    """Get how much of today's collection has been remitted so far."""
    config = config or MetricsConfig()
    today = _base_day(now, config)

    if remittances is None:
        return TodayRemittanceStatus(state=TodayRemittanceState.NONE)

    records = _records_for_day(remittances, today, config)
    if not records:
        return TodayRemittanceStatus(state=TodayRemittanceState.NONE)

    collected = to_decimal(total_collected)
    paid = sum((record.amount_paid for record in records), ZERO)

    if collected > 0 and paid >= collected:
        return TodayRemittanceStatus(state=TodayRemittanceState.FULL, paid=paid)
    return TodayRemittanceStatus(state=TodayRemittanceState.PARTIAL, paid=paid)


def build_remittance_submission(
    amount_collected: Decimal | float | int | str,
    amount_paid: Decimal | float | int | str,
    already_paid: Decimal | float | int | str = ZERO,
    remittance_date: datetime | date | str | None = None,
    image: str = "",
    remark: str = "",
    now: datetime | date | str | None = None,
    config: MetricsConfig | None = None,
) -> RemittanceSubmission:
    """Validate an incremental remittance payment.

    Raises
    ------
    RemittanceValidationError
        If the amount is not positive, the running total would exceed the
        amount collected, or the date cannot be parsed.
    """
    config = config or MetricsConfig()

    amount = to_decimal(amount_paid)
    if amount <= 0:
        raise RemittanceValidationError("Enter a valid remittance amount greater than zero")

    collected = to_decimal(amount_collected)
    if to_decimal(already_paid) + amount > collected:
        raise RemittanceValidationError(
            f"Total amount paid cannot exceed collected amount "
            f"({format_currency(collected, config)})"
        )

    if remittance_date is not None:
        when = to_date_or_none(remittance_date)
        if when is None:
            raise RemittanceValidationError("Select a valid remittance date")
    else:
        when = to_date_or_none(now) or config.now()

    return RemittanceSubmission(
        amount_collected=collected,
        amount_paid=amount,
        remittance_date=when,
        image=image.strip(),
        remark=remark.strip(),
    )


def settle_outstanding_remittance(
    check: RemittanceCheck,
    amount_paid: Decimal | float | int | str,
    image: str = "",
    remark: str = "",
    config: MetricsConfig | None = None,
) -> RemittanceSubmission:
    """Pay (part of) the remainder of an incomplete past remittance.

    The submission is dated on the day being settled, not today.
    """
    config = config or MetricsConfig()

    if check.state != RemittanceState.PARTIAL:
        raise RemittanceValidationError("There is no incomplete remittance to settle")

    pending = datetime.combine(check.reference_date, time(), tzinfo=config.zone)
    return build_remittance_submission(
        amount_collected=check.amount_collected,
        amount_paid=amount_paid,
        already_paid=check.amount_paid,
        remittance_date=pending,
        image=image,
        remark=remark,
        config=config,
    )


def format_remittance_date_label(day: date | None) -> str:
    """Format a remittance day for messages, e.g. ``Friday, Mar 7``."""
    if day is None:
        return "yesterday"
    return f"{day:%A}, {day:%b} {day.day}"


def _base_day(base: datetime | date | str | None, config: MetricsConfig) -> date:
    moment = to_date_or_none(base) if base is not None else None
    if moment is None:
        if base is not None:
            logger.debug("Unparseable reference date %r, using today", base)
        moment = config.now()
    return _local_day(moment, config)


def _local_day(moment: datetime, config: MetricsConfig) -> date:
    if moment.tzinfo is not None:
        try:
            moment = moment.astimezone(config.zone)
        except OverflowError:
            logger.debug("Cannot convert %r to %s", moment, config.zone)
    return moment.date()


def _records_for_day(
    remittances: RemittanceRecords,
    day: date,
    config: MetricsConfig,
) -> list[Remittance]:
    records = []
    for item in remittances:
        record = Remittance.from_dict(dict(item)) if isinstance(item, Mapping) else item
        if record.remittance_date is None:
            continue
        if _local_day(record.remittance_date, config) == day:
            records.append(record)
    return records
