"""Validation of loan repayments collected by a CSO."""

import logging
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from loan_ops.business_days import to_date_or_none
from loan_ops.config import MetricsConfig
from loan_ops.exceptions import PaymentValidationError
from loan_ops.metrics import compute_loan_metrics
from loan_ops.models import Loan, LoanPayment, PaymentMode
from loan_ops.models.base import quantize_cents, to_decimal

logger = logging.getLogger(__name__)


def build_loan_payment(
    loan: Loan | Mapping[str, Any] | None,
    amount: Decimal | float | int | str | None = None,
    mode: PaymentMode | str = PaymentMode.DUE,
    payment_date: datetime | date | str | None = None,
    now: datetime | date | str | None = None,
    config: MetricsConfig | None = None,
) -> LoanPayment:
    """Validate a repayment against the loan's current metrics.

    In ``due`` mode the amount defaults to what is outstanding today; in
    ``custom`` mode the collected amount must be given.

    Parameters
    ----------
    loan : Loan | Mapping | None
        Loan being repaid.
    amount : Decimal | float | int | str | None
        Amount collected.
    mode : PaymentMode | str
        ``due`` or ``custom``.
    payment_date : datetime | date | str | None
        When the payment was collected; the backend uses today if omitted.
    now : datetime | date | str | None
        Reference time for the outstanding due amount.
    config : MetricsConfig | None
        Metrics settings.

    Returns
    -------
    LoanPayment
        Payment rounded to two decimal places.

    Raises
    ------
    PaymentValidationError
        With a message suitable for showing to the CSO.
    """
    if loan is None:
        raise PaymentValidationError("Loan details not available yet")

    if isinstance(loan, Mapping):
        loan = Loan.from_dict(dict(loan))

    try:
        mode = PaymentMode(mode)
    except ValueError as exc:
        raise PaymentValidationError(f"Unknown payment mode: {mode}") from exc

    metrics = compute_loan_metrics(loan, now=now, config=config)
    due_amount = quantize_cents(metrics.outstanding_due)
    balance_remaining = quantize_cents(metrics.balance_remaining)

    if mode == PaymentMode.DUE and due_amount <= 0:
        raise PaymentValidationError("There is no outstanding amount due today")

    if amount is None or (isinstance(amount, str) and not amount.strip()):
        if mode != PaymentMode.DUE:
            raise PaymentValidationError("Enter a valid payment amount greater than zero")
        value = due_amount
    else:
        value = to_decimal(amount)

    if value <= 0:
        raise PaymentValidationError("Enter a valid payment amount greater than zero")

    if value > balance_remaining:
        raise PaymentValidationError("Payment exceeds outstanding balance")

    parsed_date = None
    if payment_date is not None and payment_date != "":
        parsed_date = to_date_or_none(payment_date)
        if parsed_date is None:
            raise PaymentValidationError("Select a valid payment date")

    logger.debug(
        "Validated %s payment of %s for loan %s", mode.value, value, loan.loan_id
    )

    return LoanPayment(
        record_id=loan.record_id,
        amount=quantize_cents(value),
        payment_date=parsed_date,
    )
