"""Behavioral patterns for realistic repayment data."""

import random
from decimal import Decimal

from loan_ops.models.base import ZERO


class RepaymentBehavior:
    """Simulate how faithfully a customer keeps up with daily installments."""

    BEHAVIORS = ["good", "occasional_late", "chronic_late", "defaulter"]

    def __init__(self, seed: int | None = None) -> None:
        if seed is not None:
            random.seed(seed)

    def amount_paid(
        self,
        daily_amount: Decimal,
        business_days_elapsed: int,
        amount_to_be_paid: Decimal,
        on_time_rate: float = 0.70,
        late_rate: float = 0.20,
        default_rate: float = 0.10,
    ) -> Decimal:
        """Get the cumulative amount a customer has repaid so far.

        Parameters
        ----------
        daily_amount : Decimal
            Scheduled installment per business day.
        business_days_elapsed : int
            Installments that have fallen due.
        amount_to_be_paid : Decimal
            Total owed; the result never exceeds it.
        on_time_rate : float
            Weight of customers who pay every installment.
        late_rate : float
            Weight of customers who fall behind.
        default_rate : float
            Weight of customers who stop paying.

        Returns
        -------
        Decimal
            Cumulative amount paid.
        """
        if business_days_elapsed <= 0:
            return ZERO

        behavior = random.choices(
            self.BEHAVIORS,
            weights=[on_time_rate, late_rate * 0.7, late_rate * 0.3, default_rate],
            k=1,
        )[0]

        if behavior == "good":
            installments = business_days_elapsed
        elif behavior == "occasional_late":
            installments = max(business_days_elapsed - random.randint(0, 2), 0)
        elif behavior == "chronic_late":
            installments = int(business_days_elapsed * random.uniform(0.4, 0.8))
        else:  # defaulter
            installments = min(business_days_elapsed, random.randint(0, 3))

        return min(daily_amount * installments, amount_to_be_paid)
