"""Loan generator for daily-installment microloans."""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterator

from loan_ops.business_days import add_days, count_business_days, is_weekend
from loan_ops.config import MetricsConfig
from loan_ops.generators.base import BaseGenerator
from loan_ops.generators.patterns import RepaymentBehavior
from loan_ops.models import CustomerDetails, Loan, LoanDetails, LoanStatus
from loan_ops.models.base import ZERO, quantize_cents


class LoanGenerator(BaseGenerator):
    """Generate synthetic microloans with repayment progress."""

    # Flat interest over the whole schedule
    INTEREST_RATE = Decimal("0.20")

    STATUSES = [
        LoanStatus.ACTIVE,
        LoanStatus.FULLY_PAID,
        LoanStatus.WAITING_FOR_APPROVAL,
        LoanStatus.APPROVED,
        LoanStatus.REJECTED,
    ]
    STATUS_WEIGHTS = [0.70, 0.10, 0.10, 0.05, 0.05]

    # Disbursements reach back up to this many calendar days
    MAX_LOAN_AGE_DAYS = 45

    def __init__(
        self,
        seed: int | None = None,
        config: MetricsConfig | None = None,
    ) -> None:
        super().__init__(seed)
        self.config = config or MetricsConfig()
        self._repayment = RepaymentBehavior(seed=seed)

    def generate_for_cso(
        self,
        cso_id: str,
        now: datetime | None = None,
        status: LoanStatus | None = None,
    ) -> Loan:
        """Generate a loan originated by a CSO.

        Parameters
        ----------
        cso_id : str
            Originating CSO.
        now : datetime | None
            Reference time; disbursements and repayments are placed before it.
        status : LoanStatus | None
            Force a status instead of drawing one.

        Returns
        -------
        Loan
            Generated loan.
        """
        now = now or self.config.now()
        if status is None:
            status = random.choices(self.STATUSES, weights=self.STATUS_WEIGHTS, k=1)[0]

        amount_requested = Decimal(random.randint(4, 40) * 5000)
        amount_to_be_paid = quantize_cents(amount_requested * (1 + self.INTEREST_RATE))
        installments = self.config.installment_count or 1
        daily_amount = quantize_cents(amount_to_be_paid / installments)

        disbursed_at = None
        amount_paid = ZERO

        if status in (LoanStatus.ACTIVE, LoanStatus.FULLY_PAID):
            disbursed_at = self._disbursement_before(now)
            if status == LoanStatus.FULLY_PAID:
                amount_paid = amount_to_be_paid
            else:
                elapsed = count_business_days(add_days(disbursed_at, 1), now)
                amount_paid = self._repayment.amount_paid(daily_amount, elapsed, amount_to_be_paid)
                if amount_paid >= amount_to_be_paid:
                    status = LoanStatus.FULLY_PAID

        created_at = (disbursed_at or now) - timedelta(days=random.randint(1, 14))

        return Loan(
            record_id=self.fake.uuid4(),
            loan_id=f"LN-{random.randint(100000, 999999)}",
            cso_id=cso_id,
            status=status,
            customer=self._generate_customer(),
            details=LoanDetails(
                amount_requested=amount_requested,
                amount_disbursed=amount_requested if disbursed_at else ZERO,
                amount_to_be_paid=amount_to_be_paid,
                amount_paid_so_far=amount_paid,
                daily_amount=daily_amount,
            ),
            disbursed_at=disbursed_at,
            created_at=created_at,
        )

    def generate_batch(
        self,
        cso_id: str,
        count: int,
        now: datetime | None = None,
    ) -> Iterator[Loan]:
        """Generate several loans for one CSO."""
        for _ in range(count):
            yield self.generate_for_cso(cso_id, now=now)

    def _disbursement_before(self, now: datetime) -> datetime:
        """Pick a business-day disbursement time before ``now``."""
        disbursed_at = now - timedelta(
            days=random.randint(0, self.MAX_LOAN_AGE_DAYS),
            hours=random.randint(0, 6),
        )
        while is_weekend(disbursed_at):
            disbursed_at -= timedelta(days=1)
        return disbursed_at

    def _generate_customer(self) -> CustomerDetails:
        return CustomerDetails(
            first_name=self.fake.first_name(),
            last_name=self.fake.last_name(),
            phone=f"081{random.randint(10_000_000, 99_999_999)}",
            address=self.fake.street_address(),
            bvn=f"22{random.randint(0, 999_999_999):09d}",
        )
