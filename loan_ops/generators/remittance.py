"""Remittance history generator."""

from __future__ import annotations

import random
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Iterator

from loan_ops.business_days import is_weekend
from loan_ops.config import MetricsConfig
from loan_ops.generators.base import BaseGenerator
from loan_ops.models import Remittance
from loan_ops.models.base import quantize_cents


class RemittanceGenerator(BaseGenerator):
    """Generate a CSO's end-of-day remittances over a span of business days."""

    def __init__(
        self,
        seed: int | None = None,
        config: MetricsConfig | None = None,
    ) -> None:
        super().__init__(seed)
        self.config = config or MetricsConfig()

    def generate_history(
        self,
        cso_id: str,
        end: date,
        days: int = 30,
        missing_rate: float = 0.05,
        partial_rate: float = 0.10,
        resolved_rate: float = 0.30,
    ) -> Iterator[Remittance]:
        """Generate remittances for every business day in ``[end - days, end]``.

        Parameters
        ----------
        cso_id : str
            CSO submitting the remittances.
        end : date
            Last day of the history (inclusive).
        days : int
            Calendar days of history.
        missing_rate : float
            Probability that a business day has no remittance at all.
        partial_rate : float
            Probability that less than the collected amount is paid.
        resolved_rate : float
            Probability that an admin cleared a partial day.

        Yields
        ------
        Remittance
            Records in date order; a day may yield two part-payments.
        """
        day = end - timedelta(days=days)
        while day <= end:
            if not is_weekend(day):
                yield from self._generate_day(cso_id, day, missing_rate, partial_rate, resolved_rate)
            day += timedelta(days=1)

    def _generate_day(
        self,
        cso_id: str,
        day: date,
        missing_rate: float,
        partial_rate: float,
        resolved_rate: float,
    ) -> Iterator[Remittance]:
        roll = random.random()
        if roll < missing_rate:
            return

        collected = Decimal(random.randint(20, 200) * 500)

        if roll < missing_rate + partial_rate:
            paid = quantize_cents(collected * Decimal(str(round(random.uniform(0.3, 0.9), 2))))
            yield self._record(
                cso_id,
                day,
                collected,
                paid,
                resolved_issue=random.random() < resolved_rate,
            )
            return

        if random.random() < 0.2:
            # Paid in two parts
            first = quantize_cents(collected * Decimal(str(round(random.uniform(0.4, 0.7), 2))))
            yield self._record(cso_id, day, collected, first)
            yield self._record(cso_id, day, collected, collected - first)
        else:
            yield self._record(cso_id, day, collected, collected)

    def _record(
        self,
        cso_id: str,
        day: date,
        collected: Decimal,
        paid: Decimal,
        resolved_issue: bool = False,
    ) -> Remittance:
        submitted_at = datetime.combine(
            day,
            time(hour=random.randint(16, 20), minute=random.randint(0, 59)),
            tzinfo=self.config.zone,
        )
        return Remittance(
            remittance_date=submitted_at,
            amount_collected=collected,
            amount_paid=paid,
            resolved_issue=resolved_issue,
            image=f"/uploads/remittance/{self.fake.uuid4()}.jpg",
            remark=self.fake.sentence(nb_words=6) if random.random() < 0.3 else "",
            cso_id=cso_id,
            remittance_id=self.fake.uuid4(),
        )
