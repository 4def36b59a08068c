"""CSO generator."""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Iterator

from loan_ops.generators.base import BaseGenerator
from loan_ops.models import Cso


class CsoGenerator(BaseGenerator):
    """Generate synthetic field agents."""

    BRANCHES = ["Ikeja", "Yaba", "Surulere", "Lekki", "Ikorodu", "Agege"]

    def generate(self, now: datetime | None = None) -> Cso:
        """Generate a single CSO.

        Parameters
        ----------
        now : datetime | None
            Reference time; the CSO joined before it.

        Returns
        -------
        Cso
            Generated CSO.
        """
        first_name = self.fake.first_name()
        last_name = self.fake.last_name()

        return Cso(
            cso_id=self.fake.uuid4(),
            first_name=first_name,
            last_name=last_name,
            email=f"{first_name}.{last_name}@example.com".lower(),
            phone=f"080{random.randint(10_000_000, 99_999_999)}",
            branch=random.choice(self.BRANCHES),
            work_id=f"CSO-{random.randint(1000, 9999)}",
            created_at=(now or datetime.now()) - timedelta(days=random.randint(60, 3 * 365)),
        )

    def generate_batch(self, count: int, now: datetime | None = None) -> Iterator[Cso]:
        """Generate multiple CSOs.

        Parameters
        ----------
        count : int
            Number of CSOs to generate.
        now : datetime | None
            Reference time passed to each CSO.

        Yields
        ------
        Cso
            Generated CSOs.
        """
        for _ in range(count):
            yield self.generate(now=now)
