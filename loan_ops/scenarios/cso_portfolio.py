"""CSO portfolio scenario: loans, repayments and remittance history."""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Any

from loan_ops.config import MetricsConfig, ScenarioConfig
from loan_ops.generators import CsoGenerator, LoanGenerator, RemittanceGenerator
from loan_ops.metrics import compute_loan_metrics, find_overdue_loans
from loan_ops.models import Loan, LoanMetrics, LoanStatus, RemittanceCheck
from loan_ops.models.base import ZERO
from loan_ops.remittance import check_outstanding_remittance, today_remittance_status
from loan_ops.store import PortfolioStore

logger = logging.getLogger(__name__)


class CsoPortfolioScenario:
    """Generate a branch portfolio and derive its operational views.

    This scenario creates:
    - CSOs spread across branches
    - Loans at every approval stage, with repayment progress for
      disbursed ones
    - Each CSO's daily remittance history, including missing, partial
      and admin-resolved days
    """

    def __init__(
        self,
        num_csos: int = 5,
        loans_per_cso: int = 10,
        history_days: int = 30,
        missing_rate: float = 0.05,
        partial_rate: float = 0.10,
        resolved_rate: float = 0.30,
        seed: int | None = None,
        now: datetime | None = None,
        *,
        config: ScenarioConfig | None = None,
        metrics_config: MetricsConfig | None = None,
    ) -> None:
        """Initialize CSO portfolio scenario.

        Parameters
        ----------
        num_csos : int
            Number of CSOs to generate.
        loans_per_cso : int
            Loans originated by each CSO.
        history_days : int
            Calendar days of remittance history per CSO.
        missing_rate : float
            Probability a business day has no remittance.
        partial_rate : float
            Probability a business day is under-remitted.
        resolved_rate : float
            Probability an under-remitted day was cleared by an admin.
        seed : int | None
            Random seed for reproducibility.
        now : datetime | None
            Reference time for the whole portfolio.
        config : ScenarioConfig | None
            Optional scenario configuration. If provided, overrides the
            individual parameters above.
        metrics_config : MetricsConfig | None
            Installment count and timezone settings.
        """
        self.config = config
        if config is not None:
            num_csos = config.num_csos
            loans_per_cso = config.loans_per_cso
            history_days = config.history_days
            missing_rate = config.missing_rate
            partial_rate = config.partial_rate
            resolved_rate = config.resolved_rate
            now = config.end_date or now

        self.num_csos = num_csos
        self.loans_per_cso = loans_per_cso
        self.history_days = history_days
        self.missing_rate = missing_rate
        self.partial_rate = partial_rate
        self.resolved_rate = resolved_rate
        self.seed = seed
        self.metrics_config = metrics_config or MetricsConfig()
        self.now = now or self.metrics_config.now()
        if self.now.tzinfo is not None:
            self.now = self.now.astimezone(self.metrics_config.zone)

        if seed is not None:
            random.seed(seed)

        self.store = PortfolioStore()
        self._cso_gen = CsoGenerator(seed=seed)
        self._loan_gen = LoanGenerator(seed=seed, config=self.metrics_config)
        self._remittance_gen = RemittanceGenerator(seed=seed, config=self.metrics_config)

    def generate(self) -> PortfolioStore:
        """Generate all data for the portfolio.

        Returns
        -------
        PortfolioStore
            Store containing all generated data.
        """
        logger.info(
            "Starting CSO portfolio scenario: %d CSOs, %d loans each",
            self.num_csos,
            self.loans_per_cso,
        )

        today = self.now.date()

        for cso in self._cso_gen.generate_batch(self.num_csos, now=self.now):
            self.store.add_cso(cso)

            for loan in self._loan_gen.generate_batch(cso.cso_id, self.loans_per_cso, now=self.now):
                self.store.add_loan(loan)

            for remittance in self._remittance_gen.generate_history(
                cso.cso_id,
                end=today,
                days=self.history_days,
                missing_rate=self.missing_rate,
                partial_rate=self.partial_rate,
                resolved_rate=self.resolved_rate,
            ):
                self.store.add_remittance(remittance)

        logger.info(
            "Generated %d loans (%d active) and %d remittance records",
            len(self.store.loans),
            sum(1 for l in self.store.loans.values() if l.status == LoanStatus.ACTIVE),
            len(self.store.remittances),
        )

        return self.store

    def get_loan_metrics(self) -> dict[str, LoanMetrics]:
        """Compute metrics for every loan, keyed by backend id."""
        return {
            record_id: compute_loan_metrics(loan, now=self.now, config=self.metrics_config)
            for record_id, loan in self.store.loans.items()
        }

    def get_overdue_loans(self, cso_id: str | None = None) -> list[tuple[Loan, LoanMetrics]]:
        """Get loans behind schedule, optionally for one CSO."""
        loans = self.store.get_cso_loans(cso_id) if cso_id else self.store.loans.values()
        return find_overdue_loans(loans, now=self.now, config=self.metrics_config)

    def get_remittance_checks(self) -> dict[str, RemittanceCheck]:
        """Check every CSO's remittance for the last business day."""
        return {
            cso_id: check_outstanding_remittance(
                self.store.get_cso_remittances(cso_id),
                now=self.now,
                config=self.metrics_config,
            )
            for cso_id in self.store.csos
        }

    def get_cso_summaries(self) -> list[dict[str, Any]]:
        """Get per-CSO collection and reconciliation figures."""
        checks = self.get_remittance_checks()
        summaries = []

        for cso_id, cso in self.store.csos.items():
            loans = self.store.get_cso_loans(cso_id)
            metrics = [
                compute_loan_metrics(loan, now=self.now, config=self.metrics_config)
                for loan in loans
            ]
            active = [loan for loan in loans if loan.status == LoanStatus.ACTIVE]
            expected_today = sum((loan.details.daily_amount for loan in active), ZERO)
            today = today_remittance_status(
                self.store.get_cso_remittances(cso_id),
                total_collected=expected_today,
                now=self.now,
                config=self.metrics_config,
            )

            summaries.append(
                {
                    "cso_id": cso_id,
                    "name": cso.full_name,
                    "branch": cso.branch,
                    "total_loans": len(loans),
                    "active_loans": len(active),
                    "overdue_loans": sum(1 for m in metrics if m.is_overdue),
                    "total_outstanding_due": sum((m.outstanding_due for m in metrics), ZERO),
                    "total_balance_remaining": sum((m.balance_remaining for m in metrics), ZERO),
                    "expected_collection_today": expected_today,
                    "today_remittance": today.state,
                    "remittance_state": checks[cso_id].state,
                    "remittance_blocking": checks[cso_id].blocking,
                }
            )

        return summaries

    def export(self, sinks: list[Any]) -> None:
        """Export generated data and derived views to sinks.

        Parameters
        ----------
        sinks : list[Any]
            List of sink instances (ConsoleSink, JsonFileSink).
        """
        metrics = list(self.get_loan_metrics().values())
        checks = [
            {"cso_id": cso_id, **vars(check)}
            for cso_id, check in self.get_remittance_checks().items()
        ]

        for sink in sinks:
            sink.write_batch("csos", list(self.store.csos.values()))
            sink.write_batch("loans", list(self.store.loans.values()))
            sink.write_batch("remittances", self.store.remittances)
            sink.write_batch("loan_metrics", metrics)
            sink.write_batch("remittance_checks", checks)
            sink.write_batch("cso_summaries", self.get_cso_summaries())

        logger.info("Exported CSO portfolio to %d sinks", len(sinks))

    def get_portfolio_summary(self) -> dict[str, Any]:
        """Get summary statistics for the portfolio.

        Returns
        -------
        dict[str, Any]
            Portfolio summary statistics.
        """
        loans = list(self.store.loans.values())
        if not loans:
            return {}

        metrics = self.get_loan_metrics()

        status_counts: dict[str, int] = {}
        for loan in loans:
            key = loan.status.value if loan.status else "unknown"
            status_counts[key] = status_counts.get(key, 0) + 1

        remittance_states: dict[str, int] = {}
        for check in self.get_remittance_checks().values():
            remittance_states[check.state.value] = remittance_states.get(check.state.value, 0) + 1

        total_disbursed = sum((l.details.amount_disbursed for l in loans), ZERO)
        total_outstanding = sum((m.outstanding_due for m in metrics.values()), ZERO)

        return {
            "total_csos": len(self.store.csos),
            "total_loans": len(loans),
            "total_disbursed": total_disbursed,
            "total_outstanding_due": total_outstanding,
            "total_balance_remaining": sum(
                (m.balance_remaining for m in metrics.values()), ZERO
            ),
            "overdue_loans": sum(1 for m in metrics.values() if m.is_overdue),
            "loan_status_distribution": status_counts,
            "remittance_state_distribution": remittance_states,
            "arrears_ratio": (
                float(total_outstanding / total_disbursed) if total_disbursed > 0 else 0.0
            ),
        }
