#!/usr/bin/env python3
"""Generate a sample CSO portfolio and export it with derived metrics.

Writes CSOs, loans, remittances, per-loan metrics, remittance checks and
per-CSO summaries to the console or to JSON files.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loan_ops.config import LoanOpsConfig, ScenarioConfig
from loan_ops.exceptions import LoanOpsError
from loan_ops.logging import setup_logging
from loan_ops.metrics import format_currency
from loan_ops.scenarios import CsoPortfolioScenario
from loan_ops.sinks import ConsoleSink, JsonFileSink

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point."""
    config = LoanOpsConfig.from_env()

    parser = argparse.ArgumentParser(
        description="Generate a sample CSO loan portfolio with repayment metrics"
    )
    parser.add_argument(
        "--csos",
        type=int,
        default=5,
        help="Number of CSOs to generate (default: 5)",
    )
    parser.add_argument(
        "--loans-per-cso",
        type=int,
        default=10,
        help="Loans originated by each CSO (default: 10)",
    )
    parser.add_argument(
        "--history-days",
        type=int,
        default=30,
        help="Calendar days of remittance history (default: 30)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed if config.seed is not None else 42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=None,
        help="Reference time as ISO-8601 (default: current time)",
    )
    parser.add_argument(
        "--output",
        choices=["console", "json"],
        default="console",
        help="Where to write the portfolio (default: console)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.output.json_output_dir,
        help="Directory for JSON output (default: output)",
    )
    parser.add_argument(
        "--max-records",
        type=int,
        default=3,
        help="Records printed per entity on the console (default: 3)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help="Log level (default: INFO)",
    )
    args = parser.parse_args()

    setup_logging(args.log_level, config.log_format)

    scenario = CsoPortfolioScenario(
        seed=args.seed,
        config=ScenarioConfig(
            num_csos=args.csos,
            loans_per_cso=args.loans_per_cso,
            history_days=args.history_days,
            end_date=args.now,
        ),
        metrics_config=config.metrics,
    )

    try:
        scenario.generate()

        if args.output == "json":
            sink = JsonFileSink(args.output_dir, pretty=config.output.pretty_json)
        else:
            sink = ConsoleSink(pretty=True, max_records=args.max_records)

        scenario.export([sink])
        sink.close()
    except LoanOpsError as exc:
        logger.error("Portfolio generation failed: %s", exc)
        sys.exit(1)

    summary = scenario.get_portfolio_summary()
    print("\nPortfolio summary")
    print(f"  CSOs:             {summary.get('total_csos', 0)}")
    print(f"  Loans:            {summary.get('total_loans', 0)}")
    print(f"  Overdue loans:    {summary.get('overdue_loans', 0)}")
    print(f"  Disbursed:        {format_currency(summary.get('total_disbursed'), config.metrics)}")
    print(f"  Outstanding due:  {format_currency(summary.get('total_outstanding_due'), config.metrics)}")
    print(f"  Balance:          {format_currency(summary.get('total_balance_remaining'), config.metrics)}")


if __name__ == "__main__":
    main()
