#!/usr/bin/env python3
"""Compute repayment metrics for loans exported from the backend.

The input is a JSON file holding either a list of loan objects or an
object with a ``loans`` list (the shape of the ``/api/loans`` response).
Optionally checks a CSO's remittance history for the last business day.
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loan_ops.config import LoanOpsConfig
from loan_ops.exceptions import SinkError
from loan_ops.logging import setup_logging
from loan_ops.metrics import compute_loan_metrics, format_currency
from loan_ops.remittance import check_outstanding_remittance, format_remittance_date_label
from loan_ops.sinks import ConsoleSink, JsonFileSink

logger = logging.getLogger(__name__)


def load_records(path: Path, key: str) -> list[dict[str, Any]]:
    """Load a list of records from a JSON file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a list of {key}")
    return data


def main() -> None:
    """Main entry point."""
    config = LoanOpsConfig.from_env()

    parser = argparse.ArgumentParser(description="Compute loan repayment metrics")
    parser.add_argument("loans", type=Path, help="JSON file of backend loans")
    parser.add_argument(
        "--remittances",
        type=Path,
        default=None,
        help="JSON file of a CSO's remittance records to check",
    )
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=None,
        help="Reference time as ISO-8601 (default: current time)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Write loan_metrics.json here instead of printing",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help="Log level (default: INFO)",
    )
    args = parser.parse_args()

    setup_logging(args.log_level, config.log_format)

    try:
        loans = load_records(args.loans, "loans")
    except (OSError, ValueError) as exc:
        logger.error("Cannot read loans: %s", exc)
        sys.exit(1)

    metrics = [compute_loan_metrics(loan, now=args.now, config=config.metrics) for loan in loans]
    not_ready = sum(1 for m in metrics if not m.is_ready)
    if not_ready:
        logger.warning("%d of %d loans have no usable disbursement date", not_ready, len(metrics))

    try:
        if args.output_dir:
            sink = JsonFileSink(args.output_dir, pretty=config.output.pretty_json)
        else:
            sink = ConsoleSink(pretty=True)
        sink.write_batch("loan_metrics", metrics)
        sink.close()
    except SinkError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    if args.remittances:
        try:
            remittances = load_records(args.remittances, "remittance")
        except (OSError, ValueError) as exc:
            logger.error("Cannot read remittances: %s", exc)
            sys.exit(1)

        check = check_outstanding_remittance(remittances, now=args.now, config=config.metrics)
        label = format_remittance_date_label(check.reference_date)
        print(f"\nRemittance for {label}: {check.state.value}")
        if check.blocking:
            print(f"  Outstanding: {format_currency(check.remaining, config.metrics)}")


if __name__ == "__main__":
    main()
