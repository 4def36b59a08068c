"""Configuration management for loan-ops."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loan_ops.exceptions import ConfigurationError

# Number of daily installments a disbursed loan is scheduled over.
DAILY_INSTALLMENT_COUNT = 22


@dataclass
class MetricsConfig:
    """Loan metrics and formatting configuration."""

    installment_count: int = DAILY_INSTALLMENT_COUNT
    local_timezone: str = "Africa/Lagos"
    currency_code: str = "NGN"
    currency_symbol: str = "₦"

    def __post_init__(self) -> None:
        if self.installment_count < 0:
            raise ConfigurationError(
                f"installment_count must be non-negative, got {self.installment_count}"
            )

    @property
    def zone(self) -> ZoneInfo:
        """Get the timezone business days are counted in."""
        try:
            return ZoneInfo(self.local_timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigurationError(f"Unknown timezone: {self.local_timezone}") from exc

    def now(self) -> datetime:
        """Get the current time in the configured timezone."""
        return datetime.now(self.zone)


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class ScenarioConfig:
    """Configuration for sample portfolio generation."""

    name: str = "cso_portfolio"
    num_csos: int = 5
    loans_per_cso: int = 10
    history_days: int = 30
    missing_rate: float = 0.05
    partial_rate: float = 0.10
    resolved_rate: float = 0.30
    end_date: datetime | None = None


@dataclass
class LoanOpsConfig:
    """Main configuration for loan-ops."""

    metrics: MetricsConfig = field(default_factory=MetricsConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    scenario: ScenarioConfig | None = None
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LoanOpsConfig":
        """Create config from environment variables."""
        import os

        try:
            installment_count = int(
                os.getenv("INSTALLMENT_COUNT", str(DAILY_INSTALLMENT_COUNT))
            )
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except ValueError as exc:
            raise ConfigurationError(f"Invalid integer in environment: {exc}") from exc

        metrics = MetricsConfig(
            installment_count=installment_count,
            local_timezone=os.getenv("LOCAL_TIMEZONE", "Africa/Lagos"),
            currency_code=os.getenv("CURRENCY_CODE", "NGN"),
            currency_symbol=os.getenv("CURRENCY_SYMBOL", "₦"),
        )
        # Fail early on a bad timezone rather than on first use
        metrics.zone

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in ("standard", "json"):
            raise ConfigurationError(f"LOG_FORMAT must be 'standard' or 'json', got {log_format!r}")

        return cls(
            metrics=metrics,
            output=output,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )
