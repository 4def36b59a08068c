"""In-memory data stores for maintaining entity relationships."""

from loan_ops.store.portfolio import PortfolioStore

__all__ = ["PortfolioStore"]
