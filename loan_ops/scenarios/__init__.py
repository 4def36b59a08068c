"""Scenarios for generating realistic microloan portfolios."""

from loan_ops.scenarios.cso_portfolio import CsoPortfolioScenario

__all__ = ["CsoPortfolioScenario"]
