"""Scenarios for generating realistic rental data sets."""

from rental_status.scenarios.lease_portfolio import LeasePortfolioScenario

__all__ = ["LeasePortfolioScenario"]
