"""Risk Manager.

Service facade over risk profiles, risk limits, risk assessment and
rebalancing. Profile and limit writes pass straight through to the risk
profile store.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from portfolio_analytics.core.analytics_engine import PortfolioAnalyticsEngine, PortfolioData
from portfolio_analytics.core.config import AnalyticsConfig, get_config
from portfolio_analytics.data.data_handler import ProviderGateway
from portfolio_analytics.models.analytics import PerformanceMetrics, RiskMetrics
from portfolio_analytics.models.assessment import (
    RebalancingSuggestions,
    RiskAssessment,
    RiskLimitCheck,
)
from portfolio_analytics.models.risk_profile import RiskLimit, RiskProfile

from .rebalancing import RebalancingAdvisor
from .risk_assessment import RiskAssessmentEngine
from .risk_limits import RiskLimitEvaluator


class RiskManager:
    """Entry point for risk profile management and portfolio risk analysis."""

    def __init__(
        self,
        gateway: ProviderGateway,
        config: AnalyticsConfig | None = None,
        analytics: PortfolioAnalyticsEngine | None = None,
        clock: Callable[[], datetime] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the risk manager.

        Args:
            gateway: Provider gateway, including the risk profile store
            config: AnalyticsConfig; the global configuration when None
            analytics: Analytics engine used to load data and compute metrics
            clock: Returns the current time; injectable for deterministic tests
            logger: Optional logger instance
        """
        self.gateway = gateway
        self.config: AnalyticsConfig = config or get_config()
        self.logger: logging.Logger = logger or logging.getLogger(__name__)
        self.analytics = analytics or PortfolioAnalyticsEngine(
            gateway, self.config, clock, self.logger
        )

        self.assessor = RiskAssessmentEngine(self.config.risk, logger=self.logger)
        self.limit_evaluator = RiskLimitEvaluator(self.logger)
        self.advisor = RebalancingAdvisor(
            self.config.risk, gateway.market_data, self.assessor, self.logger
        )

    # Profile store pass-throughs

    def create_risk_profile(self, profile: RiskProfile) -> RiskProfile:
        """Create or replace a user's risk profile."""
        self.logger.info(f"Saving risk profile for user {profile.user_id}")
        return self.gateway.save_risk_profile(profile)

    def get_risk_profile(self, user_id: str) -> RiskProfile | None:
        return self.gateway.get_risk_profile(user_id)

    def set_risk_limits(self, user_id: str, limits: list[RiskLimit]) -> list[RiskLimit]:
        """Replace a user's risk limits."""
        self.logger.info(f"Saving {len(limits)} risk limits for user {user_id}")
        return self.gateway.save_risk_limits(user_id, limits)

    def get_risk_limits(self, user_id: str) -> list[RiskLimit]:
        return self.gateway.get_risk_limits(user_id)

    # Analysis

    def _profile(self, user_id: str) -> RiskProfile | None:
        if self.gateway.profile_store is None:
            return None
        return self.gateway.get_risk_profile(user_id)

    def _metrics(self, data: PortfolioData) -> tuple[PerformanceMetrics, RiskMetrics]:
        performance = self.analytics.performance.calculate_performance(
            data.portfolio, data.snapshots, data.transactions, data.benchmark_returns
        )
        risk_metrics = self.analytics.performance.calculate_risk_metrics(
            data.portfolio, data.snapshots, data.market_returns, data.benchmark_returns
        )
        return performance, risk_metrics

    def assess_portfolio_risk(
        self, portfolio_id: str, user_id: str | None = None
    ) -> RiskAssessment:
        """Assess a portfolio against its owner's risk profile.

        Args:
            portfolio_id: Portfolio identifier
            user_id: Profile owner; the portfolio owner when None

        Returns:
            RiskAssessment for the portfolio
        """
        data = self.analytics.load(portfolio_id)
        owner = user_id or data.portfolio.owner_id
        profile = self._profile(owner)
        performance, risk_metrics = self._metrics(data)

        return self.assessor.assess(
            data.portfolio,
            performance,
            risk_metrics,
            profile,
            data.returns,
            data.benchmark_returns,
        )

    def check_risk_limits(self, portfolio_id: str, user_id: str | None = None) -> RiskLimitCheck:
        """Evaluate the user's enabled risk limits against a portfolio.

        Args:
            portfolio_id: Portfolio identifier
            user_id: Limit owner; the portfolio owner when None

        Returns:
            RiskLimitCheck with any violations
        """
        data = self.analytics.load(portfolio_id)
        owner = user_id or data.portfolio.owner_id
        limits = self.gateway.get_risk_limits(owner)
        risk_metrics = self.analytics.performance.calculate_risk_metrics(
            data.portfolio, data.snapshots, data.market_returns, data.benchmark_returns
        )

        check = self.limit_evaluator.evaluate(limits, data.portfolio.holdings, risk_metrics)
        if not check.passed:
            self.logger.warning(
                f"Portfolio {portfolio_id} violates {len(check.violations)} risk limits"
            )
        return check

    def generate_rebalancing_suggestions(
        self, portfolio_id: str, user_id: str | None = None
    ) -> RebalancingSuggestions:
        """Suggest trades that reduce concentration and improve diversification.

        A missing risk profile does not fail the request; the profile only
        filters out excluded sectors.

        Args:
            portfolio_id: Portfolio identifier
            user_id: Profile owner; the portfolio owner when None

        Returns:
            RebalancingSuggestions for the portfolio
        """
        data = self.analytics.load(portfolio_id)
        owner = user_id or data.portfolio.owner_id
        profile = self._profile(owner)
        return self.advisor.suggest(data.portfolio, profile)
