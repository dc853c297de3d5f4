"""Risk Limit Evaluation.

Checks user-defined risk limits against live portfolio metrics.
"""

import logging
from collections.abc import Sequence

from portfolio_analytics.models.analytics import RiskMetrics
from portfolio_analytics.models.assessment import LimitViolation, RiskLimitCheck
from portfolio_analytics.models.portfolio import Holding
from portfolio_analytics.models.risk_profile import LimitOperator, LimitType, RiskLimit
from portfolio_analytics.portfolio.allocation import GroupingDimension, group_values
from portfolio_analytics.utils.math_utils import safe_divide

EQUALITY_TOLERANCE = 0.01


def compare(value: float, operator: LimitOperator, threshold: float) -> bool:
    """Return True when ``value`` breaches the limit."""
    op = LimitOperator(operator)
    if op == LimitOperator.GREATER_THAN:
        return value > threshold
    if op == LimitOperator.LESS_THAN:
        return value < threshold
    return abs(value - threshold) < EQUALITY_TOLERANCE


def _group_exposure(
    holdings: Sequence[Holding], dimension: GroupingDimension, name: str
) -> float:
    grouped = group_values(holdings, dimension)
    total = float(grouped.sum()) if len(grouped) else 0.0
    matches = [value for key, value in grouped.items() if str(key).lower() == name.lower()]
    return safe_divide(sum(matches), total) * 100


class RiskLimitEvaluator:
    """Evaluates enabled risk limits against holdings and risk metrics."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger: logging.Logger = logger or logging.getLogger(__name__)

    def metric_value(
        self, limit: RiskLimit, holdings: Sequence[Holding], risk_metrics: RiskMetrics
    ) -> float:
        """Current value of the metric a limit refers to.

        Args:
            limit: Limit whose metric to look up
            holdings: Portfolio holdings
            risk_metrics: Current risk metrics

        Returns:
            Metric value in percent
        """
        limit_type = LimitType(limit.limit_type)

        if limit_type == LimitType.POSITION:
            total = sum(h.market_value for h in holdings)
            value = sum(h.market_value for h in holdings if h.asset.symbol == limit.metric)
            return safe_divide(value, total) * 100
        if limit_type == LimitType.SECTOR:
            return _group_exposure(holdings, GroupingDimension.SECTOR, limit.metric)
        if limit_type == LimitType.ASSET_TYPE:
            return _group_exposure(holdings, GroupingDimension.ASSET_TYPE, limit.metric)
        if limit_type == LimitType.VOLATILITY:
            return risk_metrics.volatility_1y
        return risk_metrics.value_at_risk_95

    def evaluate(
        self,
        limits: Sequence[RiskLimit],
        holdings: Sequence[Holding],
        risk_metrics: RiskMetrics,
    ) -> RiskLimitCheck:
        """Check every enabled limit.

        Args:
            limits: User's risk limits
            holdings: Portfolio holdings
            risk_metrics: Current risk metrics

        Returns:
            RiskLimitCheck listing violations; passed when there are none
        """
        violations = []

        for limit in limits:
            if not limit.enabled:
                continue

            value = self.metric_value(limit, holdings, risk_metrics)
            if compare(value, limit.operator, limit.threshold):
                limit_type = LimitType(limit.limit_type).value
                operator = LimitOperator(limit.operator).value
                message = (
                    f"{limit_type} limit violated: {limit.metric} is {value:.2f} "
                    f"(limit: {operator} {limit.threshold})"
                )
                self.logger.debug(message)
                violations.append(
                    LimitViolation(limit=limit, current_value=value, message=message)
                )

        return RiskLimitCheck(violations=violations, passed=not violations)
