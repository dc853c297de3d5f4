"""Rebalancing Advisor.

Advisory buy/sell suggestions that reduce single-asset concentration and
broaden sector diversification. Nothing here executes trades.
"""

import logging
from collections.abc import Sequence

from portfolio_analytics.data.providers import MarketDataProvider
from portfolio_analytics.models.assessment import (
    RebalanceAction,
    RebalancingSuggestion,
    RebalancingSuggestions,
)
from portfolio_analytics.models.portfolio import Asset, Holding, Portfolio
from portfolio_analytics.models.risk_profile import RiskProfile

from .component_configs.comprehensive_risk_config import ComprehensiveRiskConfig
from .risk_assessment import RiskAssessmentEngine


class RebalancingAdvisor:
    """Suggests trades that bring a portfolio back within risk guidelines."""

    def __init__(
        self,
        config: ComprehensiveRiskConfig | None = None,
        market_data: MarketDataProvider | None = None,
        assessor: RiskAssessmentEngine | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the rebalancing advisor.

        Args:
            config: ComprehensiveRiskConfig with concentration and rebalancing settings
            market_data: Source of candidate assets for new sectors; buys are
                skipped when None
            assessor: Engine used to compute concentration and sector exposure
            logger: Optional logger instance
        """
        self.config: ComprehensiveRiskConfig = config or ComprehensiveRiskConfig()
        self.market_data: MarketDataProvider | None = market_data
        self.logger: logging.Logger = logger or logging.getLogger(__name__)
        self.assessor: RiskAssessmentEngine = assessor or RiskAssessmentEngine(
            self.config, logger=self.logger
        )

    def candidate_sectors(
        self, holdings: Sequence[Holding], profile: RiskProfile | None = None
    ) -> list[str]:
        """Recommended sectors the portfolio does not hold and the owner allows."""
        held = {h.asset.sector.lower() for h in holdings if h.asset.sector}
        excluded = {s.lower() for s in profile.excluded_sectors} if profile else set()

        candidates = [
            sector
            for sector in self.config.rebalancing.recommended_sectors
            if sector.lower() not in held and sector.lower() not in excluded
        ]
        return candidates[: self.config.rebalancing.max_new_sectors]

    def _find_asset(self, sector: str, held_ids: set[str]) -> Asset | None:
        if self.market_data is None:
            return None
        for asset in self.market_data.find_assets_by_sector(sector):
            if asset.id not in held_ids:
                return asset
        return None

    def suggest(
        self, portfolio: Portfolio, profile: RiskProfile | None = None
    ) -> RebalancingSuggestions:
        """Build rebalancing suggestions for a portfolio.

        Args:
            portfolio: Portfolio with current holdings
            profile: Owner's risk profile; only used to skip excluded sectors

        Returns:
            RebalancingSuggestions with sells first, then buys, and the
            estimated risk reduction
        """
        settings = self.config.rebalancing
        holdings = portfolio.holdings
        total_value = portfolio.market_value
        suggestions = []

        concentration = self.assessor.concentration_risk(holdings)
        for violation in concentration.violations:
            suggestions.append(
                RebalancingSuggestion(
                    action=RebalanceAction.SELL,
                    asset_id=violation.asset_id,
                    symbol=violation.symbol,
                    current_weight=violation.exposure,
                    target_weight=violation.limit,
                    suggested_amount=(violation.exposure - violation.limit) * total_value / 100,
                    reason="Reduce concentration risk",
                )
            )

        sector_risk = self.assessor.sector_risk(holdings)
        if total_value > 0 and sector_risk.diversification_score < settings.diversification_trigger:
            held_ids = {h.asset_id for h in holdings}
            for sector in self.candidate_sectors(holdings, profile):
                asset = self._find_asset(sector, held_ids)
                if asset is None:
                    self.logger.debug(f"No available asset for sector {sector}; skipping")
                    continue
                held_ids.add(asset.id)
                suggestions.append(
                    RebalancingSuggestion(
                        action=RebalanceAction.BUY,
                        asset_id=asset.id,
                        symbol=asset.symbol,
                        current_weight=0.0,
                        target_weight=settings.new_position_weight,
                        suggested_amount=total_value * settings.new_position_weight / 100,
                        reason=f"Increase exposure to {sector} sector for diversification",
                    )
                )

        suggestions = suggestions[: settings.max_suggestions]
        sells = sum(1 for s in suggestions if s.action == RebalanceAction.SELL)
        buys = len(suggestions) - sells
        reduction = min(
            settings.max_risk_reduction,
            sells * settings.sell_risk_reduction + buys * settings.buy_risk_reduction,
        )

        self.logger.info(
            f"Rebalancing for {portfolio.id}: {sells} sells, {buys} buys, "
            f"estimated risk reduction {reduction:.1f}"
        )
        return RebalancingSuggestions(suggestions=suggestions, estimated_risk_reduction=reduction)
