"""ESG Analyzer.

Value-weighted environmental, social and governance scoring for a portfolio,
with heuristic impact estimates and rule-based recommendations.
"""

import logging
import math
from collections.abc import Sequence

from portfolio_analytics.core.config import ESGConfig
from portfolio_analytics.models.analytics import (
    ESGAnalysis,
    ESGHolding,
    ESGRecommendation,
    ImpactMetrics,
)
from portfolio_analytics.models.portfolio import Holding
from portfolio_analytics.utils.math_utils import safe_divide


class ESGAnalyzer:
    """Scores portfolio sustainability from per-asset ESG data."""

    def __init__(
        self,
        config: ESGConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the ESG analyzer.

        Args:
            config: ESGConfig with thresholds and impact coefficients
            logger: Optional logger instance
        """
        self.config: ESGConfig = config or ESGConfig()
        self.logger: logging.Logger = logger or logging.getLogger(__name__)

    def governance_rating(self, score: float) -> str:
        """Map a portfolio score to a governance rating label."""
        for minimum, label in self.config.governance_ratings:
            if score >= minimum:
                return label
        return "Poor"

    def impact_metrics(
        self, total_value: float, environmental: float, social: float
    ) -> ImpactMetrics:
        """Estimate real-world impact from invested value.

        These are linear heuristics in value and the weighted E/S scores, not
        measurements.
        """
        return ImpactMetrics(
            co2_avoided_tons=total_value * self.config.co2_per_dollar * environmental / 100,
            renewable_energy_mwh=(
                total_value * self.config.renewable_mwh_per_dollar * environmental / 100
            ),
            jobs_created=math.floor(total_value * self.config.jobs_per_dollar * social / 100),
            is_estimate=True,
        )

    def analyze(self, holdings: Sequence[Holding]) -> ESGAnalysis:
        """Compute the ESG profile of a set of holdings.

        Args:
            holdings: Portfolio holdings

        Returns:
            ESGAnalysis; an all-zero structure when there is no value
        """
        total_value = sum(h.market_value for h in holdings)
        if not holdings or total_value <= 0:
            return ESGAnalysis()

        environmental = social = governance = composite = 0.0
        covered_value = 0.0
        sustainable_value = 0.0
        carbon_footprint = 0.0
        scored: list[ESGHolding] = []

        for holding in holdings:
            esg = holding.asset.esg
            if esg is None:
                continue

            weight = holding.market_value / total_value
            environmental += esg.environmental * weight
            social += esg.social * weight
            governance += esg.governance * weight
            composite += esg.composite * weight

            covered_value += holding.market_value
            if esg.composite >= self.config.sustainable_threshold:
                sustainable_value += holding.market_value
            if esg.carbon_footprint is not None:
                carbon_footprint += esg.carbon_footprint * holding.quantity

            scored.append(
                ESGHolding(
                    symbol=holding.asset.symbol,
                    name=holding.asset.name,
                    esg_score=esg.composite,
                    environmental=esg.environmental,
                    social=esg.social,
                    governance=esg.governance,
                )
            )

        if len(scored) < len(holdings):
            self.logger.warning(
                f"ESG data missing for {len(holdings) - len(scored)} of {len(holdings)} holdings"
            )

        ranked = sorted(scored, key=lambda h: h.esg_score, reverse=True)
        ascending = list(reversed(ranked))

        analysis = ESGAnalysis(
            portfolio_score=composite,
            environmental_score=environmental,
            social_score=social,
            governance_score=governance,
            carbon_footprint=carbon_footprint,
            sustainable_investment_percentage=safe_divide(sustainable_value, total_value) * 100,
            coverage_percentage=safe_divide(covered_value, total_value) * 100,
            governance_rating=self.governance_rating(composite),
            impact_metrics=self.impact_metrics(total_value, environmental, social),
            top_esg_holdings=ranked[: self.config.top_holdings_count],
            bottom_esg_holdings=ascending[: self.config.bottom_holdings_count],
            recommendations=self.recommendations(ascending, composite),
        )

        self.logger.debug(
            f"ESG score {composite:.2f} ({analysis.governance_rating}), "
            f"coverage {analysis.coverage_percentage:.1f}%"
        )
        return analysis

    def recommendations(
        self, holdings: Sequence[ESGHolding], portfolio_score: float
    ) -> list[ESGRecommendation]:
        """Suggest divestments, engagement and a clean-energy investment.

        Args:
            holdings: Scored holdings, lowest score first
            portfolio_score: Value-weighted composite score

        Returns:
            Recommendations in divest, improve, invest order
        """
        sustainable = self.config.sustainable_threshold
        recommendations = []

        divest = [h for h in holdings if h.esg_score < self.config.divest_threshold]
        for holding in divest[: self.config.max_divest_recommendations]:
            recommendations.append(
                ESGRecommendation(
                    type="divest",
                    asset_symbol=holding.symbol,
                    asset_name=holding.name,
                    reason=(
                        f"Low ESG score ({holding.esg_score:g}/100) "
                        "drags down portfolio sustainability"
                    ),
                    potential_impact=round((portfolio_score - holding.esg_score) * 0.1),
                )
            )

        improve = [
            h for h in holdings if self.config.divest_threshold <= h.esg_score < sustainable
        ]
        for holding in improve[: self.config.max_improve_recommendations]:
            recommendations.append(
                ESGRecommendation(
                    type="improve",
                    asset_symbol=holding.symbol,
                    asset_name=holding.name,
                    reason="Moderate ESG score could be improved through engagement",
                    potential_impact=round((sustainable - holding.esg_score) * 0.05),
                )
            )

        if portfolio_score < sustainable:
            recommendations.append(
                ESGRecommendation(
                    type="invest",
                    asset_symbol=self.config.clean_energy_symbol,
                    asset_name=self.config.clean_energy_name,
                    reason="Boost portfolio ESG score with clean energy exposure",
                    potential_impact=self.config.clean_energy_impact,
                )
            )

        return recommendations
