"""Risk Assessment Engine.

Single-pass evaluation of a portfolio's risk exposures, its overall risk
score and how well that score fits the owner's declared risk profile.
"""

import logging
from collections.abc import Sequence

import pandas as pd

from portfolio_analytics.models.analytics import PerformanceMetrics, RiskMetrics
from portfolio_analytics.models.assessment import (
    AlertSeverity,
    Alignment,
    ConcentrationRisk,
    ConcentrationViolation,
    CurrencyExposure,
    CurrencyRisk,
    IlliquidHolding,
    LiquidityRisk,
    MarketRisk,
    RiskAlert,
    RiskAssessment,
    RiskCategory,
    RiskExposures,
    RiskLevel,
    SectorConcentration,
    SectorRisk,
)
from portfolio_analytics.models.portfolio import AssetType, Holding, Portfolio
from portfolio_analytics.models.risk_profile import RiskProfile, RiskTolerance
from portfolio_analytics.portfolio.allocation import GroupingDimension, group_values
from portfolio_analytics.utils.math_utils import safe_divide, volatility

from .component_configs.comprehensive_risk_config import ComprehensiveRiskConfig
from .stress_testing import StressTester


def tracking_error(
    portfolio_returns: pd.Series | None, benchmark_returns: pd.Series | None
) -> float:
    """Annualized volatility of the return difference to the benchmark, percent."""
    if portfolio_returns is None or benchmark_returns is None:
        return 0.0
    aligned = pd.concat([portfolio_returns, benchmark_returns], axis=1, join='inner').dropna()
    if len(aligned) < 2:
        return 0.0
    return volatility(aligned.iloc[:, 0] - aligned.iloc[:, 1])


class RiskAssessmentEngine:
    """Computes exposures, the overall risk score, alignment and alerts."""

    def __init__(
        self,
        config: ComprehensiveRiskConfig | None = None,
        stress_tester: StressTester | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the risk assessment engine.

        Args:
            config: ComprehensiveRiskConfig with thresholds and weights
            stress_tester: StressTester to run; built from config when None
            logger: Optional logger instance
        """
        self.config: ComprehensiveRiskConfig = config or ComprehensiveRiskConfig()
        self.logger: logging.Logger = logger or logging.getLogger(__name__)
        self.stress_tester: StressTester = stress_tester or StressTester(
            self.config.stress_tests, self.logger
        )

    # Exposures

    def concentration_risk(self, holdings: Sequence[Holding]) -> ConcentrationRisk:
        """Single-asset concentration and limit violations."""
        settings = self.config.concentration
        total_value = sum(h.market_value for h in holdings)
        if not holdings or total_value <= 0:
            return ConcentrationRisk(single_asset_limit=settings.single_asset_limit)

        ranked = sorted(holdings, key=lambda h: h.market_value, reverse=True)
        exposures = [h.market_value / total_value * 100 for h in ranked]
        top_holding = exposures[0]
        top5 = sum(exposures[:5])

        if top_holding > settings.high_top_holding or top5 > settings.high_top5:
            level = RiskLevel.HIGH
        elif top_holding > settings.medium_top_holding or top5 > settings.medium_top5:
            level = RiskLevel.MEDIUM
        else:
            level = RiskLevel.LOW

        violations = [
            ConcentrationViolation(
                asset_id=holding.asset_id,
                symbol=holding.asset.symbol,
                exposure=exposure,
                limit=settings.single_asset_limit,
                value=holding.market_value,
            )
            for holding, exposure in zip(ranked, exposures)
            if exposure > settings.single_asset_limit
        ]

        return ConcentrationRisk(
            level=level,
            top_holding_exposure=top_holding,
            top5_exposure=top5,
            single_asset_limit=settings.single_asset_limit,
            violations=violations,
        )

    def market_risk(
        self,
        performance: PerformanceMetrics,
        risk_metrics: RiskMetrics,
        portfolio_returns: pd.Series | None = None,
        benchmark_returns: pd.Series | None = None,
    ) -> MarketRisk:
        """Market sensitivity of the portfolio.

        The systematic/specific split is a fixed approximation until a factor
        model is available.
        """
        beta = performance.beta
        if beta == 0:
            self.logger.debug("Beta unavailable, assuming market beta of 1.0")
            beta = 1.0

        systematic = self.config.systematic_risk_share
        return MarketRisk(
            beta=beta,
            correlation=risk_metrics.correlation.to_benchmark,
            systematic_risk=systematic,
            specific_risk=1.0 - systematic,
            tracking_error=tracking_error(portfolio_returns, benchmark_returns),
        )

    def liquidity_days(self, holding: Holding) -> int:
        """Estimated days needed to liquidate a holding."""
        settings = self.config.liquidity
        asset = holding.asset
        small_crypto = (
            asset.asset_type == AssetType.CRYPTO
            and asset.market_cap < settings.crypto_min_market_cap
        )
        if small_crypto:
            return settings.crypto_liquidation_days
        if asset.volume < settings.min_daily_volume:
            return settings.low_volume_liquidation_days
        return settings.liquid_liquidation_days

    def liquidity_risk(self, holdings: Sequence[Holding]) -> LiquidityRisk:
        """Share of value that would take more than a day to sell."""
        settings = self.config.liquidity
        total_value = sum(h.market_value for h in holdings)
        if not holdings or total_value <= 0:
            return LiquidityRisk()

        illiquid_value = 0.0
        weighted_volume = 0.0
        illiquid_holdings = []

        for holding in holdings:
            weighted_volume += holding.asset.volume * holding.market_value
            days = self.liquidity_days(holding)
            if days > settings.liquid_liquidation_days:
                illiquid_value += holding.market_value
                illiquid_holdings.append(
                    IlliquidHolding(
                        symbol=holding.asset.symbol,
                        percentage=holding.market_value / total_value * 100,
                        estimated_liquidation_days=days,
                    )
                )

        illiquid_percentage = illiquid_value / total_value * 100
        if illiquid_percentage > settings.high_illiquid_percentage:
            level = RiskLevel.HIGH
        elif illiquid_percentage > settings.medium_illiquid_percentage:
            level = RiskLevel.MEDIUM
        else:
            level = RiskLevel.LOW

        return LiquidityRisk(
            level=level,
            illiquid_percentage=illiquid_percentage,
            average_daily_volume=weighted_volume / total_value,
            liquidation_time=illiquid_percentage / settings.liquidation_rate,
            illiquid_holdings=illiquid_holdings,
        )

    def currency_risk(self, holdings: Sequence[Holding]) -> CurrencyRisk:
        """Exposure by asset currency; nothing is treated as hedged."""
        base = self.config.base_currency
        total_value = sum(h.market_value for h in holdings)
        if not holdings or total_value <= 0:
            return CurrencyRisk()

        by_currency: dict[str, float] = {}
        for holding in holdings:
            currency = holding.asset.currency or base
            by_currency[currency] = by_currency.get(currency, 0.0) + holding.market_value

        exposures = [
            CurrencyExposure(currency=currency, exposure=value / total_value * 100, hedged=False)
            for currency, value in sorted(by_currency.items(), key=lambda kv: kv[1], reverse=True)
        ]
        foreign = sum(e.exposure for e in exposures if e.currency != base)

        return CurrencyRisk(exposures=exposures, unhedged_exposure=foreign)

    def sector_risk(self, holdings: Sequence[Holding]) -> SectorRisk:
        """Sector weights against a flat benchmark weight per sector."""
        by_sector = group_values(holdings, GroupingDimension.SECTOR)
        total_value = float(by_sector.sum()) if len(by_sector) else 0.0
        if total_value <= 0:
            return SectorRisk()

        benchmark = self.config.sector_benchmark
        concentrations = [
            SectorConcentration(
                sector=str(sector),
                exposure=value / total_value * 100,
                benchmark=benchmark,
                overweight=value / total_value * 100 - benchmark,
            )
            for sector, value in by_sector.items()
        ]
        largest = max(c.exposure for c in concentrations)
        score = min(100.0, len(concentrations) * 10 + (100 - largest))

        return SectorRisk(concentrations=concentrations, diversification_score=score)

    def exposures(
        self,
        holdings: Sequence[Holding],
        performance: PerformanceMetrics,
        risk_metrics: RiskMetrics,
        portfolio_returns: pd.Series | None = None,
        benchmark_returns: pd.Series | None = None,
    ) -> RiskExposures:
        return RiskExposures(
            concentration=self.concentration_risk(holdings),
            market=self.market_risk(
                performance, risk_metrics, portfolio_returns, benchmark_returns
            ),
            liquidity=self.liquidity_risk(holdings),
            currency=self.currency_risk(holdings),
            sector=self.sector_risk(holdings),
        )

    # Scoring

    def overall_risk_score(self, exposures: RiskExposures, volatility_pct: float) -> float:
        """Weighted 0-100 risk score.

        Args:
            exposures: Computed exposures
            volatility_pct: Annualized portfolio volatility in percent

        Returns:
            Overall risk score
        """
        scoring = self.config.scoring
        concentration_level = RiskLevel(exposures.concentration.level).value
        liquidity_level = RiskLevel(exposures.liquidity.level).value
        concentration = scoring.concentration_level_scores[concentration_level]
        liquidity = scoring.liquidity_level_scores[liquidity_level]
        volatility_score = min(100.0, volatility_pct * scoring.volatility_multiplier)
        market = min(100.0, abs(exposures.market.beta - 1) * scoring.beta_multiplier)
        sector = 100 - exposures.sector.diversification_score

        return (
            concentration * scoring.concentration_weight
            + volatility_score * scoring.volatility_weight
            + liquidity * scoring.liquidity_weight
            + market * scoring.market_weight
            + sector * scoring.sector_weight
        )

    def risk_category(self, score: float) -> RiskCategory:
        """Bucket a 0-100 score into a risk category."""
        scoring = self.config.scoring
        if score < scoring.low_category_max:
            return RiskCategory.LOW
        if score < scoring.medium_category_max:
            return RiskCategory.MEDIUM
        if score < scoring.high_category_max:
            return RiskCategory.HIGH
        return RiskCategory.VERY_HIGH

    def target_score(self, profile: RiskProfile) -> float:
        """Risk score matching a profile's declared tolerance."""
        tolerance = RiskTolerance(profile.risk_tolerance).value
        return self.config.alignment.tolerance_targets[tolerance]

    def alignment(
        self,
        score: float,
        profile: RiskProfile | None,
        holdings: Sequence[Holding] = (),
        max_drawdown: float = 0.0,
    ) -> Alignment:
        """Compare the overall score with the profile's target.

        Drawdown tolerance and excluded sectors add findings but do not change
        the alignment score.

        Args:
            score: Overall risk score
            profile: Owner's risk profile; a neutral result when None
            holdings: Portfolio holdings, checked against excluded sectors
            max_drawdown: Historical max drawdown in percent

        Returns:
            Alignment score with misalignments and recommendations
        """
        if profile is None:
            return Alignment()

        settings = self.config.alignment
        difference = score - self.target_score(profile)
        alignment_score = max(0.0, 100 - abs(difference) * settings.penalty_per_point)

        misalignments = []
        recommendations = []

        if difference > settings.misalignment_threshold:
            misalignments.append("Portfolio risk exceeds your risk tolerance")
            recommendations.append("Consider reducing exposure to high-risk assets")
            recommendations.append("Increase allocation to bonds or stable assets")
        elif difference < -settings.misalignment_threshold:
            misalignments.append("Portfolio is too conservative for your risk tolerance")
            recommendations.append("Consider increasing equity allocation")
            recommendations.append("Add growth-oriented assets to the portfolio")

        tolerance = profile.max_drawdown_tolerance
        if tolerance is not None and max_drawdown > tolerance:
            misalignments.append(
                f"Historical max drawdown of {max_drawdown:.1f}% exceeds your "
                f"tolerance of {tolerance:.1f}%"
            )
            recommendations.append("Reduce exposure to volatile assets to limit drawdowns")

        excluded = {sector.lower() for sector in profile.excluded_sectors}
        held_excluded = sorted(
            {
                h.asset.sector
                for h in holdings
                if h.asset.sector and h.asset.sector.lower() in excluded
            }
        )
        if held_excluded:
            misalignments.append(
                f"Portfolio holds assets in excluded sectors: {', '.join(held_excluded)}"
            )
            recommendations.append("Divest holdings in sectors you have chosen to exclude")

        return Alignment(
            score=alignment_score,
            misalignments=misalignments,
            recommendations=recommendations,
        )

    def alerts(
        self, exposures: RiskExposures, score: float, profile: RiskProfile | None
    ) -> list[RiskAlert]:
        """Alerts for the current assessment, generated fresh on each call."""
        settings = self.config.alignment
        alerts = []

        if exposures.concentration.level == RiskLevel.HIGH:
            alerts.append(
                RiskAlert(
                    id="concentration-high",
                    severity=AlertSeverity.WARNING,
                    type="concentration",
                    title="High concentration risk detected",
                    description=(
                        f"Your top holding represents "
                        f"{exposures.concentration.top_holding_exposure:.1f}% of your portfolio"
                    ),
                    action_required="Consider diversifying to reduce single-asset exposure",
                )
            )

        if exposures.liquidity.illiquid_percentage > settings.illiquid_alert_threshold:
            alerts.append(
                RiskAlert(
                    id="liquidity-warning",
                    severity=AlertSeverity.WARNING,
                    type="liquidity",
                    title="Limited liquidity in portfolio",
                    description=(
                        f"{exposures.liquidity.illiquid_percentage:.1f}% of your portfolio "
                        "may be difficult to sell quickly"
                    ),
                    action_required="Maintain adequate cash reserves for emergencies",
                )
            )

        if profile is not None and abs(score - self.target_score(profile)) > (
            settings.mismatch_alert_threshold
        ):
            alerts.append(
                RiskAlert(
                    id="profile-mismatch",
                    severity=AlertSeverity.CRITICAL,
                    type="profile",
                    title="Portfolio risk doesn't match your profile",
                    description=(
                        "Your portfolio risk level significantly differs from your "
                        "stated risk tolerance"
                    ),
                    action_required=(
                        "Review and rebalance your portfolio or update your risk profile"
                    ),
                )
            )

        return alerts

    def assess(
        self,
        portfolio: Portfolio,
        performance: PerformanceMetrics,
        risk_metrics: RiskMetrics,
        profile: RiskProfile | None = None,
        portfolio_returns: pd.Series | None = None,
        benchmark_returns: pd.Series | None = None,
    ) -> RiskAssessment:
        """Run the full risk assessment.

        Args:
            portfolio: Portfolio with current holdings
            performance: Performance metrics for the portfolio
            risk_metrics: Risk metrics for the portfolio
            profile: Owner's risk profile, if one exists
            portfolio_returns: Daily portfolio returns for tracking error
            benchmark_returns: Daily benchmark returns for tracking error

        Returns:
            RiskAssessment with exposures, score, category, alignment, stress
            test results and alerts
        """
        holdings = portfolio.holdings
        exposures = self.exposures(
            holdings, performance, risk_metrics, portfolio_returns, benchmark_returns
        )
        score = self.overall_risk_score(exposures, performance.volatility)
        category = self.risk_category(score)

        if profile is None:
            self.logger.warning(
                f"No risk profile for portfolio {portfolio.id}; alignment is neutral"
            )

        assessment = RiskAssessment(
            portfolio_id=portfolio.id,
            overall_risk_score=score,
            risk_category=category,
            alignment=self.alignment(score, profile, holdings, risk_metrics.max_drawdown.value),
            exposures=exposures,
            stress_tests=self.stress_tester.run(holdings),
            alerts=self.alerts(exposures, score, profile),
        )

        self.logger.info(
            f"Risk assessment for {portfolio.id}: score={score:.2f} ({category.value}), "
            f"{len(assessment.alerts)} alerts"
        )
        return assessment
