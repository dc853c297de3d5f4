"""Tests for the risk assessment engine.

This module contains tests for the individual exposures, the weighted risk
score and its categories, profile alignment, alerts and the full assessment.
"""

import logging
from collections.abc import Callable

import numpy as np
import pandas as pd
import pytest

from portfolio_analytics.models.analytics import PerformanceMetrics, RiskMetrics
from portfolio_analytics.models.assessment import RiskCategory, RiskLevel
from portfolio_analytics.models.portfolio import Asset, AssetType, Holding, Portfolio
from portfolio_analytics.models.risk_profile import RiskProfile, RiskTolerance
from portfolio_analytics.risk_management.risk_assessment import (
    RiskAssessmentEngine,
    tracking_error,
)
from portfolio_analytics.utils.math_utils import volatility


@pytest.fixture
def engine() -> RiskAssessmentEngine:
    """Risk assessment engine with default configuration."""
    return RiskAssessmentEngine()


class TestConcentrationRisk:
    """Test suite for single-asset concentration."""

    def test_two_holdings_are_highly_concentrated(
        self, engine: RiskAssessmentEngine, two_holdings: tuple[Holding, ...]
    ) -> None:
        """Test a 70% top holding is high risk and breaches the 25% limit."""
        risk = engine.concentration_risk(two_holdings)

        assert risk.level == RiskLevel.HIGH
        assert risk.top_holding_exposure == pytest.approx(70.0)
        assert risk.top5_exposure == pytest.approx(100.0)
        assert risk.violations[0].symbol == "AAA"
        assert risk.violations[0].exposure == pytest.approx(70.0)
        assert risk.violations[0].limit == 25.0
        assert risk.violations[0].value == pytest.approx(70_000.0)
        assert [v.symbol for v in risk.violations] == ["AAA", "BBB"]

    def test_diversified_holdings(
        self, engine: RiskAssessmentEngine, make_asset: Callable[..., Asset]
    ) -> None:
        """Test ten equal positions are low risk with no violations."""
        holdings = [Holding(asset=make_asset(f"a{i}"), quantity=10) for i in range(10)]
        risk = engine.concentration_risk(holdings)

        assert risk.level == RiskLevel.LOW
        assert risk.top_holding_exposure == pytest.approx(10.0)
        assert risk.top5_exposure == pytest.approx(50.0)
        assert risk.violations == []

    def test_medium_level(
        self, engine: RiskAssessmentEngine, make_asset: Callable[..., Asset]
    ) -> None:
        """Test a top5 share between 60% and 80% is medium risk."""
        holdings = [Holding(asset=make_asset(f"a{i}"), quantity=10) for i in range(7)]
        risk = engine.concentration_risk(holdings)

        assert risk.top5_exposure == pytest.approx(500 / 7)
        assert risk.level == RiskLevel.MEDIUM

    def test_single_holding(self, engine: RiskAssessmentEngine, tech_asset: Asset) -> None:
        """Test one holding at 100% is high risk and breaches the limit."""
        risk = engine.concentration_risk([Holding(asset=tech_asset, quantity=10)])

        assert risk.level == RiskLevel.HIGH
        assert risk.top_holding_exposure == pytest.approx(100.0)
        assert [v.symbol for v in risk.violations] == ["AAA"]

    def test_empty(self, engine: RiskAssessmentEngine) -> None:
        """Test no holdings give a low, empty result."""
        risk = engine.concentration_risk([])

        assert risk.level == RiskLevel.LOW
        assert risk.top_holding_exposure == 0.0
        assert risk.violations == []


class TestLiquidityRisk:
    """Test suite for liquidity estimates."""

    @pytest.fixture
    def mixed_holdings(self, make_asset: Callable[..., Asset]) -> list[Holding]:
        """Liquid stock 60%, small crypto 25%, thinly traded stock 15%."""
        return [
            Holding(asset=make_asset("liquid"), quantity=600),
            Holding(
                asset=make_asset("coin", asset_type=AssetType.CRYPTO, market_cap=500_000.0),
                quantity=250,
            ),
            Holding(asset=make_asset("thin", volume=50_000.0), quantity=150),
        ]

    def test_liquidation_days(
        self, engine: RiskAssessmentEngine, mixed_holdings: list[Holding]
    ) -> None:
        """Test each holding gets the days for its liquidity class."""
        days = [engine.liquidity_days(h) for h in mixed_holdings]
        assert days == [1, 7, 5]

    def test_illiquid_share(
        self, engine: RiskAssessmentEngine, mixed_holdings: list[Holding]
    ) -> None:
        """Test 40% illiquid is high risk and takes about four days to sell."""
        risk = engine.liquidity_risk(mixed_holdings)

        assert risk.level == RiskLevel.HIGH
        assert risk.illiquid_percentage == pytest.approx(40.0)
        assert risk.liquidation_time == pytest.approx(4.0)
        assert [h.symbol for h in risk.illiquid_holdings] == ["COIN", "THIN"]
        assert risk.illiquid_holdings[0].estimated_liquidation_days == 7

    def test_value_weighted_volume(
        self, engine: RiskAssessmentEngine, mixed_holdings: list[Holding]
    ) -> None:
        """Test average daily volume is weighted by holding value."""
        risk = engine.liquidity_risk(mixed_holdings)
        expected = (10_000_000 * 60_000 + 10_000_000 * 25_000 + 50_000 * 15_000) / 100_000
        assert risk.average_daily_volume == pytest.approx(expected)

    def test_liquid_portfolio(
        self, engine: RiskAssessmentEngine, two_holdings: tuple[Holding, ...]
    ) -> None:
        """Test large, heavily traded stocks carry no liquidity risk."""
        risk = engine.liquidity_risk(two_holdings)

        assert risk.level == RiskLevel.LOW
        assert risk.illiquid_percentage == 0.0
        assert risk.illiquid_holdings == []


class TestCurrencyAndSectorRisk:
    """Test suite for currency and sector exposures."""

    def test_currency_exposure(
        self, engine: RiskAssessmentEngine, make_asset: Callable[..., Asset]
    ) -> None:
        """Test value outside the base currency counts as unhedged."""
        holdings = [
            Holding(asset=make_asset("us"), quantity=750),
            Holding(asset=make_asset("eu", currency="EUR"), quantity=250),
        ]
        risk = engine.currency_risk(holdings)

        assert [e.currency for e in risk.exposures] == ["USD", "EUR"]
        assert risk.exposures[1].exposure == pytest.approx(25.0)
        assert all(not e.hedged for e in risk.exposures)
        assert risk.unhedged_exposure == pytest.approx(25.0)

    def test_sector_diversification(
        self, engine: RiskAssessmentEngine, two_holdings: tuple[Holding, ...]
    ) -> None:
        """Test two sectors with a 70% leader score 50."""
        risk = engine.sector_risk(two_holdings)
        by_sector = {c.sector: c for c in risk.concentrations}

        assert risk.diversification_score == pytest.approx(50.0)
        assert by_sector["Technology"].exposure == pytest.approx(70.0)
        assert by_sector["Technology"].overweight == pytest.approx(60.0)
        assert by_sector["Energy"].benchmark == 10.0

    def test_sector_score_capped(
        self, engine: RiskAssessmentEngine, make_asset: Callable[..., Asset]
    ) -> None:
        """Test many small sectors cap the score at 100."""
        holdings = [
            Holding(asset=make_asset(f"a{i}", sector=f"Sector {i}"), quantity=10)
            for i in range(12)
        ]
        assert engine.sector_risk(holdings).diversification_score == 100.0


class TestMarketRisk:
    """Test suite for market sensitivity."""

    def test_beta_fallback(self, engine: RiskAssessmentEngine) -> None:
        """Test an unknown beta is treated as market beta."""
        risk = engine.market_risk(PerformanceMetrics(beta=0.0), RiskMetrics())

        assert risk.beta == 1.0
        assert risk.systematic_risk == pytest.approx(0.7)
        assert risk.specific_risk == pytest.approx(0.3)
        assert risk.tracking_error == 0.0

    def test_tracking_error(self) -> None:
        """Test tracking error is the volatility of the return difference."""
        rng = np.random.default_rng(5)
        portfolio_returns = pd.Series(rng.normal(0, 0.01, 60))
        benchmark_returns = pd.Series(rng.normal(0, 0.01, 60))

        assert tracking_error(portfolio_returns, benchmark_returns) == pytest.approx(
            volatility(portfolio_returns - benchmark_returns)
        )
        assert tracking_error(portfolio_returns, portfolio_returns) == pytest.approx(0.0)
        assert tracking_error(None, benchmark_returns) == 0.0


class TestScoring:
    """Test suite for the overall risk score and its categories."""

    @pytest.mark.parametrize(
        "score,category",
        [
            (0.0, RiskCategory.LOW),
            (24.999, RiskCategory.LOW),
            (25.0, RiskCategory.MEDIUM),
            (49.999, RiskCategory.MEDIUM),
            (50.0, RiskCategory.HIGH),
            (74.999, RiskCategory.HIGH),
            (75.0, RiskCategory.VERY_HIGH),
        ],
    )
    def test_category_boundaries(
        self, engine: RiskAssessmentEngine, score: float, category: RiskCategory
    ) -> None:
        """Test each score falls in the documented category."""
        assert engine.risk_category(score) == category

    def test_weighted_score(
        self, engine: RiskAssessmentEngine, two_holdings: tuple[Holding, ...]
    ) -> None:
        """Test the components combine with the configured weights."""
        exposures = engine.exposures(two_holdings, PerformanceMetrics(beta=1.2), RiskMetrics())
        score = engine.overall_risk_score(exposures, 10.0)

        # concentration 80, volatility 20, liquidity 10, market 10, sector 50
        assert score == pytest.approx(80 * 0.25 + 20 * 0.3 + 10 * 0.15 + 10 * 0.2 + 50 * 0.1)

    def test_volatility_component_capped(
        self, engine: RiskAssessmentEngine, two_holdings: tuple[Holding, ...]
    ) -> None:
        """Test volatility above 50% contributes at most 100 points."""
        exposures = engine.exposures(two_holdings, PerformanceMetrics(beta=1.0), RiskMetrics())
        assert engine.overall_risk_score(exposures, 60.0) == pytest.approx(
            engine.overall_risk_score(exposures, 500.0)
        )


class TestAlignment:
    """Test suite for risk profile alignment."""

    def test_exact_match(self, engine: RiskAssessmentEngine, moderate_profile: RiskProfile) -> None:
        """Test a moderate profile at score 50 is fully aligned."""
        alignment = engine.alignment(50.0, moderate_profile)

        assert alignment.score == 100.0
        assert alignment.misalignments == []
        assert alignment.recommendations == []

    def test_too_risky(self, engine: RiskAssessmentEngine, moderate_profile: RiskProfile) -> None:
        """Test a score far above target is reported as excess risk."""
        alignment = engine.alignment(75.0, moderate_profile)

        assert alignment.score == pytest.approx(50.0)
        assert alignment.misalignments == ["Portfolio risk exceeds your risk tolerance"]
        assert len(alignment.recommendations) == 2

    def test_too_conservative(self, engine: RiskAssessmentEngine) -> None:
        """Test a score far below an aggressive target is too conservative."""
        profile = RiskProfile(user_id="u", risk_tolerance=RiskTolerance.AGGRESSIVE)
        alignment = engine.alignment(40.0, profile)

        assert alignment.score == pytest.approx(30.0)
        assert alignment.misalignments == [
            "Portfolio is too conservative for your risk tolerance"
        ]

    def test_alignment_floor(self, engine: RiskAssessmentEngine) -> None:
        """Test the alignment score never drops below 0."""
        profile = RiskProfile(user_id="u", risk_tolerance=RiskTolerance.VERY_AGGRESSIVE)
        assert engine.alignment(0.0, profile).score == 0.0

    def test_drawdown_and_excluded_sectors(
        self, engine: RiskAssessmentEngine, two_holdings: tuple[Holding, ...]
    ) -> None:
        """Test drawdown and excluded-sector findings leave the score unchanged."""
        profile = RiskProfile(
            user_id="u",
            risk_tolerance=RiskTolerance.MODERATE,
            max_drawdown_tolerance=10.0,
            excluded_sectors=["energy"],
        )
        alignment = engine.alignment(50.0, profile, two_holdings, max_drawdown=15.0)

        assert alignment.score == 100.0
        assert alignment.misalignments == [
            "Historical max drawdown of 15.0% exceeds your tolerance of 10.0%",
            "Portfolio holds assets in excluded sectors: Energy",
        ]
        assert len(alignment.recommendations) == 2

    def test_no_profile(self, engine: RiskAssessmentEngine) -> None:
        """Test a missing profile yields a neutral alignment."""
        alignment = engine.alignment(80.0, None)

        assert alignment.score == 50.0
        assert alignment.misalignments == []


class TestAlerts:
    """Test suite for risk alerts."""

    def test_concentration_and_profile_alerts(
        self,
        engine: RiskAssessmentEngine,
        two_holdings: tuple[Holding, ...],
        moderate_profile: RiskProfile,
    ) -> None:
        """Test high concentration and a large profile gap raise alerts."""
        exposures = engine.exposures(two_holdings, PerformanceMetrics(), RiskMetrics())
        alerts = engine.alerts(exposures, 80.0, moderate_profile)

        assert [a.id for a in alerts] == ["concentration-high", "profile-mismatch"]
        assert alerts[0].severity == "warning"
        assert "70.0%" in alerts[0].description
        assert alerts[1].severity == "critical"

    def test_liquidity_alert(
        self, engine: RiskAssessmentEngine, make_asset: Callable[..., Asset]
    ) -> None:
        """Test more than 20% illiquid value raises a liquidity alert."""
        holdings = [
            Holding(asset=make_asset(f"liquid{i}"), quantity=10) for i in range(7)
        ] + [Holding(asset=make_asset(f"thin{i}", volume=1_000.0), quantity=10) for i in range(3)]
        exposures = engine.exposures(holdings, PerformanceMetrics(), RiskMetrics())
        alerts = engine.alerts(exposures, 50.0, None)

        assert [a.id for a in alerts] == ["liquidity-warning"]
        assert "30.0% of your portfolio" in alerts[0].description

    def test_no_alerts(
        self, engine: RiskAssessmentEngine, make_asset: Callable[..., Asset]
    ) -> None:
        """Test a diversified, liquid portfolio on target raises nothing."""
        holdings = [Holding(asset=make_asset(f"a{i}"), quantity=10) for i in range(10)]
        exposures = engine.exposures(holdings, PerformanceMetrics(), RiskMetrics())
        profile = RiskProfile(user_id="u", risk_tolerance=RiskTolerance.MODERATE)

        assert engine.alerts(exposures, 45.0, profile) == []


class TestAssess:
    """Test suite for the full assessment."""

    def test_assessment(
        self,
        engine: RiskAssessmentEngine,
        portfolio: Portfolio,
        moderate_profile: RiskProfile,
    ) -> None:
        """Test the assessment combines score, category, alignment and stress tests."""
        assessment = engine.assess(
            portfolio,
            PerformanceMetrics(volatility=10.0, beta=1.2),
            RiskMetrics(),
            moderate_profile,
        )

        assert assessment.portfolio_id == "pf-1"
        assert assessment.overall_risk_score == pytest.approx(34.5)
        assert assessment.risk_category == RiskCategory.MEDIUM
        assert assessment.alignment.score == pytest.approx(69.0)
        assert [a.id for a in assessment.alerts] == ["concentration-high"]
        assert len(assessment.stress_tests.scenarios) == 3
        assert assessment.stress_tests.historical_worst_case.loss == -38.5

    def test_missing_profile_logs_warning(
        self,
        engine: RiskAssessmentEngine,
        portfolio: Portfolio,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test an assessment without a profile still completes."""
        with caplog.at_level(logging.WARNING):
            assessment = engine.assess(portfolio, PerformanceMetrics(), RiskMetrics())

        assert assessment.alignment.score == 50.0
        assert "No risk profile for portfolio pf-1" in caplog.text

    def test_empty_portfolio(
        self, engine: RiskAssessmentEngine, empty_portfolio: Portfolio
    ) -> None:
        """Test an empty portfolio is assessed without errors."""
        assessment = engine.assess(empty_portfolio, PerformanceMetrics(), RiskMetrics())

        assert assessment.exposures.concentration.level == RiskLevel.LOW
        assert assessment.exposures.sector.diversification_score == 0.0
        assert all(s.portfolio_impact == 0.0 for s in assessment.stress_tests.scenarios)


if __name__ == "__main__":
    pytest.main([__file__])
