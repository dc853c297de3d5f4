"""Stress Testing.

Applies hypothetical market shocks from the configured scenario catalogue to
a portfolio's holdings.
"""

import logging
from collections.abc import Sequence

from portfolio_analytics.models.assessment import (
    HistoricalWorstCase,
    HoldingImpact,
    ScenarioResult,
    StressTestResults,
)
from portfolio_analytics.models.portfolio import Holding

from .component_configs.stress_test_config import StressScenario, StressTestConfig

OTHER_KEY = "other"


def scenario_impact(scenario: StressScenario, holding: Holding) -> float:
    """Percentage move a scenario applies to one holding.

    Lookup order is the asset type, then the sector (case-insensitive), then
    the scenario's ``other`` key, then its default impact.
    """
    asset = holding.asset
    if asset.asset_type is not None and asset.asset_type.value in scenario.impacts:
        return scenario.impacts[asset.asset_type.value]
    if asset.sector and asset.sector.lower() in scenario.impacts:
        return scenario.impacts[asset.sector.lower()]
    if OTHER_KEY in scenario.impacts:
        return scenario.impacts[OTHER_KEY]
    return scenario.default_impact


class StressTester:
    """Runs stress scenarios against holdings."""

    def __init__(
        self,
        config: StressTestConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the stress tester.

        Args:
            config: StressTestConfig holding the scenario catalogue
            logger: Optional logger instance
        """
        self.config: StressTestConfig = config or StressTestConfig()
        self.logger: logging.Logger = logger or logging.getLogger(__name__)

    @property
    def scenarios(self) -> list[StressScenario]:
        return self.config.scenarios

    def run_scenario(self, scenario: StressScenario, holdings: Sequence[Holding]) -> ScenarioResult:
        """Apply one scenario to a set of holdings.

        Args:
            scenario: Scenario to apply
            holdings: Portfolio holdings

        Returns:
            ScenarioResult with the value-weighted portfolio impact and the
            worst-hit holdings
        """
        total_value = sum(h.market_value for h in holdings)
        impacts = []
        portfolio_impact = 0.0

        for holding in holdings:
            impact = scenario_impact(scenario, holding)
            if total_value > 0:
                portfolio_impact += impact * holding.market_value / total_value
            impacts.append(
                HoldingImpact(
                    symbol=holding.asset.symbol,
                    impact=impact,
                    estimated_loss=holding.market_value * impact / 100,
                )
            )

        worst = sorted(impacts, key=lambda i: i.impact)[: self.config.worst_holdings_count]

        return ScenarioResult(
            name=scenario.name,
            description=scenario.description,
            portfolio_impact=portfolio_impact,
            worst_holdings=worst,
        )

    def run(self, holdings: Sequence[Holding]) -> StressTestResults:
        """Apply every configured scenario.

        Args:
            holdings: Portfolio holdings

        Returns:
            StressTestResults with one result per scenario plus the historical
            worst-case reference
        """
        results = [self.run_scenario(scenario, holdings) for scenario in self.scenarios]
        for result in results:
            self.logger.debug(f"Stress scenario '{result.name}': {result.portfolio_impact:.2f}%")

        reference = self.config.historical_worst_case
        return StressTestResults(
            scenarios=results,
            historical_worst_case=HistoricalWorstCase(
                period=reference.period,
                loss=reference.loss,
                recovery=reference.recovery_days,
            ),
        )
