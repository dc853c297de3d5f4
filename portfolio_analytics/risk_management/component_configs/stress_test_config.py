"""Stress Test Configuration.

The scenario catalogue is configuration: tests and callers can inject their
own scenarios instead of relying on the defaults defined here.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StressScenario(BaseModel):
    """A hypothetical market shock.

    ``impacts`` maps an asset type or a lower-case sector name to a percentage
    move. The key ``other`` applies to holdings no other key matches.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Scenario name")
    description: str = Field(default="", description="Scenario description")
    impacts: dict[str, float] = Field(
        default_factory=dict, description="Percentage impact by asset type or sector"
    )
    default_impact: float = Field(
        default=-10.0, description="Impact for holdings with no matching key (%)"
    )

    @field_validator('impacts')
    @classmethod
    def normalise_keys(cls, v: dict[str, float]) -> dict[str, float]:
        """Lower-case the impact keys for case-insensitive lookup."""
        return {key.lower(): value for key, value in v.items()}


class HistoricalWorstCaseConfig(BaseModel):
    """Reference historical loss reported alongside the scenarios."""

    model_config = ConfigDict(frozen=True)

    period: str = Field(default="2008 Financial Crisis")
    loss: float = Field(default=-38.5, description="Peak loss in percent")
    recovery_days: int = Field(default=365, ge=0, description="Days to recover")


def default_scenarios() -> list[StressScenario]:
    """Build the default scenario catalogue."""
    return [
        StressScenario(
            name="Market Crash",
            description="2008-style financial crisis",
            impacts={'stock': -40.0, 'etf': -35.0, 'crypto': -60.0, 'bond': -5.0},
        ),
        StressScenario(
            name="Tech Bubble Burst",
            description="Technology sector correction",
            impacts={'technology': -50.0, 'other': -20.0},
        ),
        StressScenario(
            name="Interest Rate Shock",
            description="Rapid rate increase",
            impacts={'bond': -15.0, 'stock': -20.0, 'real_estate': -25.0},
        ),
    ]


class StressTestConfig(BaseModel):
    """Immutable stress test catalogue."""

    model_config = ConfigDict(frozen=True)

    scenarios: list[StressScenario] = Field(
        default_factory=default_scenarios, description="Scenarios to run"
    )
    historical_worst_case: HistoricalWorstCaseConfig = Field(
        default_factory=HistoricalWorstCaseConfig
    )
    worst_holdings_count: int = Field(
        default=5, ge=1, description="Number of worst-hit holdings reported per scenario"
    )

    @field_validator('scenarios')
    @classmethod
    def validate_unique_names(cls, v: list[StressScenario]) -> list[StressScenario]:
        """Validate scenario names are unique."""
        names = [scenario.name for scenario in v]
        if len(names) != len(set(names)):
            raise ValueError("Scenario names must be unique")
        return v
