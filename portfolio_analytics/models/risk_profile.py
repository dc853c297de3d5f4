"""User-owned risk preferences and limit rules."""

from dataclasses import dataclass, field
from enum import Enum

from .base import SerializableMixin


class RiskTolerance(str, Enum):
    """Declared risk appetite."""

    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"
    VERY_AGGRESSIVE = "very_aggressive"


class InvestmentHorizon(str, Enum):
    """Investment horizon: short < 3y, medium 3-10y, long > 10y."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class LiquidityNeeds(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ExperienceLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class LimitType(str, Enum):
    """Metric family a risk limit applies to."""

    POSITION = "position"
    SECTOR = "sector"
    ASSET_TYPE = "asset_type"
    VOLATILITY = "volatility"
    VAR = "var"


class LimitOperator(str, Enum):
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    EQUAL_TO = "equal_to"


class LimitAction(str, Enum):
    ALERT = "alert"
    BLOCK = "block"
    REBALANCE = "rebalance"


@dataclass
class RiskProfile(SerializableMixin):
    """A user's declared risk tolerance and constraints."""

    user_id: str
    risk_tolerance: RiskTolerance
    investment_horizon: InvestmentHorizon = InvestmentHorizon.MEDIUM
    liquidity_needs: LiquidityNeeds = LiquidityNeeds.MEDIUM
    experience_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    max_drawdown_tolerance: float | None = None  # percent
    excluded_sectors: list[str] = field(default_factory=list)
    preferred_asset_types: list[str] = field(default_factory=list)
    investment_goals: list[str] = field(default_factory=list)
    constraints: list[str] = field(default_factory=list)
    age: int | None = None
    annual_income: float | None = None
    net_worth: float | None = None


@dataclass
class RiskLimit(SerializableMixin):
    """User-defined rule evaluated against live portfolio metrics."""

    id: str
    user_id: str
    limit_type: LimitType
    metric: str
    operator: LimitOperator
    threshold: float
    action: LimitAction = LimitAction.ALERT
    enabled: bool = True
