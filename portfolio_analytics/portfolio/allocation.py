"""Allocation Analyzer.

This module groups holdings by asset type, sector and region, reports the
largest positions and scores diversification with an HHI-style measure.
"""

import logging
from collections.abc import Callable, Sequence
from enum import Enum

import numpy as np
import pandas as pd

from portfolio_analytics.core.config import AllocationConfig
from portfolio_analytics.models.analytics import (
    AllocationAnalysis,
    AllocationBucket,
    ConcentrationSummary,
    DiversificationScore,
    TopHolding,
)
from portfolio_analytics.models.portfolio import Holding
from portfolio_analytics.utils.math_utils import safe_divide

OTHER = "Other"

EMPTY_PORTFOLIO_RECOMMENDATION = "Add holdings to your portfolio to improve diversification"


class GroupingDimension(str, Enum):
    """Dimensions holdings can be grouped along."""

    ASSET_TYPE = "asset_type"
    SECTOR = "sector"
    REGION = "region"


def _asset_type_of(holding: Holding) -> str | None:
    asset_type = holding.asset.asset_type
    return asset_type.value if asset_type is not None else None


def _sector_of(holding: Holding) -> str | None:
    return holding.asset.sector


def _region_of(holding: Holding) -> str | None:
    return holding.asset.region


GROUP_ACCESSORS: dict[GroupingDimension, Callable[[Holding], str | None]] = {
    GroupingDimension.ASSET_TYPE: _asset_type_of,
    GroupingDimension.SECTOR: _sector_of,
    GroupingDimension.REGION: _region_of,
}


def holdings_frame(holdings: Sequence[Holding]) -> pd.DataFrame:
    """Tabulate holdings with their value and classification.

    Args:
        holdings: Holdings to tabulate

    Returns:
        DataFrame with one row per holding and columns ``asset_id``,
        ``symbol``, ``name``, ``value``, ``cost`` and one column per
        GroupingDimension (missing classifications filled with "Other")
    """
    columns = ['asset_id', 'symbol', 'name', 'value', 'cost']
    columns += [dimension.value for dimension in GroupingDimension]
    rows = []
    for holding in holdings:
        row = {
            'asset_id': holding.asset_id,
            'symbol': holding.asset.symbol,
            'name': holding.asset.name,
            'value': holding.market_value,
            'cost': holding.cost_basis,
        }
        for dimension, accessor in GROUP_ACCESSORS.items():
            row[dimension.value] = accessor(holding) or OTHER
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)


def group_values(holdings: Sequence[Holding], dimension: GroupingDimension) -> pd.Series:
    """Total holding value per group, largest first."""
    frame = holdings_frame(holdings)
    if frame.empty:
        return pd.Series(dtype=float)
    grouped = frame.groupby(dimension.value, sort=False)['value'].sum()
    return grouped.sort_values(ascending=False, kind='stable')


def diversity(values: pd.Series | Sequence[float]) -> float:
    """HHI-style diversity on a 0-100 scale.

    ``(1 - sum(share^2)) * 100``: 0 for a single group or no value, approaching
    100 as value spreads across many equal groups.
    """
    arr = np.asarray(values, dtype=float)
    total = arr.sum()
    if arr.size == 0 or total <= 0:
        return 0.0
    shares = arr / total
    return float((1.0 - np.sum(shares**2)) * 100)


class AllocationAnalyzer:
    """Computes allocation breakdowns and diversification scores."""

    def __init__(
        self,
        config: AllocationConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the allocation analyzer.

        Args:
            config: AllocationConfig with top-N and diversification weights
            logger: Optional logger instance
        """
        self.config: AllocationConfig = config or AllocationConfig()
        self.logger: logging.Logger = logger or logging.getLogger(__name__)

    def group_by(
        self, holdings: Sequence[Holding], dimension: GroupingDimension
    ) -> list[AllocationBucket]:
        """Aggregate holdings along one dimension.

        Args:
            holdings: Holdings to group
            dimension: Grouping dimension

        Returns:
            Buckets sorted by value, largest first
        """
        frame = holdings_frame(holdings)
        if frame.empty:
            return []

        total = float(frame['value'].sum())
        grouped = frame.groupby(dimension.value, sort=False)['value'].agg(['sum', 'count'])
        grouped = grouped.sort_values('sum', ascending=False, kind='stable')

        return [
            AllocationBucket(
                name=str(name),
                value=float(row['sum']),
                percentage=safe_divide(float(row['sum']), total) * 100,
                count=int(row['count']),
            )
            for name, row in grouped.iterrows()
        ]

    def top_holdings(
        self, holdings: Sequence[Holding], count: int | None = None
    ) -> list[TopHolding]:
        """Largest holdings by market value.

        Args:
            holdings: Holdings to rank
            count: Number to return, defaults to the configured top-N

        Returns:
            TopHolding entries, largest first
        """
        limit = count if count is not None else self.config.top_holdings_count
        total = sum(h.market_value for h in holdings)
        ranked = sorted(holdings, key=lambda h: h.market_value, reverse=True)[:limit]

        return [
            TopHolding(
                asset_id=h.asset_id,
                symbol=h.asset.symbol,
                name=h.asset.name,
                value=h.market_value,
                percentage=safe_divide(h.market_value, total) * 100,
                performance=safe_divide(h.market_value - h.cost_basis, h.cost_basis) * 100,
            )
            for h in ranked
        ]

    def concentration(self, holdings: Sequence[Holding]) -> ConcentrationSummary:
        """Share of value held in the largest 1, 5 and 10 positions."""
        values = sorted((h.market_value for h in holdings), reverse=True)
        total = sum(values)
        if total <= 0:
            return ConcentrationSummary()

        return ConcentrationSummary(
            top5_percentage=safe_divide(sum(values[:5]), total) * 100,
            top10_percentage=safe_divide(sum(values[:10]), total) * 100,
            largest_holding_percentage=safe_divide(values[0], total) * 100,
        )

    def analyze(self, holdings: Sequence[Holding]) -> AllocationAnalysis:
        """Compute the full allocation breakdown.

        Args:
            holdings: Portfolio holdings

        Returns:
            AllocationAnalysis with buckets per dimension, top holdings and
            concentration summary
        """
        analysis = AllocationAnalysis(
            by_asset_type=self.group_by(holdings, GroupingDimension.ASSET_TYPE),
            by_sector=self.group_by(holdings, GroupingDimension.SECTOR),
            by_region=self.group_by(holdings, GroupingDimension.REGION),
            top_holdings=self.top_holdings(holdings),
            concentration=self.concentration(holdings),
        )
        self.logger.debug(
            f"Allocation computed: {len(holdings)} holdings, "
            f"largest={analysis.concentration.largest_holding_percentage:.2f}%"
        )
        return analysis

    def diversification(self, holdings: Sequence[Holding]) -> DiversificationScore:
        """Score how evenly value is spread across types, sectors and regions.

        Args:
            holdings: Portfolio holdings

        Returns:
            DiversificationScore with per-dimension diversity, the weighted
            overall score and rule-based recommendations
        """
        total = sum(h.market_value for h in holdings)
        if not holdings or total <= 0:
            return DiversificationScore(recommendations=[EMPTY_PORTFOLIO_RECOMMENDATION])

        by_type = group_values(holdings, GroupingDimension.ASSET_TYPE)
        by_sector = group_values(holdings, GroupingDimension.SECTOR)
        by_region = group_values(holdings, GroupingDimension.REGION)

        type_diversity = diversity(by_type)
        sector_diversity = diversity(by_sector)
        geographic_diversity = diversity(by_region)

        overall = (
            type_diversity * self.config.asset_type_weight
            + sector_diversity * self.config.sector_weight
            + geographic_diversity * self.config.region_weight
        )

        recommendations = self._recommendations(
            holdings_count=len(holdings),
            type_count=len(by_type),
            sector_count=len(by_sector),
            region_count=len(by_region),
            overall=overall,
        )

        return DiversificationScore(
            overall=overall,
            asset_type_diversity=type_diversity,
            sector_diversity=sector_diversity,
            geographic_diversity=geographic_diversity,
            recommendations=recommendations,
        )

    def _recommendations(
        self,
        holdings_count: int,
        type_count: int,
        sector_count: int,
        region_count: int,
        overall: float,
    ) -> list[str]:
        recommendations = []
        if type_count < self.config.min_asset_types:
            recommendations.append(
                "Consider adding different asset types such as bonds or ETFs"
            )
        if sector_count < self.config.min_sectors:
            recommendations.append(
                f"Spread investments across at least {self.config.min_sectors} sectors"
            )
        if region_count < 2:
            recommendations.append("Add international exposure to diversify geographically")
        if holdings_count < self.config.min_holdings:
            recommendations.append(
                f"Consider holding at least {self.config.min_holdings} positions "
                "to reduce single-asset risk"
            )
        if overall < self.config.min_overall_score:
            recommendations.append(
                "Overall diversification is low; rebalance toward underrepresented groups"
            )
        return recommendations
