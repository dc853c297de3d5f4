"""Portfolio allocation and diversification analysis."""

from .allocation import AllocationAnalyzer, GroupingDimension

__all__ = ['AllocationAnalyzer', 'GroupingDimension']
