"""ESG scoring, impact estimates and recommendations."""

from .esg_analyzer import ESGAnalyzer

__all__ = ['ESGAnalyzer']
