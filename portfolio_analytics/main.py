"""Command line interface for the portfolio analytics core.

Loads an in-memory data set from JSON and prints the requested report as
JSON on stdout. Logs go to stderr.
"""

import argparse
import json
import sys
from typing import Any

from portfolio_analytics.core.analytics_engine import PortfolioAnalyticsEngine
from portfolio_analytics.core.config import AnalyticsConfig, ProjectionConfig, ServiceConfig
from portfolio_analytics.core.exceptions import AnalyticsError
from portfolio_analytics.core.logger import AnalyticsLogger, get_analytics_logger
from portfolio_analytics.data.data_handler import ProviderGateway
from portfolio_analytics.data.json_loader import load_dataset
from portfolio_analytics.risk_management.risk_manager import RiskManager

REPORTS = ['analytics', 'risk', 'limits', 'rebalance', 'compare']


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(description="Portfolio risk, performance and ESG analytics")
    parser.add_argument('data_file', help='JSON data set with portfolios and market data')
    parser.add_argument('--portfolio-id', required=True, help='Portfolio to analyze')
    parser.add_argument('--user-id', help='Risk profile owner (defaults to the portfolio owner)')
    parser.add_argument('--report', choices=REPORTS, default='analytics', help='Report to print')
    parser.add_argument(
        '--compare-with',
        nargs='*',
        default=[],
        help='Additional portfolios for the compare report',
    )
    parser.add_argument('--seed', type=int, help='Seed for the Monte Carlo projection')
    parser.add_argument('--timeout', type=float, default=30.0, help='Provider timeout in seconds')
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='WARNING',
        help='Log level',
    )
    return parser


def run_report(args: argparse.Namespace) -> dict[str, Any]:
    """Run the requested report and return it as plain JSON data."""
    analytics_logger = AnalyticsLogger("portfolio_analytics")
    config = AnalyticsConfig(
        projections=ProjectionConfig(seed=args.seed),
        service=ServiceConfig(provider_timeout_seconds=args.timeout, log_level=args.log_level),
    )
    dataset = load_dataset(args.data_file)

    with ProviderGateway(
        dataset.portfolio_data, dataset.market_data, dataset.profile_store, config.service
    ) as gateway:
        engine = PortfolioAnalyticsEngine(gateway, config)

        if args.report == 'analytics':
            analytics = engine.get_portfolio_analytics(args.portfolio_id)
            analytics_logger.log_analytics(
                args.portfolio_id,
                {
                    'total_value': round(analytics.performance.total_value, 2),
                    'risk_score': round(analytics.risk.risk_score, 2),
                    'esg_score': round(analytics.esg.portfolio_score, 2),
                },
            )
            return analytics.to_dict()

        if args.report == 'compare':
            ids = [args.portfolio_id, *args.compare_with]
            return engine.compare_portfolios(ids).to_dict()

        manager = RiskManager(gateway, config, analytics=engine)
        if args.report == 'risk':
            assessment = manager.assess_portfolio_risk(args.portfolio_id, args.user_id)
            analytics_logger.log_assessment(
                args.portfolio_id, assessment.overall_risk_score, assessment.risk_category.value
            )
            return assessment.to_dict()
        if args.report == 'limits':
            return manager.check_risk_limits(args.portfolio_id, args.user_id).to_dict()
        return manager.generate_rebalancing_suggestions(args.portfolio_id, args.user_id).to_dict()


def main(argv: list[str] | None = None) -> int:
    """Main function for command line interface."""
    args = build_parser().parse_args(argv)

    logger = get_analytics_logger("portfolio_analytics", level=args.log_level)
    logger.info(f"Running {args.report} report for portfolio {args.portfolio_id}")

    try:
        result = run_report(args)
    except AnalyticsError as e:
        logger.error(f"Report failed: {e.message}")
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
