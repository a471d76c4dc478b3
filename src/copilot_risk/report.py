"""One-call facade: derive every dashboard value from a PortfolioSnapshot."""

from __future__ import annotations

import structlog

from copilot_risk.classifier import classify_positions
from copilot_risk.correlation import (
    compute_correlation_level,
    compute_correlation_matrix,
    correlated_pairs,
)
from copilot_risk.exposure import compute_exposure_by_asset, compute_exposure_by_type, top_exposure
from copilot_risk.metrics import (
    compute_defi_aggregates,
    compute_event_aggregates,
    compute_margin_metrics,
    compute_risk_delta,
    compute_simple_drawdown_estimate,
    count_strategies_by_status,
    open_positions_from,
)
from copilot_risk.models.snapshot import PortfolioReport, PortfolioSnapshot
from copilot_risk.risk_alerts import RiskAlertEngine
from copilot_risk.watchlist import build_liquidation_watchlist, describe_risk_rules

logger = structlog.get_logger()


def build_portfolio_report(snapshot: PortfolioSnapshot) -> PortfolioReport:
    account = snapshot.account
    strategies = snapshot.strategies
    defi_positions = snapshot.defi_positions
    profile = snapshot.risk_profile

    classified = classify_positions(strategies, defi_positions)
    exposure = compute_exposure_by_asset(account, strategies, defi_positions)
    matrix = compute_correlation_matrix(account, strategies, defi_positions)
    alerts = RiskAlertEngine(profile.alert_thresholds).evaluate(
        account, strategies, defi_positions, classified=classified
    )

    report = PortfolioReport(
        exposure_by_asset=exposure,
        exposure_by_type=compute_exposure_by_type(account, strategies, defi_positions),
        concentration=top_exposure(exposure),
        margin=compute_margin_metrics(account),
        defi=compute_defi_aggregates(defi_positions),
        events=compute_event_aggregates(strategies, account),
        drawdown=compute_simple_drawdown_estimate(strategies),
        open_positions=open_positions_from(classified),
        unclassified_ids=[s.id for s in classified.unclassified],
        status_counts=count_strategies_by_status(strategies),
        correlation_level=compute_correlation_level(strategies),
        correlation_matrix=matrix,
        correlated_pairs=correlated_pairs(matrix, profile.correlation_hedge_threshold),
        risk_delta=compute_risk_delta(snapshot.last_risk_snapshot, account),
        watchlist=build_liquidation_watchlist(snapshot.manual_watch_assets, profile),
        risk_rules=describe_risk_rules(profile),
        alerts=alerts,
    )
    logger.info(
        "portfolio_report_built",
        open_positions=len(report.open_positions),
        alerts=len(alerts),
        top_asset=report.concentration.top_asset_name,
    )
    return report
