"""Unit tests for the portfolio report facade."""

from __future__ import annotations

from structlog.testing import capture_logs

from copilot_risk.models.account import RiskSnapshot
from copilot_risk.models.risk_profile import AlertThresholds, ManualWatchAsset, RiskProfile
from copilot_risk.models.snapshot import PortfolioSnapshot
from copilot_risk.models.strategy import Strategy
from copilot_risk.report import build_portfolio_report

from ..conftest import make_account, make_perp


class TestBuildPortfolioReport:
    def test_full_report(self, mixed_strategies, mixed_defi):
        snapshot = PortfolioSnapshot(
            account=make_account(account_value=10000, open_perp_exposure=2000, event_exposure_usd=500),
            strategies=mixed_strategies,
            defi_positions=mixed_defi,
            manual_watch_assets=[ManualWatchAsset(market="BTC-PERP", liq_buffer_pct=9)],
            last_risk_snapshot=RiskSnapshot(account_value=9000, open_perp_exposure=2000),
        )
        report = build_portfolio_report(snapshot)

        assert [e.percentage for e in report.exposure_by_asset] == [55, 20, 20, 5]
        assert report.concentration.top_asset_percent == 55
        assert (report.margin.margin_used, report.margin.available_margin) == (20, 80)
        assert report.defi.active_count == 2
        assert report.events.position_count == 1
        assert len(report.open_positions) == 5
        assert report.correlation_level == "Low"
        assert report.risk_delta.value_delta == 1000
        assert report.watchlist[0].note == "Tight buffer"
        assert len(report.risk_rules) == 4
        assert [(a.id, a.severity.value) for a in report.alerts] == [("alert-concentration", "high")]

    def test_empty_snapshot(self):
        report = build_portfolio_report(PortfolioSnapshot())
        assert all(e.is_placeholder for e in report.exposure_by_asset)
        assert report.concentration.top_asset_name == "N/A"
        assert (report.margin.margin_used, report.margin.available_margin) == (0, 100)
        assert report.open_positions == []
        assert report.risk_delta is None
        assert report.alerts == []

    def test_profile_thresholds_reach_alert_engine(self):
        profile = RiskProfile(alert_thresholds=AlertThresholds(leverage_med=1.0, leverage_high=50.0))
        snapshot = PortfolioSnapshot(
            account=make_account(account_value=10000, open_perp_exposure=3300, event_exposure_usd=3300),
            strategies=[make_perp(leverage=2)],
            risk_profile=profile,
        )
        report = build_portfolio_report(snapshot)
        assert [a.id for a in report.alerts] == ["alert-high-leverage"]

    def test_unclassified_ids_surfaced(self):
        snapshot = PortfolioSnapshot(
            strategies=[Strategy(id="opt", instrument_type="option", status="executed")]
        )
        assert build_portfolio_report(snapshot).unclassified_ids == ["opt"]

    def test_unclassified_warning_logged_once(self):
        snapshot = PortfolioSnapshot(
            strategies=[Strategy(id="opt", instrument_type="option", status="executed")]
        )
        with capture_logs() as logs:
            build_portfolio_report(snapshot)
        warnings = [e for e in logs if e["event"] == "unclassified_instrument"]
        assert len(warnings) == 1

    def test_snapshot_not_mutated(self, mixed_strategies, mixed_defi):
        snapshot = PortfolioSnapshot(
            account=make_account(), strategies=mixed_strategies, defi_positions=mixed_defi
        )
        before = snapshot.model_dump()
        build_portfolio_report(snapshot)
        assert snapshot.model_dump() == before

    def test_serializes_with_dashboard_keys(self):
        snapshot = PortfolioSnapshot(strategies=[make_perp(id="x", stop_loss=0)])
        dumped = build_portfolio_report(snapshot).model_dump(by_alias=True, mode="json")
        assert "exposureByAsset" in dumped
        assert dumped["alerts"][0]["actionType"] == "focusPosition"
