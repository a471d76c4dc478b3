"""PortfolioSnapshot (engine input bundle) and PortfolioReport (output bundle)."""

from __future__ import annotations

from copilot_risk.models import CamelModel
from copilot_risk.models.account import AccountState, RiskSnapshot
from copilot_risk.models.alert import RiskAlert
from copilot_risk.models.defi import DefiPosition
from copilot_risk.models.portfolio import (
    Concentration,
    CorrelationMatrix,
    DefiAggregates,
    DrawdownEstimate,
    EventAggregates,
    ExposureByAsset,
    ExposureByType,
    MarginMetrics,
    OpenPosition,
    RiskDelta,
    WatchlistEntry,
)
from copilot_risk.models.risk_profile import ManualWatchAsset, RiskProfile
from copilot_risk.models.strategy import Strategy


class PortfolioSnapshot(CamelModel):
    account: AccountState = AccountState()
    strategies: list[Strategy] = []
    defi_positions: list[DefiPosition] = []
    risk_profile: RiskProfile = RiskProfile()
    manual_watch_assets: list[ManualWatchAsset] = []
    last_risk_snapshot: RiskSnapshot | None = None


class PortfolioReport(CamelModel):
    exposure_by_asset: list[ExposureByAsset] = []
    exposure_by_type: ExposureByType = ExposureByType()
    concentration: Concentration = Concentration()
    margin: MarginMetrics = MarginMetrics()
    defi: DefiAggregates = DefiAggregates()
    events: EventAggregates = EventAggregates()
    drawdown: DrawdownEstimate = DrawdownEstimate()
    open_positions: list[OpenPosition] = []
    unclassified_ids: list[str] = []
    status_counts: dict[str, int] = {}
    correlation_level: str = "Low"
    correlation_matrix: CorrelationMatrix = CorrelationMatrix()
    correlated_pairs: list[tuple[str, str]] = []
    risk_delta: RiskDelta | None = None
    watchlist: list[WatchlistEntry] = []
    risk_rules: list[str] = []
    alerts: list[RiskAlert] = []
