"""RiskProfile, AlertThresholds, ManualWatchAsset models."""

from __future__ import annotations

from pydantic import ConfigDict

from copilot_risk.models import Amount, CamelModel


class AlertThresholds(CamelModel):
    """Trigger levels for the risk alert rule table (strictly-greater-than)."""

    model_config = ConfigDict(frozen=True)

    concentration_high_pct: float = 50.0
    concentration_med_pct: float = 35.0
    open_positions_high: int = 10
    open_positions_med: int = 7
    perp_exposure_high_pct: float = 80.0
    perp_exposure_med_pct: float = 60.0
    leverage_high: float = 15.0
    leverage_med: float = 10.0


class RiskProfile(CamelModel):
    model_config = ConfigDict(frozen=True)

    max_per_trade_risk_pct: float = 3.0
    min_liq_buffer_pct: float = 15.0
    funding_alert_pct: float = 0.15  # per 8h
    correlation_hedge_threshold: float = 0.75
    alert_thresholds: AlertThresholds = AlertThresholds()


class ManualWatchAsset(CamelModel):
    """User-pinned liquidation watch entry; not part of exposure math."""

    id: str = ""
    market: str
    side: str = ""
    liq_buffer_pct: Amount = 0.0
    note: str = ""
