"""Liquidation watchlist and human-readable risk rules, driven by RiskProfile."""

from __future__ import annotations

from collections.abc import Sequence

from copilot_risk._utils import non_negative
from copilot_risk.models.portfolio import WatchlistEntry
from copilot_risk.models.risk_profile import ManualWatchAsset, RiskProfile

HEALTHY_NOTE = "Healthy"
TIGHT_BUFFER_NOTE = "Tight buffer"


def build_liquidation_watchlist(
    assets: Sequence[ManualWatchAsset], profile: RiskProfile
) -> list[WatchlistEntry]:
    entries: list[WatchlistEntry] = []
    for asset in assets:
        buffer_pct = non_negative(asset.liq_buffer_pct)
        healthy = buffer_pct >= profile.min_liq_buffer_pct
        entries.append(
            WatchlistEntry(
                id=asset.id,
                market=asset.market,
                side=asset.side,
                liq_buffer_pct=buffer_pct,
                note=asset.note or (HEALTHY_NOTE if healthy else TIGHT_BUFFER_NOTE),
                healthy=healthy,
            )
        )
    return entries


def describe_risk_rules(profile: RiskProfile) -> list[str]:
    return [
        f"Max account risk per strategy: {profile.max_per_trade_risk_pct:g}%",
        f"Min liquidation buffer: {profile.min_liq_buffer_pct:g}%",
        f"Alert if funding > {profile.funding_alert_pct:g}% / 8h",
        f"Auto-hedge if correlation > {profile.correlation_hedge_threshold:g}",
    ]
