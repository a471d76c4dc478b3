"""Values derived from a portfolio snapshot (exposure, metrics, aggregates)."""

from __future__ import annotations

from copilot_risk.models import CamelModel
from copilot_risk.models.defi import DefiPosition
from copilot_risk.models.strategy import Strategy


class ClassifiedPositions(CamelModel):
    open_perps: list[Strategy] = []
    open_events: list[Strategy] = []
    active_defi: list[DefiPosition] = []
    # Open strategies whose instrument type the engine does not recognise
    unclassified: list[Strategy] = []

    @property
    def open_count(self) -> int:
        return len(self.open_perps) + len(self.open_events) + len(self.active_defi)


class ExposureByAsset(CamelModel):
    asset: str
    percentage: int
    amount_usd: float = 0.0
    is_placeholder: bool = False


class ExposureByType(CamelModel):
    spot: float = 0.0
    perps: float = 0.0
    events: float = 0.0
    defi: float = 0.0
    total: float = 0.0


class Concentration(CamelModel):
    top_asset_name: str = "N/A"
    top_asset_percent: int = 0


class MarginMetrics(CamelModel):
    margin_used: int = 0
    available_margin: int = 100


class DefiAggregates(CamelModel):
    total_deposits: float = 0.0
    active_count: int = 0
    max_protocol_exposure: float = 0.0


class EventAggregates(CamelModel):
    total_stake: float = 0.0
    position_count: int = 0
    largest_stake: float = 0.0
    concentration_percent: float = 0.0


class DrawdownEstimate(CamelModel):
    estimated_max_drawdown: float = 0.0
    avg_risk_per_position: float = 0.0


class OpenPosition(CamelModel):
    id: str
    type: str  # perp, event, defi
    market: str
    side: str | None = None
    risk_percent: float | None = None
    notional_usd: float | None = None
    stake_usd: float | None = None
    deposit_usd: float | None = None
    pnl_pct: float | None = None


class RiskDelta(CamelModel):
    value_delta: float = 0.0
    exposure_delta: float = 0.0
    pnl_delta: float = 0.0


class CorrelationCell(CamelModel):
    asset_a: str
    asset_b: str
    correlation: float


class CorrelationMatrix(CamelModel):
    assets: list[str] = []
    cells: list[CorrelationCell] = []


class WatchlistEntry(CamelModel):
    id: str = ""
    market: str
    side: str = ""
    liq_buffer_pct: float = 0.0
    note: str = ""
    healthy: bool = True
