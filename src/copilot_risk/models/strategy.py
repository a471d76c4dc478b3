"""Strategy (perp / event position record) model and its status machine."""

from __future__ import annotations

import enum

from copilot_risk.models import Amount, CamelModel


class InstrumentType(str, enum.Enum):
    PERP = "perp"
    EVENT = "event"


class StrategyStatus(str, enum.Enum):
    DRAFT = "draft"
    QUEUED = "queued"
    EXECUTING = "executing"
    EXECUTED = "executed"
    CLOSED = "closed"


# Forward-only lifecycle; CLOSED is terminal.
STATUS_ORDER: tuple[StrategyStatus, ...] = (
    StrategyStatus.DRAFT,
    StrategyStatus.QUEUED,
    StrategyStatus.EXECUTING,
    StrategyStatus.EXECUTED,
    StrategyStatus.CLOSED,
)

OPEN_STATUSES: tuple[str, ...] = (StrategyStatus.EXECUTING.value, StrategyStatus.EXECUTED.value)


class InvalidStatusTransition(ValueError):
    """Raised when a strategy would move backwards (or out of CLOSED)."""


def can_transition(old: str, new: str) -> bool:
    known = [s.value for s in STATUS_ORDER]
    if old not in known or new not in known:
        return False
    return known.index(new) > known.index(old)


class Strategy(CamelModel):
    id: str
    instrument_type: str = InstrumentType.PERP.value
    status: str = StrategyStatus.DRAFT.value
    is_closed: bool = False
    created_at: str = ""
    market: str = ""
    side: str = ""  # Long, Short
    risk_percent: Amount = 0.0
    entry: Amount = 0.0
    take_profit: Amount = 0.0
    stop_loss: Amount = 0.0
    leverage: Amount = 0.0
    notional_usd: Amount = 0.0
    source_text: str = ""
    realized_pnl_usd: float | None = None
    realized_pnl_pct: float | None = None
    # Event-contract fields
    event_key: str | None = None
    event_label: str | None = None
    event_side: str | None = None  # YES, NO
    stake_usd: Amount = 0.0
    max_payout_usd: Amount = 0.0
    max_loss_usd: Amount = 0.0

    def with_status(self, new_status: str) -> Strategy:
        """Return a copy moved forward to ``new_status``; the original is untouched."""
        if not can_transition(self.status, new_status):
            raise InvalidStatusTransition(
                f"Cannot move strategy {self.id} from '{self.status}' to '{new_status}'"
            )
        return self.model_copy(update={"status": new_status})
