"""DefiPosition model."""

from __future__ import annotations

import enum

from copilot_risk.models import Amount, CamelModel


class DefiStatus(str, enum.Enum):
    PROPOSED = "proposed"
    ACTIVE = "active"
    CLOSED = "closed"


class DefiPosition(CamelModel):
    id: str
    status: str = DefiStatus.PROPOSED.value
    protocol: str = ""
    asset: str = ""
    deposit_usd: Amount = 0.0
    apy_pct: Amount = 0.0
    command: str = ""
    created_at: str = ""
