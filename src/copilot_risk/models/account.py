"""AssetBalance, AccountState, RiskSnapshot models."""

from __future__ import annotations

from pydantic import Field

from copilot_risk.models import Amount, CamelModel


class AssetBalance(CamelModel):
    symbol: str
    balance_usd: Amount = 0.0


class AccountState(CamelModel):
    account_value: Amount = 0.0
    open_perp_exposure: Amount = 0.0
    event_exposure_usd: Amount = 0.0
    total_pnl_pct: Amount = 0.0
    # to_camel would give "simulatedPnlPct30D"
    simulated_pnl_pct_30d: Amount = Field(default=0.0, alias="simulatedPnlPct30d")
    balances: list[AssetBalance] = []


class RiskSnapshot(CamelModel):
    """Account figures remembered from the previous Risk Center visit."""

    account_value: Amount = 0.0
    open_perp_exposure: Amount = 0.0
    total_pnl_pct: Amount = 0.0
