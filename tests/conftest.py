"""Fixtures and builders for copilot-risk unit tests."""

from __future__ import annotations

import pytest
import structlog

from copilot_risk.models.account import AccountState, AssetBalance
from copilot_risk.models.defi import DefiPosition
from copilot_risk.models.strategy import Strategy


# --- Builders ---


def make_perp(
    id: str = "perp-1",
    status: str = "executed",
    is_closed: bool = False,
    market: str = "ETH-PERP",
    side: str = "Long",
    stop_loss: float = 3390.0,
    leverage: float = 2.0,
    notional_usd: float = 300.0,
    risk_percent: float = 3.0,
) -> Strategy:
    return Strategy(
        id=id,
        instrument_type="perp",
        status=status,
        is_closed=is_closed,
        market=market,
        side=side,
        stop_loss=stop_loss,
        leverage=leverage,
        notional_usd=notional_usd,
        risk_percent=risk_percent,
    )


def make_event(
    id: str = "event-1",
    status: str = "executed",
    is_closed: bool = False,
    stake_usd: float = 200.0,
    event_label: str | None = "Fed cuts rates in March",
    event_key: str | None = "FED_CUT_MAR",
    risk_percent: float = 2.0,
) -> Strategy:
    return Strategy(
        id=id,
        instrument_type="event",
        status=status,
        is_closed=is_closed,
        market="EVENT",
        event_side="YES",
        event_label=event_label,
        event_key=event_key,
        stake_usd=stake_usd,
        risk_percent=risk_percent,
    )


def make_defi(
    id: str = "defi-1",
    status: str = "active",
    protocol: str = "Kamino",
    asset: str = "USDC",
    deposit_usd: float = 1000.0,
    apy_pct: float = 8.5,
) -> DefiPosition:
    return DefiPosition(
        id=id,
        status=status,
        protocol=protocol,
        asset=asset,
        deposit_usd=deposit_usd,
        apy_pct=apy_pct,
    )


def make_account(
    account_value: float = 10000.0,
    open_perp_exposure: float = 0.0,
    event_exposure_usd: float = 0.0,
    total_pnl_pct: float = 0.0,
) -> AccountState:
    return AccountState(
        account_value=account_value,
        open_perp_exposure=open_perp_exposure,
        event_exposure_usd=event_exposure_usd,
        total_pnl_pct=total_pnl_pct,
        balances=[
            AssetBalance(symbol="USDC", balance_usd=4000.0),
            AssetBalance(symbol="ETH", balance_usd=3000.0),
            AssetBalance(symbol="SOL", balance_usd=3000.0),
        ],
    )


# --- Fixtures ---


@pytest.fixture(autouse=True)
def _reset_structlog():
    """main() configures structlog globally; undo it after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def account() -> AccountState:
    return make_account()


@pytest.fixture
def empty_account() -> AccountState:
    return AccountState()


@pytest.fixture
def mixed_strategies() -> list[Strategy]:
    """Two open perps, one open event, plus draft / closed / settled noise."""
    return [
        make_perp(id="seed-1", market="ETH-PERP", side="Long"),
        make_perp(id="seed-2", market="BTC-PERP", side="Short", stop_loss=45900.0),
        make_event(id="ev-1"),
        make_perp(id="draft-1", status="draft"),
        make_perp(id="closed-1", status="closed"),
        make_perp(id="settled-1", is_closed=True),
    ]


@pytest.fixture
def mixed_defi() -> list[DefiPosition]:
    return [
        make_defi(id="d-1", deposit_usd=1500.0),
        make_defi(id="d-2", protocol="Aave", asset="ETH", deposit_usd=500.0),
        make_defi(id="d-3", status="proposed", deposit_usd=9000.0),
    ]
