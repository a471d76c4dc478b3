"""Exposure aggregation and concentration analysis.

Account value is partitioned into four buckets (spot & cash, perps, DeFi,
events). Percentages are rounded per bucket, so their sum may drift from 100
by at most one point per non-zero bucket.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from copilot_risk._utils import non_negative, round_half_up
from copilot_risk.classifier import is_active_defi
from copilot_risk.models.account import AccountState
from copilot_risk.models.defi import DefiPosition
from copilot_risk.models.portfolio import Concentration, ExposureByAsset, ExposureByType
from copilot_risk.models.strategy import Strategy

logger = structlog.get_logger()

SPOT_AND_CASH_LABEL = "USDC / Spot & Cash"
PERPS_LABEL = "Perps"
DEFI_LABEL = "DeFi (yield)"
EVENTS_LABEL = "Event Markets"

# Synthetic split shown for accounts with nothing to measure yet.
PLACEHOLDER_DISTRIBUTION: tuple[tuple[str, int], ...] = (
    ("USDC", 40),
    ("ETH", 30),
    ("SOL", 30),
)


def total_active_defi_deposits(defi_positions: Sequence[DefiPosition]) -> float:
    return sum(non_negative(p.deposit_usd) for p in defi_positions if is_active_defi(p))


def _buckets(
    account: AccountState, defi_positions: Sequence[DefiPosition]
) -> tuple[float, float, float, float]:
    """Return (spot_and_cash, perps, defi, events) in USD."""
    account_value = non_negative(account.account_value)
    perps = non_negative(account.open_perp_exposure)
    events = non_negative(account.event_exposure_usd)
    defi = total_active_defi_deposits(defi_positions)
    spot_and_cash = max(account_value - (perps + defi + events), 0.0)
    return spot_and_cash, perps, defi, events


def placeholder_exposure(account_value: float) -> list[ExposureByAsset]:
    return [
        ExposureByAsset(
            asset=asset,
            percentage=pct,
            amount_usd=account_value * pct / 100,
            is_placeholder=True,
        )
        for asset, pct in PLACEHOLDER_DISTRIBUTION
    ]


def compute_exposure_by_asset(
    account: AccountState,
    strategies: Sequence[Strategy],
    defi_positions: Sequence[DefiPosition],
) -> list[ExposureByAsset]:
    """Exposure per bucket, zero buckets omitted.

    ``strategies`` is accepted for call-site symmetry; perp and event exposure
    come pre-aggregated on the account.
    """
    spot_and_cash, perps, defi, events = _buckets(account, defi_positions)
    total = spot_and_cash + perps + defi + events

    if total <= 0:
        logger.debug("exposure_placeholder_used", account_value=account.account_value)
        return placeholder_exposure(non_negative(account.account_value))

    result: list[ExposureByAsset] = []
    for label, amount in (
        (SPOT_AND_CASH_LABEL, spot_and_cash),
        (PERPS_LABEL, perps),
        (DEFI_LABEL, defi),
        (EVENTS_LABEL, events),
    ):
        if amount > 0:
            result.append(
                ExposureByAsset(
                    asset=label,
                    percentage=round_half_up(amount / total * 100),
                    amount_usd=amount,
                )
            )
    return result


def compute_exposure_by_type(
    account: AccountState,
    strategies: Sequence[Strategy],
    defi_positions: Sequence[DefiPosition],
) -> ExposureByType:
    spot_and_cash, perps, defi, events = _buckets(account, defi_positions)
    return ExposureByType(
        spot=spot_and_cash,
        perps=perps,
        events=events,
        defi=defi,
        total=non_negative(account.account_value),
    )


def top_exposure(exposure: Sequence[ExposureByAsset]) -> Concentration:
    """Largest live bucket; first occurrence wins ties. Placeholders are ignored."""
    top: ExposureByAsset | None = None
    for item in exposure:
        if item.is_placeholder:
            continue
        if top is None or item.percentage > top.percentage:
            top = item
    if top is None:
        return Concentration(top_asset_name="N/A", top_asset_percent=0)
    return Concentration(top_asset_name=top.asset, top_asset_percent=top.percentage)


def compute_basic_concentration(
    account: AccountState,
    strategies: Sequence[Strategy],
    defi_positions: Sequence[DefiPosition],
) -> Concentration:
    return top_exposure(compute_exposure_by_asset(account, strategies, defi_positions))
