"""Margin, DeFi, event-contract and position-level metrics."""

from __future__ import annotations

from collections.abc import Sequence

from copilot_risk._utils import non_negative, round_half_up, safe_pct
from copilot_risk.classifier import (
    classify_positions,
    is_active_defi,
    is_open_event,
    is_open_strategy,
)
from copilot_risk.models.account import AccountState, RiskSnapshot
from copilot_risk.models.defi import DefiPosition
from copilot_risk.models.portfolio import (
    ClassifiedPositions,
    DefiAggregates,
    DrawdownEstimate,
    EventAggregates,
    MarginMetrics,
    OpenPosition,
    RiskDelta,
)
from copilot_risk.models.strategy import Strategy


def compute_margin_metrics(account: AccountState) -> MarginMetrics:
    """Margin used vs. available, in whole percent.

    Not clamped: perp exposure above account value yields ``margin_used > 100``
    and a negative ``available_margin``.
    """
    account_value = non_negative(account.account_value)
    margin_used = 0
    if account_value > 0:
        margin_used = round_half_up(non_negative(account.open_perp_exposure) / account_value * 100)
    return MarginMetrics(margin_used=margin_used, available_margin=100 - margin_used)


def compute_defi_aggregates(defi_positions: Sequence[DefiPosition]) -> DefiAggregates:
    deposits = [non_negative(p.deposit_usd) for p in defi_positions if is_active_defi(p)]
    return DefiAggregates(
        total_deposits=sum(deposits),
        active_count=len(deposits),
        max_protocol_exposure=max(deposits, default=0.0),
    )


def compute_event_aggregates(
    strategies: Sequence[Strategy], account: AccountState
) -> EventAggregates:
    stakes = [non_negative(s.stake_usd) for s in strategies if is_open_event(s)]
    largest = max(stakes, default=0.0)
    concentration = safe_pct(largest, non_negative(account.account_value)) if largest > 0 else 0.0
    return EventAggregates(
        total_stake=sum(stakes),
        position_count=len(stakes),
        largest_stake=largest,
        concentration_percent=concentration,
    )


def compute_simple_drawdown_estimate(strategies: Sequence[Strategy]) -> DrawdownEstimate:
    """Worst case: every open position hits its stop at once (capped at 100%)."""
    risks = [non_negative(s.risk_percent) for s in strategies if is_open_strategy(s)]
    if not risks:
        return DrawdownEstimate()
    total = sum(risks)
    return DrawdownEstimate(
        estimated_max_drawdown=min(total, 100.0),
        avg_risk_per_position=total / len(risks),
    )


def count_strategies_by_status(strategies: Sequence[Strategy]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for s in strategies:
        counts[s.status] = counts.get(s.status, 0) + 1
    return counts


def compute_open_positions_list(
    strategies: Sequence[Strategy], defi_positions: Sequence[DefiPosition]
) -> list[OpenPosition]:
    return open_positions_from(classify_positions(strategies, defi_positions))


def open_positions_from(classified: ClassifiedPositions) -> list[OpenPosition]:
    """Normalized open positions: perps, then events, then active DeFi."""
    result: list[OpenPosition] = []

    for s in classified.open_perps:
        result.append(
            OpenPosition(
                id=s.id,
                type="perp",
                market=s.market,
                side=s.side or None,
                risk_percent=s.risk_percent,
                notional_usd=s.notional_usd,
                pnl_pct=s.realized_pnl_pct,
            )
        )

    # YES/NO is not a Long/Short side, so events carry no side
    for s in classified.open_events:
        result.append(
            OpenPosition(
                id=s.id,
                type="event",
                market=s.event_label or s.event_key or s.market,
                risk_percent=s.risk_percent,
                stake_usd=s.stake_usd,
                pnl_pct=s.realized_pnl_pct,
            )
        )

    for p in classified.active_defi:
        result.append(
            OpenPosition(
                id=p.id,
                type="defi",
                market=f"{p.protocol} {p.asset}",
                deposit_usd=p.deposit_usd,
                pnl_pct=p.apy_pct,  # APY as return proxy
            )
        )

    return result


def take_risk_snapshot(account: AccountState) -> RiskSnapshot:
    return RiskSnapshot(
        account_value=account.account_value,
        open_perp_exposure=account.open_perp_exposure,
        total_pnl_pct=account.total_pnl_pct,
    )


def compute_risk_delta(previous: RiskSnapshot | None, account: AccountState) -> RiskDelta | None:
    """Change since ``previous``; ``None`` on the first visit."""
    if previous is None:
        return None
    return RiskDelta(
        value_delta=account.account_value - previous.account_value,
        exposure_delta=account.open_perp_exposure - previous.open_perp_exposure,
        pnl_delta=account.total_pnl_pct - previous.total_pnl_pct,
    )
