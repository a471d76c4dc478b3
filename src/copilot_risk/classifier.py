"""Position classifier: splits raw strategy / DeFi lists into open categories."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from copilot_risk.models.defi import DefiPosition, DefiStatus
from copilot_risk.models.portfolio import ClassifiedPositions
from copilot_risk.models.strategy import OPEN_STATUSES, InstrumentType, Strategy

logger = structlog.get_logger()


def is_open_strategy(strategy: Strategy) -> bool:
    """Open means executing/executed and not settled via ``is_closed``."""
    return strategy.status in OPEN_STATUSES and not strategy.is_closed


def is_open_perp(strategy: Strategy) -> bool:
    return is_open_strategy(strategy) and strategy.instrument_type == InstrumentType.PERP.value


def is_open_event(strategy: Strategy) -> bool:
    return is_open_strategy(strategy) and strategy.instrument_type == InstrumentType.EVENT.value


def is_active_defi(position: DefiPosition) -> bool:
    return position.status == DefiStatus.ACTIVE.value


def classify_positions(
    strategies: Iterable[Strategy], defi_positions: Iterable[DefiPosition]
) -> ClassifiedPositions:
    open_perps: list[Strategy] = []
    open_events: list[Strategy] = []
    unclassified: list[Strategy] = []

    for strategy in strategies:
        if not is_open_strategy(strategy):
            continue
        if strategy.instrument_type == InstrumentType.PERP.value:
            open_perps.append(strategy)
        elif strategy.instrument_type == InstrumentType.EVENT.value:
            open_events.append(strategy)
        else:
            logger.warning(
                "unclassified_instrument",
                strategy_id=strategy.id,
                instrument_type=strategy.instrument_type,
            )
            unclassified.append(strategy)

    active_defi = [p for p in defi_positions if is_active_defi(p)]

    return ClassifiedPositions(
        open_perps=open_perps,
        open_events=open_events,
        active_defi=active_defi,
        unclassified=unclassified,
    )


def count_open_positions(
    strategies: Iterable[Strategy], defi_positions: Iterable[DefiPosition]
) -> int:
    """Open perps + open events + active DeFi deposits."""
    return classify_positions(strategies, defi_positions).open_count
