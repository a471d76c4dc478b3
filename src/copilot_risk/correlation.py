"""Cross-position correlation heuristics.

No price history is available, so correlation is approximated from position
grouping and fixed asset-class proxies (majors, stables, alts).
"""

from __future__ import annotations

from collections.abc import Sequence

from copilot_risk.classifier import is_open_strategy
from copilot_risk.exposure import compute_exposure_by_asset
from copilot_risk.models.account import AccountState
from copilot_risk.models.defi import DefiPosition
from copilot_risk.models.portfolio import CorrelationCell, CorrelationMatrix
from copilot_risk.models.strategy import Strategy

MAJORS = ("BTC", "ETH")
STABLES = ("USDC", "USDT", "DAI")
MAX_MATRIX_ASSETS = 8


def compute_correlation_level(strategies: Sequence[Strategy]) -> str:
    """High / Medium / Low from the largest group of open same-market, same-side positions."""
    groups: dict[str, int] = {}
    for s in strategies:
        if is_open_strategy(s):
            key = f"{s.market}-{s.side}"
            groups[key] = groups.get(key, 0) + 1
    largest = max(groups.values(), default=0)
    if largest > 2:
        return "High"
    if largest > 1:
        return "Medium"
    return "Low"


def proxy_correlation(asset_a: str, asset_b: str) -> float:
    if asset_a == asset_b:
        return 1.0
    stable_a, stable_b = asset_a in STABLES, asset_b in STABLES
    if stable_a != stable_b:
        return 0.1
    major_a, major_b = asset_a in MAJORS, asset_b in MAJORS
    if major_a and major_b:
        return 0.7
    if major_a != major_b:
        return 0.4
    return 0.5


def compute_correlation_matrix(
    account: AccountState,
    strategies: Sequence[Strategy],
    defi_positions: Sequence[DefiPosition],
) -> CorrelationMatrix:
    exposure = compute_exposure_by_asset(account, strategies, defi_positions)
    assets = [
        item.asset.split(" ")[0]
        for item in exposure
        if not item.is_placeholder and "USDC" not in item.asset and "Spot" not in item.asset
    ][:MAX_MATRIX_ASSETS]

    if len(assets) < 2:
        return CorrelationMatrix()

    cells = [
        CorrelationCell(asset_a=a, asset_b=b, correlation=proxy_correlation(a, b))
        for a in assets
        for b in assets
    ]
    return CorrelationMatrix(assets=assets, cells=cells)


def correlated_pairs(matrix: CorrelationMatrix, threshold: float) -> list[tuple[str, str]]:
    """Distinct asset pairs whose correlation exceeds ``threshold``."""
    pairs: list[tuple[str, str]] = []
    for cell in matrix.cells:
        if cell.asset_a >= cell.asset_b:
            continue
        if cell.correlation > threshold:
            pairs.append((cell.asset_a, cell.asset_b))
    return pairs
