"""Risk alert engine: fixed, ordered threshold rules over a portfolio snapshot."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from copilot_risk._utils import non_negative, safe_pct
from copilot_risk.classifier import classify_positions
from copilot_risk.exposure import compute_basic_concentration
from copilot_risk.models.account import AccountState
from copilot_risk.models.alert import (
    AlertActionPayload,
    AlertActionType,
    AlertSeverity,
    RiskAlert,
)
from copilot_risk.models.defi import DefiPosition
from copilot_risk.models.portfolio import ClassifiedPositions
from copilot_risk.models.risk_profile import AlertThresholds
from copilot_risk.models.strategy import Strategy

logger = structlog.get_logger()


def _plural(count: int) -> str:
    return "s" if count > 1 else ""


def _prefill(prompt: str) -> tuple[AlertActionType, AlertActionPayload]:
    return AlertActionType.PREFILL_CHAT, AlertActionPayload(chat_prompt=prompt)


def _focus(position_id: str) -> tuple[AlertActionType, AlertActionPayload]:
    return AlertActionType.FOCUS_POSITION, AlertActionPayload(position_id=position_id)


class RiskAlertEngine:
    """
    Rules are evaluated independently, in this order (at most one alert each):
    | Rule                   | High              | Medium       | Action                  |
    |------------------------|-------------------|--------------|-------------------------|
    | Concentration          | top bucket > 50%  | > 35%        | prefill rebalance       |
    | Too many positions     | > 10 open         | > 7 open     | prefill reduce / review |
    | Perp exposure ratio    | > 80% of account  | > 60%        | prefill reduce / review |
    | Missing stop loss      | any open perp     | (always high)| focus one / prefill all |
    | High leverage          | any > 15x         | > 10x        | focus one / prefill all |
    """

    def __init__(self, thresholds: AlertThresholds | None = None) -> None:
        self.thresholds = thresholds or AlertThresholds()

    def evaluate(
        self,
        account: AccountState,
        strategies: Sequence[Strategy],
        defi_positions: Sequence[DefiPosition],
        classified: ClassifiedPositions | None = None,
    ) -> list[RiskAlert]:
        """``classified`` may be passed in when the caller has already classified the lists."""
        if classified is None:
            classified = classify_positions(strategies, defi_positions)

        alerts: list[RiskAlert] = []
        for alert in [
            self._check_concentration(account, strategies, defi_positions),
            self._check_position_count(classified.open_count),
            self._check_perp_exposure(account),
            self._check_missing_stop_loss(classified.open_perps),
            self._check_leverage(classified.open_perps),
        ]:
            if alert is not None:
                alerts.append(alert)

        if alerts:
            logger.debug(
                "risk_alerts_raised",
                alerts=[a.id for a in alerts],
                severities=[a.severity.value for a in alerts],
            )
        return alerts

    def _check_concentration(
        self,
        account: AccountState,
        strategies: Sequence[Strategy],
        defi_positions: Sequence[DefiPosition],
    ) -> RiskAlert | None:
        concentration = compute_basic_concentration(account, strategies, defi_positions)
        pct = concentration.top_asset_percent
        if pct > self.thresholds.concentration_high_pct:
            severity, title = AlertSeverity.HIGH, "High concentration risk"
        elif pct > self.thresholds.concentration_med_pct:
            severity, title = AlertSeverity.MED, "Moderate concentration"
        else:
            return None
        action_type, payload = _prefill("Rebalance to reduce concentration")
        return RiskAlert(
            id="alert-concentration",
            severity=severity,
            title=title,
            detail=f"{concentration.top_asset_name} represents {pct}% of your portfolio",
            action_type=action_type,
            action_payload=payload,
            action_label="Rebalance",
        )

    def _check_position_count(self, count: int) -> RiskAlert | None:
        if count > self.thresholds.open_positions_high:
            action_type, payload = _prefill("Close 25% of my open positions")
            return RiskAlert(
                id="alert-too-many-positions",
                severity=AlertSeverity.HIGH,
                title="Too many open positions",
                detail=f"You have {count} open positions. Consider consolidating.",
                action_type=action_type,
                action_payload=payload,
                action_label="Reduce positions",
            )
        if count > self.thresholds.open_positions_med:
            action_type, payload = _prefill("Show me my riskiest positions")
            return RiskAlert(
                id="alert-too-many-positions",
                severity=AlertSeverity.MED,
                title="Many open positions",
                detail=f"You have {count} open positions",
                action_type=action_type,
                action_payload=payload,
                action_label="Review",
            )
        return None

    def _check_perp_exposure(self, account: AccountState) -> RiskAlert | None:
        exposure_pct = safe_pct(
            non_negative(account.open_perp_exposure), non_negative(account.account_value)
        )
        detail = f"{exposure_pct:.1f}% of account in perpetual positions"
        if exposure_pct > self.thresholds.perp_exposure_high_pct:
            action_type, payload = _prefill("Reduce my perp exposure to 50%")
            return RiskAlert(
                id="alert-high-perp-exposure",
                severity=AlertSeverity.HIGH,
                title="Very high perp exposure",
                detail=detail,
                action_type=action_type,
                action_payload=payload,
                action_label="Reduce exposure",
            )
        if exposure_pct > self.thresholds.perp_exposure_med_pct:
            action_type, payload = _prefill("Show me my perp exposure breakdown")
            return RiskAlert(
                id="alert-high-perp-exposure",
                severity=AlertSeverity.MED,
                title="High perp exposure",
                detail=detail,
                action_type=action_type,
                action_payload=payload,
                action_label="Review",
            )
        return None

    def _check_missing_stop_loss(self, open_perps: Sequence[Strategy]) -> RiskAlert | None:
        offenders = [s for s in open_perps if non_negative(s.stop_loss) <= 0]
        if not offenders:
            return None
        if len(offenders) == 1:
            action_type, payload = _focus(offenders[0].id)
            label = "View position"
        else:
            action_type, payload = _prefill("Add stop loss to my positions without one")
            label = "Add stop loss"
        return RiskAlert(
            id="alert-missing-stop-loss",
            severity=AlertSeverity.HIGH,
            title="Missing stop loss",
            detail=f"{len(offenders)} perp position{_plural(len(offenders))} without stop loss",
            action_type=action_type,
            action_payload=payload,
            action_label=label,
        )

    def _check_leverage(self, open_perps: Sequence[Strategy]) -> RiskAlert | None:
        offenders = [
            s for s in open_perps if non_negative(s.leverage) > self.thresholds.leverage_med
        ]
        if not offenders:
            return None
        severity = (
            AlertSeverity.HIGH
            if any(non_negative(s.leverage) > self.thresholds.leverage_high for s in offenders)
            else AlertSeverity.MED
        )
        if len(offenders) == 1:
            action_type, payload = _focus(offenders[0].id)
            label = "View position"
        else:
            action_type, payload = _prefill("Reduce leverage on my open positions")
            label = "Reduce leverage"
        return RiskAlert(
            id="alert-high-leverage",
            severity=severity,
            title="High leverage positions",
            detail=(
                f"{len(offenders)} position{_plural(len(offenders))} "
                f"with leverage > {self.thresholds.leverage_med:g}x"
            ),
            action_type=action_type,
            action_payload=payload,
            action_label=label,
        )


def compute_risk_alerts(
    account: AccountState,
    strategies: Sequence[Strategy],
    defi_positions: Sequence[DefiPosition],
    thresholds: AlertThresholds | None = None,
) -> list[RiskAlert]:
    return RiskAlertEngine(thresholds).evaluate(account, strategies, defi_positions)
