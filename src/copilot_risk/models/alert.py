"""RiskAlert model: the contract consumed by the dashboard's alert panel."""

from __future__ import annotations

import enum

from copilot_risk.models import CamelModel


class AlertSeverity(str, enum.Enum):
    LOW = "low"
    MED = "med"
    HIGH = "high"


class AlertActionType(str, enum.Enum):
    FOCUS_POSITION = "focusPosition"
    PREFILL_CHAT = "prefillChat"


class AlertActionPayload(CamelModel):
    position_id: str | None = None
    chat_prompt: str | None = None


class RiskAlert(CamelModel):
    id: str
    severity: AlertSeverity
    title: str
    detail: str
    action_type: AlertActionType
    action_payload: AlertActionPayload
    action_label: str
