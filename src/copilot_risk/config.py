"""Settings (pydantic-settings, loaded from env vars)."""

from pydantic_settings import BaseSettings

from copilot_risk.models.risk_profile import AlertThresholds, RiskProfile


class Settings(BaseSettings):
    # --- Risk Profile ---
    MAX_PER_TRADE_RISK_PCT: float = 3.0
    MIN_LIQ_BUFFER_PCT: float = 15.0
    FUNDING_ALERT_PCT: float = 0.15
    CORRELATION_HEDGE_THRESHOLD: float = 0.75

    # --- Alert Thresholds ---
    ALERT_CONCENTRATION_HIGH_PCT: float = 50.0
    ALERT_CONCENTRATION_MED_PCT: float = 35.0
    ALERT_OPEN_POSITIONS_HIGH: int = 10
    ALERT_OPEN_POSITIONS_MED: int = 7
    ALERT_PERP_EXPOSURE_HIGH_PCT: float = 80.0
    ALERT_PERP_EXPOSURE_MED_PCT: float = 60.0
    ALERT_LEVERAGE_HIGH: float = 15.0
    ALERT_LEVERAGE_MED: float = 10.0

    # --- Runtime ---
    LOG_LEVEL: str = "INFO"
    SNAPSHOT_PATH: str = ""

    model_config = {"env_prefix": "", "case_sensitive": True}

    def alert_thresholds(self) -> AlertThresholds:
        return AlertThresholds(
            concentration_high_pct=self.ALERT_CONCENTRATION_HIGH_PCT,
            concentration_med_pct=self.ALERT_CONCENTRATION_MED_PCT,
            open_positions_high=self.ALERT_OPEN_POSITIONS_HIGH,
            open_positions_med=self.ALERT_OPEN_POSITIONS_MED,
            perp_exposure_high_pct=self.ALERT_PERP_EXPOSURE_HIGH_PCT,
            perp_exposure_med_pct=self.ALERT_PERP_EXPOSURE_MED_PCT,
            leverage_high=self.ALERT_LEVERAGE_HIGH,
            leverage_med=self.ALERT_LEVERAGE_MED,
        )

    def risk_profile(self) -> RiskProfile:
        return RiskProfile(
            max_per_trade_risk_pct=self.MAX_PER_TRADE_RISK_PCT,
            min_liq_buffer_pct=self.MIN_LIQ_BUFFER_PCT,
            funding_alert_pct=self.FUNDING_ALERT_PCT,
            correlation_hedge_threshold=self.CORRELATION_HEDGE_THRESHOLD,
            alert_thresholds=self.alert_thresholds(),
        )
