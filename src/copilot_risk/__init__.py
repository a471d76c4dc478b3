"""Risk & portfolio aggregation engine for the trading copilot dashboard."""
