"""
Configuration for the flood risk and insurance verification core.

All thresholds, factors, and divisors in one place.
Change here, not in business logic modules.
"""

import os

# --- Risk Classification ---

LOW_RISK_THRESHOLD: int = 30
MEDIUM_RISK_THRESHOLD: int = 70
HIGH_RISK_THRESHOLD: int = 90

# Scores above this are rejected, nothing is stored
MAX_RISK_SCORE: int = 100

# --- Risk Scoring ---

# Elevation bands: below LOW -> LOW factor, below MID -> MID factor, else HIGH factor
ELEVATION_LOW_BAND: int = 10
ELEVATION_MID_BAND: int = 30

ELEVATION_FACTORS: dict[str, int] = {
    "low": 50,
    "mid": 30,
    "high": 10,
}

FLOOD_HISTORY_WEIGHT: int = 10

# --- Required Coverage ---

# Flat floor: property_value // COVERAGE_FLOOR_DIVISOR
COVERAGE_FLOOR_DIVISOR: int = 2

# Surcharge: property_value * risk_score // RISK_SURCHARGE_DIVISOR
RISK_SURCHARGE_DIVISOR: int = 1000

# --- Logging ---

LOG_LEVEL: str = os.environ.get("FLOODCORE_LOG_LEVEL", "INFO")
