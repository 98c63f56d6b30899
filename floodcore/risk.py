"""
Risk assessment engine - deterministic flood vulnerability scoring.

Owns the property_id -> RiskAssessment map. Scores are a pure function of
caller-declared elevation and flood history; storage writes happen only
after every check has passed, so a rejected call leaves no trace.
"""

import logging

from floodcore.authorization import AuthorizationRegistry
from floodcore.models import (
    OperationResult,
    Principal,
    RiskAssessment,
    RiskErrorCode,
)
from floodcore.config import (
    HIGH_RISK_THRESHOLD,
    MAX_RISK_SCORE,
    ELEVATION_LOW_BAND,
    ELEVATION_MID_BAND,
    ELEVATION_FACTORS,
    FLOOD_HISTORY_WEIGHT,
)


logger = logging.getLogger(__name__)


def calculate_risk_score(elevation: int, flood_history_count: int) -> int:
    """
    Bucketed elevation factor plus a linear flood history factor.

    elevation < 10       -> 50
    10 <= elevation < 30 -> 30
    elevation >= 30      -> 10
    + 10 per recorded flood

    Not clamped: callers compare against MAX_RISK_SCORE themselves.

    Raises:
        ValueError: If either input is negative.
    """
    if elevation < 0 or flood_history_count < 0:
        raise ValueError(
            f"elevation and flood_history_count must be non-negative, "
            f"got {elevation} and {flood_history_count}"
        )

    if elevation < ELEVATION_LOW_BAND:
        elevation_factor = ELEVATION_FACTORS["low"]
    elif elevation < ELEVATION_MID_BAND:
        elevation_factor = ELEVATION_FACTORS["mid"]
    else:
        elevation_factor = ELEVATION_FACTORS["high"]

    return elevation_factor + flood_history_count * FLOOD_HISTORY_WEIGHT


class RiskAssessmentEngine:
    """Stores one RiskAssessment per property, gated by its own registry."""

    def __init__(self, owner: Principal):
        self.authorization = AuthorizationRegistry(owner)
        self._assessments: dict[int, RiskAssessment] = {}

    # --- Assessor Admin ---

    def add_authorized_assessor(self, caller: Principal, assessor: Principal) -> OperationResult[bool]:
        return self.authorization.add_authorized(caller, assessor)

    def remove_authorized_assessor(self, caller: Principal, assessor: Principal) -> OperationResult[bool]:
        return self.authorization.remove_authorized(caller, assessor)

    def is_authorized_assessor(self, assessor: Principal) -> bool:
        return self.authorization.is_authorized(assessor)

    # --- Mutations ---

    def assess_risk(
        self,
        caller: Principal,
        property_id: int,
        elevation: int,
        flood_history_count: int,
        *,
        height: int,
    ) -> OperationResult[int]:
        """
        Computes and stores a fresh assessment, replacing any previous one.

        flood_history_count is an absolute value, not an increment.
        last_assessment_date is stamped with the supplied logical height.

        Returns ok(score), or:
        - NOT_AUTHORIZED (100) if caller is not an authorized assessor
        - INVALID_SCORE (101) if the score exceeds MAX_RISK_SCORE
        """
        if not self.authorization.is_authorized(caller):
            return self._reject(
                RiskErrorCode.NOT_AUTHORIZED, property_id,
                f"Caller {caller} is not an authorized assessor",
            )

        risk_score = calculate_risk_score(elevation, flood_history_count)
        if risk_score > MAX_RISK_SCORE:
            return self._reject(
                RiskErrorCode.INVALID_SCORE, property_id,
                f"Risk score {risk_score} exceeds {MAX_RISK_SCORE}",
            )

        assessment = RiskAssessment(
            property_id=property_id,
            risk_score=risk_score,
            flood_history_count=flood_history_count,
            last_assessment_date=height,
            high_risk=risk_score > HIGH_RISK_THRESHOLD,
        )
        self._assessments[property_id] = assessment

        logger.info(
            "Assessed property %s: score=%s high_risk=%s",
            property_id, risk_score, assessment.high_risk,
            extra={"property_id": property_id, "caller": caller},
        )
        return OperationResult[int].success(risk_score)

    def record_flood_event(self, caller: Principal, property_id: int) -> OperationResult[int]:
        """
        Increments the flood history count by one.

        Creates a zeroed record if the property was never assessed.
        risk_score and high_risk are NOT recomputed; they stay stale
        until the next assess_risk call.
        """
        if not self.authorization.is_authorized(caller):
            return self._reject(
                RiskErrorCode.NOT_AUTHORIZED, property_id,
                f"Caller {caller} is not an authorized assessor",
            )

        existing = self._assessments.get(property_id)
        if existing is None:
            existing = RiskAssessment(property_id=property_id)

        updated = existing.model_copy(
            update={"flood_history_count": existing.flood_history_count + 1}
        )
        self._assessments[property_id] = updated

        logger.info(
            "Recorded flood event for property %s (count=%s)",
            property_id, updated.flood_history_count,
            extra={"property_id": property_id, "caller": caller},
        )
        return OperationResult[int].success(updated.flood_history_count)

    # --- Reads ---

    def get_risk_assessment(self, property_id: int) -> RiskAssessment | None:
        return self._assessments.get(property_id)

    def is_high_risk(self, property_id: int) -> bool:
        assessment = self.get_risk_assessment(property_id)
        return assessment.high_risk if assessment is not None else False

    def _reject(self, code: RiskErrorCode, property_id: int, message: str) -> OperationResult[int]:
        logger.warning(
            message,
            extra={"property_id": property_id, "error_code": code.value},
        )
        return OperationResult[int].failure(code, message)
