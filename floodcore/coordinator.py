"""
Coordinator - wires the risk engine's output into insurance verification.

Reads the stored risk score and hands it to the insurance engine as an
explicit argument, keeping the cross-engine dependency visible at the call
site. No business logic lives here beyond the hand-off and the summary view.
"""

import logging

from floodcore.risk import RiskAssessmentEngine
from floodcore.insurance import InsuranceVerificationEngine
from floodcore.models import (
    CoordinatorErrorCode,
    OperationResult,
    Principal,
    PropertyRiskSummary,
)


logger = logging.getLogger(__name__)


class FloodCoverageCoordinator:
    """Hands stored risk scores to insurance verification and joins both views."""

    def __init__(self, risk_engine: RiskAssessmentEngine, insurance_engine: InsuranceVerificationEngine):
        self.risk_engine = risk_engine
        self.insurance_engine = insurance_engine

    def verify_property_coverage(
        self,
        caller: Principal,
        property_id: int,
        property_value: int,
        *,
        height: int,
    ) -> OperationResult[bool]:
        """
        Verifies the property's policy against its last stored risk score.

        Fails with ASSESSMENT_NOT_FOUND (103) if the property was never
        assessed; otherwise returns the insurance engine's result as is.
        """
        assessment = self.risk_engine.get_risk_assessment(property_id)
        if assessment is None:
            message = f"No risk assessment stored for property {property_id}"
            logger.warning(
                message,
                extra={
                    "property_id": property_id,
                    "error_code": CoordinatorErrorCode.ASSESSMENT_NOT_FOUND.value,
                },
            )
            return OperationResult[bool].failure(CoordinatorErrorCode.ASSESSMENT_NOT_FOUND, message)

        return self.insurance_engine.verify_insurance_policy(
            caller,
            property_id,
            assessment.risk_score,
            property_value,
            height=height,
        )

    def property_summary(self, property_id: int) -> PropertyRiskSummary:
        assessment = self.risk_engine.get_risk_assessment(property_id)
        return PropertyRiskSummary(
            property_id=property_id,
            risk_score=assessment.risk_score if assessment is not None else None,
            high_risk=self.risk_engine.is_high_risk(property_id),
            insurance_verified=self.insurance_engine.is_insurance_verified(property_id),
            adequate_coverage=self.insurance_engine.has_adequate_coverage(property_id),
        )
