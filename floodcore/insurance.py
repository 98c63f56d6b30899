"""
Insurance verification engine - policy records and coverage adequacy.

Owns the property_id -> InsurancePolicy map. The risk score used for
verification arrives as a call argument; this module never reads the
risk engine's storage.
"""

import logging

from floodcore.authorization import AuthorizationRegistry
from floodcore.models import (
    InsuranceErrorCode,
    InsurancePolicy,
    OperationResult,
    Principal,
)
from floodcore.config import (
    COVERAGE_FLOOR_DIVISOR,
    MAX_RISK_SCORE,
    RISK_SURCHARGE_DIVISOR,
)


logger = logging.getLogger(__name__)


def calculate_required_coverage(risk_score: int, property_value: int) -> int:
    """
    Minimum coverage for a property: a flat half-value floor plus a
    risk-proportional surcharge.

    Integer arithmetic throughout. The surcharge multiplies before it
    divides, so (20, 1_000_000) -> 520_000 and (80, 1_000_000) -> 580_000.

    Raises:
        ValueError: If risk_score is outside 0..MAX_RISK_SCORE or
            property_value is negative.
    """
    if not 0 <= risk_score <= MAX_RISK_SCORE:
        raise ValueError(f"risk_score must be between 0 and {MAX_RISK_SCORE}, got {risk_score}")
    if property_value < 0:
        raise ValueError(f"property_value must be non-negative, got {property_value}")

    floor = property_value // COVERAGE_FLOOR_DIVISOR
    surcharge = (property_value * risk_score) // RISK_SURCHARGE_DIVISOR
    return floor + surcharge


class InsuranceVerificationEngine:
    """Stores one InsurancePolicy per property, verification gated by its own registry."""

    def __init__(self, owner: Principal):
        self.authorization = AuthorizationRegistry(owner)
        self._policies: dict[int, InsurancePolicy] = {}

    # --- Verifier Admin ---

    def add_authorized_verifier(self, caller: Principal, verifier: Principal) -> OperationResult[bool]:
        return self.authorization.add_authorized(caller, verifier)

    def remove_authorized_verifier(self, caller: Principal, verifier: Principal) -> OperationResult[bool]:
        return self.authorization.remove_authorized(caller, verifier)

    def is_authorized_verifier(self, verifier: Principal) -> bool:
        return self.authorization.is_authorized(verifier)

    # --- Mutations ---

    def register_insurance_policy(
        self,
        property_id: int,
        policy_number: str,
        provider: str,
        coverage_amount: int,
        expiration_date: int,
    ) -> OperationResult[bool]:
        """
        Stores a policy, replacing any previous one for the property.

        Open to any caller. The new record starts unverified with
        adequate_coverage=False.
        """
        policy = InsurancePolicy(
            property_id=property_id,
            policy_number=policy_number,
            provider=provider,
            coverage_amount=coverage_amount,
            expiration_date=expiration_date,
        )
        replaced = property_id in self._policies
        self._policies[property_id] = policy

        logger.info(
            "Registered policy %s (%s) for property %s%s",
            policy_number, provider, property_id, " (replaced existing)" if replaced else "",
            extra={"property_id": property_id},
        )
        return OperationResult[bool].success(True)

    def verify_insurance_policy(
        self,
        caller: Principal,
        property_id: int,
        risk_score: int,
        property_value: int,
        *,
        height: int,
    ) -> OperationResult[bool]:
        """
        Marks a policy verified and records whether its coverage is adequate.

        Checks, in order:
        1. caller is an authorized verifier   -> NOT_AUTHORIZED (100)
        2. a policy exists for property_id    -> POLICY_NOT_FOUND (101)
        3. height < policy.expiration_date    -> EXPIRED_POLICY (102)

        Returns ok(adequate_coverage). The call succeeds even when coverage
        is inadequate; verified and adequate_coverage are separate signals.

        Raises:
            ValueError: If risk_score or property_value is out of range.
                Raised before anything is written.
        """
        if not self.authorization.is_authorized(caller):
            return self._reject(
                InsuranceErrorCode.NOT_AUTHORIZED, property_id,
                f"Caller {caller} is not an authorized verifier",
            )

        policy = self._policies.get(property_id)
        if policy is None:
            return self._reject(
                InsuranceErrorCode.POLICY_NOT_FOUND, property_id,
                f"No policy registered for property {property_id}",
            )

        if height >= policy.expiration_date:
            return self._reject(
                InsuranceErrorCode.EXPIRED_POLICY, property_id,
                f"Policy {policy.policy_number} expired at height {policy.expiration_date} "
                f"(current {height})",
            )

        required = calculate_required_coverage(risk_score, property_value)
        adequate = policy.coverage_amount >= required

        self._policies[property_id] = policy.model_copy(
            update={"verified": True, "adequate_coverage": adequate}
        )

        logger.info(
            "Verified policy %s for property %s: coverage=%s required=%s adequate=%s",
            policy.policy_number, property_id, policy.coverage_amount, required, adequate,
            extra={"property_id": property_id, "caller": caller},
        )
        return OperationResult[bool].success(adequate)

    # --- Reads ---

    def calculate_required_coverage(self, risk_score: int, property_value: int) -> int:
        return calculate_required_coverage(risk_score, property_value)

    def get_insurance_policy(self, property_id: int) -> InsurancePolicy | None:
        return self._policies.get(property_id)

    def has_adequate_coverage(self, property_id: int) -> bool:
        policy = self.get_insurance_policy(property_id)
        return policy.adequate_coverage if policy is not None else False

    def is_insurance_verified(self, property_id: int) -> bool:
        policy = self.get_insurance_policy(property_id)
        return policy.verified if policy is not None else False

    def _reject(self, code: InsuranceErrorCode, property_id: int, message: str) -> OperationResult[bool]:
        logger.warning(
            message,
            extra={"property_id": property_id, "error_code": code.value},
        )
        return OperationResult[bool].failure(code, message)
