"""
Domain models for the flood risk and insurance verification core.

All Pydantic models in one place. Imported by the authorization registry,
both engines, and the coordinator. Single source of truth for data contracts.
"""

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


T = TypeVar("T")

# Opaque caller identity (address / key-derived id). Compared byte-for-byte.
Principal = str


# --- Error Codes ---
# Numeric values are stable and shared with existing callers. Note that 101
# means different things in the risk and insurance engines.

class AuthErrorCode(int, Enum):
    NOT_AUTHORIZED = 100


class RiskErrorCode(int, Enum):
    NOT_AUTHORIZED = 100
    INVALID_SCORE = 101


class InsuranceErrorCode(int, Enum):
    NOT_AUTHORIZED = 100
    POLICY_NOT_FOUND = 101
    EXPIRED_POLICY = 102


class CoordinatorErrorCode(int, Enum):
    """Raised only by the coordinator, never by an engine."""
    ASSESSMENT_NOT_FOUND = 103


# --- Operation Result ---

class OperationResult(BaseModel, Generic[T]):
    """
    Outcome of a mutating engine call.

    Rejections are returned, not raised: ok=False with a numeric error code
    and a human-readable message. A failed call never changes engine state.
    """
    ok: bool
    value: T | None = None
    error: int | None = None
    error_message: str | None = None

    @classmethod
    def success(cls, value: T) -> "OperationResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, code: int, message: str) -> "OperationResult[T]":
        return cls(ok=False, error=int(code), error_message=message)

    def unwrap(self) -> T:
        """Returns the success payload or raises EngineError."""
        if not self.ok:
            raise EngineError(self.error, self.error_message or "")
        return self.value


# --- Authorization Context ---

class AuthorizationEntry(BaseModel):
    """Flag for one principal. Entries are flipped, never deleted."""
    model_config = ConfigDict(frozen=True)

    principal: Principal
    authorized: bool


# --- Risk Context ---

class RiskAssessment(BaseModel):
    """
    Stored vulnerability record for one property.

    high_risk reflects risk_score as of the last assess_risk call.
    record_flood_event bumps flood_history_count without touching either.
    """
    model_config = ConfigDict(frozen=True)

    property_id: int = Field(ge=0)
    risk_score: int = Field(0, ge=0, le=100)
    flood_history_count: int = Field(0, ge=0)
    last_assessment_date: int = Field(0, ge=0)
    high_risk: bool = False


# --- Insurance Context ---

class InsurancePolicy(BaseModel):
    """Policy record held against a property."""
    model_config = ConfigDict(frozen=True)

    property_id: int = Field(ge=0)
    policy_number: str
    provider: str
    coverage_amount: int = Field(ge=0)
    expiration_date: int = Field(ge=0)

    # Set together, only by a successful verification
    verified: bool = False
    adequate_coverage: bool = False


# --- Coordinator Context ---

class PropertyRiskSummary(BaseModel):
    """Read-only join of both engines' view of one property."""
    property_id: int
    risk_score: int | None = None
    high_risk: bool = False
    insurance_verified: bool = False
    adequate_coverage: bool = False


# --- Exceptions ---

class EngineError(Exception):
    """A rejected operation surfaced through OperationResult.unwrap()."""

    def __init__(self, code: int | None, message: str = ""):
        self.code = code
        super().__init__(f"[{code}] {message}" if message else f"[{code}]")
