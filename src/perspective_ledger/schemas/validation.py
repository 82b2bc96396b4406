"""Validation-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictBool, computed_field

from perspective_ledger.services.aggregation import ValidationStats


class ValidationCreate(BaseModel):
    """Schema for recording whether a perspective is fairly represented."""

    node_id: str = Field(..., min_length=1, max_length=64)
    perspective_id: str = Field(..., min_length=1, max_length=64)
    is_represented: StrictBool
    feedback: str | None = Field(default=None, max_length=2000)


class ValidationOut(BaseModel):
    """Stored validation as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    node_id: str
    node_version: int
    perspective_id: str
    user_id: str | None
    is_represented: bool
    feedback: str | None
    submitted_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def identity(self) -> str:
        return "anonymous" if self.user_id is None else "authenticated"


class ValidationStatsOut(BaseModel):
    """Representation rate for one perspective of a node version."""

    perspective_id: str
    node_version: int
    total_validations: int
    positive_validations: int
    validation_rate: float = Field(..., ge=0.0, le=1.0)

    @classmethod
    def from_stats(cls, stats: ValidationStats) -> "ValidationStatsOut":
        return cls(
            perspective_id=stats.perspective_id,
            node_version=stats.node_version,
            total_validations=stats.total_validations,
            positive_validations=stats.positive_validations,
            validation_rate=stats.validation_rate,
        )
