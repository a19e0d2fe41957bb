"""
Pydantic models for the Rotation Planner API.

Defines request/response schemas for validation and documentation.
Day states travel as readable names ("Ascent", "Duty", ...) per worker, with a
compact one-letter string alongside for quick inspection.
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Dict, List
from datetime import datetime

from rotaplan.engine.roster_types import DayState, Finding, RotationParameters, Schedule


class RotationRequest(BaseModel):
    """
    Request payload for POST /v1/schedule.

    - **dutyCycleLength** (N): days of work per cycle, excluding the rest block
    - **restCycleLength** (M): days off per cycle (Descent + Rest + next Ascent), >= 3
    - **inductionLength**: onboarding days in the first cycle only, 1..5
    - **horizonDays**: schedule length in days
    """
    dutyCycleLength: int = Field(..., description="N - work days per cycle")
    restCycleLength: int = Field(..., description="M - rest days per cycle")
    inductionLength: int = Field(..., description="Onboarding days (first cycle only)")
    horizonDays: int = Field(..., description="Schedule length in days")

    model_config = ConfigDict(extra='allow')

    def to_parameters(self) -> RotationParameters:
        return RotationParameters(
            duty_cycle_length=self.dutyCycleLength,
            rest_cycle_length=self.restCycleLength,
            induction_length=self.inductionLength,
            horizon_days=self.horizonDays,
        )


class RequiredDutyDaysRequest(BaseModel):
    """Request payload for POST /v1/schedule/required-duty-days."""
    dutyCycleLength: int
    restCycleLength: int
    inductionLength: int
    requiredDutyDays: int = Field(..., description="Target count of fully covered days")

    model_config = ConfigDict(extra='allow')

    def to_parameters(self) -> RotationParameters:
        return RotationParameters(
            duty_cycle_length=self.dutyCycleLength,
            rest_cycle_length=self.restCycleLength,
            induction_length=self.inductionLength,
            required_duty_days=self.requiredDutyDays,
        )


class FindingModel(BaseModel):
    """One validation finding."""
    dayIndex: int
    message: str
    code: str
    workerId: Optional[str] = None

    @classmethod
    def from_finding(cls, finding: Finding) -> "FindingModel":
        return cls(**finding.to_dict())


class ScheduleModel(BaseModel):
    """Three equal-length day-state sequences keyed by worker id."""
    anchor: List[DayState]
    flexible_a: List[DayState]
    flexible_b: List[DayState]

    @classmethod
    def from_schedule(cls, schedule: Schedule) -> "ScheduleModel":
        return cls(
            anchor=list(schedule.anchor),
            flexible_a=list(schedule.flexible_a),
            flexible_b=list(schedule.flexible_b),
        )

    def to_schedule(self) -> Schedule:
        return Schedule(tuple(self.anchor), tuple(self.flexible_a), tuple(self.flexible_b))


class ScheduleResponse(BaseModel):
    """Response payload from the schedule endpoints."""
    status: str = Field(..., description="SOLVED or INFEASIBLE_BASELINE")
    horizonDays: int
    coverageStartDay: int
    dutyCeiling: Optional[int] = Field(None, description="Duty ceiling the solver succeeded with")
    schedule: ScheduleModel
    compact: Dict[str, str] = Field(default_factory=dict, description="One-letter codes per worker")
    findings: List[FindingModel] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    requestId: Optional[str] = None


class ValidateRequest(BaseModel):
    """Request payload for POST /v1/validate."""
    schedule: ScheduleModel
    horizonDays: Optional[int] = Field(None, description="Days to scan (defaults to schedule length)")
    gracePeriodDays: int = Field(0, ge=0)


class ValidateResponse(BaseModel):
    valid: bool
    findings: List[FindingModel]
    requestId: Optional[str] = None


class HealthResponse(BaseModel):
    """Response from GET /health endpoint."""
    status: str = Field("ok")
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())


class VersionResponse(BaseModel):
    """Response from GET /version endpoint."""
    apiVersion: str
    engineVersion: str
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
