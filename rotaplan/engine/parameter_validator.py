"""
Parameter Validator for the rotation planner.
Rejects structurally invalid inputs before any generation is attempted.
"""

import logging
from typing import Dict, List

from rotaplan.engine.errors import ConfigurationError
from rotaplan.engine.roster_types import (
    RotationParameters,
    MIN_DUTY_BLOCK,
    MIN_REST_CYCLE_LENGTH,
    MIN_INDUCTION_LENGTH,
    MAX_INDUCTION_LENGTH,
)

logger = logging.getLogger(__name__)

HORIZON_MODE = "horizon"
REQUIRED_DUTY_MODE = "requiredDutyDays"


class ParameterIssue:
    """Represents a validation error or warning"""
    def __init__(self, field: str, code: str, message: str, severity: str = "error"):
        self.field = field
        self.code = code
        self.message = message
        self.severity = severity

    def to_dict(self) -> Dict[str, str]:
        return {
            "field": self.field,
            "code": self.code,
            "message": self.message,
            "severity": self.severity
        }


class ParameterCheckResult:
    """Result of parameter validation"""
    def __init__(self):
        self.errors: List[ParameterIssue] = []
        self.warnings: List[ParameterIssue] = []

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, field: str, code: str, message: str):
        self.errors.append(ParameterIssue(field, code, message, "error"))

    def add_warning(self, field: str, code: str, message: str):
        self.warnings.append(ParameterIssue(field, code, message, "warning"))


def check_parameters(params: RotationParameters, mode: str = HORIZON_MODE) -> ParameterCheckResult:
    """
    Validate rotation parameters.

    Errors block generation, warnings are informational.
    """
    result = ParameterCheckResult()

    _check_integers(params, mode, result)
    if not result.is_valid:
        return result

    _check_ranges(params, mode, result)
    _check_duty_room(params, result)
    if result.is_valid:
        _check_feasibility_hints(params, result)

    return result


def validate_parameters(params: RotationParameters, mode: str = HORIZON_MODE) -> ParameterCheckResult:
    """Raise ConfigurationError listing every problem, or return the result with warnings."""
    result = check_parameters(params, mode)
    for warning in result.warnings:
        logger.warning(f"{warning.field}: {warning.message}")
    if not result.is_valid:
        logger.error(f"Rejected parameters ({params.describe()}): "
                     f"{[e.code for e in result.errors]}")
        raise ConfigurationError(result.errors)
    return result


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_integers(params: RotationParameters, mode: str, result: ParameterCheckResult):
    fields = {
        'dutyCycleLength': params.duty_cycle_length,
        'restCycleLength': params.rest_cycle_length,
        'inductionLength': params.induction_length,
    }
    if mode == REQUIRED_DUTY_MODE:
        fields['requiredDutyDays'] = params.required_duty_days
    else:
        fields['horizonDays'] = params.horizon_days

    for name, value in fields.items():
        if value is None:
            result.add_error(name, "MISSING_FIELD", f"{name} is required")
        elif not _is_int(value):
            result.add_error(name, "INVALID_TYPE", f"{name} must be an integer, got {value!r}")


def _check_ranges(params: RotationParameters, mode: str, result: ParameterCheckResult):
    if params.duty_cycle_length < 1:
        result.add_error('dutyCycleLength', 'OUT_OF_RANGE',
                         f"dutyCycleLength must be >= 1 (got {params.duty_cycle_length})")

    if params.rest_cycle_length < MIN_REST_CYCLE_LENGTH:
        result.add_error('restCycleLength', 'OUT_OF_RANGE',
                         f"restCycleLength must be >= {MIN_REST_CYCLE_LENGTH} to fit Descent, "
                         f"at least one Rest day and the next Ascent (got {params.rest_cycle_length})")

    if not MIN_INDUCTION_LENGTH <= params.induction_length <= MAX_INDUCTION_LENGTH:
        result.add_error('inductionLength', 'OUT_OF_RANGE',
                         f"inductionLength must be in [{MIN_INDUCTION_LENGTH}, {MAX_INDUCTION_LENGTH}] "
                         f"(got {params.induction_length})")

    if mode == REQUIRED_DUTY_MODE:
        if params.required_duty_days < 1:
            result.add_error('requiredDutyDays', 'OUT_OF_RANGE',
                             f"requiredDutyDays must be >= 1 (got {params.required_duty_days})")
    elif params.horizon_days < 1:
        result.add_error('horizonDays', 'OUT_OF_RANGE',
                         f"horizonDays must be >= 1 (got {params.horizon_days})")


def _check_duty_room(params: RotationParameters, result: ParameterCheckResult):
    """After induction there must be room for a real duty block."""
    room = params.duty_cycle_length - params.induction_length
    if room < MIN_DUTY_BLOCK:
        result.add_error('dutyCycleLength', 'NO_DUTY_AFTER_INDUCTION',
                         f"dutyCycleLength ({params.duty_cycle_length}) must exceed inductionLength "
                         f"({params.induction_length}) by at least {MIN_DUTY_BLOCK}")


def _check_feasibility_hints(params: RotationParameters, result: ParameterCheckResult):
    # Two flexible rest periods (each >= M) must fit inside one anchor duty block
    if params.duty_cycle_length < 2 * params.rest_cycle_length:
        result.add_warning('dutyCycleLength', 'EXTENDED_DUTY_REQUIRED',
                           f"dutyCycleLength ({params.duty_cycle_length}) < 2 x restCycleLength "
                           f"({params.rest_cycle_length}); coverage is only reachable if a flexible "
                           f"worker stays on duty well beyond the nominal cycle")
