"""Errors raised by schedule generation."""

from typing import List, Optional, Sequence


class SchedulingError(Exception):
    """Base class for all generation failures."""


class ConfigurationError(SchedulingError):
    """Input parameters structurally cannot yield a schedule."""

    def __init__(self, issues: Sequence, message: Optional[str] = None):
        self.issues = list(issues)
        if message is None:
            message = "; ".join(issue.message for issue in self.issues) or "Invalid parameters"
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": "CONFIGURATION_ERROR",
            "message": str(self),
            "issues": [issue.to_dict() for issue in self.issues],
        }


class InfeasibleScheduleError(SchedulingError):
    """Parameters are valid but no duty ceiling / horizon yields full coverage."""

    def __init__(self, message: str, params=None, ceilings_tried: Optional[List[int]] = None):
        self.params = params
        self.ceilings_tried = list(ceilings_tried or [])
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": "INFEASIBLE_SCHEDULE",
            "message": str(self),
            "ceilingsTried": self.ceilings_tried,
        }
