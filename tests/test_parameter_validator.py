"""
Tests for the parameter validator.
"""

import sys
import pathlib
sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent.parent))

import pytest
from rotaplan.engine.errors import ConfigurationError
from rotaplan.engine.parameter_validator import (
    REQUIRED_DUTY_MODE,
    check_parameters,
    validate_parameters,
)
from rotaplan.engine.roster_types import RotationParameters


class TestCheckParameters:

    def test_valid_parameters(self):
        result = check_parameters(RotationParameters(14, 7, 5, horizon_days=45))
        assert result.is_valid
        assert result.warnings == []

    def test_boolean_is_not_an_integer(self):
        result = check_parameters(RotationParameters(True, 7, 5, horizon_days=45))
        assert [(e.field, e.code) for e in result.errors] == [("dutyCycleLength", "INVALID_TYPE")]

    def test_missing_horizon(self):
        result = check_parameters(RotationParameters(14, 7, 5))
        assert [(e.field, e.code) for e in result.errors] == [("horizonDays", "MISSING_FIELD")]

    def test_required_mode_ignores_horizon(self):
        result = check_parameters(RotationParameters(14, 7, 5, required_duty_days=30), REQUIRED_DUTY_MODE)
        assert result.is_valid

    def test_short_duty_cycle_warns(self):
        result = check_parameters(RotationParameters(10, 6, 2, horizon_days=30))
        assert result.is_valid
        assert [w.code for w in result.warnings] == ["EXTENDED_DUTY_REQUIRED"]

    def test_issue_serialization(self):
        result = check_parameters(RotationParameters(5, 4, 5, horizon_days=30))
        assert not result.is_valid
        payload = result.errors[0].to_dict()
        assert payload["code"] == "NO_DUTY_AFTER_INDUCTION"
        assert payload["severity"] == "error"


class TestValidateParameters:

    def test_raises_with_all_issues(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_parameters(RotationParameters(14, 2, 9, horizon_days=45))
        payload = exc_info.value.to_dict()
        assert payload["error"] == "CONFIGURATION_ERROR"
        assert {issue["field"] for issue in payload["issues"]} == {"restCycleLength", "inductionLength"}

    def test_returns_result_with_warnings(self):
        result = validate_parameters(RotationParameters(10, 6, 2, horizon_days=30))
        assert len(result.warnings) == 1
