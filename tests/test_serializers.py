"""Tests for request validation and routine (de)serialization."""

import json
import random

import pytest

from conftest import make_request
from routine_forge.core.generator import generate_routine
from routine_forge.io.serializers import (
    ValidationError,
    dict_to_routine,
    parse_equipment,
    request_from_dict,
    routine_to_dict,
    routine_to_json,
    validate_request,
)


def _request(**overrides):
    data = {
        "goal": "strength",
        "days_per_week": 4,
        "session_duration_min": 60,
        "fitness_level": "advanced",
    }
    data.update(overrides)
    return data


class TestRequestParsing:

    def test_minimal_request_defaults(self):
        req = request_from_dict(_request())
        assert req.total_weeks == 4
        assert req.available_equipment == []

    def test_camel_case_aliases(self):
        req = request_from_dict({
            "goal": "endurance",
            "daysPerWeek": "3",
            "sessionDurationMin": 45,
            "fitnessLevel": "beginner",
            "availableEquipment": ["Dumbbell"],
            "totalWeeks": 8,
        })
        assert req.days_per_week == 3
        assert req.session_duration_min == 45
        assert req.available_equipment == ["dumbbell"]
        assert req.total_weeks == 8

    @pytest.mark.parametrize("missing", ["goal", "days_per_week", "session_duration_min", "fitness_level"])
    def test_required_fields(self, missing):
        data = _request()
        del data[missing]
        with pytest.raises(ValidationError, match=missing):
            request_from_dict(data)

    @pytest.mark.parametrize("field,value", [
        ("days_per_week", 0),
        ("days_per_week", "three"),
        ("days_per_week", True),
        ("session_duration_min", 10),
        ("session_duration_min", 150),
        ("total_weeks", 0),
        ("goal", "   "),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            request_from_dict(_request(**{field: value}))

    def test_days_above_six_are_accepted(self):
        # clamped later by the generator
        assert request_from_dict(_request(days_per_week=10)).days_per_week == 10

    def test_not_a_mapping(self):
        with pytest.raises(ValidationError):
            request_from_dict(["strength"])  # type: ignore[arg-type]

    def test_validate_request_directly(self):
        with pytest.raises(ValidationError, match="session_duration_min"):
            validate_request(make_request(session_duration_min=5))
        assert validate_request(make_request()).goal == "general-fitness"


class TestEquipment:

    @pytest.mark.parametrize("value,expected", [
        (None, []),
        ("", []),
        ("barbell, Dumbbell ,,barbell", ["barbell", "dumbbell"]),
        (["barbell", "cable,machine"], ["barbell", "cable", "machine"]),
    ])
    def test_parse(self, value, expected):
        assert parse_equipment(value) == expected

    def test_rejects_non_strings(self):
        with pytest.raises(ValidationError):
            parse_equipment(["barbell", 3])
        with pytest.raises(ValidationError):
            parse_equipment(42)  # type: ignore[arg-type]


class TestRoutineDicts:

    def test_preview_round_trip(self, small_catalog):
        routine = generate_routine(make_request(total_weeks=5), small_catalog, random.Random(8))
        data = json.loads(routine_to_json(routine))
        assert dict_to_routine(data) == routine
        assert data == routine_to_dict(routine)

    def test_preview_has_no_ids(self, small_catalog):
        routine = generate_routine(make_request(), small_catalog, random.Random(8))
        data = routine_to_dict(routine)
        assert "id" not in data
        assert "user_id" not in data

    def test_bad_exercise_rejected(self, small_catalog):
        routine = generate_routine(make_request(total_weeks=1), small_catalog, random.Random(8))
        data = routine_to_dict(routine)
        data["weeks"][0]["days"][0]["exercises"][0]["sets"] = 0
        with pytest.raises(ValidationError):
            dict_to_routine(data)

    def test_missing_top_level_field(self):
        with pytest.raises(ValidationError):
            dict_to_routine({"goal": "strength"})
