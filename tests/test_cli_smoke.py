"""
Smoke tests for the routine-forge CLI.

Tests basic functionality:
- App runs without errors
- Routines are generated (table and JSON)
- Saved routines can be listed, shown and deleted
- Catalog and goal tables print
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from routine_forge.cli.main import app


runner = CliRunner()


@pytest.fixture
def store_path(tmp_path) -> Path:
    return tmp_path / "routines.json"


def _generate_json(*extra: str) -> dict:
    result = runner.invoke(app, [
        "generate",
        "--goal", "strength",
        "--days", "4",
        "--duration", "60",
        "--level", "advanced",
        "--equipment", "barbell,bodyweight",
        "--seed", "7",
        "--json",
        *extra,
    ])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def _save(store_path: Path, user: str = "local") -> str:
    data = _generate_json("--save", "--store-path", str(store_path), "--user", user)
    return data["id"]


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "generate" in result.output

    def test_generate_table_preview(self, store_path):
        result = runner.invoke(app, [
            "generate", "-g", "muscle-building", "-d", "3", "-m", "45", "-l", "beginner",
            "--seed", "1", "--store-path", str(store_path),
        ])
        assert result.exit_code == 0, result.output
        assert "Muscle Building" in result.output
        assert "Week 4" in result.output
        assert "--save" in result.output
        assert not store_path.exists()

    def test_generate_json_preview(self):
        data = _generate_json()
        assert data["name"] == "Strength – 4 Day Plan"
        assert "id" not in data
        assert len(data["weeks"]) == 4
        assert data["weeks"][3]["is_deload"] is True
        assert data["available_equipment"] == ["barbell", "bodyweight"]
        for day in data["weeks"][3]["days"]:
            assert all(ex["target_weight"] is None for ex in day["exercises"])

    def test_seed_is_reproducible(self):
        assert _generate_json() == _generate_json()

    def test_generate_from_request_file(self, tmp_path):
        request = tmp_path / "request.json"
        request.write_text(json.dumps({
            "goal": "endurance",
            "daysPerWeek": 2,
            "sessionDurationMin": 30,
            "fitnessLevel": "intermediate",
            "totalWeeks": 8,
        }), encoding="utf-8")

        result = runner.invoke(app, ["generate", "--request", str(request), "--weeks", "5", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["goal"] == "endurance"
        assert data["days_per_week"] == 2
        assert data["total_weeks"] == 5

    def test_missing_fields_rejected(self):
        result = runner.invoke(app, ["generate", "--goal", "strength"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_duration_out_of_range_rejected(self):
        result = runner.invoke(app, [
            "generate", "-g", "strength", "-d", "3", "-m", "5", "-l", "beginner",
        ])
        assert result.exit_code == 1
        assert "session_duration_min" in result.output

    def test_unknown_goal_warns_and_falls_back(self):
        result = runner.invoke(app, [
            "generate", "-g", "unknown-goal-xyz", "-d", "3", "-m", "60", "-l", "beginner", "--seed", "3",
        ])
        assert result.exit_code == 0, result.output
        assert "Warning" in result.output
        assert "general-fitness" in result.output


class TestSavedRoutines:

    def test_save_and_list(self, store_path):
        routine_id = _save(store_path)
        assert store_path.exists()

        result = runner.invoke(app, ["routines", "--store-path", str(store_path), "--json"])
        assert result.exit_code == 0, result.output
        listed = json.loads(result.stdout)
        assert [r["id"] for r in listed] == [routine_id]
        assert listed[0]["status"] == "active"
        assert listed[0]["current_week"] == 1

    def test_list_filters_by_user(self, store_path):
        _save(store_path, user="alice")
        _save(store_path, user="bob")

        result = runner.invoke(app, ["routines", "-p", str(store_path), "-u", "alice", "--json"])
        assert len(json.loads(result.stdout)) == 1

        result = runner.invoke(app, ["routines", "-p", str(store_path), "--all", "--json"])
        assert len(json.loads(result.stdout)) == 2

    def test_list_empty_store(self, store_path):
        result = runner.invoke(app, ["routines", "--store-path", str(store_path)])
        assert result.exit_code == 0
        assert "No saved routines" in result.output

    def test_show(self, store_path):
        routine_id = _save(store_path)

        result = runner.invoke(app, ["show", routine_id, "--store-path", str(store_path), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["id"] == routine_id
        assert len(data["weeks"]) == 4
        first = data["weeks"][0]["days"][0]["exercises"][0]
        assert first["exercise_name"] != first["exercise_id"]

        result = runner.invoke(app, ["show", routine_id, "--store-path", str(store_path), "--weeks", "1"])
        assert result.exit_code == 0, result.output
        assert "Week 1" in result.output
        assert "Week 2" not in result.output

    def test_show_unknown(self, store_path):
        result = runner.invoke(app, ["show", "missing", "--store-path", str(store_path)])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_delete_with_confirmation(self, store_path):
        routine_id = _save(store_path)

        result = runner.invoke(app, ["delete", routine_id, "--store-path", str(store_path)], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.output

        result = runner.invoke(app, ["delete", routine_id, "--store-path", str(store_path), "--yes"])
        assert result.exit_code == 0, result.output
        assert "Deleted" in result.output

        result = runner.invoke(app, ["delete", routine_id, "--store-path", str(store_path), "--yes"])
        assert result.exit_code == 1


class TestCatalogCommands:

    def test_exercises_filtered(self):
        result = runner.invoke(app, ["exercises", "--muscle", "legs", "--equipment", "barbell", "--json"])
        assert result.exit_code == 0, result.output
        items = json.loads(result.stdout)
        assert items
        for item in items:
            assert item["equipment"] == "barbell"
            assert "legs" in [item["muscle_group"], *item["secondary_muscles"]]

    def test_exercises_table(self):
        result = runner.invoke(app, ["exercises", "--muscle", "core"])
        assert result.exit_code == 0
        assert "Exercise Catalog" in result.output

    def test_goals(self):
        result = runner.invoke(app, ["goals", "--json"])
        assert result.exit_code == 0
        ids = [g["goal_id"] for g in json.loads(result.stdout)]
        assert "strength" in ids
        assert len(ids) == 7
