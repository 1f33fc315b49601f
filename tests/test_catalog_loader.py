"""Tests for the YAML catalog and config loaders."""

import pytest

from routine_forge.core.catalog import loader
from routine_forge.core.catalog.provider import YamlCatalog, get_exercise, index_by_id
from routine_forge.core.config import MUSCLE_GROUPS
from routine_forge.core.engine import config_loader


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


class TestBundledCatalog:

    def test_loads_and_is_valid(self, bundled_catalog):
        exercises = bundled_catalog.all_exercises()
        assert len(exercises) >= 40
        ids = [e.id for e in exercises]
        assert len(ids) == len(set(ids))
        for ex in exercises:
            assert ex.muscle_group in MUSCLE_GROUPS
            assert ex.difficulty in {"beginner", "intermediate", "advanced"}

    def test_every_muscle_group_covered(self, bundled_catalog):
        groups = {e.muscle_group for e in bundled_catalog.all_exercises()}
        assert groups == set(MUSCLE_GROUPS)

    def test_alternates_resolve(self, bundled_catalog):
        by_id = index_by_id(bundled_catalog)
        for ex in by_id.values():
            for alt in ex.alternate_exercise_ids:
                assert alt in by_id, f"{ex.id} -> {alt}"

    def test_get_exercise(self, bundled_catalog):
        ex = get_exercise(bundled_catalog, "barbell-bench-press")
        assert ex.muscle_group == "chest"
        assert ex.is_compound
        with pytest.raises(ValueError, match="Unknown exercise"):
            get_exercise(bundled_catalog, "no-such-exercise")


class TestUserCatalog:

    def test_user_entry_overrides_and_adds(self, tmp_path):
        user = _write(tmp_path / "catalog.yaml", """
exercises:
  - id: plank
    equipment: none
  - id: sled-push
    name: Sled Push
    muscle_group: legs
    equipment: sled
    difficulty: intermediate
    tags: [compound]
""")
        catalog = YamlCatalog(user_path=user)
        plank = catalog.get("plank")
        assert plank.equipment == "none"
        assert plank.name == "Plank"
        assert catalog.get("sled-push").is_compound

    def test_bad_entry_skipped_with_warning(self, tmp_path):
        user = _write(tmp_path / "catalog.yaml", """
exercises:
  - id: half-done
    name: Half Done
  - id: bad-lists
    name: Bad Lists
    muscle_group: core
    equipment: none
    difficulty: beginner
    tags: compound
""")
        with pytest.warns(UserWarning) as record:
            result = loader.load_catalog_from_yaml(user_path=user)
        assert "half-done" not in result
        assert "bad-lists" not in result
        assert "push-up" in result
        messages = " ".join(str(w.message) for w in record)
        assert "half-done" in messages
        assert "bad-lists" in messages

    def test_unparseable_user_file_ignored(self, tmp_path):
        user = _write(tmp_path / "catalog.yaml", "exercises: [unclosed\n")
        with pytest.warns(UserWarning, match="ignoring user catalog"):
            result = loader.load_catalog_from_yaml(user_path=user)
        assert "push-up" in result

    def test_empty_catalog_raises(self, tmp_path):
        empty = _write(tmp_path / "bundled.yaml", "exercises: []\n")
        with pytest.raises(RuntimeError, match="no exercises"):
            YamlCatalog(bundled_path=empty, include_user=False).all_exercises()

    def test_user_catalog_found_in_app_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ROUTINE_FORGE_HOME", str(tmp_path))
        _write(tmp_path / "catalog.yaml", """
exercises:
  - id: wall-sit
    name: Wall Sit
    muscle_group: legs
    equipment: none
    difficulty: beginner
""")
        assert YamlCatalog().get("wall-sit") is not None
        assert YamlCatalog(include_user=False).get("wall-sit") is None


def test_exercise_dict_round_trip(bundled_catalog):
    ex = get_exercise(bundled_catalog, "push-up")
    assert loader.exercise_from_dict(loader.exercise_to_dict(ex)) == ex


class TestConfigLoader:

    def test_no_file_means_empty_config(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ROUTINE_FORGE_HOME", str(tmp_path))
        assert config_loader.load_model_config() == {}

    def test_user_yaml_merged_with_extra(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ROUTINE_FORGE_HOME", str(tmp_path))
        _write(tmp_path / "config.yaml", """
goals:
  strength:
    reps_range: [4, 6]
overload:
  beginner:
    lower_body_increment: 10
""")
        cfg = config_loader.load_model_config(extra={"goals": {"strength": {"sets_range": [3, 3]}}})
        assert cfg["goals"]["strength"] == {"reps_range": [4, 6], "sets_range": [3, 3]}
        assert cfg["overload"]["beginner"]["lower_body_increment"] == 10

    def test_malformed_yaml_warns(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ROUTINE_FORGE_HOME", str(tmp_path))
        _write(tmp_path / "config.yaml", "goals: [oops\n")
        with pytest.warns(UserWarning, match="ignoring"):
            assert config_loader.load_model_config() == {}

    def test_non_mapping_yaml_warns(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ROUTINE_FORGE_HOME", str(tmp_path))
        _write(tmp_path / "config.yaml", "- just\n- a list\n")
        with pytest.warns(UserWarning, match="not a mapping"):
            assert config_loader.load_model_config() == {}

    def test_app_home_default(self, monkeypatch):
        monkeypatch.delenv("ROUTINE_FORGE_HOME", raising=False)
        assert config_loader.get_app_home().name == ".routine-forge"
