"""Tests for PruneConfig loading."""

import json

import pytest

from cssprune.config import PruneConfig, RenderOptions
from cssprune.errors import ConfigError
from cssprune.model.ignore import IgnoreLiteral, IgnorePattern


class TestDefaults:
    def test_defaults(self):
        config = PruneConfig()
        assert config.ignore == ()
        assert config.javascript is True
        assert config.conditional_keywords == ("media",)
        assert config.render == RenderOptions()
        assert "hover" in config.unmatchable_pseudos

    def test_frozen(self):
        with pytest.raises(AttributeError):
            PruneConfig().raw = ".a{}"  # type: ignore[misc]


class TestFromDict:
    def test_ignore_entries_parsed(self):
        config = PruneConfig.from_dict({"ignore": [".kept", "/^\\.js-/"]})
        assert config.ignore[0] == IgnoreLiteral(".kept")
        assert isinstance(config.ignore[1], IgnorePattern)

    def test_single_string_becomes_list(self):
        assert PruneConfig.from_dict({"media": "print"}).media == ("print",)

    def test_timeout_and_settle(self):
        config = PruneConfig.from_dict({"timeout": 500, "settle": 20})
        assert config.render.timeout_ms == 500
        assert config.render.settle_ms == 20

    def test_plain_values(self):
        config = PruneConfig.from_dict({"javascript": False, "css_path": "static", "raw": ".x{}"})
        assert config.javascript is False
        assert config.css_path == "static"
        assert config.raw == ".x{}"

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="htmlRoot"):
            PruneConfig.from_dict({"htmlRoot": "."})

    def test_bad_list_value(self):
        with pytest.raises(ConfigError):
            PruneConfig.from_dict({"ignore": 3})

    def test_non_numeric_timeout(self):
        with pytest.raises(ConfigError, match="timeout"):
            PruneConfig.from_dict({"timeout": "abc"})

    def test_bool_is_not_a_timeout(self):
        with pytest.raises(ConfigError, match="settle"):
            PruneConfig.from_dict({"settle": True})

    def test_string_boolean_rejected(self):
        with pytest.raises(ConfigError, match="javascript"):
            PruneConfig.from_dict({"javascript": "false"})

    def test_non_string_value_rejected(self):
        with pytest.raises(ConfigError, match="raw"):
            PruneConfig.from_dict({"raw": 3})

    def test_null_optional_path(self):
        assert PruneConfig.from_dict({"css_path": None}).css_path is None

    def test_invalid_ignore_pattern(self):
        with pytest.raises(ConfigError, match="ignore"):
            PruneConfig.from_dict({"ignore": ["/[/"]})


class TestFromFile:
    def test_loads_json(self, tmp_path):
        path = tmp_path / "cssprune.json"
        path.write_text(json.dumps({"ignore": [".a"], "report": True}), encoding="utf-8")
        config = PruneConfig.from_file(path)
        assert config.ignore == (IgnoreLiteral(".a"),)
        assert config.report is True

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{nope", encoding="utf-8")
        with pytest.raises(ConfigError):
            PruneConfig.from_file(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ConfigError):
            PruneConfig.from_file(path)
