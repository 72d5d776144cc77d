import json
from pathlib import Path

from js2ts.settings import ConversionSettings, load_settings


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("JS2TS_KEEP_ORIGINAL", "false")
    monkeypatch.setenv("JS2TS_VERBOSE", "1")
    settings = ConversionSettings(input="src")
    assert settings.keep_original is False
    assert settings.verbose is True


def test_load_settings_from_toml(tmp_path: Path):
    toml = tmp_path / "js2ts.toml"
    toml.write_text('input = "src"\nignore = ["legacy/**"]\nkeep_original = false\n')

    settings = load_settings(toml_file=str(toml))
    assert settings.input == "src"
    assert settings.ignore == ["legacy/**"]
    assert settings.keep_original is False


def test_keyword_overrides_win(tmp_path: Path):
    cfg = tmp_path / "js2ts.json"
    cfg.write_text(json.dumps({"input": "from-file", "strict": False}))

    settings = load_settings(json_file=str(cfg), input="from-kwargs")
    assert settings.input == "from-kwargs"
    assert settings.strict is False
