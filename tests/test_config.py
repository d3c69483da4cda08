from __future__ import annotations

import config


def test_defaults_without_overrides(monkeypatch) -> None:
    for name in ("HF_BASE_URL", "HF_MODEL", "HF_TRANSLATION_URL", "SLOT_TTL_SECONDS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = config.Settings(**config._env_override({}))
    assert settings.dialogue.slot_ttl_seconds is None
    assert settings.translation.default_language == "fr"
    assert set(settings.translation.models) == {"fr", "de", "es"}
    assert settings.llm.api_key_env == "HF_API_TOKEN"


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("HF_MODEL", "some/model")
    monkeypatch.setenv("SLOT_TTL_SECONDS", "300")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = config.Settings(**config._env_override({"llm": {"temperature": 0.1}}))
    assert settings.llm.default_model == "some/model"
    assert settings.llm.temperature == 0.1
    assert settings.dialogue.slot_ttl_seconds == 300.0
    assert settings.logging.level == "debug"


def test_yaml_file_is_optional(tmp_path) -> None:
    assert config._load_yaml_config(str(tmp_path / "missing.yaml")) == {}
    path = tmp_path / "app.yaml"
    path.write_text("translation:\n  default_language: DE\n", encoding="utf-8")
    loaded = config._load_yaml_config(str(path))
    assert config.Settings(**loaded).translation.default_language == "de"


def test_get_settings_is_cached() -> None:
    config.get_settings.cache_clear()
    assert config.get_settings() is config.get_settings()
