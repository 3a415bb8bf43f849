from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from promptfiles.config import Settings, build_settings, load_file_settings


def test_settings_defaults():
    settings = Settings(api_key="secret")

    assert settings.output_dir == Path("output")
    assert settings.model_name == "gemini-2.0-flash"
    assert settings.timeout == 120.0
    assert settings.show_response is True
    assert "secret" not in repr(settings)


def test_settings_require_api_key():
    with pytest.raises(ValidationError) as exc:
        Settings(api_key="")
    assert "API key is required" in str(exc.value)


@pytest.mark.parametrize("timeout", [0, -1])
def test_settings_non_positive_timeout_disables_deadline(timeout):
    assert Settings(api_key="k", timeout=timeout).timeout is None


def test_load_file_settings(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"output_dir": "generated", "model": "gpt-4o", "timeout": 30, "models": {}, "unknown": 1}))

    assert load_file_settings(path) == {"output_dir": "generated", "model_name": "gpt-4o", "timeout": 30}


def test_load_file_settings_without_path():
    assert load_file_settings(None) == {}


def test_load_file_settings_rejects_non_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ValueError):
        load_file_settings(path)


def test_build_settings_overrides_file_values(tmp_path):
    """Test that explicit values win over the config file"""
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"output_dir": "from-file", "model": "gpt-4o", "show_response": False}))

    settings = build_settings(path, api_key="k", output_dir=Path("from-flag"), model_name=None, timeout=None, show_response=None)

    assert settings.output_dir == Path("from-flag")
    assert settings.model_name == "gpt-4o"
    assert settings.show_response is False
    assert settings.timeout == 120.0
