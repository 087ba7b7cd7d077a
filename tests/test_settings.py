from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from slackmd.settings import DEFAULT_CALLBACK_PREFIX, SettingsError, load_settings


def _write_project(tmp_path: Path, config: dict) -> None:
    (tmp_path / "slackmd.yaml").write_text(yaml.safe_dump(config), encoding="utf-8")


def test_load_settings_defaults(monkeypatch, tmp_path: Path):
    monkeypatch.setattr("slackmd.settings._find_project_root", lambda: tmp_path)

    settings = load_settings()

    assert settings.project_root == tmp_path
    assert settings.render.pretty is False
    assert settings.render.callback_prefix == DEFAULT_CALLBACK_PREFIX
    assert settings.branding.support_url is None
    assert settings.branding.support_label == "support"
    assert settings.advanced.log_level == "WARNING"


def test_load_settings_reads_yaml(monkeypatch, tmp_path: Path):
    _write_project(
        tmp_path,
        {
            "render": {"pretty": True, "callback_prefix": "deploy"},
            "branding": {
                "support_url": "https://help.example.com",
                "support_label": "the platform team",
                "error_icon": "https://i.example.com/error.png",
            },
            "advanced": {"log_level": "info"},
        },
    )
    monkeypatch.setattr("slackmd.settings._find_project_root", lambda: tmp_path)

    settings = load_settings()

    assert settings.render.pretty is True
    assert settings.render.callback_prefix == "deploy"
    assert settings.branding.support_url == "https://help.example.com"
    assert settings.branding.support_label == "the platform team"
    assert settings.branding.error_icon == "https://i.example.com/error.png"
    assert settings.branding.success_icon is None
    assert settings.advanced.log_level == "INFO"


def test_load_settings_env_overrides_yaml(monkeypatch, tmp_path: Path):
    _write_project(tmp_path, {"render": {"callback_prefix": "deploy"}})
    monkeypatch.setattr("slackmd.settings._find_project_root", lambda: tmp_path)
    monkeypatch.setenv("SLACKMD_CALLBACK_PREFIX", "cb")
    monkeypatch.setenv("SLACKMD_LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.render.callback_prefix == "cb"
    assert settings.advanced.log_level == "DEBUG"


def test_load_settings_reads_dotenv(monkeypatch, tmp_path: Path):
    (tmp_path / ".env").write_text("SLACKMD_SUPPORT_URL=https://help.example.com\n", encoding="utf-8")
    monkeypatch.setattr("slackmd.settings._find_project_root", lambda: tmp_path)

    settings = load_settings()

    assert settings.branding.support_url == "https://help.example.com"


def test_find_project_root_walks_up(monkeypatch, tmp_path: Path):
    _write_project(tmp_path, {})
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    assert load_settings().project_root == tmp_path.resolve()


@pytest.mark.parametrize(
    "content",
    [
        "render: [unclosed\n",
        "- just\n- a list\n",
        "render: 3\n",
    ],
)
def test_load_settings_rejects_bad_config(monkeypatch, tmp_path: Path, content: str):
    (tmp_path / "slackmd.yaml").write_text(content, encoding="utf-8")
    monkeypatch.setattr("slackmd.settings._find_project_root", lambda: tmp_path)

    with pytest.raises(SettingsError):
        load_settings()
