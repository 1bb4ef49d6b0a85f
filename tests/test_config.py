import logging
from pathlib import Path

import pytest
import structlog

from authapp.app import AuthApp, build_auth_service
from authapp.utils.config import ConfigManager, Settings
from authapp.utils.exceptions import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("AUTHAPP_SETTINGS", raising=False)
    monkeypatch.delenv("AUTHAPP_DATA_DIR", raising=False)


def test_missing_file_gives_defaults(tmp_path: Path):
    settings = ConfigManager(tmp_path / "missing.yaml").load_settings()
    assert settings == Settings()
    assert settings.auth.min_password_length == 6
    assert settings.storage.namespace == "com.authapp"


def test_yaml_values_and_env_substitution(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("AUTHAPP_PORT", "9100")
    monkeypatch.delenv("AUTHAPP_HOST", raising=False)
    path = tmp_path / "settings.yaml"
    path.write_text(
        "app:\n"
        "  environment: production\n"
        "server:\n"
        "  port: ${AUTHAPP_PORT:8000}\n"
        "  host: ${AUTHAPP_HOST:0.0.0.0}\n"
        "auth:\n"
        "  bcrypt_rounds: 4\n",
        encoding="utf-8",
    )
    settings = ConfigManager(path).load_settings()
    assert settings.app.environment == "production"
    assert settings.server.port == 9100
    assert settings.server.host == "0.0.0.0"
    assert settings.auth.bcrypt_rounds == 4


def test_settings_path_from_environment(tmp_path: Path, monkeypatch):
    path = tmp_path / "custom.yaml"
    path.write_text("storage:\n  namespace: com.example\n", encoding="utf-8")
    monkeypatch.setenv("AUTHAPP_SETTINGS", str(path))
    assert ConfigManager().load_settings().storage.namespace == "com.example"


def test_data_dir_override(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("AUTHAPP_DATA_DIR", str(tmp_path / "elsewhere"))
    settings = ConfigManager(tmp_path / "missing.yaml").load_settings()
    assert settings.storage.data_dir == str(tmp_path / "elsewhere")


def test_invalid_values_raise_config_error(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text("auth:\n  bcrypt_rounds: 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        ConfigManager(path).load_settings()


def test_non_mapping_raises_config_error(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        ConfigManager(path).load_settings()


def test_build_auth_service_uses_settings(tmp_path: Path):
    settings = Settings.model_validate(
        {
            "storage": {"data_dir": str(tmp_path), "namespace": "com.example"},
            "auth": {"min_password_length": 8, "bcrypt_rounds": 4},
        }
    )
    service = build_auth_service(settings)
    assert not service.signup("Ann", "ann@example.com", "secret1").ok
    assert service.signup("Ann", "ann@example.com", "secret12").ok
    assert (tmp_path / "com.example.users.json").exists()


def test_auth_app_initialize_writes_log_file(tmp_path: Path):
    settings = Settings.model_validate(
        {
            "storage": {"data_dir": str(tmp_path / "data")},
            "auth": {"bcrypt_rounds": 4},
            "logging": {"file_path": str(tmp_path / "logs" / "authapp.log")},
        }
    )
    try:
        service = AuthApp(settings=settings).initialize(log_to_console=False)
        service.signup("Ann", "ann@example.com", "secret1")
    finally:
        root = logging.getLogger()
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        structlog.reset_defaults()

    log_text = (tmp_path / "logs" / "authapp.log").read_text(encoding="utf-8")
    assert "User signed up" in log_text
    assert "secret1" not in log_text
