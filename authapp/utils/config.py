"""
Configuration management with schema validation.
Single source of truth for AuthApp settings.
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError
from .logger import get_logger

logger = get_logger(__name__)

# Load environment variables
load_dotenv()

DEFAULT_SETTINGS_FILE = Path("settings.yaml")


class AppSettings(BaseModel):
    name: str = "AuthApp"
    version: str = "1.0.0"
    environment: str = "development"


class StorageSettings(BaseModel):
    data_dir: str = "data"
    namespace: str = "com.authapp"
    lock_timeout_seconds: float = 10.0


class AuthSettings(BaseModel):
    min_password_length: int = Field(default=6, ge=1)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "json"
    file_path: Optional[str] = "logs/authapp.log"
    max_bytes: int = 10485760
    backup_count: int = 5


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)


class ConfigManager:
    """Loads settings.yaml and applies environment overrides"""

    def __init__(self, settings_path: Optional[Path] = None):
        env_path = os.getenv("AUTHAPP_SETTINGS")
        if settings_path is not None:
            self.settings_path = Path(settings_path)
        elif env_path:
            self.settings_path = Path(env_path)
        else:
            self.settings_path = DEFAULT_SETTINGS_FILE
        self._settings: Optional[Settings] = None

    def _substitute_env_vars(self, value: Any) -> Any:
        """Recursively substitute environment variables"""
        if isinstance(value, str):
            if value.startswith("${") and value.endswith("}"):
                var_expr = value[2:-1]
                if ":" in var_expr:
                    var_name, default = var_expr.split(":", 1)
                    return os.getenv(var_name.strip(), default.strip())
                else:
                    return os.getenv(var_expr, value)
        elif isinstance(value, dict):
            return {k: self._substitute_env_vars(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [self._substitute_env_vars(item) for item in value]
        return value

    def load_settings(self) -> Settings:
        """Load and validate settings.yaml; a missing file means defaults"""
        raw_data: Any = {}
        if self.settings_path.exists():
            try:
                with open(self.settings_path, "r", encoding="utf-8") as f:
                    raw_data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(f"Failed to read settings from {self.settings_path}: {e}")
            if not isinstance(raw_data, dict):
                raise ConfigError(f"Settings file must contain a mapping: {self.settings_path}")
        else:
            logger.debug("Settings file not found, using defaults", path=str(self.settings_path))

        processed_data = self._substitute_env_vars(raw_data)
        try:
            settings = Settings(**processed_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings in {self.settings_path}: {e}")

        data_dir = os.getenv("AUTHAPP_DATA_DIR")
        if data_dir:
            settings = settings.model_copy(
                update={"storage": settings.storage.model_copy(update={"data_dir": data_dir})}
            )

        self._settings = settings
        return self._settings

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            return self.load_settings()
        return self._settings


def load_settings(settings_path: Optional[Path] = None) -> Settings:
    return ConfigManager(settings_path).load_settings()
