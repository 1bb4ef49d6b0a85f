"""Application wiring: settings, logging, storage and the auth service"""

from pathlib import Path
from typing import Optional

from .auth.service import AuthenticationService
from .services.user_store import UserStore
from .storage.json_store import JsonFileStore
from .utils.config import ConfigManager, Settings
from .utils.logger import get_logger, setup_logger

logger = get_logger(__name__)


def build_auth_service(settings: Settings) -> AuthenticationService:
    """Construct an AuthenticationService over the configured data directory"""
    store = UserStore(
        JsonFileStore(Path(settings.storage.data_dir)),
        namespace=settings.storage.namespace,
    )
    return AuthenticationService(
        store,
        min_password_length=settings.auth.min_password_length,
        bcrypt_rounds=settings.auth.bcrypt_rounds,
        lock_timeout_seconds=settings.storage.lock_timeout_seconds,
    )


class AuthApp:
    """Main application class holding settings and the auth service"""

    def __init__(self, settings_path: Optional[Path] = None, settings: Optional[Settings] = None):
        self.config_manager = ConfigManager(settings_path)
        self.settings = settings
        self.auth_service: Optional[AuthenticationService] = None

    def initialize(self, configure_logging: bool = True, log_to_console: bool = True) -> AuthenticationService:
        """Load configuration, set up logging and build the auth service"""
        if self.settings is None:
            self.settings = self.config_manager.load_settings()

        if configure_logging:
            setup_logger(
                log_level=self.settings.logging.level,
                log_format=self.settings.logging.format,
                file_path=self.settings.logging.file_path,
                max_bytes=self.settings.logging.max_bytes,
                backup_count=self.settings.logging.backup_count,
                console=log_to_console,
            )

        self.auth_service = build_auth_service(self.settings)
        logger.info(
            "Configuration loaded",
            app_name=self.settings.app.name,
            version=self.settings.app.version,
            environment=self.settings.app.environment,
            data_dir=self.settings.storage.data_dir,
        )
        return self.auth_service
