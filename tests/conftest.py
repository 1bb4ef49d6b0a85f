import subprocess
import sys
from pathlib import Path

import pytest

from authapp.auth.service import AuthenticationService
from authapp.services.user_store import UserStore
from authapp.storage.json_store import JsonFileStore


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def json_store(data_dir: Path) -> JsonFileStore:
    return JsonFileStore(data_dir)


@pytest.fixture
def user_store(json_store: JsonFileStore) -> UserStore:
    return UserStore(json_store)


@pytest.fixture
def make_service(user_store: UserStore):
    """Build a fresh service over the same data dir, like a process restart."""

    def _make(**kwargs) -> AuthenticationService:
        kwargs.setdefault("bcrypt_rounds", 4)
        return AuthenticationService(user_store, **kwargs)

    return _make


@pytest.fixture
def service(make_service) -> AuthenticationService:
    return make_service()


@pytest.fixture
def dead_pid() -> int:
    """PID of a process that has already exited and been reaped"""
    proc = subprocess.Popen([sys.executable, "-c", "pass"])
    proc.wait()
    return proc.pid
