"""
JSON-file key-value store.

Each key is persisted as its own ``<base_dir>/<key>.json`` file and replaced
atomically on write, so readers only ever see a complete value. Keys double
as lock names for read-modify-write sections (see ``lock``).
"""

from __future__ import annotations

import json
import os
import tempfile
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Optional

from authapp.utils.exceptions import StorageError
from authapp.utils.logger import get_logger

logger = get_logger(__name__)

LOCK_TIMEOUT_SECONDS = 10.0
LOCK_POLL_INTERVAL = 0.05
# A lock file older than this is left over from a crashed holder
LOCK_STALE_SECONDS = 60.0


def _safe_name(key: str) -> str:
    safe = "".join(c if c.isalnum() or c in "-_." else "_" for c in key)
    if not safe.strip("."):
        raise ValueError(f"Invalid storage key: {key!r}")
    return safe


class JsonFileStore:
    """Durable key-value substrate backed by one JSON file per key"""

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)

    @property
    def locks_dir(self) -> Path:
        return self.base_dir / "locks"

    def path_for(self, key: str) -> Path:
        return self.base_dir / f"{_safe_name(key)}.json"

    def get(self, key: str) -> Optional[Any]:
        """Return the decoded value for ``key``, or None if missing or unreadable"""
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable stored value", key=key, path=str(path), error=str(e))
            return None

    def set(self, key: str, value: Any) -> None:
        """Atomically replace the value stored under ``key``"""
        path = self.path_for(key)
        temp_path: Optional[Path] = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w", dir=str(path.parent), delete=False, encoding="utf-8", suffix=".tmp"
            ) as tf:
                temp_path = Path(tf.name)
                json.dump(value, tf, indent=2, ensure_ascii=False, default=str)
            # os.replace overwrites atomically on POSIX and Windows
            os.replace(str(temp_path), str(path))
        except (OSError, TypeError, ValueError) as e:
            # Clean up temp file if the write or move failed
            if temp_path is not None and temp_path.exists():
                temp_path.unlink()
            raise StorageError(f"Failed to save {key} to {path}: {e}", key=key) from e

    def remove(self, key: str) -> None:
        """Delete ``key``; removing a missing key is not an error"""
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise StorageError(f"Failed to remove {key} at {path}: {e}", key=key) from e

    def lock_path(self, key: str) -> Path:
        return self.locks_dir / f"{_safe_name(key)}.lock"

    @contextmanager
    def lock(
        self,
        key: str,
        timeout_seconds: float = LOCK_TIMEOUT_SECONDS,
        stale_seconds: float = LOCK_STALE_SECONDS,
    ) -> Generator[None, None, None]:
        """
        Hold an exclusive lock named after ``key``.
        File-based so it also serializes separate processes sharing ``base_dir``;
        blocks until acquired or raises TimeoutError. A lock file whose holder
        process is gone, or which is older than ``stale_seconds``, is reclaimed.
        """
        self.locks_dir.mkdir(parents=True, exist_ok=True)
        path = self.lock_path(key)
        start = time.monotonic()
        while True:
            try:
                fd = os.open(str(path), os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
            except FileExistsError:
                if _reclaim_if_stale(path, stale_seconds):
                    logger.warning("Reclaimed stale lock", key=key, path=str(path))
                    continue
                if (time.monotonic() - start) >= timeout_seconds:
                    raise TimeoutError(f"Could not acquire lock {key} within {timeout_seconds}s")
                time.sleep(LOCK_POLL_INTERVAL)
                continue
            try:
                os.write(fd, str(os.getpid()).encode())
            finally:
                os.close(fd)
            break

        try:
            yield
        finally:
            try:
                path.unlink()
            except FileNotFoundError:
                pass


def _process_alive(pid: int) -> bool:
    if os.name == "nt":
        # os.kill terminates the target on Windows; rely on lock age there
        return True
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


def _read_lock(path: Path) -> Optional[tuple]:
    """Return (holder pid or None, mtime) for a lock file, or None if it is gone"""
    try:
        mtime = path.stat().st_mtime
        content = path.read_text(encoding="ascii").strip()
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError):
        return (None, time.time())
    pid = int(content) if content.isdigit() else None
    return (pid, mtime)


def _reclaim_if_stale(path: Path, stale_seconds: float) -> bool:
    """Remove ``path`` if its holder is dead or it has outlived ``stale_seconds``"""
    info = _read_lock(path)
    if info is None:
        return False
    pid, mtime = info
    expired = (time.time() - mtime) >= stale_seconds
    # An empty file is a holder between create and write, unless it has expired
    if not expired and (pid is None or _process_alive(pid)):
        return False

    # Move the file aside first so only one waiter reclaims it
    aside = path.with_name(f"{path.name}.{uuid.uuid4().hex}.stale")
    try:
        os.rename(str(path), str(aside))
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning("Could not reclaim stale lock", path=str(path), error=str(e))
        return False

    moved = _read_lock(aside)
    if moved is not None and moved[0] != pid:
        # Another waiter reclaimed it first and a new holder already took the lock
        try:
            os.link(str(aside), str(path))
        except OSError as e:
            logger.warning("Could not restore live lock", path=str(path), error=str(e))
        aside.unlink()
        return False

    aside.unlink()
    return True
