"""Audit log stores for accepted registrations.

Each accepted registration is written as one JSON object per line. The store
is capped: once its size exceeds ``max_bytes`` the whole store is cleared
before the next record is written, so the new record becomes the only entry.
Stores never raise from ``append``; write problems are logged and dropped.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from filelock import FileLock

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 1000000


@dataclass(frozen=True)
class AuditLogRecord:
    firstName: str
    lastName: str
    email: str
    phone: str
    city: str
    country: str
    timestamp: str

    def to_json_line(self) -> str:
        return json.dumps(asdict(self)) + '\n'


class AuditLogStore:
    """Base store. Subclasses implement ``_write`` under the store lock."""

    backend = 'base'

    def __init__(self, max_bytes: int = DEFAULT_MAX_BYTES):
        self.max_bytes = max_bytes
        self._lock = threading.Lock()

    def append(self, record: AuditLogRecord) -> None:
        try:
            line = record.to_json_line()
            with self._lock:
                self._write(line)
        except Exception as e:
            logger.warning(f"Audit log write failed ({self.backend}): {e}")

    def _write(self, line: str) -> None:
        raise NotImplementedError

    def read_records(self) -> List[Dict[str, Any]]:
        raise NotImplementedError


class FileAuditLogStore(AuditLogStore):
    """Append-only JSON-lines file guarded by a thread lock and a file lock.

    The file lock (``<path>.lock``) serializes writers living in other
    processes, e.g. several Gunicorn workers sharing one log file.
    """

    backend = 'file'

    def __init__(self, path: str, max_bytes: int = DEFAULT_MAX_BYTES, lock_timeout: float = 10):
        super().__init__(max_bytes)
        self.path = path
        self.lock_path = f"{path}.lock"
        self.lock_timeout = lock_timeout

    def size(self) -> int:
        try:
            return os.path.getsize(self.path)
        except OSError:
            return 0

    def _write(self, line: str) -> None:
        dir_path = os.path.dirname(self.path)
        if dir_path and not os.path.exists(dir_path):
            os.makedirs(dir_path, exist_ok=True)

        with FileLock(self.lock_path, timeout=self.lock_timeout):
            mode = 'a'
            if self.size() > self.max_bytes:
                logger.info(f"Audit log {self.path} exceeded {self.max_bytes} bytes, resetting")
                mode = 'w'
            with open(self.path, mode, encoding='utf-8') as fh:
                fh.write(line)
                fh.flush()

    def read_records(self) -> List[Dict[str, Any]]:
        if not os.path.exists(self.path):
            return []
        with FileLock(self.lock_path, timeout=self.lock_timeout):
            with open(self.path, 'r', encoding='utf-8') as fh:
                return [json.loads(line) for line in fh if line.strip()]


class InMemoryAuditLogStore(AuditLogStore):
    """Process-local store with the same cap semantics as the file store."""

    backend = 'memory'

    def __init__(self, max_bytes: int = DEFAULT_MAX_BYTES):
        super().__init__(max_bytes)
        self._lines: List[str] = []
        self._size = 0

    def size(self) -> int:
        return self._size

    def _write(self, line: str) -> None:
        if self._size > self.max_bytes:
            logger.info(f"In-memory audit log exceeded {self.max_bytes} bytes, resetting")
            self._lines = []
            self._size = 0
        self._lines.append(line)
        self._size += len(line.encode('utf-8'))

    def lines(self) -> List[str]:
        with self._lock:
            return list(self._lines)

    def read_records(self) -> List[Dict[str, Any]]:
        return [json.loads(line) for line in self.lines()]


def create_audit_log_store(app_config) -> AuditLogStore:
    """Build the store selected by ``AUDIT_LOG_BACKEND`` in the app config."""
    backend = (app_config.get('AUDIT_LOG_BACKEND') or 'file').lower()
    max_bytes = app_config.get('AUDIT_LOG_MAX_BYTES', DEFAULT_MAX_BYTES)
    if backend == 'memory':
        return InMemoryAuditLogStore(max_bytes=max_bytes)
    if backend != 'file':
        logger.warning(f"Unknown AUDIT_LOG_BACKEND {backend!r}, using file store")
    return FileAuditLogStore(app_config['AUDIT_LOG_PATH'], max_bytes=max_bytes)
