"""Database dumps written by the nightly backup job."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Optional

from sqlalchemy.engine import make_url

logger = logging.getLogger(__name__)


class BackupError(RuntimeError):
    pass


def backup_filename(now: datetime, suffix: str) -> str:
    return f"backup-{now.strftime('%Y-%m-%dT%H-%M-%S')}{suffix}"


def backup_database(database_url: str, backup_dir: Path, now: Optional[datetime] = None) -> Path:
    """Dump the database into ``backup_dir`` and return the created file.

    PostgreSQL is dumped with ``pg_dump``; SQLite files are copied.
    """
    now = now or datetime.utcnow()
    backup_dir.mkdir(parents=True, exist_ok=True)
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        if not url.database or url.database == ":memory:":
            raise BackupError("In-memory SQLite databases cannot be backed up")
        target = backup_dir / backup_filename(now, ".sqlite3")
        shutil.copy2(url.database, target)
    elif url.get_backend_name() == "postgresql":
        target = backup_dir / backup_filename(now, ".sql")
        command = ["pg_dump", "-U", url.username or "", "-h", url.host or "localhost"]
        if url.port:
            command += ["-p", str(url.port)]
        command += ["-d", url.database or "", "-f", str(target)]
        env = {**os.environ, "PGPASSWORD": url.password or ""}
        result = subprocess.run(command, env=env, capture_output=True, text=True)
        if result.returncode != 0:
            raise BackupError(f"pg_dump failed: {result.stderr.strip()}")
    else:
        raise BackupError(f"Unsupported database backend: {url.get_backend_name()}")

    logger.info(f"Database backup successful: {target}")
    return target
