"""Storage abstraction for game snapshot persistence.

A snapshot is a flat {key: JSON string} mapping (see shelem.session.snapshot),
stored as one JSON object per game. Files are written with owner-only
permissions (0o600) inside an owner-only directory (0o700) as a filesystem
hygiene measure.
"""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import structlog

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = structlog.get_logger()

# Owner-only directory permissions for snapshot storage.
_SNAPSHOT_DIR_MODE = 0o700

# Owner-only file permissions for snapshot data files.
_SNAPSHOT_FILE_MODE = 0o600


class SnapshotStorage(Protocol):
    """Protocol for persisting game snapshots."""

    def save_snapshot(self, game_id: str, snapshot: Mapping[str, str]) -> None: ...

    def load_snapshot(self, game_id: str) -> dict[str, str]: ...


class LocalSnapshotStorage:
    """Writes snapshot files to the local filesystem.

    Files are created with owner-only read/write (0o600) inside an
    owner-only directory (0o700).
    """

    def __init__(self, snapshot_dir: str) -> None:
        self._snapshot_dir = Path(snapshot_dir).resolve()

    def _target(self, game_id: str) -> Path:
        target = (self._snapshot_dir / f"{game_id}.json").resolve()
        if not target.is_relative_to(self._snapshot_dir):
            raise ValueError(f"Path traversal rejected: '{game_id}' resolves outside snapshot directory")
        return target

    def save_snapshot(self, game_id: str, snapshot: Mapping[str, str]) -> None:
        """Save a snapshot under the configured directory.

        Creates the directory lazily on first write with owner-only permissions
        (0o700). Writes atomically via temp-file-then-rename with owner-only
        permissions (0o600), so a crash never leaves a half-written snapshot.
        Rejects path traversal attempts that would place the file outside the
        snapshot root.
        """
        target = self._target(game_id)

        self._snapshot_dir.mkdir(mode=_SNAPSHOT_DIR_MODE, parents=True, exist_ok=True)
        self._snapshot_dir.chmod(_SNAPSHOT_DIR_MODE)

        content = json.dumps(dict(snapshot), ensure_ascii=False, indent=2, sort_keys=True).encode("utf-8")

        fd, tmp_path = tempfile.mkstemp(dir=str(self._snapshot_dir), suffix=".tmp", prefix=".snapshot_")
        fd_owned = True
        try:
            with os.fdopen(fd, "wb") as f:
                fd_owned = False  # os.fdopen took ownership; it will close fd
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, _SNAPSHOT_FILE_MODE)  # noqa: PTH101
            Path(tmp_path).replace(target)
        except BaseException:
            if fd_owned:
                with contextlib.suppress(OSError):
                    os.close(fd)
            with contextlib.suppress(OSError):
                Path(tmp_path).unlink()
            raise
        logger.info("saved snapshot", game_id=game_id, path=str(target))

    def load_snapshot(self, game_id: str) -> dict[str, str]:
        """Read a snapshot back.

        Raises FileNotFoundError if the game was never saved and ValueError if
        the file is not a JSON object of strings.
        """
        target = self._target(game_id)
        try:
            data = json.loads(target.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Snapshot file for '{game_id}' is not valid JSON: {exc}") from exc
        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise ValueError(f"Snapshot file for '{game_id}' is not a flat string mapping")
        logger.info("loaded snapshot", game_id=game_id, path=str(target))
        return data
