"""Polling change detection for watch mode."""

import os
from pathlib import Path
from typing import Dict, Iterable, Optional, Set, Tuple

from lambda_builder import constants as CONSTANTS

Snapshot = Dict[str, Tuple[float, int]]


class SourceWatcher:
    """
    Detects changes under a set of files and directories by comparing
    (mtime, size) snapshots.

    Attributes:
        paths: Files or directories to watch; missing paths are skipped
        ignored_dirs: Directory names never descended into
    """

    def __init__(self, paths: Iterable[Path], ignored_dirs: Optional[Set[str]] = None):
        self.paths = [Path(p) for p in paths]
        self.ignored_dirs = CONSTANTS.WATCH_IGNORED_DIRS if ignored_dirs is None else ignored_dirs
        self._snapshot: Snapshot = self.snapshot()

    def _stat_into(self, snapshot: Snapshot, path: str) -> None:
        try:
            stat = os.stat(path)
        except FileNotFoundError:
            # Deleted between listing and stat
            return
        snapshot[path] = (stat.st_mtime, stat.st_size)

    def snapshot(self) -> Snapshot:
        snapshot: Snapshot = {}
        for path in self.paths:
            if path.is_file():
                self._stat_into(snapshot, str(path))
                continue
            for root, dirs, files in os.walk(path):
                dirs[:] = [d for d in dirs if d not in self.ignored_dirs and not d.startswith(".")]
                for name in files:
                    self._stat_into(snapshot, os.path.join(root, name))
        return snapshot

    def changed(self) -> bool:
        """Return True if anything changed since the previous call (or creation)."""
        current = self.snapshot()
        if current != self._snapshot:
            self._snapshot = current
            return True
        return False
