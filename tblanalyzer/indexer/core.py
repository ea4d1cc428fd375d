"""File system operations for table discovery.

This module contains the TableFileWalker class for directory listing and the
small helpers that read per-file metadata (size, modification time) and
derive table names from paths.
"""


import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from tblanalyzer.exceptions import DirectoryUnreadableError, MetadataUnavailableError
from tblanalyzer.models import FileStat
from tblanalyzer.utils.constants import SUPPORTED_EXTENSIONS
from tblanalyzer.utils.logging import logger

TABLE_NAME_RULES = ("stem", "basename")


def is_supported_table(path: str) -> bool:
    """Return True if the path ends with a supported table extension.

    The match is a case-sensitive suffix test, so ``orders.CSV`` is skipped.
    """
    return path.endswith(SUPPORTED_EXTENSIONS)


def table_name(path: str, rule: str = "stem") -> str:
    """Derive the table name from a file path.

    Args:
        path: Table file path
        rule: ``stem`` (file name without its final extension) or
              ``basename`` (final path component)

    Returns:
        The table name
    """
    if rule == "stem":
        return Path(path).stem
    if rule == "basename":
        return Path(path).name
    raise ValueError(f"Unknown table name rule: {rule!r} (expected one of {TABLE_NAME_RULES})")


def stat_file(path: str) -> FileStat:
    """Read size and modification time of a table file.

    Raises:
        MetadataUnavailableError: If the file cannot be stat'ed.
    """
    try:
        st = os.stat(path)
    except OSError as e:
        raise MetadataUnavailableError(path, e) from e
    return FileStat(
        size_bytes=st.st_size,
        modified_at=datetime.fromtimestamp(st.st_mtime, UTC),
    )


def check_reportable(path: str, directory: str) -> str:
    """Reject table paths that cannot be written to the UTF-8 reports.

    Names holding bytes that are not valid UTF-8 survive listing as surrogate
    escapes and only fail once a report is half written.

    Raises:
        DirectoryUnreadableError: If the path is not valid UTF-8.
    """
    try:
        path.encode("utf-8")
    except UnicodeEncodeError as e:
        raise DirectoryUnreadableError(
            directory, f"file name is not valid UTF-8: {path!r}"
        ) from e
    return path


class TableFileWalker:
    """Lists candidate table files below a set of directories."""

    def __init__(self, recursive: bool = False, follow_symlinks: bool = False):
        """Initialize the walker.

        Args:
            recursive: Descend into subdirectories
            follow_symlinks: Follow directory symlinks while descending
        """
        self.recursive = recursive
        self.follow_symlinks = follow_symlinks
        self.stats: dict[str, Any] = {
            "directories": 0,
            "files": 0,
            "duplicates": 0,
        }

    def list_files(self, directory: str) -> list[str]:
        """List files in one directory, sorted by path.

        Raises:
            DirectoryUnreadableError: If the directory is missing or unreadable.
        """
        root = Path(directory)
        if not root.is_dir():
            raise DirectoryUnreadableError(directory, "not a directory")

        if not self.recursive:
            try:
                with os.scandir(root) as entries:
                    files = [str(root / entry.name) for entry in entries if entry.is_file()]
            except OSError as e:
                raise DirectoryUnreadableError(directory, e) from e
            self.stats["directories"] += 1
            self.stats["files"] += len(files)
            return sorted(files)

        def _raise(err: OSError):
            raise DirectoryUnreadableError(err.filename or directory, err) from err

        files = []
        for dirpath, dirnames, filenames in os.walk(
            root, onerror=_raise, followlinks=self.follow_symlinks
        ):
            # Walk order only affects discovery, keep it stable anyway
            dirnames.sort()
            self.stats["directories"] += 1
            for filename in filenames:
                files.append(str(Path(dirpath) / filename))

        self.stats["files"] += len(files)
        return sorted(files)

    def walk(self, directories: list[str]) -> list[str]:
        """List files across directories in configured order.

        Overlapping directories can yield the same path twice; only the first
        occurrence is kept.

        Raises:
            DirectoryUnreadableError: If a directory cannot be listed or holds
                a table whose name is not valid UTF-8.
        """
        seen: dict[str, None] = {}
        for directory in directories:
            for path in self.list_files(directory):
                if path in seen:
                    self.stats["duplicates"] += 1
                    continue
                if is_supported_table(path):
                    check_reportable(path, directory)
                seen[path] = None

        logger.debug(
            "Listed {files} files in {dirs} directories ({dups} duplicates dropped)",
            files=len(seen),
            dirs=self.stats["directories"],
            dups=self.stats["duplicates"],
        )
        return list(seen)
