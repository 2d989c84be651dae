"""
File operations module for the FSOps FS operator.

Provides listing, sizing, removal, renaming and collision-safe copy/move of
files and directories. Every operation re-checks the host filesystem; nothing
is cached between calls.
"""

import os
import shutil
import sys
from decimal import Context, Decimal
from typing import List, Optional

from core.config import FsConfig
from core.errors import (
    EnvironmentFailure,
    FileOpsError,
    InvalidUsageError,
    OperationResult,
)
from core.logger import AuditLogger, ActionType, ActionStatus

from .entry import CapacityUnit, FileEntry, PathLike


# Depth used to walk a tree to its leaves
UNBOUNDED_DEPTH = sys.maxsize

# Decimal128: 34 significant digits
DECIMAL128 = Context(prec=34)

OPERATIONS = (
    "name",
    "contents",
    "size",
    "remove",
    "clear",
    "rename",
    "copy_as",
    "move",
    "create",
)


class FileOps:
    """Operations on files and directories."""

    def __init__(self, config: Optional[FsConfig] = None, logger: Optional[AuditLogger] = None):
        """
        Initialize FileOps.

        Args:
            config: Naming and copy constants (defaults to FsConfig())
            logger: Audit logger for mutating operations; nothing is logged if None
        """
        self.config = config or FsConfig()
        self.logger = logger

    def _audit(
        self,
        action_type: ActionType,
        description: str,
        target: FileEntry,
        status: ActionStatus = ActionStatus.EXECUTED,
        result: Optional[str] = None,
        **metadata
    ) -> None:
        if self.logger is None:
            return
        self.logger.log_action(
            action_type=action_type,
            description=description,
            target=target.path,
            status=status,
            result=result,
            metadata=metadata
        )

    @staticmethod
    def _require_exists(entry: FileEntry) -> None:
        if not entry.exists:
            raise InvalidUsageError(f"\"{entry.path}\" could not be found", target=entry.path)

    @staticmethod
    def _require_directory(entry: FileEntry) -> None:
        if not entry.is_dir:
            raise InvalidUsageError(f"\"{entry.path}\" is not a directory", target=entry.path)

    def name(self, entry: PathLike, include_extension: bool = True) -> str:
        """
        Get the last path segment of an entry.

        The entry does not have to exist.

        Args:
            entry: File or directory
            include_extension: If False, strip the extension unless the only
                extension marker is the leading one (".FILE")

        Returns:
            The name, with or without extension
        """
        name = FileEntry.of(entry).name
        marker_index = name.rfind(self.config.extension_marker)

        if include_extension or marker_index < 1:
            return name
        return name[:marker_index]

    def contents(self, entry: PathLike, depth: int = 1) -> List[FileEntry]:
        """
        List a directory, descending into subdirectories up to `depth` levels.

        A subdirectory's own contents are listed before the subdirectory
        itself.
        Recursion goes one call per directory level, so trees deeper than
        the interpreter recursion limit raise RecursionError.

        Args:
            entry: Directory to list
            depth: Levels to descend, 1 for immediate children only

        Returns:
            Flat list of entries in host listing order

        Raises:
            InvalidUsageError: If depth < 1, or entry is missing or not a directory
        """
        if depth < 1:
            raise InvalidUsageError(f"Argument \"depth\" cannot be less than 1, got {depth}")

        directory = FileEntry.of(entry)
        self._require_exists(directory)
        self._require_directory(directory)

        contents = []
        for item in directory.as_path().iterdir():
            child = FileEntry(str(item))
            if depth > 1 and child.is_dir:
                contents.extend(self.contents(child, depth - 1))
            contents.append(child)

        return contents

    def size(self, entry: PathLike, unit: Optional[CapacityUnit] = None) -> Decimal:
        """
        Get the size of a file, or of every file under a directory.

        Directories themselves count as 0 bytes.

        Args:
            entry: File or directory
            unit: Unit of the result (defaults to the configured unit)

        Returns:
            Size as a Decimal with 34 significant digits
        """
        target = FileEntry.of(entry)
        self._require_exists(target)
        unit = CapacityUnit.parse(unit if unit is not None else self.config.default_unit)

        if target.is_dir:
            byte_count = sum(item.length for item in self.contents(target, depth=UNBOUNDED_DEPTH))
        else:
            byte_count = target.length

        return DECIMAL128.divide(Decimal(byte_count), Decimal(unit.scale_factor))

    def remove(self, entry: PathLike) -> bool:
        """
        Delete a file, or a directory with everything under it.

        Args:
            entry: File or directory to delete

        Returns:
            True if deleted, False if the host refused

        Raises:
            InvalidUsageError: If entry doesn't exist
        """
        target = FileEntry.of(entry)
        self._require_exists(target)

        try:
            if target.is_dir and not os.path.islink(target.path):
                shutil.rmtree(target.path)
            else:
                os.remove(target.path)
        except OSError as e:
            self._audit(
                ActionType.DELETE,
                f"Failed to delete {target.path}",
                target,
                status=ActionStatus.FAILED,
                result=f"Error: {e}"
            )
            return False

        self._audit(ActionType.DELETE, f"Deleted {target.path}", target)
        return True

    def clear(self, entry: PathLike) -> bool:
        """
        Delete every child of a directory, keeping the directory.

        Returns:
            True only if every child was deleted
        """
        directory = FileEntry.of(entry)
        self._require_exists(directory)
        self._require_directory(directory)

        results = [self.remove(child) for child in self.contents(directory, depth=1)]
        cleared = all(results)

        self._audit(
            ActionType.DELETE,
            f"Cleared {directory.path}",
            directory,
            status=ActionStatus.EXECUTED if cleared else ActionStatus.FAILED,
            result=f"{results.count(True)} of {len(results)} entries removed"
        )
        return cleared

    def rename(self, entry: PathLike, new_name: str) -> FileEntry:
        """
        Rename an entry within its parent directory.

        Args:
            entry: File or directory to rename
            new_name: New last path segment

        Returns:
            The renamed entry

        Raises:
            InvalidUsageError: If new_name is blank, entry doesn't exist, or
                new_name is already taken
            EnvironmentFailure: If the host refuses the rename
        """
        if not new_name or not new_name.strip():
            raise InvalidUsageError("Argument \"new_name\" cannot be empty")

        source = FileEntry.of(entry)
        self._require_exists(source)

        target = source.parent.child(new_name, self.config.separator)
        if target.exists:
            raise InvalidUsageError(
                f"Cannot rename to \"{new_name}\" - \"{target.path}\" exists",
                target=target.path
            )

        try:
            os.rename(source.path, target.path)
        except OSError as e:
            self._audit(
                ActionType.RENAME,
                f"Failed to rename {source.path} to {new_name}",
                source,
                status=ActionStatus.FAILED,
                result=f"Error: {e}"
            )
            raise EnvironmentFailure(
                f"\"{source.path}\" could not be renamed to \"{target.path}\"",
                target=source.path
            ) from e

        self._audit(ActionType.RENAME, f"Renamed {source.path} to {new_name}", target, source=source.path)
        return target

    def _candidate_name(self, stem: str, extension: str, attempt: int) -> str:
        if attempt == 0:
            return f"{stem}{extension}"
        if attempt == 1:
            return f"{stem} {self.config.copy_marker}{extension}"
        return f"{stem} {self.config.copy_marker} ({attempt}){extension}"

    def available_name(self, entry: PathLike, destination: PathLike) -> str:
        """
        Find a name for a copy of `entry` that is free in `destination`.

        Tries the entry's own name, then "<stem> copy<ext>", then
        "<stem> copy (2)<ext>", "<stem> copy (3)<ext>" and so on. The
        destination is listed once; the result is free as of that listing.

        Raises:
            EnvironmentFailure: If max_copy_attempts candidates are all taken
        """
        source = FileEntry.of(entry)
        full_name = source.name

        if source.is_dir:
            stem, extension = full_name, ""
        else:
            stem = self.name(source, include_extension=False)
            extension = full_name[len(stem):]

        existing = {item.name for item in self.contents(destination, depth=1)}

        for attempt in range(self.config.max_copy_attempts):
            candidate = self._candidate_name(stem, extension, attempt)
            if candidate not in existing:
                return candidate

        raise EnvironmentFailure(
            f"No free name for a copy of \"{full_name}\" after {self.config.max_copy_attempts} attempts",
            target=source.path
        )

    def copy_as(
        self,
        entry: PathLike,
        destination: Optional[PathLike] = None,
        name: Optional[str] = None
    ) -> FileEntry:
        """
        Copy a file or directory tree without overwriting anything.

        Args:
            entry: Source file or directory
            destination: Target directory (defaults to the source's parent)
            name: Explicit target name; generated when omitted

        Returns:
            The copy

        Raises:
            InvalidUsageError: If the source or destination doesn't exist, or
                the explicit target name is taken
            EnvironmentFailure: If the host copy fails
        """
        source = FileEntry.of(entry)
        self._require_exists(source)

        directory = FileEntry.of(destination) if destination is not None else source.parent
        if not directory.exists:
            raise InvalidUsageError(f"Destination \"{directory.path}\" could not be found", target=directory.path)
        self._require_directory(directory)

        if name is not None:
            if not name.strip():
                raise InvalidUsageError("Argument \"name\" cannot be empty")
            target = directory.child(name, self.config.separator)
            if target.exists:
                raise InvalidUsageError(f"Target \"{target.path}\" exists", target=target.path)
        else:
            target = directory.child(self.available_name(source, directory), self.config.separator)

        try:
            if source.is_dir:
                shutil.copytree(source.path, target.path)
            else:
                shutil.copy2(source.path, target.path)
        except OSError as e:
            self._audit(
                ActionType.COPY,
                f"Failed to copy {source.path} to {target.path}",
                source,
                status=ActionStatus.FAILED,
                result=f"Error: {e}"
            )
            raise EnvironmentFailure(
                f"\"{source.path}\" could not be copied to \"{target.path}\"",
                target=source.path
            ) from e

        self._audit(ActionType.COPY, f"Copied {source.path} to {target.path}", target, source=source.path)
        return target

    def move(self, entry: PathLike, destination: PathLike) -> FileEntry:
        """
        Move an entry into a directory by copying it and removing the original.

        The copy takes a generated name when the entry's own name is taken.
        Not atomic: if the original cannot be removed, both remain.

        Args:
            entry: File or directory to move
            destination: Target directory

        Returns:
            The moved entry
        """
        source = FileEntry.of(entry)
        self._require_exists(source)

        directory = FileEntry.of(destination)
        if not directory.exists:
            raise InvalidUsageError(f"Destination \"{directory.path}\" could not be found", target=directory.path)

        moved = self.copy_as(source, destination=directory)

        if self.remove(source):
            self._audit(ActionType.MOVE, f"Moved {source.path} to {moved.path}", moved, source=source.path)
        else:
            self._audit(
                ActionType.MOVE,
                f"Moved {source.path} to {moved.path}, original kept",
                source,
                status=ActionStatus.FAILED,
                result="Original could not be removed",
                copy=moved.path
            )

        return moved

    def create(self, entry: PathLike, directory: bool = True) -> bool:
        """
        Create an empty directory or an empty file.

        Args:
            entry: Path to create
            directory: If False, create a 0-byte file

        Returns:
            True when created

        Raises:
            InvalidUsageError: If the parent doesn't exist or entry already exists
            EnvironmentFailure: If the host refuses
        """
        target = FileEntry.of(entry)
        parent = target.parent

        if not parent.is_dir:
            raise InvalidUsageError(f"Parent directory \"{parent.path}\" could not be found", target=target.path)
        if target.exists:
            raise InvalidUsageError(f"\"{target.path}\" exists", target=target.path)

        try:
            if directory:
                os.mkdir(target.path)
            else:
                with open(target.path, "xb"):
                    pass
        except OSError as e:
            self._audit(
                ActionType.CREATE,
                f"Failed to create {target.path}",
                target,
                status=ActionStatus.FAILED,
                result=f"Error: {e}"
            )
            raise EnvironmentFailure(f"\"{target.path}\" could not be created", target=target.path) from e

        self._audit(ActionType.CREATE, f"Created {'directory' if directory else 'file'} {target.path}", target)
        return True

    def attempt(self, operation: str, *args, **kwargs) -> OperationResult:
        """
        Run an operation and return its outcome instead of raising.

        Args:
            operation: One of OPERATIONS, e.g. "copy_as"
            *args, **kwargs: Passed to the operation

        Returns:
            OperationResult with the operation's return value in `data`, or
            the failure's kind and message

        Raises:
            InvalidUsageError: If operation is not a known operation name
        """
        if operation not in OPERATIONS:
            raise InvalidUsageError(f"Unknown operation \"{operation}\"")

        try:
            data = getattr(self, operation)(*args, **kwargs)
        except FileOpsError as e:
            return OperationResult.failed(e)

        return OperationResult.ok(data)
