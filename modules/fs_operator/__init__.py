"""
FS Operator module for FSOps.

Provides file and directory operations with collision-safe copy and move.
The module-level functions use a default FileOps instance with no audit log.
"""

from .entry import CapacityUnit, FileEntry, join_path
from .file_ops import FileOps, OPERATIONS, UNBOUNDED_DEPTH

_default = FileOps()

name = _default.name
contents = _default.contents
size = _default.size
remove = _default.remove
clear = _default.clear
rename = _default.rename
copy_as = _default.copy_as
move = _default.move
create = _default.create

__all__ = [
    'FileOps',
    'FileEntry',
    'CapacityUnit',
    'join_path',
    'OPERATIONS',
    'UNBOUNDED_DEPTH',
    'name',
    'contents',
    'size',
    'remove',
    'clear',
    'rename',
    'copy_as',
    'move',
    'create',
]
