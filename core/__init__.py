# FSOps - Core Module
"""
Core infrastructure for FSOps.
This module provides the configuration, error kinds and audit logging that
the file operations depend on.
"""

from .config import FsConfig, load_config, save_config
from .errors import ErrorKind, FileOpsError, InvalidUsageError, EnvironmentFailure, OperationResult
from .logger import AuditLogger, AuditEntry, ActionType, ActionStatus

__all__ = [
    "FsConfig",
    "load_config",
    "save_config",
    "ErrorKind",
    "FileOpsError",
    "InvalidUsageError",
    "EnvironmentFailure",
    "OperationResult",
    "AuditLogger",
    "AuditEntry",
    "ActionType",
    "ActionStatus",
]

__version__ = "0.1.0"
