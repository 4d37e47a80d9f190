# fileshim - Core Module
"""
Core infrastructure for fileshim.
Result types, audit logging and configuration shared by the file operations.
"""

from .result import Ok, Err, Result, FileIOError, UnwrapError
from .logger import AuditLogger, AuditEntry, ActionType, ActionStatus
from .config import Settings, ConfigError, load_settings, save_settings

__all__ = [
    "Ok",
    "Err",
    "Result",
    "FileIOError",
    "UnwrapError",
    "AuditLogger",
    "AuditEntry",
    "ActionType",
    "ActionStatus",
    "Settings",
    "ConfigError",
    "load_settings",
    "save_settings",
]

__version__ = "0.1.0"
