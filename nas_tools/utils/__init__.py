"""Utility modules for nas-tools."""

from nas_tools.utils.fileops import secure_atomic_write, secure_mkdir, unique_path
from nas_tools.utils.output import (
    console,
    error,
    info,
    success,
    warning,
)

__all__ = [
    "console",
    "error",
    "info",
    "secure_atomic_write",
    "secure_mkdir",
    "success",
    "unique_path",
    "warning",
]
