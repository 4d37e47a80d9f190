"""
File operations module for fileshim.

Reads, writes and deletes whole UTF-8 text files. Each function makes one
blocking filesystem call and reports the outcome as a Result; OS failures
come back as Err(FileIOError) rather than being raised.
"""

import os
from typing import Optional

from core.result import Ok, Err, Result, FileIOError
from core.logger import AuditLogger, ActionType, ActionStatus


ENCODING = "utf-8"

# OSError covers every OS-level failure; ValueError covers undecodable
# content and paths containing NUL bytes.
_CAUGHT = (OSError, ValueError)


def read_file_content(path: str) -> Result:
    """
    Read the entire file at path as text.

    Args:
        path: Path to the file

    Returns:
        Ok(content) with the full file content, or Err(FileIOError)
    """
    try:
        with open(path, "r", encoding=ENCODING, newline="") as f:
            return Ok(f.read())
    except _CAUGHT as e:
        return Err(FileIOError.from_exception(e))


def write_file_content(path: str, content: str) -> Result:
    """
    Create or overwrite the file at path with content.

    Any existing content is replaced entirely.

    Args:
        path: Path to the file
        content: Text to write

    Returns:
        Ok(None) on success, or Err(FileIOError)
    """
    try:
        with open(path, "w", encoding=ENCODING, newline="") as f:
            f.write(content)
    except _CAUGHT as e:
        return Err(FileIOError.from_exception(e))
    return Ok(None)


def unlink(path: str) -> Result:
    """
    Delete the file at path.

    Returns:
        Ok(None) on success, or Err(FileIOError) if the file does not exist
        or cannot be removed
    """
    try:
        os.unlink(path)
    except _CAUGHT as e:
        return Err(FileIOError.from_exception(e))
    return Ok(None)


class FileOperator:
    """File operations with audit logging."""

    def __init__(self, logger: Optional[AuditLogger] = None):
        """
        Initialize FileOperator.

        Args:
            logger: Audit logger instance; when None nothing is recorded
        """
        self.logger = logger

    def _record(
        self,
        action_type: ActionType,
        description: str,
        result: Result,
        summary: str,
        metadata: dict
    ) -> None:
        if self.logger is None:
            return

        if result.is_ok():
            self.logger.log_action(
                action_type=action_type,
                description=description,
                status=ActionStatus.EXECUTED,
                result=summary,
                metadata=metadata
            )
        else:
            self.logger.log_action(
                action_type=action_type,
                description=f"Failed: {description}",
                status=ActionStatus.FAILED,
                result=f"Error: {result.error.message}",
                metadata=metadata
            )

    def read_file(self, path: str) -> Result:
        """Read a file. See read_file_content."""
        result = read_file_content(path)
        summary = f"Read {len(result.value)} characters" if result.is_ok() else ""
        self._record(ActionType.READ, f"Read file: {path}", result, summary, {"path": path})
        return result

    def write_file(self, path: str, content: str) -> Result:
        """Write a file. See write_file_content."""
        result = write_file_content(path, content)
        self._record(
            ActionType.WRITE,
            f"Write file: {path}",
            result,
            f"Wrote {len(content)} characters",
            {"path": path, "content_length": len(content)}
        )
        return result

    def delete_file(self, path: str) -> Result:
        """Delete a file. See unlink."""
        result = unlink(path)
        self._record(ActionType.DELETE, f"Delete file: {path}", result, "File deleted", {"path": path})
        return result
