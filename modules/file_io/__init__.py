"""
File I/O module for fileshim.

Whole-file read, write and delete returning Ok/Err results.
"""

from .file_ops import FileOperator, read_file_content, write_file_content, unlink

__all__ = ['FileOperator', 'read_file_content', 'write_file_content', 'unlink']
