"""Shared helpers for sitepkg utilities."""

from .files import (
    check_flag_value,
    file_exists,
    find_package_file,
    get_secret,
    read_list_from_file,
    strip_trailing_comment,
)

__all__ = [
    "check_flag_value",
    "file_exists",
    "find_package_file",
    "get_secret",
    "read_list_from_file",
    "strip_trailing_comment",
]
