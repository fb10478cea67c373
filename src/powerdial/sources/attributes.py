"""Helpers for reading sysfs attribute files."""

import logging
from pathlib import Path

from powerdial.base.errors import DeviceReadError

logger = logging.getLogger(__name__)


def read_attribute(path: Path, required: bool = False) -> str | None:
    """Read and trim one attribute file.

    Args:
        path: Attribute file
        required: Whether a missing or unreadable file is an error

    Returns:
        The trimmed contents, or None for an absent optional file

    Raises:
        DeviceReadError: A required file is missing or unreadable
    """
    try:
        return path.read_text(encoding="utf-8", errors="replace").strip()
    except FileNotFoundError as e:
        if required:
            raise DeviceReadError("missing required attribute", path=path) from e
        return None
    except OSError as e:
        if required:
            raise DeviceReadError(f"unreadable attribute: {e}", path=path) from e
        logger.debug("ignoring unreadable optional attribute %s: %s", path, e)
        return None


def read_hex(path: Path, maximum: int, required: bool = False) -> int | None:
    """Read a hexadecimal attribute ("046d" or "0x8086")."""
    text = read_attribute(path, required=required)
    if text is None:
        return None
    try:
        value = int(text, 16)
    except ValueError as e:
        raise DeviceReadError(f"not a hexadecimal value: {text!r}", path=path) from e
    if not 0 <= value <= maximum:
        raise DeviceReadError(f"value {text!r} out of range", path=path)
    return value


def read_decimal(path: Path, required: bool = False) -> int | None:
    """Read a signed decimal attribute such as autosuspend_delay_ms."""
    text = read_attribute(path, required=required)
    if text is None:
        return None
    try:
        return int(text, 10)
    except ValueError as e:
        raise DeviceReadError(f"not a decimal value: {text!r}", path=path) from e
