"""Hardware-ID registry parsing."""

from .ids import (
    decode_registry,
    load_registry,
    load_registry_or_none,
    parse_registry,
)

__all__ = [
    "decode_registry",
    "load_registry",
    "load_registry_or_none",
    "parse_registry",
]
