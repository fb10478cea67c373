"""USB and PCI device identification and autosuspend configuration."""

# Data model
from .base import (
    DELAY_PRESETS,
    Action,
    Apply,
    ApplyError,
    ConfigError,
    DelayParseError,
    Device,
    DeviceKind,
    DeviceReadError,
    PciDevice,
    PendingErrorsError,
    PermissionDeniedError,
    PowerDialError,
    PrivilegedWriteError,
    PrivilegedWriter,
    RawDevice,
    Refresh,
    Registry,
    RegistryParseError,
    ResetChanged,
    SetAutosuspend,
    SetDelay,
    TargetNotFoundError,
    TransientWriteError,
    UnknownDeviceError,
    UsbDevice,
    format_delay,
    parse_delay,
)

# Registry parsing, enumeration and classification
from .classifiers import classify
from .config import Settings
from .parsers import load_registry, parse_registry
from .sources import DeviceSource, PciDeviceSource, UsbDeviceSource
from .state import ConfigState

__all__ = [
    "DELAY_PRESETS",
    "Action",
    "Apply",
    "ApplyError",
    "ConfigError",
    "ConfigState",
    "DelayParseError",
    "Device",
    "DeviceKind",
    "DeviceReadError",
    "DeviceSource",
    "PciDevice",
    "PciDeviceSource",
    "PendingErrorsError",
    "PermissionDeniedError",
    "PowerDialError",
    "PrivilegedWriteError",
    "PrivilegedWriter",
    "RawDevice",
    "Refresh",
    "Registry",
    "RegistryParseError",
    "ResetChanged",
    "SetAutosuspend",
    "SetDelay",
    "Settings",
    "TargetNotFoundError",
    "TransientWriteError",
    "UnknownDeviceError",
    "UsbDevice",
    "UsbDeviceSource",
    "classify",
    "format_delay",
    "load_registry",
    "parse_registry",
]
