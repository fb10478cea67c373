"""Base data model for the powerdial device power manager."""

from powerdial.base.actions import (
    Action,
    ActionEnvelope,
    Apply,
    Refresh,
    ResetChanged,
    SetAutosuspend,
    SetDelay,
)
from powerdial.base.device import (
    Device,
    DeviceKind,
    InterfaceDescriptor,
    PciDevice,
    PciKind,
    RawDevice,
    UsbDevice,
    UsbKind,
)
from powerdial.base.duration import DELAY_PRESETS, format_delay, parse_delay
from powerdial.base.entity import Entity
from powerdial.base.errors import (
    ApplyError,
    ConfigError,
    DelayParseError,
    DeviceReadError,
    PendingErrorsError,
    PermissionDeniedError,
    PowerDialError,
    PrivilegedWriteError,
    RegistryParseError,
    TargetNotFoundError,
    TransientWriteError,
    UnknownDeviceError,
)
from powerdial.base.registry import DeviceClass, Registry, Subclass, Vendor
from powerdial.base.writer import PrivilegedWriter

__all__ = [
    "DELAY_PRESETS",
    "Action",
    "ActionEnvelope",
    "Apply",
    "ApplyError",
    "ConfigError",
    "DelayParseError",
    "Device",
    "DeviceClass",
    "DeviceKind",
    "DeviceReadError",
    "Entity",
    "InterfaceDescriptor",
    "PciDevice",
    "PciKind",
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
    "Subclass",
    "TargetNotFoundError",
    "TransientWriteError",
    "UnknownDeviceError",
    "UsbDevice",
    "UsbKind",
    "Vendor",
    "format_delay",
    "parse_delay",
]
