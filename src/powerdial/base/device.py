"""Device records for USB and PCI power management."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Bus = Literal["usb", "pci"]

# USB class codes referenced by name resolution and labelling
USB_CLASS_PER_INTERFACE = 0x00
USB_CLASS_HID = 0x03
USB_CLASS_HUB = 0x09
USB_CLASS_MISC = 0xEF
USB_CLASS_APP_SPECIFIC = 0xFE

# Classes whose class name says everything worth saying.
CLASS_NAME_ONLY = frozenset(
    {
        0x01,  # Audio
        0x05,  # Physical Interface Device
        0x06,  # Imaging
        0x07,  # Printer
        0x08,  # Mass Storage
        0x09,  # Hub
        0x0A,  # CDC Data
        0x0B,  # Chip/SmartCard
        0x0D,  # Content Security
        0x0E,  # Video
        0x0F,  # Personal Healthcare
        0x10,  # Audio/Video
        0x11,  # Billboard
        0x12,  # Type-C Bridge
    }
)

# Classes where the interface (protocol) name is the useful part, e.g.
# "Keyboard" rather than "Human Interface Device".
INTERFACE_NAME_ONLY = frozenset({USB_CLASS_HID})

# Classes shown as "class (subclass)".
CLASS_WITH_SUBCLASS = frozenset(
    {
        0x02,  # Communications
        0xDC,  # Diagnostic
        0xE0,  # Wireless
        USB_CLASS_MISC,
        USB_CLASS_APP_SPECIFIC,
    }
)

# PCI class codes
PCI_CLASS_BRIDGE = 0x06


class InterfaceDescriptor(BaseModel):
    """Class triple declared by one USB interface of a device."""

    model_config = ConfigDict(frozen=True)

    class_id: int = Field(ge=0, le=0xFF)
    subclass_id: int = Field(default=0, ge=0, le=0xFF)
    protocol_id: int = Field(default=0, ge=0, le=0xFF)

    @property
    def triple(self) -> tuple[int, int, int]:
        return (self.class_id, self.subclass_id, self.protocol_id)


class RawDevice(BaseModel):
    """Attribute values read for one device node, before classification.

    Numeric fields are ``None`` when the attribute file was absent.
    ``autosuspend_delay_ms`` keeps the ``-1`` "disabled by policy"
    sentinel exactly as the kernel reports it.
    """

    model_config = ConfigDict(frozen=True)

    bus: Bus
    id: str = Field(min_length=1, description="Stable local handle")
    path: Path = Field(description="Device directory in the attribute tree")
    vendor_id: int | None = None
    product_id: int | None = None
    class_id: int | None = None
    subclass_id: int | None = None
    protocol_id: int | None = None
    interfaces: tuple[InterfaceDescriptor, ...] = ()
    product_name: str | None = None
    manufacturer_name: str | None = None
    control: str = Field(description="Contents of power/control")
    autosuspend_delay_ms: int | None = Field(
        default=None,
        description="Contents of power/autosuspend_delay_ms, None if absent",
    )


class DeviceKind(BaseModel):
    """Resolved class/subclass/interface codes and their registry names."""

    class_id: int = 0
    subclass_id: int = 0
    interface_id: int = 0
    class_name: str | None = None
    subclass_name: str | None = None
    interface_name: str | None = None

    def names(self) -> list[str]:
        """Return whichever of the three names resolved, in order."""
        return [
            name
            for name in (self.class_name, self.subclass_name, self.interface_name)
            if name
        ]

    def describe(self) -> str:
        """Best-effort join of the resolved names."""
        names = self.names()
        return " / ".join(names) if names else "Unknown"

    def __str__(self) -> str:
        return self.describe()


class UsbKind(DeviceKind):
    """USB class triple, labelled according to how each class is used."""

    def describe(self) -> str:
        return usb_kind_label(self)


def usb_kind_label(kind: DeviceKind) -> str:
    """Human-facing classification label for a USB class triple."""
    if kind.class_id in CLASS_NAME_ONLY and kind.class_name:
        return kind.class_name
    if kind.class_id in INTERFACE_NAME_ONLY and kind.interface_name:
        return kind.interface_name
    if kind.class_id in CLASS_WITH_SUBCLASS and kind.class_name:
        if kind.subclass_name:
            return f"{kind.class_name} ({kind.subclass_name})"
        return kind.class_name
    names = kind.names()
    return " / ".join(names) if names else "Unknown"


class PciKind(DeviceKind):
    """PCI class/subclass (and programming interface) codes."""

    def describe(self) -> str:
        if self.subclass_name:
            return self.subclass_name
        if self.class_name:
            return self.class_name
        return "Unknown"


class Device(BaseModel, ABC):
    """A classified device with its current autosuspend configuration.

    Devices are rebuilt on every enumeration pass and mutated in place
    by edits. Registry names come from the hardware-ID database; raw
    names are whatever the device itself reports and serve as fallback.
    """

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    bus: Bus
    id: str = Field(min_length=1, description="Stable local handle")
    path: Path = Field(description="Device directory in the attribute tree")
    vendor_id: int | None = Field(default=None, ge=0, le=0xFFFF)
    product_id: int | None = Field(default=None, ge=0, le=0xFFFF)
    registry_vendor_name: str | None = None
    registry_product_name: str | None = None
    raw_product_name: str | None = None
    raw_manufacturer_name: str | None = None
    kind: DeviceKind = Field(default_factory=DeviceKind)
    autosuspend_enabled: bool = False
    delay_ms: int = Field(default=0, ge=0)
    delay_supported: bool = Field(
        default=True,
        description="Whether power/autosuspend_delay_ms exists for this device",
    )

    @property
    def control_path(self) -> Path:
        return self.path / "power" / "control"

    @property
    def delay_path(self) -> Path:
        return self.path / "power" / "autosuspend_delay_ms"

    @property
    def control_text(self) -> str:
        """Value to persist into power/control."""
        return "auto" if self.autosuspend_enabled else "on"

    @property
    def delay_text(self) -> str:
        """Value to persist into power/autosuspend_delay_ms."""
        return str(self.delay_ms)

    @abstractmethod
    def get_name(self) -> str:
        """Primary human-facing name."""

    @abstractmethod
    def get_description(self) -> str:
        """Secondary text shown under the name."""

    def get_kind_description(self) -> str:
        return self.kind.describe()


class UsbDevice(Device):
    """USB device, identified by its character device major:minor pair."""

    bus: Literal["usb"] = "usb"
    kind: UsbKind = Field(default_factory=UsbKind)

    def get_name(self) -> str:
        parts = []
        vendor = self.registry_vendor_name or self.raw_manufacturer_name
        if vendor:
            parts.append(vendor)
        product = self.registry_product_name or self.raw_product_name
        if product:
            parts.append(product)
        elif self.kind.class_id == USB_CLASS_HUB:
            parts.append("Hub")
        return " ".join(parts)

    def get_description(self) -> str:
        # Raw names are only interesting once the registry already
        # supplied the primary name.
        parts = []
        if self.registry_vendor_name and self.raw_manufacturer_name:
            parts.append(self.raw_manufacturer_name)
        if self.registry_product_name and self.raw_product_name:
            parts.append(self.raw_product_name)
        return " ".join(parts) if parts else str(self.path)


class PciDevice(Device):
    """PCI function, identified by its bus address."""

    bus: Literal["pci"] = "pci"
    kind: PciKind = Field(default_factory=PciKind)

    def get_name(self) -> str:
        if self.registry_product_name:
            return self.registry_product_name
        if self.kind.class_id == PCI_CLASS_BRIDGE:
            return "Bridge"
        return "Unknown device"

    def get_description(self) -> str:
        return self.registry_vendor_name or str(self.path)
