"""Fakes for testing device sources, classification and apply.

These stand in for the device filesystem and for pkexec so tests run
unprivileged and without real hardware.
"""

from pathlib import Path
from typing import Iterator

from pydantic import Field

from powerdial import (
    DeviceSource,
    PrivilegedWriter,
    RawDevice,
    Registry,
    TransientWriteError,
)
from powerdial.base.device import InterfaceDescriptor


class RecordingWriter(PrivilegedWriter):
    """Writer that records writes instead of touching the filesystem.

    Paths listed in ``fail_paths`` raise TransientWriteError, so tests
    can simulate one attribute failing mid-apply.
    """

    writes: list[tuple[str, str]] = Field(default_factory=list)
    fail_paths: set[str] = Field(default_factory=set)

    def write(self, path, content: str) -> None:
        if str(path) in self.fail_paths:
            raise TransientWriteError("simulated write failure", path=Path(path))
        self.writes.append((str(path), content))


class StaticSource(DeviceSource):
    """Source that returns a fixed list of raw devices."""

    name: str = Field(default="static", min_length=1)
    bus: str = "usb"
    ids_path: Path = Path("/nonexistent/usb.ids")
    raws: list[RawDevice] = Field(default_factory=list)
    registry: Registry | None = None
    enumerations: int = 0

    def enumerate(self) -> list[RawDevice]:
        self.enumerations += 1
        return super().enumerate()

    def load_registry(self) -> Registry | None:
        return self.registry

    def _candidates(self) -> Iterator[tuple[str, Path]]:
        for raw in self.raws:
            yield raw.id, raw.path

    def _read_device(self, device_id: str, path: Path) -> RawDevice:
        for raw in self.raws:
            if raw.id == device_id:
                return raw
        raise AssertionError(f"unexpected device {device_id}")


def raw_usb(device_id: str, **fields) -> RawDevice:
    """Build a RawDevice for a USB device with sensible defaults."""
    fields.setdefault("path", Path("/sys/dev/char") / device_id)
    fields.setdefault("control", "on")
    fields.setdefault("autosuspend_delay_ms", 2000)
    return RawDevice(bus="usb", id=device_id, **fields)


def raw_pci(device_id: str, **fields) -> RawDevice:
    """Build a RawDevice for a PCI function with sensible defaults."""
    fields.setdefault("path", Path("/sys/devices/pci0000:00") / device_id)
    fields.setdefault("control", "on")
    return RawDevice(bus="pci", id=device_id, **fields)


def interfaces(*triples: tuple[int, int, int]) -> tuple[InterfaceDescriptor, ...]:
    """Build interface descriptors from (class, subclass, protocol)."""
    return tuple(
        InterfaceDescriptor(class_id=c, subclass_id=s, protocol_id=p)
        for c, s, p in triples
    )


def write_attributes(directory: Path, attributes: dict[str, str]) -> Path:
    """Create attribute files (with trailing newline, like sysfs)."""
    for name, value in attributes.items():
        path = directory / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"{value}\n")
    return directory


def make_usb_device(
    sys_root: Path,
    device_id: str,
    attributes: dict[str, str],
    interface_attributes: dict[str, dict[str, str]] | None = None,
) -> Path:
    """Create /sys/dev/char/<major:minor> with attributes and interfaces."""
    directory = sys_root / "dev" / "char" / device_id
    directory.mkdir(parents=True, exist_ok=True)
    write_attributes(directory, attributes)
    for name, values in (interface_attributes or {}).items():
        write_attributes(directory / name, values)
    return directory


def make_pci_device(sys_root: Path, address: str, attributes: dict[str, str]) -> Path:
    """Create a PCI function directory linked from /sys/bus/pci/devices."""
    directory = sys_root / "devices" / "pci0000:00" / address
    directory.mkdir(parents=True, exist_ok=True)
    write_attributes(directory, attributes)
    links = sys_root / "bus" / "pci" / "devices"
    links.mkdir(parents=True, exist_ok=True)
    (links / address).symlink_to(directory)
    return directory
