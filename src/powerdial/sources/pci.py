"""PCI device enumeration through /sys/bus/pci/devices."""

from pathlib import Path
from typing import Iterator, Literal

from pydantic import Field

from powerdial.base.device import RawDevice

from .attributes import read_attribute, read_decimal, read_hex
from .base import DeviceSource

PCI_IDS_PATH = Path("/usr/share/hwdata/pci.ids")


def split_class_code(code: int) -> tuple[int, int, int]:
    """Split a 24-bit PCI class code into (class, subclass, prog-if)."""
    return (code >> 16) & 0xFF, (code >> 8) & 0xFF, code & 0xFF


class PciDeviceSource(DeviceSource):
    """Enumerates PCI functions; the device id is the bus address."""

    name: str = Field(default="pci", min_length=1)
    bus: Literal["pci"] = "pci"
    ids_path: Path = Field(default=PCI_IDS_PATH)

    def _candidates(self) -> Iterator[tuple[str, Path]]:
        for entry in self._list_dir(self.sys_root / "bus" / "pci" / "devices"):
            try:
                path = entry.resolve(strict=True)
            except OSError as e:
                self._logger.warning("Ignoring device entry %s: %s", entry, e)
                continue
            if path.is_dir():
                yield entry.name, path

    def _read_device(self, device_id: str, path: Path) -> RawDevice:
        class_id = subclass_id = prog_if = None
        code = read_hex(path / "class", 0xFFFFFF)
        if code is not None:
            class_id, subclass_id, prog_if = split_class_code(code)

        return RawDevice(
            bus="pci",
            id=device_id,
            path=path,
            vendor_id=read_hex(path / "vendor", 0xFFFF),
            product_id=read_hex(path / "device", 0xFFFF),
            class_id=class_id,
            subclass_id=subclass_id,
            protocol_id=prog_if,
            control=read_attribute(path / "power" / "control", required=True),
            # Many PCI functions expose no delay; that is not an error
            autosuspend_delay_ms=read_decimal(path / "power" / "autosuspend_delay_ms"),
        )
