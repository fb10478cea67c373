"""USB device enumeration through /dev/bus/usb and /sys/dev/char."""

import os
from pathlib import Path
from typing import Iterator, Literal

from pydantic import Field

from powerdial.base.device import InterfaceDescriptor, RawDevice
from powerdial.base.errors import DeviceReadError

from .attributes import read_attribute, read_decimal, read_hex
from .base import DeviceSource

USB_IDS_PATH = Path("/usr/share/hwdata/usb.ids")


class UsbDeviceSource(DeviceSource):
    """Enumerates USB devices from their character device nodes.

    Every node under ``<dev_root>/bus/usb/<bus>/`` is resolved to its
    major:minor pair, whose attribute directory is
    ``<sys_root>/dev/char/<major>:<minor>/``. The pair doubles as the
    device id.
    """

    name: str = Field(default="usb", min_length=1)
    bus: Literal["usb"] = "usb"
    dev_root: Path = Field(
        default=Path("/dev"), description="Root of the device node tree"
    )
    ids_path: Path = Field(default=USB_IDS_PATH)

    def _candidates(self) -> Iterator[tuple[str, Path]]:
        for node, major, minor in self._device_numbers():
            device_id = f"{major}:{minor}"
            self._logger.debug("found usb node %s (%s)", node, device_id)
            yield device_id, self.sys_root / "dev" / "char" / device_id

    def _device_numbers(self) -> Iterator[tuple[Path, int, int]]:
        """Yield (node, major, minor) for every USB device node."""
        for bus_dir in self._list_dir(self.dev_root / "bus" / "usb"):
            if not bus_dir.is_dir():
                continue
            for node in self._list_dir(bus_dir):
                try:
                    rdev = node.stat().st_rdev
                except OSError as e:
                    self._logger.warning("Ignoring device node %s: %s", node, e)
                    continue
                yield node, os.major(rdev), os.minor(rdev)

    def _read_device(self, device_id: str, path: Path) -> RawDevice:
        if not path.is_dir():
            raise DeviceReadError("no attribute directory", path=path)

        return RawDevice(
            bus="usb",
            id=device_id,
            path=path,
            vendor_id=read_hex(path / "idVendor", 0xFFFF),
            product_id=read_hex(path / "idProduct", 0xFFFF),
            class_id=read_hex(path / "bDeviceClass", 0xFF),
            subclass_id=read_hex(path / "bDeviceSubClass", 0xFF),
            protocol_id=read_hex(path / "bDeviceProtocol", 0xFF),
            interfaces=tuple(self._read_interfaces(path)),
            product_name=read_attribute(path / "product"),
            manufacturer_name=read_attribute(path / "manufacturer"),
            control=read_attribute(path / "power" / "control", required=True),
            autosuspend_delay_ms=read_decimal(
                path / "power" / "autosuspend_delay_ms", required=True
            ),
        )

    def _read_interfaces(self, path: Path) -> Iterator[InterfaceDescriptor]:
        """Interface descriptors, from children named like "1-1:1.0".

        Children are ordered by (configuration, interface) number, so
        "1-1:1.10" follows "1-1:1.2".
        """
        children = [
            child
            for child in self._list_dir(path.resolve())
            if ":" in child.name and (child / "bInterfaceClass").is_file()
        ]
        for child in sorted(children, key=interface_order):
            yield InterfaceDescriptor(
                class_id=read_hex(child / "bInterfaceClass", 0xFF, required=True),
                subclass_id=read_hex(child / "bInterfaceSubClass", 0xFF) or 0,
                protocol_id=read_hex(child / "bInterfaceProtocol", 0xFF) or 0,
            )


def interface_order(child: Path) -> tuple[tuple[int, ...], str]:
    """Sort key for an interface directory: numeric "config.interface"."""
    suffix = child.name.rsplit(":", 1)[1]
    numbers = tuple(int(part) if part.isdigit() else -1 for part in suffix.split("."))
    return numbers, child.name
