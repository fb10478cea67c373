"""Device source base class."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator

from pydantic import Field, ValidationError

from powerdial.base.device import Bus, RawDevice
from powerdial.base.entity import Entity
from powerdial.base.errors import DeviceReadError
from powerdial.base.registry import Registry
from powerdial.parsers.ids import load_registry_or_none


class DeviceSource(Entity, ABC):
    """Abstract base class for enumerating the devices of one bus.

    A source walks the platform's device filesystem and reads the
    attribute files of every device it finds. It never writes. Each
    call to enumerate() walks the filesystem again, so a source can be
    reused across refreshes.

    One device's read failure never aborts the enumeration: the device
    is dropped with a warning and its siblings are still read.

    Subclasses implement _candidates() to list device directories and
    _read_device() to turn one directory into a RawDevice.
    """

    bus: Bus
    sys_root: Path = Field(
        default=Path("/sys"),
        description="Root of the device attribute filesystem",
    )
    ids_path: Path = Field(description="Hardware-ID registry for this bus")
    strict_registry: bool = Field(
        default=True,
        description="Fail the whole registry on its first malformed line",
    )

    def enumerate(self) -> list[RawDevice]:
        """Read every readable device of this bus.

        Returns:
            Raw devices in a deterministic (sorted path) order
        """
        devices = []
        for device_id, path in self._candidates():
            try:
                devices.append(self._read_device(device_id, path))
            except (DeviceReadError, ValidationError) as e:
                self._logger.warning("Ignoring device %s: %s", device_id, e)
        self._logger.debug("enumerated %d %s devices", len(devices), self.bus)
        return devices

    def load_registry(self) -> Registry | None:
        """Parse this bus's registry, or None if it is unavailable."""
        return load_registry_or_none(self.ids_path, strict=self.strict_registry)

    def _list_dir(self, directory: Path) -> list[Path]:
        """Sorted directory entries; a missing directory is empty."""
        try:
            return sorted(directory.iterdir())
        except OSError as e:
            self._logger.warning("Cannot list %s: %s", directory, e)
            return []

    @abstractmethod
    def _candidates(self) -> Iterator[tuple[str, Path]]:
        """Yield (device id, device attribute directory) pairs."""

    @abstractmethod
    def _read_device(self, device_id: str, path: Path) -> RawDevice:
        """Read the attribute files of one device.

        Raises:
            DeviceReadError: A required file is missing or a numeric
                file is malformed
        """
