"""Authoritative device collection and pending-edit bookkeeping."""

from typing import Any

from pydantic import Field

from powerdial.base.actions import (
    Action,
    Apply,
    Refresh,
    ResetChanged,
    SetAutosuspend,
    SetDelay,
)
from powerdial.base.device import Device
from powerdial.base.duration import parse_delay
from powerdial.base.entity import Entity
from powerdial.base.errors import (
    ApplyError,
    DelayParseError,
    PendingErrorsError,
    PrivilegedWriteError,
    UnknownDeviceError,
)
from powerdial.base.registry import Registry
from powerdial.base.writer import PrivilegedWriter
from powerdial.classifiers import classify
from powerdial.config import Settings
from powerdial.sources import DeviceSource, PciDeviceSource, UsbDeviceSource

CONTROL_ATTRIBUTE = "power/control"
DELAY_ATTRIBUTE = "power/autosuspend_delay_ms"

WriteFailure = tuple[str, str, PrivilegedWriteError]


class ConfigState(Entity):
    """The device collection of one enumeration and its unsaved edits.

    ConfigState is the only owner of the devices and registries. Edits
    mutate devices in place and mark the state as changed. Delay edits
    are validated; each device with an invalid delay counts once in
    ``error_count`` and blocks apply() until corrected.

    Lifecycle:
    - refresh() rebuilds everything from the sources and drops edits
    - set_autosuspend()/set_delay() record edits
    - apply() writes every device through the writer, then resets the
      edit bookkeeping on full success

    The state is not thread-safe; one caller drives it, ideally through
    dispatch().
    """

    name: str = Field(default="config", min_length=1)
    sources: list[DeviceSource] = Field(
        default_factory=list, description="Sources enumerated on refresh"
    )
    writer: PrivilegedWriter = Field(
        default_factory=PrivilegedWriter,
        description="Persists attribute files during apply",
    )
    devices: list[Device] = Field(
        default_factory=list,
        description="Classified devices, in source then enumeration order",
    )
    registries: dict[str, Registry | None] = Field(
        default_factory=dict,
        description="Registry used for each source, None if unavailable",
    )
    changed: bool = Field(default=False, description="Unsaved edits exist")
    error_count: int = Field(
        default=0, ge=0, description="Devices with an invalid delay edit"
    )
    delay_errors: dict[str, str] = Field(
        default_factory=dict,
        description="Validation message per device id with an invalid delay",
    )

    @classmethod
    def from_settings(cls, settings: Settings, refresh: bool = True, **data: Any) -> "ConfigState":
        """Build the sources and writer described by ``settings``.

        Args:
            settings: Paths and policies to use
            refresh: Enumerate devices right away
            **data: Extra field values for the state
        """
        sources: list[DeviceSource] = []
        if settings.enable_usb:
            sources.append(
                UsbDeviceSource(
                    sys_root=settings.sys_root,
                    dev_root=settings.dev_root,
                    ids_path=settings.usb_ids_path,
                    strict_registry=settings.strict_registry,
                )
            )
        if settings.enable_pci:
            sources.append(
                PciDeviceSource(
                    sys_root=settings.sys_root,
                    ids_path=settings.pci_ids_path,
                    strict_registry=settings.strict_registry,
                )
            )
        data.setdefault(
            "writer",
            PrivilegedWriter(
                pkexec_path=settings.pkexec_path, timeout_s=settings.write_timeout_s
            ),
        )
        state = cls(sources=sources, **data)
        if refresh:
            state.refresh()
        return state

    @property
    def can_apply(self) -> bool:
        """Whether apply() is allowed (no pending validation errors)."""
        return self.error_count == 0

    def get_device(self, device_id: str) -> Device:
        """Return the device with ``device_id``.

        Raises:
            UnknownDeviceError: No such device in the collection
        """
        for device in self.devices:
            if device.id == device_id:
                return device
        raise UnknownDeviceError(device_id)

    def dispatch(self, action: Action) -> None:
        """Process one command. This is the single entry point for edits."""
        if isinstance(action, SetAutosuspend):
            self.set_autosuspend(action.device_id, action.enabled)
        elif isinstance(action, SetDelay):
            self.set_delay(action.device_id, action.text)
        elif isinstance(action, Apply):
            self.apply()
        elif isinstance(action, Refresh):
            self.refresh()
        elif isinstance(action, ResetChanged):
            self.reset_changed()
        else:
            raise TypeError(f"unsupported action {action!r}")

        self._logger.debug(
            "current state: %d devices, %d errors, changed is %s",
            len(self.devices),
            self.error_count,
            self.changed,
        )

    def refresh(self) -> None:
        """Rebuild the device collection; pending edits are discarded."""
        devices: list[Device] = []
        registries: dict[str, Registry | None] = {}
        for source in self.sources:
            registry = source.load_registry()
            registries[source.name] = registry
            for raw in source.enumerate():
                devices.append(classify(raw, registry))

        self.devices = devices
        self.registries = registries
        self.reset_changed()
        self._logger.debug("refreshed: %d devices", len(devices))

    def set_autosuspend(self, device_id: str, enabled: bool) -> None:
        """Enable or disable autosuspend for one device."""
        self.get_device(device_id).autosuspend_enabled = enabled
        self.changed = True

    def set_delay(self, device_id: str, text: str) -> str | None:
        """Set one device's delay from text like "5 minutes".

        Invalid text is recorded against the device instead of raising,
        and counts towards ``error_count`` until a valid delay replaces
        it. The state is marked changed either way.

        Returns:
            The validation message, or None if the text was valid
        """
        device = self.get_device(device_id)
        try:
            delay_ms = parse_delay(text)
        except DelayParseError as e:
            if device_id not in self.delay_errors:
                self.error_count += 1
            self.delay_errors[device_id] = str(e)
            self._logger.debug("rejected delay for %s: %s", device_id, e)
            self.changed = True
            return str(e)

        device.delay_ms = delay_ms
        if self.delay_errors.pop(device_id, None) is not None:
            self.error_count -= 1
        self.changed = True
        return None

    def reset_changed(self) -> None:
        """Clear the changed flag and every recorded validation error."""
        self.changed = False
        self.error_count = 0
        self.delay_errors.clear()

    def apply(self) -> None:
        """Persist every device's power settings.

        Each device writes power/control before its delay, since a delay
        only matters once autosuspend is enabled. A failed write skips
        the rest of that device but not the devices after it. Written
        values are never rolled back.

        Raises:
            PendingErrorsError: Invalid delays are still pending
            ApplyError: Some device could not be written; raised from
                the first write error. Edit bookkeeping is kept so the
                whole apply can be retried.
        """
        if not self.can_apply:
            raise PendingErrorsError(
                f"{self.error_count} invalid delay(s) must be corrected first",
                details={"devices": sorted(self.delay_errors)},
            )

        failures: list[WriteFailure] = []
        for device in self.devices:
            failure = self._save(device)
            if failure is not None:
                failures.append(failure)

        if failures:
            device_id, attribute, error = failures[0]
            raise ApplyError(
                device_id=device_id,
                attribute=attribute,
                path=error.path,
                failures=failures,
            ) from error

        self.reset_changed()

    def summary(self) -> dict[str, tuple[int, int]]:
        """Per bus: (devices with autosuspend enabled, all devices)."""
        counts: dict[str, tuple[int, int]] = {}
        for device in self.devices:
            enabled, total = counts.get(device.bus, (0, 0))
            counts[device.bus] = (enabled + device.autosuspend_enabled, total + 1)
        return counts

    def _save(self, device: Device) -> WriteFailure | None:
        writes = [(CONTROL_ATTRIBUTE, device.control_path, device.control_text)]
        if device.delay_supported:
            writes.append((DELAY_ATTRIBUTE, device.delay_path, device.delay_text))

        self._logger.debug(
            "saving %s with (%s)",
            device.path,
            ", ".join(content for _, _, content in writes),
        )
        for attribute, path, content in writes:
            try:
                self.writer.write(path, content)
            except PrivilegedWriteError as e:
                self._logger.error(
                    "Failed to write %s for device %s: %s", attribute, device.id, e
                )
                return device.id, attribute, e
        return None

    def __repr__(self) -> str:
        return (
            f"ConfigState({len(self.devices)} devices, "
            f"changed={self.changed}, errors={self.error_count})"
        )
