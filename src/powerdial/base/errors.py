"""Error taxonomy for device identification and power configuration."""

from pathlib import Path
from typing import Any


class PowerDialError(Exception):
    """Base class for all expected operational errors in powerdial.

    Carries a stable machine-readable ``code`` so callers can map
    failures to user-facing messages without parsing text.
    """

    code: str = "unknown"

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigError(PowerDialError):
    """Settings could not be validated."""

    code = "config_error"


# ---------------------------------------------------------------------------
# Registry / enumeration faults (degrade, never fatal)
# ---------------------------------------------------------------------------


class RegistryParseError(PowerDialError):
    """A registry line could not be matched where an entry is required.

    Examples:
      - non-hex id on a vendor or product line
      - nested line with no parent entry
      - duplicate id within one level (strict mode)
    """

    code = "registry_parse_error"

    def __init__(self, message: str, *, line_number: int, fragment: str) -> None:
        super().__init__(
            f"line {line_number}: {message}: {fragment!r}",
            details={"line_number": line_number, "fragment": fragment},
        )
        self.line_number = line_number
        self.fragment = fragment


class DeviceReadError(PowerDialError):
    """One device's attribute file is missing, unreadable or malformed."""

    code = "device_read_error"

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(f"{message} ({path})", details={"path": str(path)})
        self.path = path


# ---------------------------------------------------------------------------
# Edit-time faults
# ---------------------------------------------------------------------------


class DelayParseError(PowerDialError, ValueError):
    """Human-readable delay text could not be parsed."""

    code = "delay_parse_error"

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(
            f"invalid delay {text!r}: {reason}",
            hint="use e.g. '0 seconds', '20 seconds' or '5 minutes'",
            details={"text": text},
        )
        self.text = text


class UnknownDeviceError(PowerDialError, KeyError):
    """An edit named a device id that is not in the current collection."""

    code = "unknown_device"

    def __init__(self, device_id: str) -> None:
        super().__init__(
            f"no device with id {device_id!r}",
            details={"device_id": device_id},
        )
        self.device_id = device_id

    def __str__(self) -> str:
        return self.message


class PendingErrorsError(PowerDialError):
    """Apply was requested while delay validation errors are pending."""

    code = "pending_errors"


# ---------------------------------------------------------------------------
# Persistence faults
# ---------------------------------------------------------------------------


class PrivilegedWriteError(PowerDialError):
    """Elevation or I/O failure while writing one attribute file."""

    code = "privileged_write_error"

    def __init__(self, message: str, *, path: Path, hint: str | None = None) -> None:
        super().__init__(
            f"{message} ({path})", hint=hint, details={"path": str(path)}
        )
        self.path = path


class PermissionDeniedError(PrivilegedWriteError):
    """Elevation was refused or the authentication dialog dismissed."""

    code = "permission_denied"


class TargetNotFoundError(PrivilegedWriteError):
    """The attribute file to write does not exist."""

    code = "target_not_found"


class TransientWriteError(PrivilegedWriteError):
    """Elevation helper unavailable, timed out, or the write itself failed."""

    code = "transient_write_error"


class ApplyError(PowerDialError):
    """At least one device could not be persisted during apply.

    ``device_id``, ``attribute`` and ``path`` describe the first
    failure; ``failures`` lists every (device id, attribute, error)
    triple in the order they occurred.
    """

    code = "apply_error"

    def __init__(
        self,
        *,
        device_id: str,
        attribute: str,
        path: Path,
        failures: list[tuple[str, str, PrivilegedWriteError]],
    ) -> None:
        first = failures[0][2]
        message = f"failed to write {attribute} for device {device_id}: {first}"
        if len(failures) > 1:
            message += f" (and {len(failures) - 1} more device(s))"
        super().__init__(
            message,
            hint=first.hint,
            details={
                "device_id": device_id,
                "attribute": attribute,
                "path": str(path),
                "failed_devices": [f[0] for f in failures],
            },
        )
        self.device_id = device_id
        self.attribute = attribute
        self.path = path
        self.failures = failures
