"""Runtime power state shared by every bus."""

from powerdial.base.device import RawDevice

CONTROL_AUTO = "auto"
CONTROL_ON = "on"

# power/autosuspend_delay_ms value meaning "autosuspend disabled by policy"
DELAY_DISABLED = -1


def power_state(raw: RawDevice) -> tuple[bool, int]:
    """Return (autosuspend enabled, delay in ms) for a raw device.

    A delay of -1 disables autosuspend whatever power/control says; the
    stored delay is then 0.
    """
    enabled = raw.control.strip() == CONTROL_AUTO
    delay = raw.autosuspend_delay_ms
    if delay is None:
        return enabled, 0
    if delay == DELAY_DISABLED:
        return False, 0
    return enabled, max(delay, 0)


def clean_name(name: str | None) -> str | None:
    """Trim a name, mapping blank names to None."""
    if name is None:
        return None
    name = name.strip()
    return name or None
