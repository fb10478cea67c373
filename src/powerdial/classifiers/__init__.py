"""Device classification: raw attribute values to resolved devices."""

from powerdial.base.device import Device, RawDevice, usb_kind_label
from powerdial.base.registry import Registry

from .pci import classify_pci
from .power import power_state
from .usb import classify_usb, interface_replaces, select_interface_triple


def classify(raw: RawDevice, registry: Registry | None) -> Device:
    """Classify a raw device with the classifier for its bus."""
    if raw.bus == "usb":
        return classify_usb(raw, registry)
    return classify_pci(raw, registry)


__all__ = [
    "classify",
    "classify_pci",
    "classify_usb",
    "interface_replaces",
    "power_state",
    "select_interface_triple",
    "usb_kind_label",
]
