"""USB device classification.

Turns the raw attribute values of a USB device into a UsbDevice with
registry names, a class triple and its current power state.

Many devices declare their class per interface instead of at the
device level. For those (device class 0x00, and the 0xEF/0x02/0x01
"Interface Association" composite marker) one interface is chosen to
stand for the whole device, using the tie-breaks in
``interface_replaces``.
"""

from typing import Iterable

from powerdial.base.device import (
    USB_CLASS_APP_SPECIFIC,
    USB_CLASS_HID,
    USB_CLASS_MISC,
    USB_CLASS_PER_INTERFACE,
    InterfaceDescriptor,
    RawDevice,
    UsbDevice,
    UsbKind,
)
from powerdial.base.registry import Registry

from .power import clean_name, power_state

Triple = tuple[int, int, int]

COMPOSITE_TRIPLE: Triple = (USB_CLASS_MISC, 0x02, 0x01)

HID_PROTOCOL_KEYBOARD = 0x01
HID_PROTOCOL_MOUSE = 0x02


def defers_to_interfaces(triple: Triple) -> bool:
    """Whether the device-level triple delegates to the interfaces."""
    return triple[0] == USB_CLASS_PER_INTERFACE or triple == COMPOSITE_TRIPLE


def _is_mouse(triple: Triple) -> bool:
    return triple[0] == USB_CLASS_HID and triple[2] == HID_PROTOCOL_MOUSE


def _is_keyboard(triple: Triple) -> bool:
    return triple[0] == USB_CLASS_HID and triple[2] == HID_PROTOCOL_KEYBOARD


def interface_replaces(retained: Triple, candidate: Triple) -> bool:
    """Decide whether ``candidate`` should replace the retained triple.

    Args:
        retained: Triple chosen from earlier interfaces
        candidate: Triple of the interface being inspected

    Returns:
        True if the candidate passes every tie-break
    """
    if _is_mouse(retained) and _is_keyboard(candidate):
        return False
    if candidate[0] == USB_CLASS_APP_SPECIFIC and retained[0] != 0:
        return False
    if candidate[1] == 0 and candidate[0] == retained[0]:
        return False
    if candidate[2] == 0 and candidate[:2] == retained[:2]:
        return False
    return True


def select_interface_triple(interfaces: Iterable[InterfaceDescriptor]) -> Triple | None:
    """Pick the triple that represents a device from its interfaces.

    The first interface always seeds the result; later ones replace it
    only when ``interface_replaces`` allows. Returns None when there are
    no interfaces.
    """
    retained: Triple | None = None
    for interface in interfaces:
        candidate = interface.triple
        if retained is None or interface_replaces(retained, candidate):
            retained = candidate
    return retained


def resolve_triple(raw: RawDevice) -> Triple:
    """Class/subclass/protocol used to classify a USB device."""
    device_triple = (raw.class_id or 0, raw.subclass_id or 0, raw.protocol_id or 0)
    if defers_to_interfaces(device_triple):
        chosen = select_interface_triple(raw.interfaces)
        if chosen is not None:
            return chosen
    return device_triple


def classify_usb(raw: RawDevice, registry: Registry | None) -> UsbDevice:
    """Build a fully resolved UsbDevice from raw attribute values.

    Args:
        raw: Attribute values read by a USB device source
        registry: Parsed usb.ids, or None to fall back to raw names

    Returns:
        The classified device
    """
    class_id, subclass_id, protocol_id = resolve_triple(raw)
    kind = UsbKind(class_id=class_id, subclass_id=subclass_id, interface_id=protocol_id)

    vendor_name = product_name = None
    if registry is not None:
        kind = UsbKind(
            class_id=class_id,
            subclass_id=subclass_id,
            interface_id=protocol_id,
            class_name=clean_name(registry.class_name(class_id)),
            subclass_name=clean_name(registry.subclass_name(class_id, subclass_id)),
            interface_name=clean_name(
                registry.interface_name(class_id, subclass_id, protocol_id)
            ),
        )
        if raw.vendor_id is not None:
            vendor_name = clean_name(registry.vendor_name(raw.vendor_id))
            # Product ids are only meaningful within a known vendor
            if vendor_name is not None and raw.product_id is not None:
                product_name = clean_name(registry.product_name(raw.vendor_id, raw.product_id))

    enabled, delay_ms = power_state(raw)
    return UsbDevice(
        id=raw.id,
        path=raw.path,
        vendor_id=raw.vendor_id,
        product_id=raw.product_id,
        registry_vendor_name=vendor_name,
        registry_product_name=product_name,
        raw_product_name=clean_name(raw.product_name),
        raw_manufacturer_name=clean_name(raw.manufacturer_name),
        kind=kind,
        autosuspend_enabled=enabled,
        delay_ms=delay_ms,
        delay_supported=raw.autosuspend_delay_ms is not None,
    )
