"""PCI device classification."""

from powerdial.base.device import PciDevice, PciKind, RawDevice
from powerdial.base.registry import Registry

from .power import clean_name, power_state


def classify_pci(raw: RawDevice, registry: Registry | None) -> PciDevice:
    """Build a PciDevice from raw attribute values.

    PCI classes are two levels deep in the registry (class, subclass);
    the programming interface is looked up as the third level when the
    registry declares it.
    """
    class_id = raw.class_id or 0
    subclass_id = raw.subclass_id or 0
    prog_if = raw.protocol_id or 0

    kind = PciKind(class_id=class_id, subclass_id=subclass_id, interface_id=prog_if)
    vendor_name = device_name = None
    if registry is not None:
        kind = PciKind(
            class_id=class_id,
            subclass_id=subclass_id,
            interface_id=prog_if,
            class_name=clean_name(registry.class_name(class_id)),
            subclass_name=clean_name(registry.subclass_name(class_id, subclass_id)),
            interface_name=clean_name(registry.interface_name(class_id, subclass_id, prog_if)),
        )
        if raw.vendor_id is not None:
            vendor_name = clean_name(registry.vendor_name(raw.vendor_id))
            if vendor_name is not None and raw.product_id is not None:
                device_name = clean_name(registry.product_name(raw.vendor_id, raw.product_id))

    enabled, delay_ms = power_state(raw)
    return PciDevice(
        id=raw.id,
        path=raw.path,
        vendor_id=raw.vendor_id,
        product_id=raw.product_id,
        registry_vendor_name=vendor_name,
        registry_product_name=device_name,
        kind=kind,
        autosuspend_enabled=enabled,
        delay_ms=delay_ms,
        delay_supported=raw.autosuspend_delay_ms is not None,
    )
