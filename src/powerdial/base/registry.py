"""Lookup trees built from a hardware-ID registry file."""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class Vendor(BaseModel):
    """A vendor and the names of its products, keyed by product id."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0, le=0xFFFF)
    name: str
    devices: Dict[int, str] = Field(default_factory=dict)


class Subclass(BaseModel):
    """A subclass and its interface (USB protocol / PCI prog-if) names."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0, le=0xFFFF)
    name: str
    interfaces: Dict[int, str] = Field(default_factory=dict)


class DeviceClass(BaseModel):
    """A device class and its subclasses."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0, le=0xFFFF)
    name: str
    subclasses: Dict[int, Subclass] = Field(default_factory=dict)


class Registry(BaseModel):
    """Vendor tree and class tree parsed from one registry file.

    The two trees share nothing; vendor ids and class ids live in
    separate namespaces. Lookups return ``None`` when an id (or any of
    its ancestors) is not declared.
    """

    model_config = ConfigDict(frozen=True)

    vendors: Dict[int, Vendor] = Field(default_factory=dict)
    classes: Dict[int, DeviceClass] = Field(default_factory=dict)

    def vendor_name(self, vendor_id: int) -> str | None:
        vendor = self.vendors.get(vendor_id)
        return vendor.name if vendor else None

    def product_name(self, vendor_id: int, product_id: int) -> str | None:
        vendor = self.vendors.get(vendor_id)
        return vendor.devices.get(product_id) if vendor else None

    def class_name(self, class_id: int) -> str | None:
        device_class = self.classes.get(class_id)
        return device_class.name if device_class else None

    def subclass_name(self, class_id: int, subclass_id: int) -> str | None:
        subclass = self._subclass(class_id, subclass_id)
        return subclass.name if subclass else None

    def interface_name(
        self, class_id: int, subclass_id: int, interface_id: int
    ) -> str | None:
        subclass = self._subclass(class_id, subclass_id)
        return subclass.interfaces.get(interface_id) if subclass else None

    def _subclass(self, class_id: int, subclass_id: int) -> Subclass | None:
        device_class = self.classes.get(class_id)
        if device_class is None:
            return None
        return device_class.subclasses.get(subclass_id)

    def __repr__(self) -> str:
        return (
            f"Registry({len(self.vendors)} vendors, "
            f"{len(self.classes)} classes)"
        )
