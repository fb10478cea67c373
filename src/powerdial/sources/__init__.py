"""Device sources: enumerate raw devices from the device filesystem."""

from .base import DeviceSource
from .pci import PCI_IDS_PATH, PciDeviceSource
from .usb import USB_IDS_PATH, UsbDeviceSource

__all__ = [
    "PCI_IDS_PATH",
    "USB_IDS_PATH",
    "DeviceSource",
    "PciDeviceSource",
    "UsbDeviceSource",
]
