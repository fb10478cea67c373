from pathlib import Path

import pytest

USB_IDS_TEXT = """\
#
#	List of USB ID's
#
# Syntax:
# vendor  vendor_name
#	device  device_name				<-- single tab
#		interface  interface_name		<-- two tabs

046d  Logitech, Inc.
	c077  M105 Optical Mouse
	c31c  Keyboard K120
		00  Keyboard interface
1d6b  Linux Foundation
	0002  2.0 root hub
# interleaved comment between siblings
	0003  3.0 root hub
abcd  Acme Widgets

# List of known device classes, subclasses and protocols

C 00  (Defined at Interface level)
C 03  Human Interface Device
	00  No Subclass
		00  None
		01  Keyboard
		02  Mouse
	01  Boot Interface Subclass
		00  None
		01  Keyboard
		02  Mouse
C 08  Mass Storage
	06  SCSI
		50  Bulk-Only
C 09  Hub
	00  Unused
		00  Full speed (or root) hub
		03  USB 3.0 hub
C e0  Wireless
	01  Radio Frequency
		01  Bluetooth
C ef  Miscellaneous Device
	02  ?
		01  Interface Association
C fe  Application Specific Interface
	01  Device Firmware Update

# List of Audio Class Terminal Types

AT 0100  USB Undefined
AT 0101  USB Streaming

# List of HID Descriptor Types

HID 21  HID
HID 22  Report

# List of Languages

L 0001  Arabic
	01  Saudi Arabia
"""

PCI_IDS_TEXT = """\
# pci.ids excerpt
8086  Intel Corporation
	a0ed  Tiger Lake-LP USB 3.2 Gen 2x1 xHCI Host Controller
		1028 0a1f  Latitude 7420
	9a14  11th Gen Core Processor Host Bridge/DRAM Registers
10ec  Realtek Semiconductor Co., Ltd.
	8168  RTL8111/8168/8211/8411 PCI Express Gigabit Ethernet Controller

C 02  Network controller
	00  Ethernet controller
C 06  Bridge
	00  Host bridge
	04  PCI bridge
		00  Normal decode
C 0c  Serial bus controller
	03  USB controller
		30  XHCI
"""


@pytest.fixture
def usb_ids_text() -> str:
    """Provides a small usb.ids with vendors, classes and extra sections."""
    return USB_IDS_TEXT


@pytest.fixture
def pci_ids_text() -> str:
    """Provides a small pci.ids with a two-level class tree."""
    return PCI_IDS_TEXT


@pytest.fixture
def usb_ids_file(tmp_path: Path) -> Path:
    """Provides usb.ids written to disk in its native encoding."""
    path = tmp_path / "usb.ids"
    path.write_bytes(USB_IDS_TEXT.encode("cp1252"))
    return path


@pytest.fixture
def pci_ids_file(tmp_path: Path) -> Path:
    """Provides pci.ids written to disk in its native encoding."""
    path = tmp_path / "pci.ids"
    path.write_bytes(PCI_IDS_TEXT.encode("cp1252"))
    return path


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "hardware: marks tests as hardware tests (may require physical hardware)")
