"""Tests for the Device classes."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from powerdial import PciDevice, RawDevice, UsbDevice
from powerdial.base.device import Device, InterfaceDescriptor, PciKind, UsbKind


class TestRawDevice:
    """Test the unclassified attribute record."""

    def test_minimal(self):
        """Test a raw device with only the required fields."""
        raw = RawDevice(bus="usb", id="189:1", path=Path("/sys/dev/char/189:1"), control="on")

        assert raw.vendor_id is None
        assert raw.interfaces == ()
        assert raw.autosuspend_delay_ms is None

    def test_frozen(self):
        """Test that raw records cannot be modified."""
        raw = RawDevice(bus="pci", id="0000:00:00.0", path=Path("/sys"), control="on")

        with pytest.raises(ValidationError):
            raw.control = "auto"

    def test_unknown_bus(self):
        """Test that only usb and pci are accepted."""
        with pytest.raises(ValidationError):
            RawDevice(bus="thunderbolt", id="x", path=Path("/sys"), control="on")

    def test_interface_triple(self):
        """Test the interface class triple and its byte range."""
        interface = InterfaceDescriptor(class_id=3, subclass_id=1, protocol_id=2)

        assert interface.triple == (3, 1, 2)
        with pytest.raises(ValidationError):
            InterfaceDescriptor(class_id=0x100)


class TestDevice:
    """Test the classified, editable device."""

    def test_power_paths(self):
        """Test the attribute files written on apply."""
        device = UsbDevice(id="189:1", path=Path("/sys/dev/char/189:1"))

        assert device.control_path == Path("/sys/dev/char/189:1/power/control")
        assert device.delay_path == Path("/sys/dev/char/189:1/power/autosuspend_delay_ms")

    def test_persisted_text(self):
        """Test the text written for control and delay."""
        device = UsbDevice(id="189:1", path=Path("/sys"), delay_ms=2000)

        assert device.control_text == "on"
        assert device.delay_text == "2000"

        device.autosuspend_enabled = True
        assert device.control_text == "auto"

    def test_negative_delay_rejected(self):
        """Test that a stored delay is never negative."""
        device = UsbDevice(id="189:1", path=Path("/sys"))

        with pytest.raises(ValidationError):
            device.delay_ms = -1

    def test_vendor_id_range(self):
        """Test that vendor ids are 16 bit."""
        with pytest.raises(ValidationError):
            UsbDevice(id="189:1", path=Path("/sys"), vendor_id=0x10000)

    def test_base_is_abstract(self):
        """Test that a device without a bus-specific class cannot be built."""
        with pytest.raises(TypeError):
            Device(bus="usb", id="189:1", path=Path("/sys"))


class TestUsbDeviceNames:
    """Test how USB devices present their names."""

    def test_registry_names(self):
        """Test that registry names are preferred for the name."""
        device = UsbDevice(
            id="189:2",
            path=Path("/sys/dev/char/189:2"),
            registry_vendor_name="Logitech, Inc.",
            registry_product_name="M105 Optical Mouse",
            raw_manufacturer_name="Logitech",
            raw_product_name="USB Optical Mouse",
        )

        assert device.get_name() == "Logitech, Inc. M105 Optical Mouse"
        assert device.get_description() == "Logitech USB Optical Mouse"

    def test_raw_names_fallback(self):
        """Test that self-reported names fill in for the registry."""
        device = UsbDevice(
            id="189:2",
            path=Path("/sys/dev/char/189:2"),
            raw_manufacturer_name="Acme",
            raw_product_name="Gadget",
        )

        assert device.get_name() == "Acme Gadget"
        assert device.get_description() == "/sys/dev/char/189:2"

    def test_unnamed_hub(self):
        """Test that a hub with no product name is called a Hub."""
        device = UsbDevice(
            id="189:0",
            path=Path("/sys/dev/char/189:0"),
            registry_vendor_name="Linux Foundation",
            kind=UsbKind(class_id=0x09),
        )

        assert device.get_name() == "Linux Foundation Hub"

    def test_nothing_known(self):
        """Test a device with no names at all."""
        device = UsbDevice(id="189:7", path=Path("/sys/dev/char/189:7"))

        assert device.get_name() == ""
        assert device.get_description() == "/sys/dev/char/189:7"
        assert device.get_kind_description() == "Unknown"


class TestPciDeviceNames:
    """Test how PCI functions present their names."""

    def test_registry_name(self):
        """Test that the registry device name is used when known."""
        device = PciDevice(
            id="0000:00:14.0",
            path=Path("/sys/devices/pci0000:00/0000:00:14.0"),
            registry_vendor_name="Intel Corporation",
            registry_product_name="xHCI Host Controller",
        )

        assert device.get_name() == "xHCI Host Controller"
        assert device.get_description() == "Intel Corporation"

    def test_unknown_bridge(self):
        """Test that an unnamed bridge is still called a Bridge."""
        device = PciDevice(id="0000:00:1c.0", path=Path("/sys"), kind=PciKind(class_id=0x06))

        assert device.get_name() == "Bridge"

    def test_unknown_device(self):
        """Test the fallback name and description."""
        device = PciDevice(id="0000:03:00.0", path=Path("/sys/devices/x"))

        assert device.get_name() == "Unknown device"
        assert device.get_description() == "/sys/devices/x"

    def test_kind_description(self):
        """Test that the subclass name is preferred over the class name."""
        kind = PciKind(class_id=0x0C, subclass_id=0x03, class_name="Serial bus controller",
                       subclass_name="USB controller")

        assert kind.describe() == "USB controller"
        assert PciKind(class_id=2, class_name="Network controller").describe() == (
            "Network controller"
        )
        assert str(PciKind()) == "Unknown"


class TestUsbKind:
    """Test USB classification labels."""

    def test_describe_uses_label_groups(self):
        """Test that the kind itself renders its class-dependent label."""
        wireless = UsbKind(class_id=0xE0, subclass_id=0x01, class_name="Wireless",
                           subclass_name="Radio Frequency", interface_name="Bluetooth")
        keyboard = UsbKind(class_id=0x03, interface_id=0x01,
                           class_name="Human Interface Device", interface_name="Keyboard")

        assert wireless.describe() == "Wireless (Radio Frequency)"
        assert str(keyboard) == "Keyboard"
        assert UsbKind().describe() == "Unknown"

    def test_device_kind_description(self):
        """Test that a USB device reports its kind label."""
        kind = UsbKind(class_id=0x08, class_name="Mass Storage", subclass_name="SCSI")
        device = UsbDevice(id="189:1", path=Path("/sys"), kind=kind)

        assert device.get_kind_description() == "Mass Storage"
