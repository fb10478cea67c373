"""Tests for PCI device classification."""

import pytest

from powerdial import PciDevice, classify, parse_registry

from ..base.mocks import raw_pci


@pytest.fixture
def registry(pci_ids_text):
    """Provides the parsed PCI registry."""
    return parse_registry(pci_ids_text)


class TestClassifyPci:
    """Test classifying raw PCI functions."""

    def test_known_device(self, registry):
        """Test registry names and the class label of a known function."""
        raw = raw_pci(
            "0000:00:14.0",
            vendor_id=0x8086,
            product_id=0xA0ED,
            class_id=0x0C,
            subclass_id=0x03,
            protocol_id=0x30,
            control="auto",
            autosuspend_delay_ms=100,
        )

        device = classify(raw, registry)

        assert isinstance(device, PciDevice)
        assert device.get_name().startswith("Tiger Lake-LP USB 3.2")
        assert device.get_description() == "Intel Corporation"
        assert device.get_kind_description() == "USB controller"
        assert device.kind.interface_name == "XHCI"
        assert device.autosuspend_enabled is True
        assert device.delay_ms == 100
        assert device.delay_supported is True

    def test_unknown_bridge(self, registry):
        """Test that an unknown bridge function is named Bridge."""
        raw = raw_pci("0000:00:1c.0", vendor_id=0x8086, product_id=0x0001,
                      class_id=0x06, subclass_id=0x04)

        device = classify(raw, registry)

        assert device.get_name() == "Bridge"
        assert device.get_kind_description() == "PCI bridge"

    def test_unknown_device(self, registry):
        """Test the fallbacks for an unknown vendor and class."""
        raw = raw_pci("0000:03:00.0", vendor_id=0x1234, product_id=0x5678, class_id=0xFF)

        device = classify(raw, registry)

        assert device.get_name() == "Unknown device"
        assert device.get_description() == str(raw.path)
        assert device.get_kind_description() == "Unknown"

    def test_class_name_when_subclass_unknown(self, registry):
        """Test that the class name is used when the subclass is undeclared."""
        raw = raw_pci("0000:02:00.0", class_id=0x02, subclass_id=0x80)

        assert classify(raw, registry).get_kind_description() == "Network controller"

    def test_missing_delay(self, registry):
        """Test a function that exposes no autosuspend delay."""
        raw = raw_pci("0000:00:02.0", control="auto")

        device = classify(raw, registry)

        assert device.autosuspend_enabled is True
        assert device.delay_ms == 0
        assert device.delay_supported is False

    def test_without_registry(self):
        """Test classification with no registry available."""
        raw = raw_pci("0000:00:00.0", vendor_id=0x8086, product_id=0x9A14, class_id=0x06)

        device = classify(raw, None)

        assert device.get_name() == "Bridge"
        assert device.get_description() == str(raw.path)
