"""Parser for usb.ids / pci.ids style hardware-ID registries.

The registry is line oriented. Nesting depth is the number of leading
tab characters:

    046d  Logitech, Inc.            vendor (depth 0)
    \tc52b  Unifying Receiver        product (depth 1)
    C 03  Human Interface Device    class (depth 0)
    \t01  Boot Interface Subclass   subclass (depth 1)
    \t\t01  Keyboard                interface / prog-if (depth 2)

Each line is matched with a small pyparsing grammar and the tree is
built in a single top-to-bottom pass. A line at a shallower depth
closes every deeper subtree that was open.
"""

import logging
import re
from pathlib import Path

from pyparsing import (
    Literal,
    ParseException,
    ParserElement,
    White,
    Word,
    hexnums,
    one_of,
    rest_of_line,
)

from powerdial.base.errors import RegistryParseError
from powerdial.base.registry import DeviceClass, Registry, Subclass, Vendor

logger = logging.getLogger(__name__)

REGISTRY_ENCODING = "cp1252"
MAX_ID = 0xFFFF

# Top-level sections of usb.ids that are not vendors or classes (audio
# terminals, HID descriptors, languages, ...). Skipped with their children.
AUXILIARY_SECTIONS = ("AT", "HID", "R", "BIAS", "PHY", "HUT", "L", "HCC", "VT")

_HEX_ID = Word(hexnums).set_parse_action(lambda t: int(t[0], 16))
_GAP = White(" \t")

ENTRY_LINE: ParserElement = (
    _HEX_ID("id") + _GAP.suppress() + rest_of_line("name")
).leave_whitespace().parse_with_tabs()
CLASS_MARKER: ParserElement = (Literal("C") + _GAP).leave_whitespace().parse_with_tabs()
CLASS_LINE: ParserElement = (
    Literal("C").suppress() + _GAP.suppress() + ENTRY_LINE
).leave_whitespace().parse_with_tabs()
AUXILIARY_LINE: ParserElement = (
    one_of(" ".join(AUXILIARY_SECTIONS)) + _GAP
).leave_whitespace().parse_with_tabs()

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def parse_registry(text: str, strict: bool = True) -> Registry:
    """Parse registry text into vendor and class lookup trees.

    Args:
        text: Decoded registry contents
        strict: Fail the whole parse on the first malformed line. When
            False, malformed lines (and their nested lines) are logged
            and skipped.

    Returns:
        The parsed Registry

    Raises:
        RegistryParseError: A line could not be parsed (strict mode)
    """
    return _RegistryBuilder(strict).feed(text)


def decode_registry(data: bytes) -> str:
    """Decode raw registry bytes; undefined bytes become U+FFFD."""
    return data.decode(REGISTRY_ENCODING, errors="replace")


def load_registry(path: Path | str, strict: bool = True) -> Registry:
    """Read, decode and parse a registry file.

    Raises:
        OSError: The file could not be read
        RegistryParseError: The contents could not be parsed
    """
    path = Path(path)
    logger.debug("parsing hardware-ID registry at %s", path)
    registry = parse_registry(decode_registry(path.read_bytes()), strict=strict)
    logger.debug("parsed %r from %s", registry, path)
    return registry


def load_registry_or_none(path: Path | str, strict: bool = True) -> Registry | None:
    """Load a registry, degrading to None when it is missing or malformed."""
    try:
        return load_registry(path, strict=strict)
    except (OSError, RegistryParseError) as e:
        logger.warning("Ignoring error loading registry %s: %s", path, e)
        return None


class _RegistryBuilder:
    """Single-pass tree builder holding the currently open entries."""

    def __init__(self, strict: bool) -> None:
        self.strict = strict
        self.vendors: dict[int, Vendor] = {}
        self.classes: dict[int, DeviceClass] = {}
        self.vendor: Vendor | None = None
        self.device_class: DeviceClass | None = None
        # Depth-1 entry currently open: a product id under a vendor, or
        # a Subclass under a class.
        self.product_id: int | None = None
        self.subclass: Subclass | None = None
        # Lines nested deeper than this depth are being skipped.
        self.skip_depth: int | None = None

    def feed(self, text: str) -> Registry:
        for line_number, line in enumerate(_LINE_BREAK.split(text), start=1):
            body = line.lstrip("\t")
            if not body.strip() or body.startswith("#"):
                continue
            depth = len(line) - len(body)

            if self.skip_depth is not None:
                if depth > self.skip_depth:
                    continue
                self.skip_depth = None

            try:
                if depth == 0:
                    self._top_level(body, line_number)
                elif depth == 1:
                    self._second_level(body, line_number)
                elif depth == 2:
                    self._third_level(body, line_number)
                else:
                    raise RegistryParseError(
                        f"nesting depth {depth} is not allowed",
                        line_number=line_number,
                        fragment=line,
                    )
            except RegistryParseError as e:
                if self.strict:
                    raise
                logger.warning("Skipping registry line: %s", e)
                self._close(depth)
                self.skip_depth = depth

        return Registry(vendors=self.vendors, classes=self.classes)

    def _close(self, depth: int) -> None:
        """Close every open entry at ``depth`` or deeper."""
        if depth <= 1:
            self.product_id = None
            self.subclass = None
        if depth == 0:
            self.vendor = None
            self.device_class = None

    def _entry(self, grammar: ParserElement, body: str, line_number: int) -> tuple[int, str]:
        try:
            result = grammar.parse_string(body, parse_all=True)
        except ParseException as e:
            raise RegistryParseError(
                "expected '<hex id> <name>'", line_number=line_number, fragment=body
            ) from e
        entry_id = result["id"]
        if entry_id > MAX_ID:
            raise RegistryParseError(
                "id out of range", line_number=line_number, fragment=body
            )
        return entry_id, result.get("name", "")

    def _claim(self, seen: dict, entry_id: int, what: str, line_number: int, body: str) -> None:
        if entry_id in seen:
            raise RegistryParseError(
                f"duplicate {what} id {entry_id:#06x}",
                line_number=line_number,
                fragment=body,
            )

    def _top_level(self, body: str, line_number: int) -> None:
        self._close(0)

        if CLASS_MARKER.matches(body, parse_all=False):
            class_id, name = self._entry(CLASS_LINE, body, line_number)
            self._claim(self.classes, class_id, "class", line_number, body)
            self.device_class = DeviceClass(id=class_id, name=name)
            self.classes[class_id] = self.device_class
            return

        if AUXILIARY_LINE.matches(body, parse_all=False):
            logger.debug("skipping registry section at line %d: %s", line_number, body)
            self.skip_depth = 0
            return

        vendor_id, name = self._entry(ENTRY_LINE, body, line_number)
        self._claim(self.vendors, vendor_id, "vendor", line_number, body)
        self.vendor = Vendor(id=vendor_id, name=name)
        self.vendors[vendor_id] = self.vendor

    def _second_level(self, body: str, line_number: int) -> None:
        self._close(1)

        if self.vendor is not None:
            product_id, name = self._entry(ENTRY_LINE, body, line_number)
            self._claim(self.vendor.devices, product_id, "product", line_number, body)
            self.vendor.devices[product_id] = name
            self.product_id = product_id
        elif self.device_class is not None:
            subclass_id, name = self._entry(ENTRY_LINE, body, line_number)
            self._claim(
                self.device_class.subclasses, subclass_id, "subclass", line_number, body
            )
            self.subclass = Subclass(id=subclass_id, name=name)
            self.device_class.subclasses[subclass_id] = self.subclass
        else:
            raise RegistryParseError(
                "nested entry without a vendor or class",
                line_number=line_number,
                fragment=body,
            )

    def _third_level(self, body: str, line_number: int) -> None:
        if self.product_id is not None:
            # Product interfaces (usb.ids) and subsystems (pci.ids) are
            # validated but not kept; Vendor stores product names only.
            self._entry(ENTRY_LINE, body, line_number)
        elif self.subclass is not None:
            interface_id, name = self._entry(ENTRY_LINE, body, line_number)
            self._claim(
                self.subclass.interfaces, interface_id, "interface", line_number, body
            )
            self.subclass.interfaces[interface_id] = name
        else:
            raise RegistryParseError(
                "nested entry without a product or subclass",
                line_number=line_number,
                fragment=body,
            )
