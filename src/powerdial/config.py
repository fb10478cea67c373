"""Runtime settings for device discovery and persistence."""

from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from powerdial.base.errors import ConfigError
from powerdial.sources.pci import PCI_IDS_PATH
from powerdial.sources.usb import USB_IDS_PATH


class Settings(BaseModel):
    """Locations and policies used to build a ConfigState.

    The defaults match a stock Linux system with hwdata installed.
    Tests point the roots at a temporary directory instead.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    usb_ids_path: Path = Field(
        default=USB_IDS_PATH, description="USB hardware-ID registry"
    )
    pci_ids_path: Path = Field(
        default=PCI_IDS_PATH, description="PCI hardware-ID registry"
    )
    sys_root: Path = Field(
        default=Path("/sys"), description="Root of the device attribute tree"
    )
    dev_root: Path = Field(
        default=Path("/dev"), description="Root of the device node tree"
    )
    strict_registry: bool = Field(
        default=True,
        description="Reject a registry on its first malformed line instead "
        "of skipping the line",
    )
    pkexec_path: str = Field(
        default="pkexec", min_length=1, description="Elevation helper"
    )
    write_timeout_s: float = Field(
        default=120.0, gt=0, description="Upper bound on one elevated write"
    )
    enable_usb: bool = Field(default=True, description="Enumerate USB devices")
    enable_pci: bool = Field(default=True, description="Enumerate PCI devices")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Settings":
        """Validate settings from plain data.

        Raises:
            ConfigError: A key is unknown or a value is invalid
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise ConfigError(
                f"invalid settings: {e.error_count()} error(s)",
                details={"errors": e.errors(include_url=False)},
            ) from e
