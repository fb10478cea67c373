"""Base entity class for named components."""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Entity(BaseModel):
    """Base class for the named, long-lived components of powerdial.

    Device sources, the privileged writer and the configuration state
    are all entities. Each one gets a logger named after its module,
    class and instance name, so log output from two sources of the
    same type (say, a test source and a real one) stays apart.
    """

    model_config = ConfigDict(extra="forbid", frozen=False)

    name: str = Field(
        min_length=1, description="Human-readable name for this component"
    )

    def __init__(self, **data: Any) -> None:
        """Initialize the entity and its logger."""
        super().__init__(**data)
        self._logger = logging.getLogger(
            f"{self.__class__.__module__}."
            f"{self.__class__.__name__}."
            f"{self.name}"
        )

    def __repr__(self) -> str:
        """Return string representation showing all fields."""
        fields = []
        for field_name, field_value in self.model_dump().items():
            if isinstance(field_value, str):
                fields.append(f"{field_name}='{field_value}'")
            else:
                fields.append(f"{field_name}={field_value}")

        return f"{self.__class__.__name__}({', '.join(fields)})"
