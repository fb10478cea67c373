"""Commands understood by ConfigState.dispatch()."""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Command(BaseModel):
    model_config = ConfigDict(frozen=True)


class SetAutosuspend(_Command):
    """Enable or disable autosuspend for one device."""

    kind: Literal["set_autosuspend"] = "set_autosuspend"
    device_id: str
    enabled: bool


class SetDelay(_Command):
    """Set one device's autosuspend delay from human-readable text."""

    kind: Literal["set_delay"] = "set_delay"
    device_id: str
    text: str


class Apply(_Command):
    """Persist every device's settings."""

    kind: Literal["apply"] = "apply"


class Refresh(_Command):
    """Discard all devices and edits and enumerate again."""

    kind: Literal["refresh"] = "refresh"


class ResetChanged(_Command):
    """Forget pending edit bookkeeping after a successful apply."""

    kind: Literal["reset_changed"] = "reset_changed"


Action = Union[SetAutosuspend, SetDelay, Apply, Refresh, ResetChanged]


class ActionEnvelope(BaseModel):
    """Wrapper for validating an Action from plain data by its kind."""

    action: Action = Field(discriminator="kind")
