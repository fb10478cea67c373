"""Privileged writes of small attribute files.

Power-control attributes are writable by root only. A write first
negotiates access to the target, then replaces its contents:

1. Negotiation: a missing target fails immediately. If this process
   can already write the target (running as root, or a udev rule
   granted access), no elevation is needed.
2. Replacement: either a direct write, or the content is piped into
   ``pkexec tee <path>`` so polkit can ask the operator for
   authorization.

Callers only see ``write(path, content)``; the two phases are internal.
"""

import os
import subprocess
from pathlib import Path

from pydantic import Field

from .entity import Entity
from .errors import PermissionDeniedError, TargetNotFoundError, TransientWriteError

# pkexec exit statuses
PKEXEC_DISMISSED = 126
PKEXEC_NOT_AUTHORIZED = 127


class PrivilegedWriter(Entity):
    """Writes attribute files, elevating through pkexec when required."""

    name: str = Field(default="privileged-writer", min_length=1)
    pkexec_path: str = Field(
        default="pkexec", description="Elevation helper to run tee under"
    )
    timeout_s: float = Field(
        default=120.0,
        gt=0,
        description="Upper bound on one elevated write, including the "
        "time the operator spends in the authorization dialog",
    )

    def write(self, path: Path | str, content: str) -> None:
        """Replace the contents of ``path`` with ``content``.

        Raises:
            TargetNotFoundError: The file does not exist
            PermissionDeniedError: Elevation was refused or dismissed
            TransientWriteError: Any other failure
        """
        path = Path(path)
        self._logger.debug("writing %r to %s", content, path)

        if not self._needs_elevation(path):
            try:
                self._write_direct(path, content)
                return
            except PermissionError:
                # Access check and reality disagree; fall back to pkexec
                self._logger.debug("direct write to %s refused, elevating", path)

        self._write_elevated(path, content)

    def _needs_elevation(self, path: Path) -> bool:
        try:
            exists = path.exists()
            writable = exists and os.access(path, os.W_OK)
        except OSError as e:
            raise TransientWriteError(f"cannot inspect target: {e}", path=path) from e
        if not exists:
            raise TargetNotFoundError("attribute file does not exist", path=path)
        return not writable

    def _write_direct(self, path: Path, content: str) -> None:
        try:
            with path.open("w", encoding="utf-8") as f:
                f.write(content)
        except PermissionError:
            raise
        except FileNotFoundError as e:
            raise TargetNotFoundError("attribute file disappeared", path=path) from e
        except OSError as e:
            raise TransientWriteError(f"write failed: {e}", path=path) from e

    def _write_elevated(self, path: Path, content: str) -> None:
        argv = [self.pkexec_path, "tee", str(path)]
        try:
            p = subprocess.run(
                argv,
                input=content,
                text=True,
                capture_output=True,
                timeout=self.timeout_s,
                check=False,
            )
        except FileNotFoundError as e:
            raise TransientWriteError(
                f"elevation helper {self.pkexec_path!r} not found",
                path=path,
                hint="install polkit or run as root",
            ) from e
        except subprocess.TimeoutExpired as e:
            raise TransientWriteError(
                f"elevated write timed out after {self.timeout_s}s", path=path
            ) from e
        except OSError as e:
            raise TransientWriteError(
                f"cannot run elevation helper {self.pkexec_path!r}: {e}", path=path
            ) from e

        if p.returncode in (PKEXEC_DISMISSED, PKEXEC_NOT_AUTHORIZED):
            raise PermissionDeniedError(
                "authorization refused",
                path=path,
                hint="authenticate as an administrator to change power settings",
            )
        if p.returncode != 0:
            msg = p.stderr.strip() or f"exit status {p.returncode}"
            raise TransientWriteError(f"elevated write failed: {msg}", path=path)
