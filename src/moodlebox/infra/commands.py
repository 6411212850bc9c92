"""Infrastructure: subprocess-backed :class:`~moodlebox.core.protocols.CommandRunner`.

Rules
-----
* Commands run without a shell; output parsing happens in ``core``.
* Output is decoded as UTF-8 with undecodable bytes replaced by U+FFFD,
  so odd firmware output never escapes as ``UnicodeDecodeError``.
* Every failure (missing binary, timeout, non-zero exit) is raised as
  :class:`~moodlebox.exceptions.CommandFailedError`.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence

from moodlebox.exceptions import CommandFailedError

logger = logging.getLogger(__name__)


class SubprocessRunner:
    """Run external commands with :func:`subprocess.run`.

    Parameters
    ----------
    use_sudo:
        Prefix privileged commands with ``sudo -n`` (non-interactive).
    timeout:
        Seconds before a command is killed.
    """

    def __init__(self, *, use_sudo: bool = True, timeout: float = 10.0) -> None:
        self.use_sudo: bool = use_sudo
        self.timeout: float = timeout

    def build_argv(self, argv: Sequence[str], *, privileged: bool = False) -> list[str]:
        if privileged and self.use_sudo:
            return ["sudo", "-n", *argv]
        return list(argv)

    def run(self, argv: Sequence[str], *, privileged: bool = False) -> str:
        """Run *argv* and return stripped stdout.

        Raises
        ------
        CommandFailedError
            When the program is not on PATH, times out or exits non-zero.
        """
        if not argv:
            raise CommandFailedError("No command given.")

        full = self.build_argv(argv, privileged=privileged)
        if shutil.which(full[0]) is None:
            raise CommandFailedError(
                f"{full[0]} is not installed or not on PATH.",
                argv=tuple(full),
            )

        logger.debug("Running %s", " ".join(full))
        try:
            proc = subprocess.run(
                full,
                check=False,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise CommandFailedError(
                f"{argv[0]} timed out after {self.timeout:g}s.",
                argv=tuple(full),
            ) from exc
        except OSError as exc:
            raise CommandFailedError(
                f"Cannot run {argv[0]}: {exc}",
                argv=tuple(full),
            ) from exc

        if proc.returncode != 0:
            stderr = (proc.stderr or "").strip()
            raise CommandFailedError(
                f"{argv[0]} exited with status {proc.returncode}"
                + (f": {stderr}" if stderr else "."),
                argv=tuple(full),
                returncode=proc.returncode,
                hint="Privileged commands need passwordless sudo." if privileged else None,
            )

        return (proc.stdout or "").strip()
