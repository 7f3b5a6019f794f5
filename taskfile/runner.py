"""Running task scripts in a shell."""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod


class TaskRunner(ABC):
    """Something that can run a shell script and report its exit status.

    The status follows the :mod:`subprocess` convention: zero on success, a
    positive exit code on failure and a negative number when the script was
    killed by a signal.
    """

    @abstractmethod
    def run_script(self, script: str) -> int:
        """Run ``script`` and return its exit status."""


class BashRunner(TaskRunner):
    """Runs scripts with ``bash -c``, inheriting the terminal."""

    def run_script(self, script: str) -> int:
        """Run ``script`` in bash; raises OSError if bash cannot be started."""
        return subprocess.run(["bash", "-c", script], check=False).returncode