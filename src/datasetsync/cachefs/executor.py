"""Command execution inside the cache master pod.

This module provides:
- PodExecutor: Runs commands in a pod container through ``kubectl exec``
"""

from __future__ import annotations

import logging
import subprocess

from datasetsync.cachefs.errors import CommandError

logger = logging.getLogger(__name__)

# Default timeout for commands that are expected to return quickly
DEFAULT_EXEC_TIMEOUT = 60.0  # seconds


class PodExecutor:
    """Runs commands in a container of a pod through kubectl."""

    def __init__(
        self,
        pod_name: str,
        container: str,
        namespace: str,
        kubectl: str = "kubectl",
    ) -> None:
        """Initialize the executor.

        Args:
            pod_name: Name of the pod.
            container: Container to execute in.
            namespace: Namespace of the pod.
            kubectl: kubectl binary to invoke.
        """
        self.pod_name = pod_name
        self.container = container
        self.namespace = namespace
        self._kubectl = kubectl

    def build_command(self, command: list[str]) -> list[str]:
        """Build the full kubectl command line for a pod command."""
        return [
            self._kubectl,
            "exec",
            "-n", self.namespace,
            self.pod_name,
            "-c", self.container,
            "--",
            *command,
        ]

    def exec(self, command: list[str], timeout: float | None = DEFAULT_EXEC_TIMEOUT) -> str:
        """Execute a command and return its standard output.

        Args:
            command: Command and arguments to run in the container.
            timeout: Seconds before the command is killed (None = no timeout).

        Returns:
            Captured standard output.

        Raises:
            CommandError: If the command fails or times out.
        """
        full_command = self.build_command(command)
        logger.debug(f"Executing in {self.namespace}/{self.pod_name}: {' '.join(command)}")
        try:
            completed = subprocess.run(
                full_command,
                capture_output=True,
                text=True,
                timeout=timeout,
                check=True,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandError(command, None, f"no result after {timeout}s") from e
        except subprocess.CalledProcessError as e:
            raise CommandError(command, e.returncode, e.stderr or "") from e
        except OSError as e:
            raise CommandError(command, None, str(e)) from e
        return completed.stdout
