"""
Run the installed CLI as a child process.

stdout and stderr are merged into a single stream. arduino-cli mixes
informational and error output across both, and a build log should read
linearly. Each line is forwarded to the log as it arrives so long-running
commands show progress, and the full output is returned to the caller.

The working directory is always set explicitly; the current directory of
the calling process is never inherited.
"""

import logging
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from arduinokit.core.exceptions import CliExecutionError

logger = logging.getLogger(__name__)

# Suppresses ANSI escape codes that would clutter the log
DEFAULT_BASE_ARGS = ("--no-color",)


@dataclass
class ExecutionResult:
    """Exit code and combined output of a CLI invocation."""

    command: List[str]
    exit_code: int
    output: str = ""
    lines: List[str] = field(default_factory=list, repr=False)

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def check_returncode(self) -> "ExecutionResult":
        """
        Raise CliExecutionError if the command exited non-zero.

        Returns:
            self, so calls can be chained
        """
        if not self.succeeded:
            raise CliExecutionError(
                f"{Path(self.command[0]).name} exited with code {self.exit_code}. "
                f"Command: {' '.join(self.command)}\nOutput:\n{self.output}",
                command=self.command,
                exit_code=self.exit_code,
                output=self.output,
            )
        return self


class CliExecutor:
    """
    Execute commands of an installed CLI binary.

    Example:
        >>> cli = CliExecutor(Path("/home/user/.arduinokit/cache/.../arduino-cli"))
        >>> result = cli.run(Path.cwd(), ["core", "update-index"])
        >>> result.check_returncode()
    """

    def __init__(self, cli_binary: Path, base_args: Sequence[str] = DEFAULT_BASE_ARGS):
        """
        Initialize executor.

        Args:
            cli_binary: Path to the CLI executable
            base_args: Arguments inserted before every command
        """
        self.cli_binary = Path(cli_binary)
        self.base_args = list(base_args)

    @property
    def log_prefix(self) -> str:
        return f"[{self.cli_binary.stem}]"

    def build_command(self, args: Sequence[str]) -> List[str]:
        return [str(self.cli_binary.absolute()), *self.base_args, *args]

    def run(
        self,
        working_dir: Path,
        args: Sequence[str],
        extra_env: Optional[Dict[str, str]] = None,
    ) -> ExecutionResult:
        """
        Run a CLI command and wait for it to exit.

        Args:
            working_dir: Directory to run the command in
            args: Arguments after the binary, e.g. ['core', 'install', 'arduino:avr']
            extra_env: Additional environment variables (may be None)

        Returns:
            ExecutionResult with exit code and combined stdout/stderr

        Raises:
            CliExecutionError: If the binary cannot be started
        """
        command = self.build_command(args)
        logger.info(f"Running: {' '.join(command)}")

        env = None
        if extra_env:
            env = os.environ.copy()
            env.update(extra_env)

        lines: List[str] = []
        try:
            with subprocess.Popen(
                command,
                cwd=str(working_dir),
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            ) as proc:
                assert proc.stdout is not None
                for line in proc.stdout:
                    line = line.rstrip("\r\n")
                    logger.info(f"{self.log_prefix} {line}")
                    lines.append(line)
                exit_code = proc.wait()

        except OSError as e:
            raise CliExecutionError(
                f"Failed to execute {self.cli_binary}. Is the binary valid?\n"
                f"Command: {' '.join(command)}",
                command=command,
            ) from e

        output = "".join(f"{line}{os.linesep}" for line in lines)
        if exit_code != 0:
            logger.debug(f"{self.cli_binary.name} exited with code {exit_code}")

        return ExecutionResult(
            command=command, exit_code=exit_code, output=output, lines=lines
        )


__all__ = [
    "CliExecutor",
    "ExecutionResult",
    "DEFAULT_BASE_ARGS",
]
