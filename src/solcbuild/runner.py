"""Process execution for rendered compiler commands."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Protocol

from solcbuild.command import RenderedCommand
from solcbuild.errors import CompilerExecutionError

STDERR_LIMIT = 2000


@dataclass(frozen=True, slots=True)
class CompileResult:
    argv: tuple[str, ...]
    cwd: str
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CompilerRunner(Protocol):
    def run(self, command: RenderedCommand) -> CompileResult:
        """Spawn the compiler for ``command`` and return its captured output."""


@dataclass(slots=True)
class SubprocessRunner:
    """Run the compiler as a child process in the command's working directory."""

    timeout: float | None = None

    def run(self, command: RenderedCommand) -> CompileResult:
        context = {"command": command.command_line(), "cwd": command.cwd}
        try:
            result = subprocess.run(
                list(command.argv),
                cwd=command.cwd,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except OSError as exc:
            raise CompilerExecutionError(
                f"Could not start `{command.executable}`.",
                hint="Check that solc is installed and the root directory exists.",
                context=context,
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise CompilerExecutionError(
                f"`{command.executable}` timed out.",
                context={**context, "timeout": str(self.timeout)},
            ) from exc

        if result.returncode != 0:
            raise CompilerExecutionError(
                "solc compilation failed.",
                hint="Check solc output for details.",
                context={
                    **context,
                    "returncode": str(result.returncode),
                    "stderr": result.stderr[:STDERR_LIMIT] if result.stderr else "",
                },
            )
        return CompileResult(
            argv=command.argv,
            cwd=command.cwd,
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )


__all__ = ["CompileResult", "CompilerRunner", "STDERR_LIMIT", "SubprocessRunner"]
