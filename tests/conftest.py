"""Shared test fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from solcbuild.command import RenderedCommand
from solcbuild.runner import CompileResult


@dataclass(slots=True)
class RecordingRunner:
    """Runner that records rendered commands instead of spawning solc."""

    stdout: str = ""
    commands: list[RenderedCommand] = field(default_factory=list)

    def run(self, command: RenderedCommand) -> CompileResult:
        self.commands.append(command)
        return CompileResult(argv=command.argv, cwd=command.cwd, returncode=0, stdout=self.stdout)


@pytest.fixture
def recording_runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def fixed_cwd() -> str:
    return "/work/project"


@pytest.fixture
def fixed_home() -> str:
    return "/home/u"
