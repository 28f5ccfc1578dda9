import subprocess
from pathlib import Path

import pytest

from solcbuild.command import RenderedCommand
from solcbuild.errors import CompilerExecutionError, ErrorCode
from solcbuild.runner import STDERR_LIMIT, SubprocessRunner


def _completed(returncode: int, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def test_runner_spawns_in_command_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls: list[dict[str, object]] = []

    def fake_run(argv: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        calls.append({"argv": argv, **kwargs})
        return _completed(0, stdout="Compiler run successful.\n")

    monkeypatch.setattr(subprocess, "run", fake_run)
    command = RenderedCommand(cwd=str(tmp_path), args=("--bin", "A.sol"))

    result = SubprocessRunner().run(command)

    assert result.ok
    assert result.argv == ("solc", "--bin", "A.sol")
    assert result.stdout == "Compiler run successful.\n"
    assert calls[0]["argv"] == ["solc", "--bin", "A.sol"]
    assert calls[0]["cwd"] == str(tmp_path)
    assert calls[0]["check"] is False


def test_runner_raises_on_nonzero_exit(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        subprocess, "run", lambda argv, **kwargs: _completed(1, stderr="E" * (STDERR_LIMIT + 50))
    )
    with pytest.raises(CompilerExecutionError) as excinfo:
        SubprocessRunner().run(RenderedCommand(cwd="/work", args=("A.sol",)))

    error = excinfo.value
    assert error.code == ErrorCode.COMPILER_EXECUTION.value
    assert error.context["returncode"] == "1"
    assert error.context["command"] == "solc A.sol"
    assert len(error.context["stderr"]) == STDERR_LIMIT


def test_runner_reports_missing_executable(tmp_path: Path) -> None:
    command = RenderedCommand(
        cwd=str(tmp_path), args=("--version",), executable="solc-does-not-exist-xyz"
    )
    with pytest.raises(CompilerExecutionError) as excinfo:
        SubprocessRunner().run(command)
    assert "solc-does-not-exist-xyz" in str(excinfo.value)


def test_runner_reports_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(argv: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        raise subprocess.TimeoutExpired(cmd=argv, timeout=1.0)

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(CompilerExecutionError) as excinfo:
        SubprocessRunner(timeout=1.0).run(RenderedCommand(cwd="/work", args=()))
    assert excinfo.value.context["timeout"] == "1.0"
