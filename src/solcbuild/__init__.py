"""Build, run and read back Solidity compiler invocations."""

from .artifacts import ArtifactLocator, LibraryAddress, format_library_file
from .command import CommandBuilder, CompileConfig, CompileSettings, RenderedCommand
from .compiler import Solc
from .errors import (
    ArtifactError,
    CompilerExecutionError,
    ConflictingOutputModeError,
    ErrorCode,
    SolcBuildError,
    UnresolvedOutputDirError,
    ValidationError,
)
from .outputs import (
    CombinedArtifact,
    CombinedManifest,
    NoOutput,
    OutputRequest,
    SeparateArtifact,
    SeparateOutputs,
)
from .paths import join_path, normalize_path, resolve_path
from .runner import CompileResult, CompilerRunner, SubprocessRunner

__all__ = [
    "ArtifactError",
    "ArtifactLocator",
    "CombinedArtifact",
    "CombinedManifest",
    "CommandBuilder",
    "CompileConfig",
    "CompileResult",
    "CompileSettings",
    "CompilerExecutionError",
    "CompilerRunner",
    "ConflictingOutputModeError",
    "ErrorCode",
    "LibraryAddress",
    "NoOutput",
    "OutputRequest",
    "RenderedCommand",
    "SeparateArtifact",
    "SeparateOutputs",
    "Solc",
    "SolcBuildError",
    "SubprocessRunner",
    "UnresolvedOutputDirError",
    "ValidationError",
    "format_library_file",
    "join_path",
    "normalize_path",
    "resolve_path",
]
