"""Build up the argument list for a ``solc`` invocation.

A :class:`CommandBuilder` accumulates a :class:`CompileConfig` through fluent
mutators and renders it into an immutable :class:`RenderedCommand`. Rendering
is a pure function of the configuration: it never reads the environment and
never touches the filesystem, so identical configurations always produce
identical token sequences.

Token order::

    --allow-paths <path>...      allow-listed include directories
    <name>=<path>...             include mappings, sorted by name
    --<artifact>... | --combined-json a,b,...
    --libraries <output_dir>/<libraries_file>
    --overwrite
    -o <output_dir>
    <source>...
"""

from __future__ import annotations

import dataclasses
import os
import shlex
from dataclasses import dataclass, field
from typing import Self

from solcbuild.errors import UnresolvedOutputDirError, ValidationError
from solcbuild.outputs import (
    CombinedArtifact,
    NoOutput,
    OutputRequest,
    SeparateArtifact,
    add_combined,
    add_separate,
)
from solcbuild.paths import PathInput, join_path, normalize_path

DEFAULT_EXECUTABLE = "solc"
DEFAULT_LIBRARIES_FILE = "libs.txt"

ALLOW_PATHS_FLAG = "--allow-paths"
LIBRARIES_FLAG = "--libraries"
OVERWRITE_FLAG = "--overwrite"
OUTPUT_DIR_FLAG = "-o"


@dataclass(frozen=True, slots=True)
class CompileSettings:
    """Seed values for a command, as produced by a settings file or a facade."""

    root: str = "."
    allow_paths: tuple[str, ...] = ()
    output_dir: str | None = None
    libraries_file: str | None = None
    executable: str = DEFAULT_EXECUTABLE


@dataclass(slots=True)
class CompileConfig:
    root: str = "."
    allow_paths: list[str] = field(default_factory=list)
    mappings: dict[str, str] = field(default_factory=dict)
    sources: list[str] = field(default_factory=list)
    libraries_file: str | None = None
    link: bool = False
    overwrite: bool = False
    output_dir: str | None = None
    outputs: OutputRequest = field(default_factory=NoOutput)

    def copy(self) -> CompileConfig:
        return dataclasses.replace(
            self,
            allow_paths=list(self.allow_paths),
            mappings=dict(self.mappings),
            sources=list(self.sources),
        )


@dataclass(frozen=True, slots=True)
class RenderedCommand:
    """Working directory plus the ordered argument tokens for one invocation."""

    cwd: str
    args: tuple[str, ...]
    executable: str = DEFAULT_EXECUTABLE

    @property
    def argv(self) -> tuple[str, ...]:
        return (self.executable, *self.args)

    def command_line(self) -> str:
        return shlex.join(self.argv)


class CommandBuilder:
    """Fluent builder for a single compilation request.

    All paths are relative to the root unless given as absolute paths.
    """

    def __init__(self, root: PathInput = ".", *, executable: str = DEFAULT_EXECUTABLE) -> None:
        if not executable:
            raise ValidationError("CommandBuilder requires a non-empty executable name.")
        self._config = CompileConfig(root=os.fspath(root))
        self.executable = executable

    @classmethod
    def from_settings(cls, settings: CompileSettings) -> CommandBuilder:
        builder = cls(settings.root, executable=settings.executable)
        for path in settings.allow_paths:
            builder.allow_path(path)
        if settings.output_dir is not None:
            builder.set_output_dir(settings.output_dir)
        if settings.libraries_file is not None:
            builder.libraries_file(settings.libraries_file)
        return builder

    @property
    def config(self) -> CompileConfig:
        return self._config.copy()

    def set_root(self, path: PathInput) -> Self:
        self._config.root = os.fspath(path)
        return self

    def allow_path(self, path: PathInput) -> Self:
        """Authorize the compiler to read includes from ``path``."""
        self._config.allow_paths.append(os.fspath(path))
        return self

    def add_source(self, path: PathInput) -> Self:
        self._config.sources.append(os.fspath(path))
        return self

    def add_mapping(self, name: str, path: PathInput) -> Self:
        """Remap imports of ``name`` to ``path``. The last mapping for a name wins."""
        if not name:
            raise ValidationError("add_mapping() requires a non-empty name.")
        # quotes would end up verbatim in the argument
        self._config.mappings[name] = os.fspath(path).strip('"')
        return self

    def request_separate(self, artifact: SeparateArtifact) -> Self:
        self._config.outputs = add_separate(self._config.outputs, artifact)
        return self

    def request_combined(self, artifact: CombinedArtifact) -> Self:
        self._config.outputs = add_combined(self._config.outputs, artifact)
        return self

    def outputs(self, *artifacts: SeparateArtifact) -> Self:
        """Request several separate outputs at once.

        Either all of them are applied or, on a conflict, none are.
        """
        request = self._config.outputs
        for artifact in artifacts:
            request = add_separate(request, artifact)
        self._config.outputs = request
        return self

    def combined_json(self, *artifacts: CombinedArtifact) -> Self:
        request = self._config.outputs
        for artifact in artifacts:
            request = add_combined(request, artifact)
        self._config.outputs = request
        return self

    def abi(self) -> Self:
        return self.request_separate(SeparateArtifact.ABI)

    def bin(self) -> Self:
        return self.request_separate(SeparateArtifact.BIN)

    def link(self, libraries_file: PathInput | None = None) -> Self:
        """Link against the library addresses stored in ``libraries_file``."""
        self._config.link = True
        if libraries_file is not None:
            self.libraries_file(libraries_file)
        return self

    def libraries_file(self, path: PathInput) -> Self:
        """Set the library address file, relative to the output directory."""
        self._config.libraries_file = os.fspath(path)
        return self

    def overwrite(self) -> Self:
        self._config.overwrite = True
        return self

    def set_output_dir(self, path: PathInput) -> Self:
        self._config.output_dir = os.fspath(path)
        return self

    def library_file_path(self) -> str:
        config = self._config
        if config.output_dir is None:
            raise UnresolvedOutputDirError(
                "Could not join library file path: output dir is not set.",
                hint="Call set_output_dir() before linking.",
                context={"libraries_file": config.libraries_file or ""},
            )
        return join_path(config.output_dir, config.libraries_file or DEFAULT_LIBRARIES_FILE)

    def render(self) -> RenderedCommand:
        config = self._config
        args: list[str] = []

        if config.allow_paths:
            args.append(ALLOW_PATHS_FLAG)
            args.extend(config.allow_paths)

        for name in sorted(config.mappings):
            args.append(f"{name}={config.mappings[name]}")

        args.extend(config.outputs.to_args())

        # link without a library file yet is allowed and emits nothing
        if config.link and config.libraries_file is not None:
            args.extend((LIBRARIES_FLAG, self.library_file_path()))

        if config.overwrite:
            args.append(OVERWRITE_FLAG)

        if config.output_dir is not None:
            args.extend((OUTPUT_DIR_FLAG, normalize_path(config.output_dir)))

        args.extend(config.sources)

        return RenderedCommand(cwd=config.root, args=tuple(args), executable=self.executable)

    def command_line(self) -> str:
        return self.render().command_line()

    def __repr__(self) -> str:
        return f"CommandBuilder(executable={self.executable!r}, config={self._config!r})"


__all__ = [
    "ALLOW_PATHS_FLAG",
    "DEFAULT_EXECUTABLE",
    "DEFAULT_LIBRARIES_FILE",
    "LIBRARIES_FLAG",
    "OUTPUT_DIR_FLAG",
    "OVERWRITE_FLAG",
    "CommandBuilder",
    "CompileConfig",
    "CompileSettings",
    "RenderedCommand",
]
