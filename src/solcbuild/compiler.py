"""Wrapper around the Solidity compiler.

:meth:`Solc.command` hands out a :class:`CommandBuilder` seeded with the
compiler's root, output directory and library file. :meth:`Solc.compile`
renders that builder and runs ``solc`` from the root directory, after which
the outputs can be read back with :meth:`Solc.load_abi` and
:meth:`Solc.load_bytecode`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Self

from solcbuild.artifacts import ArtifactLocator, LibraryAddress, format_library_file
from solcbuild.command import (
    DEFAULT_EXECUTABLE,
    DEFAULT_LIBRARIES_FILE,
    CommandBuilder,
    CompileSettings,
)
from solcbuild.errors import UnresolvedOutputDirError, ValidationError
from solcbuild.observability import StructuredLogger
from solcbuild.paths import CwdProvider, HomeProvider, PathInput, join_path, resolve_path
from solcbuild.runner import CompileResult, CompilerRunner, SubprocessRunner


@dataclass(slots=True)
class Solc:
    """Compiler bound to an absolute root directory."""

    root: PathInput = "."
    output_dir: str | None = None
    allow_paths: tuple[str, ...] = ()
    lib_file: str = DEFAULT_LIBRARIES_FILE
    executable: str = DEFAULT_EXECUTABLE
    cwd: CwdProvider = Path.cwd
    home: HomeProvider = Path.home
    runner: CompilerRunner = field(default_factory=SubprocessRunner)
    logger: StructuredLogger = field(default_factory=StructuredLogger)
    _libraries: list[LibraryAddress] = field(init=False, default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if not self.lib_file:
            raise ValidationError("Solc requires a non-empty library file name.")
        self.root = resolve_path(self.root, cwd=self.cwd, home=self.home)
        self.allow_paths = tuple(self.allow_paths)

    @classmethod
    def from_settings(cls, settings: CompileSettings, **kwargs: object) -> Solc:
        return cls(
            root=settings.root,
            output_dir=settings.output_dir,
            allow_paths=settings.allow_paths,
            lib_file=settings.libraries_file or DEFAULT_LIBRARIES_FILE,
            executable=settings.executable,
            **kwargs,  # type: ignore[arg-type]
        )

    @property
    def libraries(self) -> tuple[LibraryAddress, ...]:
        return tuple(self._libraries)

    @property
    def locator(self) -> ArtifactLocator:
        return ArtifactLocator(root=str(self.root), output_dir=self.output_dir)

    def settings(self) -> CompileSettings:
        return CompileSettings(
            root=str(self.root),
            allow_paths=self.allow_paths,
            output_dir=self.output_dir,
            libraries_file=self.lib_file,
            executable=self.executable,
        )

    def command(self) -> CommandBuilder:
        """Start a new command seeded with this compiler's settings."""
        return CommandBuilder.from_settings(self.settings())

    def add_library_address(self, name: str, address: str | bytes) -> Self:
        self._libraries.append(LibraryAddress.parse(name, address))
        return self

    def library_file_path(self) -> str:
        if self.output_dir is None:
            raise UnresolvedOutputDirError(
                "Cannot place the library file: output dir is not set.",
                hint="Pass output_dir= when creating the compiler.",
                context={"root": str(self.root), "lib_file": self.lib_file},
            )
        return join_path(self.root, self.output_dir, self.lib_file)

    def prepare_link(self, path: PathInput | None = None) -> Path:
        """Write the recorded libraries, one ``name:address`` line each.

        Defaults to ``<root>/<output_dir>/<lib_file>``. The file is written even
        when no addresses are recorded.
        """
        path = Path(path if path is not None else self.library_file_path())
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(format_library_file(self._libraries), encoding="utf-8")
        self.logger.log(
            operation="prepare_link",
            component="solc",
            message="Wrote library address file.",
            extra={"path": str(path), "libraries": [lib.name for lib in self._libraries]},
        )
        return path

    def load_abi(self, name: str) -> bytes:
        payload = self.locator.load_abi(name)
        self._log_load("load_abi", name)
        return payload

    def load_bytecode(self, name: str) -> bytes:
        """Load linked bytecode from the output directory."""
        code = self.locator.load_bytecode(name)
        self._log_load("load_bytecode", name)
        return code

    def compile(self, builder: CommandBuilder | None = None) -> CompileResult:
        command_builder = builder if builder is not None else self.command()
        rendered = command_builder.render()
        config = command_builder.config
        if config.link and config.libraries_file is not None:
            # same file the --libraries flag points at, relative to the cwd
            self.prepare_link(join_path(rendered.cwd, command_builder.library_file_path()))
        self.logger.log(
            operation="compile",
            component="solc",
            message="Running compiler.",
            extra={"argv": list(rendered.argv), "cwd": rendered.cwd},
        )
        try:
            result = self.runner.run(rendered)
        except Exception as exc:
            self.logger.log(
                operation="compile",
                component="solc",
                level="error",
                message="Compiler run failed.",
                extra={"error": str(exc)},
            )
            raise
        self.logger.log(
            operation="compile",
            component="solc",
            message="Compiler finished.",
            extra={"returncode": result.returncode},
        )
        return result

    def _log_load(self, operation: str, name: str) -> None:
        self.logger.log(
            operation=operation,
            component="solc",
            message="Loaded compiler artifact.",
            extra={"path": self.locator.path_for(name)},
        )


__all__ = ["Solc"]
