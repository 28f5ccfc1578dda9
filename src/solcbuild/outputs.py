"""Compiler output vocabularies and the output-mode request model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, Literal

from solcbuild.errors import ConflictingOutputModeError, ValidationError

COMBINED_JSON_FLAG = "--combined-json"


class SeparateArtifact(StrEnum):
    """Outputs written to one file per artifact, each selected by its own flag."""

    AST = "ast"
    AST_JSON = "ast-json"
    AST_COMPACT_JSON = "ast-compact-json"
    ASM = "asm"
    ASM_JSON = "asm-json"
    OPCODES = "opcodes"
    BIN = "bin"
    BIN_RUNTIME = "bin-runtime"
    ABI = "abi"
    HASHES = "hashes"
    USERDOC = "userdoc"
    DEVDOC = "devdoc"
    METADATA = "metadata"

    @property
    def flag(self) -> str:
        return f"--{self.value}"


class CombinedArtifact(StrEnum):
    """Keys accepted in the comma-separated ``--combined-json`` list."""

    ABI = "abi"
    ASM = "asm"
    AST = "ast"
    BIN = "bin"
    BIN_RUNTIME = "bin-runtime"
    COMPACT_FORMAT = "compact-format"
    DEVDOC = "devdoc"
    HASHES = "hashes"
    INTERFACE = "interface"
    METADATA = "metadata"
    OPCODES = "opcodes"
    SRCMAP = "srcmap"
    SRCMAP_RUNTIME = "srcmap-runtime"
    USERDOC = "userdoc"


# Declaration order is the order separate flags are emitted in.
_SEPARATE_ORDER: dict[SeparateArtifact, int] = {
    artifact: index for index, artifact in enumerate(SeparateArtifact)
}

OutputMode = Literal["none", "separate", "combined"]


@dataclass(frozen=True, slots=True)
class NoOutput:
    mode: ClassVar[OutputMode] = "none"

    def to_args(self) -> tuple[str, ...]:
        return ()


@dataclass(frozen=True, slots=True)
class SeparateOutputs:
    artifacts: frozenset[SeparateArtifact] = frozenset()
    mode: ClassVar[OutputMode] = "separate"

    def with_artifact(self, artifact: SeparateArtifact) -> SeparateOutputs:
        return SeparateOutputs(artifacts=self.artifacts | {artifact})

    def ordered(self) -> tuple[SeparateArtifact, ...]:
        return tuple(sorted(self.artifacts, key=_SEPARATE_ORDER.__getitem__))

    def to_args(self) -> tuple[str, ...]:
        return tuple(artifact.flag for artifact in self.ordered())


@dataclass(frozen=True, slots=True)
class CombinedManifest:
    artifacts: tuple[CombinedArtifact, ...] = ()
    mode: ClassVar[OutputMode] = "combined"

    def with_artifact(self, artifact: CombinedArtifact) -> CombinedManifest:
        if artifact in self.artifacts:
            return self
        return CombinedManifest(artifacts=(*self.artifacts, artifact))

    def to_args(self) -> tuple[str, ...]:
        if not self.artifacts:
            return ()
        return (COMBINED_JSON_FLAG, ",".join(a.value for a in self.artifacts))


OutputRequest = NoOutput | SeparateOutputs | CombinedManifest


def add_separate(request: OutputRequest, artifact: SeparateArtifact) -> SeparateOutputs:
    """Return ``request`` extended with a separate-file artifact."""
    artifact = parse_separate(artifact)
    if isinstance(request, CombinedManifest):
        raise ConflictingOutputModeError(
            "Cannot request a separate output while combined-json output is selected.",
            hint="Use either separate outputs or a combined-json manifest, not both.",
            context={"requested": artifact.value, "active_mode": request.mode},
        )
    if isinstance(request, SeparateOutputs):
        return request.with_artifact(artifact)
    return SeparateOutputs(artifacts=frozenset({artifact}))


def add_combined(request: OutputRequest, artifact: CombinedArtifact) -> CombinedManifest:
    """Return ``request`` extended with a combined-json artifact."""
    artifact = _parse_combined(artifact)
    if isinstance(request, SeparateOutputs):
        raise ConflictingOutputModeError(
            "Cannot request a combined-json output while separate outputs are selected.",
            hint="Use either separate outputs or a combined-json manifest, not both.",
            context={"requested": artifact.value, "active_mode": request.mode},
        )
    if isinstance(request, CombinedManifest):
        return request.with_artifact(artifact)
    return CombinedManifest(artifacts=(artifact,))


def parse_separate(name: str) -> SeparateArtifact:
    """Parse a separate output name, with or without its leading ``--``."""
    token = name.strip().removeprefix("--")
    try:
        return SeparateArtifact(token)
    except ValueError as exc:
        raise ValidationError(
            f"Unknown separate output `{name}`.",
            hint="Valid outputs: " + ", ".join(a.value for a in SeparateArtifact),
        ) from exc


def parse_combined_list(raw: str) -> tuple[CombinedArtifact, ...]:
    """Parse a ``abi,bin,...`` list as accepted by ``--combined-json``."""
    artifacts: list[CombinedArtifact] = []
    for item in raw.split(","):
        token = item.strip()
        if not token:
            continue
        artifacts.append(_parse_combined(token))
    return tuple(artifacts)


def _parse_combined(token: str) -> CombinedArtifact:
    try:
        return CombinedArtifact(token)
    except ValueError as exc:
        raise ValidationError(
            f"Unknown combined-json output `{token}`.",
            hint="Valid outputs: " + ", ".join(a.value for a in CombinedArtifact),
        ) from exc


__all__ = [
    "COMBINED_JSON_FLAG",
    "CombinedArtifact",
    "CombinedManifest",
    "NoOutput",
    "OutputMode",
    "OutputRequest",
    "SeparateArtifact",
    "SeparateOutputs",
    "add_combined",
    "add_separate",
    "parse_combined_list",
    "parse_separate",
]
