"""Typed error model with stable, machine-readable error codes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum


class ErrorCode(StrEnum):
    """Stable error identifiers used across API surfaces."""

    VALIDATION = "E_VALIDATION"
    OUTPUT_MODE_CONFLICT = "E_OUTPUT_MODE_CONFLICT"
    UNRESOLVED_OUTPUT_DIR = "E_UNRESOLVED_OUTPUT_DIR"
    ARTIFACT = "E_ARTIFACT"
    COMPILER_EXECUTION = "E_COMPILER_EXECUTION"


class SolcBuildError(Exception):
    """Failure while building, running or reading back a solc invocation.

    ``context`` holds string details such as the rendered command line, the
    artifact path or the library file; empty values are left out of ``str()``.
    """

    code: str
    hint: str | None
    context: Mapping[str, str]

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code.value
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        if self.context:
            for k, v in self.context.items():
                if v:
                    parts.append(f"  {k}: {v}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        """JSON-ready payload for CLI and log output."""
        payload: dict[str, object] = {
            "code": self.code,
            "error": type(self).__name__,
            "message": str(self),
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class ValidationError(SolcBuildError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.VALIDATION, hint=hint, context=context)


class ConflictingOutputModeError(SolcBuildError):
    """Separate and combined-json outputs were requested on the same command."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(
            message, code=ErrorCode.OUTPUT_MODE_CONFLICT, hint=hint, context=context
        )


class UnresolvedOutputDirError(SolcBuildError):
    """A path below the output directory was needed but none is configured."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(
            message, code=ErrorCode.UNRESOLVED_OUTPUT_DIR, hint=hint, context=context
        )


class ArtifactError(SolcBuildError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.ARTIFACT, hint=hint, context=context)


class CompilerExecutionError(SolcBuildError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(
            message, code=ErrorCode.COMPILER_EXECUTION, hint=hint, context=context
        )


__all__ = [
    "ArtifactError",
    "CompilerExecutionError",
    "ConflictingOutputModeError",
    "ErrorCode",
    "SolcBuildError",
    "UnresolvedOutputDirError",
    "ValidationError",
]
