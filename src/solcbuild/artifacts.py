"""Locate and read compiler outputs, and serialize library address files."""

from __future__ import annotations

import binascii
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from solcbuild.errors import ArtifactError, UnresolvedOutputDirError, ValidationError
from solcbuild.paths import PathInput, join_path

ADDRESS_LENGTH = 20


@dataclass(frozen=True, slots=True)
class LibraryAddress:
    """Deployed address of a library, used for link-time substitution."""

    name: str
    address: bytes

    def __post_init__(self) -> None:
        if not self.name:
            raise ValidationError("Library name must be non-empty.")
        if ":" in self.name or "\n" in self.name:
            raise ValidationError(
                "Library name cannot contain ':' or newlines.",
                context={"name": self.name},
            )
        if len(self.address) != ADDRESS_LENGTH:
            raise ValidationError(
                f"Library address must be {ADDRESS_LENGTH} bytes.",
                context={"name": self.name, "length": str(len(self.address))},
            )

    @classmethod
    def parse(cls, name: str, address: str | bytes) -> LibraryAddress:
        if isinstance(address, bytes):
            return cls(name=name, address=address)
        text = address.strip().removeprefix("0x").removeprefix("0X")
        try:
            raw = bytes.fromhex(text)
        except ValueError as exc:
            raise ValidationError(
                "Library address is not valid hex.",
                hint="Use a 0x-prefixed, 40 digit hex address.",
                context={"name": name, "address": address},
            ) from exc
        return cls(name=name, address=raw)

    @property
    def hex(self) -> str:
        return "0x" + self.address.hex()

    def to_line(self) -> str:
        return f"{self.name}:{self.hex}"


def format_library_file(libraries: Iterable[LibraryAddress]) -> str:
    """One ``name:address`` line per library, in the order given."""
    return "".join(f"{library.to_line()}\n" for library in libraries)


def decode_bytecode(raw: bytes, *, path: str | None = None) -> bytes:
    """Decode hex-encoded bytecode, with or without a ``0x`` prefix."""
    context = {"path": path} if path is not None else None
    try:
        text = raw.decode("ascii").strip().removeprefix("0x").removeprefix("0X")
        return binascii.unhexlify(text)
    except (UnicodeDecodeError, binascii.Error) as exc:
        raise ArtifactError(
            "Bytecode artifact is not valid hex.",
            hint="Only linked bytecode can be decoded; library placeholders are not hex.",
            context=context,
        ) from exc


@dataclass(frozen=True, slots=True)
class ArtifactLocator:
    """Compute ``<root>/<output_dir>/<name>`` locations and read them back."""

    root: str
    output_dir: str | None

    def path_for(self, name: PathInput) -> str:
        if self.output_dir is None:
            raise UnresolvedOutputDirError(
                "No output directory is set.",
                hint="Configure an output directory before loading artifacts.",
                context={"artifact": str(name)},
            )
        return join_path(self.root, self.output_dir, name)

    def read_bytes(self, name: PathInput) -> bytes:
        path = Path(self.path_for(name))
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise ArtifactError(
                "Compiler artifact does not exist.",
                hint="Check that the compiler ran with the matching output selected.",
                context={"path": str(path)},
            ) from exc
        except OSError as exc:
            raise ArtifactError(
                "Could not read compiler artifact.",
                hint=str(exc),
                context={"path": str(path)},
            ) from exc

    def read_text(self, name: PathInput) -> str:
        try:
            return self.read_bytes(name).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ArtifactError(
                "Compiler artifact is not valid UTF-8 text.",
                hint="Use read_bytes() for binary artifacts.",
                context={"path": self.path_for(name)},
            ) from exc

    def load_abi(self, name: PathInput) -> bytes:
        return self.read_bytes(name)

    def load_bytecode(self, name: PathInput) -> bytes:
        """Load a linked ``.bin`` artifact and decode it from hex."""
        return decode_bytecode(self.read_bytes(name), path=self.path_for(name))


__all__ = [
    "ADDRESS_LENGTH",
    "ArtifactLocator",
    "LibraryAddress",
    "decode_bytecode",
    "format_library_file",
]
