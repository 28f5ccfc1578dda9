from pathlib import Path

import pytest

from solcbuild.artifacts import ArtifactLocator, LibraryAddress, decode_bytecode, format_library_file
from solcbuild.errors import ArtifactError, UnresolvedOutputDirError, ValidationError

MATH_ADDRESS = "0x" + "ab" * 20
SAFE_ADDRESS = "0X" + "0" * 39 + "1"


def test_library_file_lines_follow_insertion_order() -> None:
    libraries = [
        LibraryAddress.parse("SafeMath", SAFE_ADDRESS),
        LibraryAddress.parse("Math", MATH_ADDRESS),
    ]
    assert format_library_file(libraries) == (
        "SafeMath:0x0000000000000000000000000000000000000001\n"
        f"Math:{MATH_ADDRESS}\n"
    )


def test_empty_library_file() -> None:
    assert format_library_file([]) == ""


def test_library_address_accepts_raw_bytes() -> None:
    library = LibraryAddress.parse("Math", bytes(range(20)))
    assert library.hex == "0x000102030405060708090a0b0c0d0e0f10111213"


@pytest.mark.parametrize(
    ("name", "address"),
    [
        ("Math", "0x1234"),
        ("Math", "0x" + "zz" * 20),
        ("", MATH_ADDRESS),
        ("Bad:Name", MATH_ADDRESS),
    ],
)
def test_invalid_library_addresses_are_rejected(name: str, address: str) -> None:
    with pytest.raises(ValidationError):
        LibraryAddress.parse(name, address)


def test_decode_bytecode_handles_prefix_and_whitespace() -> None:
    assert decode_bytecode(b"0x6060\n") == b"\x60\x60"
    assert decode_bytecode(b"6080") == b"\x60\x80"


def test_decode_bytecode_rejects_unlinked_placeholders() -> None:
    with pytest.raises(ArtifactError):
        decode_bytecode(b"6060__Math__________________________________6060")


def test_locator_joins_root_output_dir_and_name(tmp_path: Path) -> None:
    locator = ArtifactLocator(root=str(tmp_path), output_dir="./build/")
    assert locator.path_for("Token.abi") == f"{tmp_path}/build/Token.abi"


def test_locator_reads_abi_and_bytecode(tmp_path: Path) -> None:
    out = tmp_path / "build"
    out.mkdir()
    (out / "Token.abi").write_text('[{"type":"constructor"}]', encoding="utf-8")
    (out / "Token.bin").write_text("6060604052\n", encoding="utf-8")
    locator = ArtifactLocator(root=str(tmp_path), output_dir="build")

    assert locator.load_abi("Token.abi") == b'[{"type":"constructor"}]'
    assert locator.read_text("Token.abi").startswith("[")
    assert locator.load_bytecode("Token.bin") == bytes.fromhex("6060604052")


def test_locator_missing_file_is_artifact_error(tmp_path: Path) -> None:
    locator = ArtifactLocator(root=str(tmp_path), output_dir="build")
    with pytest.raises(ArtifactError) as excinfo:
        locator.read_bytes("Missing.abi")
    assert excinfo.value.context["path"].endswith("build/Missing.abi")


def test_locator_bad_bytecode_reports_path(tmp_path: Path) -> None:
    (tmp_path / "Token.bin").write_bytes(b"\xff\xfe")
    locator = ArtifactLocator(root=str(tmp_path), output_dir=".")
    with pytest.raises(ArtifactError) as excinfo:
        locator.load_bytecode("Token.bin")
    assert excinfo.value.context["path"] == f"{tmp_path}/Token.bin"


def test_locator_without_output_dir_fails() -> None:
    with pytest.raises(UnresolvedOutputDirError):
        ArtifactLocator(root="/work", output_dir=None).path_for("Token.abi")


def test_decode_bytecode_accepts_upper_case_prefix() -> None:
    assert decode_bytecode(b"0X6060") == b"\x60\x60"


def test_read_text_rejects_non_utf8_with_path(tmp_path: Path) -> None:
    (tmp_path / "Token.abi").write_bytes(b"\xff\xfe")
    locator = ArtifactLocator(root=str(tmp_path), output_dir=".")
    with pytest.raises(ArtifactError) as excinfo:
        locator.read_text("Token.abi")
    assert excinfo.value.context["path"] == f"{tmp_path}/Token.abi"
