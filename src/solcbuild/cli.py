"""Command-line front end.

Usage:
    solcbuild render --root contracts -o build --output abi --output bin Token.sol
    solcbuild compile --settings solc.json --library Math:0x... Token.sol
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from solcbuild.command import CommandBuilder, CompileSettings
from solcbuild.compiler import Solc
from solcbuild.errors import SolcBuildError, ValidationError
from solcbuild.outputs import parse_combined_list, parse_separate
from solcbuild.settings import read_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="solcbuild", description="Build and run solc commands")
    sub = parser.add_subparsers(dest="command", required=True)

    render_p = sub.add_parser("render", help="Print the solc command line without running it")
    _add_common_arguments(render_p)

    compile_p = sub.add_parser("compile", help="Write the library file and run solc")
    _add_common_arguments(compile_p)
    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--settings", help="JSON settings file")
    parser.add_argument("--root", help="Working directory for solc")
    parser.add_argument("--solc", dest="executable", help="solc executable name or path")
    parser.add_argument(
        "--allow-path", dest="allow_paths", action="append", default=[], help="Allowed include path"
    )
    parser.add_argument("-o", "--output-dir", help="Output directory, relative to the root")
    parser.add_argument("--overwrite", action="store_true", help="Overwrite existing outputs")
    parser.add_argument(
        "--output", dest="outputs", action="append", default=[], help="Separate output (abi, bin, ...)"
    )
    parser.add_argument("--combined-json", help="Comma-separated combined-json outputs")
    parser.add_argument(
        "--map", dest="mappings", action="append", default=[], help="Import remapping NAME=PATH"
    )
    parser.add_argument(
        "--library",
        dest="libraries",
        action="append",
        default=[],
        help="Library address NAME:ADDRESS, enables linking",
    )
    parser.add_argument("--lib-file", help="Library address file name")
    parser.add_argument("sources", nargs="*", help="Solidity source files")


def _settings_from_args(args: argparse.Namespace) -> CompileSettings:
    base = read_settings(args.settings) if args.settings else CompileSettings()
    return CompileSettings(
        root=args.root or base.root,
        allow_paths=(*base.allow_paths, *args.allow_paths),
        output_dir=args.output_dir or base.output_dir,
        libraries_file=args.lib_file or base.libraries_file,
        executable=args.executable or base.executable,
    )


def _split_pair(raw: str, sep: str, option: str) -> tuple[str, str]:
    name, found, value = raw.partition(sep)
    if not found or not name or not value:
        raise ValidationError(
            f"Invalid {option} value `{raw}`.",
            hint=f"Expected NAME{sep}VALUE.",
        )
    return name, value


def configure(solc: Solc, args: argparse.Namespace) -> CommandBuilder:
    builder = solc.command()
    for raw in args.mappings:
        builder.add_mapping(*_split_pair(raw, "=", "--map"))
    for name in args.outputs:
        builder.request_separate(parse_separate(name))
    if args.combined_json:
        builder.combined_json(*parse_combined_list(args.combined_json))
    for raw in args.libraries:
        solc.add_library_address(*_split_pair(raw, ":", "--library"))
    if solc.libraries:
        builder.link()
    if args.overwrite:
        builder.overwrite()
    for source in args.sources:
        builder.add_source(source)
    return builder


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        solc = Solc.from_settings(_settings_from_args(args))
        builder = configure(solc, args)
        if args.command == "render":
            print(builder.command_line())
            return 0
        result = solc.compile(builder)
    except SolcBuildError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    if result.stdout:
        print(result.stdout, end="")
    return 0


__all__ = ["build_parser", "configure", "main"]
