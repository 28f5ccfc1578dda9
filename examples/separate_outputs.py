"""Compile a contract to separate .abi and .bin files and load them back."""

from solcbuild import Solc


def compile_token() -> None:
    solc = Solc("contracts", output_dir="build")
    command = solc.command().abi().bin().overwrite().add_source("Token.sol")
    print(command.command_line())
    solc.compile(command)
    abi = solc.load_abi("Token.abi")
    code = solc.load_bytecode("Token.bin")
    print(f"abi: {len(abi)} bytes, bytecode: {len(code)} bytes")


if __name__ == "__main__":
    compile_token()
