"""Link against a deployed library and emit one combined-json manifest."""

from solcbuild import CombinedArtifact, Solc


def compile_with_library() -> None:
    solc = Solc("contracts", output_dir="build", allow_paths=("/usr/lib/solidity",))
    solc.add_library_address("SafeMath", "0x" + "00" * 19 + "2a")
    command = (
        solc.command()
        .add_mapping("openzeppelin", "node_modules/openzeppelin-solidity")
        .combined_json(CombinedArtifact.ABI, CombinedArtifact.BIN, CombinedArtifact.SRCMAP)
        .link()
        .add_source("Crowdsale.sol")
    )
    result = solc.compile(command)
    print(result.stdout)


if __name__ == "__main__":
    compile_with_library()
