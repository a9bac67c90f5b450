"""Tests for the generation scripts."""

from __future__ import annotations

import json

import pytest

from abiclient.errors import ConfigurationError
from abiclient.logs import close_logging
from abiclient.test_fixtures.abis import ECHO_ABI, TOKEN_ABI

from . import generate_all_clients, generate_client


def _write_artifact(path, abi) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"contractName": path.stem, "abi": abi, "bytecode": "0x"}))


class TestParseSelection:
    """Tests for generate_client.parse_selection."""

    def test_one_based(self):
        """Positions on the command line start at 1."""
        assert generate_client.parse_selection("1,3") == [0, 2]
        assert generate_client.parse_selection(" 2 ") == [1]

    def test_everything(self):
        """No selection selects every function."""
        assert generate_client.parse_selection(None) is None
        assert generate_client.parse_selection("") is None

    @pytest.mark.parametrize("selection", ["0", "1,a", "-2"])
    def test_invalid(self, selection):
        """Positions must be numbers from 1."""
        with pytest.raises(ConfigurationError):
            generate_client.parse_selection(selection)


def test_generate_client(tmp_path):
    """The client of an artifact is written to the output directory."""
    artifact = tmp_path / "artifacts" / "Token.json"
    _write_artifact(artifact, TOKEN_ABI)
    output_dir = tmp_path / "clients"
    generate_client.main([str(artifact), "--output-dir", str(output_dir), "--select", "1,5"])
    close_logging()
    source = (output_dir / "TokenClient.py").read_text()
    assert "class TokenClient(ContractClient):" in source
    assert "async def totalSupply(" in source
    assert "async def mint(" in source
    assert "async def balanceOf(" not in source


def test_generate_client_dry_run(tmp_path, capsys):
    """A dry run prints the client and writes nothing."""
    artifact = tmp_path / "Echo.json"
    _write_artifact(artifact, ECHO_ABI)
    output_dir = tmp_path / "clients"
    generate_client.main([str(artifact), "--output-dir", str(output_dir), "--dry-run"])
    close_logging()
    assert "class EchoClient(ContractClient):" in capsys.readouterr().out
    assert not output_dir.exists()


def test_find_artifact_files(tmp_path):
    """Debug files and excluded directories are skipped."""
    _write_artifact(tmp_path / "protocol" / "Token.sol" / "Token.json", TOKEN_ABI)
    _write_artifact(tmp_path / "protocol" / "Token.sol" / "Token.dbg.json", [])
    _write_artifact(tmp_path / "libs" / "Math.sol" / "Math.json", [])
    _write_artifact(tmp_path / "Echo.sol" / "Echo.json", ECHO_ABI)
    found = generate_all_clients.find_artifact_files(tmp_path)
    assert [path.relative_to(tmp_path).as_posix() for path in found] == [
        "Echo.sol/Echo.json",
        "protocol/Token.sol/Token.json",
    ]


def test_generate_all_clients(tmp_path):
    """Every artifact gets a client, at a path mirroring the artifact directory."""
    artifacts_dir = tmp_path / "artifacts"
    _write_artifact(artifacts_dir / "protocol" / "Token.sol" / "Token.json", TOKEN_ABI)
    _write_artifact(artifacts_dir / "Echo.sol" / "Echo.json", ECHO_ABI)
    output_dir = tmp_path / "clients"
    generate_all_clients.main(["--artifacts-dir", str(artifacts_dir), "--output-dir", str(output_dir)])
    close_logging()
    assert (output_dir / "protocol" / "Token.sol" / "TokenClient.py").is_file()
    assert (output_dir / "Echo.sol" / "EchoClient.py").is_file()


def test_generate_all_clients_skips_failing_artifacts(tmp_path):
    """An artifact without a valid client is skipped and the rest are still generated."""
    artifacts_dir = tmp_path / "artifacts"
    overloaded_abi = TOKEN_ABI + [
        {
            "inputs": [],
            "name": "totalSupply",
            "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
            "stateMutability": "view",
            "type": "function",
        }
    ]
    _write_artifact(artifacts_dir / "A.sol" / "A.json", overloaded_abi)
    _write_artifact(artifacts_dir / "B.sol" / "B.json", ECHO_ABI)
    output_dir = tmp_path / "clients"
    generate_all_clients.main(["--artifacts-dir", str(artifacts_dir), "--output-dir", str(output_dir)])
    close_logging()
    assert not (output_dir / "A.sol" / "AClient.py").exists()
    assert (output_dir / "B.sol" / "BClient.py").is_file()
