"""
CLI Unit Tests
Tests for hashtree_cli/main.py and its commands.
"""
import json

import pytest

from hashtree.crypto.hashing import CONCAT_BINARY, Hasher, to_hex
from hashtree.merkle import MerkleTree
from hashtree_cli.commands import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
)
from hashtree_cli.main import create_parser, main


SCENARIO = ["Crypto", "Merkle", "Rust", "Tree"]


class TestParser:
    """Tests for argument parsing."""

    def test_no_command(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR

    def test_prove_requires_index(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["prove", "a", "b"])

    def test_rejects_unknown_hash(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--hash", "md5", "demo"])


class TestDemoCommand:
    """Tests for the demo command."""

    def test_default_demo_verifies(self, capsys):
        assert main(["demo"]) == EXIT_SUCCESS
        assert "Verification was successful: true" in capsys.readouterr().out

    def test_demo_json(self, capsys):
        assert main(["demo", "a", "b", "c", "d", "--insert", "e", "--index", "4", "--json"]) == EXIT_SUCCESS
        summary = json.loads(capsys.readouterr().out)

        assert summary["verified"] is True
        assert summary["width"] == 8
        assert summary["depth"] == 4
        assert len(summary["proof"]) == 3

    def test_demo_out_of_range(self, capsys):
        assert main(["demo", "--index", "9"]) == EXIT_RUNTIME_ERROR
        assert "out of range" in capsys.readouterr().err


class TestRootCommand:
    """Tests for the root command."""

    def test_prints_root(self, capsys):
        assert main(["root", *SCENARIO]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == to_hex(MerkleTree(SCENARIO).root)

    def test_binary_flag(self, capsys):
        assert main(["--concat", "binary", "root", *SCENARIO]) == EXIT_SUCCESS
        expected = MerkleTree(SCENARIO, hasher=Hasher(concat_encoding=CONCAT_BINARY)).root
        assert capsys.readouterr().out.strip() == to_hex(expected)

    def test_from_file(self, tmp_path, capsys):
        path = tmp_path / "elements.txt"
        path.write_text("\n".join(SCENARIO) + "\n")

        assert main(["root", "--file", str(path), "--json"]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["root"] == to_hex(MerkleTree(SCENARIO).root)
        assert data["elements"] == 4

    def test_no_elements(self, capsys):
        assert main(["root"]) == EXIT_RUNTIME_ERROR


class TestProveAndVerify:
    """Tests for the prove and verify commands together."""

    def _prove(self, capsys, index):
        assert main(["prove", *SCENARIO, "--index", str(index), "--json"]) == EXIT_SUCCESS
        return json.loads(capsys.readouterr().out)

    def test_prove_json(self, capsys):
        data = self._prove(capsys, 0)
        tree = MerkleTree(SCENARIO)

        assert data["siblings"] == [to_hex(s) for s in tree.generate_proof(0)]
        assert data["root"] == to_hex(tree.root)

    def test_verify_generated_proof(self, capsys):
        data = self._prove(capsys, 2)
        argv = ["verify", "--root", data["root"], "--index", "2", "--element", "Rust", "--proof", *data["siblings"]]

        assert main(argv) == EXIT_SUCCESS
        assert "verified: true" in capsys.readouterr().out

    def test_verify_wrong_element(self, capsys):
        data = self._prove(capsys, 2)
        argv = ["verify", "--root", data["root"], "--index", "2", "--element", "Tree", "--proof", *data["siblings"]]

        assert main(argv) == EXIT_VERIFICATION_FAILED

    def test_verify_bad_hex(self, capsys):
        argv = ["verify", "--root", "nothex", "--index", "0", "--element", "x"]
        assert main(argv) == EXIT_RUNTIME_ERROR

    def test_prove_out_of_range(self, capsys):
        assert main(["prove", "a", "b", "c", "--index", "3"]) == EXIT_RUNTIME_ERROR


class TestConfigCommand:
    """Tests for the config command and config loading."""

    def test_show_defaults(self, capsys):
        assert main(["config", "--show"]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["hash_algorithm"] == "sha256"
        assert data["concat_encoding"] == "decimal"

    def test_yaml_then_flags(self, tmp_path, capsys):
        path = tmp_path / "hashtree.yaml"
        path.write_text("hash_algorithm: sha512\nconcat_encoding: binary\n")

        assert main(["--config", str(path), "--hash", "blake2b", "config", "--show"]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["hash_algorithm"] == "blake2b"
        assert data["concat_encoding"] == "binary"

    def test_missing_config_file(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "none.yaml"), "config"]) == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err

    def test_bad_env_algorithm(self, monkeypatch, capsys):
        monkeypatch.setenv("HASHTREE_HASH_ALGORITHM", "md5")
        assert main(["config"]) == EXIT_RUNTIME_ERROR

    def test_config_without_show_prints_usage(self, capsys):
        assert main(["config"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "Usage: hashtree config --show" in out
        assert "hash_algorithm" not in out


class TestJsonErrors:
    """Tests that --json commands report failures as a MerkleError document."""

    def test_prove_out_of_range(self, capsys):
        assert main(["prove", "a", "b", "c", "--index", "3", "--json"]) == EXIT_RUNTIME_ERROR
        error = json.loads(capsys.readouterr().out)["error"]

        assert error["code"] == "INDEX_OUT_OF_RANGE"
        assert error["details"] == {"leaf_index": 3, "diff_elements": 3}
        assert error["retryable"] is False

    def test_root_without_elements(self, capsys):
        assert main(["root", "--json"]) == EXIT_RUNTIME_ERROR
        error = json.loads(capsys.readouterr().out)["error"]
        assert error["code"] == "INVALID_INPUT"

    def test_verify_bad_hex(self, capsys):
        argv = ["verify", "--root", "nothex", "--index", "0", "--element", "x", "--json"]
        assert main(argv) == EXIT_RUNTIME_ERROR
        error = json.loads(capsys.readouterr().out)["error"]
        assert error["code"] == "INVALID_INPUT"
        assert "Invalid digest" in error["message"]

    def test_demo_out_of_range(self, capsys):
        assert main(["demo", "--index", "9", "--json"]) == EXIT_RUNTIME_ERROR
        error = json.loads(capsys.readouterr().out)["error"]
        assert error["details"]["leaf_index"] == 9

    def test_bad_config_file(self, tmp_path, capsys):
        argv = ["--config", str(tmp_path / "none.yaml"), "root", "a", "--json"]
        assert main(argv) == EXIT_RUNTIME_ERROR
        error = json.loads(capsys.readouterr().out)["error"]
        assert error["code"] == "CONFIG_ERROR"
        assert error["details"]["path"].endswith("none.yaml")

    def test_plain_errors_stay_on_stderr(self, capsys):
        assert main(["prove", "a", "--index", "5"]) == EXIT_RUNTIME_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: Leaf index 5 out of range" in captured.err
