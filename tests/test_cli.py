"""Tests for the command-line interface."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from bagfixity.cli import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def bag_root(tmp_path: Path, runner: CliRunner) -> Path:
    """A bag created through the CLI with one payload file."""
    root = tmp_path / "bag"
    result = runner.invoke(main, ["init", str(root), "--info", "Source-Organization=Test"])
    assert result.exit_code == 0, result.output
    (root / "data" / "a.txt").write_text("alpha\n")
    return root


class TestCli:
    """Tests for bagfixity commands."""

    def test_init(self, bag_root: Path):
        assert (bag_root / "bagit.txt").exists()
        assert "Source-Organization: Test" in (bag_root / "bag-info.txt").read_text()

    def test_init_rejects_bad_info(self, runner, tmp_path: Path):
        result = runner.invoke(main, ["init", str(tmp_path / "x"), "--info", "nokey"])
        assert result.exit_code == 1

    def test_manifest_and_check(self, runner, bag_root: Path):
        """A freshly manifested bag checks clean."""
        result = runner.invoke(main, ["manifest", str(bag_root)])
        assert result.exit_code == 0, result.output
        assert "Wrote manifest-sha1.txt" in result.output

        result = runner.invoke(main, ["check", str(bag_root)])
        assert result.exit_code == 0, result.output
        assert "Bag is fixed" in result.output

    def test_check_fails_on_change(self, runner, bag_root: Path):
        """check exits 1 once a payload file changes."""
        runner.invoke(main, ["manifest", str(bag_root)])
        (bag_root / "data" / "a.txt").write_text("beta\n")

        result = runner.invoke(main, ["check", str(bag_root)])
        assert result.exit_code == 1

    def test_manifest_algorithm_option(self, runner, bag_root: Path):
        result = runner.invoke(main, ["manifest", str(bag_root), "--algorithm", "sha256"])
        assert result.exit_code == 0, result.output
        assert (bag_root / "manifest-sha256.txt").exists()
        assert not (bag_root / "manifest-sha1.txt").exists()

    def test_config_file(self, runner, bag_root: Path, tmp_path: Path):
        """The configured selector applies when none is given."""
        config = tmp_path / "bag.yaml"
        config.write_text("algorithm: md5\n")
        result = runner.invoke(main, ["--config", str(config), "manifest", str(bag_root)])
        assert result.exit_code == 0, result.output
        assert [p.name for p in bag_root.glob("manifest-*.txt")] == ["manifest-md5.txt"]

    def test_tag_commands(self, runner, bag_root: Path):
        """add-tag, remove-tag and delete-tag update the tracked set."""
        runner.invoke(main, ["manifest", str(bag_root)])

        result = runner.invoke(main, ["add-tag", str(bag_root), "notes.txt", "--text", "hello"])
        assert result.exit_code == 0, result.output
        assert "notes.txt" in result.output
        assert (bag_root / "notes.txt").read_text() == "hello\n"

        result = runner.invoke(main, ["add-tag", str(bag_root), "notes.txt", "--text", "again"])
        assert result.exit_code == 1
        assert "already in manifest" in result.output

        result = runner.invoke(main, ["remove-tag", str(bag_root), "notes.txt"])
        assert result.exit_code == 0, result.output
        assert "notes.txt" not in (bag_root / "tagmanifest-sha1.txt").read_text()

        result = runner.invoke(main, ["delete-tag", str(bag_root), "notes.txt"])
        assert result.exit_code == 0, result.output
        assert not (bag_root / "notes.txt").exists()

    def test_remove_unknown_tag(self, runner, bag_root: Path):
        runner.invoke(main, ["manifest", str(bag_root)])
        result = runner.invoke(main, ["remove-tag", str(bag_root), "missing.txt"])
        assert result.exit_code == 1
        assert "not in manifest" in result.output

    def test_status(self, runner, bag_root: Path):
        runner.invoke(main, ["manifest", str(bag_root)])
        result = runner.invoke(main, ["status", str(bag_root)])
        assert result.exit_code == 0, result.output
        assert "Fingerprint:" in result.output
        assert "bag-info.txt" in result.output
