"""Tests for bag configuration and the directory-backed bag."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from bagfixity.core.bag import Bag, DirectoryBag
from bagfixity.core.config import BagConfig, ManifestSelector
from bagfixity.manifest.generator import ManifestGenerator


class TestBagConfig:
    """Tests for BagConfig."""

    def test_defaults(self, tmp_path: Path):
        """Default layout uses data/, bag-info.txt and bagit.txt."""
        config = BagConfig(root=tmp_path)
        assert config.payload_path == tmp_path / "data"
        assert config.bag_info_path == tmp_path / "bag-info.txt"
        assert config.bagit_path == tmp_path / "bagit.txt"
        assert config.algorithm is ManifestSelector.DEFAULT

    def test_frozen(self, tmp_path: Path):
        """Config values cannot be reassigned."""
        config = BagConfig(root=tmp_path)
        with pytest.raises(ValidationError):
            config.payload_dir = "payload"

    def test_invalid_algorithm(self, tmp_path: Path):
        """Unknown selectors are rejected at load time."""
        with pytest.raises(ValidationError):
            BagConfig(root=tmp_path, algorithm="sha3")

    def test_from_yaml(self, tmp_path: Path):
        """Config should load from YAML."""
        config_file = tmp_path / "bag.yaml"
        config_file.write_text(
            f"root: {tmp_path / 'bag'}\npayload_dir: payload\nalgorithm: sha256\n"
        )
        config = BagConfig.from_yaml(config_file)
        assert config.root == tmp_path / "bag"
        assert config.payload_dir == "payload"
        assert config.algorithm is ManifestSelector.SHA256

    def test_from_yaml_root_override(self, tmp_path: Path):
        """An explicit root replaces the one in the file."""
        config_file = tmp_path / "bag.yaml"
        config_file.write_text("algorithm: md5\n")
        config = BagConfig.from_yaml(config_file, root=tmp_path / "other")
        assert config.root == tmp_path / "other"
        assert config.algorithm is ManifestSelector.MD5


class TestDirectoryBag:
    """Tests for DirectoryBag."""

    def test_satisfies_protocol(self, tmp_path: Path):
        """DirectoryBag exposes every capability of the Bag protocol."""
        assert isinstance(DirectoryBag.from_path(tmp_path), Bag)

    def test_create_writes_declarations(self, tmp_path: Path):
        """create() lays out the payload dir and both declaration files."""
        bag = DirectoryBag.create(BagConfig(root=tmp_path / "bag"), info={"Contact-Name": "A. Person"})
        root = bag.bag_root()

        assert (root / "data").is_dir()
        assert (root / "bagit.txt").read_text() == (
            "BagIt-Version: 0.97\nTag-File-Character-Encoding: UTF-8\n"
        )
        info = (root / "bag-info.txt").read_text()
        assert "Bag-Software-Agent: bagfixity v" in info
        assert "Contact-Name: A. Person\n" in info

    def test_create_keeps_existing_declarations(self, tmp_path: Path):
        """Existing declaration files are not overwritten."""
        root = tmp_path / "bag"
        root.mkdir()
        (root / "bag-info.txt").write_text("Custom: yes\n")
        DirectoryBag.create(BagConfig(root=root))
        assert (root / "bag-info.txt").read_text() == "Custom: yes\n"

    def test_payload_files_sorted_and_recursive(self, tmp_path: Path):
        """Payload files come from every level of the payload dir."""
        bag = DirectoryBag.create(BagConfig(root=tmp_path / "bag"))
        data = bag.bag_root() / "data"
        (data / "z").mkdir()
        (data / "z" / "deep.txt").write_text("d")
        (data / "b.txt").write_text("b")
        (bag.bag_root() / "notes.txt").write_text("not payload")

        assert bag.payload_files() == [data / "b.txt", data / "z" / "deep.txt"]

    def test_no_tag_files_before_tagmanifest(self, tmp_path: Path):
        """Nothing is tracked until a tag manifest exists."""
        bag = DirectoryBag.create(BagConfig(root=tmp_path / "bag"))
        assert bag.tag_files() == []

    def test_tag_files_read_from_tagmanifest(self, tmp_path: Path):
        """Tracked tag files are the tag manifest entries, decoded."""
        bag = DirectoryBag.create(BagConfig(root=tmp_path / "bag"))
        ManifestGenerator(bag).manifest("md5")
        root = bag.bag_root()
        assert bag.tag_files() == [
            root / "manifest-md5.txt",
            root / "bag-info.txt",
            root / "bagit.txt",
        ]
