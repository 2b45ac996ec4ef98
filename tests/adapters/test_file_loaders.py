from __future__ import annotations

import json
from pathlib import Path

import pytest

from lib_client_config.adapters.file_loaders.structured import (
    JSONFileLoader,
    TOMLFileLoader,
    YAMLFileLoader,
    load_mapping,
)
from lib_client_config.domain.errors import InvalidFormat, NotFound


def test_toml_loader(tmp_path: Path) -> None:
    path = tmp_path / "metadata.toml"
    path.write_text('[services.iam]\nsigning_regions = { aws = "us-east-1" }\n')
    data = TOMLFileLoader().load(str(path))
    assert data["services"]["iam"]["signing_regions"]["aws"] == "us-east-1"


def test_toml_loader_missing_file(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        TOMLFileLoader().load(str(tmp_path / "missing.toml"))


def test_toml_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "metadata.toml"
    path.write_text("[services\n")
    with pytest.raises(InvalidFormat):
        TOMLFileLoader().load(str(path))


def test_json_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "metadata.json"
    path.write_text("{invalid}")
    with pytest.raises(InvalidFormat):
        JSONFileLoader().load(str(path))


def test_json_loader_valid(tmp_path: Path) -> None:
    path = tmp_path / "metadata.json"
    path.write_text(json.dumps({"services": {"demo": {"regions": ["eu-west-1"]}}}), encoding="utf-8")
    data = JSONFileLoader().load(str(path))
    assert data["services"]["demo"]["regions"] == ["eu-west-1"]


def test_json_loader_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "metadata.json"
    path.write_text("[1, 2]")
    with pytest.raises(InvalidFormat, match="did not produce a mapping"):
        JSONFileLoader().load(str(path))


def test_yaml_loader_handles_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "metadata.yaml"
    path.write_text("# empty file\n")
    assert YAMLFileLoader().load(str(path)) == {}


def test_yaml_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "metadata.yaml"
    path.write_text("services: [unclosed\n")
    with pytest.raises(InvalidFormat):
        YAMLFileLoader().load(str(path))


def test_load_mapping_picks_loader_by_suffix(tmp_path: Path) -> None:
    path = tmp_path / "metadata.yml"
    path.write_text("services:\n  demo:\n    regions: [eu-west-1]\n")
    assert load_mapping(str(path))["services"]["demo"]["regions"] == ["eu-west-1"]


def test_load_mapping_rejects_unknown_suffix(tmp_path: Path) -> None:
    path = tmp_path / "metadata.ini"
    path.write_text("[services]\n")
    with pytest.raises(InvalidFormat, match="Unsupported"):
        load_mapping(str(path))
