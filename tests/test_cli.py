"""Tests for the datalayer CLI."""

import json

import pytest
import yaml
from click.testing import CliRunner

from datalayer.cli import main


@pytest.fixture
def runner():
    return CliRunner()


SEED = ["-s", "Jane", "-s", "John", "-s", "Goku", "-s", "Vegeta"]


class TestContracts:
    def test_table(self, runner):
        result = runner.invoke(main, ["contracts"])
        assert result.exit_code == 0
        assert "RecordReader  (backends: memory, slot, readonly)" in result.output
        assert "RecordRemover  (backends: memory, slot)" in result.output
        assert "remove(record_id: int) -> str" in result.output

    def test_json(self, runner):
        result = runner.invoke(main, ["contracts", "--format", "json"])
        data = json.loads(result.output)
        assert [c["name"] for c in data] == ["RecordReader", "RecordWriter", "RecordRemover"]

    def test_yaml(self, runner):
        result = runner.invoke(main, ["contracts", "--format", "yaml"])
        data = yaml.safe_load(result.output)
        assert data[1]["operations"][0]["name"] == "add"


class TestRecords:
    def test_list(self, runner):
        result = runner.invoke(main, ["list", *SEED])
        assert result.exit_code == 0
        assert "[2] Goku" in result.output

    def test_list_empty(self, runner):
        result = runner.invoke(main, ["list"])
        assert "No records." in result.output

    def test_remove(self, runner):
        result = runner.invoke(main, ["remove", "2", "--backend", "slot", *SEED])
        assert result.exit_code == 0
        assert "Removed [2] Goku" in result.output
        assert "[3] Vegeta" in result.output
        assert "Goku" not in result.output.split("Removed [2] Goku", 1)[1]

    def test_remove_missing(self, runner):
        result = runner.invoke(main, ["remove", "9", *SEED])
        assert result.exit_code == 1
        assert "RecordNotFoundError: Record 9 not found" in result.output

    def test_remove_readonly(self, runner):
        result = runner.invoke(main, ["remove", "1", "--backend", "readonly", *SEED])
        assert result.exit_code == 1
        assert "CapabilityViolationError" in result.output

    def test_remove_negative_id(self, runner):
        result = runner.invoke(main, ["remove", "-1", *SEED])
        assert result.exit_code == 1
        assert "InvalidInputError" in result.output

    def test_blank_seed(self, runner):
        result = runner.invoke(main, ["remove", "1", "-s", "Jane", "-s", "", "-s", "John"])
        assert result.exit_code == 1
        assert "InvalidInputError" in result.output
        assert "Removed" not in result.output
