"""End-to-end tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from catalog.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()
    env = {"CATALOG_DATABASE_URL": f"sqlite:///{tmp_path / 'cli.db'}"}

    def invoke(*args: str):
        return runner.invoke(cli, list(args), env=env)

    assert invoke("init-db").exit_code == 0
    return invoke


def _add(run, product_id="p1", country="Sweden", price="100.00"):
    return run("product", "add", "--id", product_id, "--name", "Widget",
               "--price", price, "--country", country)


class TestProductCommands:

    def test_add_and_show(self, run):
        result = _add(run, country="sweden")
        assert result.exit_code == 0
        assert "added at 100.00 (Sweden)" in result.output

        shown = run("product", "show", "--id", "p1")
        assert shown.exit_code == 0
        assert "Final price: 125.00" in shown.output

    def test_add_duplicate_fails(self, run):
        _add(run)
        result = _add(run)
        assert result.exit_code != 0
        assert "already exists" in result.output

    def test_list_json_shape(self, run):
        _add(run, "p1")
        _add(run, "p2", country="Germany")

        result = run("product", "list", "--country", "SWEDEN", "--json")

        assert result.exit_code == 0
        assert json.loads(result.output) == [{
            "id": "p1",
            "name": "Widget",
            "basePrice": 100.0,
            "country": "Sweden",
            "discounts": [],
            "finalPrice": 125.0,
        }]

    def test_list_requires_supported_country(self, run):
        assert "Country parameter is required" in run("product", "list").output
        result = run("product", "list", "--country", "Norway")
        assert result.exit_code != 0
        assert "Supported countries: Sweden, Germany, France" in result.output

    def test_show_missing(self, run):
        result = run("product", "show", "--id", "ghost")
        assert result.exit_code != 0
        assert "does not exist" in result.output


class TestDiscountCommands:

    def test_apply_then_apply_again(self, run):
        _add(run)

        first = run("discount", "apply", "--product", "p1", "--discount-id", "SUMMER",
                    "--percent", "10", "--json")
        assert first.exit_code == 0
        payload = json.loads(first.output)
        assert payload["result"] == "success"
        assert payload["status"] == 200
        assert payload["product"]["finalPrice"] == pytest.approx(112.5, abs=0.01)

        second = run("discount", "apply", "--product", "p1", "--discount-id", "SUMMER",
                     "--percent", "20")
        assert second.exit_code == 1
        assert "already applied" in second.output
        assert "stored with 10%" in second.output

    def test_unknown_product(self, run):
        result = run("discount", "apply", "--product", "does-not-exist",
                     "--discount-id", "SUMMER", "--percent", "10", "--json")
        assert result.exit_code == 1
        payload = json.loads(result.output)
        assert payload["result"] == "product_not_found"
        assert payload["status"] == 404

    def test_validation_error(self, run):
        _add(run)
        result = run("discount", "apply", "--product", "p1",
                     "--discount-id", "bad id", "--percent", "10")
        assert result.exit_code == 1
        assert "alphanumeric" in result.output

    def test_non_numeric_percent(self, run):
        _add(run)
        result = run("discount", "apply", "--product", "p1",
                     "--discount-id", "SUMMER", "--percent", "ten")
        assert result.exit_code != 0
        assert "Invalid percentage" in result.output


def test_health(run):
    result = run("health")
    assert result.exit_code == 0
    assert "OK" in result.output
