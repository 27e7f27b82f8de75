"""Tests for the catlingo CLI."""

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from catlingo import config as config_module
from catlingo.cli import cli
from catlingo.config import Settings
from catlingo.connectors import base as connector_base
from catlingo.connectors import get_active_connector
from catlingo.db.models import Category
from catlingo.hooks import get_global_registry
from catlingo.i18n import is_translatable
from conftest import make_engine

DEFAULT_SETTINGS = Settings(environment="development", categories_connector="i18n")


@pytest.fixture
def configured(engine: Engine, monkeypatch: pytest.MonkeyPatch) -> Engine:
    """Point the CLI at a fully migrated database with the default settings."""
    monkeypatch.setattr(config_module, "_settings", DEFAULT_SETTINGS)
    monkeypatch.setattr(connector_base, "default_engine", engine)
    return engine


def test_validate_standard_connector() -> None:
    result = CliRunner().invoke(cli, ["connector", "validate", "standard"])

    assert result.exit_code == 0
    assert "requirements met" in result.output


def test_validate_unknown_connector() -> None:
    result = CliRunner().invoke(cli, ["connector", "validate", "nope"])

    assert result.exit_code == 1
    assert "Unknown connector 'nope'" in result.output


def test_validate_default_connector(configured: Engine) -> None:
    result = CliRunner().invoke(cli, ["connector", "validate"])

    assert result.exit_code == 0, result.output
    assert "Connector 'i18n' requirements met" in result.output


def test_validate_default_connector_on_unmigrated_database(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(config_module, "_settings", DEFAULT_SETTINGS)
    monkeypatch.setattr(connector_base, "default_engine", make_engine())

    result = CliRunner().invoke(cli, ["connector", "validate"])

    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_hooks_for_standard_connector() -> None:
    result = CliRunner().invoke(cli, ["connector", "hooks", "standard"])

    assert result.exit_code == 0
    assert "installs no hooks" in result.output
    assert get_active_connector() is None
    assert len(get_global_registry()) == 0


def test_hooks_for_default_connector(configured: Engine) -> None:
    result = CliRunner().invoke(cli, ["connector", "hooks"])

    assert result.exit_code == 0, result.output
    assert "Hooks installed by 'i18n'" in result.output
    assert get_active_connector() is None
    assert len(get_global_registry()) == 0
    assert not is_translatable(Category)
