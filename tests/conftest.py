import pytest
from click.testing import CliRunner

from mdstyle.styles import DEFAULT_STYLE_TABLE, StyleTable


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def table() -> StyleTable:
    return DEFAULT_STYLE_TABLE
