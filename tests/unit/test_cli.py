from unittest.mock import Mock

import pytest

from src import cli
from src.forum.application.service import MembershipService


@pytest.fixture
def observability(monkeypatch):
    configure = Mock(return_value=False)
    monkeypatch.setattr(cli, "configure_observability", configure)
    return configure


def test_main_prints_capability_matrix(observability, capsys):
    # Act
    exit_code = cli.main(["--no-metrics-server"])

    # Assert
    assert exit_code == 0
    observability.assert_called_once_with(start_metrics_server=False)

    # Component loggers may share stdout; the table starts at its header
    out = capsys.readouterr().out.splitlines()
    header = next(i for i, line in enumerate(out) if line.startswith("Tier "))
    assert [line.split()[0] for line in out[header + 1 :]] == ["Bronze", "Silver", "Gold", "Platinum"]


def test_main_starts_metrics_server_by_default(observability):
    cli.main([])

    observability.assert_called_once_with(start_metrics_server=True)


def test_format_matrix_rows():
    rows = cli.format_matrix(MembershipService())

    gold = next(row for row in rows if row.startswith("Gold"))
    bronze = next(row for row in rows if row.startswith("Bronze"))
    assert gold.split() == ["Gold", "True", "True", "True", "-"]
    assert bronze.endswith("Silver, Gold, Platinum")
