"""Tests for the `statement` CLI command."""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from party_ledger import main as main_module
from party_ledger.config import AppSettings
from party_ledger.domain import LedgerPartyNotFoundError, Party, PartyKind, Statement, StatementTotals


class _StatementServiceStub:
    def __init__(self, error: Exception | None = None) -> None:
        self._error = error
        self.requests: list[tuple] = []

    async def ledger_build_statement(self, party_id, party_kind, date_from=None, date_to=None, timeout_seconds=None):
        self.requests.append((party_id, party_kind, date_from, date_to))
        if self._error is not None:
            raise self._error
        return Statement(
            party=Party(party_id=party_id, kind=PartyKind.SUPPLIER, name="Northwind"),
            entries=(),
            date_from=date_from,
            date_to=date_to,
            as_of_utc=datetime(2024, 2, 1, tzinfo=timezone.utc),
            totals=StatementTotals(Decimal("0.00"), Decimal("0.00"), Decimal("0.00")),
        )


def _patch_runtime(monkeypatch: pytest.MonkeyPatch, statement_service: _StatementServiceStub) -> None:
    monkeypatch.setattr(main_module, "config_load_settings", lambda: AppSettings(_env_file=None))
    monkeypatch.setattr(main_module, "config_configure_logging", lambda level: None)
    monkeypatch.setattr(main_module, "bootstrap_create_statement_service", lambda settings: statement_service)


def test_main_statement_prints_envelope(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """Print the success envelope and exit with code 0."""

    statement_service = _StatementServiceStub()
    _patch_runtime(monkeypatch, statement_service)

    with pytest.raises(SystemExit) as exit_info:
        main_module.main(["statement", "s-1", "--type", "supplier", "--date-from", "2024-01-01"])

    assert exit_info.value.code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["success"] is True
    assert payload["meta"]["ledger_type"] == "supplier"
    assert payload["meta"]["totals"]["closing_balance"] == "0.00"
    assert statement_service.requests == [("s-1", "supplier", date(2024, 1, 1), None)]


def test_main_statement_exits_non_zero_on_failure(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture,
) -> None:
    _patch_runtime(monkeypatch, _StatementServiceStub(error=LedgerPartyNotFoundError("supplier s-9 not found")))

    with pytest.raises(SystemExit) as exit_info:
        main_module.main(["statement", "s-9", "--type", "supplier"])

    assert exit_info.value.code == 1
    assert json.loads(capsys.readouterr().out) == {"success": False, "error": "supplier s-9 not found"}


def test_main_statement_rejects_malformed_date_without_building(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture,
) -> None:
    statement_service = _StatementServiceStub()
    _patch_runtime(monkeypatch, statement_service)

    with pytest.raises(SystemExit) as exit_info:
        main_module.main(["statement", "s-1", "--type", "supplier", "--date-from", "2024/01/01"])

    assert exit_info.value.code == 1
    assert "date_from" in json.loads(capsys.readouterr().out)["error"]
    assert statement_service.requests == []
