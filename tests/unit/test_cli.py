from __future__ import annotations

import json
from typing import Any

from typer.testing import CliRunner

from jobly import main as main_module
from jobly.errors import NotFoundError

runner = CliRunner()


class _FakeDatabase:
    async def __aenter__(self) -> _FakeDatabase:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        del exc_type, exc, tb
        return False


class _StubCompanyRepository:
    calls: list[tuple[str, Any]] = []

    def __init__(self, db: Any) -> None:
        assert isinstance(db, _FakeDatabase)

    async def find_all(self, filters):
        self.calls.append(("find_all", filters))
        return []

    async def update(self, handle, data):
        self.calls.append(("update", handle, data))
        raise NotFoundError(f"No company: {handle}")

    async def remove(self, handle):
        self.calls.append(("remove", handle))


def _patch(monkeypatch) -> None:
    _StubCompanyRepository.calls = []
    monkeypatch.setattr(main_module, "Database", _FakeDatabase)
    monkeypatch.setattr(main_module, "CompanyRepository", _StubCompanyRepository)


def test_companies_passes_filters_with_logical_names(monkeypatch):
    _patch(monkeypatch)

    result = runner.invoke(main_module.app, ["companies", "--min-employees", "0", "--name", "ac"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == []
    assert _StubCompanyRepository.calls == [
        ("find_all", {"minEmployees": 0, "maxEmployees": None, "name": "ac"})
    ]


def test_delete_company_reports_success(monkeypatch):
    _patch(monkeypatch)

    result = runner.invoke(main_module.app, ["delete-company", "acme"])

    assert result.exit_code == 0
    assert _StubCompanyRepository.calls == [("remove", "acme")]


def test_update_company_not_found_exits_with_code_1(monkeypatch):
    _patch(monkeypatch)

    result = runner.invoke(main_module.app, ["update-company", "ghost", "--set", "numEmployees=5"])

    assert result.exit_code == 1
    assert _StubCompanyRepository.calls == [("update", "ghost", {"numEmployees": 5})]


def test_update_company_rejects_handle_change(monkeypatch):
    _patch(monkeypatch)

    result = runner.invoke(main_module.app, ["update-company", "acme", "--set", "handle=x"])

    assert result.exit_code == 1
    assert _StubCompanyRepository.calls == []


def test_update_company_keeps_text_values_as_strings(monkeypatch):
    _patch(monkeypatch)

    result = runner.invoke(
        main_module.app, ["update-company", "acme", "--set", "name=2024", "--set", "numEmployees=7"]
    )

    assert result.exit_code == 1
    assert _StubCompanyRepository.calls == [
        ("update", "acme", {"name": "2024", "numEmployees": 7})
    ]
