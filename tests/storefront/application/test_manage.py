"""Tests for the database management CLI and schema helpers."""

import pytest

from storefront import manage
from storefront.domain import storefront
from storefront.utils.db import drop_db, setup_db


def test_memory_provider_needs_no_schema():
    assert setup_db(storefront) == []
    assert drop_db(storefront) == []


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["setup-db"], ("setup",)),
        (["drop-db"], ("drop",)),
        (["grant-admin", "owner@example.com"], ("grant", "owner@example.com")),
    ],
)
def test_cli_dispatch(monkeypatch, argv, expected):
    calls = []
    monkeypatch.setattr(manage, "setup_databases", lambda: calls.append(("setup",)))
    monkeypatch.setattr(manage, "drop_databases", lambda: calls.append(("drop",)))
    monkeypatch.setattr(manage, "grant_admin_role", lambda email: calls.append(("grant", email)))

    manage.main(argv)
    assert calls == [expected]


def test_cli_requires_a_command():
    with pytest.raises(SystemExit):
        manage.main([])
