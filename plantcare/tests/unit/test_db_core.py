from types import SimpleNamespace

import pymysql
import pytest

from plantcare.app.db import core as core_mod
from plantcare.app.errors import NotFound, PersistenceFailure


class _FakeConn:
    def __init__(self, *, ping_raises: bool = False):
        self._ping_raises = ping_raises
        self.ping_called_with = None
        self.closed = False
        self._cursor = _FakeCursor()

    def ping(self, reconnect: bool = False):
        self.ping_called_with = reconnect
        if self._ping_raises:
            raise RuntimeError("ping fail")

    def close(self):
        self.closed = True

    def cursor(self):
        return self._cursor


class _FakeCursor:
    def __init__(self):
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True
        return False


def test_get_conn_uses_test_default_when_TEST_MODE(monkeypatch):
    calls = []

    def fake_connect(**kwargs):
        calls.append(kwargs)
        return _FakeConn()

    monkeypatch.setenv("TEST_MODE", "1")
    monkeypatch.delenv("DB_NAME", raising=False)
    monkeypatch.setattr(core_mod, "pymysql", SimpleNamespace(connect=fake_connect, MySQLError=pymysql.MySQLError))

    conn = core_mod.get_conn()
    assert isinstance(conn, _FakeConn)
    assert calls[-1]["database"] == "plantcare_test"
    assert calls[-1]["autocommit"] is True
    assert conn.ping_called_with is True


def test_get_conn_DB_NAME_override(monkeypatch):
    calls = []

    def fake_connect(**kwargs):
        calls.append(kwargs)
        return _FakeConn()

    monkeypatch.setenv("DB_NAME", "custom_test")
    monkeypatch.setattr(core_mod, "pymysql", SimpleNamespace(connect=fake_connect, MySQLError=pymysql.MySQLError))

    core_mod.get_conn()
    assert calls[-1]["database"] == "custom_test"


def test_get_conn_retries_on_ping_failure_and_closes_first(monkeypatch):
    first_conn = _FakeConn(ping_raises=True)
    second_conn = _FakeConn(ping_raises=False)
    seq = [first_conn, second_conn]

    monkeypatch.setattr(core_mod, "time", SimpleNamespace(sleep=lambda _x: None))
    monkeypatch.setattr(core_mod, "pymysql", SimpleNamespace(connect=lambda **kw: seq.pop(0), MySQLError=pymysql.MySQLError))

    conn = core_mod.get_conn()
    assert first_conn.closed is True
    assert conn is second_conn


def test_get_conn_raises_after_second_failure(monkeypatch):
    def fake_connect(**kwargs):
        raise pymysql.err.OperationalError(2003, "Can't connect")

    monkeypatch.setattr(core_mod, "time", SimpleNamespace(sleep=lambda _x: None))
    monkeypatch.setattr(core_mod, "pymysql", SimpleNamespace(connect=fake_connect, MySQLError=pymysql.MySQLError))

    with pytest.raises(pymysql.err.OperationalError):
        core_mod.get_conn()


def test_connect_context_manager_closes_even_on_exception(monkeypatch):
    fake = _FakeConn()
    monkeypatch.setattr(core_mod, "get_conn", lambda: fake)

    with pytest.raises(RuntimeError):
        with core_mod.connect() as c:
            assert c is fake
            raise RuntimeError("boom")
    assert fake.closed is True


def test_store_cursor_translates_driver_errors_and_closes():
    fake = _FakeConn()
    with pytest.raises(PersistenceFailure) as ei:
        with core_mod.store_cursor(lambda: fake, "Could not read") as cur:
            assert cur is fake._cursor
            raise pymysql.err.InternalError(1205, "Lock wait timeout")
    assert str(ei.value) == "Could not read"
    assert fake.closed is True
    assert fake._cursor.closed is True


def test_store_cursor_lets_domain_errors_through():
    fake = _FakeConn()
    with pytest.raises(NotFound):
        with core_mod.store_cursor(lambda: fake, "Could not read"):
            raise NotFound("missing")
    assert fake.closed is True
