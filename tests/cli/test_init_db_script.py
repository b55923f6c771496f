from __future__ import annotations

import mysql.connector

from scripts import init_db
from scripts.init_db import EXIT_DB_ERROR, EXIT_OK, parse_args, run

DB_CONFIG = {"host": "db", "port": 3306, "user": "payroll", "password": "", "database": "payroll_db"}


class FakeBootstrap:
    def __init__(self, error=None):
        self.calls = []
        self._error = error

    def apply_schema(self, db_config, *, schema_path):
        self.calls.append(("schema", schema_path.name))
        if self._error:
            raise self._error

    def apply_seed_sql(self, db_config, *, seed_path):
        self.calls.append(("seed", seed_path.name))

    def list_tables(self, db_config):
        return ["attendance", "departments", "employees", "payroll"]


def test_schema_only_by_default(monkeypatch, capsys):
    fake = FakeBootstrap()
    monkeypatch.setattr(init_db, "bootstrap", fake)

    assert run(DB_CONFIG, parse_args([])) == EXIT_OK
    assert fake.calls == [("schema", "schema.sql")]
    assert "tables=4 seeded=no" in capsys.readouterr().out


def test_seed_flag_loads_demo_data(monkeypatch):
    fake = FakeBootstrap()
    monkeypatch.setattr(init_db, "bootstrap", fake)

    assert run(DB_CONFIG, parse_args(["--seed"])) == EXIT_OK
    assert fake.calls == [("schema", "schema.sql"), ("seed", "seed.sql")]


def test_database_error_exit_code(monkeypatch):
    fake = FakeBootstrap(error=mysql.connector.errors.DatabaseError(msg="Access denied", errno=1045))
    monkeypatch.setattr(init_db, "bootstrap", fake)

    assert run(DB_CONFIG, parse_args(["--seed"])) == EXIT_DB_ERROR
    assert fake.calls == [("schema", "schema.sql")]
