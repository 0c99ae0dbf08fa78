from __future__ import annotations

import logging

from scripts import init_db, seed_db


def test_init_db_applies_schema_and_logs(monkeypatch, caplog):
    applied = {}
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(init_db, "apply_schema", lambda cfg, *, schema_path: applied.update(cfg=cfg, path=schema_path))
    monkeypatch.setattr(init_db, "list_tables", lambda cfg: ["offices", "users", "attendance_records"])

    with caplog.at_level(logging.INFO, logger=init_db.logger.name):
        init_db.main()

    assert applied["path"].name == "schema.sql"
    assert "tables=3" in caplog.text


def test_seed_db_applies_seed_and_logs(monkeypatch, caplog):
    seen = []
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(seed_db, "apply_seed_sql", lambda cfg, *, seed_path: seen.append(seed_path))

    with caplog.at_level(logging.INFO, logger=seed_db.logger.name):
        seed_db.main()

    assert [p.name for p in seen] == ["seed.sql"]
    assert "Seeded offices" in caplog.text
