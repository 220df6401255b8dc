"""Unit tests for the shared trigger functions migration."""

import importlib.util
from pathlib import Path
from unittest.mock import MagicMock, patch

_VERSIONS = Path(__file__).resolve().parents[2] / "alembic" / "versions"


def _load(filename: str):
    spec = importlib.util.spec_from_file_location(filename.removesuffix(".py"), _VERSIONS / filename)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _statements(op: MagicMock) -> list[str]:
    return [c.args[0] for c in op.execute.call_args_list]


def test_upgrade_creates_trigger_functions() -> None:
    migration = _load("001_create_common_functions.py")
    with patch.object(migration, "op") as op:
        migration.upgrade()
    statements = _statements(op)
    assert "pgcrypto" in statements[0]
    assert any("FUNCTION fn_update_timestamp()" in s for s in statements)
    assert any("FUNCTION fn_reject_history_update()" in s for s in statements)


def test_downgrade_drops_in_reverse() -> None:
    migration = _load("001_create_common_functions.py")
    with patch.object(migration, "op") as op:
        migration.downgrade()
    assert _statements(op) == [
        "DROP FUNCTION IF EXISTS fn_reject_history_update();",
        "DROP FUNCTION IF EXISTS fn_update_timestamp();",
    ]


def test_bids_are_append_only() -> None:
    migration = _load("004_create_bids.py")
    with patch.object(migration, "op") as op:
        migration.upgrade()
    trigger = next(s for s in _statements(op) if "trg_bids_append_only" in s)
    assert "BEFORE UPDATE ON bids" in trigger
    assert "fn_reject_history_update()" in trigger
