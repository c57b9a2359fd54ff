"""Unit tests for configuration, logging, the in-memory store and migrations."""

import json
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text

from interview_prep.platform.config import Settings, settings
from interview_prep.platform.logging import JsonFormatter, _resolve_level
from interview_prep.platform.request_context import set_request_id, set_user_id
from interview_prep.platform.storage import (
    MemoryKeyValueStore,
    performance_metrics_key,
    practice_session_key,
    user_choices_key,
    user_sessions_index_key,
)

BACKEND_DIR = Path(__file__).resolve().parents[1]


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def test_engine_limits_defaults():
    limits = Settings().engine_limits
    assert limits.performance_history_limit == 50
    assert limits.choice_history_limit == 100
    assert limits.recent_scores_window == 3
    assert limits.successful_session_score == 70.0


def test_engine_limits_never_below_one():
    limits = Settings(PERFORMANCE_HISTORY_LIMIT=0, CHOICE_HISTORY_LIMIT=-5, RECENT_SCORES_WINDOW=0).engine_limits
    assert limits.performance_history_limit == 1
    assert limits.choice_history_limit == 1
    assert limits.recent_scores_window == 1


def test_is_production():
    assert Settings(DEPLOYMENT_ENV=" Production ").is_production is True
    assert Settings(DEPLOYMENT_ENV="development").is_production is False


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def test_json_formatter_includes_request_context():
    set_request_id("req-42")
    set_user_id("u1")
    try:
        record = logging.LogRecord("interview_prep.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        payload = json.loads(JsonFormatter().format(record))
    finally:
        set_request_id(None)
        set_user_id(None)
    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-42"
    assert payload["user_id"] == "u1"
    assert payload["timestamp"].endswith("Z")


def test_resolve_level_falls_back_to_info():
    assert _resolve_level("debug") == logging.DEBUG
    assert _resolve_level("chatty") == logging.INFO
    assert _resolve_level(None) == logging.INFO


# ---------------------------------------------------------------------------
# Storage keys and the in-memory store
# ---------------------------------------------------------------------------

def test_storage_keys():
    assert performance_metrics_key("u1") == "performance-metrics-u1"
    assert user_choices_key("u1") == "user-choices-u1"
    assert practice_session_key("s1") == "practice-session-s1"
    assert user_sessions_index_key("u1") == "practice-sessions-u1"


def test_memory_store_copies_values():
    store = MemoryKeyValueStore()
    value = [{"score": 1}]
    store.set("k", value)
    value[0]["score"] = 2
    fetched = store.get("k")
    fetched.append("extra")
    assert store.get("k") == [{"score": 1}]
    assert store.keys() == ["k"]
    assert store.delete("k") is True
    assert store.get("k") is None


# ---------------------------------------------------------------------------
# Migrations
# ---------------------------------------------------------------------------

def test_migrations_upgrade_and_downgrade():
    cfg = Config()
    cfg.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    engine = create_engine(settings.DATABASE_URL)
    try:
        command.upgrade(cfg, "head")
        inspector = inspect(engine)
        assert {"kv_entries", "user_scoring_weights"} <= set(inspector.get_table_names())
        assert {ix["name"] for ix in inspector.get_indexes("kv_entries")} >= {"ix_kv_entries_key"}

        command.downgrade(cfg, "base")
        assert not {"kv_entries", "user_scoring_weights"} & set(inspect(engine).get_table_names())
    finally:
        with engine.begin() as conn:
            conn.execute(text("DROP TABLE IF EXISTS alembic_version"))
        engine.dispose()
