import json
import logging

from scrobbler.cache.session import SessionCache


def test_missing_file_starts_empty(tmp_path):
    cache = SessionCache(str(tmp_path / "sessions.json"))

    assert cache.size() == 0
    assert cache.get("K") is None
    assert cache.metrics.misses == 1


def test_set_persists_across_instances(tmp_path):
    path = tmp_path / "nested" / "sessions.json"
    SessionCache(str(path)).set("K", "S2", "thom")

    reloaded = SessionCache(str(path))

    assert reloaded.get("K") == "S2"
    assert reloaded.metrics.hits == 1
    stored = json.loads(path.read_text())
    assert stored["K"]["username"] == "thom"
    assert "timestamp" in stored["K"]


def test_corrupt_file_is_reset(tmp_path):
    path = tmp_path / "sessions.json"
    path.write_text("{not json")

    cache = SessionCache(str(path))

    assert cache.size() == 0


def test_forget_and_clear(tmp_path):
    cache = SessionCache(str(tmp_path / "sessions.json"), enable_locking=False)
    cache.set("K", "S")
    cache.set("L", "T")

    cache.forget("K")
    assert cache.get("K") is None
    assert cache.size() == 1

    cache.clear()
    assert SessionCache(str(tmp_path / "sessions.json")).size() == 0


def test_log_metrics_reports_hits_and_misses(tmp_path, caplog):
    cache = SessionCache(str(tmp_path / "sessions.json"), enable_locking=False)
    cache.set("K", "S")
    cache.get("K")
    cache.get("L")

    with caplog.at_level(logging.INFO, logger="scrobbler.cache"):
        cache.log_metrics("Session")

    assert "Session cache stats - Hits: 1, Misses: 1, Hit rate: 50.0%, Writes: 1" in caplog.text


def test_log_metrics_is_quiet_without_reads(tmp_path, caplog):
    cache = SessionCache(str(tmp_path / "sessions.json"), enable_locking=False)

    with caplog.at_level(logging.INFO, logger="scrobbler.cache"):
        cache.log_metrics("Session")

    assert "cache stats" not in caplog.text
