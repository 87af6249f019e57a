import pytest

from scrobbler.lastfm import (
    FatalError,
    FatalKind,
    Success,
    TransportError,
    get_submission_statistics,
    log_submission_statistics,
)
from scrobbler.lastfm.metrics import record_outcome, record_reauthentication

pytestmark = pytest.mark.usefixtures("fresh_statistics")


def test_counts_by_outcome():
    record_outcome(Success())
    record_outcome(Success())
    record_outcome(FatalError(FatalKind.CLOCK_SKEW))
    record_outcome(TransportError(OSError("down")))
    record_reauthentication()

    stats = get_submission_statistics()

    assert stats["submitted"] == 4
    assert stats["succeeded"] == 2
    assert stats["failed"] == 2
    assert stats["fatal"] == {"clock_skew": 1}
    assert stats["transport_errors"] == 1
    assert stats["reauthentications"] == 1
    assert stats["success_rate"] == 50.0


def test_log_statistics(caplog):
    record_outcome(FatalError(FatalKind.BANNED))

    with caplog.at_level("INFO", logger="scrobbler.lastfm.metrics"):
        log_submission_statistics()

    assert "Failed (banned): 1" in caplog.text
