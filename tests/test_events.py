import logging

from motivator.events import MotivationEvent, emit, log_event


def test_emit_dispatches_to_hook():
    seen = []
    emit(lambda event, fields: seen.append((event, fields)), MotivationEvent.CACHE_HIT, user_id="u1", month=3)
    assert seen == [(MotivationEvent.CACHE_HIT, {"user_id": "u1", "month": 3})]


def test_default_hook_logs_retries_as_warnings(caplog):
    with caplog.at_level(logging.INFO, logger="motivator.events"):
        emit(None, MotivationEvent.RETRY, attempt=1, reason="timeout")
        log_event(MotivationEvent.CACHE_MISS, {"user_id": "u1"})

    levels = [(r.levelno, r.getMessage()) for r in caplog.records]
    assert (logging.WARNING, "retry attempt=1 reason=timeout") in levels
    assert (logging.INFO, "cache_miss user_id=u1") in levels
