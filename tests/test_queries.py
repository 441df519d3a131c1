import threading

import pytest

from vetclinic_client.queries import QueryCache


class Clock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_fresh_entry_is_served_from_cache():
    clock = Clock()
    cache = QueryCache(stale_seconds=60, clock=clock)
    calls = []

    def loader():
        calls.append(1)
        return {"data": len(calls)}

    assert cache.fetch(("clients", ()), loader) == {"data": 1}
    clock.now += 30
    assert cache.fetch(("clients", ()), loader) == {"data": 1}
    assert len(calls) == 1


def test_stale_entry_is_reloaded():
    clock = Clock()
    cache = QueryCache(stale_seconds=60, clock=clock)
    calls = []

    def loader():
        calls.append(1)
        return len(calls)

    cache.fetch("clients", loader)
    clock.now += 61

    assert cache.fetch("clients", loader) == 2


def test_reads_are_retried_before_failing():
    cache = QueryCache(retry_attempts=2)
    attempts = []

    def flaky():
        attempts.append(1)
        if len(attempts) < 3:
            raise ConnectionError("boom")
        return "ok"

    assert cache.fetch("animals", flaky) == "ok"
    assert len(attempts) == 3


def test_last_error_is_raised_and_nothing_cached():
    cache = QueryCache(retry_attempts=1)
    attempts = []

    def broken():
        attempts.append(1)
        raise ConnectionError(f"attempt {len(attempts)}")

    with pytest.raises(ConnectionError, match="attempt 2"):
        cache.fetch("animals", broken)
    assert cache.peek("animals") is None


def test_invalidate_drops_every_key_under_prefix():
    cache = QueryCache()
    cache.fetch(("clients", (("page", "1"),)), lambda: 1)
    cache.fetch(("clients", (("page", "2"),)), lambda: 2)
    cache.fetch(("client", "c-1"), lambda: 3)
    cache.fetch(("animals", ()), lambda: 4)

    removed = cache.invalidate("clients", ("client", "c-1"))

    assert removed == 3
    assert cache.peek(("animals", ())) == 4
    assert cache.peek(("client", "c-1")) is None


def test_mutation_invalidates_after_success():
    cache = QueryCache()
    cache.fetch(("clients", ()), lambda: "old")
    seen_during_call = []

    def call():
        seen_during_call.append(cache.peek(("clients", ())))
        return {"data": {"id": "c-2"}}

    result = cache.mutate(call, invalidates=["clients"])

    assert result == {"data": {"id": "c-2"}}
    assert seen_during_call == ["old"]
    assert cache.peek(("clients", ())) is None


def test_failed_mutation_keeps_cache():
    cache = QueryCache()
    cache.fetch(("clients", ()), lambda: "old")

    def call():
        raise RuntimeError("rejected")

    with pytest.raises(RuntimeError):
        cache.mutate(call, invalidates=["clients"])
    assert cache.peek(("clients", ())) == "old"


def _start_blocked_read(cache, key, value):
    started = threading.Event()
    release = threading.Event()
    results = []

    def slow_loader():
        started.set()
        release.wait(timeout=5)
        return value

    reader = threading.Thread(target=lambda: results.append(cache.fetch(key, slow_loader)))
    reader.start()
    assert started.wait(timeout=5)
    return release, reader, results


def test_read_in_flight_during_mutation_is_not_cached():
    cache = QueryCache()
    release, reader, results = _start_blocked_read(cache, ("clients", ()), "old")

    cache.mutate(lambda: "created", invalidates=["clients"])
    release.set()
    reader.join(timeout=5)

    assert results == ["old"]
    assert cache.peek(("clients", ())) is None
    assert cache.fetch(("clients", ()), lambda: "new") == "new"


def test_read_in_flight_during_clear_is_not_cached():
    cache = QueryCache()
    release, reader, _ = _start_blocked_read(cache, ("dashboard", "overview"), "previous account")

    cache.clear()
    release.set()
    reader.join(timeout=5)

    assert cache.fetch(("dashboard", "overview"), lambda: "current account") == "current account"


def test_unrelated_invalidation_keeps_in_flight_read():
    cache = QueryCache()
    release, reader, _ = _start_blocked_read(cache, ("animals", ()), "herd")

    cache.invalidate("clients")
    release.set()
    reader.join(timeout=5)

    assert cache.peek(("animals", ())) == "herd"
