import asyncio

from algorithms import Completed, EventKind, ShortestPathRun, run


def test_run_iterates_events(demo):
    r = run(demo, "A", "E")
    assert isinstance(r, ShortestPathRun)
    first = next(r)
    assert first.kind is EventKind.INITIALIZED
    assert r.emitted == 1
    assert not r.finished


def test_result_drains_remaining_events(demo):
    r = run(demo, "A", "E")
    next(r)
    result = r.result()

    assert r.finished
    assert r.emitted == 39
    assert result.path == ("A", "B", "F", "H", "E")
    # exhausted runs stay exhausted
    assert list(r) == []
    assert r.result() is result


def test_events_returns_only_what_is_left(demo):
    r = run(demo, "A", "E")
    for _ in range(10):
        next(r)
    assert len(r.events()) == 29


def test_stopping_early_leaves_no_result(demo):
    r = run(demo, "A", "E")
    for event in r:
        if event.kind is EventKind.VISITING:
            break
    assert not r.finished
    assert "events" in repr(r)


def test_repr_when_finished(demo):
    r = run(demo, "A", "E")
    r.result()
    assert repr(r) == "ShortestPathRun('A' → 'E', finished)"


def test_async_iteration_matches_sync(demo):
    async def collect():
        return [e async for e in run(demo, "A", "E")]

    assert asyncio.run(collect()) == run(demo, "A", "E").events()


def test_async_wait(demo):
    result = asyncio.run(run(demo, "A", "E").wait())
    assert result.total_distance == 13


def test_async_runs_interleave(demo, disconnected):
    order = []

    async def consume(tag, r):
        async for _ in r:
            order.append(tag)

    async def main():
        await asyncio.gather(
            consume("demo", run(demo, "A", "E")),
            consume("small", run(disconnected, "A", "C")),
        )

    asyncio.run(main())
    # both runs make progress before either finishes
    first_small = order.index("small")
    assert first_small < len(order) - order[::-1].index("demo") - 1
    assert order.count("small") == 11


def test_async_consumer_can_stop_early(demo):
    async def take(n):
        r = run(demo, "A", "E")
        seen = []
        async for e in r:
            seen.append(e)
            if len(seen) == n:
                break
        return r, seen

    r, seen = asyncio.run(take(3))
    assert len(seen) == 3
    assert not r.finished
    assert not isinstance(seen[-1], Completed)
