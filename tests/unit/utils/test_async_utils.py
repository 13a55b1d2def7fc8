import asyncio

import pytest

from utils.async_utils import TaskGroupError, gather_ordered_or_cancel


@pytest.mark.asyncio
async def test_results_follow_input_order_not_completion_order():
    delays = {"a": 0.03, "b": 0.0, "c": 0.01}

    async def worker(item):
        await asyncio.sleep(delays[item])
        return item.upper()

    results = await gather_ordered_or_cancel(["a", "b", "c"], worker)

    assert results == ["A", "B", "C"]


@pytest.mark.asyncio
async def test_empty_input_returns_empty_list():
    async def worker(item):
        raise AssertionError("worker must not be called")

    assert await gather_ordered_or_cancel([], worker) == []


@pytest.mark.asyncio
async def test_all_tasks_run_concurrently():
    started = []
    release = asyncio.Event()

    async def worker(item):
        started.append(item)
        await release.wait()
        return item

    gather_task = asyncio.create_task(gather_ordered_or_cancel(list(range(10)), worker))
    await asyncio.sleep(0.01)

    # No concurrency cap: every task has started before any finishes
    assert sorted(started) == list(range(10))

    release.set()
    assert await gather_task == list(range(10))


@pytest.mark.asyncio
async def test_first_failure_cancels_outstanding_tasks():
    slow_started = asyncio.Event()
    slow_finished = []
    slow_tasks = []

    async def worker(item):
        if item == "slow":
            slow_tasks.append(asyncio.current_task())
            slow_started.set()
            await asyncio.sleep(10)
            slow_finished.append(item)
            return item
        await slow_started.wait()
        raise ConnectionError("rpc down")

    with pytest.raises(TaskGroupError) as exc_info:
        await asyncio.wait_for(gather_ordered_or_cancel(["slow", "bad"], worker), timeout=1)

    assert exc_info.value.item == "bad"
    assert isinstance(exc_info.value.error, ConnectionError)

    # Let the cancellation unwind
    await asyncio.sleep(0)
    assert slow_tasks[0].cancelled()
    assert slow_finished == []


@pytest.mark.asyncio
async def test_failure_reports_earliest_input_among_simultaneous_failures():
    async def worker(item):
        raise ValueError(item)

    with pytest.raises(TaskGroupError) as exc_info:
        await gather_ordered_or_cancel(["x", "y", "z"], worker)

    assert exc_info.value.item == "x"
    assert str(exc_info.value) == "x"


@pytest.mark.asyncio
async def test_worker_raising_before_scheduling_cancels_created_tasks():
    existing_tasks = asyncio.all_tasks()
    calls = []

    async def wait_forever(item):
        await asyncio.sleep(10)

    def worker(item):
        calls.append(item)
        if item == 2:
            raise ValueError("bad index")
        return wait_forever(item)

    with pytest.raises(ValueError, match="bad index"):
        await gather_ordered_or_cancel([0, 1, 2, 3], worker)

    assert calls == [0, 1, 2]
    # Let the cancellations run
    await asyncio.sleep(0)
    assert asyncio.all_tasks() - existing_tasks == set()
