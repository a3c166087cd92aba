import asyncio

import pytest

from research_hub.core.operators.base import OperatorStatus, TaskSlot


async def _value_after(future: asyncio.Future):
    return await future


@pytest.mark.asyncio
async def test_slot_returns_value_and_clears_busy():
    """测试正常完成时返回结果且槽位恢复空闲"""
    slot = TaskSlot("test")
    assert slot.busy is False

    async def work():
        assert slot.busy is True
        return "done"

    outcome = await slot.run(work(), fallback="fallback")
    assert outcome.value == "done"
    assert outcome.current is True
    assert outcome.timed_out is False
    assert slot.busy is False
    assert slot.status == OperatorStatus.COMPLETED


@pytest.mark.asyncio
async def test_slot_timeout_uses_fallback():
    """测试超时后使用兜底结果并恢复空闲"""
    slot = TaskSlot("test", timeout=0.01)

    outcome = await slot.run(asyncio.sleep(10, result="late"), fallback="fallback")
    assert outcome.value == "fallback"
    assert outcome.timed_out is True
    assert outcome.current is True
    assert slot.busy is False
    assert slot.status == OperatorStatus.FAILED


@pytest.mark.asyncio
async def test_slot_unexpected_error_uses_fallback():
    """测试算子意外抛出异常时使用兜底结果"""
    slot = TaskSlot("test")

    async def broken():
        raise RuntimeError("boom")

    outcome = await slot.run(broken(), fallback=[])
    assert outcome.value == []
    assert slot.status == OperatorStatus.FAILED


@pytest.mark.asyncio
async def test_superseded_request_is_stale():
    """测试被新请求取代的旧请求结果过期"""
    slot = TaskSlot("test")
    loop = asyncio.get_running_loop()
    first_future, second_future = loop.create_future(), loop.create_future()

    first = asyncio.ensure_future(slot.run(_value_after(first_future), fallback=None))
    await asyncio.sleep(0)
    second = asyncio.ensure_future(slot.run(_value_after(second_future), fallback=None))
    await asyncio.sleep(0)

    second_future.set_result("second")
    second_outcome = await second
    first_future.set_result("first")
    first_outcome = await first

    assert second_outcome.current is True
    assert first_outcome.current is False
    assert first_outcome.value == "first"
    assert slot.busy is False


@pytest.mark.asyncio
async def test_stale_completion_does_not_clear_busy():
    """测试旧请求完成不会清除新请求的忙碌标记"""
    slot = TaskSlot("test")
    loop = asyncio.get_running_loop()
    first_future, second_future = loop.create_future(), loop.create_future()

    first = asyncio.ensure_future(slot.run(_value_after(first_future), fallback=None))
    await asyncio.sleep(0)
    second = asyncio.ensure_future(slot.run(_value_after(second_future), fallback=None))
    await asyncio.sleep(0)

    first_future.set_result("first")
    await first
    assert slot.busy is True

    second_future.set_result("second")
    await second
    assert slot.busy is False


@pytest.mark.asyncio
async def test_cancel_in_flight_request():
    """测试取消在途请求"""
    slot = TaskSlot("test")
    assert slot.cancel() is False

    running = asyncio.ensure_future(slot.run(asyncio.sleep(10, result="late"), fallback="cancelled"))
    await asyncio.sleep(0)
    assert slot.busy is True

    assert slot.cancel() is True
    outcome = await running
    assert outcome.value == "cancelled"
    assert outcome.current is False
    assert slot.busy is False
