import asyncio
from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, Set, TypeVar

from research_hub.core.common.logger import logger
from research_hub.core.operators.base.operator import OperatorStatus

T = TypeVar("T")


@dataclass
class SlotOutcome(Generic[T]):
    """一次槽位调用的结果

    Attributes:
        value: 算子结果，超时、取消或失败时为兜底值
        current: 完成时该请求是否仍是槽位上最新的请求，过期的结果不应被应用
        timed_out: 是否因超时而使用了兜底值
    """
    value: T
    current: bool
    timed_out: bool = False


class TaskSlot:
    """AI任务槽位

    每个槽位有独立的忙碌标记，一个慢请求不会阻塞其他槽位。
    每次调用分配一个递增的请求令牌，新的调用会让旧的在途请求过期；
    被 cancel() 取消的请求同样视为过期。
    """

    def __init__(self, name: str, timeout: Optional[float] = None):
        self.name = name
        self.timeout = timeout
        self.status = OperatorStatus.PENDING
        self._token = 0
        self._task: Optional[asyncio.Future] = None
        self._cancelled: Set[int] = set()

    @property
    def busy(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def token(self) -> int:
        return self._token

    def is_current(self, token: int) -> bool:
        return token == self._token and token not in self._cancelled

    def cancel(self) -> bool:
        """取消当前在途请求，没有在途请求时返回 False"""
        if not self.busy:
            return False
        self._cancelled.add(self._token)
        self._task.cancel()
        logger.info(f"[{self.name}] 取消请求 #{self._token}")
        return True

    async def run(self, coro: Awaitable[T], fallback: T) -> SlotOutcome[T]:
        """在槽位上执行一次请求

        Args:
            coro: 算子的 process 协程
            fallback: 超时、取消或意外失败时使用的兜底值

        Returns:
            SlotOutcome: 结果以及该结果是否仍然有效
        """
        self._token += 1
        token = self._token
        task = asyncio.ensure_future(asyncio.wait_for(coro, timeout=self.timeout))
        self._task = task
        self.status = OperatorStatus.RUNNING

        timed_out = False
        failed = False
        try:
            value = await task
        except asyncio.TimeoutError:
            logger.warning(f"[{self.name}] 请求 #{token} 超时 ({self.timeout}s)，使用兜底结果")
            value, timed_out = fallback, True
        except asyncio.CancelledError:
            if token not in self._cancelled:
                raise
            value = fallback
        except Exception as e:
            logger.exception(f"[{self.name}] 请求 #{token} 执行失败: {e}")
            value, failed = fallback, True

        current = self.is_current(token)
        self._cancelled.discard(token)
        if current:
            self.status = OperatorStatus.FAILED if (timed_out or failed) else OperatorStatus.COMPLETED
        else:
            logger.info(f"[{self.name}] 请求 #{token} 已过期，结果不会被应用")
        return SlotOutcome(value=value, current=current, timed_out=timed_out)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, busy={self.busy}, token={self._token})"
