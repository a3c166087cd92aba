from enum import Enum
from typing import Any


class OperatorStatus(Enum):
    """槽位上最近一次请求的状态"""
    PENDING = "PENDING"    # 从未执行
    RUNNING = "RUNNING"    # 执行中
    COMPLETED = "COMPLETED"  # 执行完成
    FAILED = "FAILED"      # 执行失败或超时


class Operator:
    """AI任务算子接口

    每个AI任务都是一个算子，继承这个基类并实现process方法。
    算子本身不持有会话状态，输入通过参数传入，结果通过返回值传出，
    由会话决定如何把结果应用到实体集合上。
    """

    async def process(self, input_data: Any) -> Any:
        """执行一次AI任务

        与外部AI交互的算子必须在这里捕获调用和解析错误，
        并返回该算子约定的兜底结果，而不是向调用方抛出异常。

        Raises:
            NotImplementedError: 子类必须实现这个方法
        """
        raise NotImplementedError("Operator must implement process method")

    def __str__(self) -> str:
        return f"{self.__class__.__name__}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
