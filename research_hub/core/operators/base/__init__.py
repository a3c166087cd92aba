from research_hub.core.operators.base.operator import Operator, OperatorStatus
from research_hub.core.operators.base.slot import SlotOutcome, TaskSlot

__all__ = ["Operator", "OperatorStatus", "SlotOutcome", "TaskSlot"]
