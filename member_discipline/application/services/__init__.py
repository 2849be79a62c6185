"""Application services for member discipline."""

from member_discipline.application.services.action_log_writer import ActionLogWriter
from member_discipline.application.services.counter_store import (
    CounterSnapshot,
    CounterStore,
)
from member_discipline.application.services.penalty_action_service import (
    PenaltyActionService,
)

__all__: list[str] = [
    "ActionLogWriter",
    "CounterSnapshot",
    "CounterStore",
    "PenaltyActionService",
]
