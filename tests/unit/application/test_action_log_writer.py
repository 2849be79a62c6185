"""Unit tests for ActionLogWriter."""

from itertools import count
from unittest.mock import AsyncMock
from uuid import UUID

import pytest

from member_discipline.application.services.action_log_writer import ActionLogWriter
from member_discipline.domain.errors.persistence import ActionLogWriteError
from member_discipline.domain.models.action import (
    AUTO_BAN_REASON,
    AUTO_WARNING_REASON,
    SYSTEM_PRINCIPAL_ID,
    ActionType,
    DerivedEvent,
    DerivedEventType,
)
from tests.helpers import FIXED_NOW

CASCADE = (
    DerivedEvent(DerivedEventType.AUTO_WARNING, AUTO_WARNING_REASON),
    DerivedEvent(DerivedEventType.AUTO_BAN, AUTO_BAN_REASON),
)


@pytest.fixture
def mock_action_log() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def writer(mock_action_log: AsyncMock) -> ActionLogWriter:
    ids = count(1)
    return ActionLogWriter(mock_action_log, id_factory=lambda: UUID(int=next(ids)))


class TestBuildEntries:
    def test_primary_entry_only(self, writer: ActionLogWriter) -> None:
        entries = writer.build_entries(
            target_member_id="m1",
            principal_id="admin-1",
            action_type=ActionType.WARNING,
            justification="Atraso",
            derived_events=(),
            now=FIXED_NOW,
        )

        assert len(entries) == 1
        entry = entries[0]
        assert entry.action_type == ActionType.WARNING
        assert not entry.is_automatic
        assert entry.acting_principal_id == "admin-1"
        assert entry.triggered_by is None
        assert entry.timestamp == FIXED_NOW

    def test_cascade_entries_follow_primary(self, writer: ActionLogWriter) -> None:
        entries = writer.build_entries(
            target_member_id="m1",
            principal_id="admin-1",
            action_type=ActionType.NOTIFICATION,
            justification="Falta",
            derived_events=CASCADE,
            now=FIXED_NOW,
        )

        assert [e.action_type for e in entries] == [
            ActionType.NOTIFICATION,
            ActionType.WARNING,
            ActionType.BAN,
        ]
        assert [e.is_automatic for e in entries] == [False, True, True]
        assert entries[1].justification == AUTO_WARNING_REASON
        assert entries[2].justification == AUTO_BAN_REASON
        assert all(e.acting_principal_id == SYSTEM_PRINCIPAL_ID for e in entries[1:])
        assert all(e.triggered_by == "admin-1" for e in entries[1:])
        assert len({e.entry_id for e in entries}) == 3


class TestWriteAll:
    @pytest.mark.asyncio
    async def test_appends_in_order(
        self, writer: ActionLogWriter, mock_action_log: AsyncMock
    ) -> None:
        entries = writer.build_entries(
            "m1", "admin-1", ActionType.NOTIFICATION, "Falta", CASCADE, FIXED_NOW
        )

        assert await writer.write_all(entries) == 3
        appended = [call.args[0] for call in mock_action_log.append.await_args_list]
        assert appended == list(entries)

    @pytest.mark.asyncio
    async def test_failure_reports_written_and_missing(
        self, writer: ActionLogWriter, mock_action_log: AsyncMock
    ) -> None:
        entries = writer.build_entries(
            "m1", "admin-1", ActionType.NOTIFICATION, "Falta", CASCADE, FIXED_NOW
        )
        mock_action_log.append.side_effect = [None, TimeoutError(), None]

        with pytest.raises(ActionLogWriteError) as exc_info:
            await writer.write_all(entries)

        assert exc_info.value.written_entries == entries[:1]
        assert exc_info.value.missing_entries == entries[1:]
        assert mock_action_log.append.await_count == 2


class TestHistory:
    @pytest.mark.asyncio
    async def test_delegates_to_log(
        self, writer: ActionLogWriter, mock_action_log: AsyncMock
    ) -> None:
        mock_action_log.list_for_member.return_value = []

        assert await writer.history("m1") == []
        mock_action_log.list_for_member.assert_awaited_once_with("m1")
