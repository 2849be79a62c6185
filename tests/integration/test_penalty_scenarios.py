"""End-to-end penalty scenarios over the in-memory stubs.

Each scenario drives PenaltyActionService exactly as the admin console
does and checks the stored member, the action log and the result.
"""

import asyncio

import pytest

from member_discipline.domain.errors import (
    DenialReason,
    InsufficientPermissionError,
    SelfActionError,
)
from member_discipline.domain.models.action import ActionType
from member_discipline.domain.models.member import MemberSnapshot, MemberStatus
from member_discipline.domain.models.principal import Principal
from member_discipline.infrastructure.stubs.member_repository_stub import (
    MemberRepositoryStub,
)
from tests.helpers import StubBundle, build_service, make_member

pytestmark = pytest.mark.integration


class LockstepReadRepository(MemberRepositoryStub):
    """Holds the first two reads until both have arrived.

    Two concurrent actions therefore read the same version, and exactly
    one of their writes hits a stale version.
    """

    def __init__(self) -> None:
        super().__init__()
        self._barrier = asyncio.Barrier(2)
        self._reads = 0

    async def read_member(self, member_id: str) -> MemberSnapshot | None:
        snapshot = await super().read_member(member_id)
        self._reads += 1
        if self._reads <= 2:
            await self._barrier.wait()
        return snapshot


async def _stored(bundle: StubBundle, member_id: str = "member-1"):
    return (await bundle.repository.read_member(member_id)).member


class TestPenaltyScenarios:
    @pytest.mark.asyncio
    async def test_third_notification_generates_automatic_warning(
        self, admin: Principal
    ) -> None:
        bundle = build_service()
        await bundle.repository.save(make_member(notification_count=2))

        result = await bundle.service.perform_action(
            admin, "member-1", ActionType.NOTIFICATION, "Falta na reunião"
        )

        stored = await _stored(bundle)
        assert stored.notification_count == 3
        assert stored.warning_count == 1
        assert stored.status == MemberStatus.ACTIVE
        assert result.final_status == MemberStatus.ACTIVE
        assert [(e.action_type, e.is_automatic) for e in bundle.action_log.entries] == [
            (ActionType.NOTIFICATION, False),
            (ActionType.WARNING, True),
        ]

    @pytest.mark.asyncio
    async def test_third_warning_bans_automatically(self, admin: Principal) -> None:
        bundle = build_service()
        await bundle.repository.save(make_member(warning_count=2))

        result = await bundle.service.perform_action(
            admin, "member-1", ActionType.WARNING, "Atraso recorrente"
        )

        stored = await _stored(bundle)
        assert stored.warning_count == 3
        assert stored.status == MemberStatus.BANNED
        assert result.auto_ban_triggered
        assert [(e.action_type, e.is_automatic) for e in bundle.action_log.entries] == [
            (ActionType.WARNING, False),
            (ActionType.BAN, True),
        ]

    @pytest.mark.asyncio
    async def test_reactivation_clears_ban_and_counters(
        self, admin: Principal
    ) -> None:
        bundle = build_service()
        await bundle.repository.save(
            make_member(
                status=MemberStatus.BANNED,
                warning_count=3,
                notification_count=4,
                ban_reason="Banimento automático",
            )
        )

        await bundle.service.perform_action(
            admin, "member-1", ActionType.REACTIVATE, "Recurso aceito"
        )

        stored = await _stored(bundle)
        assert stored.status == MemberStatus.ACTIVE
        assert (stored.warning_count, stored.notification_count) == (0, 0)
        assert stored.ban_reason is None
        assert len(bundle.action_log.entries) == 1

    @pytest.mark.asyncio
    async def test_power_user_cannot_clear_warnings(
        self, power_user: Principal
    ) -> None:
        bundle = build_service()
        await bundle.repository.save(make_member(warning_count=2))

        with pytest.raises(InsufficientPermissionError) as exc_info:
            await bundle.service.perform_action(
                power_user, "member-1", ActionType.CLEAR_WARNINGS, "Bom comportamento"
            )

        assert exc_info.value.reason == DenialReason.INSUFFICIENT_PERMISSION
        assert (await _stored(bundle)).warning_count == 2
        assert bundle.action_log.entries == []

    @pytest.mark.asyncio
    async def test_admin_cannot_warn_themselves(self) -> None:
        bundle = build_service()
        await bundle.repository.save(make_member("admin-1"))
        admin_self = Principal(member_id="admin-1", is_admin=True)

        with pytest.raises(SelfActionError) as exc_info:
            await bundle.service.perform_action(
                admin_self, "admin-1", ActionType.WARNING, "Autocrítica"
            )

        assert exc_info.value.reason == DenialReason.SELF_ACTION
        assert (await _stored(bundle, "admin-1")).warning_count == 0

    @pytest.mark.asyncio
    async def test_concurrent_notifications_both_land(self) -> None:
        bundle = build_service(repository=LockstepReadRepository())
        await bundle.repository.save(make_member())
        first_admin = Principal(member_id="admin-1", is_admin=True)
        second_admin = Principal(member_id="admin-2", is_admin=True)

        results = await asyncio.gather(
            bundle.service.perform_action(
                first_admin, "member-1", ActionType.NOTIFICATION, "Falta 1"
            ),
            bundle.service.perform_action(
                second_admin, "member-1", ActionType.NOTIFICATION, "Falta 2"
            ),
        )

        assert sorted(r.attempts for r in results) == [1, 2]
        assert (await _stored(bundle)).notification_count == 2
        assert len(bundle.action_log.entries) == 2
