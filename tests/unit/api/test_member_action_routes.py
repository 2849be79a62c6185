"""Unit tests for member action routes.

The router runs over a PenaltyActionService wired to in-memory stubs
through FastAPI dependency overrides.
"""

import asyncio

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from member_discipline.api.dependencies.member_actions import (
    get_config,
    get_penalty_action_service,
)
from member_discipline.api.middleware.logging_middleware import (
    CORRELATION_HEADER,
    LoggingMiddleware,
)
from member_discipline.api.routes.member_actions import router
from member_discipline.config.discipline_config import DisciplineConfig
from member_discipline.domain.models.action import AUTO_BAN_REASON
from member_discipline.domain.models.member import MemberStatus
from tests.helpers import StubBundle, build_service, make_member

ADMIN_HEADERS = {"X-Principal-Id": "admin-1", "X-Principal-Admin": "true"}
PLAIN_HEADERS = {"X-Principal-Id": "member-9", "X-Principal-Role": "Analista"}
CONFIG = DisciplineConfig(retry_after_seconds=7)


@pytest.fixture
def bundle() -> StubBundle:
    bundle = build_service(config=CONFIG)
    asyncio.run(bundle.repository.save(make_member("member-1")))
    return bundle


@pytest.fixture
def client(bundle: StubBundle) -> TestClient:
    app = FastAPI()
    app.add_middleware(LoggingMiddleware)
    app.include_router(router)
    app.dependency_overrides[get_penalty_action_service] = lambda: bundle.service
    app.dependency_overrides[get_config] = lambda: CONFIG
    return TestClient(app)


def _post(client: TestClient, body: dict, headers: dict = ADMIN_HEADERS, member_id="member-1"):
    return client.post(f"/v1/members/{member_id}/actions", json=body, headers=headers)


class TestRouter:
    def test_prefix_and_tags(self) -> None:
        assert router.prefix == "/v1/members"
        assert "member-actions" in router.tags


class TestPerformAction:
    def test_notification(self, client: TestClient) -> None:
        response = _post(
            client, {"action_type": "notification", "justification": "Falta"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["notification_count"] == 1
        assert data["final_status"] == "Ativo"
        assert data["triggered_automatic_actions"] == []
        assert data["log_entries"][0]["justification"] == "Falta"
        assert data["log_entries"][0]["timestamp"].endswith("Z")

    def test_cascade_reports_automatic_actions(
        self, client: TestClient, bundle: StubBundle
    ) -> None:
        asyncio.run(
            bundle.repository.save(
                make_member("member-2", warning_count=2, notification_count=2)
            )
        )

        response = _post(
            client,
            {"action_type": "notification", "justification": "Falta"},
            member_id="member-2",
        )

        data = response.json()
        assert data["final_status"] == "Banido"
        assert [a["action_type"] for a in data["triggered_automatic_actions"]] == [
            "warning",
            "ban",
        ]
        assert data["triggered_automatic_actions"][1]["reason"] == AUTO_BAN_REASON

    def test_clear_action_without_justification(self, client: TestClient) -> None:
        headers = {"X-Principal-Id": "president-1", "X-Principal-Role": "Presidente"}

        response = _post(client, {"action_type": "clearAll"}, headers=headers)

        assert response.status_code == 200

    def test_missing_principal_is_unauthorized(self, client: TestClient) -> None:
        response = _post(
            client, {"action_type": "warning", "justification": "Atraso"}, headers={}
        )

        assert response.status_code == 401

    def test_self_action_forbidden(self, client: TestClient) -> None:
        headers = {"X-Principal-Id": "member-1", "X-Principal-Admin": "true"}

        response = _post(
            client, {"action_type": "ban", "justification": "eu mesmo"}, headers=headers
        )

        assert response.status_code == 403
        detail = response.json()["detail"]
        assert detail["type"] == "urn:member-discipline:permission:SelfAction"
        assert detail["retryable"] is False

    @pytest.mark.parametrize(
        "body",
        [
            {"action_type": "warning", "justification": "x"},
            {"action_type": "reactivate", "justification": "me desbanindo"},
        ],
    )
    def test_self_targeted_request_is_403(self, client: TestClient, body: dict) -> None:
        headers = {"X-Principal-Id": "member-1", "X-Principal-Power-User": "true"}

        response = _post(client, body, headers=headers)

        assert response.status_code == 403
        assert response.json()["detail"]["type"].endswith("SelfAction")

    def test_insufficient_permission(self, client: TestClient) -> None:
        response = _post(
            client,
            {"action_type": "warning", "justification": "Atraso"},
            headers=PLAIN_HEADERS,
        )

        assert response.status_code == 403
        assert response.json()["detail"]["type"].endswith("InsufficientPermission")

    def test_short_justification(self, client: TestClient) -> None:
        response = _post(client, {"action_type": "warning", "justification": "no"})

        assert response.status_code == 422
        assert response.json()["detail"]["type"].endswith("invalid-justification")

    def test_unknown_action_type(self, client: TestClient) -> None:
        response = _post(client, {"action_type": "suspend", "justification": "x y z"})

        assert response.status_code == 422

    def test_delete_through_actions_is_bad_request(self, client: TestClient) -> None:
        response = _post(client, {"action_type": "delete", "justification": "limpeza"})

        assert response.status_code == 400

    def test_unknown_member(self, client: TestClient) -> None:
        response = _post(
            client,
            {"action_type": "warning", "justification": "Atraso"},
            member_id="ghost",
        )

        assert response.status_code == 404
        assert response.json()["detail"]["member_id"] == "ghost"

    def test_invalid_transition(self, client: TestClient) -> None:
        response = _post(client, {"action_type": "reactivate", "justification": "ok!"})

        assert response.status_code == 409
        assert response.json()["detail"]["type"].endswith("invalid-transition")

    def test_store_unavailable_sets_retry_after(
        self, client: TestClient, bundle: StubBundle
    ) -> None:
        bundle.repository.fail_reads = TimeoutError()

        response = _post(client, {"action_type": "warning", "justification": "Atraso"})

        assert response.status_code == 503
        assert response.headers["Retry-After"] == "7"
        assert response.json()["detail"]["retry_after"] == 7

    def test_partial_failure(self, client: TestClient, bundle: StubBundle) -> None:
        bundle.repository.fail_writes = ConnectionError("reset")

        response = _post(client, {"action_type": "warning", "justification": "Atraso"})

        assert response.status_code == 502
        detail = response.json()["detail"]
        assert detail["stage"] == "member_write"
        assert detail["retryable"] is True
        assert "counters_persisted" not in detail


class TestHistory:
    def test_newest_first(self, client: TestClient) -> None:
        _post(client, {"action_type": "notification", "justification": "primeira"})
        _post(client, {"action_type": "warning", "justification": "segunda"})

        response = client.get("/v1/members/member-1/actions", headers=ADMIN_HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [e["justification"] for e in data["entries"]] == ["segunda", "primeira"]

    def test_other_members_history_forbidden(self, client: TestClient) -> None:
        response = client.get("/v1/members/member-1/actions", headers=PLAIN_HEADERS)

        assert response.status_code == 403


class TestDeleteMember:
    def test_admin_deletes(self, client: TestClient, bundle: StubBundle) -> None:
        response = client.delete("/v1/members/member-1", headers=ADMIN_HEADERS)

        assert response.status_code == 200
        assert response.json()["deleted_by"] == "admin-1"
        assert asyncio.run(bundle.repository.read_member("member-1")) is None
        assert bundle.repository.get_archived("member-1").member.status == (
            MemberStatus.ACTIVE
        )

    def test_non_admin_forbidden(self, client: TestClient) -> None:
        headers = {"X-Principal-Id": "director-1", "X-Principal-Power-User": "true"}

        response = client.delete("/v1/members/member-1", headers=headers)

        assert response.status_code == 403


class TestCorrelation:
    def test_correlation_id_echoed(self, client: TestClient) -> None:
        response = client.get(
            "/v1/members/member-1/actions",
            headers={**ADMIN_HEADERS, CORRELATION_HEADER: "corr-42"},
        )

        assert response.headers[CORRELATION_HEADER] == "corr-42"

    def test_correlation_id_generated(self, client: TestClient) -> None:
        response = client.get("/v1/members/member-1/actions", headers=ADMIN_HEADERS)

        assert response.headers[CORRELATION_HEADER]
