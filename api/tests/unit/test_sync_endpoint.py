"""
Tests unitarios del trigger HTTP de sincronización.

Verifica el contrato HTTP:
- 200 con summary, details y errors cuando la corrida termina.
- 500 con success=false cuando la corrida falla de forma fatal.
- 409 cuando ya hay otra corrida en curso.
- 401 si SYNC_API_KEY está configurada y la llave no coincide.
"""
from __future__ import annotations

from unittest.mock import Mock

import pytest
from httpx import ASGITransport, AsyncClient

from lakesync.api.v1.dependencies.use_case_deps import get_requester_sync_use_cases
from lakesync.application.use_cases.sync_use_cases import RequesterSyncUseCases
from lakesync.core.config import settings
from lakesync.domain.entities.sync_result import SyncResult
from lakesync.shared.exceptions.domain import SyncAbortedError, SyncAlreadyRunningError


SYNC_URL = "/api/v1/sync-freshservice-requesters"


@pytest.fixture
def mock_use_cases() -> Mock:
    uc = Mock(spec=RequesterSyncUseCases)
    uc.execute_sync.return_value = SyncResult(
        total_employees=120,
        total_requesters=150,
        matched=100,
        updated=7,
        skipped=91,
        failed=2,
        errors=("No se pudo actualizar requester a@co.com (ID: 1)", "No se pudo actualizar requester b@co.com (ID: 2)"),
    )
    return uc


@pytest.fixture
def app_with_mock(mock_use_cases: Mock, monkeypatch):
    """Crea la app FastAPI con el use case mockeado via dependency_overrides."""
    from main import create_application
    monkeypatch.setattr(settings, "SYNC_API_KEY", None)
    app = create_application()
    app.dependency_overrides[get_requester_sync_use_cases] = lambda: mock_use_cases
    yield app
    app.dependency_overrides.clear()


async def _post(app, **kwargs):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.post(SYNC_URL, **kwargs)


@pytest.mark.asyncio
async def test_sync_endpoint_returns_summary(app_with_mock, mock_use_cases: Mock) -> None:
    """POST retorna 200 con el resumen y los errores por requester."""
    response = await _post(app_with_mock)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["timestamp"]
    assert data["summary"].startswith("Procesados: 120 empleados, 150 requesters")
    assert data["details"] == {
        "totalEmployees": 120,
        "totalRequesters": 150,
        "matched": 100,
        "updated": 7,
        "skipped": 91,
        "failed": 2,
    }
    assert len(data["errors"]) == 2
    mock_use_cases.execute_sync.assert_called_once_with()


@pytest.mark.asyncio
async def test_sync_endpoint_fatal_error_returns_500(app_with_mock, mock_use_cases: Mock) -> None:
    mock_use_cases.execute_sync.side_effect = SyncAbortedError(
        "Sync abortado: No se pudo obtener empleados activos del Lake"
    )

    response = await _post(app_with_mock)

    assert response.status_code == 500
    data = response.json()
    assert data["success"] is False
    assert data["timestamp"]
    assert "Lake" in data["error"]
    assert "details" not in data


@pytest.mark.asyncio
async def test_sync_endpoint_conflict_when_running(app_with_mock, mock_use_cases: Mock) -> None:
    mock_use_cases.execute_sync.side_effect = SyncAlreadyRunningError()

    response = await _post(app_with_mock)

    assert response.status_code == 409
    assert response.json()["success"] is False


class TestSyncKey:

    @pytest.mark.asyncio
    async def test_missing_key_is_rejected(self, app_with_mock, mock_use_cases: Mock, monkeypatch) -> None:
        monkeypatch.setattr(settings, "SYNC_API_KEY", "llave-secreta")

        response = await _post(app_with_mock)

        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"
        mock_use_cases.execute_sync.assert_not_called()

    @pytest.mark.asyncio
    async def test_wrong_key_is_rejected(self, app_with_mock, monkeypatch) -> None:
        monkeypatch.setattr(settings, "SYNC_API_KEY", "llave-secreta")

        response = await _post(app_with_mock, headers={"x-functions-key": "otra"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_header_key_is_accepted(self, app_with_mock, monkeypatch) -> None:
        monkeypatch.setattr(settings, "SYNC_API_KEY", "llave-secreta")

        response = await _post(app_with_mock, headers={"x-functions-key": "llave-secreta"})

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_query_code_is_accepted(self, app_with_mock, monkeypatch) -> None:
        monkeypatch.setattr(settings, "SYNC_API_KEY", "llave-secreta")

        response = await _post(app_with_mock, params={"code": "llave-secreta"})

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_non_ascii_query_code_is_rejected(self, app_with_mock, mock_use_cases: Mock, monkeypatch) -> None:
        """Una llave con caracteres no ASCII es 401, no un error interno."""
        monkeypatch.setattr(settings, "SYNC_API_KEY", "llave-secreta")

        response = await _post(app_with_mock, params={"code": "ñ"})

        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"
        mock_use_cases.execute_sync.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_ascii_header_key_is_rejected(self, app_with_mock, monkeypatch) -> None:
        monkeypatch.setattr(settings, "SYNC_API_KEY", "llave-secreta")

        response = await _post(app_with_mock, headers={"x-functions-key": "llave-señal".encode("latin-1")})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_non_ascii_configured_key_is_accepted(self, app_with_mock, monkeypatch) -> None:
        monkeypatch.setattr(settings, "SYNC_API_KEY", "contraseña")

        response = await _post(app_with_mock, params={"code": "contraseña"})

        assert response.status_code == 200


@pytest.mark.asyncio
async def test_health_reports_scheduler_state(app_with_mock) -> None:
    transport = ASGITransport(app=app_with_mock)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["scheduler_running"] is False
    assert data["next_sync_at"] is None
    assert data["sync_in_progress"] is False


@pytest.mark.asyncio
async def test_unhandled_error_returns_failure_envelope(app_with_mock) -> None:
    """Un error fuera del endpoint (p.ej. al armar dependencias) es 500 con success=false."""

    def _broken_use_cases():
        raise RuntimeError("settings corruptos")

    app_with_mock.dependency_overrides[get_requester_sync_use_cases] = _broken_use_cases

    response = await _post(app_with_mock)

    assert response.status_code == 500
    data = response.json()
    assert data["success"] is False
    assert data["timestamp"]
    assert data["error"] == "Error interno del servidor"
    assert "settings corruptos" not in response.text
