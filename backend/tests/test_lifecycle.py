"""
RecipeShare Backend - Process Lifecycle and Error Mapping Tests
===============================================================

What we test:
    ✅ Startup opens the pool and stores it on app.state
    ✅ Startup survives an unreachable database (requests then get 503)
    ✅ Shutdown closes the pool; a failed close is recorded
    ✅ Typed exceptions map to their HTTP status codes
    ✅ `python -m recipeshare` exit codes
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import AsyncClient, ASGITransport

from recipeshare import __main__ as entry_point
from recipeshare.database import Database, get_database
from recipeshare.exceptions import ConstraintViolationError, DatabaseError
from recipeshare.main import create_app, lifespan


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    # setup_logging() replaces root handlers, including pytest's capture handler
    monkeypatch.setattr("recipeshare.main.setup_logging", lambda level="INFO": None)


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_and_clean_shutdown(self, test_settings):
        app = create_app(test_settings)

        async with lifespan(app):
            database = app.state.database
            assert isinstance(database, Database)
            assert await database.ping() is True

            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/api/check-db-connection")
            assert response.json() == {"data": "connected"}

        assert database.closing is True
        assert app.state.shutdown_failed is False

    @pytest.mark.asyncio
    async def test_startup_tolerates_unreachable_database(self, tmp_path, test_settings):
        settings = test_settings.model_copy(
            update={"database_url_override": f"sqlite+aiosqlite:///{tmp_path}/missing/dir/db.sqlite"}
        )
        app = create_app(settings)

        async with lifespan(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                assert (await client.get("/api/test")).status_code == 200
                response = await client.get("/api/check-db-connection")

            assert response.status_code == 503
            assert response.json()["error"] == "unable to connect"

        assert app.state.shutdown_failed is False

    @pytest.mark.asyncio
    async def test_failed_close_is_recorded(self, test_settings, monkeypatch):
        monkeypatch.setattr(Database, "close", AsyncMock(side_effect=RuntimeError("pool stuck")))
        app = create_app(test_settings)

        async with lifespan(app):
            pass

        assert app.state.shutdown_failed is True


class TestErrorMapping:

    @pytest.mark.asyncio
    async def test_constraint_violation_is_409(self, seeded):
        app = create_app()
        app.dependency_overrides[get_database] = lambda: seeded
        failing = AsyncMock(side_effect=ConstraintViolationError(context={"error_type": "IntegrityError"}))

        with patch("recipeshare.routes.recipes.recipe_service.create_recipe", failing):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.post("/api/recipe", json={"RecipeName": "Dup", "UserID": 999})

        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "constraint_violation"
        # Server-side context is not part of the response
        assert "details" not in body

    @pytest.mark.asyncio
    async def test_database_error_is_500_with_generic_message(self, seeded):
        app = create_app()
        app.dependency_overrides[get_database] = lambda: seeded
        failing = AsyncMock(side_effect=DatabaseError(context={"sql": "SELECT secret"}))

        with patch("recipeshare.routes.users.location_service.fetch_all_locations", failing):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/api/locations")

        assert response.status_code == 500
        body = response.json()
        assert body["code"] == "server_error"
        assert "secret" not in response.text


class TestEntryPoint:

    def _run(self, monkeypatch, started=True, shutdown_failed=False):
        server = MagicMock()
        server.started = started
        monkeypatch.setattr(entry_point.uvicorn, "Server", MagicMock(return_value=server))
        monkeypatch.setattr(entry_point.app.state, "shutdown_failed", shutdown_failed, raising=False)

        with pytest.raises(SystemExit) as exc_info:
            entry_point.main()
        server.run.assert_called_once()
        return exc_info.value.code

    def test_clean_exit(self, monkeypatch):
        assert self._run(monkeypatch) == 0

    def test_failed_shutdown_exits_1(self, monkeypatch):
        assert self._run(monkeypatch, shutdown_failed=True) == 1

    def test_failed_startup_exits_1(self, monkeypatch):
        assert self._run(monkeypatch, started=False) == 1
