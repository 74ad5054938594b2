"""Tests for CLI module."""

import pytest
from unittest.mock import patch, AsyncMock, MagicMock

from keel.application.dtos.rollback_dtos import RollbackReleaseResponse
from keel.domain.entities.release import StatusCode
from keel.domain.errors import (
    LockUnavailableError,
    ModuleRollbackError,
    ReleaseNotFoundError,
)
from keel.infrastructure.config import KeelConfig, RollbackConfig
from keel.presentation.cli.cli import async_main

CREATE_CONTAINER = "keel.composition_root.create_container"
LOAD_CONFIG = "keel.presentation.cli.cli.load_config"


def _make_container(**overrides):
    """Create a mock container with sensible defaults."""
    container = MagicMock()
    container.rollback = MagicMock()
    container.rollback.execute = AsyncMock()
    container.releases = MagicMock()
    for key, value in overrides.items():
        setattr(container, key, value)
    return container


class TestCLIHelp:
    @pytest.mark.asyncio
    async def test_no_command_prints_help(self, capsys):
        with patch("sys.argv", ["keel"]):
            await async_main()
        assert "safe rollbacks" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_help_flag(self):
        with patch("sys.argv", ["keel", "--help"]), \
             pytest.raises(SystemExit, match="0"):
            await async_main()

    @pytest.mark.asyncio
    async def test_rollback_help(self):
        with patch("sys.argv", ["keel", "rollback", "--help"]), \
             pytest.raises(SystemExit, match="0"):
            await async_main()

    @pytest.mark.asyncio
    async def test_history_help(self):
        with patch("sys.argv", ["keel", "history", "--help"]), \
             pytest.raises(SystemExit, match="0"):
            await async_main()


class TestRollbackCommand:
    @pytest.mark.asyncio
    async def test_rollback_success(self, capsys, make_release):
        container = _make_container()
        target = make_release(version=3, description="Rollback to v1")
        container.rollback.execute = AsyncMock(
            return_value=RollbackReleaseResponse(release=target)
        )

        with patch("sys.argv", ["keel", "rollback", "app", "1", "--timeout", "60"]):
            with patch(CREATE_CONTAINER, return_value=container):
                await async_main()

        assert "Rollback was a success" in capsys.readouterr().out
        request = container.rollback.execute.await_args.args[0]
        assert request.name == "app"
        assert request.version == 1
        assert request.timeout_seconds == 60
        assert request.dry_run is False
        container.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_rollback_defaults(self, make_release):
        container = _make_container()
        container.rollback.execute = AsyncMock(
            return_value=RollbackReleaseResponse(release=make_release(version=3))
        )

        with patch("sys.argv", ["keel", "rollback", "app", "--dry-run", "--no-hooks"]):
            with patch(CREATE_CONTAINER, return_value=container):
                await async_main()

        request = container.rollback.execute.await_args.args[0]
        assert request.version == 0
        assert request.dry_run is True
        assert request.disable_hooks is True
        assert request.timeout_seconds == 300

    @pytest.mark.asyncio
    async def test_rollback_module_failure(self, capsys, make_release):
        container = _make_container()
        failed = make_release(version=3, status=StatusCode.FAILED)
        container.rollback.execute = AsyncMock(
            side_effect=ModuleRollbackError(
                'Rollback "app" failed: connection refused',
                RollbackReleaseResponse(release=failed),
                ConnectionError("connection refused"),
            )
        )

        with patch("sys.argv", ["keel", "rollback", "app"]):
            with patch(CREATE_CONTAINER, return_value=container):
                with pytest.raises(SystemExit):
                    await async_main()

        out = capsys.readouterr().out
        assert "connection refused" in out
        assert "v3 as FAILED" in out
        container.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_rollback_locked(self, capsys):
        container = _make_container()
        container.rollback.execute = AsyncMock(side_effect=LockUnavailableError("app"))

        with patch("sys.argv", ["keel", "rollback", "app"]):
            with patch(CREATE_CONTAINER, return_value=container):
                with pytest.raises(SystemExit):
                    await async_main()

        assert "Rollback Failed" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_explicit_timeout_beats_config(self, make_release):
        container = _make_container()
        container.rollback.execute = AsyncMock(
            return_value=RollbackReleaseResponse(release=make_release(version=3))
        )
        config = KeelConfig(rollback=RollbackConfig(timeout_seconds=900))

        with patch("sys.argv", ["keel", "rollback", "app", "--timeout", "1"]), \
             patch(LOAD_CONFIG, return_value=config), \
             patch(CREATE_CONTAINER, return_value=container):
            await async_main()

        request = container.rollback.execute.await_args.args[0]
        assert request.timeout_seconds == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("timeout", ["0", "-5"])
    async def test_rejects_non_positive_timeout(self, capsys, timeout):
        with patch("sys.argv", ["keel", "rollback", "app", "--timeout", timeout]), \
             patch(CREATE_CONTAINER) as create:
            with pytest.raises(SystemExit, match="2"):
                await async_main()

        create.assert_not_called()
        assert "must be at least 1" in capsys.readouterr().err


class TestHistoryCommand:
    @pytest.mark.asyncio
    async def test_history(self, capsys, app_store):
        container = _make_container(releases=app_store)

        with patch("sys.argv", ["keel", "history", "app"]):
            with patch(CREATE_CONTAINER, return_value=container):
                await async_main()

        out = capsys.readouterr().out
        assert "REVISION" in out
        assert "SUPERSEDED" in out
        assert "Upgrade complete" in out

    @pytest.mark.asyncio
    async def test_history_unknown(self, capsys):
        container = _make_container()
        container.releases.history.side_effect = ReleaseNotFoundError("ghost")

        with patch("sys.argv", ["keel", "history", "ghost"]):
            with patch(CREATE_CONTAINER, return_value=container):
                with pytest.raises(SystemExit):
                    await async_main()

        assert "not found" in capsys.readouterr().out
