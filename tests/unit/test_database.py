"""Tests for the Database connection manager."""
import pytest
from unittest.mock import AsyncMock, MagicMock


def make_settings():
    from app.config import Settings

    return Settings(
        _env_file=None,
        mongodb_url="mongodb://localhost:27017",
        slack_bot_token="xoxb-test",
        slack_signing_secret="secret",
    )


class TestDatabase:
    """Tests for Database."""

    def test_get_db_requires_connection(self):
        from app.database import Database

        database = Database(make_settings())

        with pytest.raises(RuntimeError, match="Database not connected"):
            database.get_db()


@pytest.mark.asyncio
class TestEnsureIndexes:
    """Tests for index bootstrap."""

    async def test_active_entry_index_is_partial_unique(self):
        from app.database import ACTIVE_ENTRY_INDEX, Database

        mock_entries = AsyncMock()
        mock_projects = AsyncMock()
        mock_db = MagicMock()
        mock_db.__getitem__.side_effect = lambda key: {
            "time_entries": mock_entries,
            "projects": mock_projects,
        }[key]

        database = Database(make_settings())
        database.db = mock_db
        await database.ensure_indexes()

        first_call = mock_entries.create_index.call_args_list[0]
        assert first_call.args[0] == [("user_id", 1)]
        assert first_call.kwargs["name"] == ACTIVE_ENTRY_INDEX
        assert first_call.kwargs["unique"] is True
        assert first_call.kwargs["partialFilterExpression"] == {"is_active": True}

        recent_call = mock_entries.create_index.call_args_list[1]
        assert recent_call.args[0] == [("user_id", 1), ("start_time", -1)]
        mock_projects.create_index.assert_awaited_once()

    async def test_disconnect_without_connect(self):
        from app.database import Database

        database = Database(make_settings())
        await database.disconnect()

        assert database.client is None
