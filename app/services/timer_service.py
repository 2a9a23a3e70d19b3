"""Timer service - business logic for time tracking."""
import math
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.models.time_entry import TimeEntry
from app.services.errors import (
    AlreadyActive,
    InvalidDuration,
    NoActiveEntry,
    NoEntryFound,
    ProjectNotFound,
    StoreQueryFailed,
)
from app.services.project_service import ProjectService

# Longest accepted manual entry: one century
MAX_DURATION_MINUTES = 100 * 365 * 24 * 60


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes read from the store as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@contextmanager
def store_errors(action: str):
    """Re-raise driver errors as StoreQueryFailed for the given action."""
    try:
        yield
    except PyMongoError as e:
        raise StoreQueryFailed(action, str(e)) from e


def parse_duration_minutes(text: Optional[str]) -> float:
    """
    Parse a user-typed duration in minutes.

    Args:
        text: Raw text from the manual entry form

    Returns:
        Duration in minutes

    Raises:
        InvalidDuration: If text is missing, not a number, or out of range
    """
    if text is None:
        raise InvalidDuration()
    try:
        minutes = float(text.strip())
    except ValueError:
        raise InvalidDuration() from None
    _validate_duration(minutes)
    return minutes


def _validate_duration(duration_minutes) -> None:
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, (int, float)):
        raise InvalidDuration()
    if not math.isfinite(duration_minutes) or duration_minutes <= 0:
        raise InvalidDuration()
    if duration_minutes > MAX_DURATION_MINUTES:
        raise InvalidDuration()


class TimerService:
    """Service for handling time tracking operations."""

    def __init__(
        self,
        db,
        now: Optional[Callable[[], datetime]] = None,
        enforce_project_ownership: bool = False,
    ):
        """Initialize service with database connection."""
        self.db = db
        self.time_entries = db["time_entries"]
        self.now = now or utcnow
        self.enforce_project_ownership = enforce_project_ownership

    def _doc_to_entry(self, doc: dict) -> TimeEntry:
        """
        Convert database document to TimeEntry model.
        """
        return TimeEntry(
            _id=str(doc["_id"]),
            user_id=doc["user_id"],
            channel_id=doc.get("channel_id"),
            start_time=doc["start_time"],
            end_time=doc.get("end_time"),
            duration=doc.get("duration"),
            is_active=doc["is_active"],
            title=doc.get("title"),
            project_id=doc.get("project_id"),
        )

    def _calculate_duration(self, start_time: datetime, end_time: datetime) -> int:
        """
        Calculate duration in whole seconds between start and end time.

        Args:
            start_time: Start time
            end_time: End time

        Returns:
            Duration in seconds, floored, never negative
        """
        delta = _as_utc(end_time) - _as_utc(start_time)
        return max(0, math.floor(delta.total_seconds()))

    async def _find_active(self, user_id: str, action: str) -> Optional[dict]:
        with store_errors(action):
            return await self.time_entries.find_one({
                "user_id": user_id,
                "is_active": True,
            })

    async def start_tracking(
        self,
        user_id: str,
        channel_id: Optional[str] = None,
    ) -> TimeEntry:
        """
        Start a new timer.

        Args:
            user_id: User ID
            channel_id: Channel the request came from, if known

        Returns:
            Created time entry

        Raises:
            AlreadyActive: If the user already has a running timer
            StoreQueryFailed: If the store rejects the query or insert
        """
        if await self._find_active(user_id, "checking active timer"):
            raise AlreadyActive()

        entry_doc = {
            "user_id": user_id,
            "start_time": self.now(),
            "is_active": True,
        }
        if channel_id:
            entry_doc["channel_id"] = channel_id

        try:
            result = await self.time_entries.insert_one(entry_doc)
        except DuplicateKeyError as e:
            # Unique index on active entries: another start won the race
            raise AlreadyActive() from e
        except PyMongoError as e:
            raise StoreQueryFailed("starting timer", str(e)) from e
        entry_doc["_id"] = result.inserted_id

        return self._doc_to_entry(entry_doc)

    async def stop_tracking(self, user_id: str) -> TimeEntry:
        """
        Stop the currently running timer.

        Args:
            user_id: User ID

        Returns:
            Updated time entry with end_time and duration

        Raises:
            NoActiveEntry: If no timer is running
            StoreQueryFailed: If the store rejects the query or update
        """
        active = await self._find_active(user_id, "fetching active timer")
        if not active:
            raise NoActiveEntry()

        start_time = _as_utc(active["start_time"])
        end_time = max(self.now(), start_time)

        update_doc = {
            "end_time": end_time,
            "duration": self._calculate_duration(start_time, end_time),
            "is_active": False,
        }

        with store_errors("stopping timer"):
            result = await self.time_entries.update_one(
                {"_id": active["_id"], "is_active": True},
                {"$set": update_doc},
            )

        if result.matched_count == 0:
            raise NoActiveEntry()

        active.update(update_doc)
        return self._doc_to_entry(active)

    async def add_note(self, user_id: str, note: str) -> TimeEntry:
        """
        Set the title of the user's most recent entry, running or not.

        Args:
            user_id: User ID
            note: Note text, stored as-is

        Returns:
            Updated time entry

        Raises:
            NoEntryFound: If the user has no entries
            StoreQueryFailed: If the store rejects the query or update
        """
        with store_errors("finding latest time entry"):
            latest = await self.time_entries.find_one(
                {"user_id": user_id},
                sort=[("start_time", DESCENDING)],
            )

        if not latest:
            raise NoEntryFound()

        with store_errors("adding note"):
            await self.time_entries.update_one(
                {"_id": latest["_id"]},
                {"$set": {"title": note}},
            )

        latest["title"] = note
        return self._doc_to_entry(latest)

    async def create_manual_entry(
        self,
        user_id: str,
        duration_minutes: float,
        title: Optional[str] = None,
    ) -> TimeEntry:
        """
        Record a finished entry that ends now.

        Independent of any running timer.

        Args:
            user_id: User ID
            duration_minutes: Length of the entry in minutes
            title: Optional title

        Returns:
            Created time entry

        Raises:
            InvalidDuration: If duration is not finite, not positive, or over MAX_DURATION_MINUTES
            StoreQueryFailed: If the store rejects the insert
        """
        _validate_duration(duration_minutes)

        end_time = self.now()
        try:
            start_time = end_time - timedelta(minutes=duration_minutes)
        except OverflowError:
            raise InvalidDuration() from None

        entry_doc = {
            "user_id": user_id,
            "start_time": start_time,
            "end_time": end_time,
            "duration": math.floor(duration_minutes * 60),
            "title": title or None,
            "is_active": False,
        }

        with store_errors("recording manual entry"):
            result = await self.time_entries.insert_one(entry_doc)
        entry_doc["_id"] = result.inserted_id

        return self._doc_to_entry(entry_doc)

    async def assign_project(self, user_id: str, project_id: str) -> TimeEntry:
        """
        Attach a project to the running timer.

        The project id is stored verbatim. Ownership is only checked when
        enforce_project_ownership is set.

        Args:
            user_id: User ID
            project_id: Selected project ID

        Returns:
            Updated time entry

        Raises:
            NoActiveEntry: If no timer is running
            ProjectNotFound: If ownership is enforced and the project isn't the user's
            StoreQueryFailed: If the store rejects a query or the update
        """
        active = await self._find_active(user_id, "finding active entry")
        if not active:
            raise NoActiveEntry("No active time entry to assign a project to.")

        if self.enforce_project_ownership:
            with store_errors("finding project"):
                project = await ProjectService(self.db).get_project(user_id, project_id)
            if project is None:
                raise ProjectNotFound()

        with store_errors("assigning project"):
            await self.time_entries.update_one(
                {"_id": active["_id"]},
                {"$set": {"project_id": project_id}},
            )

        active["project_id"] = project_id
        return self._doc_to_entry(active)
