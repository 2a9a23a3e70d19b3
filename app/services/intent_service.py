"""Intent service - runs one user intent and replies in Slack."""
import logging
from typing import Awaitable, Optional

from app.services.errors import StoreQueryFailed, TimerError
from app.services.project_service import ProjectService
from app.services.timer_service import TimerService, parse_duration_minutes, store_errors
from app.slack import blocks
from app.slack.client import SlackClient

logger = logging.getLogger(__name__)

STARTED = "Started tracking your time."
STOPPED = "Stopped tracking your time."
NOTE_ADDED = "Note added to your time entry."
MANUAL_ENTRY_RECORDED = "Manual time entry recorded."
PROJECT_ASSIGNED = "Project assigned to your active time entry."
NO_PROJECTS = "You don't have any projects to assign yet."


class IntentService:
    """
    Boundary between Slack and the time tracking services.

    Every method delivers exactly one reply: the confirmation on success, or
    the error's message on failure. TimerErrors never escape.
    """

    def __init__(self, timer: TimerService, projects: ProjectService, slack: SlackClient):
        self.timer = timer
        self.projects = projects
        self.slack = slack

    async def _run(self, channel: str, operation: Awaitable, success: str) -> str:
        try:
            await operation
        except StoreQueryFailed as e:
            logger.warning("Store call failed while %s: %s", e.action, e.detail)
            text = str(e)
        except TimerError as e:
            logger.info("%s for %s", type(e).__name__, channel)
            text = str(e)
        else:
            text = success

        await self.slack.post_message(channel, text)
        return text

    async def start_tracking(self, user_id: str, channel_id: Optional[str]) -> str:
        """
        Start a timer and reply in the originating channel.

        Args:
            user_id: Slack user ID
            channel_id: Channel the button was pressed in; falls back to a DM

        Returns:
            Text posted to Slack
        """
        return await self._run(
            channel_id or user_id,
            self.timer.start_tracking(user_id, channel_id),
            STARTED,
        )

    async def stop_tracking(self, user_id: str, channel_id: Optional[str]) -> str:
        """
        Stop the running timer and reply in the originating channel.

        Args:
            user_id: Slack user ID
            channel_id: Channel the button was pressed in; falls back to a DM

        Returns:
            Text posted to Slack
        """
        return await self._run(
            channel_id or user_id,
            self.timer.stop_tracking(user_id),
            STOPPED,
        )

    async def add_note(self, user_id: str, note: Optional[str]) -> str:
        """
        Title the user's latest entry and reply by DM.

        Args:
            user_id: Slack user ID
            note: Submitted note; a blank field is stored as an empty string

        Returns:
            Text posted to Slack
        """
        return await self._run(
            user_id,
            self.timer.add_note(user_id, note or ""),
            NOTE_ADDED,
        )

    async def manual_entry(
        self,
        user_id: str,
        duration_text: Optional[str],
        title: Optional[str] = None,
    ) -> str:
        """
        Parse the typed duration, record a finished entry and reply by DM.

        Args:
            user_id: Slack user ID
            duration_text: Minutes as typed into the form
            title: Optional title

        Returns:
            Text posted to Slack
        """

        async def record():
            minutes = parse_duration_minutes(duration_text)
            return await self.timer.create_manual_entry(user_id, minutes, title)

        return await self._run(user_id, record(), MANUAL_ENTRY_RECORDED)

    async def assign_project(self, user_id: str, project_id: Optional[str]) -> str:
        """
        Attach the selected project to the running timer and reply by DM.

        Args:
            user_id: Slack user ID
            project_id: Value of the selected dropdown option

        Returns:
            Text posted to Slack
        """
        return await self._run(
            user_id,
            self.timer.assign_project(user_id, project_id or ""),
            PROJECT_ASSIGNED,
        )

    async def open_note_modal(self, trigger_id: str) -> None:
        """
        Open the note form.

        Args:
            trigger_id: Trigger ID from the button click
        """
        await self.slack.open_view(trigger_id, blocks.note_modal())

    async def open_manual_entry_modal(self, trigger_id: str) -> None:
        """
        Open the manual entry form.

        Args:
            trigger_id: Trigger ID from the button click
        """
        await self.slack.open_view(trigger_id, blocks.manual_entry_modal())

    async def open_assign_project_modal(self, user_id: str, trigger_id: str) -> None:
        """
        Offer the user's projects in a dropdown.

        Slack rejects a select with no options, so a user without projects
        gets a message instead of a modal.
        """
        try:
            with store_errors("fetching projects"):
                projects = await self.projects.list_projects(user_id)
        except StoreQueryFailed as e:
            logger.warning("Store call failed while %s: %s", e.action, e.detail)
            await self.slack.post_message(user_id, str(e))
            return

        if not projects:
            await self.slack.post_message(user_id, NO_PROJECTS)
            return

        await self.slack.open_view(trigger_id, blocks.assign_project_modal(projects))
