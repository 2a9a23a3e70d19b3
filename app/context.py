"""Per-application context holding the store connection and Slack client."""
from dataclasses import dataclass

from fastapi import Request

from app.config import Settings
from app.database import Database
from app.services.intent_service import IntentService
from app.services.project_service import ProjectService
from app.services.timer_service import TimerService
from app.slack.client import SlackClient


@dataclass
class AppContext:
    """Everything a request needs, built once in the app lifespan."""

    settings: Settings
    database: Database
    slack: SlackClient

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        return cls(
            settings=settings,
            database=Database(settings),
            slack=SlackClient(
                settings.slack_bot_token,
                base_url=settings.slack_api_base_url,
                timeout=settings.slack_timeout_seconds,
            ),
        )

    async def start(self) -> None:
        await self.database.connect()

    async def close(self) -> None:
        await self.slack.close()
        await self.database.disconnect()

    def intent_service(self) -> IntentService:
        db = self.database.get_db()
        return IntentService(
            timer=TimerService(
                db,
                enforce_project_ownership=self.settings.enforce_project_ownership,
            ),
            projects=ProjectService(db),
            slack=self.slack,
        )


def get_context(request: Request) -> AppContext:
    """Dependency to get the application context."""
    return request.app.state.context
