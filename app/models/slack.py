"""Slack request payload models."""
from typing import Any, Optional

from pydantic import BaseModel, Field


class SlashCommand(BaseModel):
    """Form fields Slack posts for a slash command."""

    command: str
    text: str = ""
    user_id: str
    channel_id: Optional[str] = None
    trigger_id: Optional[str] = None
    response_url: Optional[str] = None

    model_config = {"extra": "ignore"}


class SlackUser(BaseModel):
    """User who triggered an interaction."""

    id: str

    model_config = {"extra": "ignore"}


class SlackChannel(BaseModel):
    """Channel an interaction came from."""

    id: str

    model_config = {"extra": "ignore"}


class BlockAction(BaseModel):
    """A single button click inside a block_actions payload."""

    action_id: str
    value: Optional[str] = None

    model_config = {"extra": "ignore"}


class ViewState(BaseModel):
    """Submitted input values, keyed by block_id then action_id."""

    values: dict[str, dict[str, dict[str, Any]]] = Field(default_factory=dict)


class ViewSubmission(BaseModel):
    """Modal view carried by a view_submission payload."""

    callback_id: str
    state: ViewState = Field(default_factory=ViewState)

    model_config = {"extra": "ignore"}

    def value(self, block_id: str, action_id: str) -> Optional[str]:
        """Text typed into a plain_text_input, or None if left empty."""
        element = self.state.values.get(block_id, {}).get(action_id, {})
        return element.get("value")

    def selected_value(self, block_id: str, action_id: str) -> Optional[str]:
        """Value of the option picked in a static_select."""
        element = self.state.values.get(block_id, {}).get(action_id, {})
        option = element.get("selected_option") or {}
        return option.get("value")


class InteractionPayload(BaseModel):
    """Interactive payload (block_actions or view_submission)."""

    type: str
    user: SlackUser
    channel: Optional[SlackChannel] = None
    trigger_id: Optional[str] = None
    actions: list[BlockAction] = Field(default_factory=list)
    view: Optional[ViewSubmission] = None

    model_config = {"extra": "ignore"}

    @property
    def action_id(self) -> Optional[str]:
        """action_id of the first clicked element, if any."""
        if not self.actions:
            return None
        return self.actions[0].action_id

    @property
    def channel_id(self) -> Optional[str]:
        """Channel id, or None when the payload came from a modal."""
        return self.channel.id if self.channel else None
