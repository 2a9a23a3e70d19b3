"""Slack endpoints - slash command, events and interactivity."""
import json
import logging
from urllib.parse import parse_qsl

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, Response, status
from pydantic import ValidationError

from app.context import AppContext, get_context
from app.models.slack import InteractionPayload, SlashCommand
from app.services.intent_service import IntentService
from app.slack import blocks
from app.slack.signature import verify_signature

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/slack", tags=["slack"])

MENU_COMMAND = "/tickly"


async def verified_body(
    request: Request,
    ctx: AppContext = Depends(get_context),
) -> bytes:
    """
    Dependency returning the raw body of a correctly signed Slack request.

    Raises:
        HTTPException: If the signature is missing, stale or wrong (401)
    """
    body = await request.body()
    if not verify_signature(
        ctx.settings.slack_signing_secret,
        request.headers.get("X-Slack-Request-Timestamp"),
        request.headers.get("X-Slack-Signature"),
        body,
        tolerance_seconds=ctx.settings.slack_request_tolerance_seconds,
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Slack signature",
        )
    return body


def _parse_form(body: bytes) -> dict[str, str]:
    return dict(parse_qsl(body.decode("utf-8"), keep_blank_values=True))


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


@router.post("/events")
async def slack_events(
    request: Request,
    body: bytes = Depends(verified_body),
):
    """
    Receive Slack events and slash commands.

    - Answers the url_verification challenge
    - /tickly replies with the action menu
    - Other events are acknowledged and ignored
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/x-www-form-urlencoded"):
        try:
            command = SlashCommand.model_validate(_parse_form(body))
        except ValidationError:
            raise _bad_request("Malformed slash command")
        return handle_command(command)

    try:
        event = json.loads(body)
    except ValueError:
        raise _bad_request("Malformed event body")
    if not isinstance(event, dict):
        raise _bad_request("Malformed event body")

    if event.get("type") == "url_verification":
        return {"challenge": event.get("challenge", "")}

    logger.debug("Ignoring event type %s", event.get("type"))
    return {"ok": True}


def handle_command(command: SlashCommand) -> dict:
    """Build the immediate (ephemeral) response to a slash command."""
    if command.command != MENU_COMMAND:
        return {"response_type": "ephemeral", "text": f"Unknown command: {command.command}"}
    return {"response_type": "ephemeral", **blocks.action_menu()}


@router.post("/interact")
async def slack_interact(
    background_tasks: BackgroundTasks,
    body: bytes = Depends(verified_body),
    ctx: AppContext = Depends(get_context),
):
    """
    Receive button clicks and modal submissions.

    Slack gets an empty 200 right away (which also closes a submitted
    modal); the intent itself runs as a background task.
    """
    raw_payload = _parse_form(body).get("payload")
    if not raw_payload:
        raise _bad_request("Missing payload")

    try:
        payload = InteractionPayload.model_validate_json(raw_payload)
    except ValidationError:
        raise _bad_request("Malformed payload")

    intents = ctx.intent_service()
    if payload.type == "block_actions":
        dispatch_action(payload, intents, background_tasks)
    elif payload.type == "view_submission":
        dispatch_submission(payload, intents, background_tasks)
    else:
        logger.debug("Ignoring interaction type %s", payload.type)

    return Response(status_code=status.HTTP_200_OK)


def dispatch_action(
    payload: InteractionPayload,
    intents: IntentService,
    background_tasks: BackgroundTasks,
) -> None:
    """Schedule the work for a menu button click."""
    user_id = payload.user.id
    action_id = payload.action_id

    if action_id == blocks.START_TRACKING:
        background_tasks.add_task(intents.start_tracking, user_id, payload.channel_id)
    elif action_id == blocks.STOP_TRACKING:
        background_tasks.add_task(intents.stop_tracking, user_id, payload.channel_id)
    elif action_id == blocks.ADD_NOTE:
        background_tasks.add_task(intents.open_note_modal, payload.trigger_id)
    elif action_id == blocks.MANUAL_ENTRY:
        background_tasks.add_task(intents.open_manual_entry_modal, payload.trigger_id)
    elif action_id == blocks.ASSIGN_PROJECT:
        background_tasks.add_task(
            intents.open_assign_project_modal, user_id, payload.trigger_id
        )
    else:
        logger.debug("Ignoring action %s", action_id)


def dispatch_submission(
    payload: InteractionPayload,
    intents: IntentService,
    background_tasks: BackgroundTasks,
) -> None:
    """Schedule the work for a submitted modal."""
    user_id = payload.user.id
    view = payload.view
    if view is None:
        raise _bad_request("view_submission without view")

    if view.callback_id == blocks.SUBMIT_NOTE:
        background_tasks.add_task(
            intents.add_note,
            user_id,
            view.value(blocks.NOTE_BLOCK, blocks.NOTE_ACTION),
        )
    elif view.callback_id == blocks.SUBMIT_MANUAL_ENTRY:
        background_tasks.add_task(
            intents.manual_entry,
            user_id,
            view.value(blocks.DURATION_BLOCK, blocks.DURATION_ACTION),
            view.value(blocks.TITLE_BLOCK, blocks.TITLE_ACTION),
        )
    elif view.callback_id == blocks.SUBMIT_ASSIGN_PROJECT:
        background_tasks.add_task(
            intents.assign_project,
            user_id,
            view.selected_value(blocks.PROJECT_BLOCK, blocks.PROJECT_ACTION),
        )
    else:
        logger.debug("Ignoring view %s", view.callback_id)
