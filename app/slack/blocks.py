"""Block Kit surfaces: the action menu and the three input modals."""
from app.models.project import Project

# Button action_ids
START_TRACKING = "start_tracking"
STOP_TRACKING = "stop_tracking"
ADD_NOTE = "add_note"
MANUAL_ENTRY = "manual_entry"
ASSIGN_PROJECT = "assign_project"

# Modal callback_ids
SUBMIT_NOTE = "submit_note"
SUBMIT_MANUAL_ENTRY = "submit_manual_entry"
SUBMIT_ASSIGN_PROJECT = "submit_assign_project"

# Input block_id / action_id pairs
NOTE_BLOCK, NOTE_ACTION = "note_input", "note"
DURATION_BLOCK, DURATION_ACTION = "duration_block", "duration"
TITLE_BLOCK, TITLE_ACTION = "title_block", "title"
PROJECT_BLOCK, PROJECT_ACTION = "project_select_block", "project"

MENU_BUTTONS = [
    ("Start Tracking", START_TRACKING),
    ("Stop Tracking", STOP_TRACKING),
    ("Add Note", ADD_NOTE),
    ("Manual Entry", MANUAL_ENTRY),
    ("Assign Project", ASSIGN_PROJECT),
]


def plain_text(text: str) -> dict:
    return {"type": "plain_text", "text": text}


def _text_input(block_id: str, action_id: str, label: str, optional: bool = False) -> dict:
    block = {
        "type": "input",
        "block_id": block_id,
        "label": plain_text(label),
        "element": {"type": "plain_text_input", "action_id": action_id},
    }
    if optional:
        block["optional"] = True
    return block


def _modal(callback_id: str, title: str, submit: str, blocks: list[dict]) -> dict:
    return {
        "type": "modal",
        "callback_id": callback_id,
        "title": plain_text(title),
        "submit": plain_text(submit),
        "close": plain_text("Cancel"),
        "blocks": blocks,
    }


def action_menu() -> dict:
    """Message body listing the five tracking actions as buttons."""
    return {
        "text": "Tickly actions:",
        "blocks": [
            {
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": "*Tickly Actions*\nChoose what you'd like to do:",
                },
            },
            {
                "type": "actions",
                "elements": [
                    {"type": "button", "text": plain_text(label), "action_id": action_id}
                    for label, action_id in MENU_BUTTONS
                ],
            },
        ],
    }


def note_modal() -> dict:
    return _modal(
        SUBMIT_NOTE,
        "Add Note",
        "Save",
        [_text_input(NOTE_BLOCK, NOTE_ACTION, "Title or note")],
    )


def manual_entry_modal() -> dict:
    return _modal(
        SUBMIT_MANUAL_ENTRY,
        "Manual Time Entry",
        "Save",
        [
            _text_input(DURATION_BLOCK, DURATION_ACTION, "Duration (minutes)"),
            _text_input(TITLE_BLOCK, TITLE_ACTION, "Title or note", optional=True),
        ],
    )


def assign_project_modal(projects: list[Project]) -> dict:
    """
    Modal with a dropdown of the user's projects.

    Option values are project IDs; they come back verbatim on submit.
    """
    select = {
        "type": "static_select",
        "action_id": PROJECT_ACTION,
        "placeholder": plain_text("Select a project"),
        "options": [
            {"text": plain_text(project.name), "value": str(project.id)}
            for project in projects
        ],
    }
    return _modal(
        SUBMIT_ASSIGN_PROJECT,
        "Assign Project",
        "Assign",
        [
            {
                "type": "input",
                "block_id": PROJECT_BLOCK,
                "element": select,
                "label": plain_text("Project"),
            }
        ],
    )
