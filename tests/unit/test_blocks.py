"""Tests for Block Kit surfaces."""
from app.models.project import Project
from app.slack import blocks


class TestActionMenu:
    """Tests for the /tickly action menu."""

    def test_menu_has_five_actions_in_order(self):
        menu = blocks.action_menu()

        assert menu["text"] == "Tickly actions:"
        buttons = menu["blocks"][1]["elements"]
        assert [b["action_id"] for b in buttons] == [
            "start_tracking",
            "stop_tracking",
            "add_note",
            "manual_entry",
            "assign_project",
        ]
        assert buttons[0]["text"] == {"type": "plain_text", "text": "Start Tracking"}

    def test_menu_header(self):
        section = blocks.action_menu()["blocks"][0]

        assert section["type"] == "section"
        assert section["text"]["text"].startswith("*Tickly Actions*")


class TestModals:
    """Tests for the input modals."""

    def test_note_modal(self):
        view = blocks.note_modal()

        assert view["type"] == "modal"
        assert view["callback_id"] == "submit_note"
        block = view["blocks"][0]
        assert block["block_id"] == "note_input"
        assert block["element"]["action_id"] == "note"
        assert "optional" not in block

    def test_manual_entry_modal(self):
        view = blocks.manual_entry_modal()

        assert view["callback_id"] == "submit_manual_entry"
        duration, title = view["blocks"]
        assert (duration["block_id"], duration["element"]["action_id"]) == ("duration_block", "duration")
        assert (title["block_id"], title["element"]["action_id"]) == ("title_block", "title")
        assert title["optional"] is True

    def test_assign_project_modal_options(self):
        view = blocks.assign_project_modal([
            Project(_id="p1", user_id="U1", name="Client A"),
            Project(_id="p2", user_id="U1", name="Internal"),
        ])

        assert view["callback_id"] == "submit_assign_project"
        assert view["submit"]["text"] == "Assign"
        select = view["blocks"][0]["element"]
        assert view["blocks"][0]["block_id"] == "project_select_block"
        assert select["type"] == "static_select"
        assert select["action_id"] == "project"
        assert [o["value"] for o in select["options"]] == ["p1", "p2"]
        assert select["options"][1]["text"]["text"] == "Internal"
