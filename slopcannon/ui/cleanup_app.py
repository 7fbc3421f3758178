"""Textual picker for worktrees to remove."""

from typing import List, Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Header, SelectionList, Static
from textual.widgets.selection_list import Selection

from slopcannon.constants import APP_NAME
from slopcannon.formatters import format_candidate, pluralize
from slopcannon.models.worktree import CleanupCandidate


class ConfirmScreen(ModalScreen[bool]):
    """Modal confirmation dialog."""

    DEFAULT_CSS = """
    ConfirmScreen {
        align: center middle;
    }

    #confirm-dialog {
        width: 80%;
        height: auto;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    #confirm-message {
        width: 100%;
        height: auto;
        padding: 1 0;
    }

    #button-container {
        width: 100%;
        height: auto;
        align: center middle;
        padding: 1 0;
    }

    Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("y", "answer(True)", "Yes"),
        Binding("n", "answer(False)", "No"),
        Binding("escape", "answer(False)", "No", show=False),
    ]

    def __init__(self, message: str):
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Static(self.message, id="confirm-message")
            with Container(id="button-container"):
                yield Button("Yes (y)", variant="error", id="yes")
                yield Button("No (n)", variant="primary", id="no")

    def action_answer(self, confirmed: bool) -> None:
        self.dismiss(confirmed)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button press."""
        self.dismiss(event.button.id == "yes")


def candidate_prompt(candidate: CleanupCandidate) -> Text:
    """Selection label: description plus the worktree path, dimmed."""
    style = "green" if candidate.safe_to_clean else ""
    return Text.assemble((format_candidate(candidate), style), ("  " + candidate.entry.path, "dim"))


class CleanupApp(App[Optional[List[CleanupCandidate]]]):
    """Lets the user pick linked worktrees to remove.

    Exits with the confirmed selection, an empty list when nothing was
    selected, or None when cancelled.
    """

    TITLE = f"{APP_NAME} cleanup"

    CSS = """
    #hint {
        padding: 0 1;
        color: $text-muted;
    }

    SelectionList {
        height: 1fr;
    }
    """

    BINDINGS = [
        # Priority so enter confirms instead of toggling the highlighted row
        Binding("enter", "confirm", "Confirm", priority=True),
        Binding("a", "select_safe", "Select safe"),
        Binding("c", "clear", "Clear"),
        Binding("escape", "cancel", "Cancel"),
        Binding("q", "cancel", "Quit"),
    ]

    def __init__(self, candidates: List[CleanupCandidate]):
        super().__init__()
        self.candidates = candidates

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("Select worktrees to remove (space to toggle, enter to confirm)", id="hint")
        yield SelectionList[int](
            *(
                Selection(candidate_prompt(candidate), index, candidate.safe_to_clean)
                for index, candidate in enumerate(self.candidates)
            ),
            id="candidates",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(SelectionList).focus()

    @property
    def selected_candidates(self) -> List[CleanupCandidate]:
        selected = self.query_one(SelectionList).selected
        return [self.candidates[index] for index in sorted(selected)]

    def action_select_safe(self) -> None:
        selection_list = self.query_one(SelectionList)
        selection_list.deselect_all()
        for index, candidate in enumerate(self.candidates):
            if candidate.safe_to_clean:
                selection_list.select(index)

    def action_clear(self) -> None:
        self.query_one(SelectionList).deselect_all()

    def action_cancel(self) -> None:
        self.exit(None)

    def action_confirm(self) -> None:
        if isinstance(self.screen, ConfirmScreen):
            return

        chosen = self.selected_candidates
        if not chosen:
            self.exit([])
            return

        message = f"Remove {pluralize(len(chosen), 'worktree')} and delete their branches?"

        def handle_confirmation(confirmed: Optional[bool]) -> None:
            self.exit(chosen if confirmed else None)

        self.push_screen(ConfirmScreen(message), handle_confirmation)


def select_candidates(candidates: List[CleanupCandidate]) -> Optional[List[CleanupCandidate]]:
    """Run the picker and return the confirmed selection (None if cancelled)."""
    return CleanupApp(candidates).run()
