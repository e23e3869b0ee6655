from __future__ import annotations

from typing import override

from textual.app import App, ComposeResult
from textual.widgets import Footer, SelectionList, Static
from textual.widgets.selection_list import Selection

from roomba.config.catalog import DESCRIPTIONS
from roomba.models.enums import Category


def category_prompt(category: Category) -> str:
    name, description = DESCRIPTIONS[category]
    return f"{category.letter.upper()}  {name}: {description}"


class CategoryPicker(App[list[Category]]):
    """Interactive category selection.  Exits with the chosen categories, in pick order."""

    CSS = """
    #title {
        padding: 1 2;
        color: #81a2be;
    }
    #categories {
        height: 1fr;
        border: solid #81a2be;
    }
    """

    BINDINGS = [
        ("c", "confirm", "Clean selected"),
        ("q", "cancel", "Quit"),
        ("escape", "cancel", "Quit"),
    ]

    @override
    def compose(self) -> ComposeResult:
        yield Static("Select categories to CLEAN (space toggles, c starts).", id="title")
        yield SelectionList[Category](
            *(Selection(category_prompt(cat), cat) for cat in Category),
            id="categories",
        )
        yield Footer()

    def action_confirm(self) -> None:
        selected = self.query_one("#categories", SelectionList).selected
        self.exit(list(selected))

    def action_cancel(self) -> None:
        self.exit([])
