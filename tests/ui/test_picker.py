from __future__ import annotations

import pytest
from textual.widgets import SelectionList

from roomba.models.enums import Category
from roomba.ui.picker import CategoryPicker, category_prompt


def test_category_prompt_has_letter_and_name() -> None:
    assert category_prompt(Category.BROWSERS).startswith("Q  Browsers")


@pytest.mark.asyncio
async def test_confirm_returns_selected_categories() -> None:
    app = CategoryPicker()
    async with app.run_test(size=(120, 30)) as pilot:
        selection = app.query_one("#categories", SelectionList)
        selection.select(Category.OS_HISTORY)
        selection.select(Category.BROWSERS)
        await pilot.pause()
        await pilot.press("c")
    assert app.return_value == [Category.OS_HISTORY, Category.BROWSERS]


@pytest.mark.asyncio
async def test_escape_returns_nothing() -> None:
    app = CategoryPicker()
    async with app.run_test(size=(120, 30)) as pilot:
        await pilot.press("escape")
    assert app.return_value == []
