from unittest.mock import AsyncMock, MagicMock

import pytest

from testsuites.ui_testing.framework import FlowError, PageActionError
from testsuites.ui_testing.pages import EnvelopePage
from testsuites.ui_testing.pages.envelope_page import DRAFT_ROW_ID, ROW_NAME_INPUT


def make_row(name: str) -> MagicMock:
    row = MagicMock(name=f"row-{name}")
    row.envelope = name
    row.locator.return_value.input_value = AsyncMock(return_value=f" {name} ")
    row.get_attribute = AsyncMock(return_value=f"env-{name}")
    return row


def by_id(fake_page, name: str) -> MagicMock:
    """The row locator the page builds from an envelope's li id."""
    return fake_page.locator(f'li[id="env-{name}"]')


@pytest.fixture
def rows():
    return [make_row("Groceries"), make_row("Rent")]


@pytest.fixture
def envelopes(fake_page, quiet_logger, stub_actions, rows) -> EnvelopePage:
    locators = {}
    fake_page.locator.side_effect = lambda selector: locators.setdefault(selector, MagicMock(name=selector))
    page = EnvelopePage(fake_page, quiet_logger, stub_actions)
    page.envelope_rows = MagicMock(name="envelope_rows")
    page.envelope_rows.count = AsyncMock(side_effect=lambda: len(rows))
    page.envelope_rows.nth.side_effect = lambda index: rows[index]
    return page


async def test_envelope_names_are_trimmed(envelopes, rows):
    assert await envelopes.envelope_names() == ["Groceries", "Rent"]
    rows[0].locator.assert_called_with(ROW_NAME_INPUT)


async def test_find_envelope_pins_the_row_by_id(envelopes, rows, fake_page):
    row = await envelopes.find_envelope("Rent")

    assert row.name == "Rent"
    rows[1].get_attribute.assert_awaited_once_with("id")
    assert row.row is by_id(fake_page, "Rent")
    assert row.name_input is by_id(fake_page, "Rent").locator.return_value


async def test_find_missing_envelope_lists_available_names(envelopes):
    with pytest.raises(PageActionError) as exc_info:
        await envelopes.find_envelope("Utilities")

    assert str(exc_info.value) == (
        "Failed to find envelope 'Utilities'. Available envelopes: ['Groceries', 'Rent']"
    )


def test_draft_envelope_is_the_unsaved_row(envelopes, fake_page):
    envelopes.draft_envelope()

    fake_page.locator.assert_called_with(f'li[id="{DRAFT_ROW_ID}"]')


async def test_create_new_envelope_steps(envelopes, stub_actions):
    result = await envelopes.create_new_envelope("Groceries-1", "100")

    assert result.completed_steps == [
        "Existing envelopes are visible",
        "Existing envelopes are enabled",
        "Click Add",
        "Set envelope name to: Groceries-1",
        "Set envelope budget to: 100",
        "Confirm row",
    ]
    filled = [call.args[1] for call in stub_actions.fill_input.await_args_list]
    assert filled == ["Groceries-1", "100"]
    assert stub_actions.press_key.await_args.args[1] == "Enter"


async def test_create_new_envelope_stops_at_failing_step(envelopes, stub_actions):
    stub_actions.click_element.side_effect = PageActionError("click", "Add New Envelope Button", "hidden")

    with pytest.raises(FlowError) as exc_info:
        await envelopes.create_new_envelope("Groceries-1", "100")

    result = exc_info.value.result
    assert result.failed_step == "Click Add"
    assert result.completed_steps == ["Existing envelopes are visible", "Existing envelopes are enabled"]
    stub_actions.fill_input.assert_not_awaited()


async def test_edit_envelope_targets_the_named_row(envelopes, stub_actions, fake_page):
    result = await envelopes.edit_envelope("Groceries", "Rent", "340.00")

    assert result.succeeded
    assert stub_actions.click_element.await_args.args[0] is by_id(fake_page, "Groceries").locator.return_value
    filled = [call.args[1] for call in stub_actions.fill_input.await_args_list]
    assert filled == ["Rent", "340.00"]


async def test_edit_missing_envelope_fails_before_any_interaction(envelopes, stub_actions):
    with pytest.raises(FlowError) as exc_info:
        await envelopes.edit_envelope("Utilities", "Rent", "340.00")

    result = exc_info.value.result
    assert result.failed_step == "Find envelope: Utilities"
    assert result.completed_steps == []
    assert isinstance(result.error, PageActionError)
    stub_actions.click_element.assert_not_awaited()


async def test_revert_edited_changes(envelopes, stub_actions):
    result = await envelopes.revert_edited_changes("Rent", "Groceries", "240.00")

    assert result.completed_steps[0] == "Find envelope: Rent"
    filled = [call.args[1] for call in stub_actions.fill_input.await_args_list]
    assert filled == ["Groceries", "240.00"]


async def test_delete_envelope_checks_new_total(envelopes, stub_actions, fake_page):
    result = await envelopes.delete_envelope("Rent", "348.33")

    assert result.completed_steps == [
        "Find envelope: Rent",
        "Click Remove",
        "Row is removed",
        "Monthly total is 348.33",
    ]
    stub_actions.expect_hidden.assert_awaited_once_with(
        by_id(fake_page, "Rent").locator.return_value, "Envelope 'Rent'"
    )
    stub_actions.expect_text.assert_awaited_once_with(envelopes.monthly_total, "348.33", "Monthly total")


async def test_delete_first_envelope_after_rows_shift_up(envelopes, stub_actions, rows, fake_page):
    rows.append(make_row("Gas"))
    positions = {}

    def nth(index):
        # Re-resolved against the current rows on every use, like Locator.nth()
        if index not in positions:
            positional = MagicMock(name=f"nth-{index}")
            positional.locator.return_value.input_value = AsyncMock(side_effect=lambda: rows[index].envelope)
            positional.get_attribute = AsyncMock(side_effect=lambda attr: f"env-{rows[index].envelope}")
            positions[index] = positional
        return positions[index]

    async def remove(locator, element_name):
        del rows[0]

    async def expect_hidden(locator, element_name):
        for index, positional in positions.items():
            if locator is positional.locator.return_value and index < len(rows):
                raise PageActionError("expect hidden", element_name, f"row now holds '{rows[index].envelope}'")
        for row in rows:
            if locator is by_id(fake_page, row.envelope).locator.return_value:
                raise PageActionError("expect hidden", element_name, "still listed")

    envelopes.envelope_rows.nth.side_effect = nth
    stub_actions.click_element.side_effect = remove
    stub_actions.expect_hidden.side_effect = expect_hidden

    result = await envelopes.delete_envelope("Groceries", "108.33")

    assert result.succeeded
    assert [row.envelope for row in rows] == ["Rent", "Gas"]
    assert stub_actions.expect_hidden.await_args.args[0] is by_id(fake_page, "Groceries").locator.return_value


async def test_verify_new_envelopes_message(envelopes, stub_actions):
    await envelopes.verify_new_envelopes_message()

    stub_actions.expect_visible.assert_awaited_once_with(
        envelopes.new_envelopes_message, "New Envelopes Created message"
    )


@pytest.mark.parametrize(
    "expect_validation_error, url",
    [(True, EnvelopePage.EDIT_URL), (False, EnvelopePage.HOME_URL)],
)
async def test_save_changes_expected_destination(envelopes, stub_actions, expect_validation_error, url):
    await envelopes.save_changes(expect_validation_error)

    stub_actions.click_element.assert_awaited_once_with(envelopes.save_button, "Save Envelopes Button")
    assert stub_actions.check_url.await_args.args[0] is url


async def test_cancel_changes_returns_home(envelopes, stub_actions):
    await envelopes.cancel_changes()

    stub_actions.check_url.assert_awaited_once_with(EnvelopePage.HOME_URL, "Home")


@pytest.mark.parametrize(
    "fill, button",
    [(True, "Fill Envelopes Button"), (False, "Do Not Fill Envelopes Button")],
)
async def test_decide_to_fill_envelopes(envelopes, stub_actions, fill, button):
    await envelopes.decide_to_fill_envelopes(fill)

    assert stub_actions.click_element.await_args.args[1] == button


async def test_fill_envelopes_from_available(envelopes, stub_actions):
    result = await envelopes.fill_envelopes("500", "Employer", use_available=True)

    assert result.completed_steps == [
        "Enter amount: 500",
        "Enter payer: Employer",
        "Open quick fill",
        "Fill from Available",
        "Save fill",
    ]


def test_edit_url_matches_only_the_editor():
    assert EnvelopePage.EDIT_URL.search("https://goodbudget.com/envelope/edit")
    assert not EnvelopePage.EDIT_URL.search("https://goodbudget.com/envelope/edit?id=1")
