"""
================================================================================
Envelope Page Object
================================================================================

Envelope editor at /envelope/edit and the "fill envelopes" dialog shown after
saving new envelopes.

Rows are addressed by envelope name, never by position:

    row = await envelope_page.find_envelope("Groceries")
    await actions.click_element(row.edit_button, "Edit Groceries")

The unsaved row added by "Add" is always rendered as `li[id="-1"]` and is
available through `draft_envelope()`.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

import allure
from playwright.async_api import Locator, Page

from autotest_tools.common.structured_logger import StructuredLogger, create_page_logger
from testsuites.ui_testing.framework.flow import FlowResult
from testsuites.ui_testing.framework.page_actions import PageActionError, PageActions


# =============================================================================
# Row Model
# =============================================================================

ROW_NAME_INPUT = 'div[class="row-name"] input[type="text"]'
ROW_AMOUNT_INPUT = 'input[placeholder="0.00"]'
ROW_EDIT_BUTTON = 'button[class="btn btn-ok"]'
ROW_DELETE_BUTTON = 'i[class="icon-remove-sign"]'

DRAFT_ROW_ID = "-1"


@dataclass
class EnvelopeRow:
    """Locators for one envelope row of the editor."""
    name: str
    row: Locator
    name_input: Locator
    amount_input: Locator
    edit_button: Locator
    delete_button: Locator

    @classmethod
    def from_row(cls, name: str, row: Locator) -> "EnvelopeRow":
        return cls(
            name=name,
            row=row,
            name_input=row.locator(ROW_NAME_INPUT),
            amount_input=row.locator(ROW_AMOUNT_INPUT),
            edit_button=row.locator(ROW_EDIT_BUTTON),
            delete_button=row.locator(ROW_DELETE_BUTTON),
        )


# =============================================================================
# Page Object
# =============================================================================

class EnvelopePage:
    """Envelope editor page object."""

    ENVELOPE_ROWS = "li[id]"
    ADD_ENVELOPE_BUTTON = (
        '//div[@class="all-buckets"]//envelope-list'
        '//form[@class="form-edit-envelope ng-untouched ng-pristine ng-valid"]'
        '//div//button[@type="button"][normalize-space()="Add"]'
    )
    SAVE_BUTTON = "#save-envelopes-btn"
    CANCEL_BUTTON = 'button[class="btn btn-cancel set-cancel-clicked"]'
    VALIDATION_ERROR = ".control-group.error"
    MONTHLY_TOTAL = 'p[class="total-total"] strong'
    NEW_ENVELOPES_MESSAGE = '//h1[normalize-space()="New Envelopes Created!"]'

    # Fill envelopes dialog
    FILL_YES_BUTTON = "#fillEnvelopesModalYes"
    FILL_NO_BUTTON = '//button[@id="fillEnvelopesModalNo"]'
    FILL_AMOUNT_INPUT = "#specify-amount"
    FILL_PAYER_INPUT = "#specify-fillname"
    QUICK_FILL_DROPDOWN = 'div[class="btn-group"] button[class="btn btn-fill dropdown-toggle"]'
    FILL_FROM_AVAILABLE = '//a[normalize-space()="Available"]'
    SAVE_FILL_BUTTON = 'div[id="incomeSummary"] button[type="submit"]'

    EMPTY_NAME_ERROR = "Envelopes need a name."
    INVALID_AMOUNT_ERROR = (
        "Please enter amount with no commas, letters, or symbols. "
        "Use positive amounts with 8 digits or less."
    )

    EDIT_URL = re.compile(r"^https://goodbudget\.com/envelope/edit$")
    HOME_URL = re.compile(r".*goodbudget.com/home")

    ROWS_TIMEOUT = 10000

    def __init__(
        self,
        page: Page,
        logger: Optional[StructuredLogger] = None,
        actions: Optional[PageActions] = None,
    ):
        self.page = page
        self.logger = logger or create_page_logger("EnvelopePage")
        self.actions = actions or PageActions(page, self.logger)

        self.envelope_rows = page.locator(self.ENVELOPE_ROWS).filter(has=page.locator(ROW_NAME_INPUT))
        self.add_envelope_button = page.locator(self.ADD_ENVELOPE_BUTTON)
        self.save_button = page.locator(self.SAVE_BUTTON)
        self.cancel_button = page.locator(self.CANCEL_BUTTON)
        self.validation_error = page.locator(self.VALIDATION_ERROR)
        self.monthly_total = page.locator(self.MONTHLY_TOTAL)
        self.new_envelopes_message = page.locator(self.NEW_ENVELOPES_MESSAGE)

        self.fill_yes_button = page.locator(self.FILL_YES_BUTTON)
        self.fill_no_button = page.locator(self.FILL_NO_BUTTON)
        self.fill_amount_input = page.locator(self.FILL_AMOUNT_INPUT)
        self.fill_payer_input = page.locator(self.FILL_PAYER_INPUT)
        self.quick_fill_dropdown = page.locator(self.QUICK_FILL_DROPDOWN)
        self.fill_from_available = page.locator(self.FILL_FROM_AVAILABLE)
        self.save_fill_button = page.locator(self.SAVE_FILL_BUTTON)

    # =========================================================================
    # Row queries
    # =========================================================================

    async def envelope_names(self) -> List[str]:
        """Names currently typed into the editor rows, in display order."""
        await self.actions.expect_visible(self.envelope_rows.first, "Envelope rows", self.ROWS_TIMEOUT)
        names = []
        for index in range(await self.envelope_rows.count()):
            value = await self.envelope_rows.nth(index).locator(ROW_NAME_INPUT).input_value()
            names.append(value.strip())
        return names

    async def find_envelope(self, name: str) -> EnvelopeRow:
        """
        Locate the editor row whose name input holds `name`.

        Raises:
            PageActionError: no row carries that name
        """
        names = await self.envelope_names()
        if name not in names:
            self.logger.error(f"Envelope '{name}' not found", {"available": names})
            raise PageActionError(
                "find", f"envelope '{name}'", f"Available envelopes: {names}"
            )
        # nth() re-resolves on every use, so pin the row by its li id
        row_id = await self.envelope_rows.nth(names.index(name)).get_attribute("id")
        self.logger.debug(f"Envelope '{name}' found in row li#{row_id}")
        return EnvelopeRow.from_row(name, self.page.locator(f'li[id="{row_id}"]'))

    def draft_envelope(self) -> EnvelopeRow:
        """The unsaved row created by the Add button."""
        row = self.page.locator(f'li[id="{DRAFT_ROW_ID}"]')
        return EnvelopeRow.from_row("<draft>", row)

    # =========================================================================
    # Editing
    # =========================================================================

    async def create_new_envelope(self, name: str, budget: str) -> FlowResult:
        """Add a draft envelope row and type its name and monthly budget."""
        draft = self.draft_envelope()
        async with self.actions.flow("Create New Envelope", {"name": name, "budget": budget}) as flow:
            existing = self.envelope_rows.first.locator(ROW_NAME_INPUT)
            await flow.step(
                "Existing envelopes are visible",
                self.actions.expect_visible(existing, "Existing envelope", self.ROWS_TIMEOUT),
            )
            await flow.step(
                "Existing envelopes are enabled",
                self.actions.expect_enabled(existing, "Existing envelope", self.ROWS_TIMEOUT),
            )
            await flow.step(
                "Click Add",
                self.actions.click_element(self.add_envelope_button, "Add New Envelope Button"),
            )
            await flow.step(
                f"Set envelope name to: {name}",
                self.actions.fill_input(draft.name_input, name, "New Envelope Name"),
            )
            await flow.step(
                f"Set envelope budget to: {budget}",
                self.actions.fill_input(draft.amount_input, budget, "New Envelope Budget"),
            )
            await flow.step(
                "Confirm row",
                self.actions.press_key(draft.amount_input, "Enter", "New Envelope Budget"),
            )
        return flow.result

    async def edit_envelope(self, name: str, new_name: str, new_budget: str) -> FlowResult:
        """Open the row named `name` for editing and replace its name and budget."""
        details = {"name": name, "new_name": new_name, "new_budget": new_budget}
        async with self.actions.flow("Edit Envelope", details) as flow:
            row = await flow.step(f"Find envelope: {name}", self.find_envelope(name))
            await flow.step(
                "Click Edit",
                self.actions.click_element(row.edit_button, f"Edit '{name}' Button"),
            )
            await flow.step(
                f"Set envelope name to: {new_name}",
                self.actions.fill_input(row.name_input, new_name, "Envelope Name"),
            )
            await flow.step(
                f"Set envelope budget to: {new_budget}",
                self.actions.fill_input(row.amount_input, new_budget, "Envelope Budget"),
            )
            await flow.step(
                "Confirm row",
                self.actions.press_key(row.amount_input, "Enter", "Envelope Budget"),
            )
        return flow.result

    async def revert_edited_changes(self, current_name: str, name: str, budget: str) -> FlowResult:
        """Restore the original name and budget of a row currently named `current_name`."""
        details = {"current_name": current_name, "name": name, "budget": budget}
        async with self.actions.flow("Revert Edited Changes", details) as flow:
            row = await flow.step(f"Find envelope: {current_name}", self.find_envelope(current_name))
            await flow.step(
                f"Revert envelope name to: {name}",
                self.actions.fill_input(row.name_input, name, "Revert Envelope Name"),
            )
            await flow.step(
                f"Revert envelope budget to: {budget}",
                self.actions.fill_input(row.amount_input, budget, "Revert Envelope Budget"),
            )
            await flow.step(
                "Confirm row",
                self.actions.press_key(row.amount_input, "Enter", "Revert Envelope Budget"),
            )
        return flow.result

    async def delete_envelope(self, name: str, expected_total: str) -> FlowResult:
        """
        Remove the row named `name`.

        Args:
            name: Envelope to delete
            expected_total: Monthly total expected once the row is gone
        """
        async with self.actions.flow("Delete Envelope", {"name": name}) as flow:
            row = await flow.step(f"Find envelope: {name}", self.find_envelope(name))
            await flow.step(
                "Click Remove",
                self.actions.click_element(row.delete_button, f"Remove '{name}' Button"),
            )
            await flow.step(
                "Row is removed",
                self.actions.expect_hidden(row.name_input, f"Envelope '{name}'"),
            )
            await flow.step(
                f"Monthly total is {expected_total}",
                self.actions.expect_text(self.monthly_total, expected_total, "Monthly total"),
            )
        return flow.result

    @allure.step("Save envelope changes")
    async def save_changes(self, expect_validation_error: bool) -> None:
        """
        Click Save.

        Args:
            expect_validation_error: The editor must reject the changes and
                stay on /envelope/edit instead of returning to /home
        """
        await self.actions.click_element(self.save_button, "Save Envelopes Button")
        if expect_validation_error:
            await self.actions.check_url(self.EDIT_URL, "Edit Envelopes")
        else:
            await self.actions.check_url(self.HOME_URL, "Home")

    @allure.step("Cancel envelope changes")
    async def cancel_changes(self) -> None:
        await self.actions.click_element(self.cancel_button, "Cancel Button")
        await self.actions.check_url(self.HOME_URL, "Home")

    # =========================================================================
    # Verifications
    # =========================================================================

    @allure.step("Verify monthly budget: {expected}")
    async def verify_monthly_budget(self, expected: str) -> None:
        await self.actions.expect_text(self.monthly_total, expected, "Monthly total")

    @allure.step("Verify validation error: {expected}")
    async def verify_error_message(self, expected: str) -> None:
        await self.actions.expect_text(self.validation_error, expected, "Validation error")

    @allure.step("Verify 'New Envelopes Created!' message")
    async def verify_new_envelopes_message(self) -> None:
        await self.actions.expect_visible(self.new_envelopes_message, "New Envelopes Created message")

    # =========================================================================
    # Fill envelopes dialog
    # =========================================================================

    @allure.step("Decide to fill envelopes: {fill}")
    async def decide_to_fill_envelopes(self, fill: bool) -> None:
        if fill:
            await self.actions.click_element(self.fill_yes_button, "Fill Envelopes Button")
        else:
            await self.actions.click_element(self.fill_no_button, "Do Not Fill Envelopes Button")

    async def fill_envelopes(self, amount: str, payer: str, use_available: bool = False) -> FlowResult:
        """
        Fill envelopes from an income amount.

        Args:
            amount: Income amount to distribute
            payer: Name recorded as the income source
            use_available: Distribute through the quick fill "Available" option
        """
        details = {"amount": amount, "payer": payer, "use_available": use_available}
        async with self.actions.flow("Fill Envelopes", details) as flow:
            await flow.step(
                f"Enter amount: {amount}",
                self.actions.fill_input(self.fill_amount_input, amount, "Fill Amount"),
            )
            await flow.step(
                f"Enter payer: {payer}",
                self.actions.fill_input(self.fill_payer_input, payer, "Payer"),
            )
            if use_available:
                await flow.step(
                    "Open quick fill",
                    self.actions.click_element(self.quick_fill_dropdown, "Quick Fill Dropdown"),
                )
                await flow.step(
                    "Fill from Available",
                    self.actions.click_element(self.fill_from_available, "Available option"),
                )
            await flow.step(
                "Save fill",
                self.actions.click_element(self.save_fill_button, "Save Fill Button"),
            )
        return flow.result
