# Path: spec_builder/core/ui/user_input.py
"""
User Input Module for spec_builder

Handles operator interaction for:
- Choosing a ranked candidate for the item under review
- Searching the full catalogue when no candidate fits
- Suspending resolution (pending rows stay unresolved)

Workflow:
1. Show the raw extracted name with its limits
2. List ranked candidates with score and reason
3. Operator picks a number, 's' to search, or 0 to stop
4. Confirmed choices become manual matches for that exact raw name
"""

from typing import Optional

from spec_builder.constants import MENU_HEADER, MENU_SEPARATOR, STATUS_OK, STATUS_INFO
from spec_builder.core.logger.ipo_logging import get_input_logger
from spec_builder.process.matcher.models.catalogue_entry import CatalogueEntry
from spec_builder.process.resolution.workflow import (
    PendingItem,
    ResolutionWorkflow,
    WorkflowStatus,
)

SEARCH_KEY = 's'

logger = get_input_logger('user_input')


class ResolutionConsole:
    """
    Interactive console for the pending queue of a workflow.

    Example:
        console = ResolutionConsole(workflow)
        confirmed = console.run()
    """

    def __init__(self, workflow: ResolutionWorkflow):
        self.workflow = workflow

    def run(self) -> int:
        """
        Walk the operator through every pending item.

        Returns:
            Number of items confirmed
        """
        confirmed = 0

        if self.workflow.state.status == WorkflowStatus.SUSPENDED:
            self.workflow.reopen()

        while self.workflow.state.status == WorkflowStatus.RESOLVING:
            item = self.workflow.current
            remaining = self.workflow.pending_count

            entry = self.choose_entry(item, remaining)
            if entry is None:
                self.workflow.cancel()
                print(f"\n{STATUS_INFO} Resolution suspended: "
                      f"{self.workflow.pending_count} items left unresolved")
                break

            row = self.workflow.confirm(entry.id)
            confirmed += 1
            print(f"{STATUS_OK} {item.raw_name} -> {row.test_code} ({row.analysis} {row.component})")

        logger.info(f"Operator confirmed {confirmed} items")
        return confirmed

    def choose_entry(self, item: PendingItem, remaining: int) -> Optional[CatalogueEntry]:
        """
        Ask the operator to pick a catalogue entry for one item.

        Args:
            item: Pending item under review
            remaining: Queue length including this item

        Returns:
            Chosen entry, or None to suspend
        """
        while True:
            show_pending_item(item, remaining)
            choice = get_choice(len(item.candidates))

            if choice == 0:
                return None
            if choice == SEARCH_KEY:
                entry = self.search_entry()
                if entry is not None:
                    return entry
                continue
            return item.candidates[choice - 1].entry

    def search_entry(self) -> Optional[CatalogueEntry]:
        """
        Search the catalogue and let the operator pick a hit.

        Returns:
            Chosen entry, or None to go back
        """
        try:
            term = input("\nSearch catalogue (blank to browse): ").strip()
        except KeyboardInterrupt:
            print("\n[Cancelled]")
            return None

        hits = self.workflow.search_catalogue(term)
        logger.info(f"Catalogue search {term!r}: {len(hits)} hits")

        if not hits:
            print(f"{STATUS_INFO} No catalogue entries match {term!r}")
            return None

        display_menu(
            f"Catalogue entries matching {term!r}:",
            [format_entry(e) for e in hits],
            exit_label='Back',
        )
        selection = get_user_selection(len(hits))
        if selection == 0:
            return None
        return hits[selection - 1]


def format_entry(entry: CatalogueEntry) -> str:
    """One-line description of a catalogue entry."""
    units = f" [{entry.units}]" if entry.units else ''
    return f"{entry.test_code:<10} {entry.display_name}{units}"


def show_pending_item(item: PendingItem, remaining: int) -> None:
    """Print the item under review with its ranked candidates."""
    test = item.test
    limits = []
    if test.min is not None:
        limits.append(f"min {test.min}")
    if test.max is not None:
        limits.append(f"max {test.max}")
    if test.text:
        limits.append(f"text {test.text!r}")
    if test.unit:
        limits.append(f"unit {test.unit}")

    print("\n" + MENU_HEADER)
    print(f"  Unresolved: {test.name!r}  ({remaining} pending)")
    if limits:
        print(f"  {', '.join(limits)}")
    print(MENU_SEPARATOR)

    if not item.candidates:
        print("  No candidates found")
    for i, candidate in enumerate(item.candidates, 1):
        print(
            f"  {i:3d}. {format_entry(candidate.entry)}  "
            f"{candidate.score:.2f} {candidate.reason.label}"
        )

    print(MENU_SEPARATOR)
    print(f"    {SEARCH_KEY}. Search catalogue")
    print("    0. Stop (leave remaining unresolved)")
    print(MENU_HEADER)


def get_choice(max_value: int):
    """
    Get a candidate number, the search key, or 0.

    Args:
        max_value: Number of candidates shown

    Returns:
        0, SEARCH_KEY, or 1 to max_value
    """
    while True:
        try:
            choice = input("\nEnter selection: ").strip().lower()
            if not choice:
                continue
            if choice == SEARCH_KEY:
                return SEARCH_KEY

            value = int(choice)
            if value == 0 or 1 <= value <= max_value:
                return value
            if max_value:
                print(f"Invalid selection. Enter 1-{max_value}, '{SEARCH_KEY}' or 0.")
            else:
                print(f"No candidates. Enter '{SEARCH_KEY}' to search or 0 to stop.")

        except ValueError:
            print(f"Please enter a number or '{SEARCH_KEY}'.")
        except KeyboardInterrupt:
            print("\n[Cancelled]")
            return 0


def display_menu(title: str, options: list[str], exit_label: str = 'Exit') -> None:
    """
    Display a numbered menu.

    Args:
        title: Menu title
        options: List of option strings
        exit_label: Label of the 0 option
    """
    print("\n" + MENU_HEADER)
    print(title)
    print(MENU_SEPARATOR)

    for i, option in enumerate(options, 1):
        print(f"  {i:3d}. {option}")

    print(MENU_SEPARATOR)
    print(f"    0. {exit_label}")
    print(MENU_HEADER)


def get_user_selection(max_value: int) -> int:
    """
    Get numeric selection from user.

    Args:
        max_value: Maximum valid selection

    Returns:
        User selection (0=exit, 1 to max_value=specific)
    """
    while True:
        try:
            choice = input("\nEnter selection: ").strip()
            if not choice:
                continue

            value = int(choice)

            if value == 0:
                return 0
            elif 1 <= value <= max_value:
                return value
            else:
                print(f"Invalid selection. Enter 1-{max_value} or 0.")

        except ValueError:
            print("Please enter a valid number.")
        except KeyboardInterrupt:
            print("\n[Cancelled]")
            return 0


__all__ = [
    'ResolutionConsole',
    'format_entry',
    'show_pending_item',
    'get_choice',
    'display_menu',
    'get_user_selection',
]
