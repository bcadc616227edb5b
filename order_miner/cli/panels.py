"""
Interactive panels for filtering, viewing and summarizing stored orders.

Prompting and printing go through injectable callables so the menus can be
driven from a script.
"""
from enum import Enum
from typing import Callable, Dict, List, Optional

import typer
from loguru import logger
from pydantic import ValidationError

from order_miner.core.stats import summarize_purchases
from order_miner.database import OrderRepository
from order_miner.models import Conditions, Order, default_conditions, stats_conditions

Prompt = Callable[[str], str]
Echo = Callable[[str], None]


def _typer_prompt(text: str) -> str:
    return typer.prompt(text, default="", show_default=False)


class ConditionGroup(Enum):
    DATE = "Dates"
    AMOUNT = "Total Amount"
    ROWS = "Number of Rows"


class GroupState(Enum):
    UNSET = "unset"
    SET = "set"


class ConditionTracker:
    """
    Tracks which condition groups the user has set.
    Going from SET to SET again needs the user to confirm the override.
    """

    def __init__(self):
        self.states: Dict[ConditionGroup, GroupState] = {
            group: GroupState.UNSET for group in ConditionGroup
        }

    def needs_confirmation(self, group: ConditionGroup) -> bool:
        return self.states[group] is GroupState.SET

    def mark_set(self, group: ConditionGroup) -> None:
        self.states[group] = GroupState.SET


def _format_error(error: ValidationError) -> str:
    return "; ".join(detail["msg"] for detail in error.errors())


class ConditionPanel:
    """Menu for building Conditions and retrieving the matching orders."""

    MENU = (
        "Add Conditions of...\n"
        "1. Date\n"
        "2. Total Amount\n"
        "3. Number of Rows\n"
        "4. Retrieve All data\n"
        "5. Retrieve With Current Condition\n"
        "6. Return to Main"
    )

    def __init__(
        self,
        repository: OrderRepository,
        prompt: Prompt = _typer_prompt,
        echo: Echo = typer.echo,
    ):
        self.repository = repository
        self.prompt = prompt
        self.echo = echo
        self.conditions = default_conditions()
        self.tracker = ConditionTracker()

    def _confirm_override(self, group: ConditionGroup) -> bool:
        if not self.tracker.needs_confirmation(group):
            return True
        answer = self.prompt(f"{group.value} Already Specified. Do you want to Override? yes/no")
        return answer.strip().lower() != "no"

    def _apply(self, group: ConditionGroup, **fields: str) -> None:
        try:
            self.conditions.update(**fields)
        except ValidationError as e:
            self.echo(f"Invalid {group.value.lower()}: {_format_error(e)}")
            return
        self.tracker.mark_set(group)

    def _set_dates(self) -> None:
        start = self.prompt("Enter Starting Date: (format yyyy-mm-dd)")
        end = self.prompt("Enter End Date: (format yyyy-mm-dd)")
        self._apply(ConditionGroup.DATE, start=start, end=end)

    def _set_amounts(self) -> None:
        lower = self.prompt("1. Greater Than")
        upper = self.prompt("2. Less Than")
        self._apply(ConditionGroup.AMOUNT, lower_bound=lower, upper_bound=upper)

    def _set_rows(self) -> None:
        rows = self.prompt("How Many Rows do you want?")
        self._apply(ConditionGroup.ROWS, row_limit=rows)

    def retrieve(self, conditions: Conditions) -> List[Order]:
        orders = self.repository.fetch_orders(conditions)
        for order in orders:
            self.echo(order.summary())
        self.echo(f"{len(orders)} orders")
        return orders

    def run(self) -> Optional[List[Order]]:
        """
        Loop until the user retrieves with the current conditions (returns the
        orders) or returns to the main menu (returns ``None``).
        """
        setters = {
            1: (ConditionGroup.DATE, self._set_dates),
            2: (ConditionGroup.AMOUNT, self._set_amounts),
            3: (ConditionGroup.ROWS, self._set_rows),
        }
        while True:
            self.echo("Specify conditions for the data you want to view: ")
            self.echo(f"Current Conditions are: {self.conditions.summary()}")
            self.echo(self.MENU)
            choice = self.prompt("Choice").strip()

            if choice.isdigit() and int(choice) in setters:
                group, setter = setters[int(choice)]
                if self._confirm_override(group):
                    setter()
            elif choice == "4":
                self.echo("Retrieving All data")
                self.retrieve(default_conditions())
            elif choice == "5":
                self.echo(f"Retrieving Data with conditions: {self.conditions.summary()}")
                return self.retrieve(self.conditions)
            elif choice == "6":
                return None
            else:
                self.echo("Not a valid category")


class StatsPanel:
    """Menu of canned purchase statistics."""

    MENU = (
        "What do you want to do?\n"
        "1. Summarize Purchase Pattern\n"
        "2. Return to main menu"
    )

    def __init__(
        self,
        repository: OrderRepository,
        prompt: Prompt = _typer_prompt,
        echo: Echo = typer.echo,
        conditions: Optional[Conditions] = None,
    ):
        self.repository = repository
        self.prompt = prompt
        self.echo = echo
        self.conditions = conditions or stats_conditions()

    def show_pattern(self) -> None:
        pattern = summarize_purchases(self.repository, self.conditions)
        if pattern is None:
            self.echo(f"No orders match: {self.conditions.summary()}")
            return
        logger.debug(f"Purchase pattern: {pattern}")
        self.echo(f"You are purchasing every {pattern.cadence_days} days")
        self.echo(f"You are spending about ${pattern.average_total:.2f} per order")

    def run(self) -> None:
        self.echo(self.MENU)
        while True:
            choice = self.prompt("Choice").strip()
            if choice == "1":
                self.show_pattern()
                return
            if choice == "2":
                return
            self.echo("Not a Valid input. Try again.")
