"""Console interface for tasklist.

This module provides the interactive menu shell that drives a TaskManager.
The menu offers the following commands:
1. Add task
2. Find task
3. Edit task
4. Remove task
5. Print tasks
6. Store tasks to file
7. Read tasks from file
8. Exit

The shell reads one line per prompt, shows the manager's messages, and keeps
running after any error until the user exits or input ends.
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional, TextIO

from tasklist.config import Settings
from tasklist.errors import TaskListError
from tasklist.logging_setup import parse_level, setup_logging
from tasklist.manager import TaskManager
from tasklist.models import Priority, Task

logger = logging.getLogger(__name__)

MENU_OPTIONS = [
    "Add task",
    "Find task",
    "Edit task",
    "Remove task",
    "Print tasks",
    "Store tasks to file",
    "Read tasks from file",
    "Exit",
]

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConsoleShell:
    """Interactive menu loop around a TaskManager.

    Attributes:
        manager: TaskManager the commands operate on
        input_func: Callable returning the next line of user input
        output: Stream that prompts and messages are written to
        default_file: File used when a file name prompt is left empty
    """

    def __init__(
        self,
        manager: TaskManager,
        input_func: Optional[Callable[[], str]] = None,
        output: Optional[TextIO] = None,
        default_file: str = "tasks.json",
    ):
        self.manager = manager
        self.input_func = input_func if input_func is not None else input
        self.output = output if output is not None else sys.stdout
        self.default_file = default_file
        self._commands = {
            "1": self.cmd_add,
            "2": self.cmd_find,
            "3": self.cmd_edit,
            "4": self.cmd_remove,
            "5": self.cmd_print,
            "6": self.cmd_store,
            "7": self.cmd_read,
        }

    def echo(self, message: str = "", end: str = "\n") -> None:
        print(message, end=end, file=self.output, flush=True)

    def print_menu(self) -> None:
        """Print the numbered list of commands."""
        for index, option in enumerate(MENU_OPTIONS, start=1):
            self.echo(f"{index}. {option}")

    def prompt(self, query: str) -> str:
        """Show a prompt and return the trimmed line the user entered.

        Raises:
            EOFError: If input has ended
        """
        self.echo(query, end="")
        return self.input_func().strip()

    def read_task(self) -> Task:
        """Ask for name, description and priority and build a new task.

        An unrecognized priority is reported and replaced by LOW.
        """
        name = self.prompt("Enter new task name: ")
        description = self.prompt("Enter new task description: ")
        raw_priority = self.prompt("Enter new task priority: ")

        priority = Priority.parse(raw_priority)
        if priority is Priority.LOW and raw_priority.lower() != "low":
            self.echo('Invalid priority, setting to "Low"')

        return Task.create(name, description, priority)

    def prompt_file_name(self, query: str) -> str:
        return self.prompt(query) or self.default_file

    def cmd_add(self) -> None:
        task = self.read_task()
        duplicate = self.manager.find(task.name) is not None
        self.manager.add(task)
        self.echo(f'Task "{task.name}" added successfully')
        if duplicate:
            self.echo(f'Note: a task named "{task.name}" already exists, only the first one can be found by name')

    def cmd_find(self) -> None:
        name = self.prompt("Enter task name to find: ")
        task = self.manager.get(name)
        if task is None:
            self.echo(f'Task with name "{name}" doesn\'t exist')
            return
        self.echo("Task found!")
        self.echo(task.render())

    def cmd_edit(self) -> None:
        name = self.prompt("Enter task name to edit: ")
        # Check before asking for the new fields
        if self.manager.find(name) is None:
            self.echo(f'Task with name "{name}" doesn\'t exist')
            return
        task = self.read_task()
        self.echo(self.manager.edit(name, task))

    def cmd_remove(self) -> None:
        name = self.prompt("Enter task name to remove: ")
        self.echo(self.manager.remove(name))

    def cmd_print(self) -> None:
        rendered = self.manager.list()
        if not rendered:
            self.echo("No tasks found.")
            return
        for text in rendered:
            self.echo(text)

    def cmd_store(self) -> None:
        file_name = self.prompt_file_name("Enter file name to store data in: ")
        self.echo(self.manager.save(file_name))

    def cmd_read(self) -> None:
        file_name = self.prompt_file_name("Enter file name to read data from: ")
        self.echo(self.manager.load(file_name))

    def process_command(self, command: str) -> bool:
        """Run one menu command.

        Args:
            command: Menu index as entered by the user

        Returns:
            False if the user chose to exit, True otherwise

        Raises:
            EOFError: If input ends while the command is prompting
        """
        if command == str(len(MENU_OPTIONS)):
            return False

        handler = self._commands.get(command)
        if handler is None:
            self.echo("I don't understand this command :(")
            return True

        try:
            handler()
        except TaskListError as exc:
            logger.debug("Command %s failed: %s", command, exc)
            self.echo(str(exc))
        return True

    def run(self) -> None:
        """Print the menu and process commands until exit or end of input."""
        self.print_menu()
        try:
            while self.process_command(self.prompt("\nEnter command index: ")):
                pass
        except (EOFError, KeyboardInterrupt):
            self.echo()
        logger.debug("Console loop finished with %d task(s) in memory", len(self.manager))


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="tasklist",
        description="Interactive in-memory task list"
    )
    parser.add_argument(
        "--load",
        metavar="FILE",
        help="Read tasks from FILE before showing the menu"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level for messages on stderr (default: $TASKLIST_LOG_LEVEL or WARNING)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the console.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:]

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    settings = Settings.from_env()

    try:
        level = parse_level(args.log_level or settings.log_level)
    except ValueError as exc:
        parser.error(str(exc))
    setup_logging(console_level=level, log_file=settings.log_file)

    manager = TaskManager()

    if args.load:
        try:
            print(manager.load(args.load))
        except TaskListError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    shell = ConsoleShell(manager, default_file=settings.default_file)
    shell.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
