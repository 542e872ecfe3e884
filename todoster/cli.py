#!/usr/bin/env python3
"""
TODOSTER - CLI Interface
========================
Command-line tool for a personal to-do list kept in one JSON file.

Usage:
    todo add "Feed gecko" --repeat 2
    todo list
    todo complete 0,2-3
    todo undo 1
    todo edit 1 --text "Feed the gecko" --clear-repeat
    todo delete 1-4,7
    todo delete 1-4,7 --confirm
    todo --file ./todos.json list

Indexes are 0-based and refer to positions in the list as shown by `list`.
They shift after a delete.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import Settings
from .errors import TodoError
from .manager import TodoManager
from .ranges import parse_index, parse_index_ranges, expand_ranges
from .schema import MAX_REPEAT_DAYS

logger = logging.getLogger("todoster")

COMMAND_TABLE = [
    ("todo", "List tasks (default)"),
    ("todo list", "List tasks"),
    ("todo list --json", "Print the task file contents as JSON"),
    ('todo add "<text>"', "Add a new task"),
    ('todo add "<text>" --repeat <days>', "Add repeating task"),
    ("todo complete <i1,i2,1-4>", "Mark task(s) complete (supports ranges)"),
    ("todo undo <index>", "Mark a task incomplete again"),
    ('todo edit <index> --text "<new>"', "Edit task text"),
    ("todo edit <index> --repeat <days>", "Change repeat interval"),
    ("todo edit <index> --clear-repeat", "Remove repeat interval"),
    ("todo delete <i1,i2,i3>", "Dry-run (shows what would be deleted)"),
    ("todo delete 1-4,7", "Supports ranges (inclusive)"),
    ("todo delete 0,2-3,7 --confirm", "Actually perform deletion"),
    ("todo --file <path> <command>", "Use a custom task file"),
]


def _positive_int(value: str) -> int:
    try:
        days = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of days: '{value}'")
    if not 0 < days <= MAX_REPEAT_DAYS:
        raise argparse.ArgumentTypeError(
            f"repeat interval must be between 1 and {MAX_REPEAT_DAYS} days, got {days}"
        )
    return days


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo",
        description="TODOSTER - JSON-backed to-do list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  todo add "Water plants" --repeat 3   Add a task that comes back 3 days after completion
  todo complete 0                      Mark task 0 complete
  todo delete 1-4,7                    Show what would be deleted
  todo delete 1-4,7 --confirm          Delete tasks 1, 2, 3, 4 and 7
  todo commands                        Show all commands
        """
    )
    parser.add_argument("-f", "--file", type=Path, help="Path to the task file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # LIST command
    list_parser = subparsers.add_parser("list", help="List tasks (incomplete first)")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # ADD command
    add_parser = subparsers.add_parser("add", help="Add a new task")
    add_parser.add_argument("text", help="Task text")
    add_parser.add_argument("-r", "--repeat", type=_positive_int, help="Repeat interval in days")

    # COMPLETE command
    complete_parser = subparsers.add_parser("complete", help="Mark task(s) complete")
    complete_parser.add_argument("indexes", help='Index or ranges, e.g. "0,2-4"')

    # UNDO command
    undo_parser = subparsers.add_parser("undo", help="Mark a task incomplete again")
    undo_parser.add_argument("index", help="Task index")

    # EDIT command
    edit_parser = subparsers.add_parser("edit", help="Edit an existing task")
    edit_parser.add_argument("index", help="Task index")
    edit_parser.add_argument("--text", help="New task text")
    edit_parser.add_argument("--repeat", type=_positive_int, help="New repeat interval in days")
    edit_parser.add_argument("--clear-repeat", action="store_true", help="Remove the repeat interval")

    # DELETE command
    delete_parser = subparsers.add_parser("delete", help="Delete task(s)")
    delete_parser.add_argument("indexes", help='Indexes or ranges, e.g. "0,2,5-7"')
    delete_parser.add_argument("--confirm", action="store_true", help="Actually delete (default is a dry run)")

    # COMMANDS command
    subparsers.add_parser("commands", help="Show a table of available commands")

    return parser


def setup_logging(level_name: str, verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr
    )


def print_command_table() -> None:
    print("=== Todoster Commands ===\n")
    for usage, description in COMMAND_TABLE:
        print(f"{usage:<45} {description}")
    print("\nIndexes are 0-based (first item = 0).")


def run(args: argparse.Namespace, manager: TodoManager) -> int:
    command = args.command or "list"

    if command == "list":
        if getattr(args, "json", False):
            print(manager.get_json_report())
        else:
            print(manager.get_list_report())

    elif command == "add":
        manager.add_task(args.text, repeat_days=args.repeat)
        print("Task added.")

    elif command == "complete":
        ranges = parse_index_ranges(args.indexes)
        indices = expand_ranges(ranges, len(manager.todo_list.items))
        for index, item in manager.complete_tasks(indices):
            print(f"Marked complete [{index}] {item.text}")

    elif command == "undo":
        index = parse_index(args.index)
        manager.undo_task(index)
        print(f"Task {index} marked incomplete.")

    elif command == "edit":
        index = parse_index(args.index)
        manager.edit_task(
            index,
            text=args.text,
            repeat_days=args.repeat,
            clear_repeat=args.clear_repeat
        )
        print(f"Task {index} updated.")

    elif command == "delete":
        ranges = parse_index_ranges(args.indexes)
        indices = expand_ranges(ranges, len(manager.todo_list.items))
        if not args.confirm:
            doomed = manager.preview_delete(indices)
            print("The following tasks would be deleted (run again with --confirm to proceed):\n")
            for index, item in doomed:
                print(f"[{index}] {item.text}")
            print("\nNothing deleted. Add --confirm to actually delete.")
        else:
            for index, item in manager.delete_tasks(indices):
                print(f"Deleted [{index}] {item.text}")

    elif command == "commands":
        print_command_table()

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env().with_file(args.file)
    setup_logging(settings.log_level, verbose=args.verbose)
    logger.debug(f"Using task file {settings.file_path}")

    manager = TodoManager(file_path=settings.file_path)

    try:
        return run(args, manager)
    except (TodoError, OSError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
