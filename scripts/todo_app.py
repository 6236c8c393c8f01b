#!/usr/bin/env python3
"""
Todo - line-oriented command-line todo list.

Reads commands from stdin, applies them to a TodoManager and prints results to
stdout. Todos are persisted through the configured storage backend.

Commands:
    add <title>       Add a new todo
    list              List todos with their positions
    toggle <index>    Flip completion of the todo at index
    delete <index>    Delete the todo at index
    help              Show commands
    exit              Quit

Environment Variables:
    TODO_STORAGE_BACKEND (optional): Storage backend to use ("json" or "memory").
                                     Default: "json"
    TODO_LOG_PATH (optional): Custom JSON file path (relative or absolute).
                              Default: ~/Documents/todos.json
    DEBUG (optional): If set, enables debug logging to stderr.

Exit Codes:
    0: Clean exit (exit command, end of input, or Ctrl-C)
    1: Invalid storage configuration or unexpected error
"""
from __future__ import annotations

import os
import sys
import traceback
from typing import TextIO

from storage import get_storage_backend
from storage.protocol import Todo
from todo_manager import IndexOutOfRangeError, InvalidInputError, TodoManager

# Version check
if sys.version_info < (3, 10):
    print("Error: Python 3.10+ required", file=sys.stderr)
    sys.exit(1)

PROMPT: str = "Enter a command (add, list, toggle, delete, help, exit):"
DONE_MARK: str = "✅"
PENDING_MARK: str = "❌"

HELP_TEXT: str = """Commands:
  add <title>       Add a new todo
  list              List todos with their positions
  toggle <index>    Flip completion of the todo at index
  delete <index>    Delete the todo at index
  help              Show this help
  exit              Quit"""


def format_todo(index: int, todo: Todo) -> str:
    """Return the display line for a todo, e.g. '0: buy milk [❌]'."""
    mark = DONE_MARK if todo.is_completed else PENDING_MARK
    return f"{index}: {todo.title} [{mark}]"


def parse_index(argument: str | None) -> int | None:
    """Parse a position argument, returning None if it is not an integer."""
    if argument is None:
        return None
    try:
        return int(argument)
    except ValueError:
        return None


def handle_command(manager: TodoManager, line: str, out: TextIO) -> bool:
    """Apply one command line to manager.

    Args:
        manager: The todo manager to operate on.
        line: Raw input line.
        out: Stream for user-facing output.

    Returns:
        False if the loop should stop, True otherwise.
    """
    tokens = line.split()
    if not tokens:
        return True

    command = tokens[0].lower()
    arguments = tokens[1:]

    if command == "exit":
        return False

    if command == "help":
        print(HELP_TEXT, file=out)
    elif command == "list":
        todos = manager.list_todos()
        if not len(todos):
            print("No todos yet.", file=out)
        for index, todo in todos:
            print(format_todo(index, todo), file=out)
    elif command == "add":
        if not arguments:
            print("Title is required for add command.", file=out)
            return True
        try:
            manager.add(" ".join(arguments))
        except InvalidInputError:
            print("Title is required for add command.", file=out)
    elif command in ("toggle", "delete"):
        index = parse_index(arguments[0] if arguments else None)
        if index is None:
            print(f"Index is required for {command} command.", file=out)
            return True
        try:
            if command == "toggle":
                manager.toggle_completion(index)
            else:
                manager.delete(index)
        except IndexOutOfRangeError:
            print(f"No todo at index {index}.", file=out)
    else:
        print(f"Unknown command: {tokens[0]}. Type 'help' for commands.", file=out)

    return True


def run(manager: TodoManager, stdin: TextIO | None = None, out: TextIO | None = None) -> None:
    """Read and apply commands until exit, end of input, or Ctrl-C."""
    stdin = stdin if stdin is not None else sys.stdin
    out = out if out is not None else sys.stdout

    try:
        while True:
            print(PROMPT, file=out)
            line = stdin.readline()
            if not line:
                break
            if not handle_command(manager, line, out):
                break
    except KeyboardInterrupt:
        print(file=out)


def main() -> None:
    """Main entry point for the todo command line."""
    try:
        backend = get_storage_backend()
        if os.environ.get("DEBUG"):
            print(f"Using {type(backend).__name__}", file=sys.stderr)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        manager = TodoManager(backend)
        run(manager)
    except Exception as e:
        # Unexpected errors - preserve stack trace for debugging
        print(f"Unexpected error: {e!r}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
