"""Standard status messages and output handling for the commands."""

from __future__ import annotations

import dataclasses
import json
import sys
from collections.abc import Callable
from typing import Any, TypeVar

from termcolor import colored

T = TypeVar("T")


def _jsonable(data: Any) -> Any:
    to_dict = getattr(data, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return dataclasses.asdict(data)
    return data


def handle_command_output(
    data: T, json_output: bool, quiet: bool, print_fn: Callable[[T, bool], None]
) -> None:
    """Print data as pretty JSON, or hand it to print_fn."""
    if json_output:
        print(json.dumps(_jsonable(data), indent=2, ensure_ascii=False))
    else:
        print_fn(data, quiet)


def print_status(message: str, quiet: bool) -> None:
    if not quiet:
        print(colored(message, "blue", attrs=["bold"]))


def print_success(message: str, quiet: bool) -> None:
    if not quiet:
        print(colored(message, "green", attrs=["bold"]))


def print_warning(message: str, quiet: bool) -> None:
    if not quiet:
        print(colored(message, "yellow", attrs=["bold"]))


def print_error(message: str, quiet: bool) -> None:
    if not quiet:
        print(colored(message, "red", attrs=["bold"]), file=sys.stderr)


def init_command(command_name: str, quiet: bool) -> None:
    print_status(f"🔍 Running {command_name} analysis...", quiet)


def complete_command(command_name: str, success: bool, quiet: bool) -> None:
    if success:
        print_success(f"✅ {command_name} analysis completed", quiet)
    else:
        print_warning(f"⚠️ {command_name} analysis completed with issues", quiet)