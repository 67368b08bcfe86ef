"""Utility functions for the HorseVPN launcher."""

import subprocess
import sys
from dataclasses import dataclass
from typing import Sequence, Tuple
from yaspin import yaspin
from yaspin.spinners import Spinners


class Colors:
    """ANSI color codes for colored terminal output."""
    BLUE = "\033[94m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


def print_color(message: str, color: str, end: str = "\n", file=None) -> None:
    """Print a message in color to the terminal."""
    print(f"{color}{message}{Colors.ENDC}", end=end, file=file or sys.stdout)


def print_info(message: str) -> None:
    """Print an informational message in blue."""
    print_color(message, Colors.BLUE)


def print_success(message: str) -> None:
    """Print a success message in green."""
    print_color(message, Colors.GREEN)


def print_warning(message: str) -> None:
    """Print a warning message in yellow to stderr."""
    print_color(message, Colors.YELLOW, file=sys.stderr)


def print_error(message: str) -> None:
    """Print an error message in red to stderr."""
    print_color(message, Colors.RED, file=sys.stderr)


@dataclass
class CommandResult:
    """Outcome of an external command, with both output streams kept apart."""
    returncode: int
    stdout: str = ""
    stderr: str = ""

    def last_error_line(self) -> str:
        """Return the last non-empty line written to stderr, if any."""
        lines = [line.strip() for line in self.stderr.splitlines() if line.strip()]
        return lines[-1] if lines else ""


def run_command(args: Sequence[str], verbose: bool = False) -> Tuple[bool, CommandResult]:
    """
    Run an external command given as an argument list, never through a shell.

    Args:
        args: The program followed by its arguments
        verbose: Whether to print the command being run

    Returns:
        tuple: (success, result) - success is True when the exit status is 0
    """
    if verbose:
        print_info(f"Running command: {subprocess.list2cmdline(list(args))}")

    try:
        completed = subprocess.run(
            list(args),
            text=True,
            capture_output=True,
            check=False
        )
    except FileNotFoundError as e:
        return False, CommandResult(returncode=127, stderr=f"Command not found: {e.filename or args[0]}")
    except OSError as e:
        return False, CommandResult(returncode=126, stderr=f"Error executing command: {e}")

    result = CommandResult(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or ""
    )
    if verbose and result.stdout.strip():
        print_info(f"Command output:\n{result.stdout.rstrip()}")
    return result.returncode == 0, result


def with_spinner(text: str, enabled: bool = True):
    """
    Context manager to run a block with a spinner.

    The spinner only renders on an interactive stdout; otherwise the block
    runs silently so stdout keeps exactly one result line.

    Usage:
        with with_spinner("Connecting..."):
            dial()
    """
    class SpinnerWrapper:
        def __enter__(self):
            self.active = enabled and sys.stdout.isatty()
            if self.active:
                self.spinner = yaspin(Spinners.dots, text=text)
                self.spinner.start()
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            # stop() clears the spinner line, leaving nothing behind on stdout.
            if self.active:
                self.spinner.stop()
            return False  # Don't suppress exceptions

    return SpinnerWrapper()
