"""timeshell - an interactive shell that keeps time on its child processes."""

__version__ = "0.1.0"
