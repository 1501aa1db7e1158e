import sys

from loguru import logger

try:
    import readline
except ImportError:
    readline = None


def init_readline():
    """Configure readline line editing for the interactive prompt"""
    if readline is None:
        logger.debug("readline unavailable, using plain input()")
        return
    if not sys.stdin.isatty():
        return

    try:
        readline.parse_and_bind("set editing-mode emacs")

        # Arrow keys walk through lines typed in this session
        readline.parse_and_bind("\\e[A: previous-history")
        readline.parse_and_bind("\\e[B: next-history")

        # Ctrl+Left/Right jump between words
        readline.parse_and_bind("\\e[1;5D: backward-word")
        readline.parse_and_bind("\\e[1;5C: forward-word")
    except Exception as e:
        print(f"Warning: Could not configure readline: {e}", file=sys.stderr)


def add_to_history(state, line):
    """Append a raw input line to the session history"""
    state.history.append(line)


def get_history_item(state, index):
    """
    Look up a replay target by 1-based index.
    The newest entry (the replay request itself) is never a valid target.
    Returns: stored line or None
    """
    if 1 <= index < len(state.history):
        return state.history[index - 1]
    return None


def show_history(state):
    """Print the whole session history"""
    print("-- Command History --")
    for i, line in enumerate(state.history, start=1):
        print(f"{i} : {line}")
