import sys

from loguru import logger

from timeshell.builtin import BUILTINS, builtin_replay
from timeshell.config import PROMPT_FORMAT
from timeshell.executor import run_external
from timeshell.history import add_to_history, init_readline
from timeshell.log import configure_logging
from timeshell.parser import tokenize
from timeshell.session import SessionState


def prompt(state):
    """Generate shell prompt"""
    return PROMPT_FORMAT.format(cwd=state.cwd)


def route(line, state):
    """
    Record a line in history and run it: built-in, history replay,
    exit, or external command.
    """
    add_to_history(state, line)

    tokens = tokenize(line)
    if not tokens:
        return

    cmd, args = tokens[0], tokens[1:]

    if cmd == "exit":
        sys.exit(0)

    # "^3" is the same as "^ 3"
    if cmd.startswith("^") and len(cmd) > 1:
        cmd, args = "^", [cmd[1:]] + args

    if cmd == "^":
        builtin_replay(args, state, route)
    elif cmd in BUILTINS:
        logger.debug("builtin {} {}", cmd, args)
        BUILTINS[cmd](args, state)
    else:
        elapsed = run_external(tokens, str(state.cwd))
        logger.debug("{} took {:.1f} ms", cmd, elapsed)
        state.add_time(elapsed)


def main_loop(state=None):
    """Main shell loop"""
    configure_logging()
    init_readline()
    state = state or SessionState.create()

    while True:
        try:
            line = input(prompt(state))
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        if not line:
            continue

        try:
            route(line, state)
        except KeyboardInterrupt:
            print()
        except Exception as e:
            logger.opt(exception=e).debug("dispatch failed for {!r}", line)
            print(f"timeshell: unexpected error: {e}")
