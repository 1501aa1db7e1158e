import os
import stat
from datetime import datetime
from pathlib import Path

from loguru import logger

from timeshell.config import LIST_TIME_FORMAT, MAX_REPLAY_DEPTH
from timeshell.history import get_history_item, show_history
from timeshell.parser import split_background


def builtin_cd(args, state):
    """Change the session working directory"""
    args, _ = split_background(args)

    if not args:
        state.cwd = Path.home()
        return 0

    if len(args) > 1:
        print("cd: too many arguments")
        return 1

    target = args[0]
    if target == "..":
        parent = state.cwd.parent
        if parent == state.cwd:
            print("cd: already at rock bottom")
            return 1
        state.cwd = parent
        return 0

    path = state.cwd / target
    try:
        exists, is_dir = path.exists(), path.is_dir()
    except OSError as e:
        print(f"cd: {target}: {e.strerror or e}")
        return 1

    if not exists:
        print(f'cd: directory "{target}" doesn\'t exist')
        return 1
    if not is_dir:
        print(f'cd: "{target}" is not a directory')
        return 1

    state.cwd = path
    return 0


def permission_string(path, is_dir):
    """Build the drwx column for one entry"""
    return "".join((
        "d" if is_dir else "-",
        "r" if os.access(path, os.R_OK) else "-",
        "w" if os.access(path, os.W_OK) else "-",
        "x" if os.access(path, os.X_OK) else "-",
    ))


def format_entry(entry):
    """
    One line of `list` output for an os.DirEntry.
    Returns: the line, or None if the entry vanished mid-listing
    """
    try:
        st = entry.stat()
    except OSError:
        # Dangling symlink: describe the link itself
        try:
            st = entry.stat(follow_symlinks=False)
        except FileNotFoundError:
            return None

    is_dir = stat.S_ISDIR(st.st_mode)
    modified = datetime.fromtimestamp(st.st_mtime).strftime(LIST_TIME_FORMAT)
    return f"{permission_string(entry.path, is_dir)} {st.st_size:10d} {modified} {entry.name}"


def builtin_list(args, state):
    """List the entries of the working directory with details"""
    try:
        with os.scandir(state.cwd) as entries:
            lines = [format_entry(entry) for entry in entries]
    except OSError as e:
        print(f'list: cannot read directory "{state.cwd}": {e.strerror or e}')
        return 1

    for line in lines:
        if line is not None:
            print(line)
    return 0


def builtin_ptime(args, state):
    """Print total time spent in child processes"""
    print(f"Total time spent in child processes: {state.total_ms / 1000.0:.4f} seconds")
    return 0


def builtin_history(args, state):
    """Show command history"""
    show_history(state)
    return 0


def builtin_replay(args, state, dispatch):
    """
    Re-run entry N of the history through `dispatch`.
    Returns: exit code of the lookup (the replayed command reports its own errors)
    """
    args, _ = split_background(args)

    if not args:
        print("^: no arguments found")
        return 1
    if len(args) > 1:
        print("^: too many arguments")
        return 1

    # Plain ASCII digits only: no sign, no "1_0", no other scripts
    number = args[0]
    index = int(number) if number.isascii() and number.isdigit() else 0
    if index <= 0:
        print("^: illegal argument")
        return 1

    line = get_history_item(state, index)
    if line is None:
        print(f'^: index "{index}" not found in history')
        return 1

    if state.replay_depth >= MAX_REPLAY_DEPTH:
        print("^: replay chain too deep")
        return 1

    logger.debug("replaying history entry {}: {!r}", index, line)
    state.replay_depth += 1
    try:
        dispatch(line, state)
    finally:
        state.replay_depth -= 1
    return 0


BUILTINS = {
    "cd": builtin_cd,
    "list": builtin_list,
    "ptime": builtin_ptime,
    "history": builtin_history,
}
