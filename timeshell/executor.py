import subprocess
import threading
import time

from loguru import logger

from timeshell.config import COPY_BUFFER_SIZE
from timeshell.parser import split_background, split_pipe


class IllegalCommand(Exception):
    """Command line that cannot be turned into a process"""


def _now_ms():
    return time.perf_counter() * 1000.0


def _spawn(args, cwd, **streams):
    """Start one child process. Spawn failures become IllegalCommand."""
    if not args:
        raise IllegalCommand("empty command")
    try:
        p = subprocess.Popen(args, cwd=cwd, **streams)
    except OSError as e:
        raise IllegalCommand(str(e)) from e
    logger.debug("spawned pid {} in {}: {}", p.pid, cwd, args)
    return p


def _wait(procs):
    """Wait for every process; Ctrl+C interrupts the children, not the shell"""
    for p in procs:
        while True:
            try:
                p.wait()
                break
            except KeyboardInterrupt:
                print()


def _relay(src, dst):
    """
    Copy everything from src to dst, then close both ends.
    Stops early if the reader went away.
    Returns: number of bytes copied
    """
    copied = 0
    try:
        while True:
            chunk = src.read1(COPY_BUFFER_SIZE)
            if not chunk:
                break
            dst.write(chunk)
            dst.flush()
            copied += len(chunk)
    except BrokenPipeError:
        logger.debug("pipe reader exited after {} bytes", copied)
    finally:
        src.close()
        try:
            dst.close()
        except BrokenPipeError:
            pass
    logger.debug("relayed {} bytes", copied)
    return copied


def run_single(args, cwd, wait=True):
    """
    Run one external command with the terminal's streams.
    Returns: elapsed ms (spawn only when not waiting)
    """
    start = _now_ms()
    p = _spawn(args, cwd)
    if wait:
        _wait([p])
        logger.debug("pid {} exited with {}", p.pid, p.returncode)
    return _now_ms() - start


def run_piped(left, right, cwd, wait=True):
    """
    Run `left | right`: left reads the terminal, right writes to it,
    and the shell copies left's output into right's input.
    Returns: elapsed ms
    """
    if not left or not right:
        raise IllegalCommand("missing command around '|'")

    start = _now_ms()
    producer = _spawn(left, cwd, stdout=subprocess.PIPE)
    try:
        consumer = _spawn(right, cwd, stdin=subprocess.PIPE)
    except IllegalCommand:
        # Nobody will read this; let the producer hit a broken pipe
        producer.stdout.close()
        raise

    if wait:
        try:
            _relay(producer.stdout, consumer.stdin)
        except KeyboardInterrupt:
            print()
        _wait([producer, consumer])
        logger.debug("pipe exited with {} | {}", producer.returncode, consumer.returncode)
    else:
        relay = threading.Thread(
            target=_relay,
            args=(producer.stdout, consumer.stdin),
            name=f"relay-{producer.pid}-{consumer.pid}",
            daemon=True,
        )
        relay.start()
    return _now_ms() - start


def run_external(tokens, cwd):
    """
    Execute an external command line: one command or `a | b`,
    optionally in the background with a trailing "&".
    Returns: elapsed ms, whatever was measured when something failed
    """
    start = _now_ms()
    tokens, background = split_background(tokens)
    wait = not background

    try:
        pipe = split_pipe(tokens)
        if pipe is None:
            return run_single(tokens, cwd, wait=wait)

        left, right = pipe
        return run_piped(left, right, cwd, wait=wait)
    except IllegalCommand as e:
        logger.debug("illegal command {}: {}", tokens, e)
        print("Illegal command")
    except Exception as e:
        logger.opt(exception=e).debug("failed to run {}", tokens)
        print("Error: something happened")
    return _now_ms() - start
