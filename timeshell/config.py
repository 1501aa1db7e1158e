import os

# Diagnostics go to stderr through loguru; WARNING keeps the prompt clean
LOG_LEVEL = os.getenv("TIMESHELL_LOG_LEVEL", "WARNING").upper()

# Chunk size for the pipe copy loop
COPY_BUFFER_SIZE = int(os.getenv("TIMESHELL_COPY_BUFFER", "65536"))

# Max nesting of "^ N" replays before a chain is cut off
MAX_REPLAY_DEPTH = int(os.getenv("TIMESHELL_MAX_REPLAY_DEPTH", "32"))

PROMPT_FORMAT = "[{cwd}]: "

# Jan 04, 2019 09:44 (12-hour clock, no AM/PM)
LIST_TIME_FORMAT = "%b %d, %Y %I:%M"
