# --- utils.py ---

import sys
import time
from colorama import Fore, Style, init

init()

# Longest record kept, counting the terminator slot of the original buffer
MAX_WORD_LENGTH = 128

# Letters a-z, one child slot each
ALPHA_SIZE = 26

# Seconds to wait on a dictionary download
DOWNLOAD_TIMEOUT = 10

VERBOSE = False
start_time = None


class FatalError(Exception):
    """Unrecoverable condition: the run stops and exits non-zero."""


def truncate_word(text):
    """Clip ``text`` to the longest record the index stores."""
    return text[:MAX_WORD_LENGTH - 1]


def log_with_time(msg, color=Fore.LIGHTBLUE_EX):
    """Print ``msg`` to stderr with a timestamp."""
    global start_time
    if start_time is None:
        start_time = time.time()
    elapsed = time.time() - start_time
    mins = int(elapsed // 60)
    secs = elapsed % 60
    timestamp = Style.DIM + f"[{mins:02}:{secs:06.3f}]" + Style.RESET_ALL
    print(f"{timestamp} {color}{msg}{Style.RESET_ALL}", file=sys.stderr, flush=True)

def vlog(msg, t0=None):
    if VERBOSE:
        if t0 is not None:
            elapsed = time.time() - t0
            log_with_time(f"{msg} (took {elapsed:.3f}s)")
        else:
            log_with_time(msg)

def die_message(msg, stream=None):
    """One-line diagnostic; red only when ``stream`` is a terminal."""
    line = f"ERROR: {msg}"
    if stream is not None and stream.isatty():
        return f"{Fore.RED}{line}{Style.RESET_ALL}"
    return line
