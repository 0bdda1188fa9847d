import time
import requests
from colorama import Fore

from utils import DOWNLOAD_TIMEOUT, FatalError, log_with_time, vlog, truncate_word


def is_url(source):
    return source.startswith(("http://", "https://"))


def load_lines(index, lines):
    """Insert one record per line into ``index``; return how many were inserted.

    The line terminator is not part of the stored word and blank lines are
    not records. Long lines are clipped before the signature is taken, so the
    stored word and its key always agree.
    """
    count = 0
    for line in lines:
        word = truncate_word(line.rstrip("\r\n"))
        if not word:
            continue
        index.insert(word, word)
        count += 1
    return count


def fetch_dictionary_text(url):
    try:
        resp = requests.get(url, timeout=DOWNLOAD_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as e:
        vlog(f"Download of {url} failed: {e}")
        raise FatalError(f'Failed to open "{url}"') from e
    return resp.text


def load_dictionary(index, source):
    """Load the dictionary at ``source`` (a path or an http(s) URL) into ``index``."""
    t0 = time.time()
    vlog(f"⟳ Loading dictionary {source}…")
    if is_url(source):
        count = load_lines(index, fetch_dictionary_text(source).splitlines())
    else:
        try:
            f = open(source, "r", encoding="utf-8", errors="replace")
        except OSError as e:
            raise FatalError(f'Failed to open "{source}"') from e
        with f:
            count = load_lines(index, f)
    vlog(f"Dictionary {source} loaded ({count} words, {index.node_count} nodes)", t0)
    if count == 0:
        log_with_time(f"Dictionary {source} has no words", color=Fore.YELLOW)
    return count
