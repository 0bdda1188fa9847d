import argparse
import re
import sys
import time

import utils
from utils import FatalError, die_message, log_with_time, vlog, truncate_word
from colorama import Fore
from signature_index import SignatureIndex
from dictionary import load_dictionary

# argparse wording for an option given without its value
_MISSING_VALUE = re.compile(r"argument (\S+): expected one argument")


class ArgumentParser(argparse.ArgumentParser):
    """argparse that raises instead of exiting on a bad invocation."""

    def error(self, message):
        m = _MISSING_VALUE.match(message)
        if m:
            message = f'"{m.group(1).split("/")[0]}" flag expects an argument'
        raise FatalError(message)


def build_parser(prog=None):
    parser = ArgumentParser(prog=prog, description="Look up dictionary anagrams of each WORD")
    parser.add_argument(
        "-d",
        "--dict",
        dest="dictionaries",
        action="append",
        default=[],
        metavar="DICT",
        help="Load anagram dictionary from a file or http(s) URL (may be repeated)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("words", nargs="*", metavar="WORD", help="Words to find anagrams of")
    return parser


class AnagramContext:
    """Everything one run owns: the index and the words to query.

    Used as a context manager so the index is released on every exit path.
    """

    def __init__(self, words=()):
        self.index = SignatureIndex()
        self.words = list(words)

    def load(self, sources):
        for source in sources:
            load_dictionary(self.index, source)

    def query_all(self, out=None):
        for word in self.words:
            print_anagrams(self.index, word, out)

    def close(self):
        words, nodes = len(self.index), self.index.node_count
        self.index.clear()
        vlog(f"Released index ({words} words, {nodes} nodes)")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def print_anagrams(index, word, out=None):
    """Print the header for ``word`` and every dictionary entry sharing its letters."""
    out = out if out is not None else sys.stdout
    bucket = index.lookup(truncate_word(word))
    print(f"Anagrams of {word}:", file=out)
    for entry in bucket or ():
        print(f"\t{entry}", file=out)


def parse_invocation(argv=None, prog=None):
    """Options and words may be intermixed; a leftover argument is an unknown flag."""
    args, extras = build_parser(prog).parse_known_intermixed_args(argv)
    if extras:
        raise FatalError(f'unknown flag "{extras[0]}"')
    return args


def run(argv=None, prog=None):
    """Parse ``argv``, load dictionaries, answer queries. Returns the exit status, also for -h."""
    utils.start_time = time.time()
    try:
        args = parse_invocation(argv, prog)
    except FatalError as e:
        print(die_message(e, sys.stderr), file=sys.stderr)
        return 1
    except SystemExit as e:
        return e.code or 0
    utils.VERBOSE = args.verbose
    if not args.dictionaries and args.words:
        log_with_time("No dictionary loaded; every query will be empty (use -d DICT)", color=Fore.YELLOW)

    with AnagramContext(args.words) as ctx:
        try:
            ctx.load(args.dictionaries)
            t0 = time.time()
            ctx.query_all()
            vlog(f"Answered {len(ctx.words)} queries", t0)
        except FatalError as e:
            ctx.close()
            print(die_message(e, sys.stderr), file=sys.stderr)
            return 1
    return 0


def main():
    sys.exit(run(sys.argv[1:], prog="anagrams"))
