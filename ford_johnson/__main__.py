"""
Command-line front end: sorts positive integers with :func:`ford_johnson.sort` and reports the
time taken with a ``list`` and with a ``collections.deque`` backing the main chain.

Usage: ``python -m ford_johnson [--threshold N] [--recursive] NUMBER [NUMBER ...]``
"""
import argparse
import time
from collections import deque
from collections.abc import Callable, Sequence
from typing import Any, Optional
from . import sort, merge_insertion_sort, INSERTION_SORT_THRESHOLD

#: Largest value accepted on the command line.
MAX_VALUE :int = 2147483647
#: How many values the "Before" and "After" lines show.
PREVIEW_LENGTH :int = 5

def positive_int(text :str) -> int:
    """Argument type accepting only plain decimal digits with a value from 1 to :data:`MAX_VALUE`."""
    if not text or not text.isascii() or not text.isdigit():
        raise argparse.ArgumentTypeError(f"not a positive integer: {text!r}")
    value = int(text)
    if not 0 < value <= MAX_VALUE:
        raise argparse.ArgumentTypeError(f"out of range: {text!r}")
    return value

def preview(values :Sequence[int]) -> str:
    rv = ' '.join( str(v) for v in list(values)[:PREVIEW_LENGTH] )
    return rv + ' [...]' if len(values) > PREVIEW_LENGTH else rv

def _timed(func :Callable[[], Any]) -> tuple[Any, float]:
    start = time.perf_counter()
    rv = func()
    return rv, (time.perf_counter() - start) * 1e6

def main(argv :Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog='ford_johnson', description='Merge-insertion sort of positive integers')
    parser.add_argument('numbers', metavar='NUMBER', type=positive_int, nargs='+', help='positive integers to sort')
    parser.add_argument('-t', '--threshold', type=int, default=INSERTION_SORT_THRESHOLD,
        help=f'sort inputs of at most this length with insertion sort (default: {INSERTION_SORT_THRESHOLD})')
    parser.add_argument('-r', '--recursive', action='store_true', help='use the fully recursive variant')
    args = parser.parse_args(argv)

    numbers :list[int] = args.numbers
    print(f"Before: {preview(numbers)}")
    if args.recursive:
        by_list, list_us = _timed(lambda: merge_insertion_sort(numbers))
        by_deque, deque_us = _timed(lambda: merge_insertion_sort(deque(numbers)))
    else:
        by_list, list_us = _timed(lambda: sort(numbers, threshold=args.threshold))
        by_deque, deque_us = _timed(lambda: sort(numbers, threshold=args.threshold, container=deque))
    assert list(by_list) == list(by_deque)
    print(f"After:  {preview(by_list)}")
    print(f"Time to process a range of {len(by_list)} elements with list : {list_us:.5f} us")
    print(f"Time to process a range of {len(by_deque)} elements with deque : {deque_us:.5f} us")
    return 0

if __name__ == '__main__':
    raise SystemExit(main())
