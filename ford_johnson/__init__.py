"""
Merge-Insertion Sort with Jacobsthal Insertion Order
====================================================

The Ford-Johnson algorithm[1], also known as the merge-insertion sort[2,3], sorts a list by
pairing up its items, ordering the pairs by their larger item, and then inserting the smaller
items into that "main chain" via binary search. The order in which the smaller items are
inserted is chosen from the Jacobsthal numbers so that every binary search stays within the
smallest possible number of comparisons for the length of the chain it searches.

This module provides two variants:

* :func:`sort` is the flat variant: pairs are ordered by a plain insertion sort instead of a
  recursive call, and short inputs (see :data:`INSERTION_SORT_THRESHOLD`) are sorted by
  insertion sort directly. It is close to, but not always at, the optimal comparison count.
* :func:`merge_insertion_sort` is the fully recursive algorithm, whose worst case is given by
  :func:`merge_insertion_max_comparisons`.

Items only need to support the ``<`` operator, and duplicates are allowed. Neither function
modifies its input.

>>> from ford_johnson import sort, merge_insertion_sort
>>> sort([3, 5, 9, 7, 4])
[3, 4, 5, 7, 9]
>>> # Inputs above the threshold go through pairing and Jacobsthal-ordered insertion:
>>> sort([32, 4, 8, 2, 18, 26], threshold=1)
[2, 4, 8, 18, 26, 32]
>>> # Any mutable sequence type can back the main chain:
>>> from collections import deque
>>> sort('DABEC', container=deque)
deque(['A', 'B', 'C', 'D', 'E'])
>>> merge_insertion_sort([2, 2, 1])
[1, 2, 2]

**References**

1. Ford, L. R., & Johnson, S. M. (1959). A Tournament Problem.
   The American Mathematical Monthly, 66(5), 387-389. https://doi.org/10.1080/00029890.1959.11989306
2. Knuth, D. E. (1998). The Art of Computer Programming: Volume 3: Sorting and Searching (2nd ed.).
   Addison-Wesley. https://cs.stanford.edu/~knuth/taocp.html#vol3
3. https://en.wikipedia.org/wiki/Merge-insertion_sort
4. https://oeis.org/A001045 (Jacobsthal numbers)

API
---

.. autoclass:: ford_johnson.SupportsLessThan

.. autodata:: ford_johnson.INSERTION_SORT_THRESHOLD

.. autofunction:: ford_johnson.sort

.. autofunction:: ford_johnson.merge_insertion_sort

.. autofunction:: ford_johnson.merge_insertion_max_comparisons

.. autofunction:: ford_johnson.jacobsthal

Author, Copyright and License
-----------------------------

Copyright © 2025 Hauke Dämpfling (haukex@zero-g.net)

Permission to use, copy, modify, and/or distribute this software for any
purpose with or without fee is hereby granted, provided that the above
copyright notice and this permission notice appear in all copies.

THE SOFTWARE IS PROVIDED “AS IS” AND THE AUTHOR DISCLAIMS ALL WARRANTIES
WITH REGARD TO THIS SOFTWARE INCLUDING ALL IMPLIED WARRANTIES OF
MERCHANTABILITY AND FITNESS. IN NO EVENT SHALL THE AUTHOR BE LIABLE FOR
ANY SPECIAL, DIRECT, INDIRECT, OR CONSEQUENTIAL DAMAGES OR ANY DAMAGES
WHATSOEVER RESULTING FROM LOSS OF USE, DATA OR PROFITS, WHETHER IN AN
ACTION OF CONTRACT, NEGLIGENCE OR OTHER TORTIOUS ACTION, ARISING OUT OF
OR IN CONNECTION WITH THE USE OR PERFORMANCE OF THIS SOFTWARE.
"""
from collections.abc import Generator, Sequence, MutableSequence, Iterable, Callable
from typing import Any, Generic, Protocol, TypeVar
from operator import itemgetter
from math import floor, ceil, log2

__all__ = ['SupportsLessThan', 'T', 'INSERTION_SORT_THRESHOLD', 'jacobsthal', 'sort',
           'merge_insertion_sort', 'merge_insertion_max_comparisons']

class SupportsLessThan(Protocol):
    """Anything that can be ordered with the ``<`` operator, which is the only comparison used."""
    def __lt__(self, other :Any, /) -> bool: ...

#: A type of object that can be sorted by :func:`sort` and :func:`merge_insertion_sort`.
T = TypeVar('T', bound=SupportsLessThan)

#: Inputs of this length or shorter are sorted by :func:`sort` with a plain insertion sort,
#: since pairing them up isn't worth the overhead. Can be overridden per call.
INSERTION_SORT_THRESHOLD :int = 10

#: A callable that builds a new mutable sequence from an iterable, such as ``list`` or ``collections.deque``.
Container = Callable[[Iterable[Any]], MutableSequence[Any]]

def jacobsthal(n :int) -> int:
    """Returns the ``n``-th Jacobsthal number, ``J(n) = J(n-1) + 2*J(n-2)`` with ``J(0)=0, J(1)=1``.

    :param n: Zero-based index into the sequence.
    :return: The Jacobsthal number, i.e. 0, 1, 1, 3, 5, 11, 21, 43, 85, ...
    """
    if n<0:
        raise ValueError("n may not be negative")
    prev :int = 0
    cur :int = 1
    for _ in range(n):
        prev, cur = cur, cur + 2*prev
    return prev

# Generates the Jacobsthal numbers J(start), J(start+1), ... without end.
def _jacobsthal_numbers(start :int = 0) -> Generator[int, None, None]:
    prev :int = 0
    cur :int = 1
    i :int = 0
    while True:
        if i >= start:
            yield prev
        prev, cur = cur, cur + 2*prev
        i += 1

# In-place insertion sort on a mutable sequence, comparing only with `<`. Shifting stops at
# the first item that isn't larger than the key, so items with equal keys keep their order.
def _insertion_sort(array :MutableSequence[Any], key :Callable[[Any], Any] = lambda x: x) -> None:
    for i in range(1, len(array)):
        item = array[i]
        j = i - 1
        while j >= 0 and key(item) < key(array[j]):
            array[j+1] = array[j]
            j -= 1
        array[j+1] = item

# Splits the array into (low, high) pairs of adjacent items, one comparison per pair.
# Also returns the unpaired last item of an odd-length array, as a list of zero or one items.
def _make_pairs(array :Sequence[T]) -> tuple[list[tuple[T, T]], list[T]]:
    pairs :list[tuple[T, T]] = []
    for i in range(0, len(array)-1, 2):
        a, b = array[i], array[i+1]
        pairs.append( (b, a) if b < a else (a, b) )
    return pairs, ( [ array[-1] ] if len(array) % 2 else [] )

# Returns a copy of the pairs, stably sorted by their high item.
def _sort_pairs(pairs :Sequence[tuple[T, T]]) -> list[tuple[T, T]]:
    rv = list(pairs)
    _insertion_sort(rv, key=itemgetter(1))
    return rv

# Builds the main chain from the high items of the sorted pairs and the pend list from their
# low items. The first low item goes straight to the front of the main chain: it is no larger
# than its partner, which is the smallest high item, so no comparison is needed.
def _build_chains(pairs :Sequence[tuple[T, T]], container :Container) -> tuple[MutableSequence[T], list[T]]:
    main_chain = container( high for _, high in pairs )
    pend = [ low for low, _ in pairs ]
    if pend:
        main_chain.insert(0, pend[0])
    return main_chain, pend

# Returns the order in which the pend items 1 .. pend_length-1 are to be inserted. The indices
# are partitioned into consecutive groups whose upper bounds are the Jacobsthal numbers J(3),
# J(4), J(5), ... = 3, 5, 11, 21, ..., with the last bound capped at the number of remaining
# items, and each group runs from its largest index down to its smallest. For example, with 12
# pend items this gives 3 2 1, 5 4, 11 10 9 8 7 6.
def _insertion_plan(pend_length :int) -> list[int]:
    remaining = pend_length - 1
    if remaining < 1:
        return []
    plan :list[int] = []
    prev :int = 0
    for bound in _jacobsthal_numbers(3):
        bound = min(bound, remaining)
        plan.extend(range(bound, prev, -1))
        if bound == remaining:
            break
        prev = bound
    assert len(plan) == remaining
    return plan

# Binary search for the lower bound of the item in a sorted array: returns the first index whose
# item is not less than `item`, i.e. new items are inserted before existing equal ones.
# Needs at most ceil(log2(len(array)+1)) comparisons.
def _lower_bound(array :Sequence[T], item :T) -> int:
    left, right = 0, len(array)-1
    while left <= right:
        mid = left + floor((right-left)/2)
        if array[mid] < item:
            left = mid + 1
        else:
            right = mid - 1
    return left

def _bounded_insert(main_chain :MutableSequence[T], item :T) -> None:
    main_chain.insert(_lower_bound(main_chain, item), item)

def sort(array :Sequence[T], *, threshold :int = INSERTION_SORT_THRESHOLD, container :Container = list) -> MutableSequence[T]:
    """Merge-insertion sort with Jacobsthal insertion order, with flat sorting of the pairs.

    :param array: Sequence to sort. Its items must support ``<``; duplicates are allowed.
    :param threshold: Sequences of at most this length are sorted by insertion sort instead.
    :param container: Type of sequence to build the main chain in and return, e.g. ``list`` or
        ``collections.deque``. It must be constructible from an iterable and support ``insert``.
    :return: A new sequence of the given container type holding the items in ascending order.
    """
    if len(array) <= 1:
        return container(array)
    if len(array) <= threshold:
        rv = container(array)
        _insertion_sort(rv)
        return rv

    pairs, leftover = _make_pairs(array)
    main_chain, pend = _build_chains(_sort_pairs(pairs), container)
    for i in _insertion_plan(len(pend)):
        _bounded_insert(main_chain, pend[i])
    for item in leftover:
        _bounded_insert(main_chain, item)

    assert len(main_chain) == len(array)
    return main_chain

# Helper that generates the group sizes for _make_groups, which are twice the Jacobsthal
# numbers from J(2) on: 2, 2, 6, 10, 22, 42, ... (https://oeis.org/A014113). The sums of
# sizes of every two adjacent groups form a sequence of powers of two.
def _group_sizes() -> Generator[int, None, None]:
    for j in _jacobsthal_numbers(2):
        yield 2*j

# Groups and reorders items to be inserted via binary search in merge_insertion_sort:
# groups are taken in order, but the items within each group are reversed.
def _make_groups(array :Sequence[T]) -> Sequence[tuple[int, T]]:
    items = list(enumerate(array))
    rv :list[tuple[int, T]] = []
    i :int = 0
    for size in _group_sizes():
        group = items[i:i+size]
        group.reverse()
        rv.extend(group)
        if len(group)<size:
            break
        i += size
    return rv

# Binary search returning the index **after** any items equal to `item`, to be used as
# `array.insert(index, item)`.
def _bin_insert_index(array :Sequence[T], item :T) -> int:
    left, right = 0, len(array)-1
    while left <= right:
        mid = left + floor((right-left)/2)
        if item < array[mid]:
            right = mid - 1
        else:
            left = mid + 1
    return left

# Finds the index of an object in an array by object identity (instead of equality).
def _ident_find(array :Sequence[Any], item :Any) -> int:
    for i,e in enumerate(array):
        if e is item:
            return i
    raise IndexError(f"failed to find item {item!r} in array")

class _Pair(Generic[T]):
    """A larger item together with the smaller item it was compared to, ordered by the larger item."""
    __slots__ = ('larger', 'smaller')
    def __init__(self, larger :T, smaller :T):
        self.larger = larger
        self.smaller = smaller
    def __lt__(self, other :'_Pair[T]') -> bool:
        return self.larger < other.larger
    def __repr__(self) -> str:
        return f"_Pair({self.larger!r}, {self.smaller!r})"

def merge_insertion_sort(array :Sequence[T]) -> list[T]:
    """Merge-Insertion Sort (Ford-Johnson algorithm), fully recursive.

    For inputs without duplicates, this performs no more than
    :func:`merge_insertion_max_comparisons` comparisons.

    :param array: Sequence to sort. Its items must support ``<``; duplicates are allowed.
    :return: A shallow copy of the array sorted in ascending order.
    """
    if len(array)<2:
        return list(array)
    if len(array)==2:
        return list(array) if array[0] < array[1] else [array[1], array[0]]

    # 1. Group the items into ⌊n/2⌋ pairs, leaving one unpaired if n is odd, and compare each pair.
    pairs :list[_Pair[T]] = [ _Pair(array[i+1], array[i]) if array[i] < array[i+1] else _Pair(array[i], array[i+1])
        for i in range(0, len(array)-1, 2) ]

    # 2. Recursively sort the pairs by their larger items.
    larger = merge_insertion_sort(pairs)

    # 3. Build the main chain from the larger items, placing the smaller item of the first pair at
    #    its start. Every other entry still carries its smaller item, to be inserted before it.
    main_chain :list[list[T]] = [ [ larger[0].smaller ], [ larger[0].larger ] ] + [ [ p.larger, p.smaller ] for p in larger[1:] ]
    assert all( len(i)==2 for i in main_chain[2:] )

    # 4. Insert the smaller items in Jacobsthal group order, each via a binary search over the
    #    part of the main chain before its partner. The leftover item of an odd-length input is
    #    treated as the last smaller item and is the only entry with one element; it has no
    #    partner, so it is searched across the whole main chain as it is at that time.
    for _,pair in _make_groups( main_chain[2:] + ( [[array[-1]]] if len(array) % 2 else [] ) ):
        if len(pair)==1:
            item = pair[0]
            idx = _bin_insert_index([ i[0] for i in main_chain ], item)
        else:
            # the insertions shift indices, so locate the partner by identity
            pair_idx = _ident_find(main_chain, pair)
            item = pair.pop()
            idx = _bin_insert_index([ i[0] for i in main_chain[:pair_idx] ], item)
        main_chain.insert(idx, [item])
    assert all( len(i)==1 for i in main_chain )

    return [ i[0] for i in main_chain ]

def merge_insertion_max_comparisons(n :int) -> int:
    """Returns the maximum number of comparisons that :func:`merge_insertion_sort` will perform depending on the input length.

    :param n: The number of items in the list to be sorted.
    :return: The expected maximum number of comparisons.
    """
    if n<0:
        raise ValueError("must specify zero or more items")
    # Formula from https://en.wikipedia.org/wiki/Merge-insertion_sort (the sum version should work too)
    return n*ceil(log2(3*n/4)) - floor((2**floor(log2(6*n)))/3) + floor(log2(6*n)/2) if n else 0
