"""
Inversion Counting via Merge Sort
=================================

An *inversion* in a sequence is a pair of indices ``i < j`` where the item at ``i`` is
strictly greater than the item at ``j``. The number of inversions measures how far a
sequence is from being sorted: zero for a sorted sequence, ``n*(n-1)/2`` for a strictly
descending one. Counting them pair by pair takes quadratic time, but a merge sort can count
them in ``O(n log n)`` as a byproduct of merging, because whenever an item is taken from the
right half of a merge, every item still waiting in the left half is greater than it.

This module provides two such counters:

* :func:`count_divide_and_conquer` is the classic top-down merge sort, which always splits
  at the midpoint and performs ``⌈log₂ n⌉`` levels of merges regardless of the input.
* :func:`count_natural` is a natural merge sort: it first finds the runs that are already
  in non-decreasing order (:func:`find_runs`) and then merges adjacent runs pass by pass,
  so an input made of ``k`` sorted runs only needs ``⌈log₂ k⌉`` passes.

Both return the same count for the same input, and both sort the sequence in place as a
side effect. Equal items are never counted as inverted.

>>> from inversion_count import count_divide_and_conquer, count_natural
>>> data = [5, 3, 4, 1, 2]
>>> count_divide_and_conquer(data)
8
>>> data
[1, 2, 3, 4, 5]
>>> count_natural([1, 3, 5, 2, 4, 6])
3
>>> # A Comparator can be used to impose a different order, here descending:
>>> count_natural([1, 2, 3], lambda a, b: b - a)
3

See Also
--------

* :mod:`inversion_count.benchmark` compares the two counters on random and presorted input,
  also available on the command line as ``python -m inversion_count``.

API
---

.. autoclass:: inversion_count.T

.. autoclass:: inversion_count.Comparator

.. autofunction:: inversion_count.count_divide_and_conquer

.. autofunction:: inversion_count.count_natural

.. autofunction:: inversion_count.find_runs

.. autofunction:: inversion_count.count_brute_force

.. autofunction:: inversion_count.max_inversions

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
import logging
from collections.abc import Generator, Sequence, MutableSequence, Callable
from typing import TypeVar, Optional

#: A type of object that can be counted and sorted by the functions in this module.
#: Items must either support the ``<=`` operator with a consistent total order,
#: or a :class:`Comparator` must be supplied.
T = TypeVar('T')

#: An optional user-supplied function to compare two items, in the same style as
#: :func:`functools.cmp_to_key`: it must return a negative number if the first item
#: orders before the second, zero if they are equal, and a positive number otherwise.
#: It must define a total order, otherwise the results are undefined.
Comparator = Callable[[T, T], int]

# The "less than or equal" predicate that all of the algorithms below are written against.
_LessEqual = Callable[[T, T], bool]

logger = logging.getLogger(__name__)

# Helper to turn the optional Comparator into a "less than or equal" predicate.
def _less_equal(comparator :Optional[Comparator]) -> _LessEqual:
    if comparator is None:
        return lambda a, b: a <= b
    return lambda a, b: comparator(a, b) <= 0

def _check_sequence(seq :Optional[Sequence[T]]) -> None:
    if seq is None:
        raise TypeError("sequence may not be None")

# Merges the two adjacent sorted partitions seq[lo:mid] and seq[mid:hi] into sorted order,
# using scratch[lo:hi] as the merge target and copying the result back into seq[lo:hi].
# Returns the number of inverted pairs with one item in each partition.
def _merge_count(seq :MutableSequence[T], scratch :list[T], lo :int, mid :int, hi :int, le :_LessEqual) -> int:
    count :int = 0
    i, j, k = lo, mid, lo
    while i < mid and j < hi:
        if le(seq[i], seq[j]):
            # ties go to the left, so equal items are never inverted
            scratch[k] = seq[i]
            i += 1
        else:
            # seq[i:mid] is sorted, so every remaining left item is greater than seq[j]
            scratch[k] = seq[j]
            j += 1
            count += mid - i
        k += 1
    # Exactly one side has items left; those are already accounted for.
    if i < mid:
        scratch[k:hi] = seq[i:mid]
    else:
        scratch[k:hi] = seq[j:hi]
    seq[lo:hi] = scratch[lo:hi]
    return count

# Recursive worker for count_divide_and_conquer; all levels share the one scratch buffer.
def _count_range(seq :MutableSequence[T], scratch :list[T], lo :int, hi :int, le :_LessEqual) -> int:
    if hi - lo < 2:
        return 0
    mid = lo + (hi - lo) // 2
    left = _count_range(seq, scratch, lo, mid, le)
    right = _count_range(seq, scratch, mid, hi, le)
    return left + right + _merge_count(seq, scratch, lo, mid, hi, le)

def count_divide_and_conquer(seq :MutableSequence[T], comparator :Optional[Comparator] = None) -> int:
    """Count the inversions in a sequence with a top-down merge sort.

    The sequence is split at its midpoint, both halves are counted and sorted recursively,
    and the halves are then merged while counting the inversions between them. The split
    does not take any existing order in the data into account.

    :param seq: The sequence to count; it must support slicing, like a :class:`list`.
        **It is sorted in place as a side effect.**
    :param comparator: Optional comparison function as described in :class:`Comparator`.
    :return: The number of inversions the sequence had.
    :raises TypeError: If ``seq`` is ``None``.
    """
    _check_sequence(seq)
    if len(seq) < 2:
        return 0
    # One buffer for the whole call; each merge only touches its own range of it.
    scratch :list[T] = list(seq)
    return _count_range(seq, scratch, 0, len(seq), _less_equal(comparator))

# Returns the start index of every maximal non-decreasing run, in order.
def _run_starts(seq :Sequence[T], le :_LessEqual) -> list[int]:
    starts :list[int] = [0] if seq else []
    for i in range(1, len(seq)):
        if not le(seq[i-1], seq[i]):
            starts.append(i)
    return starts

def find_runs(seq :Sequence[T], comparator :Optional[Comparator] = None) -> list[tuple[int, int]]:
    """Find the runs of a sequence, i.e. its maximal contiguous non-decreasing subsequences.

    The runs partition the sequence: there is one run for a sorted sequence, one run per
    item for a strictly descending sequence, and none for an empty sequence.

    :param seq: The sequence to scan; it is not modified.
    :param comparator: Optional comparison function as described in :class:`Comparator`.
    :return: A list of ``(start, end)`` tuples, where each run is ``seq[start:end]``.
    :raises TypeError: If ``seq`` is ``None``.
    """
    _check_sequence(seq)
    starts = _run_starts(seq, _less_equal(comparator))
    return list(zip(starts, starts[1:] + [len(seq)]))

# Generator that performs the merge passes of the natural merge sort, yielding the number
# of inversions found in each pass. ``bounds`` holds the start index of every current run
# followed by len(seq), so run r is seq[bounds[r]:bounds[r+1]]; it is updated in place and
# when the generator is exhausted it is [0, len(seq)] (or [0] for an empty sequence).
def _merge_passes(seq :MutableSequence[T], scratch :list[T], bounds :list[int], le :_LessEqual) -> Generator[int, None, None]:
    passes :int = 0
    while len(bounds) > 2:
        runs = len(bounds) - 1
        count :int = 0
        for r in range(0, runs-1, 2):
            count += _merge_count(seq, scratch, bounds[r], bounds[r+1], bounds[r+2], le)
        # Each merged pair keeps its first start; an odd run at the end carries over
        # unchanged, but its start was at an even index and the sentinel was just dropped.
        del bounds[1::2]
        if runs % 2:
            bounds.append(len(seq))
        passes += 1
        logger.debug("merge pass %d: %d runs -> %d, %d inversions", passes, runs, len(bounds)-1, count)
        yield count

def count_natural(seq :MutableSequence[T], comparator :Optional[Comparator] = None) -> int:
    """Count the inversions in a sequence with a natural merge sort.

    The sequence is first scanned for runs that are already sorted (see :func:`find_runs`).
    Then, in each pass, adjacent pairs of runs are merged from left to right while counting
    the inversions between them, which halves the number of runs (rounding up), until only
    one run is left. An input consisting of ``k`` runs therefore needs ``⌈log₂ k⌉`` passes,
    which makes this counter faster than :func:`count_divide_and_conquer` on partially
    ordered data, and about the same on random data.

    :param seq: The sequence to count; it must support slicing, like a :class:`list`.
        **It is sorted in place as a side effect.**
    :param comparator: Optional comparison function as described in :class:`Comparator`.
    :return: The number of inversions the sequence had.
    :raises TypeError: If ``seq`` is ``None``.
    """
    _check_sequence(seq)
    le = _less_equal(comparator)
    bounds = _run_starts(seq, le)
    logger.debug("found %d runs in %d items", len(bounds), len(seq))
    if len(bounds) < 2:
        return 0
    bounds.append(len(seq))
    scratch :list[T] = list(seq)
    return sum(_merge_passes(seq, scratch, bounds, le))

def count_brute_force(seq :Sequence[T], comparator :Optional[Comparator] = None) -> int:
    """Count the inversions in a sequence by comparing every pair of items.

    This takes quadratic time and is only intended as a reference for small inputs.

    :param seq: The sequence to count; it is not modified.
    :param comparator: Optional comparison function as described in :class:`Comparator`.
    :return: The number of inversions in the sequence.
    :raises TypeError: If ``seq`` is ``None``.
    """
    _check_sequence(seq)
    le = _less_equal(comparator)
    return sum( 1 for i in range(len(seq)) for j in range(i+1, len(seq)) if not le(seq[i], seq[j]) )

def max_inversions(n :int) -> int:
    """Returns the largest possible number of inversions in a sequence of the given length,
    which is the number of inversions of a strictly descending sequence.

    :param n: The number of items in the sequence.
    :return: ``n*(n-1)/2``
    """
    if n<0:
        raise ValueError("must specify zero or more items")
    return n*(n-1)//2
