"""
Rank/unrank k-subsets of range(n) in lexicographic order.

Ranks are exact Python ints. Unranking never inverts the counting
polynomial in floating point; each position is found by a binary search
over exact binomial counts, so it works the same for any k.
"""
import logging
from itertools import pairwise

from ..counting import check_space, count
from ..errors import InvalidCombination, OutOfRange
from ..exact import as_exact

logger = logging.getLogger(__name__)


def check_combination(combination, n, k=None):
    '''Return combination as a tuple of ints, or raise InvalidCombination'''

    try:
        combination = tuple(as_exact(v, 'combination entry') for v in combination)
    except (TypeError, ValueError) as e:
        raise InvalidCombination(f"not a sequence of integers: {combination!r}") from e

    if k is not None and len(combination) != k:
        raise InvalidCombination(
            f"expected {k} entries, got {len(combination)}: {combination}")

    for prev, current in pairwise(combination):
        if prev >= current:
            raise InvalidCombination(f"entries must be strictly increasing: {combination}")

    if combination and (combination[0] < 0 or combination[-1] >= n):
        raise InvalidCombination(f"entries must lie in [0, {n}): {combination}")

    return combination


def rank_combination(combination, sorted_items):
    '''rank a subset of sorted_items (order of sorted_items is the universe order)'''

    n = len(sorted_items)
    index_map = {item: idx for idx, item in enumerate(sorted_items)}

    try:
        indexes = sorted(index_map[e] for e in combination)
    except KeyError as e:
        raise InvalidCombination(f"{e.args[0]!r} is not in the universe") from None

    return rank_combination_raw(tuple(indexes), n)


def rank_combination_raw(combination, n, k=None):
    '''
    Lexicographic rank of a strictly increasing tuple of indexes in range(n).

    For position i, every smaller value v in (prev, x_i) would have left
    C(n - v - 1, r - 1) completions. Those terms telescope to
    C(n - prev - 1, r) - C(n - x_i, r).
    '''

    n = as_exact(n, 'n')
    combination = check_combination(combination, n, k)
    k = len(combination)
    check_space(n, k)
    rank = 0

    for i, (prev, current) in enumerate(pairwise((-1, *combination))):
        r = k - i
        rank += count(n - prev - 1, r) - count(n - current, r)

    return rank


def generate_combination(sorted_items, k, rank):

    n = len(sorted_items)
    return tuple(sorted_items[i] for i in generate_combination_raw(n, k, rank))


def generate_combination_raw(n, k, rank):
    """
    The combination of range(n) with lexicographic rank `rank`.

    Position by position: with `budget` ranks left to skip, the previous
    value `prev` and r values still to place, the combinations whose next
    value is below v number C(n - prev - 1, r) - C(n - v, r). The chosen
    value is the largest v for which that is <= budget, found by bisection
    on v since C(n - v, r) falls as v grows.
    """
    n, k = check_space(n, k)
    rank = as_exact(rank, 'rank')
    total = count(n, k)

    if not 0 <= rank < total:
        raise OutOfRange(f"rank must be in [0, {total}) for {n} choose {k}, got {rank}")

    combination = []
    budget = rank
    prev = -1

    for r in range(k, 0, -1):
        block = count(n - prev - 1, r)
        target = block - budget  # need C(n - v, r) >= target

        lo, hi = prev + 1, n - r
        while lo < hi:
            mid = (lo + hi + 1) // 2
            if count(n - mid, r) >= target:
                lo = mid
            else:
                hi = mid - 1

        budget -= block - count(n - lo, r)
        combination.append(lo)
        prev = lo

    return tuple(combination)


def rank(n, k, combination):
    """rank() with (n, k, combination) argument order"""
    return rank_combination_raw(combination, n, k)


def unrank(n, k, rank):
    """unrank() with (n, k, rank) argument order"""
    return generate_combination_raw(n, k, rank)
