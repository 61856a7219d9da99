"""
Counting k-subsets of an n-element universe.

count() is exact and is the only counter used for rank arithmetic.
count_approx() and log_count() go through log-gamma and are for display and
estimates only.
"""
import logging
from functools import lru_cache

import numpy as np
from scipy.special import gammaln

from .errors import InvalidArgument
from .exact import as_exact

logger = logging.getLogger(__name__)


def check_space(n, k):
    '''Validate an (n, k) pair and return it as exact ints'''

    n = as_exact(n, 'n')
    k = as_exact(k, 'k')

    if n < 0 or k < 0 or n < k:
        raise InvalidArgument(
            f"For 'n choose k', n and k must be nonnegative with n >= k: {n = }, {k = }")

    return n, k


@lru_cache(maxsize=4096)
def _count(n, k):

    # C(n, k) == C(n, n - k); fewer factors on the short side
    k = min(k, n - k)
    result = 1

    for i in range(k):
        # result * (n - i) is divisible by (i + 1): it's C(n, i + 1) * (i + 1)
        result = result * (n - i) // (i + 1)

    return result


def count(n, k):
    """Exact number of k-element subsets of range(n)"""

    n, k = check_space(n, k)
    return _count(n, k)


def log_count(n, k):
    '''Natural log of C(n, k), via log-gamma. Approximate.'''

    n, k = _check_approx_args(n, k)
    return gammaln(n + 1) - gammaln(k + 1) - gammaln(n - k + 1)


def count_approx(n, k):
    """
    Approximate C(n, k) as a float using log-gamma differences.

    Accepts scalars or array-likes (numpy broadcasting rules apply) and
    returns a float or an ndarray accordingly. Values past the float range
    come back as inf. Never use this for ranks or partition boundaries.
    """
    with np.errstate(over='ignore'):
        result = np.exp(log_count(n, k))
    if np.ndim(result) == 0:
        return float(result)
    return result


def _check_approx_args(n, k):

    n_arr = np.asarray(n)
    k_arr = np.asarray(k)

    if not (np.issubdtype(n_arr.dtype, np.integer) and np.issubdtype(k_arr.dtype, np.integer)):
        # allow python ints beyond int64 and integral floats by the scalar path
        if n_arr.ndim == 0 and k_arr.ndim == 0:
            n_val, k_val = check_space(n, k)
            return float(n_val), float(k_val)
        raise InvalidArgument(f"n and k must be integer arrays, got {n_arr.dtype} and {k_arr.dtype}")

    if np.any(n_arr < 0) or np.any(k_arr < 0) or np.any(n_arr < k_arr):
        raise InvalidArgument(
            f"For 'n choose k', n and k must be nonnegative with n >= k: {n = }, {k = }")

    return n_arr.astype(np.float64), k_arr.astype(np.float64)
