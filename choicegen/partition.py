"""
Split the rank space [0, C(n, k)) into contiguous slices, one per worker.

Each nonempty slice is unranked once to get its seed; after that a worker
only takes successor steps, bounded by the size of its slice.
"""
import bisect
import logging
from dataclasses import dataclass
from functools import cached_property

from joblib import Parallel, delayed

from .counting import check_space, count
from .errors import InvalidArgument, OutOfRange
from .exact import as_exact, mul_div
from .generator import ChoiceGenerator
from .rank_comb import generate_combination_raw

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkerSlice:
    worker: int
    n: int
    k: int
    start: int  # first rank owned
    stop: int   # one past the last rank owned
    seed: tuple = None  # combination at `start`, None for an empty slice

    @property
    def size(self):
        # not __len__: slice sizes can exceed sys.maxsize
        return self.stop - self.start

    @property
    def empty(self):
        return self.stop == self.start

    def generator(self):
        '''A fresh generator over exactly this slice'''

        if self.empty:
            return ChoiceGenerator(self.n, self.k, limit=0)
        return ChoiceGenerator._seeded(self.n, self.k, self.seed, self.start, limit=self.size)


@dataclass(frozen=True)
class Partition:
    n: int
    k: int
    total: int
    slices: tuple

    def __len__(self):
        return len(self.slices)

    def __getitem__(self, index):
        return self.slices[index]

    def __iter__(self):
        return iter(self.slices)

    @cached_property
    def boundaries(self):
        """The W + 1 boundary ranks, from 0 to total (computed once)"""
        return tuple(s.start for s in self.slices) + (self.total,)

    def generators(self):
        return [s.generator() for s in self.slices]

    def worker_for_rank(self, rank):
        '''Index of the worker owning `rank`'''

        rank = as_exact(rank, 'rank')
        if not 0 <= rank < self.total:
            raise OutOfRange(f"rank must be in [0, {self.total}), got {rank}")

        # rightmost boundary at or before rank; empty slices share a start
        # with the next nonempty one and are skipped by bisect_right
        return bisect.bisect_right(self.boundaries, rank) - 1


def partition(n, k, worker_count):
    """
    Divide the combinations of n choose k among `worker_count` workers.

    Worker w owns ranks [total * w // W, total * (w + 1) // W). Slices differ
    in size by at most one; when W exceeds the count, the surplus workers get
    empty slices.
    """
    n, k = check_space(n, k)
    total = count(n, k)

    try:
        worker_count = as_exact(worker_count, 'worker_count')
    except InvalidArgument:
        raise InvalidArgument(f"worker_count must be a positive integer, got {worker_count!r}") from None
    if worker_count <= 0:
        raise InvalidArgument(f"worker_count must be a positive integer, got {worker_count}")

    boundaries = [mul_div(total, w, worker_count) for w in range(worker_count + 1)]
    slices = []

    for w, (start, stop) in enumerate(zip(boundaries, boundaries[1:])):
        seed = generate_combination_raw(n, k, start) if stop > start else None
        slices.append(WorkerSlice(w, n, k, start, stop, seed))
        logger.debug(f"partition: worker {w} owns [{start}, {stop}) from {seed}")

    return Partition(n, k, total, tuple(slices))


def resume(n, k, rank, stop=None):
    """
    Rebuild a generator from a saved rank token.

    The generator starts at `rank` and stops before `stop` (the end of the
    space when omitted).
    """
    n, k = check_space(n, k)
    total = count(n, k)
    stop = total if stop is None else as_exact(stop, 'stop')
    rank = as_exact(rank, 'rank')

    if not 0 <= rank < total:
        raise OutOfRange(f"rank must be in [0, {total}) for {n} choose {k}, got {rank}")
    if not rank <= stop <= total:
        raise OutOfRange(f"stop must be in [{rank}, {total}], got {stop}")

    return ChoiceGenerator.from_rank(n, k, rank, limit=stop - rank)


def _drain(worker_slice, func):

    gen = worker_slice.generator()

    if func is None:
        drained = sum(1 for _ in gen)
        logger.debug(f"worker {worker_slice.worker}: drained {drained} combinations")
        return drained

    return [func(choice) for choice in gen]


def run_partitioned(n, k, worker_count, func=None, n_jobs=1, backend='loky'):
    """
    Partition n choose k and drain every slice, in parallel via joblib.

    With `func`, each worker returns [func(c) for c in its slice]; without
    it, each worker returns the number of combinations it walked. Results
    come back as a list in worker order. For process backends `func` has to
    be picklable.
    """
    parts = partition(n, k, worker_count)
    logger.info(f"running {n} choose {k} ({parts.total} combinations) on "
                f"{worker_count} workers, {n_jobs = }, {backend = }")

    return Parallel(n_jobs=n_jobs, backend=backend)(
        delayed(_drain)(worker_slice, func) for worker_slice in parts)
