"""
Restartable, seekable lexicographic iteration over the k-subsets of range(n).

A ChoiceGenerator owns its cursor outright; hand one to each worker and no
locking is needed anywhere.
"""
import logging
from enum import Enum

from .counting import check_space, count
from .errors import GeneratorStateError, InvalidArgument
from .exact import as_exact
from .rank_comb import check_combination, generate_combination_raw, rank_combination_raw

logger = logging.getLogger(__name__)


class GeneratorState(Enum):
    FRESH = 'fresh'
    ACTIVE = 'active'
    EXHAUSTED = 'exhausted'


class ChoiceGenerator:
    """
    Generates (nonrecursively) the combinations of n choose k in
    lexicographic order, starting either at [0, 1, ..., k - 1] or at a seed.

    A valid combination is a tuple x of k ints with 0 <= x[j] < n and
    x[j] < x[j + 1]. start() (or the first next()) produces the first
    combination; next() produces the successor and returns None once the
    sequence, or the optional `limit` on the number produced, is exhausted.
    """

    def __init__(self, n, k, seed=None, limit=None):
        self._n, self._k = check_space(n, k)

        if seed is not None:
            seed = check_combination(seed, self._n, self._k)

        if limit is not None:
            limit = as_exact(limit, 'limit')
            if limit < 0:
                raise InvalidArgument(f"limit must be nonnegative, got {limit}")

        self._seed = seed
        self._limit = limit
        self._start_rank = None
        self._choice = []
        self._produced = 0
        self._state = GeneratorState.FRESH

    @classmethod
    def from_rank(cls, n, k, rank, limit=None):
        '''A generator whose first combination is the one at `rank`'''
        seed = generate_combination_raw(n, k, rank)
        return cls._seeded(n, k, seed, rank, limit)

    @classmethod
    def _seeded(cls, n, k, seed, rank, limit=None):
        '''Seeded generator whose seed is already known to sit at `rank`'''
        gen = cls(n, k, seed=seed, limit=limit)
        gen._start_rank = as_exact(rank, 'rank')
        return gen

    @property
    def n(self):
        return self._n

    @property
    def k(self):
        return self._k

    @property
    def state(self):
        return self._state

    @property
    def produced(self):
        '''How many combinations this generator has handed out'''
        return self._produced

    @property
    def limit(self):
        return self._limit

    @property
    def current(self):
        '''The most recently produced combination, or None'''
        if self._state is GeneratorState.ACTIVE:
            return tuple(self._choice)
        return None

    @property
    def rank(self):
        '''Rank of the current combination, if it is known without re-ranking'''
        if self._state is not GeneratorState.ACTIVE or self._start_rank is None:
            return None
        return self._start_rank + self._produced - 1

    def start(self):
        if self._state is not GeneratorState.FRESH:
            raise GeneratorStateError(f"start() called on a generator in state {self._state.value}")

        if self._seed is not None:
            first = self._seed
        else:
            first = tuple(range(self._k))
            self._start_rank = 0

        return self._activate(first)

    def seek_to(self, combination):
        '''Place the cursor at `combination` and produce it as the first result'''

        if self._state is not GeneratorState.FRESH:
            raise GeneratorStateError(f"seek_to() called on a generator in state {self._state.value}")

        combination = check_combination(combination, self._n, self._k)
        # a seek discards whatever the constructor knew about the start
        self._start_rank = None
        return self._activate(combination)

    def next(self):
        if self._state is GeneratorState.FRESH:
            return self.start()
        if self._state is GeneratorState.EXHAUSTED:
            return None

        if self._limit is not None and self._produced >= self._limit:
            return self._exhaust()

        # Scan from the right for the first index whose value is below its
        # maximum (i + n - k), then refill to its right with successive ints.
        diff = self._n - self._k
        choice = self._choice

        for i in range(self._k - 1, -1, -1):
            if choice[i] < i + diff:
                choice[i] += 1
                for j in range(i + 1, self._k):
                    choice[j] = choice[j - 1] + 1
                self._produced += 1
                return tuple(choice)

        return self._exhaust()

    def __iter__(self):
        while (choice := self.next()) is not None:
            yield choice

    def skip(self, steps):
        """
        Jump `steps` combinations ahead of the current one and return the
        combination landed on (None if that runs past the end).

        Costs one unranking, plus one ranking if the current rank is not
        already known. On a fresh generator the offset counts from the first
        combination, so skip(0) is start().
        """
        steps = as_exact(steps, 'steps')
        if steps < 0:
            raise InvalidArgument(f"steps must be nonnegative, got {steps}")

        if self._state is GeneratorState.FRESH:
            self.start()

        if self._state is GeneratorState.EXHAUSTED:
            return None
        if steps == 0:
            return tuple(self._choice)

        if self._limit is not None and self._produced + steps > self._limit:
            return self._exhaust()

        current_rank = self.rank
        if current_rank is None:
            current_rank = rank_combination_raw(self._choice, self._n, self._k)
            self._start_rank = current_rank - self._produced + 1

        target = current_rank + steps
        if target >= count(self._n, self._k):
            return self._exhaust()

        logger.debug(f"skip: {self._n} choose {self._k}, rank {current_rank} -> {target}")
        self._choice = list(generate_combination_raw(self._n, self._k, target))
        self._produced += steps
        return tuple(self._choice)

    def _activate(self, first):
        if self._limit == 0:
            return self._exhaust()
        self._choice = list(first)
        self._produced = 1
        self._state = GeneratorState.ACTIVE
        return tuple(first)

    def _exhaust(self):
        self._state = GeneratorState.EXHAUSTED
        self._choice = []
        return None

    def __repr__(self):
        return (f"{type(self).__name__}(n={self._n}, k={self._k}, "
                f"state={self._state.value}, current={self.current})")
