from dataclasses import dataclass

from .counting import check_space, count
from .generator import ChoiceGenerator
from .partition import partition
from .rank_comb import rank_combination_raw, generate_combination_raw


@dataclass(frozen=True)
class CombinationSpace:
    """The C(n, k) combinations of range(n), in lexicographic order"""

    n: int
    k: int

    def __post_init__(self):
        n, k = check_space(self.n, self.k)
        object.__setattr__(self, 'n', n)
        object.__setattr__(self, 'k', k)

    def __contains__(self, combination):
        try:
            self.rank(combination)
        except ValueError:
            return False
        return True

    @property
    def count(self):
        return count(self.n, self.k)

    @property
    def first(self):
        return tuple(range(self.k))

    @property
    def last(self):
        return tuple(range(self.n - self.k, self.n))

    def rank(self, combination):
        return rank_combination_raw(combination, self.n, self.k)

    def unrank(self, rank):
        return generate_combination_raw(self.n, self.k, rank)

    def generator(self, start_rank=None, limit=None):
        if start_rank is None:
            return ChoiceGenerator(self.n, self.k, limit=limit)
        return ChoiceGenerator.from_rank(self.n, self.k, start_rank, limit=limit)

    def partition(self, worker_count):
        return partition(self.n, self.k, worker_count)
