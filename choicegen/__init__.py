# choicegen/__init__.py
"""
choicegen: exact counting, ranking, unranking and partitioned enumeration
of the k-element combinations of an n-element universe.
"""

__version__ = "0.1.0"

from .errors import (ChoiceGenError, InvalidArgument, InvalidCombination,
                     OutOfRange, GeneratorStateError)
from .counting import count, count_approx, log_count
from .rank_comb import (rank, unrank, rank_combination, generate_combination,
                        rank_combination_raw, generate_combination_raw)
from .generator import ChoiceGenerator, GeneratorState
from .partition import Partition, WorkerSlice, partition, resume, run_partitioned
from .space import CombinationSpace

__all__ = [
    "ChoiceGenError",
    "InvalidArgument",
    "InvalidCombination",
    "OutOfRange",
    "GeneratorStateError",
    "count",
    "count_approx",
    "log_count",
    "rank",
    "unrank",
    "rank_combination",
    "generate_combination",
    "rank_combination_raw",
    "generate_combination_raw",
    "ChoiceGenerator",
    "GeneratorState",
    "CombinationSpace",
    "Partition",
    "WorkerSlice",
    "partition",
    "resume",
    "run_partitioned",
]
