import logging
import sys
import unittest
from itertools import chain, combinations
from math import comb

from ..errors import InvalidArgument, OutOfRange
from ..generator import ChoiceGenerator
from ..partition import partition, resume, run_partitioned
from ..rank_comb import rank, unrank

logger = logging.getLogger(__name__)


def double_sum(choice):
    return 2 * sum(choice)


class TestPartition(unittest.TestCase):

    def check_cover(self, n, k, workers):
        parts = partition(n, k, workers)
        total = comb(n, k)

        self.assertEqual(len(parts), workers)
        self.assertEqual(parts.total, total)
        self.assertEqual(parts.boundaries[0], 0)
        self.assertEqual(parts.boundaries[-1], total)

        for prev, current in zip(parts, parts[1:]):
            self.assertEqual(prev.stop, current.start)

        sizes = [s.size for s in parts]
        self.assertEqual(sum(sizes), total)
        self.assertLessEqual(max(sizes) - min(sizes), 1)

        streamed = list(chain.from_iterable(parts.generators()))
        self.assertEqual(streamed, list(combinations(range(n), k)))
        logger.debug(f"{n} choose {k} over {workers} workers: {sizes = }")

    def test_completeness_small(self):
        for n, k, workers in ((6, 3, 1), (6, 3, 3), (6, 3, 7), (10, 3, 4),
                              (9, 4, 13), (7, 0, 2), (5, 5, 3), (12, 2, 5)):
            with self.subTest(n=n, k=k, workers=workers):
                self.check_cover(n, k, workers)

    def test_more_workers_than_combinations(self):
        parts = partition(4, 4, 3)
        self.assertEqual([s.size for s in parts], [0, 0, 1])
        self.assertTrue(parts[0].empty)
        self.assertIsNone(parts[0].seed)
        self.assertIsNone(parts[0].generator().next())
        self.assertEqual(parts[2].seed, (0, 1, 2, 3))

    def test_seeds_are_unranked_boundaries(self):
        parts = partition(30, 5, 6)
        for s in parts:
            self.assertEqual(rank(30, 5, s.seed), s.start)

    def test_boundaries_multiply_before_divide(self):
        parts = partition(6, 3, 3)  # 20 combinations
        self.assertEqual(parts.boundaries, (0, 6, 13, 20))

    def test_large_space_boundaries(self):
        n, k, workers = 20000, 3, 8
        total = comb(n, k)
        parts = partition(n, k, workers)
        for w, s in enumerate(parts):
            self.assertEqual(s.start, total * w // workers)
            self.assertEqual(s.seed, unrank(n, k, s.start))

        # the last combination of each worker directly precedes the next seed
        for prev, current in zip(parts, parts[1:]):
            last = unrank(n, k, prev.stop - 1)
            self.assertLess(last, current.seed)
            gen = ChoiceGenerator(n, k, seed=last)
            gen.start()
            self.assertEqual(gen.next(), current.seed)

    def test_worker_slice_generator_stops_at_boundary(self):
        parts = partition(20000, 3, 1000)
        gen = parts[3].generator()
        produced = list(gen)
        self.assertEqual(len(produced), parts[3].size)
        self.assertEqual(produced[0], parts[3].seed)
        self.assertEqual(rank(20000, 3, produced[-1]), parts[4].start - 1)

    def test_worker_for_rank(self):
        parts = partition(4, 2, 10)  # 6 combinations, 4 empty workers
        owners = [parts.worker_for_rank(r) for r in range(6)]
        for r, w in enumerate(owners):
            self.assertTrue(parts[w].start <= r < parts[w].stop)
        with self.assertRaises(OutOfRange):
            parts.worker_for_rank(6)

    def test_boundaries_computed_once(self):
        parts = partition(30, 4, 9)
        self.assertIs(parts.boundaries, parts.boundaries)
        self.assertEqual(parts.worker_for_rank(parts.boundaries[5]), 5)

    def test_slice_size_beyond_maxsize(self):
        parts = partition(20000, 10, 2)
        self.assertGreater(parts[0].size, sys.maxsize)
        self.assertEqual(parts[0].size + parts[1].size, parts.total)
        gen = parts[1].generator()
        self.assertEqual(gen.start(), parts[1].seed)
        self.assertEqual(gen.rank, parts[1].start)

    def test_invalid_worker_count(self):
        for workers in (0, -3, 2.5, None):
            with self.subTest(workers=workers):
                with self.assertRaises(InvalidArgument):
                    partition(6, 3, workers)

    def test_invalid_space(self):
        with self.assertRaises(InvalidArgument):
            partition(2, 3, 2)


class TestResume(unittest.TestCase):

    def test_resume_from_token(self):
        gen = resume(6, 3, 15)
        self.assertEqual(list(gen), list(combinations(range(6), 3))[15:])

    def test_resume_with_stop(self):
        gen = resume(10, 3, 40, stop=45)
        self.assertEqual(list(gen), list(combinations(range(10), 3))[40:45])

    def test_resume_out_of_range(self):
        with self.assertRaises(OutOfRange):
            resume(6, 3, 20)
        with self.assertRaises(OutOfRange):
            resume(6, 3, 5, stop=4)
        with self.assertRaises(OutOfRange):
            resume(6, 3, 5, stop=21)


class TestRunPartitioned(unittest.TestCase):

    def test_counts_sequential(self):
        counts = run_partitioned(9, 3, 4, n_jobs=1)
        self.assertEqual(sum(counts), comb(9, 3))
        self.assertEqual(len(counts), 4)

    def test_func_threading(self):
        results = run_partitioned(8, 3, 3, func=sum, n_jobs=2, backend='threading')
        self.assertEqual(list(chain.from_iterable(results)),
                         [sum(c) for c in combinations(range(8), 3)])

    def test_func_processes(self):
        results = run_partitioned(7, 2, 2, func=double_sum, n_jobs=2, backend='loky')
        self.assertEqual(list(chain.from_iterable(results)),
                         [2 * sum(c) for c in combinations(range(7), 2)])

    def test_empty_workers(self):
        counts = run_partitioned(3, 3, 4)
        self.assertEqual(counts, [0, 0, 0, 1])


if __name__ == '__main__':
    unittest.main()
