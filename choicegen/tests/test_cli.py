import io
import logging
import unittest

from ..__main__ import main, build_parser


class TestCommandLine(unittest.TestCase):

    def run_cli(self, *argv):
        out = io.StringIO()
        status = main(list(argv), out=out)
        return status, out.getvalue().splitlines()

    def tearDown(self):
        # main() attaches handlers to the package logger
        logger = logging.getLogger('choicegen')
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True

    def test_count(self):
        self.assertEqual(self.run_cli('count', '20000', '3'), (0, ['1333133340000']))

    def test_count_approx(self):
        status, lines = self.run_cli('count', '10', '3', '--approx')
        self.assertEqual(status, 0)
        self.assertAlmostEqual(float(lines[0]), 120.0, places=6)

    def test_print(self):
        status, lines = self.run_cli('print', '4', '2')
        self.assertEqual(status, 0)
        self.assertEqual(lines[0], "Printing combinations for 4 choose 2:")
        self.assertEqual(lines[1:], ['0\t1', '0\t2', '0\t3', '1\t2', '1\t3', '2\t3'])

    def test_print_zero_length(self):
        status, lines = self.run_cli('print', '3', '0')
        self.assertEqual(lines[1:], ['zero-length array'])

    def test_print_limit(self):
        status, lines = self.run_cli('print', '10', '3', '--limit', '2')
        self.assertEqual(lines[1:], ['0\t1\t2', '0\t1\t3'])

    def test_rank_unrank(self):
        self.assertEqual(self.run_cli('rank', '6', '3', '1', '2', '3'), (0, ['10']))
        self.assertEqual(self.run_cli('unrank', '6', '3', '10'), (0, ['1\t2\t3']))

    def test_partition(self):
        status, lines = self.run_cli('partition', '6', '3', '3')
        self.assertEqual(lines, ['0\t0\t6\t0,1,2', '1\t6\t13\t0,2,5', '2\t13\t20\t1,3,4'])

    def test_partition_empty_worker(self):
        status, lines = self.run_cli('partition', '2', '2', '2')
        self.assertEqual(lines, ['0\t0\t0\t-', '1\t0\t1\t0,1'])

    def test_run(self):
        status, lines = self.run_cli('run', '9', '3', '4', '--jobs', '1')
        self.assertEqual(status, 0)
        self.assertEqual(lines[-1], 'total\t84')
        self.assertEqual(len(lines), 5)

    def test_errors_exit_2(self):
        self.assertEqual(self.run_cli('unrank', '6', '3', '20')[0], 2)
        self.assertEqual(self.run_cli('rank', '6', '3', '2', '1', '0')[0], 2)
        self.assertEqual(self.run_cli('count', '2', '3')[0], 2)
        self.assertEqual(self.run_cli('partition', '6', '3', '0')[0], 2)

    def test_parser_requires_command(self):
        with self.assertRaises(SystemExit):
            build_parser().parse_args([])


if __name__ == '__main__':
    unittest.main()
