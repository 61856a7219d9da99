import sys
import logging
import argparse
from traceback import format_exception_only

from .counting import count, count_approx
from .errors import ChoiceGenError
from .generator import ChoiceGenerator
from .log_setup import setup_logger
from .partition import partition, run_partitioned
from .rank_comb import rank, unrank
from .settings import EngineSettings

logger = logging.getLogger(f"{__package__}.__main__")


def build_parser():
    parser = argparse.ArgumentParser(
        prog='choicegen',
        description="Count, rank, unrank and partition the combinations of n choose k.")
    parser.add_argument('--log-level', help="logging level (default from CHOICEGEN_LOG_LEVEL)")
    parser.add_argument('--log-file', action='store_true', default=None,
                        help="also log to a rotating file in a private temp directory")

    sub = parser.add_subparsers(dest='command', required=True)

    def space(p):
        p.add_argument('n', type=int, help="size of the universe")
        p.add_argument('k', type=int, help="size of each combination")
        return p

    p = space(sub.add_parser('count', help="number of combinations"))
    p.add_argument('--approx', action='store_true', help="log-gamma estimate instead of the exact count")

    p = space(sub.add_parser('print', help="list the combinations in order"))
    p.add_argument('--limit', type=int, help="stop after this many lines")

    p = space(sub.add_parser('rank', help="rank of a combination"))
    p.add_argument('combination', type=int, nargs='*')

    p = space(sub.add_parser('unrank', help="combination at a rank"))
    p.add_argument('rank', type=int)

    p = space(sub.add_parser('partition', help="slice the rank space among workers"))
    p.add_argument('workers', type=int)

    p = space(sub.add_parser('run', help="walk every slice in parallel and count"))
    p.add_argument('workers', type=int)
    p.add_argument('--jobs', type=int, help="joblib n_jobs (default from CHOICEGEN_N_JOBS)")
    p.add_argument('--backend', help="joblib backend (default from CHOICEGEN_BACKEND)")

    return parser


def format_choice(choice):
    if len(choice) == 0:
        return "zero-length array"
    return '\t'.join(map(str, choice))


def cmd_count(args, settings, out):
    if args.approx:
        print(count_approx(args.n, args.k), file=out)
    else:
        print(count(args.n, args.k), file=out)


def cmd_print(args, settings, out):
    limit = settings.max_print if args.limit is None else args.limit
    gen = ChoiceGenerator(args.n, args.k, limit=limit)

    print(f"Printing combinations for {args.n} choose {args.k}:", file=out)
    for choice in gen:
        print(format_choice(choice), file=out)

    if gen.produced == limit and limit < count(args.n, args.k):
        logger.warning(f"output truncated after {limit} combinations")


def cmd_rank(args, settings, out):
    print(rank(args.n, args.k, args.combination), file=out)


def cmd_unrank(args, settings, out):
    print(format_choice(unrank(args.n, args.k, args.rank)), file=out)


def cmd_partition(args, settings, out):
    for s in partition(args.n, args.k, args.workers):
        seed = '-' if s.seed is None else ','.join(map(str, s.seed))
        print(f"{s.worker}\t{s.start}\t{s.stop}\t{seed}", file=out)


def cmd_run(args, settings, out):
    settings = settings.override(n_jobs=args.jobs, backend=args.backend)
    counts = run_partitioned(args.n, args.k, args.workers,
                             n_jobs=settings.n_jobs, backend=settings.backend)
    for worker, drained in enumerate(counts):
        print(f"{worker}\t{drained}", file=out)
    print(f"total\t{sum(counts)}", file=out)


COMMANDS = {
    'count': cmd_count,
    'print': cmd_print,
    'rank': cmd_rank,
    'unrank': cmd_unrank,
    'partition': cmd_partition,
    'run': cmd_run,
}


def main(argv=None, out=None):
    """Entry point for the choicegen command line."""
    out = sys.stdout if out is None else out
    args = build_parser().parse_args(argv)

    try:
        settings = EngineSettings.from_env().override(log_level=args.log_level,
                                                      log_to_file=args.log_file)
        setup_logger(settings.log_prefix, 'choicegen', level=settings.level,
                     to_file=settings.log_to_file)
        logger.debug(f"__main__.py: {args.command} with {settings}")
        COMMANDS[args.command](args, settings, out)
    except ChoiceGenError as e:
        logger.error(''.join(format_exception_only(type(e), e)).strip())
        return 2

    return 0


if __name__ == '__main__':
    sys.exit(main())
