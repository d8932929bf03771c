#!/usr/bin/env python3
"""
nickcollide CLI
===============
Command-line entry point for the nickname collision experiments.

Usage:
    nickcollide                              # packaged word list, app.yaml sizes
    nickcollide words.txt
    nickcollide --population 100000 --trials 500000 --variant REUSE/64BIT
    nickcollide --executor process --json
"""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from nickcollide import __version__
from nickcollide.config import ExperimentConfig
from nickcollide.corpus import load_path
from nickcollide.driver import EXECUTORS, run_all
from nickcollide.errors import CorpusLoadError, NoEligibleWordsError
from nickcollide.experiment import STANDARD_VARIANTS, VARIANTS_BY_LABEL
from nickcollide.report import log_corpus, log_result, results_table, results_to_json

logger = logging.getLogger("nickcollide")

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False, console: Console = None):
        self.quiet = quiet
        self.console = console or Console()

    def print(self, *args, **kwargs):
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def raw(self, text: str):
        """Unstyled output, printed even in quiet mode (machine readable)."""
        print(text)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)


def configure_logging(level: str = 'INFO') -> None:
    """Route nickcollide loggers through a Rich handler on stderr."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    pkg_logger = logging.getLogger("nickcollide")
    pkg_logger.handlers = [handler]
    pkg_logger.setLevel(getattr(logging, level.upper()))
    pkg_logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='nickcollide',
        description='Estimate nickname collision probability by Monte-Carlo simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s external/wordlist.txt
  %(prog)s --population 100000 --trials 500000
  %(prog)s --variant REUSE/32BIT --variant RECREATE/32BIT --json
"""
    )

    parser.add_argument('wordlist', nargs='?', help='Word list file (default: packaged list)')
    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress the summary table')
    parser.add_argument('--population', '-p', type=int,
                        help='Distinct nicknames to pre-populate (default: app.yaml)')
    parser.add_argument('--trials', '-t', type=int, help='Nickname draws to test (default: app.yaml)')
    parser.add_argument('--variant', action='append', choices=list(VARIANTS_BY_LABEL),
                        help='Experiment variant to run (repeatable, default: all four)')
    parser.add_argument('--executor', '-e', choices=sorted(EXECUTORS),
                        help='Worker type (default: app.yaml driver.executor)')
    parser.add_argument('--json', '-j', action='store_true', help='Print results as JSON')
    parser.add_argument('--log-level', choices=LOG_LEVELS, default='INFO', help='Log level (default: INFO)')
    return parser


# =============================================================================
# Main
# =============================================================================

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    out = Output(quiet=args.quiet)

    try:
        config = ExperimentConfig.from_settings(
            population_size=args.population,
            num_tries=args.trials,
        )
    except ValueError as e:
        out.error(str(e))
        return 1

    try:
        corpus = load_path(args.wordlist)
    except CorpusLoadError as e:
        logger.critical(str(e))
        return 1

    log_corpus(corpus)

    if args.variant:
        variants = [VARIANTS_BY_LABEL[label] for label in args.variant]
    else:
        variants = list(STANDARD_VARIANTS)

    try:
        results = run_all(corpus, config, variants, executor=args.executor)
    except NoEligibleWordsError:
        # already logged at CRITICAL by the sampler
        return 1
    except ValueError as e:
        out.error(str(e))
        return 1
    except KeyboardInterrupt:
        out.print("\nCancelled.")
        return 130

    for result in results:
        log_result(result)

    if args.json:
        out.raw(results_to_json(corpus, results))
    else:
        out.print(results_table(results))
    return 0


if __name__ == '__main__':
    sys.exit(main())
