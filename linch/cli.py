"""
Command line interface - reads file paths from stdin and prints one line per link
"""

import os
import sys
import asyncio
import logging
import argparse
from typing import List, Optional, TextIO
import colorama
from . import __version__
from .checker import LinkChecker
from .error_handler import SetupError
from .extraction import read_paths
from .monitoring import LogManager
from .output import build_formatter
from .utils import parse_duration
from .validator import ValidatorConfig

logger = logging.getLogger(__name__)


def _duration(text: str) -> float:
    try:
        return parse_duration(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='linch',
        description='Linch is a simplistic non-recursive link validator. '
                    'File paths are read from stdin, one per line.',
    )
    parser.add_argument('-l', '--limit', type=_positive_int, default=10,
                        help='limit number of concurrent connections (default: 10)')
    parser.add_argument('-t', '--timeout', type=_duration, default=3.0,
                        help='timeout for resolving requests, e.g. 3s or 500ms (default: 3s)')
    parser.add_argument('-w', '--wait', type=_duration, default=0.0,
                        help='wait time between requests to the same host (default: 0s)')
    parser.add_argument('-n', '--no-color', action='store_true',
                        default='NO_COLOR' in os.environ,
                        help='disable colors in output (default: on when NO_COLOR is set)')
    parser.add_argument('-f', '--fix', action='store_true',
                        help='print sed commands that rewrite permanent redirects')
    parser.add_argument('--max-retries', type=int, default=10,
                        help='rate-limit retries per link, 0 or less for unlimited (default: 10)')
    parser.add_argument('--verify-tls', action='store_true',
                        help='verify TLS certificates (skipped by default)')
    parser.add_argument('--progress-interval', type=_duration, default=0.0,
                        help='log progress at this interval, 0 disables (default: 0)')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='log to stderr; repeat for debug output')
    parser.add_argument('--log-file', help='write a detailed log to this file')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def config_from_args(args: argparse.Namespace) -> ValidatorConfig:
    return ValidatorConfig(
        concurrency=args.limit,
        timeout=args.timeout,
        wait=args.wait,
        max_retries=args.max_retries if args.max_retries > 0 else None,
        verify_tls=args.verify_tls,
    )


async def run(args: argparse.Namespace, stdin: TextIO, stdout: TextIO) -> int:
    """Run one validation pass and write results as they arrive"""
    checker = LinkChecker(config_from_args(args), report_interval=args.progress_interval)
    formatter = build_formatter(fix=args.fix, color=not args.no_color)

    try:
        async for action in checker.check_paths(read_paths(stdin)):
            line = formatter.format(action)
            if line is not None:
                print(line, file=stdout, flush=True)
    except SetupError as e:
        logger.error(str(e))
        print(f"linch: {e}", file=sys.stderr)
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    LogManager(verbosity=args.verbose, log_file=args.log_file)
    if not args.no_color:
        colorama.just_fix_windows_console()

    try:
        return asyncio.run(run(args, sys.stdin, sys.stdout))
    except KeyboardInterrupt:
        print("\nlinch: interrupted", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
