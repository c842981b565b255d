"""Main entry point for the line slicer command line tool."""

import argparse
import contextlib
import io
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from .config import get_app_config
from .errors import InputError, LineSlicerError, OutputError, SliceParseError
from .extractor import LineExtractor
from .models import SliceSpec

PROG = "line-slicer"

DESCRIPTION = """\
Print slice from FILE to standard output.
When slice is not specified, print whole file to standard output."""

EPILOG = """\
BEGIN and END may be any combination of positive (denoting position
from the beginning) or negative (denoting position from the end) numbers.
Either of them may be omitted, e.g. 3:, :-2 or :.

Both LF and CRLF are recognized as newline characters.
Newlines are not preserved and are always replaced with LF in output.
Last line of the output will always end with LF.

With no FILE, or when FILE is -, read standard input."""

# Configure logging; stdout carries the sliced data
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, level: str = "WARNING"):
    """Configure logging level.

    Args:
        verbose: Enable verbose logging
        level: Level name used when not verbose
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(level)


def preprocess_argv(args_list: List[str]) -> List[str]:
    """
    Attach the slice value to its option so argparse accepts negative values.

    ``-s -1:`` would otherwise be read as two options; it becomes ``--slice=-1:``.
    Arguments after ``--`` are left alone.
    """
    processed_args = []
    args_iter = iter(args_list)
    for arg in args_iter:
        if arg == "--":
            processed_args.append(arg)
            processed_args.extend(args_iter)
            break
        if arg in ("-s", "--slice"):
            value = next(args_iter, None)
            if value is None:
                processed_args.append(arg)
                break
            processed_args.append(f"--slice={value}")
        else:
            processed_args.append(arg)
    return processed_args


def parse_slice(text: str) -> SliceSpec:
    """argparse type for ``-s/--slice``."""
    try:
        return SliceSpec.parse(text)
    except SliceParseError as e:
        raise argparse.ArgumentTypeError(f'Failed to parse slice "{text}": {e}') from e


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage="%(prog)s [OPTION]... [FILE]",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-s",
        "--slice",
        dest="spec",
        metavar="BEGIN:END",
        type=parse_slice,
        default=SliceSpec(),
        help="specify slice to print",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="output version information and exit",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="log diagnostics to standard error",
    )
    parser.add_argument("file", nargs="?", metavar="FILE", help="file to read")
    return parser


def open_input(path: Optional[str]):
    """Open ``path`` for binary reading, or standard input when absent or ``-``.

    Raises:
        InputError: If the file cannot be opened
    """
    if path is None or path == "-":
        return contextlib.nullcontext(sys.stdin.buffer)
    try:
        return open(path, "rb")
    except OSError as e:
        raise InputError(f'Failed to open file "{path}": {e.strerror or e}') from e


def redirect_stdout_to_devnull():
    """Point the stdout descriptor at devnull so the exit-time flush cannot hit a closed pipe."""
    try:
        stdout_fd = sys.stdout.fileno()
    except (AttributeError, io.UnsupportedOperation):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, stdout_fd)


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    parser = build_parser()
    args = parser.parse_args(preprocess_argv(sys.argv[1:] if argv is None else argv))

    try:
        app_config = get_app_config()
        setup_logging(args.verbose, app_config.log_level)
        logger.debug(f"Slice: {args.spec}, input: {args.file or 'stdin'}")

        extractor = LineExtractor(buffer_mode=app_config.buffer_mode)
        with open_input(args.file) as source:
            extractor.extract(args.spec, source, sys.stdout.buffer)
        return 0

    except OutputError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        if isinstance(e.__cause__, BrokenPipeError):
            redirect_stdout_to_devnull()
        return 1
    except LineSlicerError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.warning("Execution interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Error during execution: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
