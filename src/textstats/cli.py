"""
Command line entry point.

    textstats DIRECTORY [--batch-size N] [--chunk-size N] [--workers N]
                        [--top N] [--on-error {abort,skip}] [--json]

Exit status: 0 on success or when the directory holds no files, 1 when the
directory is invalid or a file failure aborted the run, 2 on usage errors.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from core.exceptions import TextStatsError
from core.logging import logger
from core.settings import get_settings
from textstats.batch_coordinator import BatchCoordinator
from textstats.exceptions import DirectoryError, EmptyDirectoryError, UsageError
from textstats.file_processor import FileProcessor
from textstats.pools import WorkerPools
from textstats.report import ConsoleReporter, JsonLinesReporter, StatsSink
from utils.file_helper import list_text_files

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be zero or a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="textstats",
        description="Concurrent line/word/character statistics for a directory of text files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  textstats ./corpus                      # 5 files per batch, 100 lines per chunk
  textstats ./corpus --batch-size 10      # larger batches
  textstats ./corpus --on-error skip      # report unreadable files and carry on
  textstats ./corpus --json               # one JSON object per report event
        """,
    )
    parser.add_argument("directory", nargs="?", help="Directory whose regular files are analyzed")
    parser.add_argument(
        "--batch-size",
        type=_positive_int,
        default=settings.STATS_BATCH_SIZE,
        help=f"Files processed together before the next batch (default: {settings.STATS_BATCH_SIZE})",
    )
    parser.add_argument(
        "--chunk-size",
        type=_positive_int,
        default=settings.STATS_CHUNK_SIZE,
        help=f"Lines per unit of chunk work (default: {settings.STATS_CHUNK_SIZE})",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Size of both worker pools (default: available processors)",
    )
    parser.add_argument(
        "--top",
        type=_non_negative_int,
        default=settings.STATS_TOP_K,
        help=f"Most frequent words listed per summary (default: {settings.STATS_TOP_K})",
    )
    parser.add_argument(
        "--on-error",
        choices=["abort", "skip"],
        default=settings.STATS_ON_FILE_ERROR,
        help=f"What an unreadable file does to the run (default: {settings.STATS_ON_FILE_ERROR})",
    )
    parser.add_argument("--json", action="store_true", help="Emit JSON lines instead of the text report")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()

    if args.directory is None:
        error = UsageError()
        parser.print_usage(sys.stdout)
        print(f"Error: {error.message}")
        return EXIT_USAGE

    try:
        files = list_text_files(args.directory)
    except EmptyDirectoryError as e:
        print(f"No files found in the directory: {e.context.get('path', args.directory)}")
        return EXIT_OK
    except DirectoryError as e:
        print(f"Error: {e.message}")
        return EXIT_FAILURE

    sink: StatsSink
    if args.json:
        sink = JsonLinesReporter(top_k=args.top)
    else:
        sink = ConsoleReporter(top_k=args.top)

    file_workers = args.workers or settings.file_workers()
    chunk_workers = args.workers or settings.chunk_workers()

    with WorkerPools(file_workers=file_workers, chunk_workers=chunk_workers) as pools:
        processor = FileProcessor(pools.chunks, chunk_size=args.chunk_size)
        coordinator = BatchCoordinator(
            pools.files,
            processor,
            sink,
            batch_size=args.batch_size,
            on_file_error=args.on_error,
        )
        try:
            coordinator.run(files)
        except TextStatsError as e:
            logger.error("Run aborted", extra={"error": e.to_dict()})
            print(f"Error: [{e.error_code}] {e.message}")
            return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
