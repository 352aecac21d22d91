"""fastx2bam command-line interface."""

import argparse
import logging
from typing import List, Optional

from fastx2bam import __version__
from fastx2bam.config import ConversionConfig
from fastx2bam.converter import convert
from fastx2bam.errors import Fastx2BamError
from fastx2bam.sinks import TextSink
from fastx2bam.utils.logging import configure_logging

_LOGGER = logging.getLogger(__name__)

EXAMPLES = """\
Examples:
  fastx2bam input.fq output.bam
  fastx2bam --rename input.fq output.bam
  fastx2bam --rename --prefix R --suffix /ccs input.fq output.bam
  fastx2bam --threads 4 input.fq output.bam
"""


def _thread_count(value: str) -> int:
    try:
        threads = int(value)
    except ValueError:
        threads = 0
    if threads < 1:
        raise argparse.ArgumentTypeError(f"Invalid thread count: {value}")
    return threads


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fastx2bam",
        description=(
            "Converts FASTQ/FASTA input to BAM using samtools view. Supports "
            "renaming query names, adding prefixes/suffixes, and setting thread count."
        ),
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", help="Path to input FASTA or FASTQ file (can be gzipped).")
    parser.add_argument("output", help="Path to output BAM file.")
    parser.add_argument(
        "-t", "--threads",
        type=_thread_count,
        default=1,
        help="Number of threads to use with samtools (default: 1).",
    )
    parser.add_argument(
        "--rename",
        action="store_true",
        help="Rename query names to simple sequential integers (1, 2, ...).",
    )
    parser.add_argument("--prefix", default="", help='Add a prefix to all query names (default: "").')
    parser.add_argument("--suffix", default="", help='Add a suffix to all query names (default: "").')
    parser.add_argument(
        "--header",
        default=None,
        help="Optional SAM header (plain text file) to use instead of the default.",
    )
    parser.add_argument(
        "--samtools",
        default="samtools",
        help="samtools executable to run (default: samtools).",
    )
    parser.add_argument(
        "--sam",
        action="store_true",
        help="Write SAM text instead of BAM ('-' for stdout); samtools is not needed.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log debug messages.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors.")
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        configure_logging(logging.DEBUG)
    elif args.quiet:
        configure_logging(logging.WARNING)
    else:
        configure_logging(logging.INFO)

    config = ConversionConfig(
        input_path=args.input,
        output_path=args.output,
        threads=args.threads,
        rename=args.rename,
        prefix=args.prefix,
        suffix=args.suffix,
        header_path=args.header,
        samtools=args.samtools,
    )

    try:
        sink = TextSink(args.output) if args.sam else None
        stats = convert(config, sink=sink)
    except Fastx2BamError as exc:
        _LOGGER.error("Error: %s", exc)
        return exc.exit_code

    if stats.encoder_returncode:
        return 1
    return 0
