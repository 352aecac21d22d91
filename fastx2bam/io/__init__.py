"""
Sequence file input.

This module provides streaming readers for the common sequence
formats, optionally gzip-compressed:
- FASTA: Sequence storage format
- FASTQ: Sequence + quality scores (NGS data)
"""

from fastx2bam.io.record import (
    SequenceRecord,
    PHRED33_OFFSET,
    split_header,
)

from fastx2bam.io.fasta import parse_fasta_lines

from fastx2bam.io.fastq import parse_fastq_lines

from fastx2bam.io.reader import (
    FastxReader,
    open_fastx,
    read_fastx,
)

__all__ = [
    "SequenceRecord",
    "PHRED33_OFFSET",
    "split_header",
    "parse_fasta_lines",
    "parse_fastq_lines",
    "FastxReader",
    "open_fastx",
    "read_fastx",
]
