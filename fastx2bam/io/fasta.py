"""
FASTA record parser.

A FASTA record is a '>' header line followed by any number of
sequence lines. Wrapped sequence lines are joined and all whitespace
inside them is dropped. The parser works line by line, so only the
record being built is held in memory.
"""

from typing import Iterable, Iterator, List, Optional

from fastx2bam.errors import DecodeError
from fastx2bam.io.record import SequenceRecord, split_header


def parse_fasta_lines(
    lines: Iterable[str],
    start: int = 1
) -> Iterator[SequenceRecord]:
    """
    Parse FASTA records from an iterable of text lines.

    Args:
        lines: Lines of FASTA text (with or without line terminators)
        start: Line number of the first line, used in error messages

    Yields:
        SequenceRecord objects with an empty quality string

    Raises:
        DecodeError: on sequence data before the first header, or a
            header without a name

    Example:
        >>> records = parse_fasta_lines([">r1 first", "AC", "GT"])
        >>> [(r.name, r.sequence) for r in records]
        [('r1', 'ACGT')]
    """
    current_header: Optional[str] = None
    header_line = start
    current_sequence: List[str] = []

    for line_number, line in enumerate(lines, start):
        line = line.strip()
        if not line:
            continue

        if line.startswith(">"):
            if current_header is not None:
                yield _build_record(current_header, current_sequence, header_line)

            current_header = line[1:]
            header_line = line_number
            current_sequence = []
        elif current_header is None:
            raise DecodeError("sequence data before the first '>' header", line_number)
        else:
            current_sequence.append("".join(line.split()))

    if current_header is not None:
        yield _build_record(current_header, current_sequence, header_line)


def _build_record(header: str, chunks: List[str], line_number: int) -> SequenceRecord:
    name, comment = split_header(header, line_number)
    return SequenceRecord(name=name, sequence="".join(chunks), comment=comment)
