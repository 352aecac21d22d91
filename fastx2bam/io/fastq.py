"""
FASTQ record parser.

FASTQ is a text-based format for storing nucleotide sequences
along with quality scores. Each record consists of:
1. Header line starting with '@' followed by sequence ID
2. Sequence line(s)
3. '+' line (optionally followed by the ID again)
4. Quality line(s) (ASCII-encoded Phred scores)

Quality lines are read until they cover the sequence, so a quality
line starting with '@' is not mistaken for the next header.
"""

from typing import Iterable, Iterator, List

from fastx2bam.errors import DecodeError
from fastx2bam.io.record import SequenceRecord, split_header


def parse_fastq_lines(
    lines: Iterable[str],
    start: int = 1
) -> Iterator[SequenceRecord]:
    """
    Parse FASTQ records from an iterable of text lines.

    Args:
        lines: Lines of FASTQ text (with or without line terminators)
        start: Line number of the first line, used in error messages

    Yields:
        SequenceRecord objects

    Raises:
        DecodeError: on a bad header, a truncated record, or a quality
            string whose length differs from the sequence length
    """
    numbered = enumerate(lines, start)

    for line_number, line in numbered:
        header = line.strip()
        if not header:
            continue
        if not header.startswith("@"):
            raise DecodeError(f"invalid FASTQ header: {header!r}", line_number)
        name, comment = split_header(header[1:], line_number)

        sequence_chunks: List[str] = []
        for _, line in numbered:
            line = line.strip()
            if line.startswith("+"):
                break
            sequence_chunks.append("".join(line.split()))
        else:
            raise DecodeError(
                f"truncated FASTQ record {name!r}: missing '+' line", line_number
            )
        sequence = "".join(sequence_chunks)

        quality_chunks: List[str] = []
        quality_length = 0
        while quality_length < len(sequence):
            item = next(numbered, None)
            if item is None:
                raise DecodeError(
                    f"truncated FASTQ record {name!r}: quality shorter than sequence",
                    line_number,
                )
            chunk = item[1].strip()
            quality_chunks.append(chunk)
            quality_length += len(chunk)

        quality = "".join(quality_chunks)
        if len(quality) != len(sequence):
            raise DecodeError(
                f"FASTQ record {name!r}: quality length {len(quality)} "
                f"does not match sequence length {len(sequence)}",
                line_number,
            )

        yield SequenceRecord(name=name, sequence=sequence, quality=quality, comment=comment)
