"""
Unaligned SAM record output.

Every input record becomes one SAM line with no mapping information:
FLAG 4, RNAME '*', POS 0, MAPQ 255, CIGAR '*', RNEXT '*', PNEXT 0.
TLEN carries the sequence length. Records without qualities get a
placeholder quality string of '@' characters.
"""

from functools import lru_cache
from typing import Iterator, Optional

from fastx2bam.io.record import SequenceRecord
from fastx2bam.sam.naming import NameTransform

PLACEHOLDER_CHAR = "@"
PLACEHOLDER_BLOCK_SIZE = 16384

# FLAG, RNAME, POS, MAPQ, CIGAR, RNEXT, PNEXT
UNMAPPED_FIELDS = "4\t*\t0\t255\t*\t*\t0"


@lru_cache(maxsize=None)
def placeholder_block() -> str:
    """The shared block of placeholder quality characters, built on first use."""
    return PLACEHOLDER_CHAR * PLACEHOLDER_BLOCK_SIZE


def iter_placeholder_chunks(length: int) -> Iterator[str]:
    """
    Yield pieces of the placeholder block totalling exactly ``length`` characters.

    Example:
        >>> [len(chunk) for chunk in iter_placeholder_chunks(20000)]
        [16384, 3616]
    """
    block = placeholder_block()
    remaining = length
    while remaining > 0:
        chunk = block[:remaining]
        yield chunk
        remaining -= len(chunk)


def placeholder_quality(length: int) -> str:
    """Placeholder quality string for a sequence of ``length`` bases."""
    return "".join(iter_placeholder_chunks(length))


def _leading_fields(record: SequenceRecord, qname: str) -> str:
    """QNAME through SEQ, each followed by a tab."""
    return f"{qname}\t{UNMAPPED_FIELDS}\t{len(record.sequence)}\t{record.sequence}\t"


def format_sam_line(record: SequenceRecord, qname: str) -> str:
    """
    Format a record as one unaligned SAM line, newline included.

    Example:
        >>> format_sam_line(SequenceRecord("r1", "ACGT"), "r1")
        'r1\\t4\\t*\\t0\\t255\\t*\\t*\\t0\\t4\\tACGT\\t@@@@\\n'
    """
    quality = record.quality or placeholder_quality(len(record.sequence))
    return f"{_leading_fields(record, qname)}{quality}\n"


class SamEmitter:
    """
    Writes records to a sink as unaligned SAM lines.

    Args:
        sink: Anything with a ``write(str)`` method (see fastx2bam.sinks)
        transform: Names each record; defaults to keeping original names
    """

    def __init__(self, sink, transform: Optional[NameTransform] = None):
        self.sink = sink
        self.transform = transform if transform is not None else NameTransform()
        self.lines = 0

    def emit(self, record: SequenceRecord) -> None:
        qname = self.transform.name_for(record)
        self.sink.write(_leading_fields(record, qname))
        if record.quality:
            self.sink.write(record.quality)
        else:
            # Long sequences are covered block by block
            for chunk in iter_placeholder_chunks(len(record.sequence)):
                self.sink.write(chunk)
        self.sink.write("\n")
        self.lines += 1
