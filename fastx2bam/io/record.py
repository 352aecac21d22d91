"""
Sequence record model shared by the FASTA and FASTQ parsers.

A record always has a name and a sequence. FASTQ records also carry
a quality string (ASCII-encoded Phred scores) of the same length as
the sequence; FASTA records leave it empty.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple

from fastx2bam.errors import DecodeError


# Phred quality score encoding offset (Sanger/Illumina 1.8+)
PHRED33_OFFSET = 33


@dataclass
class SequenceRecord:
    """
    Represents a single FASTA or FASTQ record.

    Attributes:
        name: Sequence identifier (first word after '>' or '@')
        sequence: The nucleotide/protein sequence, exactly as read
        quality: Quality string, or "" when the format has none
        comment: Rest of the header line after the name
    """
    name: str
    sequence: str
    quality: str = ""
    comment: str = ""

    def __len__(self) -> int:
        return len(self.sequence)

    @property
    def has_quality(self) -> bool:
        return bool(self.quality)

    def quality_scores(self, offset: int = PHRED33_OFFSET) -> np.ndarray:
        """
        Convert the quality string to numeric Phred scores.

        Args:
            offset: ASCII offset (33 for Phred+33)

        Returns:
            numpy array of integer quality scores, empty for FASTA records
        """
        raw = np.frombuffer(
            self.quality.encode("latin-1", errors="replace"), dtype=np.uint8
        )
        return raw.astype(np.int32) - offset


def split_header(header: str, line_number: Optional[int] = None) -> Tuple[str, str]:
    """
    Split a header line (without its marker) into name and comment.

    Raises:
        DecodeError: if the header has no name
    """
    parts = header.strip().split(None, 1)
    if not parts:
        raise DecodeError("record header has an empty name", line_number)
    name = parts[0]
    comment = parts[1] if len(parts) > 1 else ""
    return name, comment
