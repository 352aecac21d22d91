"""
Exception hierarchy for fastx2bam.

Every failure a conversion run can hit is a distinct, terminal
condition. Each exception carries the process exit status the
command-line front end reports for it.
"""

from typing import Optional


class Fastx2BamError(Exception):
    """Base class for all conversion errors."""

    exit_code = 1


class InputOpenError(Fastx2BamError):
    """The input file is missing, unreadable or not a valid gzip/text stream."""

    exit_code = 3


class DecodeError(Fastx2BamError):
    """
    A malformed FASTA/FASTQ record.

    Attributes:
        line_number: 1-based line of the input where the problem was
            detected, or None when it is not known
    """

    exit_code = 4

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class SinkOpenError(Fastx2BamError):
    """The external encoder is not available or could not be started."""

    exit_code = 5


class SinkWriteError(Fastx2BamError):
    """Writing to the output sink failed (e.g. broken pipe)."""

    exit_code = 6


class HeaderFileError(Fastx2BamError):
    """The header override file could not be read."""

    exit_code = 7
