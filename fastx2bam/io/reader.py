"""
Streaming FASTA/FASTQ reader.

Opens a plain or gzip-compressed file, works out whether it holds
FASTA or FASTQ from the first record marker, and hands out one
SequenceRecord at a time.
"""

import gzip
import io
import logging
import zlib
from itertools import chain
from pathlib import Path
from typing import Iterator, Optional, Union

from fastx2bam.errors import DecodeError, InputOpenError
from fastx2bam.io.fasta import parse_fasta_lines
from fastx2bam.io.fastq import parse_fastq_lines
from fastx2bam.io.record import SequenceRecord

_LOGGER = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"

_PARSERS = {
    ">": ("fasta", parse_fasta_lines),
    "@": ("fastq", parse_fastq_lines),
}

# Errors the decompressor or decoder can raise while reading lines
_STREAM_ERRORS = (OSError, EOFError, zlib.error)


class FastxReader:
    """
    Lazy, single-pass reader over the records of a FASTA/FASTQ file.

    The reader owns one open file handle, released when the records
    run out, when a read fails, or when ``close()`` is called.

    Gzip input may hold several concatenated members, but every byte
    after the first member must belong to another member. Trailing
    padding or junk after the last member is reported as a
    DecodeError instead of being ignored.

    Attributes:
        path: Input file path
        format: "fasta", "fastq", or None for an empty input
        compressed: True if the input is gzip-compressed

    Example:
        >>> with FastxReader("reads.fq.gz") as reader:
        ...     for record in reader:
        ...         print(record.name, len(record))
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.format: Optional[str] = None
        self.compressed = False
        self._raw = None
        self._text = None
        self._records: Optional[Iterator[SequenceRecord]] = None

        self._open()
        try:
            self._sniff()
        except Exception:
            self.close()
            raise

    def _open(self) -> None:
        try:
            self._raw = open(self.path, "rb")
            self.compressed = self._raw.peek(2)[:2] == GZIP_MAGIC
        except OSError as exc:
            self.close()
            raise InputOpenError(f"cannot open input file {self.path}: {exc}") from exc

        binary = gzip.GzipFile(fileobj=self._raw, mode="rb") if self.compressed else self._raw
        self._text = io.TextIOWrapper(binary, encoding="utf-8")

    def _sniff(self) -> None:
        """Find the first non-blank line and pick the parser from its marker."""
        lines = iter(self._text)
        line_number = 0
        first = None
        try:
            for line in lines:
                line_number += 1
                if line.strip():
                    first = line
                    break
        except UnicodeDecodeError as exc:
            raise InputOpenError(f"input file {self.path} is not valid text") from exc
        except _STREAM_ERRORS as exc:
            raise InputOpenError(f"cannot read input file {self.path}: {exc}") from exc

        if first is None:
            self._records = iter(())
            return

        marker = first.lstrip()[0]
        if marker not in _PARSERS:
            raise DecodeError(
                f"unrecognised record marker {marker!r}, expected '>' or '@'",
                line_number,
            )
        self.format, parser = _PARSERS[marker]
        self._records = parser(chain([first], lines), start=line_number)
        _LOGGER.debug(
            "Reading %s as %s%s",
            self.path, self.format, " (gzip)" if self.compressed else "",
        )

    def __iter__(self) -> "FastxReader":
        return self

    def __next__(self) -> SequenceRecord:
        if self._records is None:
            raise StopIteration
        try:
            return next(self._records)
        except StopIteration:
            self.close()
            raise
        except DecodeError:
            self.close()
            raise
        except UnicodeDecodeError as exc:
            self.close()
            raise DecodeError(f"input file {self.path} is not valid UTF-8 text") from exc
        except _STREAM_ERRORS as exc:
            self.close()
            raise DecodeError(f"corrupt input stream in {self.path}: {exc}") from exc

    def read_record(self) -> Optional[SequenceRecord]:
        """Return the next record, or None once the input is exhausted."""
        return next(self, None)

    @property
    def closed(self) -> bool:
        return self._raw is None

    def close(self) -> None:
        """Release the file handle. Safe to call more than once."""
        self._records = None
        if self._text is not None:
            self._text.close()
            self._text = None
        if self._raw is not None:
            self._raw.close()
            self._raw = None

    def __enter__(self) -> "FastxReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_fastx(filepath: Union[str, Path]) -> FastxReader:
    """
    Open a FASTA/FASTQ file for streaming.

    Supports both plain text and gzip-compressed files; compression is
    detected from the file content, not its extension.

    Args:
        filepath: Path to the input file

    Returns:
        An open FastxReader

    Raises:
        InputOpenError: if the file cannot be opened or decompressed
        DecodeError: if the first record marker is neither '>' nor '@'
    """
    return FastxReader(filepath)


def read_fastx(filepath: Union[str, Path]) -> Iterator[SequenceRecord]:
    """
    Read records from a FASTA or FASTQ file.

    Yields:
        SequenceRecord objects

    Example:
        >>> for record in read_fastx("reads.fastq.gz"):
        ...     print(f"{record.name}: {len(record)} bp")
    """
    with open_fastx(filepath) as reader:
        yield from reader
