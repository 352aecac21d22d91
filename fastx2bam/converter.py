"""
FASTA/FASTQ to unaligned BAM conversion.

One forward pass: each record is read, turned into a SAM line and
written to the sink before the next record is read. Only the current
record is held in memory.
"""

import logging
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Optional

from fastx2bam.config import ConversionConfig
from fastx2bam.errors import SinkOpenError
from fastx2bam.io.reader import FastxReader, open_fastx
from fastx2bam.io.record import SequenceRecord
from fastx2bam.sam.emitter import SamEmitter
from fastx2bam.sam.header import write_header
from fastx2bam.sam.naming import NameTransform
from fastx2bam.sinks import SamSink, SamtoolsSink, samtools_available

_LOGGER = logging.getLogger(__name__)


@dataclass
class ConversionStats:
    """Running totals for one conversion."""
    records: int = 0
    bases: int = 0
    quality_records: int = 0
    placeholder_records: int = 0
    quality_bases: int = 0
    quality_sum: int = 0
    input_format: Optional[str] = None
    encoder_returncode: Optional[int] = None

    def observe(self, record: SequenceRecord) -> None:
        self.records += 1
        self.bases += len(record)
        if record.has_quality:
            self.quality_records += 1
            self.quality_bases += len(record)
            self.quality_sum += int(record.quality_scores().sum())
        else:
            self.placeholder_records += 1

    @property
    def mean_length(self) -> float:
        if self.records == 0:
            return 0.0
        return self.bases / self.records

    @property
    def mean_quality(self) -> float:
        """Mean Phred score over bases that came with real qualities."""
        if self.quality_bases == 0:
            return 0.0
        return self.quality_sum / self.quality_bases


def write_sam(
    reader: FastxReader,
    sink: SamSink,
    config: ConversionConfig
) -> ConversionStats:
    """
    Write the header and one SAM line per record of ``reader`` to ``sink``.

    Neither the reader nor the sink is closed here.

    Raises:
        DecodeError: on a malformed record
        HeaderFileError: if the header override cannot be read
        SinkWriteError: if the sink fails
    """
    stats = ConversionStats(input_format=reader.format)
    write_header(sink, config.header_path)
    emitter = SamEmitter(sink, NameTransform(config.policy))
    for record in reader:
        emitter.emit(record)
        stats.observe(record)
    return stats


def convert(
    config: ConversionConfig,
    sink: Optional[SamSink] = None
) -> ConversionStats:
    """
    Convert a FASTA/FASTQ file to unaligned BAM.

    Checks run in this order: samtools is on the PATH, the input opens,
    samtools starts, the header is written, the records are written.
    Whatever was opened is closed again on every exit path.

    Args:
        config: Run settings
        sink: Output to use instead of a samtools process. It is
            closed (or aborted on failure) before returning.

    Returns:
        ConversionStats for the run

    Raises:
        SinkOpenError: if samtools cannot be found or started. A missing
            samtools is reported before the input is opened.
        InputOpenError: if the input cannot be opened
        DecodeError, HeaderFileError, SinkWriteError: see ``write_sam``

    Example:
        >>> config = ConversionConfig("reads.fq.gz", "reads.bam", threads=4)
        >>> stats = convert(config)
        >>> stats.records
        1000
    """
    _LOGGER.info(
        "Converting %s -> %s (threads=%d)",
        config.input_path, config.output_path, config.threads,
    )
    if sink is None and not samtools_available(config.samtools):
        raise SinkOpenError(f"'{config.samtools}' not found in PATH.")

    with ExitStack() as stack:
        if sink is not None:
            stack.enter_context(sink)
        reader = stack.enter_context(open_fastx(config.input_path))
        _LOGGER.info("Input format: %s", reader.format or "empty")
        if sink is None:
            sink = stack.enter_context(
                SamtoolsSink(config.output_path, config.threads, config.samtools)
            )
        stats = write_sam(reader, sink, config)
        stats.encoder_returncode = sink.close()

    if stats.encoder_returncode:
        _LOGGER.warning("Encoder exited with status %d", stats.encoder_returncode)
    _LOGGER.info(
        "Wrote %d records (%d bases, mean length %.1f, %d with placeholder qualities)",
        stats.records, stats.bases, stats.mean_length, stats.placeholder_records,
    )
    if stats.quality_records:
        _LOGGER.info("Mean base quality: %.2f", stats.mean_quality)
    return stats
