"""
fastx2bam: FASTA/FASTQ to unaligned BAM conversion

This package provides tools for:
- Streaming FASTA/FASTQ input (plain or gzip-compressed)
- Unaligned SAM record generation with placeholder qualities
- Read renaming with prefixes and suffixes
- Piping SAM text into samtools to produce BAM

Records are converted in a single forward pass, so memory use is
bounded by the longest record rather than the size of the input.
"""

__version__ = "0.1.0"
__author__ = "fastx2bam Contributors"

from fastx2bam.io import (
    SequenceRecord,
    FastxReader,
    open_fastx,
    read_fastx,
)

from fastx2bam.sam import (
    IdentifierPolicy,
    NameTransform,
    SamEmitter,
    format_sam_line,
    placeholder_quality,
    write_header,
    DEFAULT_HEADER,
)

from fastx2bam.sinks import (
    SamSink,
    SamtoolsSink,
    TextSink,
    samtools_available,
)

from fastx2bam.config import ConversionConfig

from fastx2bam.converter import (
    convert,
    write_sam,
    ConversionStats,
)

from fastx2bam.errors import (
    Fastx2BamError,
    InputOpenError,
    DecodeError,
    SinkOpenError,
    SinkWriteError,
    HeaderFileError,
)

__all__ = [
    # Input
    "SequenceRecord",
    "FastxReader",
    "open_fastx",
    "read_fastx",
    # SAM output
    "IdentifierPolicy",
    "NameTransform",
    "SamEmitter",
    "format_sam_line",
    "placeholder_quality",
    "write_header",
    "DEFAULT_HEADER",
    # Sinks
    "SamSink",
    "SamtoolsSink",
    "TextSink",
    "samtools_available",
    # Conversion
    "ConversionConfig",
    "convert",
    "write_sam",
    "ConversionStats",
    # Errors
    "Fastx2BamError",
    "InputOpenError",
    "DecodeError",
    "SinkOpenError",
    "SinkWriteError",
    "HeaderFileError",
]
