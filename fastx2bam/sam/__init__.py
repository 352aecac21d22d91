"""
SAM text generation.

This module provides:
- Query name generation (renaming, prefixes and suffixes)
- Unaligned SAM record formatting with placeholder qualities
- SAM header output
"""

from fastx2bam.sam.naming import (
    IdentifierPolicy,
    NameTransform,
)

from fastx2bam.sam.emitter import (
    SamEmitter,
    format_sam_line,
    placeholder_block,
    placeholder_quality,
    iter_placeholder_chunks,
    PLACEHOLDER_CHAR,
    PLACEHOLDER_BLOCK_SIZE,
)

from fastx2bam.sam.header import (
    write_header,
    DEFAULT_HEADER,
)

__all__ = [
    "IdentifierPolicy",
    "NameTransform",
    "SamEmitter",
    "format_sam_line",
    "placeholder_block",
    "placeholder_quality",
    "iter_placeholder_chunks",
    "PLACEHOLDER_CHAR",
    "PLACEHOLDER_BLOCK_SIZE",
    "write_header",
    "DEFAULT_HEADER",
]
