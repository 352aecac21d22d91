"""
Conversion run configuration.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from fastx2bam.sam.naming import IdentifierPolicy


@dataclass
class ConversionConfig:
    """
    Settings for one FASTA/FASTQ to BAM conversion.

    Attributes:
        input_path: FASTA or FASTQ file, optionally gzip-compressed
        output_path: BAM (or SAM text) file to produce
        threads: Thread count passed through to samtools
        rename: Replace read names with sequential integers
        prefix: Text put before every read name
        suffix: Text put after every read name
        header_path: Plain-text SAM header used instead of the default
        samtools: samtools executable name or path
    """
    input_path: Union[str, Path]
    output_path: Union[str, Path]
    threads: int = 1
    rename: bool = False
    prefix: str = ""
    suffix: str = ""
    header_path: Optional[Union[str, Path]] = None
    samtools: str = "samtools"

    def __post_init__(self):
        if not isinstance(self.threads, int) or self.threads < 1:
            raise ValueError(f"Invalid thread count: {self.threads}")
        if not self.header_path:
            self.header_path = None

    @property
    def policy(self) -> IdentifierPolicy:
        return IdentifierPolicy(rename=self.rename, prefix=self.prefix, suffix=self.suffix)
