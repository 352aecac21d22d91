"""
SAM header output.

A run writes exactly one header before its first record: either the
built-in default below or the verbatim contents of a user file.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from fastx2bam.errors import HeaderFileError

_LOGGER = logging.getLogger(__name__)

HD_LINE = "@HD\tVN:1.5\tSO:unknown\tpb:3.0.1\n"
RG_LINE = (
    "@RG\tID:4f25f78c\tPL:PACBIO\t"
    "DS:READTYPE=CCS;BINDINGKIT=101-820-500;SEQUENCINGKIT=101-826-100;"
    "BASECALLERVERSION=5.0.0;FRAMERATEHZ=100.000000\tLB:SQlle "
    "zeBAM\tPU:m64187e_211217_130958\t"
    "PM:SEQUELII\tCM:S/P4.1-C2/5.0-8M\n"
)
PG_LINE = (
    "@PG\tID:ccs-6.0.0\tPN:ccs\tVN:6.0.0\tDS:Generate circular "
    "consensus sequences (ccs) from subreads.\tCL:ccs ...\n"
)

DEFAULT_HEADER = HD_LINE + RG_LINE + PG_LINE


def write_header(sink, header_path: Optional[Union[str, Path]] = None) -> int:
    """
    Write the SAM header to a sink.

    Args:
        sink: Anything with a ``write(str)`` method
        header_path: Plain-text header file copied line by line, line
            endings included. The default header is written when None
            or empty.

    Returns:
        Number of header lines written

    Raises:
        HeaderFileError: if the header file cannot be opened or read.
            When it cannot be opened nothing has been written yet.
    """
    if not header_path:
        sink.write(DEFAULT_HEADER)
        return DEFAULT_HEADER.count("\n")

    try:
        handle = open(header_path, "r", encoding="utf-8", newline="")
    except OSError as exc:
        raise HeaderFileError(f"could not open header file {header_path}: {exc}") from exc

    count = 0
    with handle:
        try:
            for line in handle:
                sink.write(line)
                count += 1
        except (OSError, UnicodeDecodeError) as exc:
            raise HeaderFileError(f"could not read header file {header_path}: {exc}") from exc

    _LOGGER.debug("Copied %d header lines from %s", count, header_path)
    return count
