"""
Output sinks for SAM text.

A sink accepts SAM text through ``write`` and is finalized with
``close``. The converter does not care what happens behind it:
``SamtoolsSink`` pipes the text into ``samtools view`` to produce BAM,
``TextSink`` keeps it as plain SAM.
"""

import logging
import shutil
import subprocess
import sys
from abc import ABC, abstractmethod
from contextlib import suppress
from pathlib import Path
from typing import List, Optional, TextIO, Union

from fastx2bam.errors import SinkOpenError, SinkWriteError

_LOGGER = logging.getLogger(__name__)


class SamSink(ABC):
    """
    Base class for SAM text destinations.

    Used as a context manager, a sink is closed on normal exit and
    aborted when the block raises.
    """

    closed = False

    @abstractmethod
    def write(self, text: str) -> None:
        """Write SAM text. Raises SinkWriteError on failure or after close."""

    @abstractmethod
    def close(self) -> Optional[int]:
        """Flush and finalize. Returns the encoder exit status, if any."""

    def abort(self) -> None:
        """Release the sink after a failed run."""
        with suppress(SinkWriteError):
            self.close()

    def _check_open(self) -> None:
        if self.closed:
            raise SinkWriteError(f"write to closed sink {self!r}")

    def __enter__(self) -> "SamSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()


def samtools_available(executable: str = "samtools") -> bool:
    """Check whether the samtools executable can be found."""
    return shutil.which(executable) is not None


def build_samtools_command(
    output_path: Union[str, Path],
    threads: int = 1,
    executable: str = "samtools"
) -> List[str]:
    """
    Command line that reads SAM on stdin and writes BAM to ``output_path``.

    Example:
        >>> build_samtools_command("out.bam", threads=4)
        ['samtools', 'view', '-@', '4', '-b', '-o', 'out.bam', '-']
    """
    return [executable, "view", "-@", str(threads), "-b", "-o", str(output_path), "-"]


class SamtoolsSink(SamSink):
    """
    Streams SAM text into a ``samtools view -b`` child process.

    Writes block when samtools falls behind. The child's exit status is
    returned by ``close()`` but not checked here.

    Args:
        output_path: BAM file samtools writes
        threads: Passed to samtools as ``-@``
        executable: samtools executable name or path

    Raises:
        SinkOpenError: if the process cannot be started
    """

    def __init__(
        self,
        output_path: Union[str, Path],
        threads: int = 1,
        executable: str = "samtools"
    ):
        self.command = build_samtools_command(output_path, threads, executable)
        self.returncode: Optional[int] = None
        _LOGGER.debug("Starting encoder: %s", " ".join(self.command))
        try:
            self._process = subprocess.Popen(
                self.command, stdin=subprocess.PIPE, encoding="utf-8"
            )
        except OSError as exc:
            raise SinkOpenError(f"could not start {executable}: {exc}") from exc

    def write(self, text: str) -> None:
        self._check_open()
        try:
            self._process.stdin.write(text)
        except (OSError, UnicodeEncodeError) as exc:
            raise SinkWriteError(f"writing to {self.command[0]} failed: {exc}") from exc

    def close(self) -> Optional[int]:
        if self.closed:
            return self.returncode
        self.closed = True
        try:
            self._process.stdin.close()
        except OSError as exc:
            self.returncode = self._process.wait()
            raise SinkWriteError(f"writing to {self.command[0]} failed: {exc}") from exc
        self.returncode = self._process.wait()
        return self.returncode

    def abort(self) -> None:
        if self.closed:
            return
        self.closed = True
        # The pipe may already be broken; the original error is what matters
        with suppress(OSError):
            self._process.stdin.close()
        if self._process.poll() is None:
            self._process.terminate()
        self.returncode = self._process.wait()

    def __repr__(self) -> str:
        return f"SamtoolsSink({' '.join(self.command)!r})"


class TextSink(SamSink):
    """
    Writes SAM text to a file or an open text stream.

    Args:
        target: File path, "-" for standard output, or a writable
            text stream. Streams passed in are flushed but not closed.

    Raises:
        SinkOpenError: if the output file cannot be opened
    """

    def __init__(self, target: Union[str, Path, TextIO]):
        self._owned = False
        if isinstance(target, (str, Path)):
            if str(target) == "-":
                self.name = "<stdout>"
                self._stream = sys.stdout
            else:
                self.name = str(target)
                try:
                    self._stream = open(target, "w", encoding="utf-8")
                except OSError as exc:
                    raise SinkOpenError(f"could not open output file {target}: {exc}") from exc
                self._owned = True
        else:
            self.name = getattr(target, "name", repr(target))
            self._stream = target

    def write(self, text: str) -> None:
        self._check_open()
        try:
            self._stream.write(text)
        except (OSError, UnicodeEncodeError) as exc:
            raise SinkWriteError(f"writing to {self.name} failed: {exc}") from exc

    def close(self) -> Optional[int]:
        if self.closed:
            return None
        self.closed = True
        try:
            if self._owned:
                self._stream.close()
            else:
                self._stream.flush()
        except OSError as exc:
            raise SinkWriteError(f"writing to {self.name} failed: {exc}") from exc
        return None

    def __repr__(self) -> str:
        return f"TextSink({self.name!r})"
