"""Shared test fixtures for fastx2bam tests."""

import gzip
import io
import stat

import pytest

from fastx2bam.sinks import TextSink


@pytest.fixture
def write_text(tmp_path):
    """Write text to a file under tmp_path and return its path."""
    def _write(name, content, compress=False):
        path = tmp_path / name
        if compress:
            with gzip.open(path, "wt", encoding="utf-8") as f:
                f.write(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def fasta_path(write_text):
    """Two-record FASTA file."""
    return write_text("reads.fa", ">r1\nACGT\n>r2\nTTTT\n")


@pytest.fixture
def fastq_path(write_text):
    """Two-record FASTQ file with real qualities."""
    return write_text(
        "reads.fq",
        "@q1 sample=1\nACGTN\n+\nIIII#\n@q2\nGG\n+q2\n!~\n",
    )


@pytest.fixture
def string_sink():
    """TextSink over an in-memory buffer; the buffer is ``sink.buffer``."""
    buffer = io.StringIO()
    sink = TextSink(buffer)
    sink.buffer = buffer
    return sink


def _make_script(path, body):
    path.write_text("#!/bin/sh\n" + body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_samtools(tmp_path):
    """Executable called like ``samtools view -@ N -b -o OUT -`` that copies stdin to OUT."""
    return _make_script(tmp_path / "samtools", 'cat > "$6"\n')


@pytest.fixture
def exiting_samtools(tmp_path):
    """Executable that exits at once without reading stdin."""
    return _make_script(tmp_path / "samtools-exit", "exit 3\n")
