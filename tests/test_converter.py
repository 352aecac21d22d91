import logging
import sys

import pytest

from fastx2bam import ConversionConfig, convert
from fastx2bam.errors import (
    DecodeError,
    HeaderFileError,
    InputOpenError,
    SinkOpenError,
    SinkWriteError,
)
from fastx2bam.sam import DEFAULT_HEADER

posix_only = pytest.mark.skipif(
    sys.platform == "win32", reason="needs a POSIX shell to stand in for samtools"
)


def _body(sink):
    """SAM data lines written after the header."""
    return [line for line in sink.buffer.getvalue().splitlines(True) if not line.startswith("@")]


def test_fasta_default_policy(fasta_path, string_sink, tmp_path):
    config = ConversionConfig(fasta_path, tmp_path / "out.bam")
    stats = convert(config, sink=string_sink)

    output = string_sink.buffer.getvalue()
    assert output.startswith(DEFAULT_HEADER)
    assert output[len(DEFAULT_HEADER):] == (
        "r1\t4\t*\t0\t255\t*\t*\t0\t4\tACGT\t@@@@\n"
        "r2\t4\t*\t0\t255\t*\t*\t0\t4\tTTTT\t@@@@\n"
    )
    assert string_sink.closed
    assert stats.records == 2
    assert stats.bases == 8
    assert stats.placeholder_records == 2
    assert stats.input_format == "fasta"
    assert stats.encoder_returncode is None


def test_rename_with_prefix_and_suffix(fasta_path, string_sink, tmp_path):
    config = ConversionConfig(
        fasta_path, tmp_path / "out.bam", rename=True, prefix="R", suffix="/x"
    )
    convert(config, sink=string_sink)
    assert [line.split("\t")[0] for line in _body(string_sink)] == ["R1/x", "R2/x"]


def test_fastq_qualities_and_stats(fastq_path, string_sink, tmp_path):
    stats = convert(ConversionConfig(fastq_path, tmp_path / "out.bam"), sink=string_sink)
    lines = _body(string_sink)
    assert len(lines) == 2
    assert all(len(line.rstrip("\n").split("\t")) == 11 for line in lines)
    assert [line.rstrip("\n").split("\t")[10] for line in lines] == ["IIII#", "!~"]
    assert stats.quality_records == 2
    # I=40 x4, #=2, !=0, ~=93
    assert stats.mean_quality == pytest.approx((160 + 2 + 0 + 93) / 7)
    assert stats.mean_length == pytest.approx(3.5)


def test_gzip_input(write_text, string_sink, tmp_path):
    path = write_text("reads.fq.gz", "@a\nAC\n+\nII\n@b\nGT\n+\nII\n", compress=True)
    stats = convert(ConversionConfig(path, tmp_path / "out.bam"), sink=string_sink)
    assert stats.records == 2


def test_header_override(fasta_path, string_sink, tmp_path):
    header = tmp_path / "header.sam"
    header.write_text("@HD\tVN:1.6\tSO:unsorted\n")
    convert(ConversionConfig(fasta_path, tmp_path / "out.bam", header_path=header), sink=string_sink)
    output = string_sink.buffer.getvalue()
    assert output.startswith("@HD\tVN:1.6\tSO:unsorted\nr1\t")
    assert "@RG" not in output


def test_empty_input_writes_only_header(write_text, string_sink, tmp_path):
    path = write_text("empty.fq", "")
    stats = convert(ConversionConfig(path, tmp_path / "out.bam"), sink=string_sink)
    assert stats.records == 0
    assert string_sink.buffer.getvalue() == DEFAULT_HEADER


def test_missing_samtools_fails_before_input(tmp_path):
    config = ConversionConfig(
        tmp_path / "missing.fa",
        tmp_path / "out.bam",
        samtools=str(tmp_path / "no-such-samtools"),
    )
    with pytest.raises(SinkOpenError):
        convert(config)
    assert not (tmp_path / "out.bam").exists()


def test_missing_input_closes_sink(tmp_path, string_sink):
    with pytest.raises(InputOpenError):
        convert(ConversionConfig(tmp_path / "missing.fa", tmp_path / "out.bam"), sink=string_sink)
    assert string_sink.closed
    assert string_sink.buffer.getvalue() == ""


def test_decode_error_aborts_run(write_text, string_sink, tmp_path):
    path = write_text("bad.fq", "@ok\nAC\n+\nII\n@bad\nACGT\n+\nII\n")
    with pytest.raises(DecodeError):
        convert(ConversionConfig(path, tmp_path / "out.bam"), sink=string_sink)
    assert string_sink.closed
    assert len(_body(string_sink)) == 1


def test_missing_header_file(fasta_path, string_sink, tmp_path):
    config = ConversionConfig(fasta_path, tmp_path / "out.bam", header_path=tmp_path / "nope")
    with pytest.raises(HeaderFileError):
        convert(config, sink=string_sink)
    assert string_sink.buffer.getvalue() == ""


def test_invalid_thread_count(fasta_path, tmp_path):
    with pytest.raises(ValueError):
        ConversionConfig(fasta_path, tmp_path / "out.bam", threads=0)


def test_empty_header_path_is_none(fasta_path, tmp_path):
    assert ConversionConfig(fasta_path, tmp_path / "out.bam", header_path="").header_path is None


@posix_only
def test_convert_through_samtools_process(fasta_path, fake_samtools, tmp_path, caplog):
    out = tmp_path / "out.bam"
    config = ConversionConfig(fasta_path, out, threads=3, samtools=str(fake_samtools))
    with caplog.at_level(logging.INFO, logger="fastx2bam"):
        stats = convert(config)
    assert stats.encoder_returncode == 0
    assert out.read_text() == DEFAULT_HEADER + (
        "r1\t4\t*\t0\t255\t*\t*\t0\t4\tACGT\t@@@@\n"
        "r2\t4\t*\t0\t255\t*\t*\t0\t4\tTTTT\t@@@@\n"
    )
    assert "Wrote 2 records" in caplog.text


@posix_only
def test_broken_pipe_fails_run(write_text, exiting_samtools, tmp_path):
    records = "".join(f">r{i}\n{'ACGT' * 25000}\n" for i in range(100))
    path = write_text("big.fa", records)
    config = ConversionConfig(path, tmp_path / "out.bam", samtools=str(exiting_samtools))
    with pytest.raises(SinkWriteError):
        convert(config)
