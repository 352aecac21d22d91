import pytest

from fastx2bam import __version__
from fastx2bam.cli import build_parser, main
from fastx2bam.sam import DEFAULT_HEADER


def test_sam_output(fasta_path, tmp_path):
    out = tmp_path / "out.sam"
    assert main(["--sam", "--rename", "--prefix", "R", "--suffix", "/x", str(fasta_path), str(out)]) == 0
    body = out.read_text()[len(DEFAULT_HEADER):]
    assert [line.split("\t")[0] for line in body.splitlines()] == ["R1/x", "R2/x"]


def test_sam_to_stdout(fasta_path, capsys):
    assert main(["--sam", "-q", str(fasta_path), "-"]) == 0
    assert capsys.readouterr().out.endswith("r2\t4\t*\t0\t255\t*\t*\t0\t4\tTTTT\t@@@@\n")


def test_defaults():
    args = build_parser().parse_args(["in.fq", "out.bam"])
    assert args.threads == 1
    assert not args.rename
    assert args.prefix == "" and args.suffix == ""
    assert args.header is None
    assert args.samtools == "samtools"


@pytest.mark.parametrize("value", ["0", "-2", "many"])
def test_invalid_thread_count(value, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--threads", value, "in.fq", "out.bam"])
    assert excinfo.value.code == 2
    assert "Invalid thread count" in capsys.readouterr().err


def test_missing_positional_arguments():
    with pytest.raises(SystemExit) as excinfo:
        main(["in.fq"])
    assert excinfo.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == __version__


def test_missing_samtools_exit_code(fasta_path, tmp_path):
    code = main(["--samtools", str(tmp_path / "no-such-samtools"), str(fasta_path), str(tmp_path / "o.bam")])
    assert code == 5


def test_missing_input_exit_code(tmp_path):
    assert main(["--sam", str(tmp_path / "missing.fq"), str(tmp_path / "o.sam")]) == 3


def test_bad_header_exit_code(fasta_path, tmp_path):
    args = ["--sam", "--header", str(tmp_path / "nope.sam"), str(fasta_path), str(tmp_path / "o.sam")]
    assert main(args) == 7


def test_unencodable_prefix_exit_code(fasta_path, tmp_path):
    args = ["--sam", "--prefix", "run\udcff_", str(fasta_path), str(tmp_path / "o.sam")]
    assert main(args) == 6
