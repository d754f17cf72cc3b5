import io
import os

from magmerge.cli import run_cli


def _run(*args):
    out, err = io.StringIO(), io.StringIO()
    rc = run_cli(["magmerge-cli", *args], out, err)
    return rc, out.getvalue(), err.getvalue()


def test_cli_combines_files(folder, write_file):
    write_file("Bead Positions 1.txt", "# H\n1\n2\n")
    write_file("Motor Positions 1.txt", "# M\n3\n4\n")

    rc, out, err = _run(folder)

    assert rc == 0
    assert os.path.exists(os.path.join(folder, "Bead Positions Combined.txt"))
    assert os.path.exists(os.path.join(folder, "Motor Positions Combined.txt"))
    assert f"Folder: {folder}" in out
    assert "Bead files: 1" in out
    assert "Motor files: 1" in out
    assert "(lines: 2)" in out
    assert "Warnings:" not in out and "Errors:" not in out


def test_cli_reports_no_matching_files(folder):
    rc, out, _ = _run(folder)

    assert rc == 0
    assert "No matching files found." in out
    assert not os.path.exists(os.path.join(folder, "Bead Positions Combined.txt"))
    assert not os.path.exists(os.path.join(folder, "Motor Positions Combined.txt"))


def test_cli_lists_warnings_and_missing_group(folder, write_file):
    write_file("Motor Positions 1.txt", "# A\n1\n")
    second = write_file("Motor Positions 2.txt", "# B\n2\n")

    rc, out, _ = _run(folder)

    assert rc == 0
    assert "Bead output: (not created)" in out
    assert "Warnings:" in out
    assert f"- {second}: Header mismatch" in out


def test_cli_rejects_non_directory(folder, write_file):
    path = write_file("Bead Positions 1.txt", "1\n")

    rc, out, err = _run(path)

    assert rc == 2
    assert out == ""
    assert "not a folder" in err


def test_cli_rejects_wrong_argument_count(folder):
    rc, out, err = _run()
    assert rc == 2
    assert out == ""
    assert err == "Usage: magmerge-cli <folder>\n"

    rc, out, err = _run(folder, folder)
    assert rc == 2
    assert out == ""
    assert err == "Usage: magmerge-cli <folder>\n"


def test_cli_help_flag_is_treated_as_a_folder_name(folder, monkeypatch):
    monkeypatch.chdir(folder)

    rc, out, err = _run("-h")

    assert rc == 2
    assert out == ""
    assert err == "Error: not a folder: -h\n"


def test_cli_accepts_folder_starting_with_dash(folder, write_file, monkeypatch):
    """A directory named like an option is still the folder argument."""
    os.mkdir(os.path.join(folder, "-data"))
    write_file(os.path.join("-data", "Bead Positions 1.txt"), "# H\n1\n")
    monkeypatch.chdir(folder)

    rc, out, err = _run("-data")

    assert rc == 0
    assert err == ""
    assert "Bead files: 1" in out
    assert os.path.exists(os.path.join(folder, "-data", "Bead Positions Combined.txt"))
