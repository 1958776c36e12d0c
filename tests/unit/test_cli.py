"""Tests for the rof command-line entry point."""

import os

import pytest

from rof.cli import main
from rof.core.state import EXIT_RESTORE_ABORTED


def _run(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


class TestMain:
    def test_usage_without_command(self, workdir, capsys):
        assert _run([]) == 1
        assert "Usage: rof <command>" in capsys.readouterr().err
        assert not os.path.exists(os.path.join(workdir, ".rof_snapshots"))

    def test_success(self, seeded_workdir, capsys):
        assert _run(["true"]) == 0
        assert "Restor" not in capsys.readouterr().err
        assert not os.path.exists(".rof_snapshots")

    def test_failure_restores_and_keeps_exit_code(self, seeded_workdir, capsys):
        code = _run(["sh", "-c", "echo 3 > a.txt; exit 7"])

        err = capsys.readouterr().err
        assert code == 7
        assert "rof: Command failed with result 7" in err
        assert "rof: Restored file: a.txt" in err
        with open("a.txt") as f:
            assert f.read() == "1"
        with open("b.txt") as f:
            assert f.read() == "2"
        assert not os.path.exists(".rof_snapshots")

    def test_arguments_are_joined_with_spaces(self, workdir):
        assert _run(["echo", "one", "two", ">", "out.txt"]) == 0
        with open("out.txt") as f:
            assert f.read() == "one two\n"

    def test_invalid_config(self, seeded_workdir, capsys):
        with open(".rof.yaml", "w") as f:
            f.write("snapshot_dir: a/b\n")

        assert _run(["true"]) == 1
        assert "Configuration validation failed" in capsys.readouterr().err

    def test_log_level_from_config(self, seeded_workdir, capsys):
        with open(".rof.yaml", "w") as f:
            f.write("log_level: error\n")

        assert _run(["exit 1"]) == 1
        assert "Restored file" not in capsys.readouterr().err

    def test_generation_mismatch_is_fatal(self, seeded_workdir, capsys):
        os.mkdir(".rof_snapshots")
        with open(os.path.join(".rof_snapshots", "old.txt.20200101000000.bak"), "w") as f:
            f.write("stale")

        assert _run(["sh", "-c", "'echo 3 > a.txt; exit 1'"]) == EXIT_RESTORE_ABORTED

        err = capsys.readouterr().err
        assert "GenerationMismatchError" in err
        assert os.path.isdir(".rof_snapshots")
        with open("a.txt") as f:
            assert f.read() == "3\n"
