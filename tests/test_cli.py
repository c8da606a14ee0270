import pytest

from bucketwise.commands.cli import main


def _dirs_under(root):
    return sorted(p.name for p in root.iterdir() if p.is_dir() and not p.name.startswith("."))


def test_sort_force_moves_files(tmp_path, make_files, capsys):
    make_files(["apple", "banana", "cherry"])

    main(["sort", str(tmp_path), "--force", "--upper"])

    assert _dirs_under(tmp_path) == ["A", "B", "C"]
    out = capsys.readouterr().out
    assert "Files moved:         3" in out
    assert "MOVE:" in out


def test_sort_dry_run_only_previews(tmp_path, make_files, capsys):
    make_files(["apple", "banana"])

    main(["sort", str(tmp_path), "--dry-run", "--include-count"])

    assert _dirs_under(tmp_path) == []
    out = capsys.readouterr().out
    assert "a [1]" in out
    assert "DRY RUN" in out


def test_sort_asks_and_aborts(tmp_path, make_files, capsys, monkeypatch):
    make_files(["apple", "banana"])
    monkeypatch.setattr("builtins.input", lambda prompt: "n")

    main(["sort", str(tmp_path)])

    assert _dirs_under(tmp_path) == []
    assert "Aborted" in capsys.readouterr().out


def test_sort_confirmed_by_user(tmp_path, make_files, monkeypatch):
    make_files(["apple", "banana"])
    monkeypatch.setattr("builtins.input", lambda prompt: "y")

    main(["sort", str(tmp_path)])

    assert _dirs_under(tmp_path) == ["a", "b"]


def test_config_file_and_flag_override(tmp_path, make_files):
    make_files(["apple", "banana"])
    (tmp_path / "bucketwise.yaml").write_text("prefix: 'sort-'\nupper: true\nforce: true\n", encoding="utf-8")

    main(["sort", str(tmp_path), "--prefix", "_"])

    assert _dirs_under(tmp_path) == ["_A", "_B"]
    assert (tmp_path / "bucketwise.yaml").exists()


def test_bad_config_exits_non_zero(tmp_path, make_files):
    make_files(["apple", "banana"])
    (tmp_path / "bucketwise.yaml").write_text("colour: blue\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main(["sort", str(tmp_path), "--force"])

    assert exc.value.code == 1
    assert _dirs_under(tmp_path) == []


def test_missing_directory_exits_non_zero(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["sort", str(tmp_path / "missing"), "--force"])
    assert exc.value.code == 1


def test_export_plan_then_journal_report(tmp_path, make_files, capsys):
    make_files(["apple", "avocado", "banana"])

    main(["export-plan", str(tmp_path)])
    assert (tmp_path / ".bucketwise" / "Plan.csv").exists()
    assert _dirs_under(tmp_path) == []

    main(["sort", str(tmp_path), "--force", "--journal"])
    capsys.readouterr()

    main(["report", str(tmp_path)])
    out = capsys.readouterr().out
    assert "Move: OK=3" in out
    assert "Mkdir: OK=2" in out


def test_report_without_journal_exits_non_zero(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["report", str(tmp_path)])
    assert exc.value.code == 1


def test_dry_run_writes_no_journal(tmp_path, make_files):
    make_files(["apple", "banana"])

    main(["sort", str(tmp_path), "--dry-run", "--journal"])

    assert not (tmp_path / ".bucketwise" / "journal.log").exists()
    assert _dirs_under(tmp_path) == []
