from pathlib import Path

import pandas as pd
import pytest

from bucketwise.errors import ConfigError
from bucketwise.execute.executor import sort_directory
from bucketwise.execute.journaling import get_journal, get_journal_path
from bucketwise.schemas import FileMoveFailed, FolderCreated, JOURNAL_FIELDS, PLAN_CSV_FIELDS, SortOptions
from bucketwise.state.io import find_config, load_config, load_journal, summarize_journal, write_plan
from bucketwise.strategy import build_plan

from conftest import entries_for


class TestLoadConfig:
    def test_reads_known_options(self, tmp_path):
        path = tmp_path / "bucketwise.yaml"
        path.write_text(
            "split: true\ncombine: true\nthreshold: 25\ninclude-count: true\nprefix: _\n",
            encoding="utf-8",
        )

        assert load_config(path) == {
            "split": True,
            "combine": True,
            "threshold": 25,
            "include_count": True,
            "prefix": "_",
        }

    def test_empty_file_is_no_options(self, tmp_path):
        path = tmp_path / "bucketwise.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == {}

    @pytest.mark.parametrize("text", [
        "- just\n- a list\n",
        "colour: blue\n",
        "current_depth: 3\n",
        "threshold: many\n",
        "split: yes please\n",
        "split: [unclosed\n",
    ])
    def test_rejects_bad_documents(self, tmp_path, text):
        path = tmp_path / "bucketwise.yaml"
        path.write_text(text, encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.yaml")

    def test_find_config(self, tmp_path):
        assert find_config(tmp_path) is None
        (tmp_path / "bucketwise.yaml").write_text("upper: true\n", encoding="utf-8")
        assert find_config(tmp_path) == tmp_path / "bucketwise.yaml"
        assert find_config(tmp_path, "other.yaml").name == "other.yaml"


def test_write_plan(tmp_path):
    plan = build_plan(tmp_path, entries_for(["a1", "a2", "b1"], tmp_path), SortOptions(upper=True))

    out = write_plan(plan)

    assert out == tmp_path / ".bucketwise" / "Plan.csv"
    df = pd.read_csv(out)
    assert list(df.columns) == PLAN_CSV_FIELDS
    assert list(df["Folder"]) == ["A", "A", "B"]
    assert list(df["FileCount"]) == [2, 2, 1]


class TestJournal:
    def test_records_filesystem_events(self, tmp_path, make_files):
        make_files(["a1", "a2", "b1"])
        make_files(["a2"], tmp_path / "a")
        journal = get_journal(tmp_path)

        sort_directory(tmp_path, SortOptions(force=True), journal)

        df = load_journal(tmp_path)
        assert summarize_journal(df) == {
            "Mkdir": {"OK": 2},
            "Move": {"OK": 2, "Error": 1},
        }
        errors = df[df["Status"] == "Error"]
        assert errors.iloc[0]["SourcePath"].endswith("a2")
        assert "already exists" in errors.iloc[0]["Details"]
        assert set(df["Depth"]) == {"0"}

    def test_depth_column_tracks_recursion(self, tmp_path, make_files):
        make_files(["a1", "b1", "c1"] + [f"x{i:02d}" for i in range(30)] + [f"y{i:02d}" for i in range(30)])
        journal = get_journal(tmp_path)
        options = SortOptions(force=True, combine=True, recurse=True, max_depth=1)

        sort_directory(tmp_path, options, journal)

        df = load_journal(tmp_path)
        assert list(df.columns) == JOURNAL_FIELDS
        moves = df[df["Operation"] == "Move"]
        assert (moves["Depth"] == "0").sum() == 63
        assert (moves["Depth"] == "1").sum() == 3
        nested = df[(df["Operation"] == "Mkdir") & (df["Depth"] == "1")]
        assert sorted(Path(p).name for p in nested["SourcePath"]) == ["a", "b", "c"]

    def test_journal_dir_is_not_sorted(self, tmp_path, make_files):
        make_files(["a1", "b1"])
        journal = get_journal(tmp_path)

        sort_directory(tmp_path, SortOptions(force=True), journal)

        assert get_journal_path(tmp_path).exists()
        assert (tmp_path / "a" / "a1").exists()

    def test_ignores_preview_events(self, tmp_path):
        journal = get_journal(tmp_path)
        journal(FolderCreated(tmp_path / "a"))
        journal(object())
        journal(FileMoveFailed(tmp_path / "x", tmp_path / "a" / "x", "boom"))

        df = load_journal(tmp_path)
        assert list(df["Operation"]) == ["Mkdir", "Move"]

    def test_missing_journal(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_journal(tmp_path)
