"""
Tests for the dotmix command line interface.
"""
import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from dotmix.cli import main


@pytest.fixture
def run(tmp_path: Path):
    """Invoke the CLI with an isolated settings directory."""
    runner = CliRunner()

    def _run(*args, input=None):  # pylint: disable=redefined-builtin
        return runner.invoke(main, ["--settings-dir", str(tmp_path / "settings"), *args], input=input)
    return _run


@pytest.fixture
def doc_file(tmp_path: Path, nested) -> Path:
    path = tmp_path / "doc.json"
    path.write_text(json.dumps(nested), encoding="utf-8")
    return path


@pytest.fixture
def records_file(tmp_path: Path, records) -> Path:
    path = tmp_path / "records.jsonl"
    path.write_text("\n".join(json.dumps(r) for r in records) + "\n", encoding="utf-8")
    return path


def test_get_prints_value(run, doc_file):
    result = run("get", str(doc_file), "child1.child2.name")
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == "Child 2"


def test_get_missing_path_uses_default_or_fails(run, doc_file):
    result = run("get", str(doc_file), "child1.nope", "--default", "42")
    assert json.loads(result.output) == 42
    result = run("get", str(doc_file), "child1.nope")
    assert result.exit_code == 1
    assert "Path not found: child1.nope" in result.output


def test_get_reads_stdin(run):
    result = run("get", "-", "a.b", input='{"a": {"b": [1, 2]}}')
    assert json.loads(result.output) == [1, 2]


def test_set_prints_updated_document(run, doc_file):
    result = run("set", str(doc_file), "child1.child2.age", "7")
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["child1"]["child2"] == {"name": "Child 2", "age": 7}


def test_set_conflict_fails_when_replacement_disabled(run, doc_file, tmp_path: Path):
    (tmp_path / "settings").mkdir()
    (tmp_path / "settings" / "settings.yaml").write_text("replace_conflicts: false\n", encoding="utf-8")
    result = run("set", str(doc_file), "foo.bar", "x")
    assert result.exit_code == 1
    assert "holds str" in result.output


def test_flatten_and_unflatten(run, doc_file, nested, tmp_path: Path):
    result = run("flatten", str(doc_file))
    flat = json.loads(result.output)
    assert flat["child1.child2.name"] == "Child 2"
    flat_file = tmp_path / "flat.json"
    flat_file.write_text(result.output, encoding="utf-8")
    assert json.loads(run("unflatten", str(flat_file)).output) == nested


def test_merge_yaml_sources(run, tmp_path: Path):
    base = tmp_path / "base.yaml"
    base.write_text("db:\n  host: localhost\n  port: 5432\ntags: [a, b]\n", encoding="utf-8")
    override = tmp_path / "override.yml"
    override.write_text("db:\n  port: 6543\ntags: [c]\n", encoding="utf-8")
    result = run("merge", str(base), str(override))
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"db": {"host": "localhost", "port": 6543}, "tags": ["c"]}


def test_diff_lists_changes_only(run, tmp_path: Path):
    before = tmp_path / "before.json"
    before.write_text(json.dumps({"a": "A", "c": "C", "gone": 1}), encoding="utf-8")
    after = tmp_path / "after.json"
    after.write_text(json.dumps({"a": 1, "c": "C"}), encoding="utf-8")
    assert json.loads(run("diff", str(before), str(after)).output) == {"a": 1}


def test_pluck_shows_missing_as_null(run, tmp_path: Path):
    rows = tmp_path / "rows.json"
    rows.write_text(json.dumps([{"name": "Name 1"}, {"id": 13}]), encoding="utf-8")
    assert json.loads(run("pluck", str(rows), "name").output) == ["Name 1", None]


def test_fetch_loose_and_strict(run, records_file):
    result = run("fetch", str(records_file), "id", '"11"')
    assert json.loads(result.output)["name"] == "Name 2"
    result = run("fetch", str(records_file), "id", '"11"', "--strict")
    assert result.exit_code == 1
    assert "No record" in result.output


def test_table_csv(run, records_file):
    result = run("table", str(records_file), "--csv")
    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert lines[0] == "id,name,child.name"
    assert lines[1] == "10,Name 1,child1"


def test_unreadable_or_invalid_documents_fail_cleanly(run, tmp_path: Path):
    result = run("flatten", str(tmp_path / "absent.json"))
    assert result.exit_code == 1
    assert "Cannot read" in result.output
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    result = run("flatten", str(bad))
    assert result.exit_code == 1
    assert "Cannot parse" in result.output


def test_list_or_empty_documents_are_rejected_where_a_mapping_is_needed(
        run, records_file, doc_file, tmp_path: Path):
    result = run("flatten", str(records_file))
    assert result.exit_code == 1
    assert "must be a mapping, got list" in result.output
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    result = run("set", str(empty), "a.b", "1")
    assert result.exit_code == 1
    assert "must be a mapping, got NoneType" in result.output
    for args in (("unflatten", str(records_file)),
                 ("merge", str(doc_file), str(records_file)),
                 ("diff", str(empty), str(doc_file))):
        result = run(*args)
        assert result.exit_code == 1, args
        assert "must be a mapping" in result.output
    # record-oriented commands still accept lists
    assert run("pluck", str(records_file), "id").exit_code == 0
