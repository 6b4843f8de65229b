# SPDX-License-Identifier: MIT

import pytest
from typer.testing import CliRunner

from timeblocks.initialize import initialize
from timeblocks.repository.document import DOCUMENT_REPO, DocumentError
from timeblocks.repository.storage import STORAGE_REPO
from timeblocks.service.identity import find_tracker_blocks
from timeblocks.terminal import watch as watch_module
from timeblocks.terminal.app import app

from conftest import make_entry

runner = CliRunner()


@pytest.fixture
def cli(data_dir):
    initialize()
    return runner


@pytest.fixture
def document(tmp_path):
    path = tmp_path / "day.md"
    path.write_text("# Day\n\n```time-tracker\n```\n\n```time-tracker\n```\n")
    return path


def _tracker_ids(path):
    return [span["tracker_id"] for span in find_tracker_blocks(path.read_text())]


def test_show_stamps_document_and_creates_blocks(cli, document):
    result = cli.invoke(app, ["tracker", "show", str(document)])

    assert result.exit_code == 0, result.output
    ids = _tracker_ids(document)
    assert None not in ids
    assert len(set(ids)) == 2
    for tracker_id in ids:
        assert STORAGE_REPO.has_block(tracker_id)
    assert not STORAGE_REPO.is_dirty


def test_show_without_stamping_keeps_storage_unchanged(cli, document, monkeypatch):
    def fail_stamping(path, block_label):
        raise DocumentError(f"could not write {path}")

    monkeypatch.setattr(DOCUMENT_REPO, "ensure_ids_in_file", fail_stamping)

    for _ in range(2):
        result = cli.invoke(app, ["tracker", "show", str(document)])
        assert result.exit_code == 0, result.output
        assert "Inserting tracker ids failed" in result.output

    assert _tracker_ids(document) == [None, None]
    assert STORAGE_REPO.get_tracker_ids() == []


def test_no_header_hides_document_header(cli, document):
    result = cli.invoke(app, ["tracker", "show", str(document)])
    assert "2 tracker blocks" in result.output

    result = cli.invoke(app, ["--no-header", "tracker", "show", str(document)])
    assert result.exit_code == 0, result.output
    assert "2 tracker blocks" not in result.output


def test_show_missing_document_reports_error(cli, tmp_path):
    result = cli.invoke(app, ["tracker", "show", str(tmp_path / "nope.md")])
    assert result.exit_code == 1
    assert "could not read" in result.output


def test_add_modify_remove_rows(cli, document):
    cli.invoke(app, ["tracker", "show", str(document)])
    tracker_id = _tracker_ids(document)[0]
    STORAGE_REPO.set_reference_date(tracker_id, "2024-01-01")

    result = cli.invoke(
        app,
        ["tr", "a", tracker_id, "-s", "09:00", "-e", "10:30", "-p", "A", "-a", "x"],
    )
    assert result.exit_code == 0, result.output
    assert "1:30" in result.output

    cli.invoke(app, ["tracker", "add", tracker_id, "--start", "10:30", "--end", "09:00"])
    assert STORAGE_REPO.get_entries(tracker_id)[1]["date"] == "2024-01-01"

    result = cli.invoke(app, ["tracker", "modify", tracker_id, "1", "--project", "B"])
    assert result.exit_code == 0, result.output
    assert STORAGE_REPO.get_entries(tracker_id)[1]["project"] == "B"
    assert STORAGE_REPO.get_projects() == ["A", "B"]

    result = cli.invoke(app, ["tracker", "remove", tracker_id, "0"])
    assert result.exit_code == 0, result.output
    assert [entry["project"] for entry in STORAGE_REPO.get_entries(tracker_id)] == ["B"]


def test_add_rejects_malformed_time(cli, document):
    cli.invoke(app, ["tracker", "show", str(document)])
    tracker_id = _tracker_ids(document)[0]

    result = cli.invoke(app, ["tracker", "add", tracker_id, "--start", "9h"])

    assert result.exit_code != 0
    assert STORAGE_REPO.get_entries(tracker_id) == []


def test_unknown_tracker_and_position(cli, document):
    result = cli.invoke(app, ["tracker", "add", "unknown"])
    assert result.exit_code == 1
    assert "Unknown tracker id" in result.output

    cli.invoke(app, ["tracker", "show", str(document)])
    tracker_id = _tracker_ids(document)[0]
    result = cli.invoke(app, ["tracker", "remove", tracker_id, "3"])
    assert result.exit_code == 1


def test_sort_and_date_commands(cli, document):
    cli.invoke(app, ["tracker", "show", str(document)])
    tracker_id = _tracker_ids(document)[0]
    STORAGE_REPO.append_entry(tracker_id, make_entry("10:00", "11:00"))

    result = cli.invoke(app, ["tracker", "sort", tracker_id, "start"])
    assert result.exit_code == 0, result.output
    assert STORAGE_REPO.get_sort(tracker_id) == "start"

    result = cli.invoke(app, ["tracker", "sort", tracker_id, "duration"])
    assert result.exit_code != 0

    result = cli.invoke(app, ["tracker", "date", tracker_id, "2024-02-29"])
    assert result.exit_code == 0, result.output
    assert STORAGE_REPO.get_entries(tracker_id)[0]["date"] == "2024-02-29"

    result = cli.invoke(app, ["tracker", "date", tracker_id, "29.02.2024"])
    assert result.exit_code != 0


@pytest.mark.parametrize("date_str", ["20240229", "2024-02-29T10:00"])
def test_date_options_reject_other_iso_forms(cli, document, date_str):
    cli.invoke(app, ["tracker", "show", str(document)])
    tracker_id = _tracker_ids(document)[0]
    STORAGE_REPO.set_reference_date(tracker_id, "2024-01-01")
    STORAGE_REPO.append_entry(tracker_id, make_entry("09:00", "10:00"))

    result = cli.invoke(app, ["tracker", "date", tracker_id, date_str])
    assert result.exit_code != 0

    result = cli.invoke(app, ["tracker", "modify", tracker_id, "0", "--date", date_str])
    assert result.exit_code != 0

    result = cli.invoke(app, ["export", date_str, "2024-01-31", "--stdout"])
    assert result.exit_code != 0

    assert STORAGE_REPO.get_reference_date(tracker_id) == "2024-01-01"
    assert STORAGE_REPO.get_entries(tracker_id)[0]["date"] == "2024-01-01"


def test_export_writes_named_csv(cli, tmp_path):
    STORAGE_REPO.append_entry("one", make_entry("09:00", "10:30", "A", "x", "2024-01-05"))
    STORAGE_REPO.append_entry("two", make_entry("09:00", "10:00", "B", "y", "2024-01-06"))
    STORAGE_REPO.append_entry("two", make_entry("09:00", "10:00", "A", "z", "2024-02-06"))

    result = cli.invoke(
        app, ["export", "2024-01-01", "2024-01-31", "-p", "A", "-o", str(tmp_path)]
    )

    assert result.exit_code == 0, result.output
    exported = (tmp_path / "time-export-2024-01-01-bis-2024-01-31.csv").read_text()
    assert exported == (
        "date,start,end,project,activity,hours\n2024-01-05,09:00,10:30,A,x,1:30"
    )


def test_export_respects_rounding_setting(cli):
    STORAGE_REPO.append_entry("one", make_entry("09:07", "09:52", "A", "x", "2024-01-05"))

    result = cli.invoke(app, ["config", "set", "--round"])
    assert result.exit_code == 0, result.output

    result = cli.invoke(app, ["x", "2024-01-01", "2024-01-31", "--stdout"])
    assert result.exit_code == 0, result.output
    assert "2024-01-05,09:07,09:52,A,x,0:45" in result.output


def test_project_commands(cli):
    result = cli.invoke(app, ["project", "add", "Alpha"])
    assert result.exit_code == 0, result.output
    assert STORAGE_REPO.get_projects() == ["Alpha"]

    result = cli.invoke(app, ["project", "ls"])
    assert "Alpha" in result.output


def test_config_view(cli):
    result = cli.invoke(app, ["config", "view"])
    assert result.exit_code == 0, result.output
    assert "block_label" in result.output


def test_save_failure_is_reported(cli, document, monkeypatch, data_dir):
    from timeblocks import configuration

    cli.invoke(app, ["tracker", "show", str(document)])
    tracker_id = _tracker_ids(document)[0]
    monkeypatch.setattr(
        configuration, "DATA_STORAGE_PATH", data_dir / "missing-dir" / "storage.yaml"
    )

    result = cli.invoke(app, ["tracker", "add", tracker_id, "-s", "09:00"])

    assert result.exit_code == 1
    assert "Saving tracker data failed" in result.output
    # not rolled back
    assert len(STORAGE_REPO.get_entries(tracker_id)) == 1


def test_watch_stamps_until_interrupted(cli, document, monkeypatch):
    def interrupt(_seconds):
        raise KeyboardInterrupt

    monkeypatch.setattr(watch_module.time, "sleep", interrupt)

    result = cli.invoke(app, ["watch", str(document), "--interval", "0"])

    assert result.exit_code == 0, result.output
    assert None not in _tracker_ids(document)
