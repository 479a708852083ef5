"""
Tests for the dataset → report writer.
"""

import json

import pytest

from ethnocrawler.dataset import iter_record_files, read_records, write, write_report
from ethnocrawler.run_config import ScraperConfig


def _record(n, url=None):
    return {
        "title": f"Page {n}",
        "url": url or f"https://e.com/language/l{n}/",
        "html": f"text {n}",
        "languageCode": f"l{n}",
    }


def _config(tmp_path, dataset_dir, name="output.json"):
    return ScraperConfig(dataset_dir=str(dataset_dir), output_file_name=str(tmp_path / name))


class TestIterRecordFiles:

    def test_sorted_and_metadata_skipped(self, make_dataset):
        dataset = make_dataset([_record(i) for i in range(3)])
        names = [p.name for p in iter_record_files(dataset)]
        assert names == ["000000001.json", "000000002.json", "000000003.json"]

    def test_missing_directory(self, tmp_path):
        assert iter_record_files(tmp_path / "nope") == []

    def test_non_json_ignored(self, dataset_dir):
        (dataset_dir / "notes.txt").write_text("x")
        assert iter_record_files(dataset_dir) == []


class TestWrite:

    def test_n_files_give_n_records_in_order(self, tmp_path, make_dataset):
        records = [_record(i) for i in range(5)]
        dataset = make_dataset(records)
        output = write(_config(tmp_path, dataset))
        assert json.loads(open(output, encoding="utf-8").read()) == records

    def test_no_deduplication_by_url(self, tmp_path, make_dataset):
        records = [_record(1, url="https://e.com/same/"), _record(2, url="https://e.com/same/")]
        dataset = make_dataset(records)
        output = write(_config(tmp_path, dataset))
        assert len(json.loads(open(output, encoding="utf-8").read())) == 2

    def test_two_space_indent_utf8(self, tmp_path, make_dataset):
        dataset = make_dataset([{"title": "Français", "url": "u", "html": "é", "languageCode": "fra"}])
        output = write(_config(tmp_path, dataset))
        raw = open(output, encoding="utf-8").read()
        assert raw.startswith("[\n  {\n    \"title\": \"Français\"")

    def test_overwrites_previous_report(self, tmp_path, make_dataset):
        cfg = _config(tmp_path, make_dataset([_record(1)]))
        with open(cfg.output_file_name, "w", encoding="utf-8") as f:
            f.write("stale content that is not json")
        write(cfg)
        assert json.loads(open(cfg.output_file_name, encoding="utf-8").read()) == [_record(1)]

    def test_empty_dataset_writes_empty_array(self, tmp_path):
        cfg = _config(tmp_path, tmp_path / "missing")
        write(cfg)
        assert json.loads(open(cfg.output_file_name, encoding="utf-8").read()) == []

    def test_creates_output_directory(self, tmp_path, make_dataset):
        cfg = _config(tmp_path, make_dataset([_record(1)]), name="out/nested/report.json")
        write(cfg)
        assert (tmp_path / "out" / "nested" / "report.json").exists()

    def test_malformed_json_raises(self, tmp_path, dataset_dir):
        (dataset_dir / "000000001.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            write(_config(tmp_path, dataset_dir))


class TestHelpers:

    def test_read_records(self, make_dataset):
        assert read_records(make_dataset([_record(1)])) == [_record(1)]

    def test_write_report_returns_absolute_path(self, tmp_path):
        path = write_report([], tmp_path / "r.json")
        assert path == str((tmp_path / "r.json").absolute())
