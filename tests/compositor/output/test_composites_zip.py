"""
Unit tests for ZIP packaging of composites.
"""

import zipfile
from io import BytesIO

import pytest

from pairframe.compositor.output import (
    DEFAULT_ARCHIVE_NAME,
    archive_entry_names,
    build_archive,
    write_composites_zip,
)
from pairframe.core.models import CompositeResult, TextOptions, TransformPair


def make_result(name: str, payload: bytes = b"\xff\xd8fake-jpeg\xff\xd9") -> CompositeResult:
    return CompositeResult(
        encoded_image=payload,
        name=name,
        left_source_ref=f"left/{name}.jpg",
        right_source_ref=f"right/{name}.jpg",
        text_options=TextOptions(text=name),
        transforms=TransformPair(),
    )


class TestArchiveEntryNames:
    def test_names_when_unique_then_combined_suffix(self):
        results = [make_result("John Smith"), make_result("Jane Doe")]

        assert archive_entry_names(results) == ["John Smith_combined.jpg", "Jane Doe_combined.jpg"]

    def test_names_when_duplicate_then_numbered(self):
        results = [make_result("John Smith"), make_result("Jane Doe"), make_result("John Smith")]

        assert archive_entry_names(results) == [
            "John Smith_combined.jpg",
            "Jane Doe_combined.jpg",
            "John Smith (2)_combined.jpg",
        ]


class TestWriteCompositesZip:
    def test_write_when_results_then_entries_hold_exact_bytes(self, tmp_path):
        # Arrange
        results = [make_result("John Smith", b"first"), make_result("Jane Doe", b"second")]

        # Act
        archive = write_composites_zip(results, tmp_path / "out.zip")

        # Assert
        with zipfile.ZipFile(archive) as zf:
            assert zf.namelist() == ["John Smith_combined.jpg", "Jane Doe_combined.jpg"]
            assert zf.read("John Smith_combined.jpg") == b"first"
            assert zf.read("Jane Doe_combined.jpg") == b"second"
            assert all(info.compress_type == zipfile.ZIP_STORED for info in zf.infolist())

    def test_write_when_directory_then_default_archive_name(self, tmp_path):
        archive = write_composites_zip([make_result("A B")], tmp_path)

        assert archive == tmp_path / DEFAULT_ARCHIVE_NAME
        assert archive.exists()

    def test_write_when_no_zip_suffix_then_appended(self, tmp_path):
        archive = write_composites_zip([make_result("A B")], tmp_path / "composites")

        assert archive.name == "composites.zip"

    def test_write_when_parent_missing_then_created(self, tmp_path):
        archive = write_composites_zip([make_result("A B")], tmp_path / "nested" / "deep" / "out.zip")

        assert archive.exists()

    def test_write_when_duplicates_then_nothing_overwritten(self, tmp_path):
        results = [make_result("John Smith", b"one"), make_result("John Smith", b"two")]

        archive = write_composites_zip(results, tmp_path / "out.zip")

        with zipfile.ZipFile(archive) as zf:
            assert zf.read("John Smith_combined.jpg") == b"one"
            assert zf.read("John Smith (2)_combined.jpg") == b"two"


class TestBuildArchive:
    def test_build_when_results_then_valid_zip_bytes(self):
        data = build_archive([make_result("A B", b"payload")])

        with zipfile.ZipFile(BytesIO(data)) as zf:
            assert zf.read("A B_combined.jpg") == b"payload"

    def test_build_when_empty_then_empty_archive(self):
        with zipfile.ZipFile(BytesIO(build_archive([]))) as zf:
            assert zf.namelist() == []
