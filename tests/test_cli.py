"""
Tests for the command-line entry point.
"""

import json
import locale
import zipfile
from unittest.mock import patch

import pytest
from PIL import Image

from pairframe.cli import _text_options, build_parser, main
from pairframe.core.models import TextOptions, TextPosition


@pytest.fixture
def photo_dirs(tmp_path):
    left = tmp_path / "before"
    right = tmp_path / "after"
    left.mkdir()
    right.mkdir()
    Image.new("RGB", (640, 480), "red").save(left / "Smith_John_01.jpg")
    Image.new("RGB", (640, 480), "blue").save(right / "Smith_John_02.jpg")
    return left, right


class TestTextOptions:
    def test_text_options_when_no_flags_then_base_kept(self):
        args = build_parser().parse_args(["a", "b"])
        base = TextOptions(enabled=True, size_px=30, bold=True)

        assert _text_options(args, base) == base

    def test_text_options_when_flags_then_override_base(self):
        args = build_parser().parse_args(
            ["a", "b", "--text", "Hello", "--position", "top-right", "--stroke", "--size", "20"]
        )
        base = TextOptions(bold=True, size_px=30)

        options = _text_options(args, base)

        assert options.enabled
        assert options.text == "Hello"
        assert options.position is TextPosition.TOP_RIGHT
        assert options.stroke
        assert options.size_px == 20
        assert options.bold

    def test_text_options_when_label_flag_then_enabled_without_text(self):
        args = build_parser().parse_args(["a", "b", "--label"])

        options = _text_options(args, None)

        assert options.enabled
        assert options.text is None


class TestMain:
    def test_main_when_valid_dirs_then_archive_written(self, photo_dirs, tmp_path):
        # Arrange
        left, right = photo_dirs
        output = tmp_path / "out.zip"

        # Act
        code = main([str(left), str(right), "-o", str(output), "--label"])

        # Assert
        assert code == 0
        with zipfile.ZipFile(output) as zf:
            assert zf.namelist() == ["John Smith_combined.jpg"]

    def test_main_when_job_file_then_applied(self, photo_dirs, tmp_path):
        left, right = photo_dirs
        job = tmp_path / "job.json"
        job.write_text(json.dumps({
            "jpeg_quality": 0.5,
            "transforms": {"left": {"Smith_John_01.jpg": {"rotation": 45}}},
        }), encoding="utf-8")
        output = tmp_path / "out.zip"

        code = main([str(left), str(right), "-o", str(output), "--job", str(job)])

        assert code == 0
        assert output.exists()

    def test_main_when_name_unparseable_then_exit_1(self, tmp_path):
        left = tmp_path / "before"
        right = tmp_path / "after"
        left.mkdir()
        right.mkdir()
        Image.new("RGB", (10, 10)).save(left / "portrait.jpg")
        Image.new("RGB", (10, 10)).save(right / "portrait.jpg")

        assert main([str(left), str(right), "-o", str(tmp_path / "out.zip")]) == 1

    def test_main_when_lenient_names_then_stem_accepted(self, tmp_path):
        left = tmp_path / "before"
        right = tmp_path / "after"
        left.mkdir()
        right.mkdir()
        Image.new("RGB", (10, 10)).save(left / "Doe_Jane.jpg")
        Image.new("RGB", (10, 10)).save(right / "Doe_Jane.jpg")
        output = tmp_path / "out.zip"

        assert main([str(left), str(right), "-o", str(output), "--lenient-names"]) == 0
        with zipfile.ZipFile(output) as zf:
            assert zf.namelist() == ["Jane Doe_combined.jpg"]

    def test_main_when_missing_dir_then_exit_1(self, tmp_path):
        assert main([str(tmp_path / "nope"), str(tmp_path), "-o", str(tmp_path / "o.zip")]) == 1

    def test_main_when_quality_out_of_range_then_exit_2(self, photo_dirs, tmp_path):
        left, right = photo_dirs

        assert main([str(left), str(right), "--quality", "2", "-o", str(tmp_path / "o.zip")]) == 2

    def test_main_when_no_pairs_then_nothing_written(self, tmp_path):
        left = tmp_path / "before"
        right = tmp_path / "after"
        left.mkdir()
        right.mkdir()
        output = tmp_path / "out.zip"

        assert main([str(left), str(right), "-o", str(output)]) == 0
        assert not output.exists()

    def test_main_when_run_then_user_collation_applied(self, photo_dirs, tmp_path):
        left, right = photo_dirs

        with patch("pairframe.cli.locale.setlocale") as mock_setlocale:
            main([str(left), str(right), "-o", str(tmp_path / "out.zip")])

        mock_setlocale.assert_called_once_with(locale.LC_COLLATE, "")

    def test_main_when_user_locale_unavailable_then_still_runs(self, photo_dirs, tmp_path):
        left, right = photo_dirs
        output = tmp_path / "out.zip"

        with patch("pairframe.cli.locale.setlocale", side_effect=locale.Error("unsupported locale")):
            code = main([str(left), str(right), "-o", str(output)])

        assert code == 0
        assert output.exists()
