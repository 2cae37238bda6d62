"""
Unit tests for batch orchestration.
"""

import zipfile
from io import BytesIO
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from pairframe.compositor import (
    CompositorConfig,
    process_all,
    process_photos,
    resolve_pair_text,
    write_composites_zip,
)
from pairframe.compositor.pairing import pair_photos
from pairframe.core.errors import BatchError, ConfigurationError, DecodeError, SurfaceError
from pairframe.core.models import SourcePhoto, TextOptions


@pytest.fixture
def two_sides(photo_factory):
    """Three left and two right photos, created out of order."""
    left = [
        photo_factory("Zane_Amy_01.png", color="red", folder="left"),
        photo_factory("Adams_Bob_01.png", color="green", folder="left"),
        photo_factory("Moore_Cat_01.png", color="blue", folder="left"),
    ]
    right = [
        photo_factory("b_after.png", color="yellow", folder="right"),
        photo_factory("a_after.png", color="black", folder="right"),
    ]
    return left, right


class TestResolvePairText:
    def test_resolve_when_enabled_with_text_then_text_kept(self):
        options = TextOptions(enabled=True, text="Class of 2024")

        resolved = resolve_pair_text(options, "John Smith")

        assert resolved.text == "Class of 2024"

    def test_resolve_when_enabled_without_text_then_display_name(self):
        resolved = resolve_pair_text(TextOptions(enabled=True), "John Smith")

        assert resolved.text == "John Smith"
        assert resolved.should_render

    def test_resolve_when_disabled_then_not_rendered(self):
        resolved = resolve_pair_text(TextOptions(enabled=False, text="ignored"), "John Smith")

        assert resolved.text == "John Smith"
        assert not resolved.should_render

    def test_resolve_when_no_color_then_black(self):
        assert resolve_pair_text(TextOptions(enabled=True), "A B").color == "#000000"

    def test_resolve_when_color_set_then_kept(self):
        assert resolve_pair_text(TextOptions(color="#ff0000"), "A B").color == "#ff0000"


class TestProcessPhotos:
    def test_process_when_uneven_sides_then_min_count_in_sorted_order(self, two_sides, fast_config):
        # Arrange
        left, right = two_sides

        # Act
        results = process_photos(left, right, config=fast_config)

        # Assert
        assert [r.name for r in results] == ["Bob Adams", "Cat Moore"]
        assert results[0].right_source_ref.endswith("a_after.png")
        assert results[1].right_source_ref.endswith("b_after.png")

    def test_process_when_progress_then_strictly_increasing_to_100(self, two_sides, fast_config):
        left, right = two_sides
        progress = []

        process_photos(left, right, on_progress=progress.append, config=fast_config)

        assert progress == [50.0, 100.0]

    def test_process_when_empty_side_then_empty_result(self, photo_factory, fast_config):
        left = [photo_factory("Smith_John_01.png")]
        on_progress = MagicMock()

        assert process_photos(left, [], on_progress=on_progress, config=fast_config) == []
        on_progress.assert_not_called()

    def test_process_when_bad_left_name_then_earlier_pairs_reported_first(self, photo_factory, fast_config):
        # Arrange
        left = [
            photo_factory("Adams_Bob_01.png", folder="left"),
            photo_factory("Brown_Dan_01.png", folder="left"),
            photo_factory("nomarker.png", folder="left"),
        ]
        right = [photo_factory(f"{c}.png", folder="right") for c in "abc"]
        progress = []

        # Act
        with pytest.raises(BatchError) as exc_info:
            process_photos(left, right, on_progress=progress.append, config=fast_config)

        # Assert
        assert exc_info.value.pair_index == 2
        assert isinstance(exc_info.value.cause, ConfigurationError)
        assert "nomarker.png" in str(exc_info.value)
        assert progress == [pytest.approx(100 / 3), pytest.approx(200 / 3)]

    def test_process_when_lenient_names_then_stem_used(self, photo_factory):
        config = CompositorConfig(yield_interval_s=0, require_name_marker=False)
        left = [photo_factory("Smith_John.png", folder="left")]
        right = [photo_factory("a.png", folder="right")]

        results = process_photos(left, right, config=config)

        assert results[0].name == "John Smith"


class TestProcessAll:
    def test_process_when_decode_fails_then_earlier_progress_reported(self, photo_factory, fast_config):
        # Arrange
        left = [
            photo_factory("Adams_Bob_01.png", folder="left"),
            SourcePhoto("Brown_Dan_01.jpg", b"garbage"),
            photo_factory("Clark_Eve_01.png", folder="left"),
        ]
        right = [photo_factory(f"{c}.png", folder="right") for c in "abc"]
        pairs = pair_photos(left, right)
        progress = []

        # Act
        with pytest.raises(BatchError) as exc_info:
            process_all(pairs, on_progress=progress.append, config=fast_config)

        # Assert
        assert exc_info.value.pair_index == 1
        assert isinstance(exc_info.value.__cause__, DecodeError)
        assert "Brown_Dan_01.jpg" in str(exc_info.value)
        assert progress == [pytest.approx(100 / 3)]

    def test_process_when_interval_set_then_sleeps_between_composites(self, two_sides):
        left, right = two_sides
        sleep = MagicMock()
        config = CompositorConfig(yield_interval_s=0.25)

        process_photos(left, right, config=config, sleep=sleep)

        assert sleep.call_count == 2
        sleep.assert_called_with(0.25)

    def test_process_when_interval_zero_then_no_sleep(self, two_sides, fast_config):
        left, right = two_sides
        sleep = MagicMock()

        process_photos(left, right, config=fast_config, sleep=sleep)

        sleep.assert_not_called()

    def test_process_when_surface_unavailable_then_fails_before_first_pair(self, two_sides, fast_config):
        # Arrange
        left, right = two_sides
        pairs = pair_photos(left, right)
        progress = []

        # Act
        with patch(
            "pairframe.compositor.controller.create_surface",
            side_effect=SurfaceError("out of memory"),
        ), patch("pairframe.compositor.controller.compose") as mock_compose:
            with pytest.raises(BatchError) as exc_info:
                process_all(pairs, on_progress=progress.append, config=fast_config)

        # Assert
        assert exc_info.value.pair_index == 0
        assert isinstance(exc_info.value.cause, SurfaceError)
        mock_compose.assert_not_called()
        assert progress == []

    def test_process_when_text_enabled_then_label_uses_display_name(self, two_sides, fast_config):
        left, right = two_sides

        results = process_photos(left, right, text_options=TextOptions(enabled=True), config=fast_config)

        assert [r.text_options.text for r in results] == ["Bob Adams", "Cat Moore"]
        assert all(r.text_options.enabled for r in results)

    def test_process_when_unexpected_error_then_wrapped_with_pair_index(self, two_sides, fast_config):
        # Arrange
        left, right = two_sides
        pairs = pair_photos(left, right)
        progress = []
        first_result = MagicMock()

        # Act
        with patch(
            "pairframe.compositor.controller.compose",
            side_effect=[first_result, MemoryError("cannot allocate")],
        ):
            with pytest.raises(BatchError) as exc_info:
                process_all(pairs, on_progress=progress.append, config=fast_config)

        # Assert
        assert exc_info.value.pair_index == 1
        assert isinstance(exc_info.value.cause, MemoryError)
        assert isinstance(exc_info.value.__cause__, MemoryError)
        assert progress == [50.0]

    def test_process_when_photo_is_thin_strip_then_composited(self, photo_factory, fast_config):
        """A 1 x 2000 photo covers a huge rectangle but must not be materialised."""
        left = [photo_factory("Strip_Sam_01.png", size=(1, 2000), color="red", folder="left")]
        right = [photo_factory("a.png", color="blue", folder="right")]

        results = process_photos(left, right, config=fast_config)

        image = Image.open(BytesIO(results[0].encoded_image))
        assert image.size == (1920, 1080)
        red, green, blue = image.convert("RGB").getpixel((480, 540))
        assert red > 200 and green < 60 and blue < 60


class TestBatchToArchive:
    def test_archive_when_batch_written_then_entries_match_results(self, two_sides, fast_config, tmp_path):
        # Arrange
        left, right = two_sides
        results = process_photos(left, right, config=fast_config)

        # Act
        archive = write_composites_zip(results, tmp_path)

        # Assert
        with zipfile.ZipFile(archive) as zf:
            assert zf.namelist() == ["Bob Adams_combined.jpg", "Cat Moore_combined.jpg"]
            for result in results:
                assert zf.read(result.archive_name) == result.encoded_image
