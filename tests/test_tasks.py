"""Tests for preview rendering tasks."""
from unittest.mock import MagicMock, patch

import pytest

from apps.dwg.services import DWGViewerService
from apps.dwg.services.errors import RenderError
from apps.dwg.tasks import render_preview_task, warm_preview_cache

from .conftest import PNG_SIGNATURE


@pytest.fixture
def viewer(viewer_config, counting_decoder):
    service = DWGViewerService(viewer_config, decoder=counting_decoder)
    with patch("apps.dwg.tasks.get_viewer", return_value=service):
        yield service


class TestRenderPreviewTask:

    def test_renders_preview(self, viewer, source_file):
        result = render_preview_task.apply(args=["rilievo.dwg"]).get()

        assert result.endswith("rilievo.dwg.png")
        assert viewer.render_cache.lookup(source_file).read_bytes().startswith(PNG_SIGNATURE)

    def test_renders_section(self, viewer, source_file):
        result = render_preview_task.apply(args=["rilievo.dwg", "progetto"]).get()

        assert result.endswith("rilievo.dwg_progetto.png")

    def test_missing_file_is_not_retried(self, viewer):
        assert render_preview_task.apply(args=["missing.dwg"]).get() is None

    def test_render_error_is_retried(self, source_file):
        service = MagicMock()
        service.get_preview.side_effect = RenderError("boom")

        with patch("apps.dwg.tasks.get_viewer", return_value=service):
            result = render_preview_task.apply(args=["rilievo.dwg"])

        assert result.failed()
        assert isinstance(result.result, RenderError)
        assert service.get_preview.call_count >= 1


class TestWarmPreviewCache:

    def test_queues_every_source_file(self, viewer, viewer_dirs, counting_decoder):
        (viewer_dirs.files / "a.dwg").write_bytes(b"AC1032")
        (viewer_dirs.files / "b.dxf").write_text("0\nEOF\n")

        with patch("apps.dwg.tasks.render_preview_task.delay") as delay:
            count = warm_preview_cache.apply().get()

        assert count == 2
        assert [c.args for c in delay.call_args_list] == [("a.dwg",), ("b.dxf",)]

    def test_eager_mode_renders_everything(self, viewer, viewer_dirs, counting_decoder):
        (viewer_dirs.files / "a.dwg").write_bytes(b"AC1032")

        assert warm_preview_cache.apply().get() == 1
        assert counting_decoder.calls == 1
        assert (viewer_dirs.cache / "a.dwg.png").exists()
