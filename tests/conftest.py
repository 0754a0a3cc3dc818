"""Pytest configuration and shared fixtures for the DWG viewer tests."""
import logging
import threading
from pathlib import Path
from types import SimpleNamespace

import ezdxf
import pytest

from apps.dwg.conf import ViewerConfig
from apps.dwg.services.errors import DecodeError

logging.getLogger("matplotlib").setLevel(logging.WARNING)
logging.getLogger("ezdxf").setLevel(logging.WARNING)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def fake_entity(dxftype: str, **dxf):
    """Stand-in for a decoder entity exposing only the given DXF fields."""
    return SimpleNamespace(dxftype=lambda: dxftype, dxf=SimpleNamespace(**dxf))


class FakeBlock:
    def __init__(self, entities):
        self._entities = list(entities)

    def entities(self):
        return list(self._entities)


class FakeDocument:
    """Document double returning fixed PNG bytes and fixed entities."""

    def __init__(self, entities=(), blocks=(), png=PNG_SIGNATURE + b"fake-preview"):
        self._entities = list(entities)
        self._blocks = [FakeBlock(b) for b in blocks]
        self.png = png
        self.rasterize_calls = []

    def entities(self):
        return list(self._entities)

    def blocks(self):
        return iter(self._blocks)

    def all_entities(self):
        yield from self.entities()
        for block in self.blocks():
            yield from block.entities()

    def rasterize(self, width, height, background="#ffffff"):
        self.rasterize_calls.append((width, height, background))
        return self.png


class CountingDecoder:
    """Decoder double that records every path it is asked to open."""

    def __init__(self, document=None, error=None):
        self.document = document or FakeDocument()
        self.error = error
        self.paths = []
        self._lock = threading.Lock()

    @property
    def calls(self) -> int:
        return len(self.paths)

    def __call__(self, path):
        path = Path(path)
        with self._lock:
            self.paths.append(path)
        assert path.exists(), "decoder was handed a path that does not exist"
        if self.error is not None:
            raise self.error
        return self.document


@pytest.fixture
def counting_decoder():
    return CountingDecoder()


@pytest.fixture
def failing_decoder():
    return CountingDecoder(error=DecodeError("corrupt drawing"))


@pytest.fixture
def viewer_dirs(tmp_path):
    dirs = SimpleNamespace(
        files=tmp_path / "files",
        cache=tmp_path / "cache",
        scratch=tmp_path / "scratch",
    )
    dirs.files.mkdir()
    return dirs


@pytest.fixture
def viewer_config(viewer_dirs):
    return ViewerConfig(
        files_dir=viewer_dirs.files,
        cache_dir=viewer_dirs.cache,
        scratch_dir=viewer_dirs.scratch,
    )


@pytest.fixture
def viewer_settings(settings, viewer_dirs):
    """Point settings.DWG_VIEWER at per-test directories."""
    settings.DWG_VIEWER = {
        **settings.DWG_VIEWER,
        "FILES_DIR": viewer_dirs.files,
        "CACHE_DIR": viewer_dirs.cache,
        "SCRATCH_DIR": viewer_dirs.scratch,
    }
    return viewer_dirs


@pytest.fixture
def source_file(viewer_dirs):
    """An opaque source drawing; its content is never parsed by fake decoders."""
    path = viewer_dirs.files / "rilievo.dwg"
    path.write_bytes(b"AC1032 fake dwg payload")
    return path


def build_survey_drawing(path: Path) -> Path:
    """
    Small DXF with walls on both floors.

    PIANO TERZO: one line + one closed 4-vertex polyline (default layer)
    SOTTOTETTO: one model space line + one line inside a block
    """
    doc = ezdxf.new("R2010")
    msp = doc.modelspace()
    msp.add_line((0, 0), (5, 0), dxfattribs={"layer": "PIANO_TERZO_MURI"})
    msp.add_lwpolyline(
        [(0, 0), (4, 0), (4, 3), (0, 3)],
        close=True,
        dxfattribs={"layer": "MURI"},
    )
    msp.add_line((0, 0), (0, 2), dxfattribs={"layer": "SOTTOTETTO_MURI"})
    msp.add_text("Soggiorno", dxfattribs={"layer": "PIANO_TERZO_TESTI"})

    block = doc.blocks.new(name="ABBAINO")
    block.add_line((1, 1), (2, 1), dxfattribs={"layer": "TETTO"})

    doc.saveas(path)
    return path


@pytest.fixture
def survey_dxf(viewer_dirs):
    return build_survey_drawing(viewer_dirs.files / "rilievo.dxf")
