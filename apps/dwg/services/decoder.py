"""
CAD decoder wrapper.

Opens DXF files natively through ezdxf and DWG files through ezdxf's ODA
File Converter addon, falling back to LibreDWG's ``dwg2dxf``. The opened
drawing is wrapped in CADDocument, which is the only surface the rest of
the viewer touches:

    document = open_document("plan.dwg")
    for entity in document.entities():
        ...
    png = document.rasterize(1600, 1600, "#ffffff")
"""
import io
import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Iterator, Optional, Union

import ezdxf
from ezdxf import recover
from ezdxf.addons.drawing import Frontend, RenderContext
from ezdxf.addons.drawing.matplotlib import MatplotlibBackend
from ezdxf.addons.drawing.properties import LayoutProperties
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from .errors import DecodeError, RenderError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".dxf", ".dwg")

LIBREDWG_PATHS = [
    "/usr/bin/dwg2dxf",
    "/usr/local/bin/dwg2dxf",
]

CONVERTER_TIMEOUT = 120


class CADBlock:
    """Named block definition with its own entity collection."""

    def __init__(self, block_layout):
        self._layout = block_layout

    @property
    def name(self) -> str:
        return self._layout.name

    def entities(self) -> list:
        return list(self._layout)


class CADDocument:
    """Read-only view over one decoded drawing."""

    def __init__(self, doc, source: Optional[Path] = None):
        self.doc = doc
        self.source = source

    def entities(self) -> list:
        """Model space entities in document order."""
        return list(self.doc.modelspace())

    def blocks(self) -> Iterator[CADBlock]:
        """Block definitions, excluding model space and paper space layouts."""
        for block_layout in self.doc.blocks:
            if block_layout.is_any_layout:
                continue
            yield CADBlock(block_layout)

    def all_entities(self) -> Iterator:
        """Model space entities followed by each block's entities."""
        yield from self.entities()
        for block in self.blocks():
            yield from block.entities()

    def rasterize(self, width: int, height: int,
                  background: str = "#ffffff", dpi: int = 100) -> bytes:
        """
        Render model space to a PNG of exactly width x height pixels.

        Uses a standalone Figure with an Agg canvas instead of pyplot, so
        concurrent renders do not share matplotlib state.
        """
        try:
            fig = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
            FigureCanvasAgg(fig)
            ax = fig.add_axes([0, 0, 1, 1])

            msp = self.doc.modelspace()
            layout_properties = LayoutProperties.from_layout(msp)
            layout_properties.set_colors(background)

            ctx = RenderContext(self.doc)
            out = MatplotlibBackend(ax, adjust_figure=False)
            Frontend(ctx, out).draw_layout(
                msp, finalize=True, layout_properties=layout_properties
            )

            buffer = io.BytesIO()
            fig.savefig(buffer, format="png", dpi=dpi, facecolor=background)
            return buffer.getvalue()
        except Exception as e:
            raise RenderError(
                f"Rasterization failed: {e}",
                details={"source": str(self.source)},
            ) from e


def _read_dxf(filepath: Path):
    try:
        return ezdxf.readfile(str(filepath))
    except ezdxf.DXFStructureError as e:
        logger.warning(f"DXF structure error in {filepath.name}, trying recovery mode: {e}")
        doc, auditor = recover.readfile(str(filepath))
        if auditor.has_errors:
            logger.warning(f"Recovered {filepath.name} with {len(auditor.errors)} errors")
        return doc


def find_libredwg() -> Optional[str]:
    """Find LibreDWG's dwg2dxf on the system."""
    for path in LIBREDWG_PATHS:
        if Path(path).exists():
            return path
    return shutil.which("dwg2dxf")


def _read_dwg_with_libredwg(filepath: Path):
    libredwg = find_libredwg()
    if not libredwg:
        return None

    with tempfile.TemporaryDirectory(prefix="dwg_convert_") as temp_dir:
        output_path = Path(temp_dir) / f"{filepath.stem}.dxf"
        cmd = [libredwg, "-y", "-o", str(output_path), str(filepath)]
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=CONVERTER_TIMEOUT
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"LibreDWG conversion of {filepath.name} timed out")
            return None

        if not output_path.exists():
            logger.warning(f"LibreDWG conversion failed: {result.stderr}")
            return None
        return _read_dxf(output_path)


def _read_dwg(filepath: Path):
    try:
        from ezdxf.addons import odafc
        if odafc.is_installed():
            return odafc.readfile(str(filepath))
    except Exception as e:
        logger.warning(f"ODA File Converter failed for {filepath.name}: {e}")

    doc = _read_dwg_with_libredwg(filepath)
    if doc is not None:
        return doc

    raise DecodeError(
        f"Cannot load DWG file: {filepath.name}. "
        "Neither ODA File Converter nor LibreDWG produced a DXF.",
        details={"path": str(filepath)},
    )


def open_document(filepath: Union[str, Path]) -> CADDocument:
    """
    Decode a DXF or DWG file.

    Raises:
        DecodeError: unsupported format or the decoder rejected the file
    """
    filepath = Path(filepath)
    suffix = filepath.suffix.lower()

    if suffix not in SUPPORTED_SUFFIXES:
        raise DecodeError(
            f"Unsupported format: {suffix} (only .dxf and .dwg)",
            details={"path": str(filepath)},
        )

    logger.info(f"Decoding {filepath.name}")
    try:
        if suffix == ".dxf":
            doc = _read_dxf(filepath)
        else:
            doc = _read_dwg(filepath)
    except DecodeError:
        raise
    except Exception as e:
        raise DecodeError(
            f"Failed to decode {filepath.name}: {e}",
            details={"path": str(filepath)},
        ) from e

    return CADDocument(doc, source=filepath)


def get_decoder_status() -> dict:
    """Report which DWG converters are available."""
    try:
        from ezdxf.addons import odafc
        oda_available = bool(odafc.is_installed())
    except Exception:
        oda_available = False

    libredwg = find_libredwg()
    return {
        "dxf": True,
        "dwg": oda_available or libredwg is not None,
        "oda_file_converter": oda_available,
        "libredwg": libredwg,
        "ezdxf_version": ezdxf.__version__,
    }
