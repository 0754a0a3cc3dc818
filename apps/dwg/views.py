"""
DWG Viewer API views.

JSON endpoints for the file browser and the 3D viewer, PNG responses for
previews. Render failures return 500 with an explicit error, distinct from
the 404 of a missing drawing.
"""
import logging

from django.http import FileResponse, JsonResponse
from django.urls import reverse
from django.views import View

from .services import (
    InvalidSectionError,
    RenderError,
    SourceNotFound,
    get_viewer,
)

logger = logging.getLogger(__name__)


def _not_found() -> JsonResponse:
    return JsonResponse({"error": "File not found"}, status=404)


def _png_response(path) -> FileResponse:
    return FileResponse(open(path, "rb"), content_type="image/png")


class DWGListView(View):
    """List the drawings in the source directory."""

    def get(self, request):
        try:
            return JsonResponse(get_viewer().list_source_files(), safe=False)
        except OSError as e:
            logger.error(f"Error listing DWG files: {e}")
            return JsonResponse({"error": "Failed to list files"}, status=500)


class DWGInfoView(View):
    def get(self, request, file_name: str):
        try:
            return JsonResponse(get_viewer().get_file_info(file_name))
        except SourceNotFound:
            return _not_found()


class DWGPreviewView(View):
    """PNG preview of the whole drawing."""

    def get(self, request, file_name: str):
        try:
            png_path = get_viewer().get_preview(file_name)
            return _png_response(png_path)
        except SourceNotFound:
            return _not_found()
        except RenderError as e:
            logger.error(f"Error generating preview for {file_name}: {e}")
            return JsonResponse(
                {"error": f"Failed to generate preview: {e.message}"},
                status=500,
            )


class DWGSectionView(View):
    """PNG preview of one section (currently the whole drawing)."""

    def get(self, request, file_name: str, section: str):
        try:
            png_path = get_viewer().get_section_preview(file_name, section)
            return _png_response(png_path)
        except SourceNotFound:
            return _not_found()
        except InvalidSectionError as e:
            return JsonResponse({"error": e.message}, status=400)
        except RenderError as e:
            logger.error(
                f"Error generating section preview for {file_name}, section {section}: {e}"
            )
            return JsonResponse(
                {"error": f"Failed to generate section preview: {e.message}"},
                status=500,
            )


class DWGGeometryView(View):
    """Floor plan geometry for the 3D viewer. Degrades to empty floors."""

    def get(self, request, file_name: str):
        try:
            plan = get_viewer().get_floor_plan(file_name)
        except SourceNotFound:
            return _not_found()

        data = plan.to_dict()
        data["previewUrl"] = reverse("dwg:preview", args=[file_name])
        return JsonResponse(data)


class DWGStatusView(View):
    """Availability of the DXF/DWG decoders."""

    def get(self, request):
        return JsonResponse(get_viewer().get_decoder_status())
