# apps/dwg/tasks.py
"""
Background tasks for preview rendering.

Renders previews ahead of the first request so the viewer can serve them
straight from the cache.
"""
import logging

from celery import shared_task

from .services import RenderError, SourceNotFound, get_viewer

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3)
def render_preview_task(self, file_name: str, section: str = None):
    """Render (or refresh) the cached preview of one drawing."""
    viewer = get_viewer()
    try:
        if section is None:
            png_path = viewer.get_preview(file_name)
        else:
            png_path = viewer.get_section_preview(file_name, section)
    except SourceNotFound:
        logger.warning(f"Preview task: {file_name} no longer exists")
        return None
    except RenderError as e:
        logger.error(f"Preview task failed for {file_name}: {e}")
        raise self.retry(exc=e, countdown=30)

    logger.info(f"Preview ready: {png_path.name}")
    return str(png_path)


@shared_task
def warm_preview_cache():
    """Queue a preview render for every source drawing."""
    files = get_viewer().list_source_files()
    for entry in files:
        render_preview_task.delay(entry["name"])
    logger.info(f"Queued {len(files)} preview renders")
    return len(files)
