"""DWG viewer URL configuration."""
from django.urls import path

from . import views

app_name = "dwg"

urlpatterns = [
    path(
        "list/",
        views.DWGListView.as_view(),
        name="list",
    ),
    path(
        "info/<str:file_name>/",
        views.DWGInfoView.as_view(),
        name="info",
    ),
    path(
        "preview/<str:file_name>/",
        views.DWGPreviewView.as_view(),
        name="preview",
    ),
    path(
        "section/<str:file_name>/<str:section>/",
        views.DWGSectionView.as_view(),
        name="section",
    ),
    path(
        "geometry/<str:file_name>/",
        views.DWGGeometryView.as_view(),
        name="geometry",
    ),
    path(
        "status/",
        views.DWGStatusView.as_view(),
        name="status",
    ),
]
