from django.urls import path
from . import views

urlpatterns = [
    path("", views.admin_dashboard, name="admin_dashboard"),

    # Alta / edición / borrado manual
    path("results/add/", views.result_add, name="result_add"),
    path("results/<int:pk>/edit/", views.result_edit, name="result_edit"),
    path("results/<int:pk>/delete/", views.result_delete, name="result_delete"),

    # Carga masiva (upload → preview → confirm)
    path("results/upload/", views.bulk_upload, name="results_bulk_upload"),
    path("results/upload/preview/", views.bulk_preview, name="results_bulk_preview"),
    path("results/upload/confirm/", views.bulk_confirm, name="results_bulk_confirm"),
    path("results/upload/cancel/", views.bulk_cancel, name="results_bulk_cancel"),
]
