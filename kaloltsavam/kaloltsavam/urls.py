from django.contrib import admin
from django.urls import path, include

from kaloltsavam.apps.results import views as results_views
from kaloltsavam.apps.results import api as results_api

urlpatterns = [
    path("admin/", admin.site.urls),

    # Home = búsqueda pública de resultados
    path("", results_views.results_search, name="home"),

    # Login / signup / logout del panel de administración
    path("accounts/", include("kaloltsavam.apps.accounts.urls")),

    # Resultados públicos + consola de administración
    path("results/", include("kaloltsavam.apps.results.urls")),
    path("admin-console/", include("kaloltsavam.apps.results.urls_admin")),

    # Endpoint JSON (lectura anónima, CORS)
    path("api/results/", results_api.results_endpoint, name="api_results"),
    path("api/health/", results_api.health, name="api_health"),

    # Apelaciones
    path("appeals/", include("kaloltsavam.apps.appeals.urls")),
]
