from django.urls import path
from . import views

urlpatterns = [
    path("", views.results_search, name="results_search"),
]
