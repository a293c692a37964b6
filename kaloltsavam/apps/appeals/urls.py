from django.urls import path
from . import views

urlpatterns = [
    path("submit/", views.submit_appeal, name="appeal_submit"),
    path("<int:pk>/status/", views.appeal_set_status, name="appeal_set_status"),
]
