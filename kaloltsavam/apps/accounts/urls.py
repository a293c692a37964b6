from django.urls import path
from . import views

urlpatterns = [
    # Auth
    path("login/", views.AdminLoginView.as_view(), name="login"),
    path("logout/", views.auth_views.LogoutView.as_view(), name="logout"),

    # Signup público (crea cuenta sin rol admin)
    path("signup/", views.signup, name="signup"),
]
