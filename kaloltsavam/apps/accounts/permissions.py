# kaloltsavam/apps/accounts/permissions.py
from __future__ import annotations

import logging
from functools import wraps

from django.contrib import messages
from django.contrib.auth import logout
from django.contrib.auth.views import redirect_to_login
from django.http import HttpRequest

from .apps import ADMINS_GROUP

logger = logging.getLogger(__name__)


class AuthorizationError(Exception):
    """La sesión actual no tiene el rol de administrador."""


def is_admin(user) -> bool:
    """
    Rol admin: superuser, staff o miembro del grupo "admins".
    Recibe el usuario explícitamente (nada de estado global de sesión).
    """
    if user is None or not user.is_authenticated:
        return False
    if user.is_superuser or user.is_staff:
        return True
    return user.groups.filter(name=ADMINS_GROUP).exists()


def require_admin(user) -> None:
    if not is_admin(user):
        raise AuthorizationError("Administrator access required.")


def admin_required(view_func):
    """
    - Sin login → redirige a login con ?next=.
    - Con login pero sin rol → cierra sesión y redirige a login.
    """
    @wraps(view_func)
    def _wrapped(request: HttpRequest, *args, **kwargs):
        if not request.user.is_authenticated:
            return redirect_to_login(request.get_full_path())
        try:
            require_admin(request.user)
        except AuthorizationError:
            logger.warning("Non-admin user %s tried to open %s", request.user.pk, request.path)
            logout(request)
            messages.error(request, "You do not have admin access. Please sign in with an admin account.")
            return redirect_to_login(request.get_full_path())
        return view_func(request, *args, **kwargs)
    return _wrapped
