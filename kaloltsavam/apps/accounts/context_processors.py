from .permissions import is_admin


def admin_role(request):
    return {"is_admin": is_admin(getattr(request, "user", None))}
