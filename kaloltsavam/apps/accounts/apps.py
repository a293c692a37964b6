from django.apps import AppConfig
from django.db.models.signals import post_migrate

ADMINS_GROUP = "admins"


def ensure_admins_group(sender, **kwargs):
    # Crea el grupo "admins" si no existe (idempotente)
    from django.contrib.auth.models import Group
    Group.objects.get_or_create(name=ADMINS_GROUP)


class AccountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "kaloltsavam.apps.accounts"
    verbose_name = "Accounts (admins)"

    def ready(self):
        # Conectamos el hook post_migrate una sola vez
        post_migrate.connect(ensure_admins_group, dispatch_uid="accounts.ensure_admins_group")
