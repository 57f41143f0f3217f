"""
Agora Auth - App Configuration
==============================
Persistent participant bearer credentials.
"""

from django.apps import AppConfig


class CoreAuthConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.auth"
    label = "core_auth"
    verbose_name = "Agora Auth"
