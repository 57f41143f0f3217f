"""
Agora Vote Store - App Configuration
====================================
Persistent sessions, vote rows, and session vote aggregates.
"""

from django.apps import AppConfig


class CoreVoteStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.vote_store"
    label = "core_vote_store"
    verbose_name = "Agora Vote Store"
