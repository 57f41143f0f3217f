"""
Agora Django HTTP adapter.
Thin framework glue over core/http_api handlers.
"""

from adapters.django_api.wiring import (
    DEV_PARTICIPANT_ID,
    DEV_PARTICIPANT_TOKEN,
    build_dependencies,
    reset_dependencies,
)

__all__ = [
    "DEV_PARTICIPANT_ID",
    "DEV_PARTICIPANT_TOKEN",
    "build_dependencies",
    "reset_dependencies",
]
