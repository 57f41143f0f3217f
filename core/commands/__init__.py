"""
Agora Command Layer — Rejections
==================================
Expected denials are values, not exceptions.
"""

from core.commands.rejection import (
    ReasonCode,
    RejectionReason,
)

__all__ = [
    "ReasonCode",
    "RejectionReason",
]
