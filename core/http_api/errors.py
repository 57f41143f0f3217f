"""
Agora HTTP API - Error Mapping
==============================
Stable transport error mapping for rejections and handler failures.
"""

from __future__ import annotations

from typing import Any, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse

_STATUS_BY_CODE = {
    ReasonCode.AUTH_REQUIRED: 401,
    ReasonCode.AUTH_INVALID: 401,
    ReasonCode.SESSION_NOT_FOUND: 404,
    ReasonCode.BUDGET_EXCEEDED: 409,
    ReasonCode.VOTE_COUNT_NEGATIVE: 409,
    ReasonCode.SESSION_NOT_VOTABLE: 409,
    ReasonCode.PERSISTENCE_FAILED: 503,
}


def status_for_code(code: str) -> int:
    return _STATUS_BY_CODE.get(code, 400)


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(data: Any) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data).to_dict()


def map_rejection_reason(reason: RejectionReason) -> HttpApiErrorBody:
    return HttpApiErrorBody(
        code=reason.code,
        message=reason.message,
        details={
            "policy_name": reason.policy_name,
            "message_key": f"rejection.{reason.code.lower()}",
            "message_params": dict(reason.message_params or {}),
        },
    )


def rejection_response(
    reason: RejectionReason,
    *,
    extra_details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    mapped = map_rejection_reason(reason)
    details = dict(mapped.details)
    if extra_details:
        details.update(extra_details)
    return error_response(
        code=mapped.code,
        message=mapped.message,
        details=details,
    )
