from __future__ import annotations
from typing import Any

from ninja_extra.controllers import ControllerBase


def request_id_of(request) -> str:
    if request is None:
        return ""
    return request.headers.get("X-Request-Id", "") or request.META.get("HTTP_X_REQUEST_ID", "") or ""


def build_envelope(request, *, message: str = "", status: int = 200, code: str | None = None, data: Any = None,
                   errors: Any = None, extra: dict[str, Any] | None = None) -> dict[str, Any]:
    return {"success": 200 <= status < 400,
            "message": message,
            "data": data if data is not None else {},
            "extra": extra or {},
            "errors": errors,
            "code": code,
            "request_id": request_id_of(request),
            }


class BaseAPIController(ControllerBase):
    def create_response(self, *, message: str = "", data: Any = None, extra: dict[str, Any] | None = None,
                        errors: Any = None, status_code: int = 200, code: str | None = None,):

        request = getattr(self, "context", None) and getattr(self.context, "request", None)
        payload = build_envelope(request, message=message, status=status_code, code=code, data=data,
                                 errors=errors, extra=extra)
        return super().create_response(payload, status_code=status_code)
