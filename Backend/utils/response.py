from __future__ import annotations

from typing import Any, Dict

from fastapi.responses import JSONResponse


def failure(message: str, code: int = 400, **details: Any) -> Dict[str, Any]:
    out = {"status": "error", "message": message, "code": code}
    if details:
        out["details"] = details
    return out


def failure_response(message: str, code: int = 400, **details: Any) -> JSONResponse:
    return JSONResponse(status_code=code, content=failure(message, code, **details))
