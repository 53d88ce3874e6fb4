from typing import Any, Literal


def envelope(status: Literal["success", "error"], data: Any = None, message: str | None = None) -> dict:
    """Body shape shared by every API response."""
    return {"status": status, "data": data, "message": message}


def success_response(data: Any = None, message: str | None = None) -> dict:
    return envelope("success", data, message)


def error_response(message: str, data: Any = None) -> dict:
    return envelope("error", data, message)
