"""Response envelope: {"status": "success", "message"?, "results"?, "total"?, "data"?}"""

from typing import Any, Optional


def success(data: Optional[dict] = None, message: Optional[str] = None, **extra: Any) -> dict:
    body = {"status": "success"}
    if message:
        body["message"] = message
    body.update(extra)
    if data is not None:
        body["data"] = data
    return body
