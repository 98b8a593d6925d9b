"""JSON responses encoded with msgspec."""

from typing import Any

import msgspec
from fastapi.responses import JSONResponse


class MsgspecResponse(JSONResponse):
    """JSONResponse that serializes msgspec Structs directly."""

    def render(self, content: Any) -> bytes:
        return msgspec.json.encode(content)
