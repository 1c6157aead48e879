from typing import Any, Optional

from pydantic import BaseModel


class ServerResponse(BaseModel):
    data: Any = None
    success: bool
    error: Optional[str] = None
    code: Optional[str] = None
