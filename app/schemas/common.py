from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Envelope every successful API response is wrapped in."""

    data: T
    message: Optional[str] = None
