"""Response bodies shared by every resource."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str
