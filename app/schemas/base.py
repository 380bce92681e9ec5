from pydantic import BaseModel

class ResponseBase(BaseModel):
    """Base response schema."""
    success: bool
    message: str = None

class MessageResponse(BaseModel):
    """Error body returned by the campaign endpoint."""
    message: str
