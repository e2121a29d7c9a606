from pydantic import BaseModel
from typing import Optional

class ContactSubmission(BaseModel):
    name: str
    email: str
    profession: str
    message: str

class ContactResponse(BaseModel):
    success: bool
    message: str
    error: Optional[str] = None  # Only set in development mode
