from typing import Optional

from pydantic import BaseModel, ConfigDict


class Credentials(BaseModel):
    """
    Signup and login payload.

    Both fields are optional so that a missing or null field reaches the
    service and is reported there rather than as a schema error.
    """
    username: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """
    Safe user representation for API responses.
    Never includes password_hash.
    """
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    success: bool = True
    user: UserResponse


class MeResponse(BaseModel):
    user: UserResponse


class SuccessResponse(BaseModel):
    success: bool = True


class RecordCreate(BaseModel):
    """Absent fields are stored as empty text, or null for the image."""
    date: str = ""
    style: str = ""
    image: Optional[str] = None
    note: str = ""


class RecordResponse(BaseModel):
    id: int
    date: str
    style: str
    image: Optional[str] = None
    note: str

    model_config = ConfigDict(from_attributes=True)


class GoogleProfile(BaseModel):
    """Federated identity fields copied from the provider's userinfo."""
    id: str
    name: str = ""
    email: str = ""
    picture: str = ""


class AuthUrlResponse(BaseModel):
    url: str


class CurrentUserResponse(BaseModel):
    user: Optional[GoogleProfile] = None
