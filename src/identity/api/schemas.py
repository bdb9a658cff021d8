"""Pydantic request/response schemas for the Identity API."""

from pydantic import BaseModel


class SignUpRequest(BaseModel):
    name: str
    email: str
    password: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Jane Doe",
                    "email": "jane@example.com",
                    "password": "s3cret-pass",
                }
            ]
        }
    }


class LogInRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    is_admin: bool
    created_at: str | None = None

    @classmethod
    def from_user(cls, user):
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            is_admin=user.is_admin,
            created_at=user.created_at.isoformat() if user.created_at else None,
        )


class AuthResponse(BaseModel):
    success: bool
    message: str
    token: str | None = None
    user: UserResponse | None = None
