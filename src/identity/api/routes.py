"""FastAPI endpoints for the Identity domain: signup, login, logout."""

from fastapi import APIRouter, Header
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from identity.api.dependencies import bearer_token
from identity.api.schemas import AuthResponse, LogInRequest, SignUpRequest, UserResponse
from identity.session.authentication import LogIn, LogOut, user_for_token
from identity.user.registration import SignUp
from shared.errors import Unauthenticated

router = APIRouter(prefix="/auth", tags=["auth"])


def _first_message(exc: ValidationError) -> str:
    for messages in exc.messages.values():
        if isinstance(messages, list) and messages:
            return str(messages[0])
        if messages:
            return str(messages)
    return str(exc)


def _failure(status_code: int, exc: ValidationError) -> JSONResponse:
    body = AuthResponse(success=False, message=_first_message(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.post("/signup", status_code=201, response_model=AuthResponse)
async def sign_up(body: SignUpRequest):
    try:
        command = SignUp(name=body.name, email=body.email, password=body.password)
        token = current_domain.process(command, asynchronous=False)
    except ValidationError as exc:
        return _failure(400, exc)

    return AuthResponse(
        success=True,
        message="Account created successfully!",
        token=token,
        user=UserResponse.from_user(user_for_token(token)),
    )


@router.post("/login", response_model=AuthResponse)
async def log_in(body: LogInRequest):
    try:
        command = LogIn(email=body.email, password=body.password)
        token = current_domain.process(command, asynchronous=False)
    except ValidationError as exc:
        return _failure(401, exc)

    return AuthResponse(
        success=True,
        message="Login successful!",
        token=token,
        user=UserResponse.from_user(user_for_token(token)),
    )


@router.post("/logout", response_model=AuthResponse)
async def log_out(authorization: str | None = Header(default=None)) -> AuthResponse:
    token = bearer_token(authorization)
    if token:
        current_domain.process(LogOut(token=token), asynchronous=False)
    return AuthResponse(success=True, message="Logged out")


@router.get("/me", response_model=UserResponse)
async def me(authorization: str | None = Header(default=None)) -> UserResponse:
    token = bearer_token(authorization)
    if token is None:
        raise Unauthenticated("Authentication required")
    return UserResponse.from_user(user_for_token(token))
