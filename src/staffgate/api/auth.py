"""Auth API — credentials sign-in, session read, sign-out.

Learn: Routes mirror a credentials-provider auth flow:
- GET  /auth/providers            → the configured sign-in provider
- POST /auth/callback/credentials → email/password → session cookie
- GET  /auth/session              → current session, or {} if signed out
- POST /auth/signout              → clear the session cookie
- GET  /auth/me                   → signed-in user (401 otherwise)

Every authorization failure gets the same 401 body. The precise cause
(invalid input / unknown user / wrong password) is only logged, so the
response never reveals which emails exist.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from staffgate.auth.config import AuthConfig
from staffgate.auth.dependencies import (
    decode_first_valid,
    extract_tokens,
    get_auth_service,
    get_current_session,
)
from staffgate.auth.errors import AuthorizationError
from staffgate.auth.service import AuthService
from staffgate.schemas.auth import Credentials, Session, SignInError, SignOutResponse

router = APIRouter(prefix="/auth")

CREDENTIALS_SIGNIN = "CredentialsSignin"
FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


# ─── Cookies ─────────────────────────────────────────────


def _set_session_cookie(response: Response, token: str, config: AuthConfig) -> None:
    max_age = int(config.session_max_age.total_seconds())
    response.set_cookie(
        config.cookie_name,
        token,
        max_age=max_age,
        expires=max_age,
        path="/",
        httponly=True,
        secure=config.cookie_secure,
        samesite="lax",
    )


def _clear_session_cookie(response: Response, config: AuthConfig) -> None:
    response.delete_cookie(
        config.cookie_name,
        path="/",
        httponly=True,
        secure=config.cookie_secure,
        samesite="lax",
    )


def _session_body(session: Session) -> dict:
    return session.model_dump(mode="json", exclude_none=True)


async def _read_credentials(request: Request) -> Optional[Credentials]:
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            return Credentials.model_validate(dict(form))
        body = await request.body()
        if not body:
            return None
        return Credentials.model_validate_json(body)
    except ValidationError:
        return None


# ─── Providers ───────────────────────────────────────────


@router.get("/providers")
async def list_providers(auth: AuthService = Depends(get_auth_service)):
    """Describe the credentials provider for a login page to render."""
    return {
        "credentials": {
            "id": "credentials",
            "name": "Credentials",
            "type": "credentials",
            "signinUrl": auth.config.sign_in_page,
            "callbackUrl": "/api/v1/auth/callback/credentials",
            "credentials": {
                "email": {
                    "label": "Email",
                    "type": "text",
                    "placeholder": "user@example.com",
                },
                "password": {"label": "Password", "type": "password"},
            },
        }
    }


# ─── Sign in ─────────────────────────────────────────────


@router.post(
    "/callback/credentials",
    responses={401: {"model": SignInError}},
)
async def sign_in(
    request: Request,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
):
    """Email/password → signed session token in a cookie.

    Learn: Accepts a JSON body or a form post from the login page. An
    empty or unreadable body becomes "no credentials", which fails as
    InvalidInput with the usual 401 instead of a 422.
    """
    credentials = await _read_credentials(request)
    try:
        token, session = await auth.sign_in(credentials)
    except AuthorizationError:
        error = SignInError(
            error=CREDENTIALS_SIGNIN,
            url=f"{auth.config.error_page}?error={CREDENTIALS_SIGNIN}",
        )
        return JSONResponse(status_code=401, content=error.model_dump())

    _set_session_cookie(response, token, auth.config)
    return _session_body(session)


# ─── Session ─────────────────────────────────────────────


@router.get("/session")
async def read_session(
    request: Request,
    response: Response,
    authorization: Optional[str] = Header(None),
    auth: AuthService = Depends(get_auth_service),
):
    """Current session.

    Learn: Tokens older than session_update_age are re-issued here
    (sliding expiry). The claims are carried over as-is; the user
    store is not queried again.
    """
    tokens = extract_tokens(request, authorization, auth.config)
    if not tokens:
        return {}

    claims = decode_first_valid(auth, tokens)
    if claims is None:
        _clear_session_cookie(response, auth.config)
        return {}

    if auth.tokens.needs_update(claims):
        token = await auth.refresh_token(claims)
        claims = auth.tokens.decode(token)
        _set_session_cookie(response, token, auth.config)

    session = await auth.build_session(claims)
    return _session_body(session)


# ─── Sign out ────────────────────────────────────────────


@router.post("/signout", response_model=SignOutResponse)
async def sign_out(
    response: Response,
    auth: AuthService = Depends(get_auth_service),
):
    _clear_session_cookie(response, auth.config)
    await auth.on_sign_out()
    return SignOutResponse(url=auth.config.sign_in_page)


# ─── Current user ───────────────────────────────────────


@router.get("/me")
async def get_me(session: Session = Depends(get_current_session)):
    """The signed-in user (401 without a valid session)."""
    return _session_body(session)["user"]
