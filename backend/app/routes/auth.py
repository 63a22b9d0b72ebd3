"""Authentication routes.

Accounts live in Supabase Auth. Sign-up also creates the marketplace
profile with the chosen role, which is fixed from then on.
"""

from fastapi import APIRouter, HTTPException, Request, Response, status
from supabase import AuthError

from ..auth import CurrentUser
from ..database import AuthClient, Database, MarketplaceDep
from ..logging_config import get_logger, log_auth_event
from ..models import SessionResponse, SignInRequest, SignUpRequest
from ..rate_limit import limiter

logger = get_logger("gigboard.api.auth")
router = APIRouter(prefix="/auth", tags=["auth"])


def _session_response(user_id: str, session) -> SessionResponse:
    if session is None:
        return SessionResponse(user_id=user_id)
    return SessionResponse(
        user_id=user_id,
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
    )


@router.post("/signup", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")
async def signup(
    request: Request,
    body: SignUpRequest,
    auth_client: AuthClient,
    market: MarketplaceDep,
):
    """
    Create an account and its profile.

    ``access_token`` is empty when the project requires email confirmation
    before the first sign-in.
    """
    logger.info(f"POST /auth/signup | role={body.role}")
    try:
        result = auth_client.auth.sign_up(
            {
                "email": body.email,
                "password": body.password,
                "options": {"data": {"full_name": body.full_name, "role": body.role}},
            }
        )
    except AuthError as e:
        log_auth_event("signup", None, success=False, reason=e.message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    if not result.user:
        log_auth_event("signup", None, success=False, reason="no user returned")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Auth provider did not return a user",
        )

    market.profiles.create_profile(
        user_id=result.user.id,
        email=body.email,
        full_name=body.full_name,
        role=body.role,
    )
    log_auth_event("signup", result.user.id, success=True)
    return _session_response(result.user.id, result.session)


@router.post("/signin", response_model=SessionResponse)
@limiter.limit("10/minute")
async def signin(request: Request, body: SignInRequest, auth_client: AuthClient):
    """Exchange email and password for an access token."""
    logger.info("POST /auth/signin")
    try:
        result = auth_client.auth.sign_in_with_password(
            {"email": body.email, "password": body.password}
        )
    except AuthError as e:
        log_auth_event("signin", None, success=False, reason=e.message)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    log_auth_event("signin", result.user.id, success=True)
    return _session_response(result.user.id, result.session)


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit("20/minute")
async def signout(request: Request, auth: CurrentUser, db: Database):
    """Revoke the caller's session."""
    logger.info(f"POST /auth/signout | user={auth.user_id}")
    try:
        db.auth.admin.sign_out(auth.token)
    except AuthError as e:
        log_auth_event("signout", auth.user_id, success=False, reason=e.message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    log_auth_event("signout", auth.user_id, success=True)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
