"""FastAPI dependencies for identity and service access."""

from typing import Optional

from fastapi import Header, Request
from starlette.concurrency import run_in_threadpool

from ..auth import Identity, TokenVerifier, parse_bearer
from ..services import WorkoutService


async def current_identity(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> Identity:
    """
    Verify the bearer token and return the caller.

    Raises AuthError (401) before any body parsing or storage work.

    Usage:
        @router.get("/protected")
        async def protected(identity: Identity = Depends(current_identity)):
            return {"user_id": identity.user_id}
    """
    token = parse_bearer(authorization)
    verifier: TokenVerifier = request.app.state.verifier
    # JWKS lookups may hit the network
    return await run_in_threadpool(verifier.verify, token)


def get_workout_service(request: Request) -> WorkoutService:
    return request.app.state.workout_service
