"""Workout template and workout post routes."""

from typing import List

from fastapi import APIRouter, Depends, Request

from ...auth import Identity
from ...errors import InputValidationError
from ...services import WorkoutService
from ..deps import current_identity, get_workout_service
from ..schemas import PostOut, PostPageOut, TemplateOut
from ..validation import (
    Invalid,
    ValidationResult,
    decode_json,
    validate_page_query,
    validate_post_body,
    validate_template_body,
)

router = APIRouter(prefix="/workouts", tags=["workouts"])


def _unwrap(result: ValidationResult):
    if isinstance(result, Invalid):
        raise InputValidationError(result.errors)
    return result.value


async def _read_body(request: Request):
    return _unwrap(decode_json(await request.body()))


@router.post("/templates", status_code=201, response_model=TemplateOut)
async def create_template(
    request: Request,
    identity: Identity = Depends(current_identity),
    service: WorkoutService = Depends(get_workout_service),
):
    """Create a workout template for the caller."""
    draft = _unwrap(validate_template_body(await _read_body(request)))
    template = await service.create_template(identity.user_id, draft)
    return TemplateOut.model_validate(template)


@router.get("/templates", response_model=List[TemplateOut])
async def list_templates(
    identity: Identity = Depends(current_identity),
    service: WorkoutService = Depends(get_workout_service),
):
    """List the caller's templates, most recently updated first."""
    templates = await service.list_templates(identity.user_id)
    return [TemplateOut.model_validate(t) for t in templates]


@router.post("/posts", status_code=201, response_model=PostOut)
async def create_post(
    request: Request,
    identity: Identity = Depends(current_identity),
    service: WorkoutService = Depends(get_workout_service),
):
    """Log a workout, optionally derived from a template."""
    draft = _unwrap(validate_post_body(await _read_body(request)))
    post = await service.create_post(identity.user_id, draft)
    return PostOut.model_validate(post)


@router.get("/posts", response_model=PostPageOut)
async def list_posts(
    request: Request,
    identity: Identity = Depends(current_identity),
    service: WorkoutService = Depends(get_workout_service),
):
    """Get one page of the caller's posts, newest first."""
    query = _unwrap(
        validate_page_query(
            request.query_params.get("page"),
            request.query_params.get("pageSize"),
        )
    )
    page = await service.list_posts(identity.user_id, query.page, query.page_size)
    return PostPageOut.model_validate(page)
