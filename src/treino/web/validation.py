"""
Explicit input validation, one function per input shape.

Each function returns Valid(value) or Invalid(errors); the routers decide
what to do with a failure. Nothing here touches storage.
"""

import json
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import ValidationError

from ..models.workout import PostDraft, TemplateDraft
from .schemas import CreatePostRequest, CreateTemplateRequest, PageQuery

T = TypeVar("T")


@dataclass(frozen=True)
class Valid(Generic[T]):
    value: T


@dataclass(frozen=True)
class Invalid:
    errors: list[dict]


ValidationResult = Union[Valid[T], Invalid]


def _errors(exc: ValidationError) -> list[dict]:
    return [
        {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
        for err in exc.errors()
    ]


def decode_json(raw: bytes) -> ValidationResult[Any]:
    """Decode a JSON request body."""
    try:
        return Valid(json.loads(raw) if raw else None)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        return Invalid([{"loc": ["body"], "msg": f"Invalid JSON: {e}", "type": "json_invalid"}])


def validate_template_body(body: Any) -> ValidationResult[TemplateDraft]:
    """Validate a create-template body."""
    try:
        request = CreateTemplateRequest.model_validate(body)
    except ValidationError as e:
        return Invalid(_errors(e))
    return Valid(request.to_draft())


def validate_post_body(body: Any) -> ValidationResult[PostDraft]:
    """Validate a create-post body."""
    try:
        request = CreatePostRequest.model_validate(body)
    except ValidationError as e:
        return Invalid(_errors(e))
    return Valid(request.to_draft())


def validate_page_query(
    page: Optional[str] = None, page_size: Optional[str] = None
) -> ValidationResult[PageQuery]:
    """Validate the page/pageSize query parameters (defaults 1 and 10)."""
    params = {}
    if page is not None:
        params["page"] = page
    if page_size is not None:
        params["pageSize"] = page_size
    try:
        return Valid(PageQuery.model_validate(params))
    except ValidationError as e:
        return Invalid(_errors(e))
