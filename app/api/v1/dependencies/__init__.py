"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, caller identity, and
application use cases. Routes depend only on these dependencies, not on
infrastructure directly.
"""

from app.api.v1.dependencies.auth import (
    extract_token,
    get_authorization_service,
    get_current_principal_optional,
    get_token_verifier,
    require_operation,
)
from app.api.v1.dependencies.db import get_exam_repo, get_exam_repo_for_write
from app.api.v1.dependencies.exam import (
    get_exam_query_service,
    get_exam_service,
    get_exam_service_for_write,
    get_query_cache,
    get_query_spec,
    get_search_executor,
)

__all__ = [
    "extract_token",
    "get_authorization_service",
    "get_current_principal_optional",
    "get_exam_query_service",
    "get_exam_repo",
    "get_exam_repo_for_write",
    "get_exam_service",
    "get_exam_service_for_write",
    "get_query_cache",
    "get_query_spec",
    "get_search_executor",
    "get_token_verifier",
    "require_operation",
]
