"""IAM presentation layer - aggregate-based organization.

Each aggregate package (auth, groups, teams) contains its own routes and
models. Auth is enforced per-endpoint since signup, login and password
reset are public.
"""

from __future__ import annotations

from fastapi import APIRouter

from iam.presentation.auth.routes import router as auth_router
from iam.presentation.groups.routes import router as groups_router
from iam.presentation.teams.routes import router as teams_router

router = APIRouter()

router.include_router(auth_router)
router.include_router(groups_router)
router.include_router(teams_router)

__all__ = ["router"]
