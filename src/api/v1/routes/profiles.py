"""Profile API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_auth_service, get_profile_service
from api.v1.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    GitHubRepoListResponse,
    GitHubRepoResponse,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileResponse,
    ProfileUpsert,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.auth_service import AuthService
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profiles"])


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get my profile",
    responses={404: {"description": "No profile for this user"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the caller's profile with their name and avatar."""
    item = await service.get_my_profile(user.user_id)
    return ProfileDetailResponse(data=ProfileResponse.from_entity(item.profile, item.user))


@router.post(
    "",
    response_model=ProfileDetailResponse,
    summary="Create or update my profile",
    responses={
        200: {"description": "Profile created or updated"},
        409: {"description": "Profile was modified concurrently"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Create the profile on first call, then merge submitted fields into it."""
    profile = await service.upsert_profile(user.user_id, body.to_fields())
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Get every profile with its owner's name and avatar."""
    items = await service.list_profiles()
    return ProfileListResponse(
        data=[ProfileResponse.from_entity(item.profile, item.user) for item in items]
    )


@router.get(
    "/user/{user_id}",
    response_model=ProfileDetailResponse,
    summary="Get a user's profile",
    responses={404: {"description": "Profile not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: UUID,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the profile owned by ``user_id``."""
    item = await service.get_profile_by_user(user_id)
    return ProfileDetailResponse(data=ProfileResponse.from_entity(item.profile, item.user))


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete my account",
    responses={204: {"description": "Account, profile and posts deleted"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: AuthService = Depends(get_auth_service),
) -> None:
    """Delete the caller's account together with their profile and posts."""
    await service.delete_account(user.user_id)
    return None


@router.put(
    "/experience",
    response_model=ProfileDetailResponse,
    summary="Add an experience entry",
    responses={
        400: {"description": "Required fields missing"},
        500: {"description": "No profile exists for this user"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Add an experience entry at the top of the caller's profile."""
    profile = await service.add_experience(user.user_id, body.model_dump())
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.delete(
    "/experience/{experience_id}",
    response_model=ProfileDetailResponse,
    summary="Remove an experience entry",
    responses={404: {"description": "Profile or experience not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    experience_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Remove an experience entry from the caller's profile."""
    profile = await service.remove_experience(user.user_id, experience_id)
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.put(
    "/education",
    response_model=ProfileDetailResponse,
    summary="Add an education entry",
    responses={
        400: {"description": "Required fields missing"},
        500: {"description": "No profile exists for this user"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Add an education entry at the top of the caller's profile."""
    profile = await service.add_education(user.user_id, body.model_dump())
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.delete(
    "/education/{education_id}",
    response_model=ProfileDetailResponse,
    summary="Remove an education entry",
    responses={404: {"description": "Profile or education not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_education(
    request: Request,
    education_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Remove an education entry from the caller's profile."""
    profile = await service.remove_education(user.user_id, education_id)
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.get(
    "/github/{username}",
    response_model=GitHubRepoListResponse,
    summary="List a GitHub user's repositories",
    responses={
        404: {"description": "No GitHub profile found"},
        502: {"description": "GitHub unavailable"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_github_repos(
    request: Request,
    username: str,
    service: ProfileService = Depends(get_profile_service),
) -> GitHubRepoListResponse:
    """Latest public repositories for a GitHub username."""
    repos = await service.get_github_repos(username)
    return GitHubRepoListResponse(
        data=[GitHubRepoResponse.model_validate(repo) for repo in repos]
    )
