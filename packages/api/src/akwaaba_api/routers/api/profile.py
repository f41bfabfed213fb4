"""Self-service profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from akwaaba_shared.config import settings

from akwaaba_api.dependencies import AuthUser, require_auth
from akwaaba_api.responses import wrap_response
from akwaaba_api.schemas.profile import ProfileUpdate
from akwaaba_api.services import profile_service, storage_service

router = APIRouter(prefix="/user/profile", tags=["profile"])


def _own_profile(user: AuthUser) -> dict:
    profile = profile_service.get_profile(user.user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.get("")
async def get_profile(user: AuthUser = Depends(require_auth())):
    profile = _own_profile(user)
    return wrap_response(profile_service.public_view(profile))


@router.put("")
async def update_profile(body: ProfileUpdate, user: AuthUser = Depends(require_auth())):
    changes = body.changes()
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")
    updated = profile_service.update_own_profile(user.user_id, user.email, changes)
    return wrap_response(
        profile_service.public_view(updated),
        message="Profile updated successfully",
    )


@router.get("/completion")
async def profile_completion(user: AuthUser = Depends(require_auth())):
    profile = profile_service.get_profile(user.user_id)
    return wrap_response(profile_service.compute_completion(profile).as_dict())


async def _upload(user: AuthUser, file: UploadFile, column: str) -> dict:
    _own_profile(user)
    try:
        payload, content_type = await storage_service.read_image(file)
    except storage_service.UploadRejected as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    result = profile_service.replace_image(
        user.user_id, column, payload, content_type, settings.avatars_bucket
    )
    if not result:
        raise HTTPException(status_code=404, detail="Profile not found")
    return result


@router.post("/avatar")
async def upload_avatar(
    file: UploadFile = File(...),
    user: AuthUser = Depends(require_auth()),
):
    result = await _upload(user, file, "profile_image")
    return wrap_response(result, message="Profile image updated successfully")


@router.post("/cover-image")
async def upload_cover_image(
    file: UploadFile = File(...),
    user: AuthUser = Depends(require_auth()),
):
    result = await _upload(user, file, "cover_image")
    return wrap_response(result, message="Cover image updated successfully")
