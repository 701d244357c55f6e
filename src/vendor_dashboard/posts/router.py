"""Post API router."""

from fastapi import APIRouter, Depends, File, UploadFile

from vendor_dashboard.auth.service import AuthenticatedVendor
from vendor_dashboard.common.database import DatabaseManager
from vendor_dashboard.common.exceptions import MissingUploadFieldError
from vendor_dashboard.common.schemas import MessageResponse
from vendor_dashboard.common.security import require_vendor
from vendor_dashboard.deps import get_db, get_image_proxy, get_post_service
from vendor_dashboard.media.service import ImageAttachmentProxy, ImageFile
from vendor_dashboard.posts.schemas import (
    PhotoBatchResponse,
    PhotoResultResponse,
    PostCreateRequest,
    PostCreatedResponse,
    PostResponse,
    PostUpdate,
)
from vendor_dashboard.posts.service import PostService

router = APIRouter(prefix="/posts")


@router.get("", response_model=list[PostResponse])
async def list_posts(
    ctx: AuthenticatedVendor = Depends(require_vendor),
    svc: PostService = Depends(get_post_service),
    db: DatabaseManager = Depends(get_db),
):
    async with db.get_session() as session:
        posts = await svc.list_posts(session, ctx.vendor)
        return [PostResponse.model_validate(p) for p in posts]


@router.post("", response_model=PostCreatedResponse)
async def create_post(
    body: PostCreateRequest,
    ctx: AuthenticatedVendor = Depends(require_vendor),
    svc: PostService = Depends(get_post_service),
    db: DatabaseManager = Depends(get_db),
):
    async with db.get_session() as session:
        post = await svc.create_post(session, ctx.vendor, body.post_data)
        return PostCreatedResponse(
            message="Post created successfully!",
            post_id=post.id,
            edit_token=post.edit_token,
        )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    ctx: AuthenticatedVendor = Depends(require_vendor),
    svc: PostService = Depends(get_post_service),
    db: DatabaseManager = Depends(get_db),
):
    async with db.get_session() as session:
        post = await svc.get_post(session, ctx.vendor, post_id)
        return PostResponse.model_validate(post)


@router.patch("/{post_id}", response_model=MessageResponse)
async def update_post(
    post_id: str,
    body: PostUpdate,
    ctx: AuthenticatedVendor = Depends(require_vendor),
    svc: PostService = Depends(get_post_service),
    db: DatabaseManager = Depends(get_db),
):
    async with db.get_session() as session:
        await svc.update_post(
            session, ctx.vendor, post_id, body.model_dump(exclude_unset=True)
        )
    return MessageResponse(message="Post updated successfully!")


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    ctx: AuthenticatedVendor = Depends(require_vendor),
    svc: PostService = Depends(get_post_service),
    db: DatabaseManager = Depends(get_db),
):
    async with db.get_session() as session:
        message = await svc.delete_post(session, ctx.vendor, post_id)
    return MessageResponse(message=message)


@router.post("/{post_id}/repost", response_model=PostCreatedResponse)
async def repost(
    post_id: str,
    ctx: AuthenticatedVendor = Depends(require_vendor),
    svc: PostService = Depends(get_post_service),
    db: DatabaseManager = Depends(get_db),
):
    async with db.get_session() as session:
        clone = await svc.repost(session, ctx.vendor, post_id)
        return PostCreatedResponse(
            message="Post reposted successfully!",
            post_id=clone.id,
            edit_token=clone.edit_token,
        )


@router.post("/{post_id}/photos", response_model=PhotoBatchResponse)
async def attach_photos(
    post_id: str,
    images: list[UploadFile] = File(default=[]),
    ctx: AuthenticatedVendor = Depends(require_vendor),
    svc: PostService = Depends(get_post_service),
    proxy: ImageAttachmentProxy = Depends(get_image_proxy),
    db: DatabaseManager = Depends(get_db),
):
    """Upload several photos to an owned post, one file at a time."""
    async with db.get_session() as session:
        post = await svc.get_post(session, ctx.vendor, post_id)
    if not images:
        raise MissingUploadFieldError("At least one image is required.")

    files = [
        ImageFile(
            filename=upload.filename or "image",
            content=await upload.read(),
            content_type=upload.content_type or "application/octet-stream",
        )
        for upload in images
    ]
    results = await proxy.upload_many(post.edit_token, post.id, post.config_id, files)
    uploaded = sum(1 for r in results if r.ok)
    return PhotoBatchResponse(
        post_id=post.id,
        uploaded=uploaded,
        failed=len(results) - uploaded,
        results=[PhotoResultResponse.model_validate(r) for r in results],
    )
