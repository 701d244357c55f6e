"""Image upload proxy router."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from vendor_dashboard.common.security import require_vendor
from vendor_dashboard.deps import get_image_proxy
from vendor_dashboard.media.service import ImageAttachmentProxy, ImageFile

router = APIRouter()


@router.post("/upload-image")
async def upload_image(
    token: Optional[str] = Form(None),
    postId: Optional[str] = Form(None),
    config_id: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    _=Depends(require_vendor),
    proxy: ImageAttachmentProxy = Depends(get_image_proxy),
) -> Any:
    """Forward a multipart image upload; the edge function's JSON is returned as-is."""
    image_file = None
    if image is not None:
        image_file = ImageFile(
            filename=image.filename or "image",
            content=await image.read(),
            content_type=image.content_type or "application/octet-stream",
        )
    return await proxy.upload(token, postId, config_id, image_file)
