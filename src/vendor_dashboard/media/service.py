"""Image attachment proxy: forwards vendor uploads to the upload edge function."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from vendor_dashboard.common.exceptions import MissingUploadFieldError, UpstreamError
from vendor_dashboard.media.edge_functions import EdgeFunctionClient

logger = logging.getLogger(__name__)


@dataclass
class ImageFile:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass
class PhotoResult:
    """Outcome of one file in a batch upload."""
    filename: str
    ok: bool
    status_code: int
    url: Optional[str] = None
    error: Optional[str] = None
    response: Optional[dict[str, Any]] = None


def _stored_url(data: dict[str, Any]) -> Optional[str]:
    for key in ("url", "publicUrl", "photo_url", "imageUrl"):
        if data.get(key):
            return data[key]
    return None


class ImageAttachmentProxy:
    """Validates upload fields and forwards them with the privileged key."""

    def __init__(self, functions: EdgeFunctionClient):
        self.functions = functions

    async def upload(
        self,
        token: Optional[str],
        post_id: Optional[str],
        config_id: Optional[str],
        image: Optional[ImageFile],
    ) -> dict[str, Any]:
        if not token or not post_id or not config_id or image is None or not image.content:
            raise MissingUploadFieldError()
        return await self.functions.upload_post_image(
            token, post_id, config_id,
            filename=image.filename,
            content=image.content,
            content_type=image.content_type,
        )

    async def upload_many(
        self,
        token: str,
        post_id: str,
        config_id: str,
        images: list[ImageFile],
    ) -> list[PhotoResult]:
        """Upload files one at a time.

        There is no rollback: files uploaded before a failure stay attached,
        and each failure is reported on its own result.
        """
        results: list[PhotoResult] = []
        for image in images:
            try:
                data = await self.upload(token, post_id, config_id, image)
            except (UpstreamError, MissingUploadFieldError) as e:
                logger.warning(
                    "Photo %s failed: %s", image.filename, e.message,
                    extra={"post_id": post_id},
                )
                results.append(PhotoResult(
                    filename=image.filename, ok=False,
                    status_code=e.status_code, error=e.message,
                ))
                continue
            results.append(PhotoResult(
                filename=image.filename, ok=True, status_code=200,
                url=_stored_url(data), response=data,
            ))
        return results
