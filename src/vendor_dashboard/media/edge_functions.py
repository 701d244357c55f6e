"""HTTP client for the storage project's edge functions.

Every call carries the server-held privileged key; browser clients never
see it.
"""

import logging
from typing import Any

import httpx

from vendor_dashboard.common.exceptions import UpstreamError

logger = logging.getLogger(__name__)


def _error_message(resp: httpx.Response, default: str) -> str:
    try:
        body = resp.json()
    except ValueError:
        return default
    if isinstance(body, dict):
        return body.get("error") or body.get("detail") or body.get("message") or default
    return default


def _upstream_status(resp: httpx.Response) -> int:
    return resp.status_code if resp.status_code >= 400 else 502


def _json_object(resp: httpx.Response, function: str) -> dict[str, Any]:
    """Decode a success reply; anything but a JSON object is an upstream fault."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        logger.error(
            "Edge function %s answered %d with a non-object body", function, resp.status_code
        )
        raise UpstreamError(f"Edge function {function} returned an invalid response.")
    return body


class EdgeFunctionClient:
    """Calls ``{base_url}/{function}`` with the privileged bearer key."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        http: httpx.AsyncClient,
        upload_function: str = "upload-post-image",
        delete_function: str = "delete-post",
    ):
        self.base_url = base_url.rstrip("/")
        self.service_key = service_key
        self.upload_function = upload_function
        self.delete_function = delete_function
        self._http = http

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.service_key}"}

    async def _post(self, function: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_url}/{function}"
        try:
            return await self._http.post(url, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            logger.error("Edge function %s unreachable: %s", function, e)
            raise UpstreamError(f"Edge function {function} unavailable.")

    async def delete_post(self, token: str, post_id: str, config_id: str) -> dict[str, Any]:
        """Remove a post's stored images (and its row, on the function side).

        Raises UpstreamError on an error status, an unsuccessful body or a
        body that is not a JSON object. An empty 2xx reply counts as success.
        """
        resp = await self._post(
            self.delete_function,
            json={"token": token, "postId": post_id, "config_id": config_id},
        )
        if not resp.is_success:
            message = _error_message(resp, "Failed to delete post via Edge Function.")
            logger.error(
                "Edge function %s failed (%d): %s", self.delete_function, resp.status_code, message,
                extra={"post_id": post_id},
            )
            raise UpstreamError(message, status_code=_upstream_status(resp))

        if not resp.content:
            return {}
        data = _json_object(resp, self.delete_function)
        if not data.get("success"):
            message = data.get("error") or "Failed to delete post."
            logger.error("Edge function %s reported failure: %s", self.delete_function, message,
                         extra={"post_id": post_id})
            raise UpstreamError(message, status_code=500)
        return data

    async def upload_post_image(
        self,
        token: str,
        post_id: str,
        config_id: str,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> dict[str, Any]:
        """Forward one image as multipart; returns the function's JSON verbatim."""
        resp = await self._post(
            self.upload_function,
            data={"token": token, "postId": post_id, "config_id": config_id},
            files={"image": (filename, content, content_type)},
        )
        if not resp.is_success:
            message = _error_message(resp, "Failed to upload image via Edge Function.")
            logger.error(
                "Edge function %s failed (%d): %s", self.upload_function, resp.status_code, message,
                extra={"post_id": post_id},
            )
            raise UpstreamError(message, status_code=_upstream_status(resp))
        return _json_object(resp, self.upload_function)
