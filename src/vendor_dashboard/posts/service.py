"""Post lifecycle: list, get, create, update, delete, repost.

Every query is scoped to the authenticated vendor. A post owned by someone
else is indistinguishable from a missing one (``PostNotFoundError``).
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional

from sqlalchemy import delete, inspect, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vendor_dashboard.categories.service import CategoryAccessFilter
from vendor_dashboard.common.config import VendorSettings
from vendor_dashboard.common.exceptions import (
    ImmutableFieldError,
    PostNotFoundError,
    UpstreamError,
)
from vendor_dashboard.common.models import generate_uuid, utcnow
from vendor_dashboard.media.edge_functions import EdgeFunctionClient
from vendor_dashboard.posts.models import POST_STATUS_VERIFIED, PostModel
from vendor_dashboard.posts.schemas import PostDraft
from vendor_dashboard.vendors.models import VendorModel

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "price", "photo_urls", "has_photo")
IMMUTABLE_FIELDS = ("category_id", "subcategory_id")

# Optional descriptive fields copied from a draft as-is.
_DRAFT_DETAIL_FIELDS = (
    "description", "subcategory_id", "is_featured", "has_photo",
    "condition", "brand", "dimensions", "location", "bedrooms",
    "bathrooms", "square_feet", "job_type", "compensation",
)


def _storage_error(message: str) -> UpstreamError:
    return UpstreamError(message, status_code=500, code="INTERNAL")


class PostService:
    """Owner-scoped post operations."""

    def __init__(
        self,
        settings: VendorSettings,
        categories: CategoryAccessFilter,
        functions: Optional[EdgeFunctionClient] = None,
    ):
        self.settings = settings
        self.categories = categories
        self.functions = functions

    def _expiry(self, now: datetime) -> datetime:
        return now + timedelta(days=self.settings.post_ttl_days)

    def _edit_token_expiry(self, now: datetime) -> datetime:
        return now + timedelta(days=self.settings.edit_token_ttl_days)

    # ── Reads ──

    async def list_posts(
        self, session: AsyncSession, vendor: VendorModel
    ) -> list[PostModel]:
        """Own posts in the vendor's config, newest first."""
        query = (
            select(PostModel)
            .where(
                PostModel.vendor_id == vendor.id,
                PostModel.config_id == vendor.config_id,
            )
            .order_by(PostModel.created_at.desc())
        )
        try:
            result = await session.execute(query)
        except SQLAlchemyError:
            logger.exception("Error fetching vendor posts", extra={"vendor_id": vendor.id})
            raise _storage_error("Failed to retrieve your posts.")
        return list(result.scalars().all())

    async def get_post(
        self, session: AsyncSession, vendor: VendorModel, post_id: str
    ) -> PostModel:
        query = select(PostModel).where(
            PostModel.id == post_id,
            PostModel.vendor_id == vendor.id,
        )
        try:
            result = await session.execute(query)
        except SQLAlchemyError:
            logger.exception("Error fetching post", extra={"post_id": post_id})
            raise _storage_error("Failed to retrieve post.")
        post = result.scalar_one_or_none()
        if post is None:
            raise PostNotFoundError()
        return post

    async def _get_owned(
        self, session: AsyncSession, vendor: VendorModel, post_id: str
    ) -> PostModel:
        """Like get_post, additionally scoped to the vendor's config."""
        post = await self.get_post(session, vendor, post_id)
        if post.config_id != vendor.config_id:
            raise PostNotFoundError()
        return post

    # ── Create ──

    async def create_post(
        self, session: AsyncSession, vendor: VendorModel, draft: PostDraft
    ) -> PostModel:
        """Insert a verified post owned by ``vendor``.

        Category permission is checked before anything touches storage.
        """
        self.categories.ensure_allowed(vendor, draft.category_id)
        if draft.subcategory_id:
            await self.categories.ensure_subcategory(
                session, draft.category_id, draft.subcategory_id
            )

        now = utcnow()
        details = {field: getattr(draft, field) for field in _DRAFT_DETAIL_FIELDS}
        post = PostModel(
            id=generate_uuid(),
            title=draft.title,
            price=draft.price,
            category_id=draft.category_id,
            email=draft.email or vendor.email,
            company_name=draft.company_name or vendor.company_name,
            status=POST_STATUS_VERIFIED,
            photo_urls=[],
            edit_token=generate_uuid(),
            edit_token_expires_at=self._edit_token_expiry(now),
            vendor_id=vendor.id,
            is_vendor_post=True,
            config_id=vendor.config_id,
            created_at=now,
            updated_at=now,
            published_at=now,
            expires_at=self._expiry(now),
            is_scraped=False,
            scraped_url=None,
            **details,
        )
        session.add(post)
        try:
            await session.flush()
        except SQLAlchemyError:
            logger.exception("Error inserting new post", extra={"vendor_id": vendor.id})
            raise _storage_error("Failed to create post.")
        logger.info("Post created", extra={"vendor_id": vendor.id, "post_id": post.id})
        return post

    # ── Update ──

    async def update_post(
        self,
        session: AsyncSession,
        vendor: VendorModel,
        post_id: str,
        updates: dict[str, Any],
    ) -> None:
        """Apply a partial update; the affected-row count decides success."""
        if any(updates.get(field) is not None for field in IMMUTABLE_FIELDS):
            raise ImmutableFieldError()

        values = {k: v for k, v in updates.items() if k in UPDATABLE_FIELDS}
        if "photo_urls" in values:
            values["photo_urls"] = list(values["photo_urls"] or [])
            if values.get("has_photo") is None:
                values["has_photo"] = bool(values["photo_urls"])
        for field in ("title", "has_photo"):
            if values.get(field) is None:
                values.pop(field, None)
        values["updated_at"] = utcnow()

        stmt = (
            update(PostModel)
            .where(
                PostModel.id == post_id,
                PostModel.vendor_id == vendor.id,
                PostModel.config_id == vendor.config_id,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await session.execute(stmt)
        except SQLAlchemyError:
            logger.exception("Error updating post", extra={"post_id": post_id})
            raise _storage_error("Failed to update post.")
        if result.rowcount == 0:
            raise PostNotFoundError("Post not found or unauthorized to update.")
        logger.info("Post updated", extra={"vendor_id": vendor.id, "post_id": post_id})

    # ── Delete ──

    async def delete_post(
        self, session: AsyncSession, vendor: VendorModel, post_id: str
    ) -> str:
        """Run the storage cleanup function, then remove the row.

        If cleanup fails the row is left in place and the failure propagates.
        """
        if self.functions is None:
            raise RuntimeError("PostService has no edge function client configured")
        post = await self._get_owned(session, vendor, post_id)

        data = await self.functions.delete_post(post.edit_token, post.id, post.config_id)

        try:
            await session.execute(
                delete(PostModel)
                .where(
                    PostModel.id == post.id,
                    PostModel.vendor_id == vendor.id,
                )
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError:
            logger.exception("Error deleting post row", extra={"post_id": post_id})
            raise _storage_error("Failed to delete post.")
        logger.info("Post deleted", extra={"vendor_id": vendor.id, "post_id": post_id})
        return data.get("message") or "Post deleted successfully!"

    # ── Repost ──

    async def repost(
        self, session: AsyncSession, vendor: VendorModel, post_id: str
    ) -> PostModel:
        """Clone an owned post as a new verified post; the original is untouched."""
        original = await self._get_owned(session, vendor, post_id)

        fields = {
            attr.key: getattr(original, attr.key)
            for attr in inspect(PostModel).column_attrs
        }
        now = utcnow()
        fields.update(
            id=generate_uuid(),
            edit_token=generate_uuid(),
            edit_token_expires_at=self._edit_token_expiry(now),
            created_at=now,
            updated_at=now,
            published_at=now,
            expires_at=self._expiry(now),
            status=POST_STATUS_VERIFIED,
            vendor_id=vendor.id,
            is_vendor_post=True,
            is_scraped=False,
            scraped_url=None,
            photo_urls=list(original.photo_urls or []),
        )
        clone = PostModel(**fields)
        session.add(clone)
        try:
            await session.flush()
        except SQLAlchemyError:
            logger.exception("Error inserting reposted post", extra={"post_id": post_id})
            raise _storage_error("Failed to repost item.")
        logger.info(
            "Post reposted as %s", clone.id,
            extra={"vendor_id": vendor.id, "post_id": post_id},
        )
        return clone
