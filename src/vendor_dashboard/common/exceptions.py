"""Vendor-Dashboard exception hierarchy.

Every error kind maps to exactly one HTTP status through ``status_code``;
the application exception handler turns them into ``{"detail", "code"}``.
"""


class VendorDashboardError(Exception):
    """Base exception for all Vendor-Dashboard errors."""

    status_code: int = 500

    def __init__(self, message: str = "", code: str = "INTERNAL"):
        self.message = message
        self.code = code
        super().__init__(message)


# ── 401 ──

class UnauthenticatedError(VendorDashboardError):
    status_code = 401

    def __init__(self, message: str = "Authentication required.", code: str = "UNAUTHENTICATED"):
        super().__init__(message, code=code)


class MissingCredentialError(UnauthenticatedError):
    """Raised when a request carries no bearer token."""

    def __init__(self, message: str = "Authentication token missing."):
        super().__init__(message, code="MISSING_CREDENTIAL")


class InvalidCredentialError(UnauthenticatedError):
    """Raised when a bearer token is malformed, badly signed or expired."""

    def __init__(self, message: str = "Invalid or expired authentication token."):
        super().__init__(message, code="INVALID_CREDENTIAL")


class InvalidLoginError(UnauthenticatedError):
    """Raised when the identity provider rejects an email/password pair."""

    def __init__(self, message: str = "Invalid credentials or user not found."):
        super().__init__(message, code="INVALID_LOGIN")


# ── 403 ──

class ForbiddenError(VendorDashboardError):
    status_code = 403

    def __init__(self, message: str = "Forbidden.", code: str = "FORBIDDEN"):
        super().__init__(message, code=code)


class NotActiveVendorError(ForbiddenError):
    """Raised when no vendor is linked to the subject, or it is not active.

    Both cases share one message so callers cannot tell them apart.
    """

    def __init__(self, message: str = "User is not an active approved vendor."):
        super().__init__(message, code="NOT_ACTIVE_VENDOR")


class CategoryNotAllowedError(ForbiddenError):
    def __init__(self, message: str = "Vendor is not allowed to post in the selected main category."):
        super().__init__(message, code="CATEGORY_NOT_ALLOWED")


# ── 404 ──

class NotFoundError(VendorDashboardError):
    status_code = 404

    def __init__(self, message: str = "Not found.", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class PostNotFoundError(NotFoundError):
    """Raised for missing posts and for posts owned by another vendor."""

    def __init__(self, message: str = "Post not found or unauthorized to access."):
        super().__init__(message, code="POST_NOT_FOUND")


class ConfigNotFoundError(NotFoundError):
    def __init__(self, message: str = "Configuration not found."):
        super().__init__(message, code="CONFIG_NOT_FOUND")


# ── 400 ──

class InvalidRequestError(VendorDashboardError):
    status_code = 400

    def __init__(self, message: str = "Invalid request.", code: str = "INVALID"):
        super().__init__(message, code=code)


class ImmutableFieldError(InvalidRequestError):
    def __init__(self, message: str = "Category and subcategory cannot be changed after creation."):
        super().__init__(message, code="IMMUTABLE_FIELD")


class InvalidSubcategoryError(InvalidRequestError):
    def __init__(self, message: str = "Subcategory does not belong to the selected main category."):
        super().__init__(message, code="INVALID_SUBCATEGORY")


class MissingUploadFieldError(InvalidRequestError):
    def __init__(
        self,
        message: str = "Missing required fields for image upload: token, postId, config_id, image.",
    ):
        super().__init__(message, code="MISSING_UPLOAD_FIELD")


# ── 5xx / upstream ──

class UpstreamError(VendorDashboardError):
    """Raised when the database or an external function fails.

    ``status_code`` is the upstream's own status when it answered with one.
    """

    def __init__(self, message: str = "Upstream service failed.", status_code: int = 502, code: str = "UPSTREAM"):
        super().__init__(message, code=code)
        self.status_code = status_code
