"""Caller checks for callable operations."""

from storekeeper.exceptions import StoreError


def is_authenticated(user) -> bool:
    return bool(user is not None and getattr(user, 'is_authenticated', False))


def is_admin(user) -> bool:
    """Staff and superusers hold the admin role."""
    return is_authenticated(user) and bool(user.is_staff or user.is_superuser)


def require_authenticated(user) -> None:
    if not is_authenticated(user):
        raise StoreError('UNAUTHENTICATED', 'User must be authenticated')


def require_admin(user) -> None:
    require_authenticated(user)
    if not is_admin(user):
        raise StoreError('PERMISSION_DENIED', 'Admin access required')
