"""
Module: freelance_kernel.selectors.profile_selector
Responsibility: Profile lookups, including resolving the authenticated
    caller for the access layer.
"""

from sqlalchemy import select

from freelance_kernel.domain.dtos import ProfileInfo
from freelance_kernel.exceptions import UnauthorizedError
from freelance_kernel.logging_config import get_logger
from freelance_kernel.models.profile import Profile
from freelance_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.profile")


class ProfileSelector(BaseSelector[Profile]):
    """Read-only profile queries."""

    def find(self, profile_id: int) -> ProfileInfo | None:
        profile = self.session.scalars(
            select(Profile).where(Profile.id == profile_id)
        ).one_or_none()
        if profile is None:
            return None
        return ProfileInfo.from_model(profile)

    def resolve_caller(self, profile_id: int | None) -> ProfileInfo:
        """
        Resolve the requester's profile.

        An unknown or missing id is an authentication failure, not a
        lookup miss.

        Raises:
            UnauthorizedError: id missing or unknown.
        """
        info = self.find(profile_id) if profile_id is not None else None
        if info is None:
            logger.warning("caller_unresolved", extra={"profile_id": profile_id})
            raise UnauthorizedError(profile_id, "access the marketplace")
        return info
