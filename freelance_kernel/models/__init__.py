"""SQLAlchemy ORM models for the freelance kernel."""

from freelance_kernel.models.contract import Contract
from freelance_kernel.models.job import Job
from freelance_kernel.models.profile import Profile

__all__ = ["Contract", "Job", "Profile"]
