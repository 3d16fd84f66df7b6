"""Repositories for type aggregates."""

from typectl.infrastructure.repositories.common import ContentTypeCommonRepository
from typectl.infrastructure.repositories.member_type import MemberTypeRepository

__all__ = ["ContentTypeCommonRepository", "MemberTypeRepository"]
