"""Standard property reconciliation.

The reconciler detects which stub aliases are missing from an aggregate
and injects fresh property types for them into the standard group,
creating that group when absent.  It never touches storage; callers
decide whether the mutated aggregate gets written back.

When the reconciler runs is decided by :class:`ReconcilePolicy`, not by
the repository's storage code:

- create: always ensure the stubs before the first write
- update: write the aggregate exactly as given
- fetch: ensure the stubs and persist whatever had to be added
"""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel

from typectl.domain.models import ContentTypeBase, PropertyGroup, normalize_alias
from typectl.domain.stubs import MemberStubProvider, PropertyTemplate


class StubProvider(Protocol):
    """Catalog contract consumed by the reconciler."""

    group_alias: str
    group_name: str

    def stubs(self) -> dict[str, PropertyTemplate]: ...


class ReconcilePolicy(BaseModel):
    """Which repository operations run the reconciler.

    Also the ``[reconcile]`` section of ``typectl.toml``.
    """

    model_config = {"frozen": True}

    on_create: bool = True
    on_update: bool = False
    on_fetch: bool = True


class StandardPropertyReconciler:
    """Ensures an aggregate contains every standard property alias."""

    def __init__(self, provider: StubProvider | None = None) -> None:
        self._provider: StubProvider = provider or MemberStubProvider()

    def missing_aliases(self, content_type: ContentTypeBase) -> list[str]:
        """Stub aliases absent from *content_type*, in catalog order."""
        present = content_type.property_aliases()
        return [
            alias for alias in self._provider.stubs() if normalize_alias(alias) not in present
        ]

    def reconcile(self, content_type: ContentTypeBase) -> bool:
        """Add every missing stub to the standard group. Returns True if anything changed.

        Pre-existing properties of the standard group keep their
        positions; new ones are appended after them in catalog order.
        """
        missing = self.missing_aliases(content_type)
        if not missing:
            return False

        group = self._standard_group(content_type)
        stubs = self._provider.stubs()
        for alias in missing:
            property_type = stubs[alias].to_property_type(sort_order=group.next_sort_order())
            group.add_property_type(property_type)
        return True

    def _standard_group(self, content_type: ContentTypeBase) -> PropertyGroup:
        group = content_type.property_group(self._provider.group_alias)
        if group is None:
            group = PropertyGroup(
                alias=self._provider.group_alias,
                name=self._provider.group_name,
                sort_order=content_type.next_group_sort_order(),
            )
            content_type.property_groups.append(group)
        return group
