"""BaseService — abstract foundation for all typectl services.

Every service receives a :class:`TypeStore` at construction time. The
store provides scopes (connection + transaction + cache) and the
repositories bound to them.  Services own their scope boundaries and
call ``scope.complete()`` only once the whole operation succeeded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typectl.infrastructure.store import TypeStore


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class MemberTypeService(BaseService):
            def create_type(self, alias: str, ...) -> ServiceResult:
                with self._store.scopes.create_scope() as scope:
                    repo = self._store.member_types(scope)
                    ...
                    scope.complete()
    """

    def __init__(self, store: TypeStore) -> None:
        self._store = store
