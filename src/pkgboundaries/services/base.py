"""BaseService — shared foundation for pkgboundaries services.

Every service receives a loaded :class:`Policy` at construction time and,
optionally, a :class:`PluginManager` whose hooks it may call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pkgboundaries.domain.policy import Policy
    from pkgboundaries.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CheckService(BaseService):
            def check(self, paths: list[Path]) -> ServiceResult:
                layer = self._policy.find_layer_containing(...)
                ...
    """

    def __init__(self, policy: Policy, *, plugins: PluginManager | None = None) -> None:
        self._policy = policy
        self._plugins = plugins

    @property
    def policy(self) -> Policy:
        return self._policy

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Call a notification hook on all plugins. No-op without plugins.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        if self._plugins is None:
            return
        hook = getattr(self._plugins.hook, hook_name, None)
        if hook is None:
            return
        try:
            hook(**payload)
        except Exception:
            logger.debug("Plugin hook %s failed", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed")

    def _pattern_warnings(self) -> list[str]:
        """Human-readable warnings for every layer whose patterns failed to compile."""
        return [
            f"Layer {name!r} matches nothing: {err}" for name, err in self._policy.validate()
        ]
