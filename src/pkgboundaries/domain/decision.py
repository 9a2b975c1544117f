"""Decision — the Allow/Deny verdict for one dependency edge."""

from __future__ import annotations

from enum import StrEnum


class Decision(StrEnum):
    """Two-valued lattice combined with AND: Deny absorbs, Allow is neutral.

    Examples:
        >>> Decision.ALLOW & Decision.DENY
        <Decision.DENY: 'deny'>
    """

    ALLOW = "allow"
    DENY = "deny"

    def __and__(self, other: Decision) -> Decision:
        if self is Decision.ALLOW and other is Decision.ALLOW:
            return Decision.ALLOW
        return Decision.DENY

    @property
    def allowed(self) -> bool:
        return self is Decision.ALLOW
