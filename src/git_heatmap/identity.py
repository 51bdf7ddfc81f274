from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class IdentityMatcher:
    """Exact, case-sensitive match on the author email. No alias resolution."""

    email: str

    def matches(self, author_email: str) -> bool:
        return bool(self.email) and author_email == self.email
