"""
SSO-related domain models.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Self


@dataclass(frozen=True, kw_only=True)
class SSOUser:
    """
    User returned by the SSO callback.

    The server's user record is not versioned, so only the common fields are
    lifted out; everything it sent stays available in ``attributes``.

    Attributes:
        id: User identifier, if present.
        name: Display name, if present.
        email: Email address, if present.
        attributes: Complete user record as returned.
    """

    id: str | None = None
    name: str | None = None
    email: str | None = None
    attributes: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Self:
        user_id = data.get("id")
        return cls(
            id=str(user_id) if user_id is not None else None,
            name=data.get("name"),
            email=data.get("email"),
            attributes=dict(data),
        )

    def __getitem__(self, key: str) -> Any:
        return self.attributes[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)
