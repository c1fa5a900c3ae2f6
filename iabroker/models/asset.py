"""Data model for Planet assets."""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Asset:
    """Download state of a Planet item asset."""

    asset_type: Optional[str] = None
    status: Optional[str] = None
    location: Optional[str] = None
    expires_at: Optional[str] = None
    permissions: List[str] = field(default_factory=list)
    activate_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        """Create an Asset from an entry of Planet's /assets response."""
        links = data.get("_links") or {}
        return cls(
            asset_type=data.get("type"),
            status=data.get("status"),
            location=data.get("location"),
            expires_at=data.get("expires_at"),
            permissions=list(data.get("_permissions") or []),
            activate_url=links.get("activate"),
        )

    def to_properties(self):
        """Feature properties describing the asset; empty fields are left out."""
        props = {
            "expires_at": self.expires_at,
            "location": self.location,
            "permissions": self.permissions,
            "status": self.status,
            "type": self.asset_type,
        }
        return {key: value for key, value in props.items() if value}
