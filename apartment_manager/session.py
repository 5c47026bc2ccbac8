from dataclasses import dataclass

from .models import Role


@dataclass(frozen=True)
class Session:
    """Who is logged in. Created by a successful login, dropped at logout."""

    username: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def owns(self, tenant_name) -> bool:
        """True if ``tenant_name`` refers to this session's user (case-insensitive)."""
        return bool(tenant_name) and tenant_name.strip().lower() == self.username.strip().lower()
