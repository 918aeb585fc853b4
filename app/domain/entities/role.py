"""Domain entity representing the role used to target broadcasts."""

from dataclasses import dataclass


def normalize_role_alias(alias: str) -> str:
    """Return ``alias`` in the form role broadcasts are matched with."""

    return alias.strip().lower()


@dataclass
class Role:
    """Role assigned to a user; broadcasts address every member by alias."""

    id: int
    name: str
    alias: str

    def matches(self, alias: str) -> bool:
        return normalize_role_alias(self.alias) == normalize_role_alias(alias)


__all__ = ["Role", "normalize_role_alias"]
