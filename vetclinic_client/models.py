from __future__ import annotations

from dataclasses import dataclass
from typing import Any

GUARD_ALLOW = "allow"
GUARD_REDIRECT = "redirect"
GUARD_LOADING = "loading"


@dataclass(frozen=True)
class SessionSnapshot:
    user: dict[str, Any] | None = None
    account: dict[str, Any] | None = None
    is_authenticated: bool = False
    is_loading: bool = True


@dataclass(frozen=True)
class GuardDecision:
    kind: str
    path: str | None = None
    from_path: str | None = None

    @staticmethod
    def allow() -> "GuardDecision":
        return GuardDecision(kind=GUARD_ALLOW)

    @staticmethod
    def loading() -> "GuardDecision":
        return GuardDecision(kind=GUARD_LOADING)

    @staticmethod
    def redirect(path: str, from_path: str | None = None) -> "GuardDecision":
        return GuardDecision(kind=GUARD_REDIRECT, path=path, from_path=from_path)

    @property
    def is_allowed(self) -> bool:
        return self.kind == GUARD_ALLOW


@dataclass(frozen=True)
class Route:
    name: str
    pattern: str
    title: str
    protected: bool = True
    required_role: tuple[str, ...] = ()
    required_permission: str | None = None
    in_menu: bool = False


@dataclass(frozen=True)
class Page:
    """One page of a paginated list response."""

    items: list[dict[str, Any]]
    pagination: dict[str, Any] | None = None
