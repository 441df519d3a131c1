from __future__ import annotations

import json
import logging
from typing import Any

from vetclinic_client.apis import AuthApi
from vetclinic_client.enums import ACTIVE_SUBSCRIPTION_STATUSES, PRIVILEGED_ROLES
from vetclinic_client.models import SessionSnapshot
from vetclinic_client.storage import (
    ACCESS_TOKEN_KEY,
    ACCOUNT_KEY,
    REFRESH_TOKEN_KEY,
    SESSION_KEYS,
    USER_KEY,
    KeyValueStore,
)

logger = logging.getLogger(__name__)


class SessionStore:
    """Who is logged in, for which account, and with what access.

    The store is the only writer of the session keys in ``storage``; after
    every mutating call the in-memory state and the persisted keys agree.
    A freshly built store is loading until ``initialize`` runs.
    """

    def __init__(self, auth_api: AuthApi, storage: KeyValueStore):
        self._auth_api = auth_api
        self._storage = storage
        self._user: dict[str, Any] | None = None
        self._account: dict[str, Any] | None = None
        self._is_authenticated = False
        self._is_loading = True

    @property
    def user(self) -> dict[str, Any] | None:
        return self._user

    @property
    def account(self) -> dict[str, Any] | None:
        return self._account

    @property
    def is_authenticated(self) -> bool:
        return self._is_authenticated

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            user=dict(self._user) if self._user is not None else None,
            account=dict(self._account) if self._account is not None else None,
            is_authenticated=self._is_authenticated,
            is_loading=self._is_loading,
        )

    def access_token(self) -> str | None:
        return self._storage.get(ACCESS_TOKEN_KEY) or None

    def initialize(self) -> SessionSnapshot:
        try:
            access_token = self._storage.get(ACCESS_TOKEN_KEY)
            user_raw = self._storage.get(USER_KEY)
            account_raw = self._storage.get(ACCOUNT_KEY)

            if access_token and user_raw:
                user = json.loads(user_raw)
                account = json.loads(account_raw) if account_raw else None
                if not isinstance(user, dict) or not (account is None or isinstance(account, dict)):
                    raise ValueError("Persisted session records must be JSON objects")

                self._user = user
                self._account = account
                self._is_authenticated = True
                self._is_loading = False
                logger.info("Restored session for user %s", user.get("id"))
            else:
                self._user = None
                self._account = None
                self._is_authenticated = False
                self._is_loading = False
        except ValueError as exc:
            logger.warning("Discarding unreadable persisted session: %s", exc)
            self.clear()

        return self.snapshot()

    def login(self, email: str, password: str) -> dict[str, Any]:
        # Stale tokens must be gone before the request goes out. A failed
        # login therefore leaves the store signed out.
        self.clear()

        response = self._auth_api.login({"email": email, "password": password})
        data = response["data"]
        user = data["user"]
        account = data.get("account")
        tokens = data["tokens"]

        self._storage.set(ACCESS_TOKEN_KEY, tokens["accessToken"])
        self._storage.set(REFRESH_TOKEN_KEY, tokens["refreshToken"])
        self._storage.set(USER_KEY, json.dumps(user))
        self._storage.set(ACCOUNT_KEY, json.dumps(account))

        self._user = user
        self._account = account
        self._is_authenticated = True
        self._is_loading = False
        logger.info("Signed in user %s", user.get("id"))
        return response

    def register(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._auth_api.register(data)

    def logout(self) -> None:
        try:
            self._auth_api.logout()
        except Exception as exc:
            logger.warning("Sign-out request failed, clearing local session anyway: %s", exc)
        finally:
            self.clear()

    def clear(self) -> None:
        self._remove_session_keys()
        self._user = None
        self._account = None
        self._is_authenticated = False
        self._is_loading = False
        logger.info("Session cleared")

    def update_user(self, partial: dict[str, Any]) -> dict[str, Any]:
        updated = {**(self._user or {}), **partial}
        self._storage.set(USER_KEY, json.dumps(updated))
        self._user = updated
        return updated

    def update_account(self, partial: dict[str, Any]) -> dict[str, Any]:
        updated = {**(self._account or {}), **partial}
        self._storage.set(ACCOUNT_KEY, json.dumps(updated))
        self._account = updated
        return updated

    def has_active_subscription(self) -> bool:
        return account_has_active_subscription(self._account)

    def has_role(self, *roles: str) -> bool:
        return user_has_role(self._user, *roles)

    def has_permission(self, permission: str) -> bool:
        return user_has_permission(self._user, permission)

    def _remove_session_keys(self) -> None:
        for key in SESSION_KEYS:
            self._storage.remove(key)


def account_has_active_subscription(account: dict[str, Any] | None) -> bool:
    if not account:
        return False
    return account.get("subscriptionStatus") in ACTIVE_SUBSCRIPTION_STATUSES


def user_has_role(user: dict[str, Any] | None, *roles: str) -> bool:
    if not user:
        return False
    return user.get("role") in roles


def user_has_permission(user: dict[str, Any] | None, permission: str) -> bool:
    if not user:
        return False
    if user.get("role") in PRIVILEGED_ROLES:
        return True
    permissions = user.get("permissions") or {}
    return isinstance(permissions, dict) and permissions.get(permission) is True
