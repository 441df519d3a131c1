"""Route table and the access guard in front of the application shell.

``guard`` is a pure function of a session snapshot and the requested path;
``resolve_navigation`` looks the path up in ``ROUTE_TABLE`` first and falls
back to the not-found page.
"""

from __future__ import annotations

from typing import Iterable

from vetclinic_client.auth import (
    account_has_active_subscription,
    user_has_permission,
    user_has_role,
)
from vetclinic_client.enums import ROLE_ADMIN, ROLE_OWNER
from vetclinic_client.models import GuardDecision, Route, SessionSnapshot

LOGIN = "/login"
REGISTER = "/register"
FORGOT_PASSWORD = "/forgot-password"
RESET_PASSWORD = "/reset-password"
VERIFY_EMAIL = "/verify-email"

DASHBOARD = "/"

CLIENTS = "/clients"
CLIENT_CREATE = "/clients/new"
CLIENT_DETAIL = "/clients/:id"
CLIENT_EDIT = "/clients/:id/edit"

ANIMALS = "/animals"
ANIMAL_CREATE = "/animals/new"
ANIMAL_DETAIL = "/animals/:id"
ANIMAL_EDIT = "/animals/:id/edit"
BATCHES = "/batches"
BATCH_CREATE = "/batches/new"
BATCH_DETAIL = "/batches/:id"

APPOINTMENTS = "/appointments"
APPOINTMENT_CREATE = "/appointments/new"
APPOINTMENT_DETAIL = "/appointments/:id"
SERVICES = "/services"

REPRODUCTIVE = "/reproductive"
PREGNANT_ANIMALS = "/reproductive/pregnant"

SANITARY = "/sanitary"
VACCINATION_ALERTS = "/sanitary/alerts"
CAMPAIGNS = "/sanitary/campaigns"

FINANCIAL = "/financial"
INVOICES = "/financial/invoices"
INVOICE_CREATE = "/financial/invoices/new"
INVOICE_DETAIL = "/financial/invoices/:id"
RECEIVABLES = "/financial/receivables"

REPORTS = "/reports"

SUBSCRIPTION = "/subscription"
PLANS = "/plans"

NOTIFICATIONS = "/notifications"

PROFILE = "/settings/profile"
USERS = "/settings/users"

# Reachable with a lapsed subscription so the account can be fixed.
SUBSCRIPTION_EXEMPT_PATHS = frozenset({SUBSCRIPTION, PROFILE})

NOT_FOUND = Route(name="not_found", pattern="*", title="Página não encontrada", protected=False)

ROUTE_TABLE: tuple[Route, ...] = (
    Route("login", LOGIN, "Entrar", protected=False),
    Route("register", REGISTER, "Criar conta", protected=False),
    Route("forgot_password", FORGOT_PASSWORD, "Esqueci minha senha", protected=False),
    Route("reset_password", RESET_PASSWORD, "Redefinir senha", protected=False),
    Route("verify_email", VERIFY_EMAIL, "Verificar email", protected=False),
    Route("dashboard", DASHBOARD, "Dashboard", in_menu=True),
    Route("clients", CLIENTS, "Clientes", in_menu=True),
    Route("client_create", CLIENT_CREATE, "Novo cliente"),
    Route("client_detail", CLIENT_DETAIL, "Cliente"),
    Route("client_edit", CLIENT_EDIT, "Editar cliente"),
    Route("animals", ANIMALS, "Animais", in_menu=True),
    Route("animal_create", ANIMAL_CREATE, "Novo animal"),
    Route("animal_detail", ANIMAL_DETAIL, "Animal"),
    Route("animal_edit", ANIMAL_EDIT, "Editar animal"),
    Route("batches", BATCHES, "Lotes", in_menu=True),
    Route("batch_create", BATCH_CREATE, "Novo lote"),
    Route("batch_detail", BATCH_DETAIL, "Lote"),
    Route("appointments", APPOINTMENTS, "Atendimentos", in_menu=True),
    Route("appointment_create", APPOINTMENT_CREATE, "Novo atendimento"),
    Route("appointment_detail", APPOINTMENT_DETAIL, "Atendimento"),
    Route("services", SERVICES, "Serviços", in_menu=True),
    Route("reproductive", REPRODUCTIVE, "Reprodutivo", in_menu=True),
    Route("pregnant_animals", PREGNANT_ANIMALS, "Animais prenhes"),
    Route("sanitary", SANITARY, "Sanitário", in_menu=True),
    Route("vaccination_alerts", VACCINATION_ALERTS, "Alertas de vacinação"),
    Route("campaigns", CAMPAIGNS, "Campanhas"),
    Route("financial", FINANCIAL, "Financeiro", in_menu=True),
    Route("invoices", INVOICES, "Faturas", in_menu=True),
    Route("invoice_create", INVOICE_CREATE, "Nova fatura"),
    Route("invoice_detail", INVOICE_DETAIL, "Fatura"),
    Route("receivables", RECEIVABLES, "Contas a receber"),
    Route("reports", REPORTS, "Relatórios", in_menu=True),
    Route("subscription", SUBSCRIPTION, "Assinatura", in_menu=True),
    Route("plans", PLANS, "Planos"),
    Route("notifications", NOTIFICATIONS, "Notificações", in_menu=True),
    Route("profile", PROFILE, "Perfil", in_menu=True),
    Route("users", USERS, "Usuários", required_role=(ROLE_OWNER, ROLE_ADMIN), in_menu=True),
)


def normalize_path(path: str) -> str:
    path = (path or "/").split("?", 1)[0].split("#", 1)[0].strip()
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def _split(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def _match_pattern(pattern: str, path: str) -> dict[str, str] | None:
    pattern_parts = _split(pattern)
    path_parts = _split(path)
    if len(pattern_parts) != len(path_parts):
        return None

    params: dict[str, str] = {}
    for expected, actual in zip(pattern_parts, path_parts):
        if expected.startswith(":"):
            params[expected[1:]] = actual
        elif expected != actual:
            return None
    return params


def _specificity(route: Route) -> tuple[int, ...]:
    # literal segments outrank parameters, left to right
    return tuple(0 if part.startswith(":") else 1 for part in _split(route.pattern))


def match_route(path: str, routes: Iterable[Route] = ROUTE_TABLE) -> tuple[Route, dict[str, str]]:
    path = normalize_path(path)
    best: tuple[Route, dict[str, str]] | None = None
    for route in routes:
        params = _match_pattern(route.pattern, path)
        if params is None:
            continue
        if best is None or _specificity(route) > _specificity(best[0]):
            best = (route, params)

    if best is None:
        return NOT_FOUND, {}
    return best


def build_path(pattern: str, **params: str) -> str:
    parts = []
    for part in _split(pattern):
        if part.startswith(":"):
            parts.append(str(params[part[1:]]))
        else:
            parts.append(part)
    return "/" + "/".join(parts)


def guard(
    session: SessionSnapshot,
    path: str,
    required_role: str | Iterable[str] | None = None,
    required_permission: str | None = None,
) -> GuardDecision:
    if session.is_loading:
        return GuardDecision.loading()

    path = normalize_path(path)

    if not session.is_authenticated:
        return GuardDecision.redirect(LOGIN, from_path=path)

    if not account_has_active_subscription(session.account) and path not in SUBSCRIPTION_EXEMPT_PATHS:
        return GuardDecision.redirect(SUBSCRIPTION)

    if required_role:
        roles = (required_role,) if isinstance(required_role, str) else tuple(required_role)
        if not user_has_role(session.user, *roles):
            return GuardDecision.redirect(DASHBOARD)

    if required_permission and not user_has_permission(session.user, required_permission):
        return GuardDecision.redirect(DASHBOARD)

    return GuardDecision.allow()


def resolve_navigation(
    session: SessionSnapshot,
    path: str,
) -> tuple[Route, dict[str, str], GuardDecision]:
    route, params = match_route(path)
    if not route.protected:
        return route, params, GuardDecision.allow()

    decision = guard(
        session,
        path,
        required_role=route.required_role or None,
        required_permission=route.required_permission,
    )
    return route, params, decision


def post_login_destination(from_path: str | None) -> str:
    if not from_path:
        return DASHBOARD
    from_path = normalize_path(from_path)
    route, _ = match_route(from_path)
    if route is NOT_FOUND or not route.protected:
        return DASHBOARD
    return from_path


def menu_routes(session: SessionSnapshot) -> list[Route]:
    """Sidebar entries the session may open without being redirected."""
    entries = []
    for route in ROUTE_TABLE:
        if not route.in_menu:
            continue
        decision = guard(
            session,
            route.pattern,
            required_role=route.required_role or None,
            required_permission=route.required_permission,
        )
        if decision.is_allowed:
            entries.append(route)
    return entries
