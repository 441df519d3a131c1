from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, Iterable

from vetclinic_client import queries as keys
from vetclinic_client.apis import (
    AnimalsApi,
    AppointmentsApi,
    AuthApi,
    ClientsApi,
    DashboardApi,
    FinancialApi,
    NotificationsApi,
    ReportsApi,
    ReproductiveApi,
    SanitaryApi,
    SubscriptionApi,
    TeamApi,
)
from vetclinic_client.auth import SessionStore
from vetclinic_client.enums import (
    ANIMAL_STATUSES,
    APPOINTMENT_CANCELLED,
    APPOINTMENT_STATUSES,
    TEAM_ROLES,
    can_cancel_appointment,
    next_appointment_status,
)
from vetclinic_client.models import GuardDecision, Page, Route, SessionSnapshot
from vetclinic_client.queries import QueryCache
from vetclinic_client.routes import menu_routes, post_login_destination, resolve_navigation
from vetclinic_client.validators import (
    AnimalForm,
    AppointmentForm,
    BatchForm,
    BirthRecordForm,
    ChangePasswordForm,
    ClientForm,
    ForgotPasswordForm,
    FormSchema,
    HealthRecordForm,
    HeatRecordForm,
    InseminationForm,
    InvoiceForm,
    LoginForm,
    PaymentForm,
    PregnancyCheckForm,
    ProfileForm,
    PropertyForm,
    RegisterForm,
    ResetPasswordForm,
    VaccinationApplyForm,
    validate_form,
)

logger = logging.getLogger(__name__)


class FormValidationError(ValueError):
    def __init__(self, errors: dict[str, str]):
        super().__init__("Invalid form: " + ", ".join(sorted(errors)))
        self.errors = errors


def _data(response: dict[str, Any]) -> Any:
    if isinstance(response, dict) and "data" in response:
        return response["data"]
    return response


def _page(response: dict[str, Any]) -> Page:
    items = _data(response)
    if not isinstance(items, list):
        items = []
    pagination = response.get("pagination") if isinstance(response, dict) else None
    return Page(items=items, pagination=pagination)


def _check_choice(name: str, value: str, choices: tuple[str, ...]) -> None:
    if value not in choices:
        raise ValueError(f"Invalid {name}: {value!r}")


def _params_key(params: dict[str, Any] | None) -> tuple:
    if not params:
        return ()
    return tuple(sorted((str(k), str(v)) for k, v in params.items() if v is not None and v != ""))


class VetClinicService:
    def __init__(
        self,
        session: SessionStore,
        query_cache: QueryCache,
        auth_api: AuthApi,
        clients_api: ClientsApi,
        animals_api: AnimalsApi,
        appointments_api: AppointmentsApi,
        dashboard_api: DashboardApi,
        financial_api: FinancialApi,
        notifications_api: NotificationsApi,
        reports_api: ReportsApi,
        reproductive_api: ReproductiveApi,
        sanitary_api: SanitaryApi,
        subscription_api: SubscriptionApi,
        team_api: TeamApi,
        request_timeout_seconds: int,
    ):
        self._session = session
        self._cache = query_cache
        self._auth_api = auth_api
        self._clients_api = clients_api
        self._animals_api = animals_api
        self._appointments_api = appointments_api
        self._dashboard_api = dashboard_api
        self._financial_api = financial_api
        self._notifications_api = notifications_api
        self._reports_api = reports_api
        self._reproductive_api = reproductive_api
        self._sanitary_api = sanitary_api
        self._subscription_api = subscription_api
        self._team_api = team_api
        self._request_timeout_seconds = request_timeout_seconds

    @property
    def request_timeout_seconds(self) -> int:
        return self._request_timeout_seconds

    @property
    def session(self) -> SessionStore:
        return self._session

    # Session

    def session_snapshot(self) -> SessionSnapshot:
        return self._session.snapshot()

    def initialize(self) -> SessionSnapshot:
        return self._session.initialize()

    def login(self, email: str, password: str, from_path: str | None = None) -> str:
        """Sign in and return the path to open next."""
        cleaned = self._validated(LoginForm, {"email": email, "password": password})
        self._cache.clear()
        self._session.login(cleaned["email"], cleaned["password"])
        return post_login_destination(from_path)

    def logout(self) -> None:
        self._session.logout()
        self._cache.clear()

    def register(self, data: dict[str, Any]) -> dict[str, Any]:
        cleaned = self._validated(RegisterForm, data)
        cleaned.pop("confirmPassword", None)
        return self._session.register(cleaned)

    def forgot_password(self, email: str) -> dict[str, Any]:
        cleaned = self._validated(ForgotPasswordForm, {"email": email})
        return self._auth_api.forgot_password(cleaned["email"])

    def reset_password(self, token: str, data: dict[str, Any]) -> dict[str, Any]:
        cleaned = self._validated(ResetPasswordForm, data)
        return self._auth_api.reset_password({"token": token, "password": cleaned["password"]})

    def verify_email(self, token: str) -> dict[str, Any]:
        return self._auth_api.verify_email(token)

    def update_profile(self, data: dict[str, Any]) -> dict[str, Any]:
        cleaned = self._validated(ProfileForm, data)
        response = self._cache.mutate(
            lambda: self._auth_api.update_profile(cleaned),
            invalidates=[keys.PROFILE, keys.USER],
        )
        updated = _data(response)
        self._session.update_user(updated if isinstance(updated, dict) else cleaned)
        return response

    def change_password(self, data: dict[str, Any]) -> dict[str, Any]:
        cleaned = self._validated(ChangePasswordForm, data)
        return self._auth_api.change_password(
            {
                "currentPassword": cleaned["currentPassword"],
                "newPassword": cleaned["newPassword"],
            }
        )

    def navigate(self, path: str) -> tuple[Route, dict[str, str], GuardDecision]:
        return resolve_navigation(self._session.snapshot(), path)

    def menu(self) -> list[Route]:
        return menu_routes(self._session.snapshot())

    # Dashboard

    def dashboard_overview(self) -> Any:
        return self._read((keys.DASHBOARD, "overview"), self._dashboard_api.get_overview)

    def dashboard_alerts(self) -> Any:
        return self._read((keys.ALERTS,), self._dashboard_api.get_alerts)

    def today_appointments(self) -> Any:
        return self._read((keys.APPOINTMENTS, "today"), self._dashboard_api.get_today_appointments)

    # Clients

    def list_clients(self, params: dict[str, Any] | None = None) -> Page:
        return self._list((keys.CLIENTS, _params_key(params)), lambda: self._clients_api.get_clients(params))

    def get_client(self, client_id: str) -> Any:
        return self._read((keys.CLIENT, client_id), lambda: self._clients_api.get_client(client_id))

    def client_properties(self, client_id: str) -> Any:
        return self._read(
            (keys.PROPERTIES, client_id),
            lambda: self._clients_api.get_properties(client_id),
        )

    def create_client(self, data: dict[str, Any]) -> Any:
        cleaned = self._validated(ClientForm, data)
        return self._write(lambda: self._clients_api.create_client(cleaned), [keys.CLIENTS])

    def update_client(self, client_id: str, data: dict[str, Any]) -> Any:
        cleaned = self._validated(ClientForm, data)
        return self._write(
            lambda: self._clients_api.update_client(client_id, cleaned),
            [keys.CLIENTS, (keys.CLIENT, client_id)],
        )

    def delete_client(self, client_id: str) -> Any:
        return self._write(
            lambda: self._clients_api.delete_client(client_id),
            [keys.CLIENTS, (keys.CLIENT, client_id)],
        )

    def create_property(self, client_id: str, data: dict[str, Any]) -> Any:
        cleaned = self._validated(PropertyForm, data)
        return self._write(
            lambda: self._clients_api.create_property(client_id, cleaned),
            [(keys.PROPERTIES, client_id), (keys.CLIENT, client_id)],
        )

    # Animals and batches

    def species(self) -> Any:
        return self._read((keys.SPECIES,), self._animals_api.get_species)

    def breeds(self, species_id: str) -> Any:
        return self._read(
            (keys.BREEDS, species_id),
            lambda: self._animals_api.get_breeds_by_species(species_id),
        )

    def list_animals(self, params: dict[str, Any] | None = None) -> Page:
        return self._list((keys.ANIMALS, _params_key(params)), lambda: self._animals_api.get_animals(params))

    def get_animal(self, animal_id: str) -> Any:
        return self._read((keys.ANIMAL, animal_id), lambda: self._animals_api.get_animal(animal_id))

    def create_animal(self, data: dict[str, Any]) -> Any:
        cleaned = self._validated(AnimalForm, data)
        return self._write(
            lambda: self._animals_api.create_animal(cleaned),
            [keys.ANIMALS, (keys.CLIENT, cleaned["clientId"])],
        )

    def update_animal(self, animal_id: str, data: dict[str, Any]) -> Any:
        cleaned = self._validated(AnimalForm, data)
        return self._write(
            lambda: self._animals_api.update_animal(animal_id, cleaned),
            [keys.ANIMALS, (keys.ANIMAL, animal_id)],
        )

    def delete_animal(self, animal_id: str) -> Any:
        return self._write(
            lambda: self._animals_api.delete_animal(animal_id),
            [keys.ANIMALS, (keys.ANIMAL, animal_id)],
        )

    def update_animal_status(self, animal_id: str, status: str, reason: str | None = None) -> Any:
        _check_choice("animal status", status, ANIMAL_STATUSES)
        payload = {"status": status}
        if reason:
            payload["reason"] = reason
        return self._write(
            lambda: self._animals_api.update_animal_status(animal_id, payload),
            [keys.ANIMALS, (keys.ANIMAL, animal_id)],
        )

    def record_weight(self, animal_id: str, data: dict[str, Any]) -> Any:
        return self._write(
            lambda: self._animals_api.record_weight(animal_id, data),
            [(keys.ANIMAL, animal_id)],
        )

    def list_batches(self, params: dict[str, Any] | None = None) -> Page:
        return self._list((keys.BATCHES, _params_key(params)), lambda: self._animals_api.get_batches(params))

    def get_batch(self, batch_id: str) -> Any:
        return self._read((keys.BATCH, batch_id), lambda: self._animals_api.get_batch(batch_id))

    def create_batch(self, data: dict[str, Any]) -> Any:
        cleaned = self._validated(BatchForm, data)
        return self._write(lambda: self._animals_api.create_batch(cleaned), [keys.BATCHES])

    # Appointments

    def list_appointments(self, params: dict[str, Any] | None = None) -> Page:
        return self._list(
            (keys.APPOINTMENTS, _params_key(params)),
            lambda: self._appointments_api.get_appointments(params),
        )

    def get_appointment(self, appointment_id: str) -> Any:
        return self._read(
            (keys.APPOINTMENT, appointment_id),
            lambda: self._appointments_api.get_appointment(appointment_id),
        )

    def create_appointment(self, data: dict[str, Any]) -> Any:
        cleaned = self._validated(AppointmentForm, data)
        return self._write(
            lambda: self._appointments_api.create_appointment(cleaned),
            [keys.APPOINTMENTS, keys.DASHBOARD],
        )

    def update_appointment_status(self, appointment_id: str, status: str, **extra: Any) -> Any:
        _check_choice("appointment status", status, APPOINTMENT_STATUSES)
        return self._write(
            lambda: self._appointments_api.update_appointment_status(
                appointment_id, {"status": status, **extra}
            ),
            [keys.APPOINTMENTS, (keys.APPOINTMENT, appointment_id), keys.DASHBOARD],
        )

    def advance_appointment(self, appointment: dict[str, Any]) -> Any:
        """Move an appointment to the next step of scheduled, confirmed, in progress, completed."""
        current = appointment.get("status")
        target = next_appointment_status(current)
        if target is None:
            raise ValueError(f"Appointment in status {current!r} cannot move forward")
        return self.update_appointment_status(appointment["id"], target)

    def cancel_appointment(self, appointment: dict[str, Any], reason: str | None = None) -> Any:
        current = appointment.get("status")
        if not can_cancel_appointment(current):
            raise ValueError(f"Appointment in status {current!r} cannot be cancelled")
        extra = {"reason": reason} if reason else {}
        return self.update_appointment_status(appointment["id"], APPOINTMENT_CANCELLED, **extra)

    def services(self) -> Any:
        return self._read((keys.SERVICES,), self._appointments_api.get_services)

    # Financial

    def list_invoices(self, params: dict[str, Any] | None = None) -> Page:
        return self._list(
            (keys.INVOICES, _params_key(params)),
            lambda: self._financial_api.get_invoices(params),
        )

    def get_invoice(self, invoice_id: str) -> Any:
        return self._read((keys.INVOICE, invoice_id), lambda: self._financial_api.get_invoice(invoice_id))

    def create_invoice(self, data: dict[str, Any]) -> Any:
        cleaned = self._validated(InvoiceForm, data)
        if "items" in data:
            cleaned["items"] = data["items"]
        return self._write(
            lambda: self._financial_api.create_invoice(cleaned),
            [keys.INVOICES, keys.FINANCIAL_STATS, keys.RECEIVABLES],
        )

    def record_payment(self, invoice_id: str, data: dict[str, Any]) -> Any:
        cleaned = self._validated(PaymentForm, data)
        return self._write(
            lambda: self._financial_api.record_payment(invoice_id, cleaned),
            [keys.INVOICES, (keys.INVOICE, invoice_id), keys.FINANCIAL_STATS, keys.RECEIVABLES],
        )

    def financial_stats(self, params: dict[str, Any] | None = None) -> Any:
        return self._read(
            (keys.FINANCIAL_STATS, _params_key(params)),
            lambda: self._financial_api.get_financial_stats(params),
        )

    def receivables(self) -> Any:
        return self._read((keys.RECEIVABLES,), self._financial_api.get_receivables)

    # Reproductive

    def reproductive_stats(self, params: dict[str, Any] | None = None) -> Any:
        return self._read(
            (keys.REPRODUCTIVE_STATS, _params_key(params)),
            lambda: self._reproductive_api.get_stats(params),
        )

    def pregnant_animals(self, params: dict[str, Any] | None = None) -> Page:
        return self._list(
            (keys.PREGNANT_ANIMALS, _params_key(params)),
            lambda: self._reproductive_api.get_pregnant_animals(params),
        )

    def record_heat(self, data: dict[str, Any]) -> Any:
        cleaned = self._validated(HeatRecordForm, data)
        return self._write(lambda: self._reproductive_api.record_heat(cleaned), self._reproductive_keys(cleaned))

    def record_insemination(self, data: dict[str, Any]) -> Any:
        cleaned = self._validated(InseminationForm, data)
        return self._write(
            lambda: self._reproductive_api.record_insemination(cleaned),
            self._reproductive_keys(cleaned),
        )

    def record_pregnancy_check(self, data: dict[str, Any]) -> Any:
        cleaned = self._validated(PregnancyCheckForm, data)
        return self._write(
            lambda: self._reproductive_api.record_pregnancy_check(cleaned),
            self._reproductive_keys(cleaned) + [keys.PREGNANT_ANIMALS],
        )

    def record_birth(self, data: dict[str, Any]) -> Any:
        cleaned = self._validated(BirthRecordForm, data)
        return self._write(
            lambda: self._reproductive_api.record_birth(cleaned),
            self._reproductive_keys(cleaned) + [keys.PREGNANT_ANIMALS, keys.ANIMALS],
        )

    @staticmethod
    def _reproductive_keys(cleaned: dict[str, Any]) -> list:
        return [keys.REPRODUCTIVE_STATS, (keys.ANIMAL, cleaned["animalId"])]

    # Sanitary

    def sanitary_stats(self) -> Any:
        return self._read((keys.SANITARY_STATS,), self._sanitary_api.get_stats)

    def vaccinations(self) -> Any:
        return self._read((keys.VACCINATIONS,), self._sanitary_api.get_vaccinations)

    def vaccination_alerts(self, params: dict[str, Any] | None = None) -> Any:
        return self._read(
            (keys.ALERTS, "vaccinations", _params_key(params)),
            lambda: self._sanitary_api.get_vaccination_alerts(params),
        )

    def campaigns(self, params: dict[str, Any] | None = None) -> Page:
        return self._list(
            (keys.CAMPAIGNS, _params_key(params)),
            lambda: self._sanitary_api.get_campaigns(params),
        )

    def apply_vaccination(self, data: dict[str, Any]) -> Any:
        cleaned = self._validated(VaccinationApplyForm, data)
        return self._write(
            lambda: self._sanitary_api.apply_vaccination(cleaned),
            [keys.VACCINATIONS, keys.ALERTS, keys.SANITARY_STATS, (keys.ANIMAL, cleaned["animalId"])],
        )

    def create_health_record(self, data: dict[str, Any]) -> Any:
        cleaned = self._validated(HealthRecordForm, data)
        return self._write(
            lambda: self._sanitary_api.create_health_record(cleaned),
            [keys.SANITARY_STATS, (keys.ANIMAL, cleaned["animalId"])],
        )

    # Notifications

    def notifications(self, params: dict[str, Any] | None = None) -> Page:
        return self._list(
            (keys.NOTIFICATIONS, _params_key(params)),
            lambda: self._notifications_api.get_notifications(params),
        )

    def mark_notification_read(self, notification_id: str) -> Any:
        return self._write(lambda: self._notifications_api.mark_as_read(notification_id), [keys.NOTIFICATIONS])

    def mark_all_notifications_read(self) -> Any:
        return self._write(self._notifications_api.mark_all_as_read, [keys.NOTIFICATIONS])

    # Subscription

    def plans(self) -> Any:
        return self._read((keys.PLANS,), self._subscription_api.get_plans)

    def subscription_status(self) -> Any:
        return self._read((keys.SUBSCRIPTION,), self._subscription_api.get_subscription_status)

    def refresh_subscription(self) -> SessionSnapshot:
        """Re-read the subscription from the server and store it on the account."""
        self._cache.invalidate(keys.SUBSCRIPTION)
        status = self.subscription_status()
        if isinstance(status, dict):
            partial = {
                name: status[name]
                for name in ("plan", "trialEndsAt", "subscriptionEndsAt")
                if name in status
            }
            # the status endpoint names the account field plain "status"
            if "status" in status:
                partial["subscriptionStatus"] = status["status"]
            if partial:
                self._session.update_account(partial)
        return self._session.snapshot()

    def create_checkout_session(self, plan_id: str) -> Any:
        return _data(self._subscription_api.create_checkout_session({"planId": plan_id}))

    def cancel_subscription(self) -> Any:
        return self._write(self._subscription_api.cancel_subscription, [keys.SUBSCRIPTION])

    def resume_subscription(self) -> Any:
        return self._write(self._subscription_api.resume_subscription, [keys.SUBSCRIPTION])

    # Team

    def team_members(self) -> Any:
        return self._read((keys.TEAM, "members"), self._team_api.get_members)

    def invite_member(self, email: str, role: str) -> Any:
        _check_choice("role", role, TEAM_ROLES)
        return self._write(lambda: self._team_api.invite_member({"email": email, "role": role}), [keys.TEAM])

    def update_member_role(self, user_id: str, role: str) -> Any:
        _check_choice("role", role, TEAM_ROLES)
        return self._write(lambda: self._team_api.update_member_role(user_id, role), [keys.TEAM])

    def remove_member(self, user_id: str) -> Any:
        return self._write(lambda: self._team_api.remove_member(user_id), [keys.TEAM])

    # Reports

    def download_report(self, kind: str, target: str | dict[str, Any] | None = None) -> bytes:
        if kind == "appointment":
            return self._reports_api.generate_appointment_report(str(target))
        if kind == "animal":
            return self._reports_api.generate_animal_report(str(target))
        if kind == "invoice":
            return self._reports_api.generate_invoice_report(str(target))
        if kind == "financial":
            return self._reports_api.generate_financial_report(target if isinstance(target, dict) else None)
        raise ValueError(f"Unknown report kind: {kind}")

    # Internals

    @staticmethod
    def _validated(schema: type[FormSchema], data: dict[str, Any] | None) -> dict[str, Any]:
        cleaned, errors = validate_form(schema, data)
        if errors:
            raise FormValidationError(errors)
        return cleaned

    def _read(self, key: tuple, loader: Callable[[], dict[str, Any]]) -> Any:
        return _data(self._cache.fetch(key, loader))

    def _list(self, key: tuple, loader: Callable[[], dict[str, Any]]) -> Page:
        return _page(self._cache.fetch(key, loader))

    def _write(
        self,
        call: Callable[[], dict[str, Any]],
        invalidates: Iterable[Hashable | tuple],
    ) -> Any:
        return _data(self._cache.mutate(call, invalidates=invalidates))
