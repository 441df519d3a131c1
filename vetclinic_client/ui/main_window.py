from __future__ import annotations

import json
import logging
import threading
import traceback

import customtkinter as ctk

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
from vetclinic_client.config import AppSettings, ConfigurationError
from vetclinic_client.enums import (
	APPOINTMENT_ACTION_LABELS,
	APPOINTMENT_CANCELLED,
	can_cancel_appointment,
	next_appointment_status,
)
from vetclinic_client.formatters import (
	format_currency,
	format_date,
	format_datetime,
	format_phone,
	get_initials,
	truncate,
)
from vetclinic_client.helpers import get_error_message, get_pagination_info, get_status_label
from vetclinic_client.http import HttpClient
from vetclinic_client.logging_utils import configure_logging
from vetclinic_client.models import GUARD_LOADING, GUARD_REDIRECT, Page, Route
from vetclinic_client import routes
from vetclinic_client.queries import QueryCache
from vetclinic_client.services import FormValidationError, VetClinicService
from vetclinic_client.storage import FileStorage

logger = logging.getLogger(__name__)

PAGE_SIZE = 20

# route name -> (service list method, [(column title, record key, formatter)])
LIST_PAGES = {
	"clients": (
		"list_clients",
		[
			("Nome", "name", truncate),
			("Telefone", "phone", format_phone),
			("Cidade", "city", None),
		],
	),
	"animals": (
		"list_animals",
		[
			("Identificação", "identifier", None),
			("Nome", "name", None),
			("Sexo", "sex", get_status_label),
			("Status", "status", get_status_label),
		],
	),
	"batches": (
		"list_batches",
		[
			("Nome", "name", None),
			("Descrição", "description", truncate),
		],
	),
	"appointments": (
		"list_appointments",
		[
			("Data", "scheduledDate", format_datetime),
			("Status", "status", get_status_label),
			("Observações", "notes", truncate),
		],
	),
	"invoices": (
		"list_invoices",
		[
			("Número", "invoiceNumber", None),
			("Vencimento", "dueDate", format_date),
			("Total", "total", format_currency),
			("Status", "status", get_status_label),
		],
	),
	"pregnant_animals": (
		"pregnant_animals",
		[
			("Identificação", "identifier", None),
			("Previsão de parto", "expectedDueDate", format_date),
		],
	),
	"campaigns": (
		"campaigns",
		[
			("Nome", "name", None),
			("Início", "startDate", format_date),
			("Status", "status", get_status_label),
		],
	),
	"notifications": (
		"notifications",
		[
			("Título", "title", truncate),
			("Recebida", "createdAt", format_datetime),
		],
	),
}

# route name -> service method taking no arguments, rendered as a summary
SUMMARY_PAGES = {
	"dashboard": "dashboard_overview",
	"services": "services",
	"reproductive": "reproductive_stats",
	"sanitary": "sanitary_stats",
	"vaccination_alerts": "vaccination_alerts",
	"financial": "financial_stats",
	"receivables": "receivables",
	"subscription": "subscription_status",
	"plans": "plans",
	"users": "team_members",
}

# route name -> service method taking the ``id`` path parameter
DETAIL_PAGES = {
	"client_detail": "get_client",
	"animal_detail": "get_animal",
	"batch_detail": "get_batch",
	"invoice_detail": "get_invoice",
}


class MainWindow(ctk.CTk):
	def __init__(self, service: VetClinicService):
		super().__init__()
		self._service = service
		self._current_path = routes.DASHBOARD
		self._login_from_path: str | None = None
		self._page_number = 1
		self._search_text = ""

		self.title("VetClinic")
		self.geometry("1200x800")
		self.minsize(960, 640)

		header = ctk.CTkFrame(self)
		header.pack(fill="x", padx=16, pady=(16, 8))

		self._status_label = ctk.CTkLabel(header, text="Não autenticado")
		self._status_label.pack(side="left", padx=8, pady=8)

		self._sign_out_btn = ctk.CTkButton(header, text="Sair", command=self._sign_out, width=80)
		self._sign_out_btn.pack(side="right", padx=8, pady=8)

		self._alert_frame = ctk.CTkFrame(self, fg_color="#f8d7da")
		self._alert_label = ctk.CTkLabel(self._alert_frame, text="", text_color="#842029")
		self._alert_label.pack(side="left", padx=12, pady=6)
		ctk.CTkButton(
			self._alert_frame,
			text="×",
			width=28,
			command=self._dismiss_alert,
		).pack(side="right", padx=6, pady=6)

		self._body = ctk.CTkFrame(self)
		self._body.pack(fill="both", expand=True, padx=16, pady=(0, 16))

		self._service.initialize()
		self.navigate(self._current_path)

	# Navigation

	def navigate(self, path: str):
		route, params, decision = self._service.navigate(path)

		if decision.kind == GUARD_LOADING:
			self._render_message("Verificando autenticação...")
			return

		if decision.kind == GUARD_REDIRECT:
			if decision.path == routes.LOGIN:
				self._login_from_path = decision.from_path
			logger.debug("Redirecting %s -> %s", path, decision.path)
			self.navigate(decision.path)
			return

		self._current_path = routes.normalize_path(path)
		self._refresh_header()
		self._render_route(route, params)

	def _render_route(self, route: Route, params: dict[str, str]):
		self._clear_body()

		if route.name == "login":
			self._render_login()
			return

		if not route.protected:
			self._render_message(route.title)
			return

		content = self._render_shell(route)

		if route.name in LIST_PAGES:
			self._render_list(content, route)
		elif route.name in SUMMARY_PAGES:
			self._render_summary(content, getattr(self._service, SUMMARY_PAGES[route.name]))
		elif route.name in DETAIL_PAGES:
			method = getattr(self._service, DETAIL_PAGES[route.name])
			self._render_summary(content, lambda: method(params["id"]))
		elif route.name == "appointment_detail":
			self._render_appointment(content, params["id"])
		elif route.name == "profile":
			self._render_profile(content)
		elif route is routes.NOT_FOUND:
			ctk.CTkLabel(content, text="Página não encontrada").pack(anchor="w", padx=12, pady=12)
		else:
			ctk.CTkLabel(content, text=route.title).pack(anchor="w", padx=12, pady=12)

	def _render_shell(self, route: Route):
		sidebar = ctk.CTkScrollableFrame(self._body, width=200)
		sidebar.pack(side="left", fill="y", padx=(0, 8), pady=8)
		for entry in self._service.menu():
			ctk.CTkButton(
				sidebar,
				text=entry.title,
				fg_color="transparent" if entry.name != route.name else None,
				anchor="w",
				command=lambda pattern=entry.pattern: self._open(pattern),
			).pack(fill="x", padx=4, pady=2)

		content = ctk.CTkFrame(self._body)
		content.pack(side="left", fill="both", expand=True, pady=8)
		ctk.CTkLabel(content, text=route.title, font=ctk.CTkFont(size=20, weight="bold")).pack(
			anchor="w", padx=12, pady=(12, 6)
		)
		return content

	def _open(self, path: str):
		self._page_number = 1
		self._search_text = ""
		self.navigate(path)

	# Pages

	def _render_login(self):
		frame = ctk.CTkFrame(self._body)
		frame.pack(padx=16, pady=64)

		ctk.CTkLabel(frame, text="Entrar", font=ctk.CTkFont(size=20, weight="bold")).pack(
			padx=24, pady=(24, 12)
		)
		email_entry = ctk.CTkEntry(frame, placeholder_text="Email", width=320)
		email_entry.pack(padx=24, pady=6)
		password_entry = ctk.CTkEntry(frame, placeholder_text="Senha", show="*", width=320)
		password_entry.pack(padx=24, pady=6)

		submit_btn = ctk.CTkButton(frame, text="Entrar")
		submit_btn.configure(
			command=lambda: self._sign_in(email_entry.get(), password_entry.get(), submit_btn)
		)
		submit_btn.pack(padx=24, pady=(12, 24))

	def _render_list(self, content, route: Route):
		method_name, columns = LIST_PAGES[route.name]

		toolbar = ctk.CTkFrame(content)
		toolbar.pack(fill="x", padx=12, pady=6)
		search_entry = ctk.CTkEntry(toolbar, placeholder_text="Buscar...", width=280)
		search_entry.insert(0, self._search_text)
		search_entry.pack(side="left", padx=6, pady=6)
		ctk.CTkButton(
			toolbar,
			text="Buscar",
			width=80,
			command=lambda: self._search(search_entry.get()),
		).pack(side="left", padx=6, pady=6)

		table = ctk.CTkScrollableFrame(content)
		table.pack(fill="both", expand=True, padx=12, pady=6)
		footer = ctk.CTkFrame(content)
		footer.pack(fill="x", padx=12, pady=(0, 12))
		ctk.CTkLabel(table, text="Carregando...").grid(row=0, column=0, sticky="w", padx=6, pady=4)

		params = {"page": self._page_number, "limit": PAGE_SIZE, "search": self._search_text}
		method = getattr(self._service, method_name)
		self._run_in_background(
			lambda: method(params),
			lambda page: self._fill_table(table, footer, columns, page),
		)

	def _fill_table(self, table, footer, columns, page: Page):
		for child in table.winfo_children():
			child.destroy()
		for child in footer.winfo_children():
			child.destroy()

		for column, (title, _key, _formatter) in enumerate(columns):
			ctk.CTkLabel(table, text=title, font=ctk.CTkFont(weight="bold")).grid(
				row=0, column=column, sticky="w", padx=6, pady=4
			)

		if not page.items:
			ctk.CTkLabel(table, text="Nenhum registro encontrado").grid(
				row=1, column=0, columnspan=len(columns), sticky="w", padx=6, pady=4
			)

		for row, item in enumerate(page.items, start=1):
			for column, (_title, key, formatter) in enumerate(columns):
				value = item.get(key)
				text = formatter(value) if formatter else (str(value) if value not in (None, "") else "-")
				ctk.CTkLabel(table, text=text).grid(row=row, column=column, sticky="w", padx=6, pady=2)

		info = get_pagination_info(page.pagination)
		if not info:
			return

		ctk.CTkLabel(
			footer,
			text=f"{info['start']}-{info['end']} de {info['total']}",
		).pack(side="left", padx=6, pady=6)
		next_btn = ctk.CTkButton(footer, text="Próxima", width=90, command=lambda: self._change_page(1))
		next_btn.pack(side="right", padx=6, pady=6)
		prev_btn = ctk.CTkButton(footer, text="Anterior", width=90, command=lambda: self._change_page(-1))
		prev_btn.pack(side="right", padx=6, pady=6)
		if not info["has_next"]:
			next_btn.configure(state="disabled")
		if not info["has_prev"]:
			prev_btn.configure(state="disabled")

	def _render_summary(self, content, call):
		output = ctk.CTkTextbox(content)
		output.pack(fill="both", expand=True, padx=12, pady=(6, 12))
		self._render_output(output, "Carregando...")
		self._run_in_background(
			call,
			lambda data: self._render_output(output, json.dumps(data, indent=2, ensure_ascii=False)),
			on_error=lambda text: self._render_output(output, text),
		)

	def _render_appointment(self, content, appointment_id: str):
		actions = ctk.CTkFrame(content)
		actions.pack(fill="x", padx=12, pady=6)
		output = ctk.CTkTextbox(content)
		output.pack(fill="both", expand=True, padx=12, pady=(6, 12))
		self._render_output(output, "Carregando...")
		self._run_in_background(
			lambda: self._service.get_appointment(appointment_id),
			lambda appointment: self._fill_appointment(actions, output, appointment),
			on_error=lambda text: self._render_output(output, text),
		)

	def _fill_appointment(self, actions, output, appointment):
		self._render_output(output, json.dumps(appointment, indent=2, ensure_ascii=False))
		if not isinstance(appointment, dict):
			return

		status = appointment.get("status")
		ctk.CTkLabel(actions, text=get_status_label(status)).pack(side="left", padx=6, pady=6)

		if can_cancel_appointment(status):
			ctk.CTkButton(
				actions,
				text=APPOINTMENT_ACTION_LABELS[APPOINTMENT_CANCELLED],
				width=100,
				fg_color="#dc3545",
				command=lambda: self._change_appointment(self._service.cancel_appointment, appointment),
			).pack(side="right", padx=6, pady=6)

		target = next_appointment_status(status)
		if target:
			ctk.CTkButton(
				actions,
				text=APPOINTMENT_ACTION_LABELS[target],
				width=100,
				command=lambda: self._change_appointment(self._service.advance_appointment, appointment),
			).pack(side="right", padx=6, pady=6)

	def _render_profile(self, content):
		session = self._service.session_snapshot()
		user = session.user or {}
		account = session.account or {}
		full_name = f"{user.get('firstName', '')} {user.get('lastName', '')}".strip()
		lines = [
			f"{get_initials(full_name)}  {full_name}",
			f"Email: {user.get('email', '-')}",
			f"Perfil: {user.get('role', '-')}",
			f"Clínica: {account.get('name', '-')}",
			f"Assinatura: {get_status_label(account.get('subscriptionStatus'))}",
		]
		for line in lines:
			ctk.CTkLabel(content, text=line).pack(anchor="w", padx=12, pady=2)

		ctk.CTkButton(
			content,
			text="Atualizar assinatura",
			command=self._refresh_subscription,
		).pack(anchor="w", padx=12, pady=12)

	# Actions

	def _sign_in(self, email: str, password: str, submit_btn):
		self._dismiss_alert()
		submit_btn.configure(state="disabled")
		from_path = self._login_from_path

		def worker():
			try:
				destination = self._service.login(email, password, from_path=from_path)
			except FormValidationError as exc:
				message = get_error_message(exc)
				self.after(0, lambda: (self._show_alert(message), submit_btn.configure(state="normal")))
				return
			except Exception as exc:
				message = get_error_message(exc)
				logger.debug("Login failed\n%s", traceback.format_exc())
				self.after(0, lambda: (self._show_alert(message), submit_btn.configure(state="normal")))
				return

			self._login_from_path = None
			self.after(0, lambda: self.navigate(destination))

		threading.Thread(target=worker, daemon=True).start()

	def _sign_out(self):
		def worker():
			self._service.logout()
			self.after(0, lambda: self.navigate(routes.LOGIN))

		threading.Thread(target=worker, daemon=True).start()

	def _refresh_subscription(self):
		self._run_in_background(
			self._service.refresh_subscription,
			lambda _snapshot: self.navigate(self._current_path),
		)

	def _change_appointment(self, action, appointment):
		self._run_in_background(
			lambda: action(appointment),
			lambda _result: self.navigate(self._current_path),
		)

	def _search(self, text: str):
		self._search_text = text.strip()
		self._page_number = 1
		self.navigate(self._current_path)

	def _change_page(self, delta: int):
		self._page_number = max(1, self._page_number + delta)
		self.navigate(self._current_path)

	# Plumbing

	def _run_in_background(self, call, on_success, on_error=None):
		def worker():
			try:
				result = call()
			except Exception as exc:
				message = get_error_message(exc)
				logger.debug("Background request failed\n%s", traceback.format_exc())
				self.after(0, lambda: self._show_alert(message))
				if on_error:
					self.after(0, lambda: on_error(message))
				return
			self.after(0, lambda: on_success(result))

		threading.Thread(target=worker, daemon=True).start()

	def _refresh_header(self):
		session = self._service.session_snapshot()
		if session.is_authenticated and session.user:
			user = session.user
			account = session.account or {}
			name = f"{user.get('firstName', '')} {user.get('lastName', '')}".strip() or user.get("email", "")
			self._status_label.configure(text=f"{name} | {account.get('name', '-')}")
			self._sign_out_btn.configure(state="normal")
			return

		self._status_label.configure(text="Não autenticado")
		self._sign_out_btn.configure(state="disabled")

	def _show_alert(self, message: str):
		self._alert_label.configure(text=message)
		self._alert_frame.pack(fill="x", padx=16, pady=(0, 8), before=self._body)

	def _dismiss_alert(self):
		self._alert_label.configure(text="")
		self._alert_frame.pack_forget()

	def _clear_body(self):
		for child in self._body.winfo_children():
			child.destroy()

	def _render_message(self, text: str):
		self._clear_body()
		ctk.CTkLabel(self._body, text=text).pack(padx=16, pady=32)

	@staticmethod
	def _render_output(text_widget: ctk.CTkTextbox, text: str):
		text_widget.delete("1.0", "end")
		text_widget.insert("1.0", text)


def build_service(settings: AppSettings) -> VetClinicService:
	http_client = HttpClient(settings)
	auth_api = AuthApi(settings, http_client)
	session = SessionStore(auth_api, FileStorage(settings.storage_path))
	http_client.set_token_provider(session.access_token)
	return VetClinicService(
		session=session,
		query_cache=QueryCache(
			stale_seconds=settings.query_stale_seconds,
			retry_attempts=settings.query_retry_attempts,
		),
		auth_api=auth_api,
		clients_api=ClientsApi(settings, http_client),
		animals_api=AnimalsApi(settings, http_client),
		appointments_api=AppointmentsApi(settings, http_client),
		dashboard_api=DashboardApi(settings, http_client),
		financial_api=FinancialApi(settings, http_client),
		notifications_api=NotificationsApi(settings, http_client),
		reports_api=ReportsApi(settings, http_client),
		reproductive_api=ReproductiveApi(settings, http_client),
		sanitary_api=SanitaryApi(settings, http_client),
		subscription_api=SubscriptionApi(settings, http_client),
		team_api=TeamApi(settings, http_client),
		request_timeout_seconds=settings.timeout_seconds,
	)


def run_app() -> None:
	configure_logging()
	ctk.set_appearance_mode("System")
	ctk.set_default_color_theme("blue")

	try:
		settings = AppSettings.from_env()
	except ConfigurationError as exc:
		app = ctk.CTk()
		app.title("VetClinic - Configuration Error")
		app.geometry("760x360")
		message = ctk.CTkTextbox(app)
		message.pack(fill="both", expand=True, padx=16, pady=16)
		message.insert(
			"1.0",
			"Configuration error. Fix the environment variables and restart:\n\n"
			f"{exc}\n\n"
			"Variables:\n"
			"- VET_API_URL\n"
			"- VET_TIMEOUT_SECONDS\n"
			"- VET_QUERY_RETRY_ATTEMPTS\n"
			"- VET_QUERY_STALE_SECONDS\n"
			"- VET_STORAGE_PATH\n",
		)
		app.mainloop()
		return

	configure_logging(settings.log_level)
	window = MainWindow(build_service(settings))
	window.mainloop()
