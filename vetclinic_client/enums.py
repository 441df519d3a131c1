from __future__ import annotations

ROLE_OWNER = "owner"
ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLE_VIEWER = "viewer"
# Roles an owner or admin can hand out to team members; ownership is never assigned.
TEAM_ROLES = (ROLE_ADMIN, "veterinarian", "assistant", "receptionist", ROLE_USER, ROLE_VIEWER)

# Roles that hold every permission implicitly.
PRIVILEGED_ROLES = frozenset({ROLE_OWNER, ROLE_ADMIN})

SUBSCRIPTION_TRIALING = "trialing"
SUBSCRIPTION_ACTIVE = "active"
ACTIVE_SUBSCRIPTION_STATUSES = frozenset({SUBSCRIPTION_ACTIVE, SUBSCRIPTION_TRIALING})

ANIMAL_STATUSES = ("active", "sold", "deceased", "transferred")
ANIMAL_SEXES = ("male", "female")
REPRODUCTIVE_STATUSES = ("open", "pregnant", "lactating", "dry")
PAYMENT_METHODS = ("cash", "card", "pix", "bank_transfer", "check")
HEALTH_RECORD_TYPES = ("treatment", "deworming", "examination", "surgery")
DOCUMENT_TYPES = ("cpf", "cnpj", "other")
LOCATION_TYPES = ("property", "clinic", "other")
HEAT_INTENSITIES = ("weak", "moderate", "strong")
PREGNANCY_RESULTS = ("positive", "negative", "inconclusive")
BIRTH_TYPES = ("normal", "cesarean", "assisted")

APPOINTMENT_SCHEDULED = "scheduled"
APPOINTMENT_CONFIRMED = "confirmed"
APPOINTMENT_IN_PROGRESS = "in_progress"
APPOINTMENT_COMPLETED = "completed"
APPOINTMENT_CANCELLED = "cancelled"
APPOINTMENT_STATUSES = (
    APPOINTMENT_SCHEDULED,
    APPOINTMENT_CONFIRMED,
    APPOINTMENT_IN_PROGRESS,
    APPOINTMENT_COMPLETED,
    APPOINTMENT_CANCELLED,
)

# An appointment moves forward one step at a time; completed and cancelled are final.
APPOINTMENT_FLOW = {
    APPOINTMENT_SCHEDULED: APPOINTMENT_CONFIRMED,
    APPOINTMENT_CONFIRMED: APPOINTMENT_IN_PROGRESS,
    APPOINTMENT_IN_PROGRESS: APPOINTMENT_COMPLETED,
}

# Button text for moving into a status.
APPOINTMENT_ACTION_LABELS = {
    APPOINTMENT_CONFIRMED: "Confirmar",
    APPOINTMENT_IN_PROGRESS: "Iniciar",
    APPOINTMENT_COMPLETED: "Concluir",
    APPOINTMENT_CANCELLED: "Cancelar",
}


def next_appointment_status(status: str | None) -> str | None:
    return APPOINTMENT_FLOW.get(status)


def can_cancel_appointment(status: str | None) -> bool:
    return status in APPOINTMENT_STATUSES and status not in (APPOINTMENT_COMPLETED, APPOINTMENT_CANCELLED)


STATUS_COLORS = {
    # animal
    "active": "success",
    "sold": "info",
    "deceased": "secondary",
    "transferred": "warning",
    # appointment
    "scheduled": "primary",
    "confirmed": "info",
    "in_progress": "warning",
    "completed": "success",
    "cancelled": "danger",
    # invoice
    "draft": "secondary",
    "sent": "primary",
    "paid": "success",
    "partial": "warning",
    "overdue": "danger",
    # subscription
    "trialing": "info",
    "past_due": "warning",
    "canceled": "danger",
    "unpaid": "danger",
    # campaign
    "planned": "secondary",
    # reproductive
    "open": "secondary",
    "pregnant": "success",
    "lactating": "info",
    "dry": "warning",
}

STATUS_LABELS = {
    "active": "Ativo",
    "sold": "Vendido",
    "deceased": "Falecido",
    "transferred": "Transferido",
    "scheduled": "Agendado",
    "confirmed": "Confirmado",
    "in_progress": "Em Andamento",
    "completed": "Concluído",
    "cancelled": "Cancelado",
    "draft": "Rascunho",
    "sent": "Enviada",
    "paid": "Paga",
    "partial": "Parcial",
    "overdue": "Vencida",
    "trialing": "Período de Teste",
    "past_due": "Pagamento Atrasado",
    "canceled": "Cancelada",
    "unpaid": "Não Paga",
    "planned": "Planejada",
    "open": "Aberta",
    "pregnant": "Prenhe",
    "lactating": "Lactante",
    "dry": "Seca",
    "male": "Macho",
    "female": "Fêmea",
}
