"""Form schemas for every create/edit screen.

Schemas accept the camelCase field names the backend uses. ``validate_form``
treats blank inputs as absent and returns per-field pt-BR messages; a form
with any message must not be submitted.
"""

from __future__ import annotations

from datetime import date, datetime
import re
from typing import Annotated, Any, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from vetclinic_client.enums import (
    ANIMAL_SEXES,
    BIRTH_TYPES,
    DOCUMENT_TYPES,
    HEALTH_RECORD_TYPES,
    HEAT_INTENSITIES,
    LOCATION_TYPES,
    PAYMENT_METHODS,
    PREGNANCY_RESULTS,
    REPRODUCTIVE_STATUSES,
)

MESSAGES = {
    "required": "Campo obrigatório",
    "email": "Email inválido",
    "password": "Senha deve ter pelo menos 6 caracteres",
    "password_match": "As senhas não conferem",
    "date": "Data inválida",
    "number": "Deve ser um número",
    "positive": "Deve ser um valor positivo",
    "choice": "Opção inválida",
}

MIN_PASSWORD_LENGTH = 6

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_email(value: str) -> str:
    if not _EMAIL_PATTERN.match(value):
        raise PydanticCustomError("email", MESSAGES["email"])
    return value


def _check_password(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise PydanticCustomError("password", MESSAGES["password"])
    return value


Email = Annotated[str, AfterValidator(_check_email)]
Password = Annotated[str, AfterValidator(_check_password)]


class FormSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


def _passwords_match(value: str, info: ValidationInfo, other: str) -> str:
    if other in info.data and value != info.data[other]:
        raise PydanticCustomError("password_match", MESSAGES["password_match"])
    return value


class LoginForm(FormSchema):
    email: Email
    password: str


class RegisterForm(FormSchema):
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    email: Email
    password: Password
    confirm_password: str
    account_name: str = Field(max_length=100)

    @field_validator("confirm_password")
    @classmethod
    def _confirm(cls, value: str, info: ValidationInfo) -> str:
        return _passwords_match(value, info, "password")


class ForgotPasswordForm(FormSchema):
    email: Email


class ResetPasswordForm(FormSchema):
    password: Password
    confirm_password: str

    @field_validator("confirm_password")
    @classmethod
    def _confirm(cls, value: str, info: ValidationInfo) -> str:
        return _passwords_match(value, info, "password")


class ChangePasswordForm(FormSchema):
    current_password: str
    new_password: Password
    confirm_password: str

    @field_validator("confirm_password")
    @classmethod
    def _confirm(cls, value: str, info: ValidationInfo) -> str:
        return _passwords_match(value, info, "new_password")


class ProfileForm(FormSchema):
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    phone: Optional[str] = Field(None, max_length=20)


class ClientForm(FormSchema):
    name: str = Field(max_length=200)
    email: Optional[Email] = None
    phone: Optional[str] = Field(None, max_length=20)
    whatsapp: Optional[str] = Field(None, max_length=20)
    document: Optional[str] = Field(None, max_length=20)
    document_type: Optional[Literal[DOCUMENT_TYPES]] = None
    address: Optional[str] = Field(None, max_length=300)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=50)
    zip_code: Optional[str] = Field(None, max_length=20)
    notes: Optional[str] = Field(None, max_length=1000)


class PropertyForm(FormSchema):
    name: str = Field(max_length=200)
    description: Optional[str] = Field(None, max_length=500)
    address: Optional[str] = Field(None, max_length=300)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=50)
    zip_code: Optional[str] = Field(None, max_length=20)
    total_area_hectares: Optional[float] = Field(None, ge=0)
    pasture_area_hectares: Optional[float] = Field(None, ge=0)


class AnimalForm(FormSchema):
    identifier: str = Field(max_length=100)
    name: Optional[str] = Field(None, max_length=100)
    species_id: str
    breed_id: Optional[str] = None
    sex: Literal[ANIMAL_SEXES]
    client_id: str
    property_id: Optional[str] = None
    date_of_birth: Optional[date] = None
    reproductive_status: Optional[Literal[REPRODUCTIVE_STATUSES]] = None
    coat_color: Optional[str] = Field(None, max_length=50)
    current_weight: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=1000)


class BatchForm(FormSchema):
    name: str = Field(max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    client_id: str
    property_id: Optional[str] = None
    species_id: Optional[str] = None


class AppointmentForm(FormSchema):
    client_id: str
    scheduled_date: datetime
    scheduled_end_date: Optional[datetime] = None
    location_type: Optional[Literal[LOCATION_TYPES]] = None
    location_notes: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = Field(None, max_length=1000)


class InvoiceForm(FormSchema):
    client_id: str
    issue_date: date
    due_date: date
    notes: Optional[str] = Field(None, max_length=1000)


class PaymentForm(FormSchema):
    amount: float = Field(gt=0)
    payment_date: date
    payment_method: Literal[PAYMENT_METHODS]
    reference: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=500)


class VaccinationApplyForm(FormSchema):
    animal_id: str
    vaccination_id: str
    application_date: date
    dose_number: Optional[int] = Field(None, ge=1)
    batch_number: Optional[str] = Field(None, max_length=50)


class HealthRecordForm(FormSchema):
    animal_id: str
    type: Literal[HEALTH_RECORD_TYPES]
    diagnosis: Optional[str] = Field(None, max_length=500)
    treatment: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = Field(None, max_length=1000)


class HeatRecordForm(FormSchema):
    animal_id: str
    detection_date: date
    intensity: Optional[Literal[HEAT_INTENSITIES]] = None
    notes: Optional[str] = Field(None, max_length=500)


class InseminationForm(FormSchema):
    animal_id: str
    insemination_date: date
    semen_batch: Optional[str] = Field(None, max_length=100)
    bull_id: Optional[str] = Field(None, max_length=100)
    technician: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=500)


class PregnancyCheckForm(FormSchema):
    animal_id: str
    check_date: date
    result: Literal[PREGNANCY_RESULTS]
    estimated_due_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=500)


class BirthRecordForm(FormSchema):
    animal_id: str
    birth_date: date
    number_of_offspring: int = Field(ge=1)
    birth_type: Optional[Literal[BIRTH_TYPES]] = None
    notes: Optional[str] = Field(None, max_length=500)


def _message_for(error: dict[str, Any]) -> str:
    error_type = error.get("type", "")
    ctx = error.get("ctx") or {}

    if error_type == "missing":
        return MESSAGES["required"]
    if error_type == "string_too_long":
        return f"Máximo de {ctx.get('max_length')} caracteres"
    if error_type == "string_too_short":
        return f"Mínimo de {ctx.get('min_length')} caracteres"
    if error_type == "greater_than_equal":
        return f"Valor mínimo: {ctx.get('ge')}"
    if error_type == "less_than_equal":
        return f"Valor máximo: {ctx.get('le')}"
    if error_type == "greater_than":
        return MESSAGES["positive"]
    if error_type == "literal_error":
        return MESSAGES["choice"]
    if error_type.startswith(("float_", "int_")):
        return MESSAGES["number"]
    if error_type.startswith(("date", "datetime")):
        return MESSAGES["date"]
    return str(error.get("msg") or MESSAGES["required"])


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_form(
    schema: type[FormSchema],
    data: dict[str, Any] | None,
) -> tuple[dict[str, Any] | None, dict[str, str]]:
    """Validate raw form input.

    Returns ``(cleaned, {})`` on success, where ``cleaned`` is JSON-ready and
    camelCased, or ``(None, errors)`` mapping each failing field to its first
    message.
    """
    values = {key: value for key, value in (data or {}).items() if not _blank(value)}
    try:
        model = schema.model_validate(values)
    except ValidationError as exc:
        errors: dict[str, str] = {}
        for error in exc.errors():
            loc = error.get("loc") or ("__root__",)
            field = str(loc[0])
            errors.setdefault(field, _message_for(error))
        return None, errors

    return model.model_dump(by_alias=True, exclude_none=True, mode="json"), {}
