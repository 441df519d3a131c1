from vetclinic_client.validators import (
    AnimalForm,
    AppointmentForm,
    ChangePasswordForm,
    ClientForm,
    LoginForm,
    PaymentForm,
    PropertyForm,
    RegisterForm,
    validate_form,
)


def test_login_requires_both_fields():
    cleaned, errors = validate_form(LoginForm, {"email": "", "password": "  "})

    assert cleaned is None
    assert errors == {"email": "Campo obrigatório", "password": "Campo obrigatório"}


def test_login_rejects_bad_email():
    _, errors = validate_form(LoginForm, {"email": "not-an-email", "password": "pw"})

    assert errors == {"email": "Email inválido"}


def test_login_accepts_and_strips():
    cleaned, errors = validate_form(LoginForm, {"email": " a@b.com ", "password": "pw"})

    assert errors == {}
    assert cleaned == {"email": "a@b.com", "password": "pw"}


def test_register_password_rules():
    data = {
        "firstName": "Ana",
        "lastName": "Souza",
        "email": "a@b.com",
        "password": "123",
        "confirmPassword": "123",
        "accountName": "Clínica",
    }
    _, errors = validate_form(RegisterForm, data)
    assert errors == {"password": "Senha deve ter pelo menos 6 caracteres"}

    data.update(password="123456", confirmPassword="654321")
    _, errors = validate_form(RegisterForm, data)
    assert errors == {"confirmPassword": "As senhas não conferem"}

    data.update(confirmPassword="123456")
    cleaned, errors = validate_form(RegisterForm, data)
    assert errors == {}
    assert cleaned["accountName"] == "Clínica"


def test_change_password_compares_against_new_password():
    _, errors = validate_form(
        ChangePasswordForm,
        {"currentPassword": "old", "newPassword": "abcdef", "confirmPassword": "abcdeg"},
    )

    assert errors == {"confirmPassword": "As senhas não conferem"}


def test_max_length_message():
    _, errors = validate_form(ClientForm, {"name": "x" * 201})

    assert errors == {"name": "Máximo de 200 caracteres"}


def test_optional_email_may_be_blank_but_not_invalid():
    cleaned, errors = validate_form(ClientForm, {"name": "Fazenda Sol", "email": ""})
    assert errors == {}
    assert cleaned == {"name": "Fazenda Sol"}

    _, errors = validate_form(ClientForm, {"name": "Fazenda Sol", "email": "x@"})
    assert errors == {"email": "Email inválido"}


def test_choice_and_number_messages():
    _, errors = validate_form(
        AnimalForm,
        {
            "identifier": "BR-001",
            "speciesId": "s-1",
            "sex": "other",
            "clientId": "c-1",
            "currentWeight": "heavy",
        },
    )

    assert errors == {"sex": "Opção inválida", "currentWeight": "Deve ser um número"}


def test_minimum_value_message():
    _, errors = validate_form(PropertyForm, {"name": "Sítio", "totalAreaHectares": -1})

    assert errors == {"totalAreaHectares": "Valor mínimo: 0"}


def test_payment_amount_must_be_positive():
    _, errors = validate_form(
        PaymentForm,
        {"amount": 0, "paymentDate": "2024-05-01", "paymentMethod": "pix"},
    )

    assert errors == {"amount": "Deve ser um valor positivo"}


def test_dates_are_parsed_and_serialized():
    cleaned, errors = validate_form(
        AppointmentForm,
        {"clientId": "c-1", "scheduledDate": "2024-05-01T09:30:00", "locationType": "clinic"},
    )

    assert errors == {}
    assert cleaned == {
        "clientId": "c-1",
        "scheduledDate": "2024-05-01T09:30:00",
        "locationType": "clinic",
    }


def test_invalid_date_message():
    _, errors = validate_form(AppointmentForm, {"clientId": "c-1", "scheduledDate": "amanhã"})

    assert errors == {"scheduledDate": "Data inválida"}


def test_choice_fields_follow_enumerations():
    cleaned, errors = validate_form(
        AnimalForm,
        {
            "identifier": "BR-002",
            "speciesId": "s-1",
            "sex": "female",
            "clientId": "c-1",
            "reproductiveStatus": "pregnant",
        },
    )
    assert errors == {}
    assert cleaned["reproductiveStatus"] == "pregnant"

    _, errors = validate_form(
        PaymentForm,
        {"amount": "10", "paymentDate": "2024-05-01", "paymentMethod": "bitcoin"},
    )
    assert errors == {"paymentMethod": "Opção inválida"}
