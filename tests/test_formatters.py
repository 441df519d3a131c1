from datetime import date, datetime

import pytest

from vetclinic_client import formatters


def test_dates():
    assert formatters.format_date("2024-03-05") == "05/03/2024"
    assert formatters.format_date(date(2024, 3, 5)) == "05/03/2024"
    assert formatters.format_datetime("2024-03-05T14:07:00") == "05/03/2024 14:07"
    assert formatters.format_time(datetime(2024, 3, 5, 8, 30)) == "08:30"
    assert formatters.format_date("2024-03-05T10:00:00Z") == "05/03/2024"


@pytest.mark.parametrize("value", [None, "", "not a date"])
def test_missing_dates_render_dash(value):
    assert formatters.format_date(value) == "-"


@pytest.mark.parametrize(
    "target, expected",
    [
        (date(2024, 6, 10), "Hoje"),
        (date(2024, 6, 11), "Amanhã"),
        (date(2024, 6, 9), "Ontem"),
        (date(2024, 6, 15), "Em 5 dias"),
        (date(2024, 6, 3), "Há 7 dias"),
        (date(2024, 6, 20), "20/06/2024"),
    ],
)
def test_relative_dates(target, expected):
    assert formatters.format_relative_date(target, today=date(2024, 6, 10)) == expected


def test_numbers_and_currency():
    assert formatters.format_number(1234567) == "1.234.567"
    assert formatters.format_number(1234.5, 2) == "1.234,50"
    assert formatters.format_currency(1234.56) == "R$ 1.234,56"
    assert formatters.format_currency(-10) == "-R$ 10,00"
    assert formatters.format_currency(None) == "-"
    assert formatters.format_percent(12.345) == "12,3%"
    assert formatters.format_weight(450) == "450,0 kg"
    assert formatters.format_area(12.5) == "12,50 ha"


def test_phone_and_documents():
    assert formatters.format_phone("11987654321") == "(11) 98765-4321"
    assert formatters.format_phone("(11) 3456-7890") == "(11) 3456-7890"
    assert formatters.format_phone("123") == "123"
    assert formatters.format_phone(None) == "-"
    assert formatters.format_document("12345678901") == "123.456.789-01"
    assert formatters.format_document("12345678000199") == "12.345.678/0001-99"
    assert formatters.format_document("ABC") == "ABC"


def test_whatsapp_link():
    assert formatters.get_whatsapp_link("(11) 98765-4321") == "https://wa.me/5511987654321"
    assert (
        formatters.get_whatsapp_link("5511987654321", "Olá, tudo bem?")
        == "https://wa.me/5511987654321?text=Ol%C3%A1%2C%20tudo%20bem%3F"
    )
    assert formatters.get_whatsapp_link("") is None


def test_text_helpers():
    assert formatters.truncate("abcdef", 3) == "abc..."
    assert formatters.truncate("abc", 3) == "abc"
    assert formatters.truncate(None) == ""
    assert formatters.get_initials("ana maria souza") == "AS"
    assert formatters.get_initials("Ana") == "A"
    assert formatters.get_initials("  ") == ""
