from datetime import date

import pytest

from backend.intake.services.registration.handler import RegistrationInput
from backend.intake.services.registration.validators import (
    ErrorKind,
    age_check,
    calculate_age,
    check_email,
    check_method,
    check_names,
    check_phone,
    check_required_fields,
    is_valid_email,
    is_valid_name,
    normalize_phone,
    parse_date_of_birth,
)
from tests.factories import valid_form

TODAY = date(2026, 10, 19)


def registration(**overrides):
    return RegistrationInput.from_form(valid_form(**overrides))


def test_method_must_be_post():
    assert check_method('POST').ok
    result = check_method('GET')
    assert not result.ok
    assert result.kind is ErrorKind.INVALID_METHOD
    assert result.reason == 'Invalid request method'


def test_required_fields_pass_for_complete_form():
    assert check_required_fields(registration(), TODAY).ok


def test_required_fields_fail_without_terms():
    form = valid_form()
    del form['terms']
    result = check_required_fields(RegistrationInput.from_form(form), TODAY)
    assert result.kind is ErrorKind.MISSING_REQUIRED_FIELD


def test_whitespace_only_field_counts_as_missing():
    result = check_required_fields(registration(state='   '), TODAY)
    assert result.kind is ErrorKind.MISSING_REQUIRED_FIELD


@pytest.mark.parametrize('email,expected', [
    ('a@b.co', True),
    ('jane.doe@example.com', True),
    ('not-an-email', False),
    ('jane@localhost', False),
    ('jane doe@example.com', False),
    ('@example.com', False),
])
def test_email_format(email, expected):
    assert is_valid_email(email) is expected


def test_email_check_reason():
    result = check_email(registration(email='not-an-email'), TODAY)
    assert result.kind is ErrorKind.INVALID_EMAIL
    assert result.reason == 'Invalid email format'


def test_normalize_phone_drops_separators():
    assert normalize_phone('(555) 123-4567') == '5551234567'


@pytest.mark.parametrize('phone,ok', [
    ('(555) 123-4567', True),
    ('+1 555 123 4567', True),
    ('123', False),
    ('555-123-456', False),
    ('555123456x', False),
])
def test_phone_format(phone, ok):
    assert check_phone(registration(phone=phone), TODAY).ok is ok


def test_parse_date_of_birth():
    assert parse_date_of_birth('1990-05-15') == date(1990, 5, 15)
    assert parse_date_of_birth('May 15, 1990') == date(1990, 5, 15)
    assert parse_date_of_birth('banana') is None
    assert parse_date_of_birth('1990-02-30') is None


def test_calculate_age_counts_completed_birthdays():
    assert calculate_age(date(2008, 10, 19), TODAY) == 18
    assert calculate_age(date(2008, 10, 20), TODAY) == 17
    assert calculate_age(date(2008, 11, 1), TODAY) == 17
    assert calculate_age(date(2008, 9, 30), TODAY) == 18


def test_age_check_one_day_short_of_eighteen():
    result = age_check(18)(registration(dob='2008-10-20'), TODAY)
    assert result.kind is ErrorKind.UNDERAGE
    assert result.reason == 'You must be at least 18 years old'


def test_age_check_exactly_eighteen():
    assert age_check(18)(registration(dob='2008-10-19'), TODAY).ok


def test_age_check_honours_minimum():
    assert not age_check(21)(registration(dob='2006-01-01'), TODAY).ok


@pytest.mark.parametrize('value,ok', [
    ('Mary-Jane O&#39;Brien', True),
    ('Jo', True),
    ('J', False),
    ('John123', False),
    ('&lt;b&gt;', False),
])
def test_is_valid_name(value, ok):
    assert is_valid_name(value) is ok


def test_name_checks_report_which_field_failed():
    assert check_names(registration(firstName='John123'), TODAY).reason == 'Invalid first name format'
    assert check_names(registration(lastName='D'), TODAY).reason == 'Invalid last name format'
    result = check_names(registration(city='Area 51'), TODAY)
    assert result.kind is ErrorKind.INVALID_CITY_FORMAT
    assert result.reason == 'Invalid city format'


def test_apostrophe_name_passes_after_sanitation():
    assert check_names(registration(firstName="Mary-Jane O'Brien"), TODAY).ok


@pytest.mark.parametrize('email', ['a@b.co\n', 'a@b.co ', '\na@b.co'])
def test_email_with_surrounding_whitespace_is_rejected(email):
    assert is_valid_email(email) is False


def test_name_pattern_matches_whole_value():
    assert is_valid_name('Jane1') is False


def test_age_check_rejects_unparseable_date():
    result = age_check(18)(registration(dob='banana'), TODAY)
    assert result.kind is ErrorKind.INVALID_DATE_OF_BIRTH
    assert result.reason == 'Invalid date of birth'
