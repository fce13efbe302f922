from backend.intake.extensions import mail
from backend.intake.services.registration.confirmation_email import (
    build_confirmation_message,
    send_confirmation_email,
)
from tests.factories import valid_form


def test_build_confirmation_message(app):
    with app.app_context():
        msg = build_confirmation_message('jane@example.com', 'Jane Doe')

    assert msg.subject == 'Registration Confirmation'
    assert msg.recipients == ['jane@example.com']
    assert msg.sender == 'noreply@registration.com'
    assert msg.body.startswith('Hello Jane Doe,')
    assert 'Registration Team' in msg.body


def test_send_is_disabled_by_default(app):
    with app.app_context():
        with mail.record_messages() as outbox:
            assert send_confirmation_email('jane@example.com', 'Jane Doe') is False
    assert outbox == []


def test_send_when_enabled(app):
    app.config['CONFIRMATION_EMAIL_ENABLED'] = True
    with app.app_context():
        with mail.record_messages() as outbox:
            assert send_confirmation_email('jane@example.com', 'Jane Doe') is True
    assert len(outbox) == 1
    assert outbox[0].recipients == ['jane@example.com']


def test_registration_does_not_send_email(client):
    with mail.record_messages() as outbox:
        response = client.post('/api/registration', data=valid_form())
    assert response.status_code == 200
    assert outbox == []
