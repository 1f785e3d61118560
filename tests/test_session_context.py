from app.core.session_context import ROLE_ADMIN, SessionContext
from app.models import User


def _user(role: str = "cleaner") -> User:
    return User(email=f"{role}@example.com", display_name=role, role=role, status="active")


def test_listeners_hear_sign_in_and_sign_out():
    context = SessionContext()
    events = []
    context.subscribe(lambda ctx: events.append(ctx.is_authenticated))

    context.sign_in(_user())
    context.sign_out()

    assert events == [True, False]
    assert context.user is None


def test_unsubscribe_stops_notifications():
    context = SessionContext()
    events = []
    unsubscribe = context.subscribe(lambda ctx: events.append(ctx.role))

    context.sign_in(_user(ROLE_ADMIN))
    unsubscribe()
    unsubscribe()
    context.sign_out()

    assert events == [ROLE_ADMIN]


def test_sign_out_when_signed_out_does_not_notify():
    context = SessionContext()
    events = []
    context.subscribe(events.append)

    context.sign_out()

    assert events == []


def test_role_helpers():
    assert SessionContext().is_admin is False
    assert SessionContext(_user(ROLE_ADMIN)).is_admin is True
    assert SessionContext(_user()).role == "cleaner"
