import pytest

from stepflow.client.auth import AuthError, AuthGate, is_private_route


@pytest.fixture
def gate():
    return AuthGate()


def test_sign_up_signs_in_with_lowercased_email(gate):
    user = gate.sign_up("Ada@Example.com", "secret")
    assert user.uid == "ada@example.com"
    assert user.display_name == "ada"
    assert gate.current_user == user


def test_sign_up_twice_fails(gate):
    gate.sign_up("ada@example.com", "secret")
    with pytest.raises(AuthError, match="Email already in use"):
        gate.sign_up("ADA@example.com", "other")


def test_sign_in_errors(gate):
    with pytest.raises(AuthError, match="User not found"):
        gate.sign_in("ghost@example.com", "x")
    gate.sign_up("ada@example.com", "secret")
    gate.sign_out()
    with pytest.raises(AuthError, match="Incorrect password"):
        gate.sign_in("ada@example.com", "wrong")
    assert gate.sign_in("ada@example.com", "secret").email == "ada@example.com"


def test_listeners_are_notified_until_unsubscribed(gate):
    seen = []
    unsubscribe = gate.on_auth_change(seen.append)
    gate.sign_up("ada@example.com", "secret")
    gate.sign_out()
    unsubscribe()
    gate.sign_in("ada@example.com", "secret")

    assert [u.email if u else None for u in seen] == [None, "ada@example.com", None]


def test_require_user(gate):
    with pytest.raises(AuthError):
        gate.require_user()
    gate.sign_up("ada@example.com", "secret")
    assert gate.require_user().uid == "ada@example.com"


@pytest.mark.parametrize("path", ["/", "/create", "/edit/3", "/history"])
def test_private_routes_redirect_to_login_when_signed_out(gate, path):
    assert is_private_route(path)
    assert gate.resolve_route(path) == "/login"


def test_route_resolution_when_signed_in(gate):
    gate.sign_up("ada@example.com", "secret")
    assert gate.resolve_route("/edit/3") == "/edit/3"
    assert gate.resolve_route("/login") == "/"


def test_public_routes_pass_through(gate):
    assert gate.resolve_route("/login") == "/login"
    assert gate.resolve_route("/about") == "/about"
