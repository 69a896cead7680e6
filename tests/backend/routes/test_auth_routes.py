import uuid

import pytest

from backend.auth.google import ExternalIdentity
from backend.auth.roles import Role
from backend.routes import auth_routes

PASSWORD = 'correct-password'


def _bearer(token: str) -> dict[str, str]:
    return {'Authorization': f'Bearer {token}'}


def test_login_returns_token_and_profile_id(client, make_shelter) -> None:
    shelter = make_shelter(email='shelter1@x.com')

    response = client.post('/api/v1/auth/login', json={'email': 'shelter1@x.com', 'password': PASSWORD})

    body = response.json()
    assert response.status_code == 200
    assert body['status'] == 200
    assert body['message'] == 'Shelter logged in successfully!'
    assert body['data'] == str(shelter.id)
    assert body['token']


def test_login_failures_share_one_response(client, make_adopter) -> None:
    make_adopter(email='adopter1@x.com')

    wrong_password = client.post('/api/v1/auth/login', json={'email': 'adopter1@x.com', 'password': 'nope'})
    unknown_email = client.post('/api/v1/auth/login', json={'email': 'ghost@x.com', 'password': PASSWORD})

    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json() == {
        'status': 400,
        'message': 'Email or password not correct',
    }


def test_login_with_missing_fields_is_a_bad_request(client) -> None:
    response = client.post('/api/v1/auth/login', json={'email': 'adopter1@x.com'})

    assert response.status_code == 400
    assert response.json()['message'] == ['"password" Field required']


def test_profile_returns_logged_in_adopter(client, make_adopter) -> None:
    adopter = make_adopter(email='adopter1@x.com')
    token = client.post('/api/v1/auth/login', json={'email': 'adopter1@x.com', 'password': PASSWORD}).json()['token']

    response = client.get('/api/v1/auth/profile', headers=_bearer(token))

    body = response.json()
    assert response.status_code == 200
    assert body['message'] == 'Profile retrieved successfully!'
    assert body['data']['id'] == str(adopter.id)
    assert body['data']['email'] == 'adopter1@x.com'
    assert 'password' not in body['data']


def test_profile_requires_token(client) -> None:
    response = client.get('/api/v1/auth/profile')

    assert response.status_code == 401
    assert response.json() == {'status': 401, 'message': 'Unauthorized'}


def test_profile_rejects_admin_with_teapot(client, db, token_store) -> None:
    token = token_store.issue(db, uuid.uuid4(), Role.ADMIN)

    response = client.get('/api/v1/auth/profile', headers=_bearer(token))

    assert response.status_code == 418
    assert 'admin' in response.json()['message']


def test_profile_for_deleted_profile_is_not_found(client, db, token_store) -> None:
    missing_id = uuid.uuid4()
    token = token_store.issue(db, missing_id, Role.ADOPTER)

    response = client.get('/api/v1/auth/profile', headers=_bearer(token))

    assert response.status_code == 404
    assert response.json()['message'] == f'Adopter with id {missing_id} not found.'


def test_logout_twice_succeeds_and_revokes(client, make_adopter) -> None:
    make_adopter(email='adopter1@x.com')
    token = client.post('/api/v1/auth/login', json={'email': 'adopter1@x.com', 'password': PASSWORD}).json()['token']

    first = client.post('/api/v1/auth/logout', headers=_bearer(token))
    second = client.post('/api/v1/auth/logout', headers=_bearer(token))

    assert first.status_code == second.status_code == 200
    assert second.json() == {'status': 200, 'message': 'User logged out successfully!'}
    assert client.get('/api/v1/auth/profile', headers=_bearer(token)).status_code == 401


def test_logout_without_token_still_succeeds(client) -> None:
    response = client.post('/api/v1/auth/logout')

    assert response.status_code == 200


def test_google_login_for_unregistered_user_returns_identity(client, monkeypatch: pytest.MonkeyPatch) -> None:
    identity = ExternalIdentity(google_id='google-42', email='ada@gmail.com', first_name='Ada', last_name='Lovelace')
    monkeypatch.setattr(auth_routes.service.google, 'resolve_external_identity', lambda token: identity)

    response = client.post('/api/v1/auth/google', json={'token': 'id-token'})

    body = response.json()
    assert response.status_code == 200
    assert body['message'] == 'User registered with google'
    assert 'token' not in body
    assert body['data'] == {
        'google_id': 'google-42',
        'email': 'ada@gmail.com',
        'first_name': 'Ada',
        'last_name': 'Lovelace',
        'picture': None,
    }


def test_google_login_for_registered_adopter_returns_token(client, make_adopter, monkeypatch: pytest.MonkeyPatch) -> None:
    make_adopter(email='ada@gmail.com', password=None, google_id='google-42')
    identity = ExternalIdentity(google_id='google-42', email='ada@gmail.com', first_name='Ada', last_name='Lovelace')
    monkeypatch.setattr(auth_routes.service.google, 'resolve_external_identity', lambda token: identity)

    response = client.post('/api/v1/auth/google', json={'token': 'id-token'})

    body = response.json()
    assert response.status_code == 200
    assert body['message'] == 'User logged in successfully with google'
    assert client.get('/api/v1/auth/profile', headers=_bearer(body['token'])).status_code == 200


def test_google_login_without_token_is_rejected(client, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(auth_routes.service.google, 'resolve_external_identity', lambda token: None)

    response = client.post('/api/v1/auth/google', json={})

    assert response.status_code == 401
    assert response.json()['message'] == 'Google token not valid or not provided'


def test_verify_reports_auth_service_up(client) -> None:
    response = client.get('/api/v1/auth/verify')

    assert response.status_code == 200
    assert response.json() == {'status': 200, 'message': 'Auth service is up'}


def test_unknown_endpoint_uses_envelope(client) -> None:
    response = client.get('/api/v1/kittens')

    assert response.status_code == 404
    assert response.json() == {'status': 404, 'message': 'Endpoint not found, check if the URL is correct'}
