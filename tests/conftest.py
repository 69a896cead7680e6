import os

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')
os.environ.setdefault('JWT_SECRET_KEY', 'test-secret-key-for-testing-only')

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from backend.auth.dependencies import get_token_store  # noqa: E402
from backend.auth.passwords import hash_password  # noqa: E402
from backend.auth.tokens import TokenStore  # noqa: E402
from backend.core.config import TokenSettings  # noqa: E402
from backend.database import Base, get_db  # noqa: E402
from backend.main import app  # noqa: E402
from backend.models.adopter import Adopter  # noqa: E402
from backend.models.shelter import Shelter  # noqa: E402
from backend.models.user import User  # noqa: E402

TEST_PASSWORD = 'correct-password'
TEST_TOKEN_SETTINGS = TokenSettings(
    secret_key='test-secret-key-for-testing-only',
    algorithm='HS256',
    expires_minutes=60,
)


@pytest.fixture
def db():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def token_store() -> TokenStore:
    return TokenStore(TEST_TOKEN_SETTINGS)


@pytest.fixture
def client(db, token_store):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_store] = lambda: token_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_adopter(db):
    def factory(
        email: str = 'adopter1@x.com',
        password: str | None = TEST_PASSWORD,
        google_id: str | None = None,
    ) -> Adopter:
        user = User(email=email, password=hash_password(password) if password else None)
        adopter = Adopter(
            user=user,
            first_name='Ada',
            last_name='Lovelace',
            description='Quiet home, big garden.',
            age=34,
            house_type='house',
            has_pets=False,
            has_children=True,
            time_at_home=6,
            latitude=40.4168,
            longitude=-3.7038,
            address='Calle Mayor 1',
            google_id=google_id,
        )
        db.add(user)
        db.commit()
        db.refresh(adopter)
        return adopter

    return factory


@pytest.fixture
def make_shelter(db):
    def factory(email: str = 'shelter1@x.com', password: str = TEST_PASSWORD, name: str = 'Happy Tails') -> Shelter:
        user = User(email=email, password=hash_password(password))
        shelter = Shelter(
            user=user,
            name=name,
            description='Dogs and cats.',
            phone='+34 600 000 000',
            address='Avenida del Puerto 12',
            latitude=39.4699,
            longitude=-0.3763,
        )
        db.add(user)
        db.commit()
        db.refresh(shelter)
        return shelter

    return factory
