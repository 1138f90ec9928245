"""
Configuración compartida para tests pytest
"""
import os

# Debe definirse antes de importar la app: el engine y el hash se crean al importar
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db

# Importar todos los modelos para que SQLAlchemy pueda resolver las relaciones
from app.models.user import User
from app.models.item import Item
from app.models.booking import Booking, BookingMessage
from app.enums.item import ItemCategory, ItemStatus
from app.services.auth import create_user_token, get_password_hash

PASSWORD = "secret123"

# Base de datos en memoria para tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    """Crear base de datos de test y limpiarla después"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def override_get_db(db):
    """Override de get_db para tests"""
    def _get_db():
        try:
            yield db
        finally:
            pass
    return _get_db


@pytest.fixture
def client(override_get_db):
    """Cliente HTTP contra la app con la base de datos de test"""
    from app.main import app

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _make_user(db, first_name, last_name, email):
    user = User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone="0600000000",
        hashed_password=get_password_hash(PASSWORD),
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def owner(db):
    """Propietario del objeto"""
    return _make_user(db, "Karim", "Owner", "owner@example.com")


@pytest.fixture
def renter(db):
    """Locatario"""
    return _make_user(db, "Salma", "Renter", "renter@example.com")


@pytest.fixture
def stranger(db):
    """Usuario ajeno a la reserva"""
    return _make_user(db, "Youssef", "Other", "other@example.com")


@pytest.fixture
def make_item(db):
    """Fábrica de objetos del catálogo"""
    def _make_item(owner, **overrides):
        data = dict(
            title="Perceuse Bosch",
            description="Perceuse à percussion 800W",
            category=ItemCategory.OUTILS,
            price_per_day=100.0,
            deposit=500.0,
            address="12 rue Atlas",
            city="Casablanca",
            status=ItemStatus.ACTIVE,
            images=[],
            features=[],
        )
        data.update(overrides)
        item = Item(owner_id=owner.id, **data)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item
    return _make_item


@pytest.fixture
def item(make_item, owner):
    """Objeto activo a 100 MAD por día"""
    return make_item(owner)


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_user_token(user)}"}
    return _headers


@pytest.fixture
def password():
    """Contraseña en claro de los usuarios de test"""
    return PASSWORD
