"""
Fixtures: banco SQLite em memória por teste, usuários, tokens e cliente HTTP
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
import httpx
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from app.core import AuthSession, create_access_token, get_password_hash
from app.core.rate_limit import limiter
from app.database import Base, get_db
from app.main import app
from app.models import User, Client, Vehicle, Bank
from app.models.enums import UserRole
from app.services.accounts import account_creation_limiter

PASSWORD = "senha123"


@pytest.fixture(autouse=True)
def reset_limiters():
    limiter.reset()
    account_creation_limiter.reset()
    yield
    limiter.reset()
    account_creation_limiter.reset()


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """Cliente HTTP contra a aplicação, com o banco de teste"""
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()


async def _create_user(db, email: str, role: UserRole, name: str) -> User:
    user = User(
        email=email,
        hashed_password=get_password_hash(PASSWORD),
        name=name,
        role=role.value,
    )
    db.add(user)
    await db.commit()
    return user


def _session_for(user: User) -> AuthSession:
    return AuthSession(user_id=user.id, email=user.email, role=UserRole(user.role), name=user.name)


def _auth_headers(user: User) -> dict:
    token = create_access_token({"sub": user.id, "email": user.email, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def admin_user(db):
    return await _create_user(db, "admin@loja.com.br", UserRole.ADMIN, "Admin da Loja")


@pytest.fixture
async def vendor_user(db):
    return await _create_user(db, "vendedor@loja.com.br", UserRole.VENDEDOR, "Carlos Vendedor")


@pytest.fixture
async def other_vendor_user(db):
    return await _create_user(db, "outro@loja.com.br", UserRole.VENDEDOR, "Outro Vendedor")


@pytest.fixture
async def client_user(db):
    return await _create_user(db, "Maria@Email.com", UserRole.CLIENTE, "Maria Cliente")


@pytest.fixture
def admin_session(admin_user):
    return _session_for(admin_user)


@pytest.fixture
def vendor_session(vendor_user):
    return _session_for(vendor_user)


@pytest.fixture
def other_vendor_session(other_vendor_user):
    return _session_for(other_vendor_user)


@pytest.fixture
def client_session(client_user):
    return _session_for(client_user)


@pytest.fixture
def admin_headers(admin_user):
    return _auth_headers(admin_user)


@pytest.fixture
def vendor_headers(vendor_user):
    return _auth_headers(vendor_user)


@pytest.fixture
def client_headers(client_user):
    return _auth_headers(client_user)


@pytest.fixture
def make_client(db, vendor_user):
    async def factory(**fields) -> Client:
        data = {
            "name": "João da Silva",
            "cpf": "52998224725",
            "rg": "123456789",
            "email": "joao@email.com",
            "phone": "49999887766",
            "address": "Rua das Flores, 100",
            "city": "Lages",
            "state": "SC",
            "zip_code": "88500-000",
            "seller_id": vendor_user.id,
        }
        data.update(fields)
        record = Client(**data)
        db.add(record)
        await db.commit()
        return record
    return factory


@pytest.fixture
def make_vehicle(db):
    async def factory(**fields) -> Vehicle:
        data = {
            "brand": "Volkswagen",
            "model": "Gol",
            "version": "1.6 MSI",
            "year_fab": 2019,
            "year_model": 2020,
            "color": "Prata",
            "price": 55000.0,
            "mileage": 42000,
            "fuel": "flex",
            "transmission": "manual",
            "plate": "ABC1D23",
            "chassi": "9BWAB45U0LT000001",
            "renavam": "01234567890",
        }
        data.update(fields)
        record = Vehicle(**data)
        db.add(record)
        await db.commit()
        return record
    return factory


@pytest.fixture
def make_bank(db):
    async def factory(**fields) -> Bank:
        data = {
            "name": "Banco Serrano",
            "primary_color": "#004488",
            "interest_rate": 1.8,
            "rates": {"12": 1.5, "24": 1.6, "36": 1.7, "48": 1.8, "60": 1.9},
            "commission_rate": 2.0,
        }
        data.update(fields)
        record = Bank(**data)
        db.add(record)
        await db.commit()
        return record
    return factory
