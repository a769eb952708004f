"""
Dealer Back-Office - Database Session
SQLite (desenvolvimento/testes) ou PostgreSQL (produção) conforme a URL configurada
"""
import logging
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

from app.core.config import settings

logger = logging.getLogger(__name__)


def engine_options(url: str) -> dict:
    """Parâmetros do engine para cada backend"""
    backend = make_url(url).get_backend_name()
    if backend == "sqlite":
        # Uma conexão por request, usada fora da thread que a criou
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
        "pool_recycle": 1800,
    }


engine = create_async_engine(settings.db_url, echo=settings.DEBUG, **engine_options(settings.db_url))

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)

Base = declarative_base()


async def get_db() -> AsyncSession:
    """
    Sessão por request.
    Os serviços só fazem flush; o commit final acontece aqui (ou no router),
    e qualquer erro desfaz a transação inteira.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db():
    """Cria as tabelas que ainda não existem"""
    import app.models  # noqa: F401  (registra os models no metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Banco pronto ({make_url(settings.db_url).get_backend_name()}): "
                f"{len(Base.metadata.tables)} tabelas")
