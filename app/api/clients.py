"""
Dealer Back-Office - Clients API
Cadastro de clientes e quadro do funil de vendas
"""
from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_

from app.database import get_db
from app.models import Client
from app.models.enums import FunnelStage, ActivityAction, EntityType
from app.schemas import ClientCreate, ClientUpdate, StageUpdate
from app.core import AuthSession, is_admin, can_manage_client
from app.api.auth import require_staff
from app.services.accounts import delete_account_by_email
from app.services.activity import log_activity
from app.services.common import get_or_raise
from app.services.funnel import group_by_stage, move_stage, effective_stage, STAGE_LABELS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


def _client_out(client: Client) -> dict:
    data = client.to_dict()
    data["effective_stage"] = effective_stage(client.funnel_stage).value
    return data


@router.get("")
async def list_clients(
    search: Optional[str] = Query(None),
    stage: Optional[FunnelStage] = Query(None),
    seller_id: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Lista clientes"""
    query = select(Client)

    if search:
        query = query.where(
            or_(
                Client.name.ilike(f"%{search}%"),
                Client.email.ilike(f"%{search}%"),
                Client.cpf.ilike(f"%{search}%"),
                Client.phone.ilike(f"%{search}%")
            )
        )

    if stage:
        stage = FunnelStage(stage)
        if stage == FunnelStage.ATENDIMENTO:
            query = query.where(Client.funnel_stage.in_([FunnelStage.ATENDIMENTO.value, FunnelStage.LEAD.value]))
        else:
            query = query.where(Client.funnel_stage == stage.value)

    if seller_id:
        query = query.where(Client.seller_id == seller_id)

    query = query.order_by(Client.name).offset(skip).limit(limit)

    result = await db.execute(query)
    return [_client_out(c) for c in result.scalars().all()]


@router.get("/funnel")
async def funnel_board(
    seller_id: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Quadro do funil: colunas na ordem de exibição ('lead' aparece em atendimento)"""
    query = select(Client).order_by(Client.updated_at.desc())
    if seller_id:
        query = query.where(Client.seller_id == seller_id)
    result = await db.execute(query)

    board = group_by_stage(result.scalars().all())
    return [
        {
            "stage": stage.value,
            "label": STAGE_LABELS[stage],
            "count": len(clients),
            "clients": [_client_out(c) for c in clients],
        }
        for stage, clients in board.items()
    ]


@router.get("/{client_id}")
async def get_client(
    client_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Retorna um cliente específico"""
    client = await get_or_raise(db, Client, client_id, "Cliente")
    return _client_out(client)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_client(
    request: ClientCreate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Cria novo cliente (vendedor logado é o responsável, salvo indicação do admin)"""
    data = request.model_dump()
    if not is_admin(session) or not data.get("seller_id"):
        data["seller_id"] = session.user_id
    if data.get("email"):
        data["email"] = data["email"].lower()

    client = Client(**data)
    db.add(client)
    await db.flush()

    await log_activity(db, session, ActivityAction.CREATE, EntityType.CLIENT, client.id, f"Cliente {client.name}")
    await db.commit()
    await db.refresh(client)
    logger.info(f"Cliente criado: {client.id}")

    return _client_out(client)


@router.put("/{client_id}")
async def update_client(
    client_id: str,
    request: ClientUpdate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Atualiza cliente"""
    client = await get_or_raise(db, Client, client_id, "Cliente")

    if not can_manage_client(session, client):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Sem permissão para alterar este cliente"
        )

    update_data = request.model_dump(exclude_unset=True)
    if "seller_id" in update_data and not is_admin(session):
        update_data.pop("seller_id")
    if update_data.get("email"):
        update_data["email"] = update_data["email"].lower()

    for field, value in update_data.items():
        setattr(client, field, value)

    await log_activity(db, session, ActivityAction.UPDATE, EntityType.CLIENT, client.id, f"Cliente {client.name}")
    await db.commit()
    await db.refresh(client)

    return _client_out(client)


@router.patch("/{client_id}/stage")
async def update_stage(
    client_id: str,
    request: StageUpdate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Move o cliente no funil (sem escrita quando já está no estágio)"""
    client = await get_or_raise(db, Client, client_id, "Cliente")
    changed = await move_stage(db, session, client, request.stage)
    await db.commit()

    return {"changed": changed, "client": _client_out(client)}


@router.delete("/{client_id}")
async def delete_client(
    client_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_staff)
):
    """Exclui cliente e, se houver, a conta de acesso do portal"""
    client = await get_or_raise(db, Client, client_id, "Cliente")

    if not can_manage_client(session, client):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Sem permissão para excluir este cliente"
        )

    name, email = client.name, client.email
    await db.delete(client)
    await log_activity(db, session, ActivityAction.DELETE, EntityType.CLIENT, client_id, f"Cliente {name}")
    await db.commit()
    logger.info(f"Cliente excluído: {client_id}")

    account_removed = False
    if email:
        try:
            account_removed = await delete_account_by_email(db, session, email)
            await db.commit()
        except Exception as e:
            # Remoção da conta é complementar; o cliente já foi excluído
            await db.rollback()
            logger.warning(f"Conta de acesso de {client_id} não removida: {e}")

    return {"message": "Cliente excluído", "account_removed": account_removed}
