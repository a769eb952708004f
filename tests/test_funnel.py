"""
Funil de vendas: estágio legado, quadro e movimentação
"""
from datetime import datetime

import pytest
from sqlalchemy import select

from app.core.exceptions import PermissionDeniedError, ValidationError
from app.models import ActivityLog
from app.models.enums import FunnelStage
from app.services.funnel import effective_stage, group_by_stage, move_stage, BOARD_STAGES


def test_effective_stage_reads_lead_as_atendimento():
    assert effective_stage("lead") == FunnelStage.ATENDIMENTO
    assert effective_stage(None) == FunnelStage.ATENDIMENTO
    assert effective_stage("proposta") == FunnelStage.PROPOSTA


async def test_lead_client_is_grouped_under_atendimento_without_changing_row(make_client, db):
    legacy = await make_client(name="Cliente Antigo", funnel_stage="lead")
    current = await make_client(name="Cliente Novo", funnel_stage="simulacao")

    board = group_by_stage([legacy, current])

    assert list(board.keys()) == list(BOARD_STAGES)
    assert FunnelStage.LEAD not in board
    assert board[FunnelStage.ATENDIMENTO] == [legacy]
    assert board[FunnelStage.SIMULACAO] == [current]

    await db.refresh(legacy)
    assert legacy.funnel_stage == "lead"


async def test_new_client_defaults_to_atendimento(make_client):
    record = await make_client()
    assert record.funnel_stage == FunnelStage.ATENDIMENTO.value


async def test_move_to_same_effective_stage_is_a_noop(make_client, vendor_session, db):
    record = await make_client(funnel_stage="lead")
    record.updated_at = datetime(2024, 1, 1, 12, 0)
    await db.commit()

    changed = await move_stage(db, vendor_session, record, FunnelStage.ATENDIMENTO)
    await db.commit()
    await db.refresh(record)

    assert changed is False
    assert record.funnel_stage == "lead"
    assert record.updated_at == datetime(2024, 1, 1, 12, 0)

    logs = (await db.execute(select(ActivityLog))).scalars().all()
    assert logs == []


async def test_move_stage_updates_and_logs(make_client, vendor_session, db):
    record = await make_client()

    changed = await move_stage(db, vendor_session, record, "perdido")
    await db.commit()
    await db.refresh(record)

    assert changed is True
    assert record.funnel_stage == "perdido"

    log = (await db.execute(select(ActivityLog))).scalars().one()
    assert log.action == "update"
    assert log.entity_type == "client"
    assert log.entity_id == record.id


async def test_any_stage_can_move_back(make_client, vendor_session, db):
    record = await make_client(funnel_stage="vendido")
    assert await move_stage(db, vendor_session, record, FunnelStage.ATENDIMENTO) is True
    assert record.funnel_stage == "atendimento"


async def test_other_vendor_cannot_move_client(make_client, other_vendor_session, db):
    record = await make_client()
    with pytest.raises(PermissionDeniedError):
        await move_stage(db, other_vendor_session, record, FunnelStage.PROPOSTA)


async def test_admin_can_move_any_client(make_client, admin_session, db):
    record = await make_client()
    assert await move_stage(db, admin_session, record, FunnelStage.PROPOSTA) is True


async def test_lead_cannot_be_assigned(make_client, vendor_session, db):
    record = await make_client()
    with pytest.raises(ValidationError):
        await move_stage(db, vendor_session, record, "lead")


async def test_funnel_board_endpoint(client, make_client, vendor_headers):
    await make_client(name="Ana", funnel_stage="lead")
    await make_client(name="Bruno", funnel_stage="proposta")

    response = await client.get("/api/clients/funnel", headers=vendor_headers)
    assert response.status_code == 200

    columns = response.json()
    assert [c["stage"] for c in columns] == ["atendimento", "simulacao", "proposta", "vendido", "perdido"]
    assert [c["name"] for c in columns[0]["clients"]] == ["Ana"]
    assert columns[0]["clients"][0]["funnel_stage"] == "lead"
    assert columns[2]["count"] == 1


async def test_stage_endpoint_rejects_unknown_stage(client, make_client, vendor_headers):
    record = await make_client()
    response = await client.patch(
        f"/api/clients/{record.id}/stage", json={"stage": "negociando"}, headers=vendor_headers
    )
    assert response.status_code == 422


async def test_stage_endpoint_reports_noop(client, make_client, vendor_headers):
    record = await make_client(funnel_stage="simulacao")
    response = await client.patch(
        f"/api/clients/{record.id}/stage", json={"stage": "simulacao"}, headers=vendor_headers
    )
    assert response.status_code == 200
    assert response.json()["changed"] is False
