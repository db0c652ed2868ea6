# Em src/routes/dashboard_fastapi.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func

from src.database import get_db
from src.auth import get_current_active_user
from src.models.evento import Evento
from src.models.tarefa import Tarefa
from src.models.orcamento_item import OrcamentoItem
from src.models.aprovacao import Aprovacao
from src.models.enums import StatusEvento, StatusTarefa, StatusAprovacao
from src.services.orcamento import totais_orcamento

router = APIRouter(
    tags=["Dashboard"],
    dependencies=[Depends(get_current_active_user)],
)

@router.get("/resumo")
def get_resumo(db: Session = Depends(get_db)):
    """
    Números gerais do painel: eventos por etapa, tarefas, aprovações e orçamento.
    """
    # Todas as etapas aparecem, mesmo com zero eventos
    eventos_por_status = {s.value: 0 for s in StatusEvento}
    for status, total in db.query(Evento.status, func.count(Evento.id)).group_by(Evento.status).all():
        eventos_por_status[status] = total

    total_orcamento_aprovado, total_participantes = db.query(
        func.coalesce(func.sum(Evento.orcamento_aprovado), 0),
        func.coalesce(func.sum(Evento.participantes_esperados), 0),
    ).one()

    tarefas_total = db.query(func.count(Tarefa.id)).scalar() or 0
    tarefas_concluidas = db.query(func.count(Tarefa.id))\
                           .filter(Tarefa.status == StatusTarefa.CONCLUIDA.value).scalar() or 0

    aprovacoes_por_status = {s.value: 0 for s in StatusAprovacao}
    for status, total in db.query(Aprovacao.status, func.count(Aprovacao.id)).group_by(Aprovacao.status).all():
        aprovacoes_por_status[status] = total

    itens = db.query(OrcamentoItem).all()

    return {
        "eventos_por_status": eventos_por_status,
        "total_orcamento_aprovado": float(total_orcamento_aprovado),
        "total_participantes": int(total_participantes),
        "tarefas": {
            "total": tarefas_total,
            "concluidas": tarefas_concluidas,
            "pendentes": tarefas_total - tarefas_concluidas,
        },
        "aprovacoes": aprovacoes_por_status,
        "orcamento": totais_orcamento(itens),
    }
