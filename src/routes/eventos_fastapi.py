# src/routes/eventos_fastapi.py
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.database import get_db
from src.auth import get_current_active_user
from src.models.evento import Evento
from src.models.tarefa import Tarefa
from src.models.orcamento_item import OrcamentoItem
from src.models.aprovacao import Aprovacao
from src.models.enums import StatusEvento, StatusTarefa
from src.schemas.evento import EventoCreate, EventoRead, EventoUpdate, EventoResumo, SincronizacaoRead
from src.services.aprovacoes import garantir_solicitacao_aprovacao
from src.services.orcamento import totais_orcamento
from src.services.progresso_evento import sincronizar_progresso_evento

router = APIRouter(
    tags=["Eventos"],
    dependencies=[Depends(get_current_active_user)],
)

@router.post("", response_model=EventoRead, status_code=status.HTTP_201_CREATED)
def create_evento(evento: EventoCreate, db: Session = Depends(get_db)):
    db_evento = Evento(**evento.dict())
    try:
        db.add(db_evento)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Erro de integridade ao criar evento: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Erro ao criar evento. Verifique departamento, equipe e responsáveis."
        )
    db.refresh(db_evento)

    if db_evento.status == StatusEvento.AGUARDANDO_APROVACAO:
        garantir_solicitacao_aprovacao(db, db_evento)
        db.refresh(db_evento)
    return db_evento

@router.get("", response_model=List[EventoRead])
def read_eventos(status: Optional[StatusEvento] = None, db: Session = Depends(get_db)):
    query = db.query(Evento)
    if status:
        query = query.filter(Evento.status == status.value)
    # Eventos sem data vão para o fim
    return query.order_by(Evento.data_inicio.is_(None), Evento.data_inicio.asc(), Evento.id).all()

@router.get("/{evento_id}", response_model=EventoRead)
def read_evento(evento_id: int, db: Session = Depends(get_db)):
    db_evento = db.query(Evento).filter(Evento.id == evento_id).first()
    if db_evento is None:
        raise HTTPException(status_code=404, detail="Evento não encontrado")
    return db_evento

@router.put("/{evento_id}", response_model=EventoRead)
def update_evento(evento_id: int, evento: EventoUpdate, db: Session = Depends(get_db)):
    db_evento = db.query(Evento).filter(Evento.id == evento_id).first()
    if db_evento is None:
        raise HTTPException(status_code=404, detail="Evento não encontrado")

    update_data = evento.dict(exclude_unset=True)
    if update_data.get("titulo") is None:
        update_data.pop("titulo", None)
    for campo in ("status", "prioridade"):
        if campo in update_data and update_data[campo] is None:
            del update_data[campo]

    for key, value in update_data.items():
        setattr(db_evento, key, value)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Erro de integridade ao atualizar evento {evento_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Erro de integridade ao atualizar o evento."
        )
    db.refresh(db_evento)

    if db_evento.status == StatusEvento.AGUARDANDO_APROVACAO:
        garantir_solicitacao_aprovacao(db, db_evento)
        db.refresh(db_evento)
    return db_evento

@router.delete("/{evento_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_evento(evento_id: int, db: Session = Depends(get_db)):
    db_evento = db.query(Evento).filter(Evento.id == evento_id).first()
    if db_evento is None:
        raise HTTPException(status_code=404, detail="Evento não encontrado")
    try:
        db.delete(db_evento)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Erro de integridade ao excluir evento {evento_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Não foi possível excluir o evento.")
    return None

@router.post("/{evento_id}/sincronizar", response_model=SincronizacaoRead)
def sincronizar_evento(evento_id: int, db: Session = Depends(get_db)):
    """
    Reavalia o status do evento a partir das tarefas e do orçamento.
    """
    resultado = sincronizar_progresso_evento(db, evento_id)
    if resultado.codigo == "nao_encontrado":
        raise HTTPException(status_code=404, detail="Evento não encontrado")
    return resultado

@router.get("/{evento_id}/resumo", response_model=EventoResumo)
def resumo_evento(evento_id: int, db: Session = Depends(get_db)):
    """
    Resumo do evento para relatórios: totais de orçamento, andamento das
    tarefas e a aprovação mais recente.
    """
    db_evento = db.query(Evento).filter(Evento.id == evento_id).first()
    if db_evento is None:
        raise HTTPException(status_code=404, detail="Evento não encontrado")

    itens = db.query(OrcamentoItem).filter(OrcamentoItem.evento_id == evento_id).all()
    totais = totais_orcamento(itens)

    status_tarefas = [s for (s,) in db.query(Tarefa.status).filter(Tarefa.evento_id == evento_id).all()]

    ultima_aprovacao = db.query(Aprovacao).filter(Aprovacao.evento_id == evento_id)\
                         .order_by(Aprovacao.data_solicitacao.desc(), Aprovacao.id.desc()).first()

    return {
        "evento": db_evento,
        "total_orcamento_detalhado": totais["total_geral"],
        "total_orcamento_aprovado": totais["total_aprovado"],
        "tarefas_total": len(status_tarefas),
        "tarefas_concluidas": sum(1 for s in status_tarefas if s == StatusTarefa.CONCLUIDA),
        "ultima_aprovacao": ultima_aprovacao,
    }
