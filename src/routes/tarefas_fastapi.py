# -*- coding: utf-8 -*-
"""
Rotas FastAPI para o CRUD de Tarefas dos eventos.

Toda mutação bem-sucedida dispara a sincronização de progresso do evento
afetado; o resultado da sincronização não altera a resposta da rota.
"""
import logging
from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.database import get_db
from src.auth import get_current_active_user
from src.models.tarefa import Tarefa
from src.models.evento import Evento
from src.models.enums import StatusTarefa
from src.schemas.tarefa import TarefaCreate, TarefaRead, TarefaUpdate
from src.services.progresso_evento import sincronizar_progresso_evento

router = APIRouter(
    tags=["Tarefas"],
    dependencies=[Depends(get_current_active_user)],
    responses={404: {"description": "Tarefa não encontrada"}},
)

def _get_evento_or_404(db: Session, evento_id: int) -> Evento:
    db_evento = db.query(Evento).filter(Evento.id == evento_id).first()
    if db_evento is None:
        raise HTTPException(status_code=404, detail="Evento não encontrado")
    return db_evento

def _salvar(db: Session, acao: str):
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Erro de integridade ao {acao} tarefa: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Erro de integridade ao {acao} a tarefa."
        )

def _aplicar_conclusao(db_tarefa: Tarefa, novo_status: str):
    if novo_status == StatusTarefa.CONCLUIDA:
        if db_tarefa.status != StatusTarefa.CONCLUIDA or db_tarefa.data_conclusao is None:
            db_tarefa.data_conclusao = date.today()
    else:
        db_tarefa.data_conclusao = None

@router.post("", response_model=TarefaRead, status_code=status.HTTP_201_CREATED)
def create_tarefa(tarefa: TarefaCreate, db: Session = Depends(get_db)):
    db_evento = _get_evento_or_404(db, tarefa.evento_id)

    db_tarefa = Tarefa(**tarefa.dict())
    if db_tarefa.equipe_id is None:
        db_tarefa.equipe_id = db_evento.equipe_id
    if db_tarefa.status == StatusTarefa.CONCLUIDA:
        db_tarefa.data_conclusao = date.today()

    db.add(db_tarefa)
    _salvar(db, "criar")
    db.refresh(db_tarefa)

    sincronizar_progresso_evento(db, db_tarefa.evento_id)
    db.refresh(db_tarefa)
    return db_tarefa

@router.get("", response_model=List[TarefaRead])
def read_tarefas(evento_id: Optional[int] = None, status: Optional[StatusTarefa] = None, db: Session = Depends(get_db)):
    """
    Lista tarefas, opcionalmente de um evento. Sem prazo aparecem primeiro.
    """
    query = db.query(Tarefa)
    if evento_id:
        query = query.filter(Tarefa.evento_id == evento_id)
    if status:
        query = query.filter(Tarefa.status == status.value)
    return query.order_by(Tarefa.prazo.isnot(None), Tarefa.prazo.asc(), Tarefa.id).all()

@router.get("/{tarefa_id}", response_model=TarefaRead)
def read_tarefa(tarefa_id: int, db: Session = Depends(get_db)):
    db_tarefa = db.query(Tarefa).filter(Tarefa.id == tarefa_id).first()
    if db_tarefa is None:
        raise HTTPException(status_code=404, detail="Tarefa não encontrada")
    return db_tarefa

@router.put("/{tarefa_id}", response_model=TarefaRead)
def update_tarefa(tarefa_id: int, tarefa: TarefaUpdate, db: Session = Depends(get_db)):
    db_tarefa = db.query(Tarefa).filter(Tarefa.id == tarefa_id).first()
    if db_tarefa is None:
        raise HTTPException(status_code=404, detail="Tarefa não encontrada")

    update_data = {k: v for k, v in tarefa.dict(exclude_unset=True).items()
                   if v is not None or k in ("descricao", "responsavel_id", "prazo", "equipe_id")}

    evento_anterior = db_tarefa.evento_id
    db_evento = _get_evento_or_404(db, update_data.get("evento_id", evento_anterior))

    if "status" in update_data:
        _aplicar_conclusao(db_tarefa, update_data["status"])

    for key, value in update_data.items():
        setattr(db_tarefa, key, value)

    if db_tarefa.equipe_id is None:
        db_tarefa.equipe_id = db_evento.equipe_id

    _salvar(db, "atualizar")
    db.refresh(db_tarefa)

    evento_atual = db_tarefa.evento_id
    sincronizar_progresso_evento(db, evento_atual)
    if evento_anterior != evento_atual:
        sincronizar_progresso_evento(db, evento_anterior)

    db.refresh(db_tarefa)
    return db_tarefa

@router.delete("/{tarefa_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tarefa(tarefa_id: int, db: Session = Depends(get_db)):
    db_tarefa = db.query(Tarefa).filter(Tarefa.id == tarefa_id).first()
    if db_tarefa is None:
        raise HTTPException(status_code=404, detail="Tarefa não encontrada")

    evento_id = db_tarefa.evento_id
    db.delete(db_tarefa)
    _salvar(db, "excluir")

    sincronizar_progresso_evento(db, evento_id)
    return None
