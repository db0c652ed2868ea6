# -*- coding: utf-8 -*-
"""
Rotas FastAPI para os Itens de Orçamento dos eventos.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.database import get_db
from src.auth import get_current_active_user
from src.models.orcamento_item import OrcamentoItem
from src.models.evento import Evento
from src.models.perfil import Perfil
from src.schemas.orcamento_item import OrcamentoItemCreate, OrcamentoItemRead, OrcamentoListagem
from src.services.orcamento import total_item, totais_orcamento
from src.services.progresso_evento import sincronizar_progresso_evento

router = APIRouter(
    tags=["Orçamentos"],
    dependencies=[Depends(get_current_active_user)],
    responses={404: {"description": "Item de orçamento não encontrado"}},
)

def _item_read(db_item: OrcamentoItem) -> OrcamentoItemRead:
    item_read = OrcamentoItemRead.from_orm(db_item)
    item_read.total = total_item(db_item)
    return item_read

@router.post("", response_model=OrcamentoItemRead, status_code=status.HTTP_201_CREATED)
def create_item(
    item: OrcamentoItemCreate,
    db: Session = Depends(get_db),
    current_user: Perfil = Depends(get_current_active_user),
):
    db_evento = db.query(Evento).filter(Evento.id == item.evento_id).first()
    if not db_evento:
        raise HTTPException(status_code=404, detail="Evento não encontrado")

    dados = item.dict()
    dados["categoria"] = dados["categoria"].strip()
    dados["descricao"] = dados["descricao"].strip()
    dados["fornecedor"] = (dados.get("fornecedor") or "").strip() or None
    if not dados["categoria"] or not dados["descricao"]:
        raise HTTPException(status_code=400, detail="Informe categoria e descrição do item.")
    # Sem equipe informada, o item fica com a equipe principal de quem cadastrou
    if dados.get("equipe_id") is None:
        dados["equipe_id"] = current_user.equipe_id

    db_item = OrcamentoItem(**dados)
    try:
        db.add(db_item)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Erro de integridade ao criar item de orçamento: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Erro ao criar item de orçamento. Verifique a equipe informada."
        )
    db.refresh(db_item)

    sincronizar_progresso_evento(db, db_item.evento_id)
    db.refresh(db_item)
    return _item_read(db_item)

@router.get("", response_model=OrcamentoListagem)
def read_itens(evento_id: Optional[int] = None, db: Session = Depends(get_db)):
    """
    Lista os itens (mais recentes primeiro) com os totais geral, aprovado e pendente.
    """
    query = db.query(OrcamentoItem)
    if evento_id:
        query = query.filter(OrcamentoItem.evento_id == evento_id)
    itens = query.order_by(OrcamentoItem.created_at.desc(), OrcamentoItem.id.desc()).all()

    return {
        "itens": [_item_read(item) for item in itens],
        "totais": totais_orcamento(itens),
    }

@router.get("/{item_id}", response_model=OrcamentoItemRead)
def read_item(item_id: int, db: Session = Depends(get_db)):
    db_item = db.query(OrcamentoItem).filter(OrcamentoItem.id == item_id).first()
    if db_item is None:
        raise HTTPException(status_code=404, detail="Item de orçamento não encontrado")
    return _item_read(db_item)

@router.post("/{item_id}/alternar-aprovacao", response_model=OrcamentoItemRead)
def alternar_aprovacao(item_id: int, db: Session = Depends(get_db)):
    db_item = db.query(OrcamentoItem).filter(OrcamentoItem.id == item_id).first()
    if db_item is None:
        raise HTTPException(status_code=404, detail="Item de orçamento não encontrado")

    db_item.aprovado = not db_item.aprovado
    db.commit()
    db.refresh(db_item)

    sincronizar_progresso_evento(db, db_item.evento_id)
    db.refresh(db_item)
    return _item_read(db_item)

@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(item_id: int, db: Session = Depends(get_db)):
    db_item = db.query(OrcamentoItem).filter(OrcamentoItem.id == item_id).first()
    if db_item is None:
        raise HTTPException(status_code=404, detail="Item de orçamento não encontrado")

    evento_id = db_item.evento_id
    try:
        db.delete(db_item)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Erro de integridade ao excluir item de orçamento {item_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Não foi possível excluir o item de orçamento.")

    sincronizar_progresso_evento(db, evento_id)
    return None
