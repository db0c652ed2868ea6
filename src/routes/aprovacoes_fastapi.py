# -*- coding: utf-8 -*-
"""
Rotas FastAPI para a Central de Aprovações.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from src.database import get_db
from src.auth import get_current_active_user
from src.models.aprovacao import Aprovacao
from src.models.perfil import Perfil
from src.models.enums import StatusAprovacao
from src.schemas.aprovacao import AprovacaoRead, DecisaoAprovacao
from src.services.aprovacoes import decidir_aprovacao
from src.services.erros import ErroDominio

router = APIRouter(
    tags=["Aprovações"],
    dependencies=[Depends(get_current_active_user)],
    responses={404: {"description": "Aprovação não encontrada"}},
)

@router.get("", response_model=List[AprovacaoRead])
def read_aprovacoes(
    status: Optional[StatusAprovacao] = None,
    evento_id: Optional[int] = None,
    db: Session = Depends(get_db)
):
    query = db.query(Aprovacao)
    if status:
        query = query.filter(Aprovacao.status == status.value)
    if evento_id:
        query = query.filter(Aprovacao.evento_id == evento_id)
    return query.order_by(Aprovacao.data_solicitacao.desc(), Aprovacao.id.desc()).all()

@router.get("/{aprovacao_id}", response_model=AprovacaoRead)
def read_aprovacao(aprovacao_id: int, db: Session = Depends(get_db)):
    db_aprovacao = db.query(Aprovacao).filter(Aprovacao.id == aprovacao_id).first()
    if db_aprovacao is None:
        raise HTTPException(status_code=404, detail="Aprovação não encontrada")
    return db_aprovacao

@router.post("/{aprovacao_id}/decisao", response_model=AprovacaoRead)
def registrar_decisao(
    aprovacao_id: int,
    dados: DecisaoAprovacao,
    db: Session = Depends(get_db),
    current_user: Perfil = Depends(get_current_active_user),
):
    """
    Aprova ou rejeita uma solicitação pendente. A rejeição exige motivo.
    """
    try:
        return decidir_aprovacao(
            db,
            aprovacao_id,
            dados.decisao,
            observacoes=dados.observacoes,
            aprovador_id=current_user.id,
        )
    except ErroDominio as e:
        raise HTTPException(status_code=e.status_http, detail=e.mensagem)
