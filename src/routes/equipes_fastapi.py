# src/routes/equipes_fastapi.py
# -*- coding: utf-8 -*-
"""
Rotas FastAPI para Equipes e seus membros.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.database import get_db
from src.auth import get_current_active_user
from src.models.equipe import Equipe, EquipeMembro
from src.schemas.equipe import EquipeCreate, EquipeRead, EquipeMembroRead

router = APIRouter(
    tags=["Equipes"],
    dependencies=[Depends(get_current_active_user)],
    responses={404: {"description": "Equipe não encontrada"}},
)

@router.post("", response_model=EquipeRead, status_code=status.HTTP_201_CREATED)
def create_equipe(equipe: EquipeCreate, db: Session = Depends(get_db)):
    nome = equipe.nome.strip()
    if not nome:
        raise HTTPException(status_code=400, detail="Informe um nome para a equipe.")

    descricao = (equipe.descricao or "").strip() or None
    db_equipe = Equipe(nome=nome, descricao=descricao)
    db.add(db_equipe)
    db.commit()
    db.refresh(db_equipe)
    return db_equipe

@router.get("", response_model=List[EquipeRead])
def read_equipes(db: Session = Depends(get_db)):
    return db.query(Equipe).order_by(Equipe.created_at.desc(), Equipe.id.desc()).all()

@router.get("/membros", response_model=List[EquipeMembroRead])
def read_membros(db: Session = Depends(get_db)):
    return db.query(EquipeMembro).order_by(EquipeMembro.created_at.asc()).all()

@router.delete("/{equipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_equipe(equipe_id: int, db: Session = Depends(get_db)):
    db_equipe = db.query(Equipe).filter(Equipe.id == equipe_id).first()
    if db_equipe is None:
        raise HTTPException(status_code=404, detail="Equipe não encontrada")
    try:
        db.delete(db_equipe)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Erro de integridade ao excluir equipe {equipe_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Não foi possível excluir a equipe.")
    return None
