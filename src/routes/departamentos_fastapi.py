# src/routes/departamentos_fastapi.py
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.database import get_db
from src.auth import get_current_active_user
from src.models.departamento import Departamento
from src.schemas.equipe import DepartamentoCreate, DepartamentoRead

router = APIRouter(
    tags=["Departamentos"],
    dependencies=[Depends(get_current_active_user)],
)

@router.post("", response_model=DepartamentoRead, status_code=status.HTTP_201_CREATED)
def create_departamento(departamento: DepartamentoCreate, db: Session = Depends(get_db)):
    nome = departamento.nome.strip()
    if not nome:
        raise HTTPException(status_code=400, detail="Informe um nome para o departamento.")

    db_departamento = Departamento(nome=nome, sigla=(departamento.sigla or "").strip() or None)
    db.add(db_departamento)
    db.commit()
    db.refresh(db_departamento)
    return db_departamento

@router.get("", response_model=List[DepartamentoRead])
def read_departamentos(db: Session = Depends(get_db)):
    return db.query(Departamento).order_by(Departamento.nome).all()

@router.delete("/{departamento_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_departamento(departamento_id: int, db: Session = Depends(get_db)):
    db_departamento = db.query(Departamento).filter(Departamento.id == departamento_id).first()
    if db_departamento is None:
        raise HTTPException(status_code=404, detail="Departamento não encontrado")
    try:
        db.delete(db_departamento)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Erro de integridade ao excluir departamento {departamento_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Não foi possível excluir o departamento.")
    return None
