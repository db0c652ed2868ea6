# src/routes/perfis_fastapi.py
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.database import get_db
from src.auth import get_password_hash, get_admin_user
from src.models.perfil import Perfil
from src.models.equipe import Equipe, EquipeMembro
from src.models.enums import Papel
from src.schemas.perfil import PerfilCreate, PerfilRead, PerfilUpdate, PapelUpdate, EquipesUpdate

router = APIRouter(
    prefix="/api/v1/perfis",
    tags=["Perfis"],
    dependencies=[Depends(get_admin_user)]
)

MSG_ULTIMO_ADMIN = "É necessário manter pelo menos um administrador ativo."

def _ultimo_admin_ativo(db: Session, db_perfil: Perfil) -> bool:
    """True se o perfil é o único administrador ativo restante."""
    if db_perfil.papel != Papel.ADMIN or not db_perfil.ativo:
        return False
    admins_ativos = db.query(Perfil).filter(
        Perfil.papel == Papel.ADMIN.value,
        Perfil.ativo.is_(True),
    ).count()
    return admins_ativos <= 1

@router.post("", response_model=PerfilRead, status_code=status.HTTP_201_CREATED)
def create_perfil(perfil: PerfilCreate, db: Session = Depends(get_db)):
    if db.query(Perfil).filter(Perfil.email == perfil.email).first():
        raise HTTPException(status_code=400, detail="Email já registrado")

    dados = perfil.dict(exclude={"password"})
    db_perfil = Perfil(**dados, hashed_password=get_password_hash(perfil.password))
    try:
        db.add(db_perfil)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Erro de integridade ao criar perfil: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Erro ao criar perfil. Verifique equipe e departamento."
        )
    db.refresh(db_perfil)
    return db_perfil

@router.get("", response_model=List[PerfilRead])
def read_perfis(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return db.query(Perfil).order_by(Perfil.nome).offset(skip).limit(limit).all()

@router.get("/{perfil_id}", response_model=PerfilRead)
def read_perfil(perfil_id: int, db: Session = Depends(get_db)):
    db_perfil = db.query(Perfil).filter(Perfil.id == perfil_id).first()
    if db_perfil is None:
        raise HTTPException(status_code=404, detail="Perfil não encontrado")
    return db_perfil

@router.put("/{perfil_id}", response_model=PerfilRead)
def update_perfil(perfil_id: int, perfil: PerfilUpdate, db: Session = Depends(get_db)):
    db_perfil = db.query(Perfil).filter(Perfil.id == perfil_id).first()
    if not db_perfil:
        raise HTTPException(status_code=404, detail="Perfil não encontrado")

    update_data = perfil.dict(exclude_unset=True)

    if "email" in update_data and update_data["email"] != db_perfil.email:
        if db.query(Perfil).filter(Perfil.email == update_data["email"]).first():
            raise HTTPException(status_code=400, detail="Email já está em uso.")

    if update_data.get("ativo") is False and _ultimo_admin_ativo(db, db_perfil):
        raise HTTPException(status_code=400, detail=MSG_ULTIMO_ADMIN)

    if "password" in update_data:
        if update_data["password"]:
            db_perfil.hashed_password = get_password_hash(update_data["password"])
        del update_data["password"]

    for key, value in update_data.items():
        setattr(db_perfil, key, value)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Erro de integridade ao atualizar perfil {perfil_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Erro de integridade ao atualizar o perfil.")
    db.refresh(db_perfil)
    return db_perfil

@router.put("/{perfil_id}/papel", response_model=PerfilRead)
def update_papel(perfil_id: int, dados: PapelUpdate, db: Session = Depends(get_db)):
    """
    Altera o papel de um perfil, mantendo sempre pelo menos um administrador.
    """
    db_perfil = db.query(Perfil).filter(Perfil.id == perfil_id).first()
    if not db_perfil:
        raise HTTPException(status_code=404, detail="Perfil não encontrado")

    if dados.papel != Papel.ADMIN and _ultimo_admin_ativo(db, db_perfil):
        raise HTTPException(status_code=400, detail=MSG_ULTIMO_ADMIN)

    db_perfil.papel = dados.papel
    db.commit()
    db.refresh(db_perfil)
    return db_perfil

@router.put("/{perfil_id}/equipes", response_model=PerfilRead)
def update_equipes(perfil_id: int, dados: EquipesUpdate, db: Session = Depends(get_db)):
    """
    Substitui os vínculos do perfil com equipes. A primeira equipe da lista
    vira a equipe principal do perfil.
    """
    db_perfil = db.query(Perfil).filter(Perfil.id == perfil_id).first()
    if not db_perfil:
        raise HTTPException(status_code=404, detail="Perfil não encontrado")

    equipes = list(dict.fromkeys(dados.equipes))
    if equipes:
        encontradas = db.query(Equipe.id).filter(Equipe.id.in_(equipes)).count()
        if encontradas != len(equipes):
            raise HTTPException(status_code=404, detail="Equipe não encontrada")

    db.query(EquipeMembro).filter(EquipeMembro.perfil_id == perfil_id).delete(synchronize_session=False)
    for equipe_id in equipes:
        db.add(EquipeMembro(perfil_id=perfil_id, equipe_id=equipe_id))
    db_perfil.equipe_id = equipes[0] if equipes else None

    db.commit()
    db.refresh(db_perfil)
    return db_perfil

@router.delete("/{perfil_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_perfil(perfil_id: int, db: Session = Depends(get_db)):
    db_perfil = db.query(Perfil).filter(Perfil.id == perfil_id).first()
    if not db_perfil:
        raise HTTPException(status_code=404, detail="Perfil não encontrado")
    if _ultimo_admin_ativo(db, db_perfil):
        raise HTTPException(status_code=400, detail=MSG_ULTIMO_ADMIN)
    try:
        db.delete(db_perfil)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Erro de integridade ao excluir perfil {perfil_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Não foi possível excluir o perfil.")
    return None
