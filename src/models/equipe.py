# src/models/equipe.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from src.database import Base
from datetime import datetime

class Equipe(Base):
    __tablename__ = "equipes"

    id = Column(Integer, primary_key=True, index=True)
    nome = Column(String(100), nullable=False)
    descricao = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    membros = relationship("EquipeMembro", back_populates="equipe", cascade="all, delete-orphan")


class EquipeMembro(Base):
    __tablename__ = "equipes_membros"

    equipe_id = Column(Integer, ForeignKey("equipes.id", ondelete="CASCADE"), primary_key=True)
    perfil_id = Column(Integer, ForeignKey("perfis.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    equipe = relationship("Equipe", back_populates="membros")
    perfil = relationship("Perfil", back_populates="memberships")
