# src/models/perfil.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from src.database import Base
from datetime import datetime

class Perfil(Base):
    __tablename__ = "perfis"

    id = Column(Integer, primary_key=True, index=True)

    # E-mail é o login
    email = Column(String, unique=True, index=True, nullable=False)
    nome = Column(String(100), nullable=True)
    hashed_password = Column(String, nullable=True)
    papel = Column(String(20), nullable=False, default="pendente") # admin, gestor, membro, pendente

    # Equipe principal; os vínculos completos ficam em equipes_membros
    equipe_id = Column(Integer, ForeignKey("equipes.id", ondelete="SET NULL"), nullable=True)
    departamento_id = Column(Integer, ForeignKey("departamentos.id", ondelete="SET NULL"), nullable=True)
    ativo = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    memberships = relationship("EquipeMembro", back_populates="perfil", cascade="all, delete-orphan")
