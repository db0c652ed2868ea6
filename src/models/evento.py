# src/models/evento.py
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import relationship
from src.database import Base
from src.models.enums import StatusEvento
from datetime import datetime

_STATUS_VALIDOS = ", ".join(f"'{s.value}'" for s in StatusEvento)

class Evento(Base):
    __tablename__ = "eventos"
    __table_args__ = (
        CheckConstraint(f"status IN ({_STATUS_VALIDOS})", name="ck_eventos_status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    titulo = Column(String(150), nullable=False)
    descricao = Column(Text, nullable=True)
    tipo = Column(String(50), nullable=True) # congresso, workshop, feira, etc.
    data_inicio = Column(Date, nullable=True)
    data_fim = Column(Date, nullable=True)
    local = Column(String(150), nullable=True)
    status = Column(String(30), nullable=False, default=StatusEvento.INPUT.value, index=True)
    prioridade = Column(String(20), nullable=False, default="media") # baixa, media, alta, urgente

    departamento_id = Column(Integer, ForeignKey("departamentos.id", ondelete="SET NULL"), nullable=True)
    equipe_id = Column(Integer, ForeignKey("equipes.id", ondelete="SET NULL"), nullable=True)
    responsavel_id = Column(Integer, ForeignKey("perfis.id", ondelete="SET NULL"), nullable=True)
    solicitante_id = Column(Integer, ForeignKey("perfis.id", ondelete="SET NULL"), nullable=True)

    orcamento_previsto = Column(Float, nullable=True)
    orcamento_aprovado = Column(Float, nullable=True)
    participantes_esperados = Column(Integer, nullable=True)
    observacoes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tarefas = relationship("Tarefa", back_populates="evento", cascade="all, delete-orphan")
    itens_orcamento = relationship("OrcamentoItem", back_populates="evento", cascade="all, delete-orphan")
    # Aprovações sobrevivem à exclusão do evento (evento_id vira NULL)
    aprovacoes = relationship("Aprovacao", back_populates="evento")
