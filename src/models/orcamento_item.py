# src/models/orcamento_item.py
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from src.database import Base
from datetime import datetime

class OrcamentoItem(Base):
    __tablename__ = "orcamentos_itens"

    id = Column(Integer, primary_key=True, index=True)
    evento_id = Column(Integer, ForeignKey("eventos.id", ondelete="CASCADE"), nullable=False, index=True)
    categoria = Column(String(100), nullable=True)
    descricao = Column(String(255), nullable=True)
    quantidade = Column(Float, nullable=True)
    valor_unitario = Column(Float, nullable=True)
    # Quando preenchido (> 0) prevalece sobre quantidade x valor_unitario
    valor_total = Column(Float, nullable=True)
    fornecedor = Column(String(150), nullable=True)
    aprovado = Column(Boolean, nullable=False, default=False)
    equipe_id = Column(Integer, ForeignKey("equipes.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    evento = relationship("Evento", back_populates="itens_orcamento")
