# src/models/aprovacao.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Index, text, func
from sqlalchemy.orm import relationship
from src.database import Base

class Aprovacao(Base):
    __tablename__ = "aprovacoes"
    __table_args__ = (
        # No máximo uma aprovação pendente por (evento, tipo)
        Index(
            "uq_aprovacoes_pendente_evento_tipo",
            "evento_id",
            "tipo",
            unique=True,
            sqlite_where=text("status = 'pendente'"),
            postgresql_where=text("status = 'pendente'"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    evento_id = Column(Integer, ForeignKey("eventos.id", ondelete="SET NULL"), nullable=True, index=True)
    tipo = Column(String(20), nullable=False, default="evento") # evento, orcamento
    status = Column(String(20), nullable=False, default="pendente") # pendente, aprovado, rejeitado
    solicitante_id = Column(Integer, ForeignKey("perfis.id", ondelete="SET NULL"), nullable=True)
    aprovador_id = Column(Integer, ForeignKey("perfis.id", ondelete="SET NULL"), nullable=True)
    observacoes = Column(Text, nullable=True)
    equipe_id = Column(Integer, ForeignKey("equipes.id", ondelete="SET NULL"), nullable=True)
    data_solicitacao = Column(DateTime, nullable=False, server_default=func.now())
    data_resposta = Column(DateTime, nullable=True)

    evento = relationship("Evento", back_populates="aprovacoes")
