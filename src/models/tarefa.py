# src/models/tarefa.py
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from src.database import Base
from datetime import datetime

class Tarefa(Base):
    __tablename__ = "tarefas"

    id = Column(Integer, primary_key=True, index=True)
    evento_id = Column(Integer, ForeignKey("eventos.id", ondelete="CASCADE"), nullable=False, index=True)
    titulo = Column(String(150), nullable=False)
    descricao = Column(Text, nullable=True)
    responsavel_id = Column(Integer, ForeignKey("perfis.id", ondelete="SET NULL"), nullable=True)
    prazo = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default="pendente") # pendente, em_andamento, concluida, cancelada
    prioridade = Column(String(20), nullable=False, default="media")
    data_conclusao = Column(Date, nullable=True)
    equipe_id = Column(Integer, ForeignKey("equipes.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    evento = relationship("Evento", back_populates="tarefas")
