# src/models/departamento.py
from sqlalchemy import Column, Integer, String
from src.database import Base

class Departamento(Base):
    __tablename__ = "departamentos"

    id = Column(Integer, primary_key=True, index=True)
    nome = Column(String(100), nullable=False)
    sigla = Column(String(20), nullable=True)
