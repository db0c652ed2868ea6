# src/schemas/equipe.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class EquipeCreate(BaseModel):
    nome: str = Field(..., max_length=100)
    descricao: Optional[str] = Field(None, max_length=255)

class EquipeRead(EquipeCreate):
    id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class EquipeMembroRead(BaseModel):
    equipe_id: int
    perfil_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class DepartamentoCreate(BaseModel):
    nome: str = Field(..., max_length=100)
    sigla: Optional[str] = Field(None, max_length=20)

class DepartamentoRead(DepartamentoCreate):
    id: int

    class Config:
        from_attributes = True
