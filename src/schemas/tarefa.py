# src/schemas/tarefa.py
from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import date, datetime
from src.models.enums import StatusTarefa, Prioridade

class TarefaBase(BaseModel):
    evento_id: int
    titulo: str = Field(..., min_length=1, max_length=150)
    descricao: Optional[str] = None
    responsavel_id: Optional[int] = None
    prazo: Optional[date] = None
    status: StatusTarefa = StatusTarefa.PENDENTE
    prioridade: Prioridade = Prioridade.MEDIA
    equipe_id: Optional[int] = None

    @validator('descricao', 'prazo', pre=True, check_fields=False)
    def empty_str_to_none(cls, v):
        if isinstance(v, str) and v.strip() == '':
            return None
        return v

    class Config:
        use_enum_values = True
        validate_default = True

class TarefaCreate(TarefaBase):
    pass

class TarefaUpdate(BaseModel):
    evento_id: Optional[int] = None
    titulo: Optional[str] = Field(None, min_length=1, max_length=150)
    descricao: Optional[str] = None
    responsavel_id: Optional[int] = None
    prazo: Optional[date] = None
    status: Optional[StatusTarefa] = None
    prioridade: Optional[Prioridade] = None
    equipe_id: Optional[int] = None

    class Config:
        use_enum_values = True

class TarefaRead(TarefaBase):
    id: int
    data_conclusao: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        use_enum_values = True
