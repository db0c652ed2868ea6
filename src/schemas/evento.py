# src/schemas/evento.py
from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import date, datetime
from src.models.enums import StatusEvento, Prioridade
from .aprovacao import AprovacaoRead

class EventoBase(BaseModel):
    titulo: str = Field(..., min_length=1, max_length=150)
    descricao: Optional[str] = None
    tipo: Optional[str] = Field(None, max_length=50)
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None
    local: Optional[str] = Field(None, max_length=150)
    status: StatusEvento = StatusEvento.INPUT
    prioridade: Prioridade = Prioridade.MEDIA
    departamento_id: Optional[int] = None
    equipe_id: Optional[int] = None
    responsavel_id: Optional[int] = None
    solicitante_id: Optional[int] = None
    orcamento_previsto: Optional[float] = Field(None, ge=0)
    orcamento_aprovado: Optional[float] = Field(None, ge=0)
    participantes_esperados: Optional[int] = Field(None, ge=0)
    observacoes: Optional[str] = None

    @validator('data_inicio', 'data_fim', 'orcamento_previsto', 'orcamento_aprovado',
               'participantes_esperados', pre=True, check_fields=False)
    def empty_str_to_none(cls, v):
        """Campos vindos de formulário chegam como '' quando não preenchidos."""
        if isinstance(v, str) and v.strip() == '':
            return None
        return v

    class Config:
        use_enum_values = True
        validate_default = True

class EventoCreate(EventoBase):
    pass

class EventoUpdate(EventoBase):
    titulo: Optional[str] = Field(None, min_length=1, max_length=150)
    status: Optional[StatusEvento] = None
    prioridade: Optional[Prioridade] = None

class EventoRead(EventoBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        use_enum_values = True

class EventoResumo(BaseModel):
    evento: EventoRead
    total_orcamento_detalhado: float
    total_orcamento_aprovado: float
    tarefas_total: int
    tarefas_concluidas: int
    ultima_aprovacao: Optional[AprovacaoRead] = None

class SincronizacaoRead(BaseModel):
    ok: bool
    codigo: str
    status_anterior: Optional[str] = None
    status_novo: Optional[str] = None

    class Config:
        from_attributes = True
