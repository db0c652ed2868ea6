# src/schemas/orcamento_item.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

class OrcamentoItemBase(BaseModel):
    evento_id: int
    categoria: str = Field(..., min_length=1, max_length=100)
    descricao: str = Field(..., min_length=1, max_length=255)
    fornecedor: Optional[str] = Field(None, max_length=150)
    quantidade: float = Field(1, gt=0)
    valor_unitario: float = Field(..., ge=0)

class OrcamentoItemCreate(OrcamentoItemBase):
    equipe_id: Optional[int] = None

class OrcamentoItemRead(OrcamentoItemBase):
    id: int
    categoria: Optional[str] = None
    descricao: Optional[str] = None
    quantidade: Optional[float] = None
    valor_unitario: Optional[float] = None
    valor_total: Optional[float] = None
    total: float = 0.0
    aprovado: bool
    equipe_id: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class TotaisOrcamento(BaseModel):
    total_geral: float
    total_aprovado: float
    total_pendente: float

class OrcamentoListagem(BaseModel):
    itens: List[OrcamentoItemRead]
    totais: TotaisOrcamento
