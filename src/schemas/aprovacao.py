# src/schemas/aprovacao.py
from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime

class AprovacaoRead(BaseModel):
    id: int
    evento_id: Optional[int] = None
    tipo: Optional[str] = None
    status: str
    solicitante_id: Optional[int] = None
    aprovador_id: Optional[int] = None
    observacoes: Optional[str] = None
    equipe_id: Optional[int] = None
    data_solicitacao: datetime
    data_resposta: Optional[datetime] = None

    class Config:
        from_attributes = True

class DecisaoAprovacao(BaseModel):
    decisao: Literal["aprovado", "rejeitado"]
    observacoes: Optional[str] = Field(None, max_length=2000)
