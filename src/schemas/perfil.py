# src/schemas/perfil.py
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from src.models.enums import Papel

class PerfilBase(BaseModel):
    email: EmailStr
    nome: Optional[str] = Field(None, max_length=100)
    papel: Papel = Papel.MEMBRO
    equipe_id: Optional[int] = None
    departamento_id: Optional[int] = None
    ativo: bool = True

    class Config:
        use_enum_values = True
        validate_default = True

class PerfilCreate(PerfilBase):
    password: str = Field(..., min_length=4)

class PerfilUpdate(BaseModel):
    email: Optional[EmailStr] = None
    nome: Optional[str] = None
    password: Optional[str] = None
    departamento_id: Optional[int] = None
    ativo: Optional[bool] = None

class PerfilRead(PerfilBase):
    id: int
    papel: str

    class Config:
        from_attributes = True

class PapelUpdate(BaseModel):
    papel: Papel

    class Config:
        use_enum_values = True

class EquipesUpdate(BaseModel):
    equipes: List[int] = []

class Token(BaseModel):
    access_token: str
    token_type: str
    user_info: PerfilRead
