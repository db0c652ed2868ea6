# src/auth.py
from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from src import database
from src.config import Config
from src.models import perfil as models_perfil
from src.models.enums import Papel


# --- CONFIGURAÇÃO DE SEGURANÇA ---
SECRET_KEY = Config.SECRET_KEY
ALGORITHM = Config.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = Config.ACCESS_TOKEN_EXPIRE_MINUTES

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")

def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password):
    return pwd_context.hash(password)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt

# --- DEPENDÊNCIAS DE AUTENTICAÇÃO E AUTORIZAÇÃO ---
def get_perfil(db: Session, email: str):
    return db.query(models_perfil.Perfil).filter(models_perfil.Perfil.email == email).first()

def autenticar_perfil(db: Session, email: str, senha: str):
    """Retorna o perfil se e-mail e senha conferem; senão None."""
    perfil = get_perfil(db, email=email.strip())
    if not perfil or not perfil.hashed_password:
        return None
    if not verify_password(senha, perfil.hashed_password):
        return None
    return perfil

async def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(database.get_db)):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Credenciais inválidas", headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        email: str = payload.get("sub")
        if email is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception
    perfil = get_perfil(db, email=email)
    if perfil is None:
        raise credentials_exception
    return perfil

async def get_current_active_user(current_user: models_perfil.Perfil = Depends(get_current_user)):
    """
    Bloqueia perfis inativos ou ainda pendentes de aprovação por um administrador.
    """
    if not current_user.ativo:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Seu perfil está inativo.")
    if current_user.papel == Papel.PENDENTE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Seu perfil está pendente de aprovação por um administrador."
        )
    return current_user

async def get_admin_user(current_user: models_perfil.Perfil = Depends(get_current_active_user)):
    if current_user.papel != Papel.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Acesso restrito a administradores."
        )
    return current_user
