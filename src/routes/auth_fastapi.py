# src/routes/auth_fastapi.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from src import auth, database
from src.models.perfil import Perfil
from src.schemas import perfil as schemas_perfil


router = APIRouter(
    prefix="/api/v1/auth",
    tags=["Authentication"]
)

@router.post("/token", response_model=schemas_perfil.Token)
async def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(database.get_db)):
    # O campo username do formulário OAuth2 carrega o e-mail
    perfil = auth.autenticar_perfil(db, form_data.username, form_data.password)
    if perfil is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email ou senha incorretos",
            headers={"WWW-Authenticate": "Bearer"},
        )
    access_token = auth.create_access_token(
        data={"sub": perfil.email, "papel": perfil.papel}
    )

    user_info = schemas_perfil.PerfilRead.from_orm(perfil)
    return {"access_token": access_token, "token_type": "bearer", "user_info": user_info}

@router.get("/me", response_model=schemas_perfil.PerfilRead)
async def read_users_me(current_user: Perfil = Depends(auth.get_current_active_user)):
    """
    Retorna o perfil atualmente logado.
    """
    return current_user
