# -*- coding: utf-8 -*-
"""
Configurações da aplicação lidas das variáveis de ambiente (ou de um arquivo .env).
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _database_url():
    url = os.environ.get("DATABASE_URL", "sqlite:///./eventos.db")
    # Render/Heroku ainda entregam o prefixo antigo
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


class Config:
    DATABASE_URL = _database_url()
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key-change-in-production"
    ALGORITHM = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 8))
    ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
    FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:5173")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.environ.get("LOG_FILE") or None
    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "admin@painel-eventos.local")
    # Sem ADMIN_PASSWORD o bootstrap usa "admin" fora de produção e é pulado em produção
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD") or None
