# -*- coding: utf-8 -*-
"""
Arquivo principal da aplicação FastAPI do painel de gestão de eventos.
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config import Config
from src.database import engine, Base

# Todos os modelos precisam estar registrados antes do create_all
from src.models import departamento, equipe, perfil, evento, tarefa, orcamento_item, aprovacao

from src.routes import (auth_fastapi, perfis_fastapi, equipes_fastapi, departamentos_fastapi,
                        eventos_fastapi, tarefas_fastapi, orcamentos_fastapi, aprovacoes_fastapi,
                        dashboard_fastapi)

import create_first_user


logging_kwargs = {}
if Config.LOG_FILE:
    logging_kwargs["filename"] = Config.LOG_FILE
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    **logging_kwargs
)

# Cria as tabelas no banco de dados
try:
    Base.metadata.create_all(bind=engine)
    logging.info("Tabelas verificadas/criadas com sucesso.")
except Exception as e:
    logging.error(f"Erro ao criar tabelas: {e}")


docs_url = "/docs" if Config.ENVIRONMENT != "production" else None
redoc_url = "/redoc" if Config.ENVIRONMENT != "production" else None

app = FastAPI(
    title="API Painel de Eventos",
    description="API para gestão de eventos: tarefas, orçamentos e aprovações",
    version="1.0.0",
    docs_url=docs_url,   # None em produção
    redoc_url=redoc_url,
    openapi_url="/openapi.json" if Config.ENVIRONMENT != "production" else None
)

origins = [
    Config.FRONTEND_URL,
    "http://localhost:5173",
    "http://localhost",
    "http://127.0.0.1",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Montagem dos routers
app.include_router(eventos_fastapi.router, prefix="/api/v1/eventos")
app.include_router(tarefas_fastapi.router, prefix="/api/v1/tarefas")
app.include_router(orcamentos_fastapi.router, prefix="/api/v1/orcamentos")
app.include_router(aprovacoes_fastapi.router, prefix="/api/v1/aprovacoes")
app.include_router(equipes_fastapi.router, prefix="/api/v1/equipes")
app.include_router(departamentos_fastapi.router, prefix="/api/v1/departamentos")
app.include_router(dashboard_fastapi.router, prefix="/api/v1/dashboard")
app.include_router(auth_fastapi.router)
app.include_router(perfis_fastapi.router)


create_first_user.create_first_user()


@app.get("/", tags=["Root"])
async def root():
    return {
        "mensagem": "API Painel de Eventos",
        "documentacao": "/docs",
        "endpoints": [
            {"eventos": "/api/v1/eventos"},
            {"tarefas": "/api/v1/tarefas"},
            {"orcamentos": "/api/v1/orcamentos"},
            {"aprovacoes": "/api/v1/aprovacoes"},
            {"equipes": "/api/v1/equipes"},
            {"departamentos": "/api/v1/departamentos"},
            {"perfis": "/api/v1/perfis"},
            {"dashboard": "/api/v1/dashboard/resumo"}
        ]
    }
