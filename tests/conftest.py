"""Pytest fixtures do painel de eventos."""
import os
import tempfile

# O banco de teste precisa estar definido antes de importar src.config/src.database
_TMP_DIR = tempfile.mkdtemp(prefix="painel-eventos-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "chave-de-teste"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event

import main
from src.auth import create_access_token
from src.database import Base, SessionLocal, engine
from src.models.aprovacao import Aprovacao
from src.models.evento import Evento
from src.models.orcamento_item import OrcamentoItem
from src.models.perfil import Perfil
from src.models.tarefa import Tarefa


@pytest.fixture()
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db):
    with TestClient(main.app) as c:
        yield c


@pytest.fixture()
def admin(db) -> Perfil:
    perfil = Perfil(email="admin@teste.com", nome="Admin", papel="admin", ativo=True)
    db.add(perfil)
    db.commit()
    db.refresh(perfil)
    return perfil


@pytest.fixture()
def auth_headers(admin):
    token = create_access_token({"sub": admin.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def sql_escritas():
    """Coleta os INSERT/UPDATE/DELETE enviados ao banco durante o teste."""
    comandos = []

    def _capturar(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith(("INSERT", "UPDATE", "DELETE")):
            comandos.append(statement)

    event.listen(engine, "before_cursor_execute", _capturar)
    yield comandos
    event.remove(engine, "before_cursor_execute", _capturar)


# --- Fábricas ---------------------------------------------------------------

@pytest.fixture()
def criar_evento(db):
    def _criar(status="input", **campos) -> Evento:
        evento = Evento(titulo=campos.pop("titulo", "Congresso Anual"), status=status, **campos)
        db.add(evento)
        db.commit()
        db.refresh(evento)
        return evento
    return _criar


@pytest.fixture()
def criar_tarefa(db):
    def _criar(evento_id, status="pendente", **campos) -> Tarefa:
        tarefa = Tarefa(evento_id=evento_id, titulo=campos.pop("titulo", "Reservar local"),
                        status=status, **campos)
        db.add(tarefa)
        db.commit()
        db.refresh(tarefa)
        return tarefa
    return _criar


@pytest.fixture()
def criar_item(db):
    def _criar(evento_id, quantidade=1, valor_unitario=100.0, **campos) -> OrcamentoItem:
        item = OrcamentoItem(evento_id=evento_id, categoria=campos.pop("categoria", "Buffet"),
                             descricao=campos.pop("descricao", "Coffee break"),
                             quantidade=quantidade, valor_unitario=valor_unitario, **campos)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item
    return _criar


@pytest.fixture()
def criar_aprovacao(db):
    def _criar(evento_id, tipo="evento", status="pendente", **campos) -> Aprovacao:
        aprovacao = Aprovacao(evento_id=evento_id, tipo=tipo, status=status, **campos)
        db.add(aprovacao)
        db.commit()
        db.refresh(aprovacao)
        return aprovacao
    return _criar
