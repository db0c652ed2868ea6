import logging

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.models.aprovacao import Aprovacao
from src.models.evento import Evento
from src.services.aprovacoes import decidir_aprovacao, garantir_solicitacao_aprovacao
from src.services.erros import ConflictError, NotFoundError, ValidationError


def _aprovacoes(db, evento_id):
    db.expire_all()
    return db.query(Aprovacao).filter(Aprovacao.evento_id == evento_id).all()


def _status_evento(db, evento_id):
    db.expire_all()
    return db.query(Evento).filter(Evento.id == evento_id).one().status


# --- Solicitação ------------------------------------------------------------

def test_garantir_ignora_evento_ausente(db, sql_escritas):
    garantir_solicitacao_aprovacao(db, None)
    assert sql_escritas == []


def test_garantir_cria_uma_unica_pendencia(db, admin, criar_evento):
    evento = criar_evento(status="aguardando_aprovacao", solicitante_id=admin.id)

    for _ in range(5):
        garantir_solicitacao_aprovacao(db, evento)

    aprovacoes = _aprovacoes(db, evento.id)
    assert len(aprovacoes) == 1
    assert aprovacoes[0].tipo == "evento"
    assert aprovacoes[0].status == "pendente"
    assert aprovacoes[0].solicitante_id == admin.id
    assert aprovacoes[0].data_solicitacao is not None


def test_garantir_usa_responsavel_quando_falta_solicitante(db, admin, criar_evento):
    evento = criar_evento(status="aguardando_aprovacao", responsavel_id=admin.id)

    garantir_solicitacao_aprovacao(db, evento)

    assert _aprovacoes(db, evento.id)[0].solicitante_id == admin.id


def test_garantir_ignora_aprovacao_de_orcamento(db, criar_evento, criar_aprovacao):
    evento = criar_evento(status="aguardando_aprovacao")
    criar_aprovacao(evento.id, tipo="orcamento")

    garantir_solicitacao_aprovacao(db, evento)

    tipos = sorted(a.tipo for a in _aprovacoes(db, evento.id))
    assert tipos == ["evento", "orcamento"]


def test_garantir_cria_nova_pendencia_depois_de_rejeicao(db, criar_evento, criar_aprovacao):
    evento = criar_evento(status="aguardando_aprovacao")
    criar_aprovacao(evento.id, status="rejeitado", observacoes="Faltou o buffet")

    garantir_solicitacao_aprovacao(db, evento)

    assert sorted(a.status for a in _aprovacoes(db, evento.id)) == ["pendente", "rejeitado"]


def test_banco_recusa_segunda_pendencia(db, criar_evento, criar_aprovacao):
    evento = criar_evento()
    criar_aprovacao(evento.id)

    db.add(Aprovacao(evento_id=evento.id, tipo="evento", status="pendente"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_garantir_engole_erro_do_banco(db, criar_evento, monkeypatch, caplog):
    evento = criar_evento(status="aguardando_aprovacao")

    def _falha(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("conexão perdida"))

    monkeypatch.setattr(db, "query", _falha)
    with caplog.at_level(logging.ERROR):
        garantir_solicitacao_aprovacao(db, evento)

    assert "conexão perdida" in caplog.text


# --- Decisão ----------------------------------------------------------------

def test_aprovar_leva_evento_para_execucao(db, admin, criar_evento, criar_aprovacao):
    evento = criar_evento(status="aguardando_aprovacao")
    pendente = criar_aprovacao(evento.id)

    aprovacao = decidir_aprovacao(db, pendente.id, "aprovado", aprovador_id=admin.id)

    assert aprovacao.status == "aprovado"
    assert aprovacao.data_resposta is not None
    assert aprovacao.aprovador_id == admin.id
    assert aprovacao.observacoes is None
    assert _status_evento(db, evento.id) == "execucao"


def test_rejeitar_devolve_para_orcamento(db, criar_evento, criar_aprovacao):
    evento = criar_evento(status="aguardando_aprovacao")
    pendente = criar_aprovacao(evento.id)

    aprovacao = decidir_aprovacao(db, pendente.id, "rejeitado", observacoes="  orçamento incompleto ")

    assert aprovacao.status == "rejeitado"
    assert aprovacao.observacoes == "orçamento incompleto"
    assert _status_evento(db, evento.id) == "geracao_orcamento"


def test_aprovar_orcamento_nao_muda_evento(db, criar_evento, criar_aprovacao):
    evento = criar_evento(status="aguardando_aprovacao")
    pendente = criar_aprovacao(evento.id, tipo="orcamento")

    decidir_aprovacao(db, pendente.id, "aprovado")

    assert _status_evento(db, evento.id) == "aguardando_aprovacao"


def test_rejeitar_orcamento_tambem_devolve_evento(db, criar_evento, criar_aprovacao):
    evento = criar_evento(status="aguardando_aprovacao")
    pendente = criar_aprovacao(evento.id, tipo="orcamento")

    decidir_aprovacao(db, pendente.id, "rejeitado", observacoes="Fornecedor caro")

    assert _status_evento(db, evento.id) == "geracao_orcamento"


@pytest.mark.parametrize("motivo", [None, "", "   "])
def test_rejeitar_sem_motivo_nao_escreve(db, criar_evento, criar_aprovacao, sql_escritas, motivo):
    evento = criar_evento(status="aguardando_aprovacao")
    pendente = criar_aprovacao(evento.id)
    sql_escritas.clear()

    with pytest.raises(ValidationError):
        decidir_aprovacao(db, pendente.id, "rejeitado", observacoes=motivo)

    assert sql_escritas == []
    assert _aprovacoes(db, evento.id)[0].status == "pendente"
    assert _status_evento(db, evento.id) == "aguardando_aprovacao"


@pytest.mark.parametrize("decisao", ["pendente", "talvez"])
def test_decisao_invalida(db, criar_evento, criar_aprovacao, decisao):
    pendente = criar_aprovacao(criar_evento().id)
    with pytest.raises(ValidationError):
        decidir_aprovacao(db, pendente.id, decisao)


def test_aprovacao_ja_decidida_gera_conflito(db, criar_evento, criar_aprovacao):
    evento = criar_evento(status="aguardando_aprovacao")
    pendente = criar_aprovacao(evento.id)
    decidir_aprovacao(db, pendente.id, "aprovado")

    with pytest.raises(ConflictError) as exc:
        decidir_aprovacao(db, pendente.id, "rejeitado", observacoes="Mudei de ideia")

    assert exc.value.status_http == 409
    assert _status_evento(db, evento.id) == "execucao"


def test_aprovacao_inexistente(db):
    with pytest.raises(NotFoundError):
        decidir_aprovacao(db, 4242, "aprovado")


def test_aprovacao_sem_evento_so_registra_decisao(db, criar_aprovacao):
    pendente = criar_aprovacao(None)

    aprovacao = decidir_aprovacao(db, pendente.id, "rejeitado", observacoes="Evento excluído")

    assert aprovacao.status == "rejeitado"
    assert aprovacao.evento_id is None


def test_excluir_evento_preserva_aprovacoes(db, criar_evento, criar_aprovacao):
    evento = criar_evento()
    pendente = criar_aprovacao(evento.id)

    db.delete(evento)
    db.commit()

    db.expire_all()
    restante = db.query(Aprovacao).filter(Aprovacao.id == pendente.id).one()
    assert restante.evento_id is None
