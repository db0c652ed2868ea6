import logging
from collections import Counter

import pytest
from sqlalchemy.exc import OperationalError

from src.models.aprovacao import Aprovacao
from src.models.enums import StatusEvento
from src.models.evento import Evento
from src.services.progresso_evento import calcular_status_alvo, sincronizar_progresso_evento
from sincronizar_eventos import sincronizar_eventos


def _status(db, evento_id):
    db.expire_all()
    return db.query(Evento).filter(Evento.id == evento_id).one().status


def _pendentes(db, evento_id):
    return db.query(Aprovacao).filter(
        Aprovacao.evento_id == evento_id,
        Aprovacao.tipo == "evento",
        Aprovacao.status == "pendente",
    ).all()


@pytest.mark.parametrize("tarefas,itens,pendentes,esperado", [
    (0, 0, False, StatusEvento.INPUT),
    (3, 0, True, StatusEvento.CRIACAO_TAREFAS),
    (0, 2, False, StatusEvento.GERACAO_ORCAMENTO),
    (2, 1, True, StatusEvento.GERACAO_ORCAMENTO),
    (2, 1, False, StatusEvento.AGUARDANDO_APROVACAO),
])
def test_calcular_status_alvo(tarefas, itens, pendentes, esperado):
    assert calcular_status_alvo(tarefas, itens, pendentes) == esperado


def test_sem_evento_id_nao_consulta_banco(db, sql_escritas):
    resultado = sincronizar_progresso_evento(db, None)
    assert not resultado.ok
    assert resultado.codigo == "sem_evento"
    assert sql_escritas == []


def test_evento_inexistente_loga_aviso(db, caplog):
    with caplog.at_level(logging.WARNING):
        resultado = sincronizar_progresso_evento(db, 999)
    assert resultado.codigo == "nao_encontrado"
    assert not resultado.ok
    assert "999" in caplog.text


def test_evento_vazio_continua_em_input(db, criar_evento, sql_escritas):
    evento = criar_evento()
    sql_escritas.clear()

    resultado = sincronizar_progresso_evento(db, evento.id)

    assert resultado.codigo == "sem_alteracao"
    assert _status(db, evento.id) == "input"
    assert sql_escritas == []


def test_tarefas_sem_orcamento_vai_para_criacao_tarefas(db, criar_evento, criar_tarefa):
    evento = criar_evento()
    criar_tarefa(evento.id, status="concluida")
    criar_tarefa(evento.id)
    criar_tarefa(evento.id)

    resultado = sincronizar_progresso_evento(db, evento.id)

    assert resultado.ok
    assert resultado.codigo == "avancado"
    assert (resultado.status_anterior, resultado.status_novo) == ("input", "criacao_tarefas")
    assert _status(db, evento.id) == "criacao_tarefas"
    assert _pendentes(db, evento.id) == []


def test_tudo_concluido_com_orcamento_pede_aprovacao(db, admin, criar_evento, criar_tarefa, criar_item):
    evento = criar_evento(status="geracao_orcamento", responsavel_id=admin.id)
    criar_tarefa(evento.id, status="concluida")
    criar_tarefa(evento.id, status="concluida")
    criar_item(evento.id)
    criar_item(evento.id, quantidade=2, valor_unitario=50)

    resultado = sincronizar_progresso_evento(db, evento.id)

    assert resultado.codigo == "avancado"
    assert _status(db, evento.id) == "aguardando_aprovacao"
    pendentes = _pendentes(db, evento.id)
    assert len(pendentes) == 1
    # Sem solicitante, quem solicita é o responsável
    assert pendentes[0].solicitante_id == admin.id


def test_segunda_sincronizacao_nao_escreve(db, criar_evento, criar_tarefa, criar_item, sql_escritas):
    evento = criar_evento()
    criar_tarefa(evento.id, status="concluida")
    criar_item(evento.id)
    assert sincronizar_progresso_evento(db, evento.id).codigo == "avancado"
    sql_escritas.clear()

    resultado = sincronizar_progresso_evento(db, evento.id)

    assert resultado.codigo == "sem_alteracao"
    assert sql_escritas == []
    assert len(_pendentes(db, evento.id)) == 1


def test_status_nunca_regride(db, criar_evento, criar_tarefa):
    # Só tarefas pendentes apontariam para criacao_tarefas
    evento = criar_evento(status="geracao_orcamento")
    criar_tarefa(evento.id)

    resultado = sincronizar_progresso_evento(db, evento.id)

    assert resultado.codigo == "sem_alteracao"
    assert _status(db, evento.id) == "geracao_orcamento"


def test_tarefa_reaberta_nao_tira_evento_de_aguardando(db, criar_evento, criar_tarefa, criar_item, criar_aprovacao):
    evento = criar_evento(status="aguardando_aprovacao")
    criar_aprovacao(evento.id)
    criar_tarefa(evento.id, status="em_andamento")
    criar_item(evento.id)

    sincronizar_progresso_evento(db, evento.id)

    assert _status(db, evento.id) == "aguardando_aprovacao"


@pytest.mark.parametrize("status", ["execucao", "pos_evento", "cancelado"])
def test_etapas_manuais_ficam_fora_do_fluxo(db, criar_evento, criar_tarefa, criar_item, sql_escritas, status):
    evento = criar_evento(status=status)
    criar_tarefa(evento.id, status="concluida")
    criar_item(evento.id)
    sql_escritas.clear()

    resultado = sincronizar_progresso_evento(db, evento.id)

    assert resultado.ok
    assert resultado.codigo == "fora_do_fluxo"
    assert _status(db, evento.id) == status
    assert _pendentes(db, evento.id) == []
    assert sql_escritas == []


def test_aguardando_sem_aprovacao_recria_solicitacao(db, criar_evento, criar_tarefa, criar_item):
    evento = criar_evento(status="aguardando_aprovacao")
    criar_tarefa(evento.id, status="concluida")
    criar_item(evento.id)

    resultado = sincronizar_progresso_evento(db, evento.id)

    assert resultado.codigo == "sem_alteracao"
    assert len(_pendentes(db, evento.id)) == 1


def test_falha_do_banco_vira_resultado(db, criar_evento, monkeypatch, caplog):
    evento = criar_evento()

    def _falha(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("banco indisponível"))

    monkeypatch.setattr(db, "query", _falha)
    with caplog.at_level(logging.ERROR):
        resultado = sincronizar_progresso_evento(db, evento.id)

    assert not resultado.ok
    assert resultado.codigo == "erro_store"
    assert "banco indisponível" in caplog.text


def test_sincronizacao_em_lote_ignora_etapas_manuais(db, criar_evento, criar_tarefa):
    com_tarefa = criar_evento()
    criar_tarefa(com_tarefa.id)
    criar_evento()
    em_execucao = criar_evento(status="execucao")
    criar_tarefa(em_execucao.id, status="concluida")

    contagem = sincronizar_eventos()

    assert contagem == Counter({"avancado": 1, "sem_alteracao": 1})
    assert _status(db, com_tarefa.id) == "criacao_tarefas"
    assert _status(db, em_execucao.id) == "execucao"
