# src/services/progresso_evento.py
# -*- coding: utf-8 -*-
"""
Sincronização automática do status de um evento a partir das suas tarefas e
itens de orçamento.

Roda depois de cada mutação de tarefa ou orçamento. Nunca levanta exceção:
qualquer falha é logada e devolvida em um ResultadoSincronizacao, que o
chamador pode simplesmente descartar.
"""
import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.evento import Evento
from src.models.orcamento_item import OrcamentoItem
from src.models.tarefa import Tarefa
from src.models.enums import STATUS_AUTOMATICOS, StatusEvento, StatusTarefa
from src.services.aprovacoes import garantir_solicitacao_aprovacao

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultadoSincronizacao:
    ok: bool
    codigo: str  # sem_evento, nao_encontrado, fora_do_fluxo, sem_alteracao, avancado, concorrente, erro_store
    status_anterior: Optional[str] = None
    status_novo: Optional[str] = None


class _DadosSolicitacao(NamedTuple):
    id: int
    solicitante_id: Optional[int]
    responsavel_id: Optional[int]
    equipe_id: Optional[int]


def calcular_status_alvo(total_tarefas: int, total_itens: int, ha_tarefas_pendentes: bool) -> StatusEvento:
    """Regra de precedência: cada condição verdadeira sobrescreve a anterior."""
    alvo = StatusEvento.INPUT
    if total_tarefas > 0:
        alvo = StatusEvento.CRIACAO_TAREFAS
    if total_itens > 0:
        alvo = StatusEvento.GERACAO_ORCAMENTO
    if total_itens > 0 and total_tarefas > 0 and not ha_tarefas_pendentes:
        alvo = StatusEvento.AGUARDANDO_APROVACAO
    return alvo


def sincronizar_progresso_evento(db: Session, evento_id: Optional[int]) -> ResultadoSincronizacao:
    if not evento_id:
        return ResultadoSincronizacao(False, "sem_evento")

    try:
        evento = db.query(Evento).filter(Evento.id == evento_id).first()
        if evento is None:
            logger.warning(f"Evento {evento_id} não encontrado para sincronizar status.")
            return ResultadoSincronizacao(False, "nao_encontrado")

        if evento.status not in STATUS_AUTOMATICOS:
            return ResultadoSincronizacao(True, "fora_do_fluxo", evento.status, evento.status)

        atual = StatusEvento(evento.status)
        dados = _DadosSolicitacao(evento.id, evento.solicitante_id, evento.responsavel_id, evento.equipe_id)

        status_tarefas = [status for (status,) in db.query(Tarefa.status).filter(Tarefa.evento_id == evento_id).all()]
        total_itens = db.query(func.count(OrcamentoItem.id)).filter(OrcamentoItem.evento_id == evento_id).scalar() or 0
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Não foi possível carregar o evento {evento_id} para sincronizar status: {e}")
        return ResultadoSincronizacao(False, "erro_store")

    ha_pendentes = any(status != StatusTarefa.CONCLUIDA for status in status_tarefas)
    alvo = calcular_status_alvo(len(status_tarefas), total_itens, ha_pendentes)

    # Cobre a aprovação que se perdeu ou nunca foi criada
    if atual == StatusEvento.AGUARDANDO_APROVACAO:
        garantir_solicitacao_aprovacao(db, dados)

    if alvo.ordem <= atual.ordem:
        return ResultadoSincronizacao(True, "sem_alteracao", atual.value, atual.value)

    # Só avança se o evento ainda estiver numa etapa automática anterior ao alvo
    anteriores = [status.value for status in STATUS_AUTOMATICOS if status.ordem < alvo.ordem]
    try:
        linhas = db.query(Evento).filter(
            Evento.id == evento_id,
            Evento.status.in_(anteriores),
        ).update({Evento.status: alvo.value}, synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Erro ao sincronizar status do evento {evento_id}: {e}")
        return ResultadoSincronizacao(False, "erro_store", atual.value)

    if linhas == 0:
        logger.info(f"Evento {evento_id} mudou de status durante a sincronização; nada alterado.")
        return ResultadoSincronizacao(False, "concorrente", atual.value)

    logger.info(f"Evento {evento_id}: status {atual.value} -> {alvo.value}")

    if alvo == StatusEvento.AGUARDANDO_APROVACAO:
        garantir_solicitacao_aprovacao(db, dados)

    return ResultadoSincronizacao(True, "avancado", atual.value, alvo.value)
