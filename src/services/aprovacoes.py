# src/services/aprovacoes.py
# -*- coding: utf-8 -*-
"""
Solicitações e decisões de aprovação de eventos.

- garantir_solicitacao_aprovacao: efeito colateral de segundo plano; loga e
  engole qualquer erro do banco.
- decidir_aprovacao: ação de primeiro plano; levanta erros de domínio para a
  rota transformar em resposta HTTP.
"""
import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.aprovacao import Aprovacao
from src.models.evento import Evento
from src.models.enums import StatusAprovacao, StatusEvento, TipoAprovacao
from src.services.erros import ConflictError, NotFoundError, StoreError, ValidationError

logger = logging.getLogger(__name__)


def garantir_solicitacao_aprovacao(db: Session, evento) -> None:
    """
    Garante que exista uma (e só uma) aprovação pendente do tipo "evento"
    para o evento informado. `evento` pode ser o modelo ou qualquer objeto com
    id, solicitante_id, responsavel_id e equipe_id; None é ignorado.
    """
    if evento is None:
        return

    try:
        evento_id = evento.id
        if not evento_id:
            return

        existente = db.query(Aprovacao.id).filter(
            Aprovacao.evento_id == evento_id,
            Aprovacao.tipo == TipoAprovacao.EVENTO.value,
            Aprovacao.status == StatusAprovacao.PENDENTE.value,
        ).first()
        if existente is not None:
            return

        solicitante_id = evento.solicitante_id
        if solicitante_id is None:
            solicitante_id = evento.responsavel_id

        db.add(Aprovacao(
            evento_id=evento_id,
            tipo=TipoAprovacao.EVENTO.value,
            status=StatusAprovacao.PENDENTE.value,
            solicitante_id=solicitante_id,
            equipe_id=evento.equipe_id,
        ))
        db.commit()
        logger.info(f"Solicitação de aprovação criada para o evento {evento_id}.")
    except IntegrityError as e:
        # Outra chamada criou a pendência entre a verificação e o insert
        db.rollback()
        logger.info(f"Solicitação de aprovação não criada (violação de integridade): {e}")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Erro ao verificar aprovações pendentes: {e}")


def decidir_aprovacao(db: Session, aprovacao_id: int, decisao: str,
                      observacoes: str = None, aprovador_id: int = None) -> Aprovacao:
    """
    Registra a decisão (aprovado/rejeitado) de uma aprovação pendente e
    encaminha o evento associado:

    - aprovado + tipo "evento" -> evento em execucao
    - rejeitado (qualquer tipo) -> evento volta para geracao_orcamento

    A rejeição exige motivo. Uma aprovação só sai de "pendente" uma vez.
    Se a atualização do evento falhar, a decisão já gravada permanece.
    """
    try:
        decisao = StatusAprovacao(decisao)
    except ValueError:
        raise ValidationError(f"Decisão inválida: {decisao}")
    if decisao == StatusAprovacao.PENDENTE:
        raise ValidationError("A decisão deve ser 'aprovado' ou 'rejeitado'.")

    nota = (observacoes or "").strip()
    if decisao == StatusAprovacao.REJEITADO and not nota:
        raise ValidationError("Informe o motivo da rejeição.")

    try:
        aprovacao = db.query(Aprovacao).filter(Aprovacao.id == aprovacao_id).first()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Erro ao carregar aprovação {aprovacao_id}: {e}")
        raise StoreError("Não foi possível carregar a aprovação.") from e

    if aprovacao is None:
        raise NotFoundError("Aprovação não encontrada")
    if aprovacao.status != StatusAprovacao.PENDENTE:
        raise ConflictError("Esta aprovação já foi decidida.")

    evento_id = aprovacao.evento_id
    tipo = aprovacao.tipo

    try:
        linhas = db.query(Aprovacao).filter(
            Aprovacao.id == aprovacao_id,
            Aprovacao.status == StatusAprovacao.PENDENTE.value,
        ).update({
            Aprovacao.status: decisao.value,
            Aprovacao.data_resposta: datetime.utcnow(),
            Aprovacao.aprovador_id: aprovador_id,
            Aprovacao.observacoes: nota or None,
        }, synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Erro ao registrar decisão da aprovação {aprovacao_id}: {e}")
        raise StoreError("Não foi possível registrar a decisão. Tente novamente.") from e

    if linhas == 0:
        raise ConflictError("Esta aprovação já foi decidida.")

    novo_status = None
    if evento_id is not None:
        if decisao == StatusAprovacao.APROVADO and tipo == TipoAprovacao.EVENTO:
            novo_status = StatusEvento.EXECUCAO
        elif decisao == StatusAprovacao.REJEITADO:
            novo_status = StatusEvento.GERACAO_ORCAMENTO

    if novo_status is not None:
        try:
            db.query(Evento).filter(Evento.id == evento_id).update(
                {Evento.status: novo_status.value}, synchronize_session=False
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Erro ao atualizar status do evento {evento_id} após decisão: {e}")
            raise StoreError(
                "Decisão registrada, mas não foi possível atualizar o status do evento."
            ) from e
        logger.info(f"Aprovação {aprovacao_id} {decisao.value}: evento {evento_id} -> {novo_status.value}")

    db.refresh(aprovacao)
    return aprovacao
