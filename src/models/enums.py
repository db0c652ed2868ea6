# src/models/enums.py
# -*- coding: utf-8 -*-
"""
Enumerações compartilhadas pelos modelos.

São StrEnum: os valores comparam como strings, então o que vem do banco
(``evento.status == "input"``) e o que vem do enum se misturam sem conversão.
"""
from enum import StrEnum


class StatusEvento(StrEnum):
    """Etapas do fluxo de um evento.

    A ordem de declaração é a ordem do fluxo. As quatro primeiras etapas são
    as "automáticas": só elas podem ser atribuídas pela sincronização de
    progresso. ``execucao``, ``pos_evento`` e ``cancelado`` só mudam por ação
    humana (edição do evento ou decisão de aprovação).
    """

    INPUT = "input"
    CRIACAO_TAREFAS = "criacao_tarefas"
    GERACAO_ORCAMENTO = "geracao_orcamento"
    AGUARDANDO_APROVACAO = "aguardando_aprovacao"
    EXECUCAO = "execucao"
    POS_EVENTO = "pos_evento"
    CANCELADO = "cancelado"

    @property
    def ordem(self) -> int:
        return list(StatusEvento).index(self)

    @property
    def automatico(self) -> bool:
        return self in STATUS_AUTOMATICOS


STATUS_AUTOMATICOS = (
    StatusEvento.INPUT,
    StatusEvento.CRIACAO_TAREFAS,
    StatusEvento.GERACAO_ORCAMENTO,
    StatusEvento.AGUARDANDO_APROVACAO,
)


class StatusTarefa(StrEnum):
    PENDENTE = "pendente"
    EM_ANDAMENTO = "em_andamento"
    CONCLUIDA = "concluida"
    CANCELADA = "cancelada"


class StatusAprovacao(StrEnum):
    PENDENTE = "pendente"
    APROVADO = "aprovado"
    REJEITADO = "rejeitado"


class TipoAprovacao(StrEnum):
    EVENTO = "evento"
    ORCAMENTO = "orcamento"


class Prioridade(StrEnum):
    BAIXA = "baixa"
    MEDIA = "media"
    ALTA = "alta"
    URGENTE = "urgente"


class Papel(StrEnum):
    ADMIN = "admin"
    GESTOR = "gestor"
    MEMBRO = "membro"
    PENDENTE = "pendente"
