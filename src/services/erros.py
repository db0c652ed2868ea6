# src/services/erros.py
# -*- coding: utf-8 -*-
"""
Erros de domínio levantados pelas operações de primeiro plano.

Cada erro carrega o status HTTP com que as rotas o devolvem; a sincronização
de progresso e a garantia de solicitação de aprovação nunca os propagam.
"""


class ErroDominio(Exception):
    status_http = 500

    def __init__(self, mensagem):
        super().__init__(mensagem)
        self.mensagem = mensagem


class NotFoundError(ErroDominio):
    """Evento ou aprovação inexistente."""
    status_http = 404


class ValidationError(ErroDominio):
    """Entrada inválida; nenhuma escrita foi feita."""
    status_http = 400


class ConflictError(ErroDominio):
    """O registro já saiu do estado exigido pela operação."""
    status_http = 409


class StoreError(ErroDominio):
    """Falha de rede ou de restrição vinda do banco."""
    status_http = 500
