# src/services/orcamento.py
# -*- coding: utf-8 -*-
"""
Cálculo de totais de itens de orçamento.
"""
import math


def _numero(valor):
    """Converte para float; ausente ou não numérico vale 0."""
    if valor is None:
        return 0.0
    try:
        numero = float(valor)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(numero) or math.isinf(numero):
        return 0.0
    return numero


def total_item(item):
    """
    Total efetivo de um item: o valor_total gravado, se for maior que zero;
    senão quantidade x valor_unitario.
    Aceita tanto o modelo quanto um dicionário.
    """
    if isinstance(item, dict):
        get = item.get
    else:
        get = lambda campo: getattr(item, campo, None)

    gravado = _numero(get("valor_total"))
    if gravado > 0:
        return gravado
    return _numero(get("quantidade")) * _numero(get("valor_unitario"))


def _aprovado(item):
    if isinstance(item, dict):
        return bool(item.get("aprovado"))
    return bool(getattr(item, "aprovado", False))


def totais_orcamento(itens):
    total_geral = sum(total_item(item) for item in itens)
    total_aprovado = sum(total_item(item) for item in itens if _aprovado(item))
    return {
        "total_geral": total_geral,
        "total_aprovado": total_aprovado,
        "total_pendente": total_geral - total_aprovado,
    }
