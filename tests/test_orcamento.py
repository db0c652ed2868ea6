import pytest

from src.services.orcamento import total_item, totais_orcamento


def test_valor_total_gravado_prevalece():
    assert total_item({"valor_total": 250.0, "quantidade": 2, "valor_unitario": 10}) == 250.0


@pytest.mark.parametrize("valor_total", [None, 0, -5])
def test_sem_valor_total_usa_quantidade_vezes_unitario(valor_total):
    item = {"valor_total": valor_total, "quantidade": 3, "valor_unitario": 12.5}
    assert total_item(item) == 37.5


def test_valores_nao_numericos_contam_como_zero():
    assert total_item({"quantidade": "abc", "valor_unitario": 10}) == 0.0
    assert total_item({"quantidade": 2, "valor_unitario": float("nan")}) == 0.0
    assert total_item({}) == 0.0


def test_aceita_modelo(criar_evento, criar_item):
    item = criar_item(criar_evento().id, quantidade=4, valor_unitario=25)
    assert total_item(item) == 100.0


def test_totais_separam_aprovado_e_pendente():
    itens = [
        {"quantidade": 2, "valor_unitario": 100, "aprovado": True},
        {"valor_total": 300, "aprovado": False},
        {"quantidade": 1, "valor_unitario": 50},
    ]
    assert totais_orcamento(itens) == {
        "total_geral": 550.0,
        "total_aprovado": 200.0,
        "total_pendente": 350.0,
    }


def test_totais_de_lista_vazia():
    assert totais_orcamento([]) == {"total_geral": 0, "total_aprovado": 0, "total_pendente": 0}
