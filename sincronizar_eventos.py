import logging
import argparse
from collections import Counter

from sqlalchemy.exc import SQLAlchemyError

# --- Importações de todos os modelos ---
from src.database import SessionLocal
from src.models.departamento import Departamento
from src.models.equipe import Equipe, EquipeMembro
from src.models.perfil import Perfil
from src.models.evento import Evento
from src.models.tarefa import Tarefa
from src.models.orcamento_item import OrcamentoItem
from src.models.aprovacao import Aprovacao
from src.models.enums import STATUS_AUTOMATICOS
from src.services.progresso_evento import sincronizar_progresso_evento
# ------------------------------------------------------


def sincronizar_eventos(evento_id=None):
    """
    Reavalia o status de todos os eventos em etapas automáticas (ou só do
    evento informado). Falhas em um evento não interrompem os demais.
    Retorna a contagem de resultados por código.
    """
    db = SessionLocal()
    contagem = Counter()
    try:
        if evento_id:
            ids = [evento_id]
        else:
            try:
                ids = [id_ for (id_,) in db.query(Evento.id)
                       .filter(Evento.status.in_([s.value for s in STATUS_AUTOMATICOS]))
                       .order_by(Evento.id).all()]
            except SQLAlchemyError as e:
                logging.error(f"Erro ao listar eventos: {e}")
                return contagem

        logging.info(f"Sincronizando {len(ids)} evento(s)...")
        for id_ in ids:
            resultado = sincronizar_progresso_evento(db, id_)
            contagem[resultado.codigo] += 1
            if resultado.codigo == "avancado":
                logging.info(f"-> Evento {id_}: {resultado.status_anterior} -> {resultado.status_novo}")
    finally:
        db.close()

    resumo = ", ".join(f"{codigo}={total}" for codigo, total in sorted(contagem.items()))
    logging.info(f"Sincronização concluída: {resumo or 'nenhum evento'}")
    return contagem


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Sincroniza o status dos eventos com tarefas e orçamentos')
    parser.add_argument('--evento', type=int, help='ID de um evento específico')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    sincronizar_eventos(args.evento)
