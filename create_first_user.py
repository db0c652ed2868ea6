import logging

from src.config import Config
from src.database import SessionLocal
from src.auth import get_password_hash
from src.models.perfil import Perfil
from src.models.enums import Papel

# Importação dos outros modelos para garantir que o SQLAlchemy registre tudo
from src.models.departamento import Departamento
from src.models.equipe import Equipe, EquipeMembro
from src.models.evento import Evento
from src.models.tarefa import Tarefa
from src.models.orcamento_item import OrcamentoItem
from src.models.aprovacao import Aprovacao

def create_first_user():
    """
    Cria o administrador inicial se ainda não existir nenhum perfil admin.
    """
    senha = Config.ADMIN_PASSWORD
    if not senha:
        if Config.ENVIRONMENT == "production":
            logging.warning("ADMIN_PASSWORD não configurada; administrador inicial não será criado em produção.")
            return
        logging.warning("ADMIN_PASSWORD não configurada; usando a senha padrão de desenvolvimento.")
        senha = "admin"

    db = SessionLocal()

    try:
        admin = db.query(Perfil).filter(Perfil.papel == Papel.ADMIN.value).first()

        if not admin:
            logging.info("Criando primeiro perfil administrador...")
            db_perfil = Perfil(
                email=Config.ADMIN_EMAIL,
                nome="Administrador",
                hashed_password=get_password_hash(senha),
                papel=Papel.ADMIN.value,
                ativo=True
            )
            db.add(db_perfil)
            db.commit()
            logging.info(f"Perfil administrador criado: {Config.ADMIN_EMAIL}")
        else:
            logging.info(f"Perfil administrador já existe: {admin.email}")

    except Exception as e:
        logging.error(f"Erro ao criar perfil administrador: {e}")
        db.rollback()
    finally:
        db.close()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    create_first_user()
