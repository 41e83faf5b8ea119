# -*- coding: utf-8 -*-
"""
Configuração do banco de dados SQLAlchemy para a aplicação FastAPI.
"""

from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from certificacoes.config import settings

DATABASE_URL = settings.DATABASE_URL


def _engine_kwargs(url):
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}

    kwargs = {
        # pool_pre_ping=True: verifica se a conexão está viva antes de usar
        "pool_pre_ping": True,
        # pool_recycle: recicla conexões a cada hora para evitar timeouts do banco
        "pool_recycle": 3600,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
    }
    if url.startswith("postgresql"):
        kwargs["connect_args"] = {
            "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"
        }
    return kwargs


engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


@event.listens_for(Engine, "connect")
def _sqlite_foreign_keys(dbapi_connection, connection_record):
    # O SQLite só respeita FOREIGN KEY com o pragma ligado por conexão
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Função para obter uma sessão do banco de dados (usada com Depends)
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transacao(db):
    """
    Bloco transacional da requisição: commit ao final, rollback em qualquer erro.
    Todas as escritas de uma operação (lançamento + vínculo, aluno + venda...)
    ficam no mesmo commit.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
