# -*- coding: utf-8 -*-
"""
Configuração da aplicação lida das variáveis de ambiente (e do arquivo .env).
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _lista(valor):
    return [item.strip() for item in valor.split(",") if item.strip()]


NIVEIS_LOG = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _nivel_log(valor):
    nivel = (valor or "").strip().upper()
    return nivel if nivel in NIVEIS_LOG else "INFO"


def _montar_database_url():
    url = os.environ.get("DATABASE_URL")
    if url:
        # Render/Heroku ainda entregam o prefixo antigo
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        return url

    host = os.environ.get("DB_HOST", "localhost")
    port = os.environ.get("DB_PORT", "5432")
    name = os.environ.get("DB_NAME", "certificacoes")
    user = os.environ.get("DB_USER", "postgres")
    password = os.environ.get("DB_PASSWORD", "")
    return f"postgresql://{user}:{password}@{host}:{port}/{name}"


class Config:
    DATABASE_URL = _montar_database_url()

    DB_POOL_SIZE = int(os.environ.get("DB_POOL_SIZE", "10"))
    DB_MAX_OVERFLOW = int(os.environ.get("DB_MAX_OVERFLOW", "5"))
    DB_POOL_TIMEOUT = int(os.environ.get("DB_POOL_TIMEOUT", "30"))
    DB_STATEMENT_TIMEOUT_MS = int(os.environ.get("DB_STATEMENT_TIMEOUT_MS", "15000"))

    PORT = int(os.environ.get("PORT", "3001"))
    ENVIRONMENT = os.environ.get("ENVIRONMENT") or os.environ.get("NODE_ENV") or "development"
    API_PREFIX = os.environ.get("API_PREFIX", "/api")

    CORS_ORIGINS = _lista(os.environ.get(
        "CORS_ORIGINS",
        "http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173",
    ))

    LOG_LEVEL = _nivel_log(os.environ.get("LOG_LEVEL", "INFO"))
    LOG_FILE = os.environ.get("LOG_FILE") or None


settings = Config()
