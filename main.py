# -*- coding: utf-8 -*-
"""
Arquivo principal da aplicação FastAPI para a administração de certificações:
alunos, turmas e o livro-caixa (financeiro).
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from certificacoes.config import settings
from certificacoes.database import engine, Base, SessionLocal
from certificacoes.errors import registrar_handlers

from certificacoes.models import aluno, aluno_turma, turma, financeiro, financeiro_aluno, financeiro_turma

from certificacoes.routes import (alunos_fastapi, turmas_fastapi, financeiro_fastapi,
                                  financeiro_aluno_fastapi, financeiro_turma_fastapi)


logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    filename=settings.LOG_FILE
)
logger = logging.getLogger(__name__)

# Cria as tabelas no banco de dados com tratamento de erros
try:
    Base.metadata.create_all(bind=engine)
    logger.info("Tabelas verificadas/criadas com sucesso")
except Exception as e:
    logger.error("Erro ao criar tabelas: %s", e)


env = settings.ENVIRONMENT

docs_url = "/docs" if env != "production" else None
redoc_url = "/redoc" if env != "production" else None

# Inicializa a aplicação FastAPI
app = FastAPI(
    title="API Certificações",
    description="API para gerenciamento de alunos, turmas e financeiro de cursos de certificação",
    version="1.0.0",
    docs_url=docs_url,   # Será None em produção (desativa /docs)
    redoc_url=redoc_url, # Será None em produção (desativa /redoc)
    openapi_url="/openapi.json" if env != "production" else None
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

registrar_handlers(app)

prefix = settings.API_PREFIX

# Montagem dos routers
app.include_router(alunos_fastapi.router, prefix=f"{prefix}/alunos")
app.include_router(turmas_fastapi.router, prefix=f"{prefix}/turmas")
app.include_router(financeiro_fastapi.router, prefix=f"{prefix}/financeiro")
app.include_router(financeiro_aluno_fastapi.router, prefix=f"{prefix}/financeiro-aluno")
app.include_router(financeiro_turma_fastapi.router, prefix=f"{prefix}/financeiro-turma")


@app.get(f"{prefix}/health", tags=["Root"])
def health():
    """Responde se a API está de pé e se o banco aceita consultas."""
    banco = "ok"
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Health check sem banco: %s", e)
        banco = "indisponível"
    finally:
        db.close()
    return {"status": "ok", "database": banco, "environment": env}


@app.get("/", tags=["Root"])
async def root():
    return {
        "mensagem": "API Certificações - Sistema de Gerenciamento",
        "documentacao": docs_url,
        "endpoints": [
            {"alunos": f"{prefix}/alunos"},
            {"turmas": f"{prefix}/turmas"},
            {"financeiro": f"{prefix}/financeiro"},
            {"financeiro_aluno": f"{prefix}/financeiro-aluno"},
            {"financeiro_turma": f"{prefix}/financeiro-turma"},
        ]
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT, reload=env != "production")
