# -*- coding: utf-8 -*-
"""
Fixtures dos testes: API completa sobre um SQLite em memória.
"""
import os

# Antes de importar a aplicação: o engine é criado no import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import main
from certificacoes.database import Base, get_db


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    main.app.dependency_overrides[get_db] = override_get_db
    with TestClient(main.app) as c:
        yield c
    main.app.dependency_overrides.clear()


@pytest.fixture
def criar_turma(client):
    def _criar(nome="Turma Teste", **dados):
        resp = client.post("/api/turmas", json={"nome": nome, **dados})
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _criar


@pytest.fixture
def criar_lancamento(client):
    def _criar(turma_id, tipo="Saída", **dados):
        corpo = {
            "categoria": "Material",
            "descricao": "Apostilas",
            "quantidade": 1,
            "valor_unitario": "100,00",
            "tipo": tipo,
            "data": "10/03/2024",
            "turma_id": turma_id,
        }
        corpo.update(dados)
        resp = client.post("/api/financeiro", json=corpo)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _criar


@pytest.fixture
def criar_aluno(client):
    def _criar(turma_id, nome="Maria Souza", **dados):
        resp = client.post("/api/alunos", json={"nome": nome, "turma_id": turma_id, **dados})
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _criar
