# -*- coding: utf-8 -*-
"""
Rotas dos vínculos financeiro-aluno e financeiro-turma.
"""
from decimal import Decimal


def test_vinculo_aluno_crud(client, criar_turma, criar_aluno, criar_lancamento):
    turma = criar_turma("Turma CEA")
    aluno = criar_aluno(turma["id"], nome="Paula Nunes", email="paula@example.com", cpf="111.222.333-44")
    lancamento = criar_lancamento(turma["id"], tipo="Entrada", categoria="Parcela", valor_unitario="450,00")

    resp = client.post("/api/financeiro-aluno", json={
        "aluno_id": aluno["id"],
        "financeiro_id": lancamento["id"],
        "turma_id": turma["id"],
        "valor_matricula": "450,00",
        "data": "10/03/2024",
    })
    assert resp.status_code == 201, resp.text
    criado = resp.json()
    assert criado["tipo"] == "Entrada"
    assert criado["aluno_nome"] == "Paula Nunes"
    assert criado["aluno_email"] == "paula@example.com"
    assert criado["cpf"] == "111.222.333-44"
    assert criado["categoria"] == "Parcela"
    assert criado["turma_nome"] == "Turma CEA"
    assert criado["data"] == "10/03/2024"
    assert Decimal(criado["valor_matricula"]) == Decimal("450.00")

    assert len(client.get("/api/financeiro-aluno").json()) == 1
    assert len(client.get(f"/api/financeiro-aluno/aluno/{aluno['id']}").json()) == 1
    assert len(client.get(f"/api/financeiro-aluno/turma/{turma['id']}").json()) == 1
    assert client.get("/api/financeiro-aluno/aluno/outro").json() == []

    resp = client.delete(f"/api/financeiro-aluno/{aluno['id']}/{lancamento['id']}")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Relação deletada com sucesso"
    assert resp.json()["relacao"]["aluno_id"] == aluno["id"]
    assert client.get("/api/financeiro-aluno").json() == []


def test_vinculo_aluno_erros(client, criar_turma, criar_aluno, criar_lancamento):
    turma = criar_turma()
    aluno = criar_aluno(turma["id"])
    lancamento = criar_lancamento(turma["id"], tipo="Entrada")

    resp = client.post("/api/financeiro-aluno", json={"aluno_id": aluno["id"]})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Campos obrigatórios não preenchidos"

    resp = client.post("/api/financeiro-aluno", json={
        "aluno_id": aluno["id"], "financeiro_id": "nao-existe", "turma_id": turma["id"],
    })
    assert resp.status_code == 400
    assert resp.json()["error"] == "Referência inválida"

    corpo = {"aluno_id": aluno["id"], "financeiro_id": lancamento["id"], "turma_id": turma["id"]}
    assert client.post("/api/financeiro-aluno", json=corpo).status_code == 201
    resp = client.post("/api/financeiro-aluno", json=corpo)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Relação duplicada"

    resp = client.delete(f"/api/financeiro-aluno/{aluno['id']}/outro")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Relação não encontrada", "details": None}


def test_vinculo_turma_crud(client, criar_turma, criar_lancamento):
    t1, t2 = criar_turma("Turma A", data_evento="20/06/2024"), criar_turma("Turma B")
    lancamento = criar_lancamento(t1["id"], categoria="Buffet", valor_unitario="600,00")

    # O lançamento já nasce vinculado à turma A
    vinculos = client.get(f"/api/financeiro-turma/turma/{t1['id']}").json()
    assert len(vinculos) == 1
    assert vinculos[0]["categoria"] == "Buffet"
    assert vinculos[0]["turma_nome"] == "Turma A"
    assert vinculos[0]["data_evento"] == "20/06/2024"
    assert Decimal(vinculos[0]["valor_total"]) == Decimal("600.00")

    resp = client.post("/api/financeiro-turma", json={
        "financeiro_id": lancamento["id"], "turma_id": t2["id"], "valor": "600,00",
    })
    assert resp.status_code == 201, resp.text
    assert resp.json()["tipo"] == "Saída"
    assert len(client.get("/api/financeiro-turma").json()) == 2

    resp = client.post("/api/financeiro-turma", json={"financeiro_id": lancamento["id"], "turma_id": t2["id"]})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Relação duplicada"

    resp = client.delete(f"/api/financeiro-turma/{lancamento['id']}/{t2['id']}")
    assert resp.status_code == 200
    assert resp.json()["relacao"]["turma_id"] == t2["id"]
    assert client.delete(f"/api/financeiro-turma/{lancamento['id']}/{t2['id']}").status_code == 404


def test_vinculo_turma_erros(client, criar_turma):
    turma = criar_turma()
    resp = client.post("/api/financeiro-turma", json={"turma_id": turma["id"]})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Campos obrigatórios não preenchidos"

    resp = client.post("/api/financeiro-turma", json={"financeiro_id": "x", "turma_id": turma["id"]})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Referência inválida"
