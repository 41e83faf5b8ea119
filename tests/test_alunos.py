# -*- coding: utf-8 -*-
"""
Cadastro de alunos: venda lançada no financeiro, inscrição na turma e exclusões.
"""
from decimal import Decimal

from certificacoes.models.aluno import Aluno
from certificacoes.models.aluno_turma import AlunoTurma
from certificacoes.models.financeiro import Financeiro
from certificacoes.models.financeiro_aluno import FinanceiroAluno


def test_cadastro_com_venda_gera_entrada_vinculada(client, db, criar_turma):
    turma = criar_turma("Certificação CPA-20")
    resp = client.post("/api/alunos", json={
        "nome": "João Pereira",
        "email": "joao@example.com",
        "cpf": "123.456.789-00",
        "valor_venda": "1.900,00",
        "parcelas": "10",
        "vendedor": "Carla",
        "data_nascimento": "20/07/1990",
        "turma_id": turma["id"],
    })
    assert resp.status_code == 201, resp.text
    aluno = resp.json()
    assert aluno["status"] == "Em Onboarding"
    assert Decimal(aluno["valor_venda"]) == Decimal("1900.00")
    assert aluno["parcelas"] == 10
    assert aluno["data_nascimento"] == "20/07/1990"

    venda = db.query(Financeiro).one()
    assert venda.tipo == "Entrada"
    assert venda.categoria == "Venda de Curso"
    assert venda.descricao == "Matrícula João Pereira"
    assert venda.valor_total == Decimal("1900.00")
    assert venda.aluno_ref_id == aluno["id"]

    vinculo = db.query(FinanceiroAluno).one()
    assert (vinculo.aluno_id, vinculo.financeiro_id, vinculo.turma_id) == (aluno["id"], venda.id, turma["id"])

    inscricao = db.query(AlunoTurma).one()
    assert inscricao.turma_id == turma["id"]
    assert inscricao.status == "Inscrito"

    resumo = client.get("/api/financeiro/resumo", params={"turma_id": turma["id"]}).json()
    assert {k: Decimal(v) for k, v in resumo.items()} == {
        "entradas": Decimal("1900"),
        "saidas": Decimal("0"),
        "saldo": Decimal("1900"),
    }


def test_cadastro_sem_venda_nao_lanca_financeiro(client, db, criar_turma, criar_aluno):
    criar_aluno(criar_turma()["id"])
    assert db.query(Financeiro).count() == 0
    assert db.query(AlunoTurma).count() == 1


def test_cadastro_exige_turma(client, db):
    resp = client.post("/api/alunos", json={"nome": "Sem Turma", "valor_venda": "100"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Turma é obrigatória"
    assert db.query(Aluno).count() == 0


def test_cadastro_com_turma_inexistente_desfaz_tudo(client, db):
    resp = client.post("/api/alunos", json={"nome": "Fulano", "valor_venda": "100", "turma_id": "fantasma"})
    assert resp.status_code == 400
    assert db.query(Aluno).count() == 0
    assert db.query(Financeiro).count() == 0


def test_email_duplicado(client, db, criar_turma, criar_aluno):
    turma = criar_turma()
    criar_aluno(turma["id"], email="maria@example.com", valor_venda="500")
    resp = client.post("/api/alunos", json={
        "nome": "Outra Maria", "email": "maria@example.com", "valor_venda": "500", "turma_id": turma["id"],
    })
    assert resp.status_code == 400
    assert resp.json() == {"error": "Este email já está cadastrado", "details": "Use um email diferente"}
    assert db.query(Financeiro).count() == 1


def test_email_vazio_nao_conflita(client, criar_turma, criar_aluno):
    turma = criar_turma()
    criar_aluno(turma["id"], nome="A", email="")
    criar_aluno(turma["id"], nome="B", email="   ")


def test_listagem_com_filtros(client, criar_turma, criar_aluno):
    turma = criar_turma()
    criar_aluno(turma["id"], nome="Ana Lima", status="Ativo", vendedor="Carla", data_matricula="01/02/2024")
    criar_aluno(turma["id"], nome="Bruno Dias", status="Concluído", vendedor="Pedro", data_matricula="01/03/2024")
    criar_aluno(turma["id"], nome="Carlos Reis", email="carlos@x.com", status="Inativo", data_matricula="01/01/2024")

    nomes = [a["nome"] for a in client.get("/api/alunos").json()]
    assert nomes == ["Bruno Dias", "Ana Lima", "Carlos Reis"]

    nomes = [a["nome"] for a in client.get("/api/alunos", params={"status": "Ativo, Inativo"}).json()]
    assert nomes == ["Ana Lima", "Carlos Reis"]

    nomes = [a["nome"] for a in client.get("/api/alunos", params={"search": "CARLOS@"}).json()]
    assert nomes == ["Carlos Reis"]

    nomes = [a["nome"] for a in client.get("/api/alunos", params={"vendedor": "Pedro"}).json()]
    assert nomes == ["Bruno Dias"]

    assert [a["nome"] for a in client.get("/api/alunos/status/Concluído").json()] == ["Bruno Dias"]
    assert [a["nome"] for a in client.get("/api/alunos/vendedor/Carla").json()] == ["Ana Lima"]


def test_put_transfere_de_turma_sem_duplicar_inscricao(client, db, criar_turma, criar_aluno):
    t1, t2 = criar_turma("Turma A"), criar_turma("Turma B")
    aluno = criar_aluno(t1["id"])

    resp = client.put(f"/api/alunos/{aluno['id']}", json={
        "nome": "Maria Souza Lima", "status": "Boas-vindas", "turma_id": t2["id"],
    })
    assert resp.status_code == 200, resp.text
    assert resp.json()["nome"] == "Maria Souza Lima"
    assert resp.json()["status"] == "Boas-vindas"

    inscricoes = db.query(AlunoTurma).filter_by(aluno_id=aluno["id"]).all()
    assert [i.turma_id for i in inscricoes] == [t2["id"]]

    alunos_t2 = client.get(f"/api/turmas/{t2['id']}/alunos").json()
    assert [a["id"] for a in alunos_t2] == [aluno["id"]]
    assert client.get(f"/api/turmas/{t1['id']}/alunos").json() == []


def test_patch_campos(client, criar_turma, criar_aluno):
    aluno = criar_aluno(criar_turma()["id"])
    url = f"/api/alunos/{aluno['id']}"

    assert client.patch(url, json={"field": "status", "value": "Envio do Livro"}).json()["status"] == "Envio do Livro"
    assert client.patch(url, json={"field": "data_nascimento", "value": "1985-12-01"}).json()["data_nascimento"] == "01/12/1985"
    assert Decimal(client.patch(url, json={"field": "valor_venda", "value": "2.300,00"}).json()["valor_venda"]) == Decimal("2300")
    assert client.patch(url, json={"field": "pos_graduacao", "value": True}).json()["pos_graduacao"] is True

    resp = client.patch(url, json={"field": "data_matricula", "value": "01/01/2024"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Campo não permitido para atualização"

    resp = client.patch(url, json={"field": "data_nascimento", "value": "40/13/2000"})
    assert resp.status_code == 400


def test_aluno_inexistente(client):
    resp = client.get("/api/alunos/nao-existe")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Aluno não encontrado"
    assert client.patch("/api/alunos/nao-existe", json={"field": "nome", "value": "X"}).status_code == 404


def test_excluir_venda_exclui_o_aluno(client, db, criar_turma, criar_aluno):
    turma = criar_turma()
    aluno = criar_aluno(turma["id"], valor_venda="1.200,00")
    venda = db.query(Financeiro).one()

    resp = client.delete(f"/api/financeiro/{venda.id}")
    assert resp.status_code == 200

    assert client.get(f"/api/alunos/{aluno['id']}").status_code == 404
    assert db.query(FinanceiroAluno).count() == 0
    assert db.query(AlunoTurma).count() == 0


def test_excluir_aluno_mantem_o_lancamento(client, db, criar_turma, criar_aluno):
    turma = criar_turma()
    aluno = criar_aluno(turma["id"], valor_venda="800")

    resp = client.delete(f"/api/alunos/{aluno['id']}")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Aluno deletado com sucesso"
    assert resp.json()["aluno"]["id"] == aluno["id"]

    venda = db.query(Financeiro).one()
    assert venda.aluno_ref_id is None
    assert db.query(FinanceiroAluno).count() == 0
    assert db.query(AlunoTurma).count() == 0

    sem_turma = client.get("/api/financeiro", params={"turma_id": "sem_turma"}).json()
    assert [r["id"] for r in sem_turma] == [venda.id]
