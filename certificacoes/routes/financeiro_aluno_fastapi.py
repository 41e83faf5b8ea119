# -*- coding: utf-8 -*-
"""
Rotas FastAPI para ci_financeiro_aluno (lançamento = matrícula de um aluno).

Não há atualização: correções são feitas excluindo e recriando o vínculo.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, joinedload

from certificacoes.database import get_db, transacao
from certificacoes.errors import ErroValidacao, ReferenciaInvalida, RegistroDuplicado, RegistroNaoEncontrado
from certificacoes.models.aluno import Aluno
from certificacoes.models.financeiro import Financeiro, TipoFinanceiro
from certificacoes.models.financeiro_aluno import FinanceiroAluno
from certificacoes.models.turma import Turma
from certificacoes.schemas.vinculos import (
    FinanceiroAlunoCreate, FinanceiroAlunoDeleteResponse, FinanceiroAlunoRead,
)
from certificacoes.utils import formatar_data

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Financeiro Aluno"],
    responses={404: {"description": "Relação não encontrada"}},
)


def _query(db: Session):
    return db.query(FinanceiroAluno).options(
        joinedload(FinanceiroAluno.aluno),
        joinedload(FinanceiroAluno.financeiro),
        joinedload(FinanceiroAluno.turma),
    )


def _serializar(vinculo: FinanceiroAluno) -> FinanceiroAlunoRead:
    lido = FinanceiroAlunoRead.model_validate(vinculo)
    aluno, lancamento, turma = vinculo.aluno, vinculo.financeiro, vinculo.turma
    extras = {}
    if aluno is not None:
        extras.update(aluno_nome=aluno.nome, aluno_email=aluno.email, cpf=aluno.cpf)
    if lancamento is not None:
        extras.update(
            categoria=lancamento.categoria,
            descricao=lancamento.descricao,
            valor_total=lancamento.valor_total,
            data_financeiro=formatar_data(lancamento.data),
        )
    if turma is not None:
        extras["turma_nome"] = turma.nome
    return lido.model_copy(update=extras)


@router.get("", response_model=List[FinanceiroAlunoRead])
def read_vinculos(db: Session = Depends(get_db)):
    vinculos = _query(db).order_by(FinanceiroAluno.data.desc()).all()
    return [_serializar(v) for v in vinculos]


@router.get("/aluno/{aluno_id}", response_model=List[FinanceiroAlunoRead])
def read_vinculos_por_aluno(aluno_id: str, db: Session = Depends(get_db)):
    """Lançamentos (matrículas) de um aluno."""
    vinculos = (
        _query(db)
        .filter(FinanceiroAluno.aluno_id == aluno_id)
        .order_by(FinanceiroAluno.data.desc())
        .all()
    )
    return [_serializar(v) for v in vinculos]


@router.get("/turma/{turma_id}", response_model=List[FinanceiroAlunoRead])
def read_vinculos_por_turma(turma_id: str, db: Session = Depends(get_db)):
    """Alunos matriculados na turma com o respectivo lançamento."""
    vinculos = (
        _query(db)
        .join(Aluno, FinanceiroAluno.aluno_id == Aluno.id)
        .filter(FinanceiroAluno.turma_id == turma_id)
        .order_by(Aluno.nome)
        .all()
    )
    return [_serializar(v) for v in vinculos]


@router.post("", response_model=FinanceiroAlunoRead, status_code=status.HTTP_201_CREATED)
def create_vinculo(dados: FinanceiroAlunoCreate, db: Session = Depends(get_db)):
    if not dados.aluno_id or not dados.financeiro_id or not dados.turma_id:
        raise ErroValidacao(
            "Campos obrigatórios não preenchidos",
            "aluno_id, financeiro_id e turma_id são obrigatórios",
        )

    if (
        db.get(Aluno, dados.aluno_id) is None
        or db.get(Financeiro, dados.financeiro_id) is None
        or db.get(Turma, dados.turma_id) is None
    ):
        raise ReferenciaInvalida(details="Aluno, financeiro ou turma não encontrados")

    if db.get(FinanceiroAluno, (dados.aluno_id, dados.financeiro_id)) is not None:
        raise RegistroDuplicado("Relação duplicada", "Esta combinação de aluno-financeiro-turma já existe")

    tipo = dados.tipo or TipoFinanceiro.ENTRADA
    with transacao(db):
        vinculo = FinanceiroAluno(
            aluno_id=dados.aluno_id,
            financeiro_id=dados.financeiro_id,
            turma_id=dados.turma_id,
            valor_matricula=dados.valor_matricula,
            tipo=tipo.value,
            data=dados.data,
        )
        db.add(vinculo)

    logger.info("Vínculo financeiro-aluno criado: %s / %s", dados.aluno_id, dados.financeiro_id)
    return _serializar(vinculo)


@router.delete("/{aluno_id}/{financeiro_id}", response_model=FinanceiroAlunoDeleteResponse)
def delete_vinculo(aluno_id: str, financeiro_id: str, db: Session = Depends(get_db)):
    vinculo = _query(db).filter(
        FinanceiroAluno.aluno_id == aluno_id,
        FinanceiroAluno.financeiro_id == financeiro_id,
    ).first()
    if vinculo is None:
        raise RegistroNaoEncontrado("Relação não encontrada")

    relacao = _serializar(vinculo)
    with transacao(db):
        db.delete(vinculo)

    return {"message": "Relação deletada com sucesso", "relacao": relacao}
