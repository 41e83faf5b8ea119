# -*- coding: utf-8 -*-
"""
Rotas FastAPI para ci_financeiro_turma (lançamento = custo da turma).
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, joinedload

from certificacoes.database import get_db, transacao
from certificacoes.errors import ErroValidacao, ReferenciaInvalida, RegistroDuplicado, RegistroNaoEncontrado
from certificacoes.models.financeiro import Financeiro, TipoFinanceiro
from certificacoes.models.financeiro_turma import FinanceiroTurma
from certificacoes.models.turma import Turma
from certificacoes.schemas.vinculos import (
    FinanceiroTurmaCreate, FinanceiroTurmaDeleteResponse, FinanceiroTurmaRead,
)
from certificacoes.utils import formatar_data

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Financeiro Turma"],
    responses={404: {"description": "Relação não encontrada"}},
)


def _query(db: Session):
    return db.query(FinanceiroTurma).options(
        joinedload(FinanceiroTurma.financeiro),
        joinedload(FinanceiroTurma.turma),
    )


def _serializar(vinculo: FinanceiroTurma) -> FinanceiroTurmaRead:
    lido = FinanceiroTurmaRead.model_validate(vinculo)
    extras = {}
    lancamento = vinculo.financeiro
    if lancamento is not None:
        extras.update(
            categoria=lancamento.categoria,
            descricao=lancamento.descricao,
            quantidade=lancamento.quantidade,
            valor_unitario=lancamento.valor_unitario,
            valor_total=lancamento.valor_total,
            data_financeiro=formatar_data(lancamento.data),
            observacoes=lancamento.observacoes,
        )
    if vinculo.turma is not None:
        extras.update(turma_nome=vinculo.turma.nome, data_evento=formatar_data(vinculo.turma.data_evento))
    return lido.model_copy(update=extras)


@router.get("", response_model=List[FinanceiroTurmaRead])
def read_vinculos(db: Session = Depends(get_db)):
    vinculos = _query(db).order_by(FinanceiroTurma.data.desc()).all()
    return [_serializar(v) for v in vinculos]


@router.get("/turma/{turma_id}", response_model=List[FinanceiroTurmaRead])
def read_vinculos_por_turma(turma_id: str, db: Session = Depends(get_db)):
    vinculos = (
        _query(db)
        .filter(FinanceiroTurma.turma_id == turma_id)
        .order_by(FinanceiroTurma.data.desc())
        .all()
    )
    return [_serializar(v) for v in vinculos]


@router.post("", response_model=FinanceiroTurmaRead, status_code=status.HTTP_201_CREATED)
def create_vinculo(dados: FinanceiroTurmaCreate, db: Session = Depends(get_db)):
    if not dados.financeiro_id or not dados.turma_id:
        raise ErroValidacao("Campos obrigatórios não preenchidos", "financeiro_id e turma_id são obrigatórios")

    if db.get(Financeiro, dados.financeiro_id) is None or db.get(Turma, dados.turma_id) is None:
        raise ReferenciaInvalida(details="Financeiro ou turma não encontrados")

    if db.get(FinanceiroTurma, (dados.financeiro_id, dados.turma_id)) is not None:
        raise RegistroDuplicado("Relação duplicada", "Esta combinação de financeiro-turma já existe")

    tipo = dados.tipo or TipoFinanceiro.SAIDA
    with transacao(db):
        vinculo = FinanceiroTurma(
            financeiro_id=dados.financeiro_id,
            turma_id=dados.turma_id,
            tipo=tipo.value,
            valor=dados.valor,
            data=dados.data,
        )
        db.add(vinculo)

    logger.info("Vínculo financeiro-turma criado: %s / %s", dados.financeiro_id, dados.turma_id)
    return _serializar(vinculo)


@router.delete("/{financeiro_id}/{turma_id}", response_model=FinanceiroTurmaDeleteResponse)
def delete_vinculo(financeiro_id: str, turma_id: str, db: Session = Depends(get_db)):
    vinculo = _query(db).filter(
        FinanceiroTurma.financeiro_id == financeiro_id,
        FinanceiroTurma.turma_id == turma_id,
    ).first()
    if vinculo is None:
        raise RegistroNaoEncontrado("Relação não encontrada")

    relacao = _serializar(vinculo)
    with transacao(db):
        db.delete(vinculo)

    return {"message": "Relação deletada com sucesso", "relacao": relacao}
