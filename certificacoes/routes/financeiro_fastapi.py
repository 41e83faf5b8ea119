# certificacoes/routes/financeiro_fastapi.py
# -*- coding: utf-8 -*-
"""
Rotas FastAPI para os lançamentos financeiros (ci_financeiro).
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from certificacoes.database import get_db, transacao
from certificacoes.errors import ErroValidacao, RegistroNaoEncontrado
from certificacoes.models.financeiro import Financeiro, TipoFinanceiro
from certificacoes.schemas.common import AtualizacaoCampo
from certificacoes.schemas.financeiro import (
    CampoFinanceiro, FinanceiroCreate, FinanceiroDeleteResponse, FinanceiroRead,
    FinanceiroUpdate, ResumoFinanceiro,
)
from certificacoes.services import financeiro_service
from certificacoes.utils import calcular_total, hoje_frontend, para_date, parse_inteiro, parse_valor

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Financeiro"],
    responses={404: {"description": "Registro não encontrado"}},
)


def _buscar_ou_404(db: Session, financeiro_id: str) -> Financeiro:
    lancamento = financeiro_service.buscar(db, financeiro_id)
    if lancamento is None:
        raise RegistroNaoEncontrado()
    return lancamento


# --- Consultas ---

@router.get("", response_model=List[FinanceiroRead])
def read_financeiro(
    search: Optional[str] = None,
    tipo: Optional[str] = None,
    turma_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Lista os lançamentos com a turma resolvida pelos vínculos.
    `turma_id=sem_turma` traz os lançamentos sem vínculo.
    """
    registros = financeiro_service.listar(db, search=search, tipo=tipo, turma_id=turma_id)
    return [financeiro_service.serializar(r, turma_id) for r in registros]


@router.get("/resumo", response_model=ResumoFinanceiro)
def read_resumo(
    turma_id: Optional[str] = None,
    data_inicio: Optional[str] = None,
    data_fim: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Entradas, saídas e saldo, opcionalmente por turma e período."""
    return financeiro_service.resumo(db, turma_id=turma_id, data_inicio=data_inicio, data_fim=data_fim)


@router.get("/tipo/{tipo}", response_model=List[FinanceiroRead])
def read_financeiro_por_tipo(tipo: str, db: Session = Depends(get_db)):
    registros = financeiro_service.listar_por_tipo(db, tipo)
    return [financeiro_service.serializar(r) for r in registros]


@router.get("/{financeiro_id}", response_model=FinanceiroRead)
def read_lancamento(financeiro_id: str, db: Session = Depends(get_db)):
    return financeiro_service.serializar(_buscar_ou_404(db, financeiro_id))


# --- Escrita ---

@router.post("", response_model=FinanceiroRead, status_code=status.HTTP_201_CREATED)
def create_lancamento(dados: FinanceiroCreate, db: Session = Depends(get_db)):
    """
    Cria o lançamento e o vínculo com a turma na mesma transação.
    Entrada com aluno_id vira matrícula do aluno; o resto vira lançamento da turma.
    """
    if not dados.turma_id:
        raise ErroValidacao("Turma é obrigatória", "Selecione uma turma para o registro financeiro")

    quantidade = dados.quantidade if dados.quantidade is not None else 1
    valor_total = dados.valor_total
    if valor_total is None:
        valor_total = calcular_total(quantidade, dados.valor_unitario)

    with transacao(db):
        lancamento = Financeiro(
            categoria=dados.categoria,
            descricao=dados.descricao or "",
            quantidade=quantidade,
            valor_unitario=dados.valor_unitario,
            valor_total=valor_total,
            tipo=dados.tipo.value,
            data=dados.data or date.today(),
            observacoes=dados.observacoes or "",
            data_registro=hoje_frontend(),
        )
        db.add(lancamento)
        db.flush()
        financeiro_service.vincular(db, lancamento, dados.turma_id, dados.aluno_id)

    logger.info("Lançamento %s criado (%s %s)", lancamento.id, lancamento.tipo, lancamento.valor_total)
    return financeiro_service.serializar(lancamento)


@router.put("/{financeiro_id}", response_model=FinanceiroRead)
def update_lancamento(financeiro_id: str, dados: FinanceiroUpdate, db: Session = Depends(get_db)):
    """Substitui todos os campos editáveis do lançamento."""
    lancamento = _buscar_ou_404(db, financeiro_id)

    quantidade = dados.quantidade if dados.quantidade is not None else 1
    valor_total = dados.valor_total
    if valor_total is None:
        valor_total = calcular_total(quantidade, dados.valor_unitario)

    with transacao(db):
        lancamento.categoria = dados.categoria
        lancamento.descricao = dados.descricao
        lancamento.quantidade = quantidade
        lancamento.valor_unitario = dados.valor_unitario
        lancamento.valor_total = valor_total
        lancamento.tipo = dados.tipo.value
        lancamento.data = dados.data
        lancamento.observacoes = dados.observacoes
        financeiro_service.sincronizar_vinculos(lancamento)

    return financeiro_service.serializar(lancamento)


def _aplicar_campo(db: Session, lancamento: Financeiro, campo: CampoFinanceiro, valor):
    if campo is CampoFinanceiro.QUANTIDADE:
        quantidade = parse_inteiro(valor)
        if quantidade is None or quantidade < 0:
            raise ValueError(f"Quantidade inválida: {valor!r}")
        lancamento.quantidade = quantidade
        lancamento.valor_total = calcular_total(lancamento.quantidade, lancamento.valor_unitario)
    elif campo is CampoFinanceiro.VALOR_UNITARIO:
        lancamento.valor_unitario = parse_valor(valor)
        lancamento.valor_total = calcular_total(lancamento.quantidade, lancamento.valor_unitario)
    elif campo is CampoFinanceiro.VALOR_TOTAL:
        lancamento.valor_total = parse_valor(valor)
    elif campo is CampoFinanceiro.TIPO:
        lancamento.tipo = TipoFinanceiro(valor).value
    elif campo is CampoFinanceiro.DATA:
        nova_data = para_date(valor)
        if valor not in (None, "") and nova_data is None:
            raise ValueError(f"Data inválida: {valor!r}")
        lancamento.data = nova_data
    elif campo is CampoFinanceiro.TURMA_ID:
        if not valor:
            raise ErroValidacao("Turma é obrigatória", "Selecione uma turma para o registro financeiro")
        financeiro_service.mover_para_turma(db, lancamento, valor)
    elif campo is CampoFinanceiro.CATEGORIA:
        lancamento.categoria = valor
    elif campo is CampoFinanceiro.DESCRICAO:
        lancamento.descricao = valor
    elif campo is CampoFinanceiro.OBSERVACOES:
        lancamento.observacoes = valor


@router.patch("/{financeiro_id}", response_model=FinanceiroRead)
def update_lancamento_campo(financeiro_id: str, dados: AtualizacaoCampo, db: Session = Depends(get_db)):
    """
    Atualiza um único campo. Quantidade ou valor unitário recalculam o
    valor total com o valor novo e o outro fator já gravado.
    """
    try:
        campo = CampoFinanceiro(dados.field)
    except ValueError:
        raise ErroValidacao("Campo não permitido para atualização", f"Campo: {dados.field}")

    lancamento = _buscar_ou_404(db, financeiro_id)

    with transacao(db):
        try:
            _aplicar_campo(db, lancamento, campo, dados.value)
        except ValueError as e:
            raise ErroValidacao(details=str(e))
        financeiro_service.sincronizar_vinculos(lancamento)

    return financeiro_service.serializar(lancamento)


@router.delete("/{financeiro_id}", response_model=FinanceiroDeleteResponse)
def delete_lancamento(financeiro_id: str, db: Session = Depends(get_db)):
    """Exclui o lançamento, seus vínculos e, se for venda de aluno, o aluno."""
    lancamento = _buscar_ou_404(db, financeiro_id)
    registro = financeiro_service.serializar(lancamento)

    with transacao(db):
        financeiro_service.excluir(db, lancamento)

    return {"message": "Registro financeiro deletado com sucesso", "registro": registro}
