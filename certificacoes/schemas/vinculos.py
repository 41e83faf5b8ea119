# -*- coding: utf-8 -*-
"""
Schemas Pydantic dos vínculos financeiro-aluno e financeiro-turma.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from certificacoes.models.financeiro import TipoFinanceiro
from certificacoes.schemas.common import DataEntrada, DataExibicao, ValorEntrada


class FinanceiroAlunoCreate(BaseModel):
    aluno_id: Optional[str] = None
    financeiro_id: Optional[str] = None
    turma_id: Optional[str] = None
    valor_matricula: ValorEntrada = None
    tipo: Optional[TipoFinanceiro] = None
    data: DataEntrada = None


class FinanceiroAlunoRead(BaseModel):
    aluno_id: str
    financeiro_id: str
    turma_id: Optional[str] = None
    valor_matricula: Optional[Decimal] = None
    tipo: str
    data: DataExibicao = None

    # Campos vindos dos JOINs
    aluno_nome: Optional[str] = None
    aluno_email: Optional[str] = None
    cpf: Optional[str] = None
    categoria: Optional[str] = None
    descricao: Optional[str] = None
    valor_total: Optional[Decimal] = None
    data_financeiro: DataExibicao = None
    turma_nome: Optional[str] = None

    class Config:
        from_attributes = True


class FinanceiroAlunoDeleteResponse(BaseModel):
    message: str
    relacao: FinanceiroAlunoRead


class FinanceiroTurmaCreate(BaseModel):
    financeiro_id: Optional[str] = None
    turma_id: Optional[str] = None
    tipo: Optional[TipoFinanceiro] = None
    valor: ValorEntrada = None
    data: DataEntrada = None


class FinanceiroTurmaRead(BaseModel):
    financeiro_id: str
    turma_id: str
    tipo: str
    valor: Optional[Decimal] = None
    data: DataExibicao = None

    categoria: Optional[str] = None
    descricao: Optional[str] = None
    quantidade: Optional[int] = None
    valor_unitario: Optional[Decimal] = None
    valor_total: Optional[Decimal] = None
    data_financeiro: DataExibicao = None
    observacoes: Optional[str] = None
    turma_nome: Optional[str] = None
    data_evento: DataExibicao = None

    class Config:
        from_attributes = True


class FinanceiroTurmaDeleteResponse(BaseModel):
    message: str
    relacao: FinanceiroTurmaRead
