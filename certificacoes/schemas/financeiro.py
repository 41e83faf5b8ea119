# certificacoes/schemas/financeiro.py
from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal
import enum

from certificacoes.models.financeiro import TipoFinanceiro
from certificacoes.schemas.common import DataEntrada, DataExibicao, InteiroEntrada, ValorEntrada


class FinanceiroBase(BaseModel):
    categoria: Optional[str] = Field(None, max_length=100)
    descricao: Optional[str] = Field(None, max_length=255)
    quantidade: InteiroEntrada = Field(None, ge=0)
    valor_unitario: ValorEntrada = None
    valor_total: ValorEntrada = None
    tipo: TipoFinanceiro
    data: DataEntrada = None
    observacoes: Optional[str] = None

class FinanceiroCreate(FinanceiroBase):
    # Obrigatória, mas validada na rota para devolver a mensagem específica
    turma_id: Optional[str] = None
    # Com tipo 'Entrada' o lançamento vira matrícula do aluno (ci_financeiro_aluno)
    aluno_id: Optional[str] = None

class FinanceiroUpdate(FinanceiroBase):
    pass

class FinanceiroRead(BaseModel):
    id: str
    categoria: Optional[str] = None
    descricao: Optional[str] = None
    quantidade: Optional[int] = None
    valor_unitario: Optional[Decimal] = None
    valor_total: Optional[Decimal] = None
    tipo: str
    data: DataExibicao = None
    observacoes: Optional[str] = None
    data_registro: Optional[str] = None
    aluno_ref_id: Optional[str] = None

    # Resolvidos pelos vínculos (aluno primeiro, depois turma)
    turma_id: Optional[str] = None
    turma_nome: Optional[str] = None

    class Config:
        from_attributes = True

class FinanceiroDeleteResponse(BaseModel):
    message: str
    registro: FinanceiroRead

class ResumoFinanceiro(BaseModel):
    entradas: Decimal = Decimal("0.00")
    saidas: Decimal = Decimal("0.00")
    saldo: Decimal = Decimal("0.00")

class FinanceiroTurmaResumo(BaseModel):
    registros: List[FinanceiroRead]
    resumo: ResumoFinanceiro

class CampoFinanceiro(str, enum.Enum):
    """Campos que o PATCH /financeiro/{id} pode alterar."""
    CATEGORIA = "categoria"
    DESCRICAO = "descricao"
    QUANTIDADE = "quantidade"
    VALOR_UNITARIO = "valor_unitario"
    VALOR_TOTAL = "valor_total"
    TIPO = "tipo"
    DATA = "data"
    TURMA_ID = "turma_id"
    OBSERVACOES = "observacoes"
