# certificacoes/schemas/aluno.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from decimal import Decimal
import enum

from certificacoes.schemas.common import DataEntrada, DataExibicao, InteiroEntrada, ValorEntrada


class AlunoBase(BaseModel):
    nome: str = Field(..., max_length=150)
    email: Optional[str] = Field(None, max_length=150)
    telefone: Optional[str] = Field(None, max_length=30)
    data_nascimento: DataEntrada = None
    cpf: Optional[str] = Field(None, max_length=14)
    endereco: Optional[str] = Field(None, max_length=255)
    status: Optional[str] = Field(None, max_length=30)
    data_matricula: DataEntrada = None
    observacoes: Optional[str] = None
    vendedor: Optional[str] = Field(None, max_length=100)
    valor_venda: ValorEntrada = None
    parcelas: InteiroEntrada = None
    pos_graduacao: Optional[bool] = None
    turma_id: Optional[str] = None

    @field_validator('email', mode='before')
    @classmethod
    def empty_str_to_none(cls, v):
        """Converte strings vazias para None (o email é único no banco)."""
        if isinstance(v, str) and v.strip() == '':
            return None
        return v

class AlunoCreate(AlunoBase):
    pass

class AlunoUpdate(AlunoBase):
    pass

class AlunoRead(BaseModel):
    id: str
    nome: str
    email: Optional[str] = None
    telefone: Optional[str] = None
    data_nascimento: DataExibicao = None
    cpf: Optional[str] = None
    endereco: Optional[str] = None
    status: Optional[str] = None
    data_matricula: DataExibicao = None
    observacoes: Optional[str] = None
    vendedor: Optional[str] = None
    valor_venda: Optional[Decimal] = None
    parcelas: Optional[int] = None
    pos_graduacao: Optional[bool] = None
    data_cadastro: DataExibicao = None
    class Config: from_attributes = True

class AlunoDeleteResponse(BaseModel):
    message: str
    aluno: AlunoRead

class AlunoTurmaRead(AlunoRead):
    """Aluno listado a partir de uma turma, com os dados da inscrição."""
    data_inscricao: DataExibicao = None
    inscricao_status: Optional[str] = None

class CampoAluno(str, enum.Enum):
    """Campos que o PATCH /alunos/{id} pode alterar."""
    NOME = "nome"
    EMAIL = "email"
    TELEFONE = "telefone"
    DATA_NASCIMENTO = "data_nascimento"
    CPF = "cpf"
    ENDERECO = "endereco"
    STATUS = "status"
    OBSERVACOES = "observacoes"
    VENDEDOR = "vendedor"
    VALOR_VENDA = "valor_venda"
    PARCELAS = "parcelas"
    POS_GRADUACAO = "pos_graduacao"
