# -*- coding: utf-8 -*-
"""
Schemas Pydantic para a entidade Turma.
"""

from pydantic import BaseModel, Field
from typing import Optional
import enum

from certificacoes.schemas.common import DataEntrada, DataExibicao, InteiroEntrada

# Schema base para Turma
class TurmaBase(BaseModel):
    nome: Optional[str] = Field(None, max_length=150)
    descricao: Optional[str] = Field(None, max_length=255)
    data_evento: DataEntrada = None
    horario: Optional[str] = Field(None, max_length=50)
    local: Optional[str] = Field(None, max_length=150)
    capacidade: InteiroEntrada = Field(None, ge=0)
    instrutor: Optional[str] = Field(None, max_length=100)
    status: Optional[str] = Field(None, max_length=30)

# Schema para criação de Turma
class TurmaCreate(TurmaBase):
    nome: str = Field(..., max_length=150)

# Schema para atualização de Turma (PUT substitui todos os campos)
class TurmaUpdate(TurmaBase):
    pass

# Schema para leitura/retorno de Turma
class TurmaRead(BaseModel):
    id: str
    nome: str
    descricao: Optional[str] = None
    data_evento: DataExibicao = None
    horario: Optional[str] = None
    local: Optional[str] = None
    capacidade: Optional[int] = None
    instrutor: Optional[str] = None
    status: Optional[str] = None

    class Config:
        from_attributes = True

class TurmaDeleteResponse(BaseModel):
    message: str
    turma: TurmaRead

class CampoTurma(str, enum.Enum):
    """Campos que o PATCH /turmas/{id} pode alterar."""
    NOME = "nome"
    DESCRICAO = "descricao"
    DATA_EVENTO = "data_evento"
    HORARIO = "horario"
    LOCAL = "local"
    CAPACIDADE = "capacidade"
    INSTRUTOR = "instrutor"
    STATUS = "status"
