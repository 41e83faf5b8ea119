# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para os lançamentos financeiros (ci_financeiro).

O vínculo com a turma não fica neste registro: ele é feito pela tabela
ci_financeiro_aluno (mensalidade/matrícula de um aluno) ou pela
ci_financeiro_turma (gasto da turma). Um lançamento sem vínculo é tratado
como "sem turma".
"""
import enum
import uuid

from sqlalchemy import Column, Date, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from certificacoes.database import Base


class TipoFinanceiro(str, enum.Enum):
    ENTRADA = "Entrada"
    SAIDA = "Saída"


class Financeiro(Base):
    __tablename__ = "ci_financeiro"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    categoria = Column(String(100), nullable=True)
    descricao = Column(String(255), nullable=True, default="")
    quantidade = Column(Integer, nullable=False, default=1)
    valor_unitario = Column(Numeric(12, 2), nullable=True)
    valor_total = Column(Numeric(12, 2), nullable=True)
    tipo = Column(String(20), nullable=False, index=True)  # 'Entrada' ou 'Saída'
    data = Column(Date, nullable=True, index=True)
    observacoes = Column(Text, nullable=True, default="")
    data_registro = Column(String(30), nullable=True)

    # Aluno cuja venda gerou este lançamento; excluir o lançamento desfaz a venda
    aluno_ref_id = Column(String(36), ForeignKey("ci_alunos.id"), nullable=True, index=True)

    aluno_ref = relationship("Aluno", back_populates="lancamentos_ref", foreign_keys=[aluno_ref_id])
    vinculos_aluno = relationship("FinanceiroAluno", back_populates="financeiro", cascade="all, delete-orphan")
    vinculos_turma = relationship("FinanceiroTurma", back_populates="financeiro", cascade="all, delete-orphan")

    @property
    def vinculo_turma(self):
        """Turma do lançamento: a do vínculo com aluno, senão a do gasto de turma."""
        for vinculo in self.vinculos_aluno:
            if vinculo.turma_id:
                return vinculo.turma
        for vinculo in self.vinculos_turma:
            return vinculo.turma
        return None
