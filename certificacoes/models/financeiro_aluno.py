# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para ci_financeiro_aluno: o lançamento é o pagamento de
matrícula de um aluno em uma turma.
"""
from sqlalchemy import Column, Date, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from certificacoes.database import Base


class FinanceiroAluno(Base):
    __tablename__ = "ci_financeiro_aluno"

    aluno_id = Column(String(36), ForeignKey("ci_alunos.id"), primary_key=True)
    financeiro_id = Column(String(36), ForeignKey("ci_financeiro.id"), primary_key=True)
    turma_id = Column(String(36), ForeignKey("ci_turmas.id"), nullable=False, index=True)
    valor_matricula = Column(Numeric(12, 2), nullable=True)
    tipo = Column(String(20), nullable=False, default="Entrada")
    data = Column(Date, nullable=True)

    aluno = relationship("Aluno", back_populates="vinculos_financeiro")
    financeiro = relationship("Financeiro", back_populates="vinculos_aluno")
    turma = relationship("Turma", back_populates="vinculos_aluno")
