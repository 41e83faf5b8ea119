# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para ci_financeiro_turma: o lançamento é um custo
atribuído à turma, sem aluno envolvido.
"""
from sqlalchemy import Column, Date, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from certificacoes.database import Base


class FinanceiroTurma(Base):
    __tablename__ = "ci_financeiro_turma"

    financeiro_id = Column(String(36), ForeignKey("ci_financeiro.id"), primary_key=True)
    turma_id = Column(String(36), ForeignKey("ci_turmas.id"), primary_key=True, index=True)
    tipo = Column(String(20), nullable=False, default="Saída")
    valor = Column(Numeric(12, 2), nullable=True)
    data = Column(Date, nullable=True)

    financeiro = relationship("Financeiro", back_populates="vinculos_turma")
    turma = relationship("Turma", back_populates="vinculos_turma")
