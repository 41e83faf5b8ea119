# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para a entidade Turma (ci_turmas).
"""
import uuid

from sqlalchemy import Column, Date, Integer, String
from sqlalchemy.orm import relationship

from certificacoes.database import Base


class Turma(Base):
    __tablename__ = "ci_turmas"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    nome = Column("nome_turma", String(150), nullable=False, index=True)
    descricao = Column(String(255), nullable=True, default="")
    data_evento = Column(Date, nullable=True, index=True)
    horario = Column(String(50), nullable=True, default="")
    local = Column(String(150), nullable=True, default="")
    capacidade = Column(Integer, nullable=True, default=10)
    instrutor = Column(String(100), nullable=True)
    status = Column(String(30), nullable=False, default="Aberta")  # Aberta, Em Andamento, Finalizada, Cancelada

    inscricoes = relationship("AlunoTurma", back_populates="turma", cascade="all, delete-orphan")
    vinculos_aluno = relationship("FinanceiroAluno", back_populates="turma", cascade="all, delete-orphan")
    vinculos_turma = relationship("FinanceiroTurma", back_populates="turma", cascade="all, delete-orphan")
