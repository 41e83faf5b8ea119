# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para a entidade Aluno (ci_alunos).
"""
import uuid
from datetime import date

from sqlalchemy import Boolean, Column, Date, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from certificacoes.database import Base


class Aluno(Base):
    __tablename__ = "ci_alunos"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    nome = Column(String(150), nullable=False, index=True)
    email = Column(String(150), unique=True, nullable=True, index=True)
    telefone = Column(String(30), nullable=True)
    data_nascimento = Column(Date, nullable=True)
    cpf = Column(String(14), nullable=True, index=True)
    endereco = Column(String(255), nullable=True)
    # Etapas do funil: Em Onboarding, Boas-vindas, Envio do Livro, Grupo da Turma,
    # Ativo, Inativo, Concluído
    status = Column(String(30), nullable=False, default="Em Onboarding", index=True)
    data_matricula = Column(Date, nullable=True, default=date.today)
    observacoes = Column(Text, nullable=True, default="")

    # Dados da venda
    vendedor = Column(String(100), nullable=True, index=True)
    valor_venda = Column(Numeric(12, 2), nullable=True)
    parcelas = Column(Integer, nullable=True)
    pos_graduacao = Column(Boolean, nullable=False, default=False)

    data_cadastro = Column(Date, nullable=True, default=date.today)

    turmas = relationship("AlunoTurma", back_populates="aluno", cascade="all, delete-orphan")
    vinculos_financeiro = relationship("FinanceiroAluno", back_populates="aluno", cascade="all, delete-orphan")
    # Sem cascade: ao excluir o aluno os lançamentos ficam, com aluno_ref_id nulo
    lancamentos_ref = relationship("Financeiro", back_populates="aluno_ref", foreign_keys="Financeiro.aluno_ref_id")
