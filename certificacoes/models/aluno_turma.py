# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para ci_aluno_turma (inscrição do aluno na turma).

Por convenção cada aluno tem uma única linha: a troca de turma atualiza a
linha existente em vez de inserir outra.
"""
import uuid
from datetime import date

from sqlalchemy import Column, Date, ForeignKey, String
from sqlalchemy.orm import relationship

from certificacoes.database import Base


class AlunoTurma(Base):
    __tablename__ = "ci_aluno_turma"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    aluno_id = Column(String(36), ForeignKey("ci_alunos.id"), nullable=False, index=True)
    turma_id = Column(String(36), ForeignKey("ci_turmas.id"), nullable=False, index=True)
    data_matricula = Column(Date, nullable=True, default=date.today)
    status = Column(String(30), nullable=False, default="Inscrito")  # 'Inscrito', 'Concluido', 'Cancelado'

    aluno = relationship("Aluno", back_populates="turmas")
    turma = relationship("Turma", back_populates="inscricoes")
