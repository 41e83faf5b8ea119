# -*- coding: utf-8 -*-
"""
Rotas FastAPI para o CRUD de Turmas.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from certificacoes.database import get_db, transacao
from certificacoes.errors import ErroValidacao, RegistroNaoEncontrado
from certificacoes.models.aluno import Aluno
from certificacoes.models.aluno_turma import AlunoTurma
from certificacoes.models.turma import Turma
from certificacoes.schemas.aluno import AlunoRead, AlunoTurmaRead
from certificacoes.schemas.common import AtualizacaoCampo
from certificacoes.schemas.financeiro import FinanceiroTurmaResumo
from certificacoes.schemas.turma import CampoTurma, TurmaCreate, TurmaDeleteResponse, TurmaRead, TurmaUpdate
from certificacoes.services import financeiro_service
from certificacoes.utils import para_date, parse_inteiro

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Turmas"],
    responses={404: {"description": "Turma não encontrada"}},
)


def _buscar_ou_404(db: Session, turma_id: str) -> Turma:
    turma = db.get(Turma, turma_id)
    if turma is None:
        raise RegistroNaoEncontrado("Turma não encontrada")
    return turma

# --- CRUD Endpoints ---

@router.post("", response_model=TurmaRead, status_code=status.HTTP_201_CREATED)
def create_turma(turma: TurmaCreate, db: Session = Depends(get_db)):
    """
    Cria uma nova turma (capacidade 10 e status "Aberta" quando omitidos).
    """
    with transacao(db):
        db_turma = Turma(
            nome=turma.nome,
            descricao=turma.descricao or "",
            data_evento=turma.data_evento,
            horario=turma.horario or "",
            local=turma.local or "",
            capacidade=turma.capacidade or 10,
            instrutor=turma.instrutor,
            status=turma.status or "Aberta",
        )
        db.add(db_turma)

    logger.info("Turma %s criada: %s", db_turma.id, db_turma.nome)
    return db_turma

@router.get("", response_model=List[TurmaRead])
def read_turmas(
    search: Optional[str] = None,
    status: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Lista as turmas, das mais recentes para as mais antigas.
    `search` procura no nome e no instrutor.
    """
    query = db.query(Turma)
    if search:
        termo = f"%{search}%"
        query = query.filter(or_(Turma.nome.ilike(termo), Turma.instrutor.ilike(termo)))
    if status:
        query = query.filter(Turma.status == status)
    return query.order_by(Turma.data_evento.desc()).all()

@router.get("/{turma_id}", response_model=TurmaRead)
def read_turma(turma_id: str, db: Session = Depends(get_db)):
    return _buscar_ou_404(db, turma_id)

@router.put("/{turma_id}", response_model=TurmaRead)
def update_turma(turma_id: str, turma: TurmaUpdate, db: Session = Depends(get_db)):
    """
    Substitui os dados da turma.
    """
    db_turma = _buscar_ou_404(db, turma_id)
    with transacao(db):
        db_turma.nome = turma.nome
        db_turma.descricao = turma.descricao
        db_turma.data_evento = turma.data_evento
        db_turma.horario = turma.horario
        db_turma.local = turma.local
        db_turma.capacidade = turma.capacidade
        db_turma.instrutor = turma.instrutor
        db_turma.status = turma.status or db_turma.status
    return db_turma


def _aplicar_campo(turma: Turma, campo: CampoTurma, valor):
    if campo is CampoTurma.DATA_EVENTO:
        nova_data = para_date(valor)
        if valor not in (None, "") and nova_data is None:
            raise ValueError(f"Data inválida: {valor!r}")
        turma.data_evento = nova_data
    elif campo is CampoTurma.CAPACIDADE:
        capacidade = parse_inteiro(valor)
        if capacidade is not None and capacidade < 0:
            raise ValueError(f"Capacidade inválida: {valor!r}")
        turma.capacidade = capacidade
    else:
        setattr(turma, campo.value, valor)


@router.patch("/{turma_id}", response_model=TurmaRead)
def update_turma_campo(turma_id: str, dados: AtualizacaoCampo, db: Session = Depends(get_db)):
    try:
        campo = CampoTurma(dados.field)
    except ValueError:
        raise ErroValidacao("Campo não permitido para atualização", f"Campo: {dados.field}")

    db_turma = _buscar_ou_404(db, turma_id)
    with transacao(db):
        try:
            _aplicar_campo(db_turma, campo, dados.value)
        except ValueError as e:
            raise ErroValidacao(details=str(e))
    return db_turma

@router.delete("/{turma_id}", response_model=TurmaDeleteResponse)
def delete_turma(turma_id: str, db: Session = Depends(get_db)):
    """
    Exclui a turma com as inscrições e os vínculos financeiros dela.
    Os lançamentos ficam no livro-caixa como "sem turma".
    """
    db_turma = _buscar_ou_404(db, turma_id)
    removida = TurmaRead.model_validate(db_turma)
    with transacao(db):
        db.delete(db_turma)
    logger.info("Turma %s excluída", turma_id)
    return {"message": "Turma deletada com sucesso", "turma": removida}

# --- Consultas da turma ---

@router.get("/{turma_id}/alunos", response_model=List[AlunoTurmaRead])
def read_alunos_da_turma(turma_id: str, db: Session = Depends(get_db)):
    """Alunos inscritos, com a data e a situação da inscrição."""
    linhas = (
        db.query(Aluno, AlunoTurma)
        .join(AlunoTurma, AlunoTurma.aluno_id == Aluno.id)
        .filter(AlunoTurma.turma_id == turma_id)
        .order_by(Aluno.nome)
        .all()
    )
    return [
        AlunoTurmaRead(
            **AlunoRead.model_validate(aluno).model_dump(),
            data_inscricao=inscricao.data_matricula,
            inscricao_status=inscricao.status,
        )
        for aluno, inscricao in linhas
    ]


@router.get("/{turma_id}/financeiro", response_model=FinanceiroTurmaResumo)
def read_financeiro_da_turma(turma_id: str, db: Session = Depends(get_db)):
    """Lançamentos da turma (pelos dois vínculos) e o resumo deles."""
    registros = financeiro_service.listar(db, turma_id=turma_id)
    return {
        "registros": [financeiro_service.serializar(r, turma_id) for r in registros],
        "resumo": financeiro_service.resumo_de_registros(registros),
    }
