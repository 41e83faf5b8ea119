# -*- coding: utf-8 -*-
"""
Rotas FastAPI para o CRUD de Alunos.

Cadastrar um aluno com valor de venda também lança a venda no financeiro
(Entrada "Venda de Curso") e a vincula à turma do aluno.
"""
import logging
from contextlib import contextmanager
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from certificacoes.database import get_db, transacao
from certificacoes.errors import ErroValidacao, RegistroDuplicado, RegistroNaoEncontrado, classificar_integrity_error
from certificacoes.models.aluno import Aluno
from certificacoes.models.aluno_turma import AlunoTurma
from certificacoes.models.financeiro import Financeiro, TipoFinanceiro
from certificacoes.schemas.aluno import AlunoCreate, AlunoDeleteResponse, AlunoRead, AlunoUpdate, CampoAluno
from certificacoes.schemas.common import AtualizacaoCampo
from certificacoes.services import financeiro_service
from certificacoes.utils import hoje_frontend, para_date, parse_inteiro, parse_valor

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Alunos"],
    responses={404: {"description": "Aluno não encontrado"}},
)


def _buscar_ou_404(db: Session, aluno_id: str) -> Aluno:
    aluno = db.get(Aluno, aluno_id)
    if aluno is None:
        raise RegistroNaoEncontrado("Aluno não encontrado")
    return aluno


@contextmanager
def _salvando_aluno(db: Session):
    """Transação que traduz a violação do email único na mensagem do cadastro."""
    try:
        with transacao(db):
            yield
    except IntegrityError as e:
        if isinstance(classificar_integrity_error(e), RegistroDuplicado):
            raise RegistroDuplicado("Este email já está cadastrado", "Use um email diferente")
        raise


def _para_bool(valor):
    if isinstance(valor, str):
        return valor.strip().lower() in ("true", "1", "sim", "s", "yes")
    return bool(valor)


# --- Consultas ---

@router.get("", response_model=List[AlunoRead])
def read_alunos(
    search: Optional[str] = None,
    status: Optional[str] = None,
    vendedor: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Lista alunos. `search` procura em nome, email e CPF; `status` aceita
    vários valores separados por vírgula.
    """
    query = db.query(Aluno)

    if search:
        termo = f"%{search}%"
        query = query.filter(or_(Aluno.nome.ilike(termo), Aluno.email.ilike(termo), Aluno.cpf.ilike(termo)))
    if status:
        situacoes = [s.strip() for s in status.split(",") if s.strip()]
        query = query.filter(Aluno.status.in_(situacoes))
    if vendedor:
        query = query.filter(Aluno.vendedor == vendedor)

    return query.order_by(Aluno.data_matricula.desc()).all()


@router.get("/status/{status}", response_model=List[AlunoRead])
def read_alunos_por_status(status: str, db: Session = Depends(get_db)):
    return db.query(Aluno).filter(Aluno.status == status).order_by(Aluno.nome).all()


@router.get("/vendedor/{vendedor}", response_model=List[AlunoRead])
def read_alunos_por_vendedor(vendedor: str, db: Session = Depends(get_db)):
    return db.query(Aluno).filter(Aluno.vendedor == vendedor).order_by(Aluno.data_matricula.desc()).all()


@router.get("/{aluno_id}", response_model=AlunoRead)
def read_aluno(aluno_id: str, db: Session = Depends(get_db)):
    return _buscar_ou_404(db, aluno_id)


# --- Escrita ---

@router.post("", response_model=AlunoRead, status_code=status.HTTP_201_CREATED)
def create_aluno(dados: AlunoCreate, db: Session = Depends(get_db)):
    """
    Cria o aluno, a inscrição na turma e, havendo valor de venda, o
    lançamento de Entrada com o vínculo financeiro-aluno. Tudo ou nada.
    """
    if not dados.turma_id:
        raise ErroValidacao("Turma é obrigatória", "Selecione uma turma para o aluno")

    hoje = date.today()
    data_matricula = dados.data_matricula or hoje

    with _salvando_aluno(db):
        financeiro_service.garantir_turma(db, dados.turma_id)

        aluno = Aluno(
            nome=dados.nome,
            email=dados.email,
            telefone=dados.telefone,
            data_nascimento=dados.data_nascimento,
            cpf=dados.cpf,
            endereco=dados.endereco,
            status=dados.status or "Em Onboarding",
            data_matricula=data_matricula,
            observacoes=dados.observacoes or "",
            vendedor=dados.vendedor,
            valor_venda=dados.valor_venda,
            parcelas=dados.parcelas,
            pos_graduacao=bool(dados.pos_graduacao),
            data_cadastro=hoje,
        )
        db.add(aluno)
        db.flush()

        if dados.valor_venda:
            venda = Financeiro(
                categoria=financeiro_service.CATEGORIA_VENDA,
                descricao=f"Matrícula {dados.nome}",
                quantidade=1,
                valor_unitario=dados.valor_venda,
                valor_total=dados.valor_venda,
                tipo=TipoFinanceiro.ENTRADA.value,
                data=hoje,
                observacoes=f"Matrícula de {dados.nome}",
                data_registro=hoje_frontend(),
                aluno_ref_id=aluno.id,
            )
            db.add(venda)
            db.flush()
            financeiro_service.vincular(db, venda, dados.turma_id, aluno.id)
            logger.info("Venda %s registrada para o aluno %s", venda.id, aluno.id)

        db.add(AlunoTurma(aluno_id=aluno.id, turma_id=dados.turma_id, data_matricula=data_matricula, status="Inscrito"))
        db.flush()

    logger.info("Aluno %s cadastrado na turma %s", aluno.id, dados.turma_id)
    return aluno


def _transferir_turma(db: Session, aluno: Aluno, turma_id):
    """Cada aluno tem uma só inscrição: troca a turma dela ou cria a primeira."""
    financeiro_service.garantir_turma(db, turma_id)
    inscricao = db.query(AlunoTurma).filter(AlunoTurma.aluno_id == aluno.id).first()
    if inscricao is not None:
        inscricao.turma_id = turma_id
        inscricao.data_matricula = date.today()
        logger.info("Aluno %s transferido para a turma %s", aluno.id, turma_id)
    else:
        db.add(AlunoTurma(aluno_id=aluno.id, turma_id=turma_id, data_matricula=date.today(), status="Inscrito"))
        logger.info("Aluno %s inscrito na turma %s", aluno.id, turma_id)


@router.put("/{aluno_id}", response_model=AlunoRead)
def update_aluno(aluno_id: str, dados: AlunoUpdate, db: Session = Depends(get_db)):
    aluno = _buscar_ou_404(db, aluno_id)

    with _salvando_aluno(db):
        aluno.nome = dados.nome
        aluno.email = dados.email
        aluno.telefone = dados.telefone
        aluno.data_nascimento = dados.data_nascimento
        aluno.cpf = dados.cpf
        aluno.endereco = dados.endereco
        aluno.status = dados.status or aluno.status
        aluno.data_matricula = dados.data_matricula
        aluno.observacoes = dados.observacoes
        aluno.vendedor = dados.vendedor
        aluno.valor_venda = dados.valor_venda
        aluno.parcelas = dados.parcelas
        aluno.pos_graduacao = bool(dados.pos_graduacao)
        if dados.turma_id:
            _transferir_turma(db, aluno, dados.turma_id)

    return aluno


def _aplicar_campo(aluno: Aluno, campo: CampoAluno, valor):
    if campo is CampoAluno.DATA_NASCIMENTO:
        nova_data = para_date(valor)
        if valor not in (None, "") and nova_data is None:
            raise ValueError(f"Data inválida: {valor!r}")
        aluno.data_nascimento = nova_data
    elif campo is CampoAluno.VALOR_VENDA:
        aluno.valor_venda = parse_valor(valor)
    elif campo is CampoAluno.PARCELAS:
        aluno.parcelas = parse_inteiro(valor)
    elif campo is CampoAluno.POS_GRADUACAO:
        aluno.pos_graduacao = _para_bool(valor)
    elif campo is CampoAluno.EMAIL:
        if isinstance(valor, str):
            valor = valor.strip() or None
        aluno.email = valor
    else:
        setattr(aluno, campo.value, valor)


@router.patch("/{aluno_id}", response_model=AlunoRead)
def update_aluno_campo(aluno_id: str, dados: AtualizacaoCampo, db: Session = Depends(get_db)):
    try:
        campo = CampoAluno(dados.field)
    except ValueError:
        raise ErroValidacao("Campo não permitido para atualização", f"Campo: {dados.field}")

    aluno = _buscar_ou_404(db, aluno_id)

    with _salvando_aluno(db):
        try:
            _aplicar_campo(aluno, campo, dados.value)
        except ValueError as e:
            raise ErroValidacao(details=str(e))

    return aluno


@router.delete("/{aluno_id}", response_model=AlunoDeleteResponse)
def delete_aluno(aluno_id: str, db: Session = Depends(get_db)):
    """
    Exclui o aluno com a inscrição e os vínculos financeiro-aluno.
    Os lançamentos continuam no livro-caixa, sem referência ao aluno.
    """
    aluno = _buscar_ou_404(db, aluno_id)
    removido = AlunoRead.model_validate(aluno)

    with transacao(db):
        db.delete(aluno)

    logger.info("Aluno %s excluído", aluno_id)
    return {"message": "Aluno deletado com sucesso", "aluno": removido}
