# -*- coding: utf-8 -*-
"""
Regras do livro-caixa: vínculo dos lançamentos com alunos/turmas e resumo.

Um lançamento (ci_financeiro) chega à turma por um de dois caminhos:

- ci_financeiro_aluno: pagamento de matrícula de um aluno naquela turma;
- ci_financeiro_turma: custo da turma, sem aluno.

As consultas por turma testam os dois caminhos com ``IN`` sobre cada tabela
de vínculo, de modo que um lançamento é contado uma única vez mesmo que
apareça nas duas (por exemplo, uma matrícula ligada depois a um lançamento
que já era gasto da turma).

As funções daqui não fazem commit: a rota abre e fecha a transação.
"""

import logging
from decimal import Decimal

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, selectinload

from certificacoes.errors import ErroValidacao, ReferenciaInvalida
from certificacoes.models.aluno import Aluno
from certificacoes.models.financeiro import Financeiro, TipoFinanceiro
from certificacoes.models.financeiro_aluno import FinanceiroAluno
from certificacoes.models.financeiro_turma import FinanceiroTurma
from certificacoes.models.turma import Turma
from certificacoes.schemas.financeiro import FinanceiroRead, ResumoFinanceiro
from certificacoes.utils import arredondar, para_date

logger = logging.getLogger(__name__)

SEM_TURMA = "sem_turma"
CATEGORIA_VENDA = "Venda de Curso"


# ---------------------------------------------------------------------------
# Filtros
# ---------------------------------------------------------------------------


def filtro_turma(turma_id):
    """Lançamentos ligados à turma por qualquer uma das tabelas de vínculo."""
    return or_(
        Financeiro.id.in_(
            select(FinanceiroAluno.financeiro_id).where(FinanceiroAluno.turma_id == turma_id)
        ),
        Financeiro.id.in_(
            select(FinanceiroTurma.financeiro_id).where(FinanceiroTurma.turma_id == turma_id)
        ),
    )


def filtro_sem_turma():
    return ~or_(
        Financeiro.id.in_(select(FinanceiroAluno.financeiro_id)),
        Financeiro.id.in_(select(FinanceiroTurma.financeiro_id)),
    )


def _data_filtro(valor, campo):
    if valor is None or valor == "":
        return None
    convertida = para_date(valor)
    if convertida is None:
        raise ErroValidacao("Data inválida", f"{campo}: {valor!r} (use DD/MM/AAAA)")
    return convertida


# ---------------------------------------------------------------------------
# Consultas
# ---------------------------------------------------------------------------


def _query_com_vinculos(db: Session):
    return db.query(Financeiro).options(
        selectinload(Financeiro.vinculos_aluno).selectinload(FinanceiroAluno.turma),
        selectinload(Financeiro.vinculos_turma).selectinload(FinanceiroTurma.turma),
    )


def listar(db: Session, search=None, tipo=None, turma_id=None):
    query = _query_com_vinculos(db)

    if search:
        termo = f"%{search}%"
        query = query.filter(or_(Financeiro.categoria.ilike(termo), Financeiro.descricao.ilike(termo)))
    if tipo and tipo != "todos":
        query = query.filter(Financeiro.tipo == tipo)
    if turma_id:
        if turma_id == SEM_TURMA:
            query = query.filter(filtro_sem_turma())
        else:
            query = query.filter(filtro_turma(turma_id))

    return query.order_by(Financeiro.data.desc(), Financeiro.id.desc()).all()


def listar_por_tipo(db: Session, tipo):
    return (
        _query_com_vinculos(db)
        .filter(Financeiro.tipo == tipo)
        .order_by(Financeiro.data.desc(), Financeiro.id.desc())
        .all()
    )


def buscar(db: Session, financeiro_id):
    return _query_com_vinculos(db).filter(Financeiro.id == financeiro_id).first()


def resumo(db: Session, turma_id=None, data_inicio=None, data_fim=None) -> ResumoFinanceiro:
    """
    Soma valor_total por tipo: entradas, saídas e saldo (entradas - saídas).

    Sem turma_id todos os lançamentos entram, inclusive os sem vínculo.
    As datas aceitam DD/MM/AAAA ou AAAA-MM-DD e são inclusivas.
    """
    inicio = _data_filtro(data_inicio, "data_inicio")
    fim = _data_filtro(data_fim, "data_fim")

    query = db.query(Financeiro.tipo, func.sum(Financeiro.valor_total))
    if turma_id:
        query = query.filter(filtro_turma(turma_id))
    if inicio:
        query = query.filter(Financeiro.data >= inicio)
    if fim:
        query = query.filter(Financeiro.data <= fim)

    totais = {tipo: total for tipo, total in query.group_by(Financeiro.tipo).all()}
    logger.debug("Resumo turma=%s inicio=%s fim=%s totais=%s", turma_id, inicio, fim, totais)

    entradas = arredondar(totais.get(TipoFinanceiro.ENTRADA.value) or 0)
    saidas = arredondar(totais.get(TipoFinanceiro.SAIDA.value) or 0)
    return ResumoFinanceiro(entradas=entradas, saidas=saidas, saldo=entradas - saidas)


def resumo_de_registros(registros) -> ResumoFinanceiro:
    """Mesmo cálculo do resumo, sobre lançamentos já carregados."""
    entradas = Decimal("0")
    saidas = Decimal("0")
    for registro in registros:
        if registro.tipo == TipoFinanceiro.ENTRADA.value:
            entradas += registro.valor_total or 0
        elif registro.tipo == TipoFinanceiro.SAIDA.value:
            saidas += registro.valor_total or 0
    entradas, saidas = arredondar(entradas), arredondar(saidas)
    return ResumoFinanceiro(entradas=entradas, saidas=saidas, saldo=entradas - saidas)


def serializar(lancamento: Financeiro, turma_id=None) -> FinanceiroRead:
    """
    Lançamento com a turma resolvida. Numa listagem filtrada por turma vale
    o vínculo daquela turma, senão o vínculo padrão do lançamento.
    """
    turma = None
    if turma_id and turma_id != SEM_TURMA:
        for vinculo in lancamento.vinculos_aluno + lancamento.vinculos_turma:
            if vinculo.turma_id == turma_id:
                turma = vinculo.turma
                break
    if turma is None:
        turma = lancamento.vinculo_turma
    lido = FinanceiroRead.model_validate(lancamento)
    return lido.model_copy(update={
        "turma_id": turma.id if turma else None,
        "turma_nome": turma.nome if turma else None,
    })


# ---------------------------------------------------------------------------
# Escrita (sem commit)
# ---------------------------------------------------------------------------


def garantir_turma(db: Session, turma_id) -> Turma:
    turma = db.get(Turma, turma_id)
    if turma is None:
        raise ReferenciaInvalida(details=f"Turma {turma_id} não encontrada")
    return turma


def garantir_aluno(db: Session, aluno_id) -> Aluno:
    aluno = db.get(Aluno, aluno_id)
    if aluno is None:
        raise ReferenciaInvalida(details=f"Aluno {aluno_id} não encontrado")
    return aluno


def vincular(db: Session, lancamento: Financeiro, turma_id, aluno_id=None):
    """
    Cria o vínculo do lançamento com a turma.

    Entrada com aluno vira matrícula (ci_financeiro_aluno); qualquer outro
    caso vira gasto/receita da turma (ci_financeiro_turma).
    """
    garantir_turma(db, turma_id)

    if lancamento.tipo == TipoFinanceiro.ENTRADA.value and aluno_id:
        garantir_aluno(db, aluno_id)
        vinculo = FinanceiroAluno(
            aluno_id=aluno_id,
            financeiro_id=lancamento.id,
            turma_id=turma_id,
            valor_matricula=lancamento.valor_total,
            tipo=lancamento.tipo,
            data=lancamento.data,
        )
        lancamento.vinculos_aluno.append(vinculo)
        logger.info("Vínculo financeiro-aluno criado: %s -> aluno %s, turma %s", lancamento.id, aluno_id, turma_id)
    else:
        vinculo = FinanceiroTurma(
            financeiro_id=lancamento.id,
            turma_id=turma_id,
            tipo=lancamento.tipo,
            valor=lancamento.valor_total,
            data=lancamento.data,
        )
        lancamento.vinculos_turma.append(vinculo)
        logger.info("Vínculo financeiro-turma criado: %s -> turma %s", lancamento.id, turma_id)

    db.flush()
    return vinculo


def mover_para_turma(db: Session, lancamento: Financeiro, turma_id):
    """Troca a turma de todos os vínculos do lançamento, preservando o tipo de cada um."""
    garantir_turma(db, turma_id)

    for vinculo in lancamento.vinculos_aluno:
        vinculo.turma_id = turma_id

    # Turma faz parte da chave de ci_financeiro_turma: remove e recria
    antigos = [(v.tipo, v.valor, v.data) for v in lancamento.vinculos_turma]
    lancamento.vinculos_turma.clear()
    db.flush()

    if antigos:
        # Todos vão para a mesma turma, então sobra uma linha só
        tipo, valor, data = antigos[0]
        lancamento.vinculos_turma.append(FinanceiroTurma(
            financeiro_id=lancamento.id, turma_id=turma_id, tipo=tipo, valor=valor, data=data,
        ))
    elif not lancamento.vinculos_aluno:
        vincular(db, lancamento, turma_id)
        return
    db.flush()

    for vinculo in lancamento.vinculos_aluno + lancamento.vinculos_turma:
        db.expire(vinculo, ["turma"])
    logger.info("Lançamento %s movido para a turma %s", lancamento.id, turma_id)


def sincronizar_vinculos(lancamento: Financeiro):
    """Replica valor, tipo e data do lançamento nas linhas de vínculo."""
    for vinculo in lancamento.vinculos_aluno:
        vinculo.valor_matricula = lancamento.valor_total
        vinculo.tipo = lancamento.tipo
        vinculo.data = lancamento.data
    for vinculo in lancamento.vinculos_turma:
        vinculo.valor = lancamento.valor_total
        vinculo.tipo = lancamento.tipo
        vinculo.data = lancamento.data


def excluir(db: Session, lancamento: Financeiro):
    """
    Exclui o lançamento e seus vínculos; se ele registra a venda de um
    aluno (aluno_ref_id), o aluno também é excluído.
    """
    aluno = lancamento.aluno_ref

    # Vínculos primeiro, para não sobrar linha órfã
    lancamento.vinculos_aluno.clear()
    lancamento.vinculos_turma.clear()
    db.flush()

    db.delete(lancamento)
    db.flush()

    if aluno is not None:
        db.delete(aluno)
        db.flush()
        logger.info("Aluno associado %s excluído junto com o lançamento %s", aluno.id, lancamento.id)
