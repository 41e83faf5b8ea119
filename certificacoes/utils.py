# -*- coding: utf-8 -*-
"""
Conversões de datas e valores entre o formato da interface e o do banco.

A interface trabalha com datas em DD/MM/AAAA e valores no formato brasileiro
("1.900,50"); o banco guarda datas ISO (AAAA-MM-DD) e decimais simples.
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

FORMATO_FRONTEND = "%d/%m/%Y"
FORMATO_DB = "%Y-%m-%d"

_RE_FRONTEND = re.compile(r"^\d{2}/\d{2}/\d{4}$")
_RE_DB = re.compile(r"^\d{4}-\d{2}-\d{2}")

CENTAVOS = Decimal("0.01")


def para_date(valor):
    """
    Interpreta `valor` (date, datetime, "DD/MM/AAAA" ou "AAAA-MM-DD[...]")
    e devolve um `date`, ou None quando não for uma data válida.
    """
    if valor is None or valor == "":
        return None
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    if not isinstance(valor, str):
        return None

    texto = valor.strip()
    try:
        if _RE_FRONTEND.match(texto):
            return datetime.strptime(texto, FORMATO_FRONTEND).date()
        if _RE_DB.match(texto):
            return datetime.strptime(texto[:10], FORMATO_DB).date()
    except ValueError:
        # Formato certo, mas dia/mês inexistente (ex.: 34/44/3242)
        return None
    return None


def formatar_data(valor):
    """Data para exibição (DD/MM/AAAA) ou None."""
    convertida = para_date(valor)
    return convertida.strftime(FORMATO_FRONTEND) if convertida else None


def parse_data(valor):
    """Data para o banco (AAAA-MM-DD) ou None."""
    convertida = para_date(valor)
    return convertida.strftime(FORMATO_DB) if convertida else None


def hoje_db():
    return date.today().strftime(FORMATO_DB)


def hoje_frontend():
    return date.today().strftime(FORMATO_FRONTEND)


def parse_valor(valor):
    """
    Normaliza um valor monetário para Decimal.

    Aceita números e textos como "1900.50" ou "1.900,50" (ponto como
    separador de milhar e vírgula como decimal). Vazio vira None; texto que
    não é número levanta ValueError.
    """
    if valor is None or isinstance(valor, bool):
        return None
    if isinstance(valor, Decimal):
        return valor
    if isinstance(valor, (int, float)):
        return Decimal(str(valor))

    texto = str(valor).strip().replace("R$", "").replace(" ", "")
    if not texto:
        return None
    if "," in texto:
        texto = texto.replace(".", "").replace(",", ".")
    try:
        convertido = Decimal(texto)
    except InvalidOperation:
        raise ValueError(f"Valor numérico inválido: {valor!r}")
    if not convertido.is_finite():
        raise ValueError(f"Valor numérico inválido: {valor!r}")
    return convertido


def parse_inteiro(valor):
    if valor is None or isinstance(valor, bool):
        return None
    if isinstance(valor, int):
        return valor
    if isinstance(valor, float):
        if not valor.is_integer():
            raise ValueError(f"Número inteiro inválido: {valor!r}")
        return int(valor)
    texto = str(valor).strip()
    if not texto:
        return None
    try:
        return int(texto)
    except ValueError:
        raise ValueError(f"Número inteiro inválido: {valor!r}")


def arredondar(valor):
    return Decimal(valor).quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def calcular_total(quantidade, valor_unitario):
    """quantidade × valor unitário, em centavos; None se faltar algum dos dois."""
    if quantidade is None or valor_unitario is None:
        return None
    return arredondar(Decimal(quantidade) * Decimal(valor_unitario))
