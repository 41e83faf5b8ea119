# -*- coding: utf-8 -*-
"""
Tipos de campo compartilhados pelos schemas.

Na entrada as datas chegam como DD/MM/AAAA (ou ISO) e os valores como
"1.900,50" ou "1900.50"; na saída as datas voltam em DD/MM/AAAA.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator

from certificacoes.utils import formatar_data, para_date, parse_inteiro, parse_valor


def _data_entrada(valor):
    if valor is None or valor == "":
        return None
    convertida = para_date(valor)
    if convertida is None:
        raise ValueError(f"Data inválida: {valor!r} (use DD/MM/AAAA)")
    return convertida


DataEntrada = Annotated[Optional[date], BeforeValidator(_data_entrada)]
ValorEntrada = Annotated[Optional[Decimal], BeforeValidator(parse_valor)]
InteiroEntrada = Annotated[Optional[int], BeforeValidator(parse_inteiro)]

DataExibicao = Annotated[Optional[str], BeforeValidator(formatar_data)]


class AtualizacaoCampo(BaseModel):
    """Corpo do PATCH: altera um único campo do registro."""
    field: str
    value: Any = None
