# -*- coding: utf-8 -*-
"""
Erros da API e os handlers que os serializam como {"error", "details"}.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


class ErroAPI(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Erro interno do servidor"

    def __init__(self, error=None, details=None):
        super().__init__(error or self.error)
        if error:
            self.error = error
        self.details = details

    def to_dict(self):
        return {"error": self.error, "details": self.details}


class RegistroNaoEncontrado(ErroAPI):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Registro não encontrado"


class ErroValidacao(ErroAPI):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Dados inválidos"


class RegistroDuplicado(ErroAPI):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Registro duplicado"


class ReferenciaInvalida(ErroAPI):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Referência inválida"


class ErroInterno(ErroAPI):
    pass


# Códigos SQLSTATE do PostgreSQL e os trechos equivalentes das mensagens do SQLite
_UNIQUE = ("23505", "unique constraint", "duplicate key")
_FOREIGN_KEY = ("23503", "foreign key constraint")
_NOT_NULL = ("23502", "not null constraint", "null value in column")


def classificar_integrity_error(exc):
    """Converte um IntegrityError do driver no ErroAPI correspondente."""
    codigo = getattr(exc.orig, "pgcode", None) or ""
    mensagem = str(exc.orig)
    texto = f"{codigo} {mensagem}".lower()

    if any(marca in texto for marca in _UNIQUE):
        return RegistroDuplicado(details=mensagem)
    if any(marca in texto for marca in _FOREIGN_KEY):
        return ReferenciaInvalida(details=mensagem)
    if any(marca in texto for marca in _NOT_NULL):
        return ErroValidacao("Campo obrigatório não preenchido", mensagem)
    return ErroInterno("Erro ao salvar registro", mensagem)


async def erro_api_handler(request: Request, exc: ErroAPI):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    detalhes = "; ".join(
        f"{'.'.join(str(p) for p in erro['loc'] if p != 'body')}: {erro['msg']}"
        for erro in exc.errors()
    )
    erro = ErroValidacao(details=detalhes)
    return JSONResponse(status_code=erro.status_code, content=erro.to_dict())


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.error("Erro de integridade em %s %s: %s", request.method, request.url.path, exc.orig)
    erro = classificar_integrity_error(exc)
    return JSONResponse(status_code=erro.status_code, content=erro.to_dict())


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Erro de banco em %s %s: %s", request.method, request.url.path, exc)
    erro = ErroInterno("Erro ao acessar o banco de dados", str(exc))
    return JSONResponse(status_code=erro.status_code, content=erro.to_dict())


def registrar_handlers(app):
    app.add_exception_handler(ErroAPI, erro_api_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
