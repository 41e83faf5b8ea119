# -*- coding: utf-8 -*-
"""
Diagnóstico do backend: roda as verificações essenciais antes de subir a API.

Uso: python diagnose.py
"""
import importlib.util
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).parent

DEPENDENCIAS = ["fastapi", "uvicorn", "sqlalchemy", "pydantic", "dotenv", "psycopg2"]

ARQUIVOS = [
    "main.py",
    "certificacoes/config.py",
    "certificacoes/database.py",
    "certificacoes/routes/alunos_fastapi.py",
    "certificacoes/routes/turmas_fastapi.py",
    "certificacoes/routes/financeiro_fastapi.py",
    "certificacoes/services/financeiro_service.py",
    "certificacoes/utils.py",
    "pyproject.toml",
    ".env",
]

VARIAVEIS = {
    "DB_HOST": "Host do banco de dados",
    "DB_PORT": "Porta do banco de dados",
    "DB_NAME": "Nome do banco de dados",
    "DB_USER": "Usuário do banco de dados",
    "DB_PASSWORD": "Senha do banco de dados",
}

OPCIONAIS = ["PORT", "ENVIRONMENT", "CORS_ORIGINS", "LOG_LEVEL"]

# Trechos das mensagens do driver e o que fazer em cada caso
SOLUCOES = [
    (("connection refused", "could not connect"), [
        "Verifique se o PostgreSQL está rodando",
        "Verifique o host e a porta nas variáveis de ambiente",
    ]),
    (("28p01", "password authentication failed"), [
        "Verifique o usuário e a senha (DB_USER e DB_PASSWORD)",
    ]),
    (("3d000", "does not exist"), [
        "O banco de dados não existe. Crie-o primeiro.",
    ]),
]


class Diagnostico:
    def __init__(self):
        self.erros = 0
        self.avisos = 0
        self.faltando = []

    def titulo(self, texto):
        print(f"📌 {texto}")

    def verificar_python(self):
        self.titulo("1. Verificando versão do Python...")
        versao = sys.version_info
        print(f"   Python: {versao.major}.{versao.minor}.{versao.micro}")
        if versao < (3, 9):
            print("   ❌ ERRO: Python 3.9+ é necessário")
            self.erros += 1
        else:
            print("   ✅ Versão OK")
        print("")

    def verificar_dependencias(self):
        self.titulo("2. Verificando dependências instaladas...")
        for modulo in DEPENDENCIAS:
            if importlib.util.find_spec(modulo) is None:
                print(f"   ❌ {modulo:<15} - NÃO ENCONTRADO")
                self.faltando.append(modulo)
                self.erros += 1
            else:
                print(f"   ✅ {modulo:<15} - instalado")
        if self.faltando:
            print("\n   💡 Execute: pip install -e .")
        print("")

    def verificar_arquivos(self):
        self.titulo("3. Verificando arquivos essenciais...")
        for arquivo in ARQUIVOS:
            if (BASE_DIR / arquivo).exists():
                print(f"   ✅ {arquivo}")
            else:
                print(f"   ❌ {arquivo} - NÃO ENCONTRADO")
                self.erros += 1
        print("")

    def verificar_ambiente(self):
        self.titulo("4. Verificando variáveis de ambiente...")
        if load_dotenv(BASE_DIR / ".env"):
            print("   ✅ Arquivo .env carregado")
        else:
            print("   ⚠️  Arquivo .env não carregado")
            self.avisos += 1

        if os.environ.get("DATABASE_URL"):
            print("   ℹ️  DATABASE_URL definida (tem prioridade sobre DB_*)")
        else:
            for variavel, descricao in VARIAVEIS.items():
                valor = os.environ.get(variavel, "").strip()
                if not valor:
                    print(f"   ❌ {variavel:<15} - NÃO DEFINIDA ({descricao})")
                    self.erros += 1
                else:
                    exibido = "***" if variavel == "DB_PASSWORD" else valor
                    print(f"   ✅ {variavel:<15} = {exibido}")

        for variavel in OPCIONAIS:
            valor = os.environ.get(variavel)
            if not valor:
                print(f"   ⚠️  {variavel:<15} - não definida (opcional)")
                self.avisos += 1
            else:
                print(f"   ℹ️  {variavel:<15} = {valor}")
        print("")

    def testar_banco(self):
        self.titulo("5. Testando conexão com banco de dados...")
        if self.erros > 0:
            print("   ⏭️  Pulando teste (corrija os erros acima primeiro)")
            print("")
            return

        from sqlalchemy import create_engine, inspect, text
        from sqlalchemy.exc import SQLAlchemyError

        from certificacoes.config import settings

        connect_args = {"connect_timeout": 5} if settings.DATABASE_URL.startswith("postgresql") else {}
        engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
        try:
            with engine.connect() as conexao:
                print("   ✅ Conexão estabelecida com sucesso!")
                versao = conexao.execute(text("SELECT version()")).scalar()
                print(f"   📊 PostgreSQL: {versao.split(',')[0]}")

                tabelas = inspect(conexao).get_table_names(schema="public")
                if not tabelas:
                    print("   ⚠️  Nenhuma tabela encontrada no banco de dados")
                    self.avisos += 1
                else:
                    print(f"   ✅ {len(tabelas)} tabelas encontradas:")
                    for tabela in sorted(tabelas):
                        print(f"      - {tabela}")
        except SQLAlchemyError as e:
            mensagem = str(getattr(e, "orig", None) or e)
            print("   ❌ Erro ao conectar com o banco de dados!")
            print(f"   📋 Mensagem: {mensagem.strip()}")
            texto = mensagem.lower()
            for marcas, passos in SOLUCOES:
                if any(marca in texto for marca in marcas):
                    print("\n   💡 SOLUÇÃO:")
                    for passo in passos:
                        print(f"      - {passo}")
                    break
            self.erros += 1
        finally:
            engine.dispose()
        print("")

    def resumo(self):
        print("=" * 70)
        print("📊 RESUMO DO DIAGNÓSTICO")
        print("=" * 70)
        if self.erros == 0 and self.avisos == 0:
            print("✅ Tudo OK! O backend está pronto para iniciar.")
            print("\n💡 Execute: python main.py")
        else:
            if self.erros:
                print(f"❌ {self.erros} erro(s) encontrado(s) - CORRIJA ANTES DE INICIAR")
            if self.avisos:
                print(f"⚠️  {self.avisos} aviso(s) encontrado(s)")
            print("\n📋 PRÓXIMOS PASSOS:")
            if self.faltando:
                print("   1. Instale as dependências: pip install -e .")
            print("   2. Verifique o arquivo .env e configure corretamente")
            print("   3. Verifique se o PostgreSQL está acessível")
            print("   4. Execute este diagnóstico novamente")
        print("=" * 70 + "\n")
        return 1 if self.erros else 0

    def executar(self):
        print("\n" + "=" * 70)
        print("🔍 DIAGNÓSTICO DO BACKEND - Admin Certificações")
        print("=" * 70 + "\n")
        self.verificar_python()
        self.verificar_dependencias()
        self.verificar_arquivos()
        self.verificar_ambiente()
        self.testar_banco()
        return self.resumo()


if __name__ == "__main__":
    sys.exit(Diagnostico().executar())
