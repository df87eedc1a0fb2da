# src/atlas_buildflow/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Atlas BuildFlow.

As exceções aqui definidas representam violações estruturais explícitas
da configuração do build, e não erros de execução de Tasks. Todas herdam
de `ConfigurationError`, de modo que o CLI as trata como qualquer outro
erro de configuração: fatal, antes de qualquer Task ser executada.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa falha de ferramenta externa ou de gate
"""

from atlas_buildflow.core.exceptions import ConfigurationError


class ConfigError(ConfigurationError):
    """
    Exceção base para erros relacionados à configuração do build.

    Limites explícitos:
        - Não representa erro de execução de Task
        - Não representa falha de quality gate
    """


class ConfigFileNotFoundError(ConfigError):
    """
    Exceção levantada quando um arquivo de configuração explicitamente
    solicitado não existe.

    Decisões arquiteturais:
        - O arquivo de projeto (`buildflow.yaml`) é opcional quando implícito
        - Um caminho passado explicitamente (`--config`) deve existir
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigSyntaxError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração não pode ser
    interpretado (YAML ou JSON sintaticamente inválido).
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"gates": {"coverage": {"min_percent": 80.0}}}
        - override: {"gates": {"coverage": "alto"}}

    Limites explícitos:
        - Não realiza coerção de tipos (exceto int → float)
        - Não tenta resolver conflitos automaticamente
    """


class InvalidConfigValueError(ConfigError):
    """
    Exceção levantada quando um valor de configuração conhecido possui
    valor fora do domínio aceito (ex.: `versioning.surface_diff: "hash"`).
    """
