# src/evalstack/core/config/__init__.py

"""
Camada de configuração do evalstack.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
mesclar, validar e identificar a configuração de um Pipeline.

A configuração no evalstack controla apenas aspectos ambientais do
pipeline (identidade, log de eventos, política de aviso para falhas não
observadas). Ela nunca altera a semântica de ordenação ou de execução
dos jobs.

Responsabilidades do pacote:
    - Leitura de arquivos YAML/JSON (arquivo do pipeline + override local)
    - Resolução da configuração efetiva: `DEFAULT_CONFIG` + overrides via deep-merge
    - Validação de valores conhecidos
    - Geração de hash canônico para rastreabilidade

Invariantes:
    - A configuração final é um dicionário puro (dict)
    - A mesma entrada sempre produz a mesma configuração final
    - Conflitos estruturais são tratados como erro
"""
from .defaults import DEFAULT_CONFIG, resolve_config, validate_config
from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigValueError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config, read_config_file
from .merge import deep_merge

__all__ = [
    "DEFAULT_CONFIG",
    "resolve_config",
    "validate_config",
    "ConfigError",
    "ConfigTypeConflictError",
    "ConfigFileNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidConfigValueError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "load_config",
    "read_config_file",
    "deep_merge",
]
