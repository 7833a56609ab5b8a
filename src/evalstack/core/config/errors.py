# src/evalstack/core/config/errors.py
"""
Exceções da camada de configuração do evalstack.

Todas são levantadas antes de o Pipeline existir (na leitura dos arquivos,
no merge ou na validação), por isso nunca chegam ao Fail Channel nem ao
log de eventos: o chamador de `Pipeline(...)`, `load_config(...)` ou
`Pipeline.from_config_file(...)` as recebe diretamente.

Invariantes:
    - Todas herdam de `ConfigError`
    - Nenhuma representa falha de job
"""


class ConfigError(Exception):
    """Base para qualquer erro de configuração do evalstack."""


class ConfigFileNotFoundError(ConfigError):
    """
    O arquivo de configuração do pipeline passado a `load_config` não existe.

    Decisões arquiteturais:
        - Apenas o arquivo principal é obrigatório; o local é opcional
        - Nenhum arquivo é criado automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """Extensão diferente de .yaml, .yml ou .json."""


class InvalidConfigRootTypeError(ConfigError):
    """
    A raiz da configuração não é um mapeamento.

    Vale tanto para arquivos (ex.: um YAML que é uma lista) quanto para o
    valor passado em `Pipeline(config=...)`.
    """


class ConfigTypeConflictError(ConfigError):
    """
    Um override muda o tipo de uma chave já definida.

    Exemplo:
        - DEFAULT_CONFIG: {"events": {"max_events": 0}}
        - override:       {"events": {"max_events": "100"}}

    A mensagem traz o caminho pontilhado da chave (ex.: `events.max_events`).
    """


class InvalidConfigValueError(ConfigError):
    """
    Uma chave conhecida tem o tipo certo mas valor fora do domínio
    (ex.: `events.log_level: TRACE` ou `events.max_events: -1`).
    """
