# src/evalstack/core/config/defaults.py
"""
Configuração padrão e validação do evalstack.

Este módulo define `DEFAULT_CONFIG`, a base sobre a qual qualquer
configuração passada ao Pipeline é mesclada, e as regras de validação
das chaves conhecidas.

Chaves conhecidas (v1):
    - pipeline.name        → identificador legível do pipeline
    - events.enabled       → liga/desliga o log estruturado de eventos
    - events.log_level     → nível mínimo registrado (DEBUG|INFO|WARNING|ERROR)
    - events.max_events    → limite do log (0 = ilimitado, descarta os mais antigos)
    - fail.warn_unobserved → registra WARNING quando uma falha não tem listener

Chaves desconhecidas são preservadas sem validação.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Optional

from .errors import InvalidConfigRootTypeError, InvalidConfigValueError
from .merge import deep_merge


LOG_LEVELS: Dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}


DEFAULT_CONFIG: Dict[str, Any] = {
    "pipeline": {
        "name": "evalstack",
    },
    "events": {
        "enabled": True,
        "log_level": "INFO",
        "max_events": 0,
    },
    "fail": {
        "warn_unobserved": True,
    },
}


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Valida os valores das chaves conhecidas e retorna a própria configuração.

    Raises:
        InvalidConfigRootTypeError: Se `config` não for dict.
        InvalidConfigValueError: Se alguma chave conhecida tiver valor inválido.
    """
    if not isinstance(config, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(config).__name__}"
        )

    events = config.get("events", {}) or {}
    level = events.get("log_level", "INFO")
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise InvalidConfigValueError(
            f"events.log_level inválido: {level!r} (esperado um de {sorted(LOG_LEVELS)})"
        )

    max_events = events.get("max_events", 0)
    # bool é subclasse de int
    if isinstance(max_events, bool) or not isinstance(max_events, int) or max_events < 0:
        raise InvalidConfigValueError(
            f"events.max_events deve ser inteiro >= 0, recebido: {max_events!r}"
        )

    name = (config.get("pipeline", {}) or {}).get("name", "evalstack")
    if not isinstance(name, str) or not name.strip():
        raise InvalidConfigValueError("pipeline.name deve ser string não vazia")

    return config


def resolve_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Resolve a configuração efetiva: `DEFAULT_CONFIG` + overrides, validada.

    Args:
        overrides: Configuração parcial (ex.: conteúdo de `read_config_file`).

    Returns:
        Dict[str, Any]: Nova configuração efetiva (inputs não são mutados).
    """
    if overrides is None:
        return validate_config(deepcopy(DEFAULT_CONFIG))
    if not isinstance(overrides, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(overrides).__name__}"
        )
    return validate_config(deep_merge(DEFAULT_CONFIG, overrides))
