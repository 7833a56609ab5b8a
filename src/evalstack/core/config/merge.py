# src/evalstack/core/config/merge.py
"""
Deep-merge de configuração do evalstack.

Usado em dois pontos:
    - `resolve_config`: `DEFAULT_CONFIG` + configuração do usuário
    - `load_config`: arquivo do pipeline + arquivo local

Política:
    - seção (dict) + seção → merge recursivo por chave
    - lista → substituída inteira
    - escalar → substituído pelo override, desde que o tipo seja o mesmo
    - mudança de tipo → `ConfigTypeConflictError` com o caminho da chave

O tipo é comparado exatamente: `bool` e `int` são tipos diferentes, então
`events.max_events: true` é conflito, não o inteiro 1.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _key_path(prefix: str, key: Any) -> str:
    return f"{prefix}.{key}" if prefix else str(key)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any], *, _prefix: str = "") -> Dict[str, Any]:
    """
    Retorna um novo dict com `override` aplicado sobre `base`.

    Nenhum dos inputs é mutado.

    Raises:
        ConfigTypeConflictError: Se `override` mudar o tipo de uma chave de `base`.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"{_prefix or 'config'}: merge requer duas seções, recebido "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]
        path = _key_path(_prefix, key)

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value, _prefix=path)
            continue

        if isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        if type(base_value) is not type(override_value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo em '{path}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result
