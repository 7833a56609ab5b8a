# src/evalstack/core/binding.py
"""
Instalação do Pipeline em um namespace global.

Permite expor a classe `Pipeline` sob um nome curto (por padrão `Pe`) em
um namespace mutável (ex.: `globals()` de um script ou `builtins.__dict__`)
e, depois, remover essa exposição restaurando o valor anterior do nome.

Exemplo::

    binding = bind_global(globals())
    stack = Pe().push(1)
    Pipeline = detach_global_binding(binding)   # `Pe` volta ao valor anterior

Invariantes:
    - `detach` restaura exatamente o valor anterior (ou remove o nome, se
      ele não existia)
    - `detach` é idempotente
"""

from __future__ import annotations

from typing import Any, MutableMapping, Type

from evalstack.core.engine.engine import Pipeline

DEFAULT_BINDING_NAME = "Pe"

_MISSING = object()


class GlobalBinding:
    """Exposição do Pipeline sob `name` em `namespace`."""

    def __init__(self, namespace: MutableMapping[str, Any], name: str = DEFAULT_BINDING_NAME):
        self._namespace = namespace
        self._name = name
        self._previous = namespace.get(name, _MISSING)
        self._attached = True
        namespace[name] = Pipeline

    @property
    def name(self) -> str:
        return self._name

    @property
    def attached(self) -> bool:
        return self._attached

    def detach(self) -> Type[Pipeline]:
        if self._attached:
            if self._previous is _MISSING:
                self._namespace.pop(self._name, None)
            else:
                self._namespace[self._name] = self._previous
            self._attached = False
        return Pipeline


def bind_global(namespace: MutableMapping[str, Any], name: str = DEFAULT_BINDING_NAME) -> GlobalBinding:
    return GlobalBinding(namespace, name)


def detach_global_binding(binding: GlobalBinding) -> Type[Pipeline]:
    """Restaura o valor anterior do nome e retorna a classe Pipeline."""
    return binding.detach()
