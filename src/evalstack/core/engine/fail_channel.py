# src/evalstack/core/engine/fail_channel.py
"""
Fail Channel: listeners de falha deduplicados por identidade.

Dois listeners são o mesmo listener quando são o mesmo objeto (`is`).
Bound methods são criados a cada acesso ao atributo, então são comparados
pelo par (`__self__`, `__func__`), ambos por identidade; métodos de
builtins (ex.: `lista.append`) pelo par (`__self__`, `__name__`).
Igualdade (`__eq__`) nunca é consultada: dois coletores distintos que se
comparam iguais continuam sendo dois listeners.

Registrar o mesmo listener duas vezes é no-op.

Exceções levantadas por listeners não são capturadas aqui.
"""

from __future__ import annotations

import inspect
import types
from typing import Any, Callable, List, Tuple

FailListener = Callable[[Any], Any]


def same_listener(a: FailListener, b: FailListener) -> bool:
    if a is b:
        return True
    if inspect.ismethod(a) and inspect.ismethod(b):
        return a.__self__ is b.__self__ and a.__func__ is b.__func__
    if isinstance(a, types.BuiltinMethodType) and isinstance(b, types.BuiltinMethodType):
        return a.__self__ is b.__self__ and a.__name__ == b.__name__
    return False


class FailChannel:

    def __init__(self) -> None:
        self._listeners: List[FailListener] = []

    def add(self, listener: FailListener) -> bool:
        """Adiciona o listener. Retorna False se já estava registrado."""
        if any(same_listener(listener, known) for known in self._listeners):
            return False
        self._listeners.append(listener)
        return True

    def notify(self, error: Any) -> None:
        # snapshot: listeners adicionados durante a notificação ficam para a próxima falha
        for listener in tuple(self._listeners):
            listener(error)

    def listeners(self) -> Tuple[FailListener, ...]:
        return tuple(self._listeners)

    def __len__(self) -> int:
        return len(self._listeners)
