# src/evalstack/core/pipeline/gate.py
"""
Lifecycle Gate: flag de fechamento de mão única.

Depois de fechado, o gate rejeita novos itens e avaliadores com
`InvalidStateError`. Não existe operação de reabertura.
"""

from __future__ import annotations

from evalstack.core.exceptions import invalid_state


class LifecycleGate:

    def __init__(self) -> None:
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> bool:
        """Fecha o gate. Retorna True apenas na primeira transição."""
        if self._closed:
            return False
        self._closed = True
        return True

    def ensure_open(self, operation: str) -> None:
        if self._closed:
            raise invalid_state(operation=operation)
