# src/evalstack/core/pipeline/registry.py
"""
Registries ordenados do pipeline: Item Stack e Evaluator Registry.

Ambos são estruturas append-only: nenhum item ou avaliador é removido
ou reordenado durante a vida do Pipeline. O estado interno é privado;
o acesso ocorre apenas pelos métodos expostos.

Decisões arquiteturais:
    - `sequence` é atribuído no momento do registro (0, 1, 2, ...)
    - A validação de callable acontece no Pipeline, antes do gate
    - A capacidade de receber o `JobScope` é resolvida uma única vez,
      no registro do avaliador
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List

from .types import Evaluator, Item


# Nome do parâmetro keyword pelo qual o JobScope é entregue ao avaliador.
SCOPE_PARAMETER = "scope"


def accepts_scope(fn: Callable[..., Any]) -> bool:
    """
    Indica se o avaliador deve receber o `JobScope` como `scope=`.

    Regras:
        - parâmetro chamado `scope` (posicional-ou-keyword ou keyword-only) → True
        - catch-all `**kwargs` → True
        - assinatura não inspecionável (alguns builtins) → False
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return False

    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            return True
        if param.name == SCOPE_PARAMETER and param.kind in (
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.KEYWORD_ONLY,
        ):
            return True
    return False


@dataclass
class ItemStack:
    """Registro ordenado de itens empilhados."""

    _items: List[Item] = field(default_factory=list, init=False, repr=False)

    def push(self, params: Iterable[Any]) -> Item:
        item = Item(sequence=len(self._items), params=tuple(params))
        self._items.append(item)
        return item

    def get(self, sequence: int) -> Item:
        return self._items[sequence]

    def list(self) -> List[Item]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)


@dataclass
class EvaluatorRegistry:
    """Registro ordenado de avaliadores."""

    _evaluators: List[Evaluator] = field(default_factory=list, init=False, repr=False)

    def register(self, fn: Callable[..., Any]) -> Evaluator:
        evaluator = Evaluator(
            sequence=len(self._evaluators),
            fn=fn,
            accepts_scope=accepts_scope(fn),
        )
        self._evaluators.append(evaluator)
        return evaluator

    def get(self, sequence: int) -> Evaluator:
        return self._evaluators[sequence]

    def list(self) -> List[Evaluator]:
        return list(self._evaluators)

    def __len__(self) -> int:
        return len(self._evaluators)
