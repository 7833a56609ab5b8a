"""
evalstack — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do evalstack.

Objetivo:
- Permitir que o Pipeline levante exceções semânticas tipadas
- Facilitar o mapeamento determinístico para ErrorPayload
- Evitar ValueError/RuntimeError genéricos em guardrails críticos

Taxonomia:
- InvalidArgumentError: valor não invocável onde um callable era exigido
- InvalidStateError: mutação tentada após o fechamento do gate

Regras:
- InvalidArgumentError e InvalidStateError são erros de programação e
  chegam sempre ao chamador imediato da operação violada.
- Exceções carregam apenas dados estruturados (serializáveis).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class EvalStackException(Exception):
    """Base class para exceções internas do evalstack.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class InvalidArgumentError(EvalStackException, TypeError):
    """Valor não invocável recebido onde um callable era obrigatório."""


@dataclass(frozen=True)
class InvalidStateError(EvalStackException, RuntimeError):
    """Operação de mutação tentada com o Pipeline já fechado."""


def invalid_argument(*, operation: str, value: Any) -> InvalidArgumentError:
    return InvalidArgumentError(
        message=f"{operation} requer um callable",
        details={
            "operation": operation,
            "received": type(value).__name__,
        },
        hint="Passe uma função (ou objeto com __call__) para esta operação.",
    )


def invalid_state(*, operation: str) -> InvalidStateError:
    return InvalidStateError(
        message=f"Pipeline fechado: {operation} não é permitido após finish()",
        details={"operation": operation},
        hint="Registre itens e avaliadores antes de chamar finish().",
    )
