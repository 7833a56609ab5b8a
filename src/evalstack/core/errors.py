"""
evalstack — Canonical Error Structures (v1)

Este módulo define o padrão canônico de payloads de erro do evalstack.
Payloads são a forma serializável de um erro, usada no log de eventos
do PipelineContext e disponível para relatórios externos.

Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Union

from .exceptions import EvalStackException, InvalidArgumentError, InvalidStateError


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do evalstack.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

INVALID_ARGUMENT = "INVALID_ARGUMENT"
INVALID_STATE = "INVALID_STATE"
JOB_FAILURE = "JOB_FAILURE"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def job_failure(
    *,
    error: Any,
    evaluator_sequence: int,
    item_sequence: int,
    raised: bool,
    hint: str = "Inspecione os listeners de falha; o job não será reexecutado.",
) -> ErrorPayload:
    """Converte um valor de falha de job em ErrorPayload.

    O valor de falha pode ser qualquer objeto (não apenas exceções). Para
    exceções do evalstack, message/details/hint são preservados.
    """
    if isinstance(error, EvalStackException):
        return ErrorPayload(
            type=JOB_FAILURE,
            message=error.message,
            details={
                "evaluator_sequence": evaluator_sequence,
                "item_sequence": item_sequence,
                "raised": raised,
                "exception_class": error.__class__.__name__,
                **dict(error.details or {}),
            },
            hint=error.hint or hint,
        )

    if isinstance(error, BaseException):
        message = str(error) or error.__class__.__name__
        value_type = error.__class__.__name__
    else:
        message = repr(error)
        value_type = type(error).__name__

    return ErrorPayload(
        type=JOB_FAILURE,
        message=message,
        details={
            "evaluator_sequence": evaluator_sequence,
            "item_sequence": item_sequence,
            "raised": raised,
            "value_type": value_type,
        },
        hint=hint,
    )


def from_exception(exc: Union[InvalidArgumentError, InvalidStateError]) -> ErrorPayload:
    """Mapeia exceções de guardrail (argumento/estado) para ErrorPayload."""
    code = INVALID_ARGUMENT if isinstance(exc, InvalidArgumentError) else INVALID_STATE

    return ErrorPayload(
        type=code,
        message=exc.message,
        details=dict(exc.details or {}),
        hint=exc.hint,
    )
