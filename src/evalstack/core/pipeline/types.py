# src/evalstack/core/pipeline/types.py
"""
Tipos canônicos do pipeline do evalstack.

Este módulo define as estruturas e enums que padronizam a comunicação
entre registries, planner e scheduler.

Componentes principais:
    - Item           → dados empilhados + high-water mark
    - Evaluator      → estágio de processamento registrado
    - Job            → aplicação agendada de um avaliador aos params de um item
    - JobStatus      → estados de conclusão de um job
    - JobOutcome     → resultado explícito da invocação de um job
    - SchedulerState → estados do worker loop

Invariantes:
    - `sequence` de Item e Evaluator reflete a ordem de inserção e é imutável
    - Evaluator, Job e JobOutcome são imutáveis
    - Item muta apenas `last_evaluator_processed`, e apenas via planner
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple

if TYPE_CHECKING:
    from .scope import CompletionSignal


class SchedulerState(str, Enum):
    """
    Estados do scheduler single-flight.

    Estados definidos:
        - IDLE: nenhum job em execução; a fila será drenada no próximo estímulo
        - RUNNING: um job está em execução (ou aguardando sinal de conclusão)
    """
    IDLE = "idle"
    RUNNING = "running"


class JobStatus(str, Enum):
    """
    Estados de conclusão de um job.

    Estados definidos:
        - COMPLETED: o avaliador retornou sem falha (ou disparou o sinal)
        - DEFERRED: o avaliador pediu conclusão adiada e o sinal ainda não disparou
        - FAILED: o avaliador reportou falha ou levantou exceção

    DEFERRED é o único estado não final.
    """
    COMPLETED = "completed"
    DEFERRED = "deferred"
    FAILED = "failed"


@dataclass
class Item:
    """
    Uma unidade de dados empilhada.

    Campos:
        - sequence: ordem de inserção (imutável)
        - params: tupla de valores passada ao avaliador
        - last_evaluator_processed: maior `Evaluator.sequence` já agendado
          para este item (-1 quando nenhum)
    """
    sequence: int
    params: Tuple[Any, ...]
    last_evaluator_processed: int = -1


@dataclass(frozen=True)
class Evaluator:
    """Estágio de processamento registrado (imutável após registro)."""
    sequence: int
    fn: Callable[..., Any]
    accepts_scope: bool = False

    @property
    def name(self) -> str:
        return getattr(self.fn, "__qualname__", None) or type(self.fn).__name__


@dataclass(frozen=True)
class Job:
    """Unidade de trabalho efêmera: consumida exatamente uma vez pelo scheduler."""
    evaluator_sequence: int
    item_sequence: int
    params: Tuple[Any, ...]


@dataclass(frozen=True)
class JobOutcome:
    """
    Resultado explícito do contrato de invocação de um job.

    - COMPLETED / FAILED: o job terminou dentro da invocação síncrona
    - DEFERRED: o job permanece aberto até `signal` ser disparado
    """
    status: JobStatus
    signal: Optional["CompletionSignal"] = None

    @property
    def deferred(self) -> bool:
        return self.status is JobStatus.DEFERRED
