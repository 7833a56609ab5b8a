# src/evalstack/core/engine/scheduler.py
"""
Scheduler single-flight do evalstack.

O scheduler é o único consumidor da fila de jobs e o único lugar onde um
job executa. Ele opera como um worker loop iterativo:

    IDLE --(fila não vazia)--> RUNNING
        retira o job da cabeça, invoca o avaliador sob um JobScope novo
        - COMPLETED / FAILED → segue para o próximo job no mesmo loop
        - DEFERRED → o loop retorna e permanece RUNNING até o sinal disparar;
          o disparo do sinal retoma o loop a partir do próximo job
    fila vazia → IDLE, dispara os callbacks pendentes (FIFO, uma vez cada)

Decisões arquiteturais:
    - Não há recursão entre jobs: jobs concluídos de forma síncrona (inclusive
      adiados cujo sinal dispara dentro da própria invocação) são drenados
      pelo mesmo loop
    - `drain()` chamado com o scheduler RUNNING apenas enfileira o callback
    - Exceção síncrona do avaliador equivale a `scope.fail(exc)`
    - Após uma falha o scheduler sempre avança para o próximo job
    - Exceção levantada por um listener de falha propaga ao chamador que
      dirigiu o loop; o scheduler volta para IDLE antes, e o restante da
      fila é drenado no próximo estímulo

Limites explícitos:
    - Não há cancelamento nem timeout: um job adiado cujo sinal nunca dispara
      mantém o scheduler RUNNING para sempre (nenhum outro job ou callback
      de drenagem dispara)
    - Não há sincronização entre threads
"""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Deque, Iterable, Optional

from evalstack.core.errors import job_failure
from evalstack.core.pipeline.context import PipelineContext
from evalstack.core.pipeline.registry import EvaluatorRegistry
from evalstack.core.pipeline.scope import JobScope
from evalstack.core.pipeline.types import Job, JobOutcome, JobStatus, SchedulerState

from .fail_channel import FailChannel


class Scheduler:
    """Worker loop single-flight sobre a fila de jobs."""

    def __init__(
        self,
        *,
        evaluators: EvaluatorRegistry,
        fail_channel: FailChannel,
        ctx: PipelineContext,
    ):
        self._evaluators = evaluators
        self._fail_channel = fail_channel
        self._ctx = ctx

        self._queue: Deque[Job] = deque()
        self._callbacks: Deque[Callable[[], Any]] = deque()
        self._state = SchedulerState.IDLE
        self._awaiting: Optional[JobScope] = None

    # ------------------------------------------------------------------
    # Observadores
    # ------------------------------------------------------------------
    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def pending_jobs(self) -> int:
        return len(self._queue)

    @property
    def pending_callbacks(self) -> int:
        return len(self._callbacks)

    # ------------------------------------------------------------------
    # Entrada
    # ------------------------------------------------------------------
    def enqueue(self, jobs: Iterable[Job]) -> None:
        self._queue.extend(jobs)

    def drain(self, callback: Optional[Callable[[], Any]] = None) -> None:
        """Dirige o loop; `callback` dispara na próxima drenagem completa."""
        if callback is not None:
            self._callbacks.append(callback)

        if self._state is SchedulerState.RUNNING:
            return

        self._run()

    # ------------------------------------------------------------------
    # Worker loop
    # ------------------------------------------------------------------
    def _run(self) -> None:
        self._state = SchedulerState.RUNNING
        try:
            while self._queue:
                job = self._queue.popleft()
                outcome = self._invoke(job)
                if outcome.deferred:
                    self._awaiting = outcome.signal.scope
                    return
        except BaseException:
            self._state = SchedulerState.IDLE
            raise

        self._state = SchedulerState.IDLE
        self._ctx.log(event="pipeline.drained", level="DEBUG", message="job queue drained")
        self._fire_callbacks()

    def _fire_callbacks(self) -> None:
        while self._callbacks:
            callback = self._callbacks.popleft()
            callback()

    def _invoke(self, job: Job) -> JobOutcome:
        evaluator = self._evaluators.get(job.evaluator_sequence)
        scope = JobScope(job, notify_fail=self._report_failure, on_settled=self._on_settled)

        self._ctx.count("jobs_started")
        self._ctx.log(
            event="job.started",
            level="DEBUG",
            message=f"evaluator {evaluator.sequence} on item {job.item_sequence}",
            evaluator_sequence=job.evaluator_sequence,
            item_sequence=job.item_sequence,
            evaluator=evaluator.name,
        )

        try:
            if evaluator.accepts_scope:
                evaluator.fn(*job.params, scope=scope)
            else:
                evaluator.fn(*job.params)
        except Exception as exc:
            if exc is scope.listener_error:
                raise
            scope._report(exc, raised=True)

        if not scope.settled:
            if scope.deferred:
                self._ctx.count("jobs_deferred")
                self._ctx.log(
                    event="job.deferred",
                    level="DEBUG",
                    message="job waiting for completion signal",
                    evaluator_sequence=job.evaluator_sequence,
                    item_sequence=job.item_sequence,
                )
                return JobOutcome(status=JobStatus.DEFERRED, signal=scope.signal)
            scope._settle(JobStatus.COMPLETED)

        return JobOutcome(status=scope.status)

    # ------------------------------------------------------------------
    # Callbacks do JobScope
    # ------------------------------------------------------------------
    def _on_settled(self, scope: JobScope) -> None:
        job = scope.job
        if scope.failed:
            self._ctx.count("jobs_failed")
        else:
            self._ctx.count("jobs_completed")
            self._ctx.log(
                event="job.completed",
                level="DEBUG",
                message=f"evaluator {job.evaluator_sequence} on item {job.item_sequence} completed",
                evaluator_sequence=job.evaluator_sequence,
                item_sequence=job.item_sequence,
                deferred=scope.deferred,
            )

        # conclusão dentro da invocação síncrona: o próprio loop segue
        if scope is not self._awaiting:
            return

        self._awaiting = None
        if scope.listener_error is not None:
            self._state = SchedulerState.IDLE
            return

        self._run()

    def _report_failure(self, scope: JobScope, error: Any, raised: bool) -> None:
        job = scope.job
        payload = job_failure(
            error=error,
            evaluator_sequence=job.evaluator_sequence,
            item_sequence=job.item_sequence,
            raised=raised,
        )
        self._ctx.count("failures_reported")
        self._ctx.log(
            event="job.failed",
            level="ERROR",
            message=payload.message,
            error=payload.to_dict(),
        )

        if not len(self._fail_channel) and (self._ctx.config.get("fail", {}) or {}).get("warn_unobserved", True):
            self._ctx.log(
                event="fail.unobserved",
                level="WARNING",
                message="job failure reported with no fail listener registered",
                evaluator_sequence=job.evaluator_sequence,
                item_sequence=job.item_sequence,
            )

        self._fail_channel.notify(error)
