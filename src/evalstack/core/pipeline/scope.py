# src/evalstack/core/pipeline/scope.py
"""
Escopo de conclusão de um job.

Cada job é executado sob um `JobScope` novo, que expõe ao avaliador
exatamente duas capacidades:

    - `defer()`: converte o job de imediato para adiado e retorna o
      `CompletionSignal` one-shot que o conclui
    - `fail(error)`: marca o job como falho e notifica imediatamente o
      Fail Channel

Regras de conclusão:
    - Sem `defer()` e sem `fail()`, o job conclui ao retornar
    - Com `defer()`, o job permanece aberto até o sinal disparar uma vez
    - O sinal é desarmado após uma falha: dispará-lo depois é no-op
    - `defer()` chamado mais de uma vez retorna o mesmo sinal

O scope não conhece o scheduler; ele recebe dois callbacks no construtor:
`notify_fail` (entrega da falha) e `on_settled` (primeira conclusão).
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from .types import Job, JobStatus


class CompletionSignal:
    """
    Sinal one-shot de conclusão de um job adiado.

    Chamável sem argumentos. Apenas a primeira chamada tem efeito, e
    nenhuma tem efeito se o job já falhou.
    """

    def __init__(self, scope: "JobScope") -> None:
        self._scope = scope

    @property
    def scope(self) -> "JobScope":
        return self._scope

    @property
    def armed(self) -> bool:
        return not self._scope.settled

    def __call__(self) -> None:
        self._scope._settle(JobStatus.COMPLETED)

    def __repr__(self) -> str:
        return f"CompletionSignal(job={self._scope.job!r}, armed={self.armed})"


class JobScope:
    """Capacidades expostas a um avaliador durante a execução de um job."""

    def __init__(
        self,
        job: Job,
        *,
        notify_fail: Callable[["JobScope", Any, bool], None],
        on_settled: Callable[["JobScope"], None],
    ) -> None:
        self.job = job
        self._notify_fail = notify_fail
        self._on_settled = on_settled
        self._signal: Optional[CompletionSignal] = None
        self._status: Optional[JobStatus] = None
        # exceção levantada por um listener durante `fail()`; não é falha do job
        self.listener_error: Optional[Exception] = None

    # -----------------------------
    # Estado
    # -----------------------------
    @property
    def status(self) -> Optional[JobStatus]:
        if self._status is None and self._signal is not None:
            return JobStatus.DEFERRED
        return self._status

    @property
    def deferred(self) -> bool:
        return self._signal is not None

    @property
    def settled(self) -> bool:
        return self._status is not None

    @property
    def failed(self) -> bool:
        return self._status is JobStatus.FAILED

    @property
    def signal(self) -> Optional[CompletionSignal]:
        return self._signal

    # -----------------------------
    # Capacidades do avaliador
    # -----------------------------
    def defer(self) -> CompletionSignal:
        """Torna o job adiado e retorna seu sinal de conclusão."""
        if self._signal is None:
            self._signal = CompletionSignal(self)
        return self._signal

    def fail(self, error: Any = None) -> None:
        """Reporta falha do job; os listeners são notificados imediatamente."""
        self._report(error, raised=False)

    # -----------------------------
    # Uso interno (scheduler)
    # -----------------------------
    def _report(self, error: Any, *, raised: bool) -> None:
        first = self._status is None
        if first:
            self._status = JobStatus.FAILED

        try:
            self._notify_fail(self, error, raised)
        except Exception as exc:
            self.listener_error = exc
            if first:
                self._on_settled(self)
            raise

        if first:
            self._on_settled(self)

    def _settle(self, status: JobStatus) -> None:
        if self._status is not None:
            return
        self._status = status
        self._on_settled(self)

    def __repr__(self) -> str:
        return f"JobScope(job={self.job!r}, status={self.status!r})"
