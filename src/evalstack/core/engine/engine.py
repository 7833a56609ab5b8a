# src/evalstack/core/engine/engine.py
"""
Pipeline: superfície pública do evalstack.

O `Pipeline` compõe os registries, o planner, o scheduler, o Fail Channel
e o Lifecycle Gate. Todo estado mutável é privado à instância; o acesso
externo ocorre apenas pelas operações abaixo.

Operações:
    - push(*values)        → empilha um item; agenda seus jobs; drena
    - evaluate(fn)         → registra um avaliador; agenda seus jobs; drena
    - on_fail(listener)    → registra listener de falha (deduplicado)
    - on.fail(listener)    → idem, via namespace de eventos
    - catch(listener)      → alias obsoleto de on_fail (DeprecationWarning)
    - finish(on_drained)   → fecha o gate; `on_drained` dispara após a drenagem
    - is_locked()          → True sse o scheduler está RUNNING
    - is_closed()          → True sse o gate está fechado
    - from_values(*values) → novo Pipeline com um item por valor
    - from_config_file(path) → novo Pipeline configurado por YAML/JSON

Exemplo::

    words = []
    stack = Pipeline().evaluate(words.append)
    stack.push("Hello")
    assert words == ["Hello"]

Avaliadores que precisam de conclusão adiada declaram um parâmetro
keyword `scope`::

    def read(filename, *, scope):
        done = scope.defer()
        loop.call_later(0.1, done)
"""

from __future__ import annotations

import warnings
from typing import Any, Callable, Dict, Optional, Union

from evalstack.core.config.defaults import resolve_config
from evalstack.core.config.loader import PathLike, load_config
from evalstack.core.errors import from_exception
from evalstack.core.exceptions import InvalidArgumentError, InvalidStateError, invalid_argument
from evalstack.core.pipeline.context import PipelineContext
from evalstack.core.pipeline.gate import LifecycleGate
from evalstack.core.pipeline.registry import EvaluatorRegistry, ItemStack
from evalstack.core.pipeline.types import SchedulerState

from .fail_channel import FailChannel, FailListener
from .planner import plan_evaluator_jobs, plan_item_jobs
from .scheduler import Scheduler


class PipelineEvents:
    """Namespace de eventos customizados (`pipeline.on.fail(...)`)."""

    def __init__(self, pipeline: "Pipeline") -> None:
        self._pipeline = pipeline

    def fail(self, listener: FailListener) -> "Pipeline":
        return self._pipeline.on_fail(listener)


class Pipeline:
    """Pipeline de avaliação ordenada (single-flight)."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self._ctx = PipelineContext.create(resolve_config(config))

        self._items = ItemStack()
        self._evaluators = EvaluatorRegistry()
        self._gate = LifecycleGate()
        self._fail_channel = FailChannel()
        self._scheduler = Scheduler(
            evaluators=self._evaluators,
            fail_channel=self._fail_channel,
            ctx=self._ctx,
        )
        self._on = PipelineEvents(self)

    @classmethod
    def from_values(cls, *values: Any, config: Optional[Dict[str, Any]] = None) -> "Pipeline":
        """Cria um Pipeline com cada valor empilhado como item de um único parâmetro."""
        pipeline = cls(config=config)
        for value in values:
            pipeline.push(value)
        return pipeline

    @classmethod
    def from_config_file(cls, path: PathLike, *, local_path: Optional[PathLike] = None) -> "Pipeline":
        """Cria um Pipeline com a configuração lida de `path` (+ `local_path`, se existir)."""
        return cls(config=load_config(path, local_path=local_path))

    # ------------------------------------------------------------------
    # Guardrails
    # ------------------------------------------------------------------
    def _reject(self, exc: Union[InvalidArgumentError, InvalidStateError]) -> None:
        payload = from_exception(exc)
        self._ctx.log(
            event="guardrail.rejected",
            level="ERROR",
            message=payload.message,
            error=payload.to_dict(),
        )
        raise exc

    def _require_callable(self, operation: str, value: Any) -> None:
        if not callable(value):
            self._reject(invalid_argument(operation=operation, value=value))

    def _require_open(self, operation: str) -> None:
        try:
            self._gate.ensure_open(operation)
        except InvalidStateError as exc:
            self._reject(exc)

    # ------------------------------------------------------------------
    # Operações públicas
    # ------------------------------------------------------------------
    def push(self, *values: Any) -> "Pipeline":
        self._require_open("push")

        item = self._items.push(values)
        self._ctx.log(
            event="item.pushed",
            level="DEBUG",
            message=f"item {item.sequence} pushed",
            item_sequence=item.sequence,
            arity=len(item.params),
        )

        self._scheduler.enqueue(plan_item_jobs(item, self._evaluators.list()))
        self._scheduler.drain()
        return self

    def evaluate(self, fn: Callable[..., Any]) -> "Pipeline":
        self._require_callable("evaluate", fn)
        self._require_open("evaluate")

        evaluator = self._evaluators.register(fn)
        self._ctx.log(
            event="evaluator.registered",
            level="INFO",
            message=f"evaluator {evaluator.sequence} registered",
            evaluator_sequence=evaluator.sequence,
            evaluator=evaluator.name,
            accepts_scope=evaluator.accepts_scope,
        )

        self._scheduler.enqueue(plan_evaluator_jobs(evaluator, self._items.list()))
        self._scheduler.drain()
        return self

    def on_fail(self, listener: FailListener) -> "Pipeline":
        self._require_callable("on_fail", listener)
        self._fail_channel.add(listener)
        return self

    @property
    def on(self) -> PipelineEvents:
        return self._on

    def catch(self, listener: FailListener) -> "Pipeline":
        """Obsoleto: use `on_fail` ou `on.fail`."""
        warnings.warn(
            "Pipeline.catch() is deprecated; use Pipeline.on_fail() or Pipeline.on.fail()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.on_fail(listener)

    def finish(self, on_drained: Callable[[], Any]) -> None:
        self._require_callable("finish", on_drained)

        if self._gate.close():
            self._ctx.log(
                event="pipeline.closed",
                level="INFO",
                message="pipeline closed",
                items=len(self._items),
                evaluators=len(self._evaluators),
                pending_jobs=self._scheduler.pending_jobs,
                config_hash=self._ctx.config_hash,
            )

        self._scheduler.drain(on_drained)

    def is_locked(self) -> bool:
        return self._scheduler.state is SchedulerState.RUNNING

    def is_closed(self) -> bool:
        return self._gate.closed

    # ------------------------------------------------------------------
    # Observadores
    # ------------------------------------------------------------------
    @property
    def context(self) -> PipelineContext:
        return self._ctx

    @property
    def item_count(self) -> int:
        return len(self._items)

    @property
    def evaluator_count(self) -> int:
        return len(self._evaluators)

    @property
    def pending_jobs(self) -> int:
        return self._scheduler.pending_jobs

    def __repr__(self) -> str:
        return (
            f"Pipeline(id={self._ctx.pipeline_id!r}, items={len(self._items)}, "
            f"evaluators={len(self._evaluators)}, state={self._scheduler.state.value}, "
            f"closed={self._gate.closed})"
        )


def from_values(*values: Any, config: Optional[Dict[str, Any]] = None) -> Pipeline:
    return Pipeline.from_values(*values, config=config)
