# tests/core/engine/test_fail_channel.py
"""
Testes do Fail Channel.

Os testes asseguram que:
- registrar o mesmo listener duas vezes resulta em uma notificação por falha
- listeners são notificados em ordem de registro, de forma síncrona
- bound methods equivalentes são deduplicados
- listeners distintos que se comparam iguais (`__eq__`) não são deduplicados
- `on.fail` e o alias obsoleto `catch` usam o mesmo canal
- listeners não invocáveis são rejeitados
- exceções de listeners propagam ao chamador e o pipeline continua utilizável
"""

from dataclasses import dataclass, field

import pytest

try:
    from evalstack.core.engine.engine import Pipeline
    from evalstack.core.engine.fail_channel import FailChannel
    from evalstack.core.exceptions import InvalidArgumentError
except Exception as e:  # noqa: BLE001
    Pipeline = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing FailChannel/Pipeline. Import error: {_IMPORT_ERR}")


def _failing(value, *, scope):
    scope.fail(value)


def test_duplicate_listener_notified_once(pipeline, failures, collect_failure):
    _require_imports()
    pipeline.on_fail(collect_failure).on_fail(collect_failure)

    pipeline.evaluate(_failing).push("x")

    assert failures == ["x"]


def test_listeners_notified_in_registration_order(pipeline):
    _require_imports()
    order = []
    pipeline.on_fail(lambda err: order.append(("first", err)))
    pipeline.on.fail(lambda err: order.append(("second", err)))

    pipeline.push(1).evaluate(_failing)

    assert order == [("first", 1), ("second", 1)]


def test_bound_methods_are_deduplicated():
    _require_imports()

    class Sink:
        def __init__(self):
            self.received = []

        def receive(self, error):
            self.received.append(error)

    sink = Sink()
    channel = FailChannel()

    assert channel.add(sink.receive) is True
    assert channel.add(sink.receive) is False
    channel.notify("e")

    assert sink.received == ["e"]
    assert len(channel) == 1


@dataclass
class _Collector:
    sink: list = field(default_factory=list)

    def __call__(self, error):
        self.sink.append(error)


def test_equal_but_distinct_listeners_are_both_notified(pipeline):
    """
    Verifica que a deduplicação usa identidade, não igualdade.

    Dois coletores dataclass vazios se comparam iguais (`==`), mas são
    objetos distintos: ambos devem receber a falha.
    """
    _require_imports()
    first, second = _Collector(), _Collector()
    assert first == second

    pipeline.on_fail(first).on_fail(second)
    pipeline.evaluate(_failing).push(1)

    assert first.sink == [1]
    assert second.sink == [1]


def test_same_instance_registered_twice_is_notified_once(pipeline):
    _require_imports()
    collector = _Collector()

    pipeline.on_fail(collector).on.fail(collector)
    pipeline.evaluate(_failing).push(1)

    assert collector.sink == [1]


def test_builtin_bound_methods_are_deduplicated(pipeline):
    _require_imports()
    errors = []

    pipeline.on_fail(errors.append).on_fail(errors.append)
    pipeline.evaluate(_failing).push("z")

    assert errors == ["z"]


def test_bound_methods_of_distinct_equal_objects_are_kept_apart():
    _require_imports()
    first, second = _Collector(), _Collector()
    channel = FailChannel()

    assert channel.add(first.__call__) is True
    assert channel.add(second.__call__) is True
    channel.notify("e")

    assert first.sink == ["e"]
    assert second.sink == ["e"]


def test_catch_is_deprecated_alias(pipeline, failures, collect_failure):
    _require_imports()
    with pytest.warns(DeprecationWarning):
        returned = pipeline.catch(collect_failure)

    pipeline.on_fail(collect_failure)
    pipeline.evaluate(_failing).push("y")

    assert returned is pipeline
    assert failures == ["y"]


@pytest.mark.parametrize("value", [None, 1, "a", {}, [], float("nan")])
def test_non_callable_listener_rejected(pipeline, value):
    _require_imports()
    with pytest.raises(InvalidArgumentError):
        pipeline.on_fail(value)


def test_listener_error_propagates_and_pipeline_recovers(pipeline):
    """
    Verifica que a exceção de um listener chega ao chamador do push.

    Decisões arquiteturais:
        - Exceções de listeners não são capturadas nem re-reportadas
        - O scheduler volta a IDLE; jobs restantes são drenados no próximo estímulo
    """
    _require_imports()
    seen = []
    calls = []

    def listener(error):
        calls.append(error)
        if error == "boom":
            raise RuntimeError("listener failed")

    def evaluator(value, *, scope):
        seen.append(value)
        if value == "boom":
            scope.fail(value)

    pipeline.on_fail(listener)
    pipeline.push("boom").push("next")

    with pytest.raises(RuntimeError, match="listener failed"):
        pipeline.evaluate(evaluator)

    assert calls == ["boom"]
    assert seen == ["boom"]
    assert pipeline.is_locked() is False
    assert pipeline.pending_jobs == 1

    pipeline.push("later")

    assert seen == ["boom", "next", "later"]
    assert calls == ["boom"]


def test_listener_error_from_raised_exception_is_not_reported_twice(pipeline):
    _require_imports()
    calls = []

    def listener(error):
        calls.append(error)
        raise LookupError("listener failed")

    def evaluator(value):
        raise ValueError(value)

    pipeline.on_fail(listener).evaluate(evaluator)

    with pytest.raises(LookupError):
        pipeline.push(1)

    assert len(calls) == 1
    assert isinstance(calls[0], ValueError)
    assert pipeline.is_locked() is False


def test_listener_error_after_deferred_failure_reaches_signal_caller(pipeline, timer):
    _require_imports()
    seen = []

    def listener(error):
        raise RuntimeError("async listener failed")

    def evaluator(value, *, scope):
        seen.append(value)
        scope.defer()
        timer.call_later(1, lambda: scope.fail(value))

    pipeline.on_fail(listener).evaluate(evaluator).push(1).push(2)

    with pytest.raises(RuntimeError):
        timer.run()

    assert seen == [1]
    assert pipeline.is_locked() is False
    assert pipeline.pending_jobs == 1
