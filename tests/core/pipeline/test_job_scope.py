# tests/core/pipeline/test_job_scope.py
"""
Testes do JobScope e do CompletionSignal, isolados do scheduler.

Os testes asseguram que:
- `defer()` torna o job adiado e sempre retorna o mesmo sinal
- o sinal é one-shot
- o sinal é desarmado após uma falha
- `fail()` notifica a cada chamada, mas conclui o job uma única vez
- exceções de listeners são registradas em `listener_error` e propagam

Decisões arquiteturais:
    - O scope recebe `notify_fail` e `on_settled` como callbacks simples,
      permitindo testá-lo sem Pipeline
"""

import pytest

try:
    from evalstack.core.pipeline.scope import JobScope
    from evalstack.core.pipeline.types import Job, JobStatus
except Exception as e:  # noqa: BLE001
    JobScope = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing JobScope. Import error: {_IMPORT_ERR}")


class _Recorder:
    def __init__(self, raise_on_notify=None):
        self.notified = []
        self.settled = []
        self._raise = raise_on_notify

    def notify_fail(self, scope, error, raised):
        self.notified.append((error, raised))
        if self._raise is not None:
            raise self._raise

    def on_settled(self, scope):
        self.settled.append(scope.status)


def _scope(recorder):
    job = Job(evaluator_sequence=0, item_sequence=0, params=(1,))
    return JobScope(job, notify_fail=recorder.notify_fail, on_settled=recorder.on_settled)


def test_defer_returns_same_one_shot_signal():
    _require_imports()
    rec = _Recorder()
    scope = _scope(rec)

    signal = scope.defer()
    assert scope.defer() is signal
    assert scope.status is JobStatus.DEFERRED
    assert signal.armed is True

    signal()
    signal()

    assert rec.settled == [JobStatus.COMPLETED]
    assert signal.armed is False
    assert scope.status is JobStatus.COMPLETED


def test_signal_is_disarmed_after_failure():
    _require_imports()
    rec = _Recorder()
    scope = _scope(rec)

    done = scope.defer()
    scope.fail("boom")
    done()

    assert rec.notified == [("boom", False)]
    assert rec.settled == [JobStatus.FAILED]
    assert scope.failed is True


def test_repeated_fail_notifies_but_settles_once():
    _require_imports()
    rec = _Recorder()
    scope = _scope(rec)

    scope.fail("first")
    scope.fail("second")

    assert [err for err, _ in rec.notified] == ["first", "second"]
    assert rec.settled == [JobStatus.FAILED]


def test_listener_error_is_recorded_and_propagated():
    _require_imports()
    boom = ValueError("listener broke")
    rec = _Recorder(raise_on_notify=boom)
    scope = _scope(rec)

    with pytest.raises(ValueError):
        scope.fail("original")

    assert scope.listener_error is boom
    assert rec.settled == [JobStatus.FAILED]
