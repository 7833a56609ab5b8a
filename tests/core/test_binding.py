# tests/core/test_binding.py
"""
Testes da exposição global do Pipeline (`bind_global` / `detach_global_binding`).

Invariantes:
    - detach restaura o valor anterior do nome (ou o remove)
    - detach é idempotente e sempre retorna a classe Pipeline
"""

import pytest

try:
    from evalstack.core.binding import DEFAULT_BINDING_NAME, bind_global, detach_global_binding
    from evalstack.core.engine.engine import Pipeline
except Exception as e:  # noqa: BLE001
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing evalstack.core.binding. Import error: {_IMPORT_ERR}")


def test_bind_exposes_pipeline_under_default_name():
    _require_imports()
    namespace = {}

    binding = bind_global(namespace)

    assert DEFAULT_BINDING_NAME == "Pe"
    assert namespace["Pe"] is Pipeline
    assert binding.attached is True


def test_detach_restores_previous_value():
    _require_imports()
    previous = object()
    namespace = {"Pe": previous}
    binding = bind_global(namespace)

    returned = detach_global_binding(binding)

    assert returned is Pipeline
    assert namespace["Pe"] is previous
    assert binding.attached is False


def test_detach_removes_name_that_did_not_exist():
    _require_imports()
    namespace = {"other": 1}
    binding = bind_global(namespace, name="Stack")

    detach_global_binding(binding)

    assert namespace == {"other": 1}


def test_detach_is_idempotent():
    _require_imports()
    namespace = {}
    binding = bind_global(namespace)
    detach_global_binding(binding)
    namespace["Pe"] = "user value"

    assert detach_global_binding(binding) is Pipeline
    assert namespace["Pe"] == "user value"


def test_detached_class_still_works():
    _require_imports()
    namespace = {}
    binding = bind_global(namespace)
    Stack = detach_global_binding(binding)
    seen = []

    Stack.from_values(1, 2).evaluate(seen.append)

    assert seen == [1, 2]
