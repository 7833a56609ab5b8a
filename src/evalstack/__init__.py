# src/evalstack/__init__.py
"""
evalstack — pipeline de avaliação ordenada.

Este pacote raiz define o namespace público do evalstack: uma pilha onde
itens de dados e avaliadores (evaluators) são adicionados de forma
incremental, e onde cada item é processado por cada avaliador exatamente
uma vez, em ordem determinística.

Princípios centrais:
    - Apenas um job executa por vez (single-flight)
    - A ordem de execução é a ordem de inserção na fila de jobs
    - Conclusão de um job é imediata ou explicitamente adiada (deferred)
    - Falhas são sinais de domínio entregues a listeners, não exceções

Arquitetura em alto nível:
    - core.config   → carregamento, merge, validação e hashing de configuração
    - core.pipeline → tipos, registries, escopo de job, gate e contexto
    - core.engine   → geração de jobs, scheduler, fail channel e Pipeline
    - core.binding  → instalação/remoção do Pipeline em um namespace global

Limites explícitos:
    - Não é um grafo de tarefas (sem DAG entre avaliadores)
    - Não é um pool de threads
    - Não realiza retry de jobs que falharam
"""
# src/evalstack/__init__.py
from .core.engine.engine import Pipeline, from_values
from .core.binding import GlobalBinding, bind_global, detach_global_binding
from .core.exceptions import (
    EvalStackException,
    InvalidArgumentError,
    InvalidStateError,
)
from .core.pipeline.scope import CompletionSignal, JobScope

__all__ = [
    "Pipeline",
    "from_values",
    "bind_global",
    "detach_global_binding",
    "GlobalBinding",
    "EvalStackException",
    "InvalidArgumentError",
    "InvalidStateError",
    "CompletionSignal",
    "JobScope",
]
