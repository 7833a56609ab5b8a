# src/evalstack/core/engine/planner.py
"""
Geração de jobs do pipeline.

A cada crescimento de um dos registries (novo item ou novo avaliador),
o planner calcula os pares (avaliador, item) recém elegíveis e os
transforma em jobs, na ordem em que devem entrar na fila.

Regra de elegibilidade:
    Um job é gerado para (item, avaliador) se e somente se
    `item.last_evaluator_processed < evaluator.sequence` no momento da
    geração. O high-water mark do item avança no mesmo instante, o que
    garante que cada par é gerado exatamente uma vez.

Ordem:
    - Novo item: um job por avaliador existente, em ordem de registro
    - Novo avaliador: um job por item existente, em ordem de push

Consequência: um item empilhado depois de E1 e antes de E2 é processado
por E1 no push e por E2 apenas quando E2 for registrado; nunca o inverso
e nunca duas vezes.
"""

from __future__ import annotations

from typing import Iterable, List

from evalstack.core.pipeline.types import Evaluator, Item, Job


def _claim(item: Item, evaluator: Evaluator) -> Job:
    item.last_evaluator_processed = evaluator.sequence
    return Job(
        evaluator_sequence=evaluator.sequence,
        item_sequence=item.sequence,
        params=item.params,
    )


def plan_item_jobs(item: Item, evaluators: Iterable[Evaluator]) -> List[Job]:
    """Jobs de um item recém empilhado contra todos os avaliadores existentes."""
    jobs: List[Job] = []
    for evaluator in evaluators:
        if item.last_evaluator_processed < evaluator.sequence:
            jobs.append(_claim(item, evaluator))
    return jobs


def plan_evaluator_jobs(evaluator: Evaluator, items: Iterable[Item]) -> List[Job]:
    """Jobs de um avaliador recém registrado contra todos os itens existentes."""
    jobs: List[Job] = []
    for item in items:
        if item.last_evaluator_processed < evaluator.sequence:
            jobs.append(_claim(item, evaluator))
    return jobs
