# src/evalstack/core/pipeline/__init__.py
"""
# Pipeline Core — evalstack

Este pacote define os **tipos canônicos** e as **estruturas de estado**
de um pipeline de avaliação ordenada.

## Componentes

- **types**
  - `Item`, `Evaluator`, `Job`: registros de dados, avaliadores e trabalho
  - `JobStatus`, `JobOutcome`: contrato explícito de conclusão de um job
  - `SchedulerState`: estados do worker loop (`idle`, `running`)

- **registry**
  - `ItemStack`: registro ordenado de itens com high-water mark
  - `EvaluatorRegistry`: registro ordenado de avaliadores

- **scope**
  - `JobScope`: capacidades expostas ao avaliador (`defer`, `fail`)
  - `CompletionSignal`: sinal one-shot de conclusão adiada

- **gate**
  - `LifecycleGate`: flag de fechamento de mão única

- **context**
  - `PipelineContext`: log estruturado de eventos e contadores

## Invariantes

- Itens e avaliadores nunca são removidos ou reordenados
- O high-water mark de um item nunca decresce
- Um gate fechado nunca é reaberto
"""
