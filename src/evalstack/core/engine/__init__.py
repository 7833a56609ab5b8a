# src/evalstack/core/engine/__init__.py
"""
Engine do evalstack.

Este pacote contém a implementação responsável por **gerar** e
**executar** jobs de avaliação, respeitando a ordem de inserção e a
regra de execução single-flight.

Componentes principais:
    - planner      → geração de jobs (produto cruzado item × avaliador)
    - scheduler    → worker loop iterativo que drena a fila de jobs
    - fail_channel → listeners de falha deduplicados
    - engine       → `Pipeline`, a superfície pública que compõe tudo

Invariantes:
    - Cada par (item, avaliador) gera exatamente um job
    - Nunca há mais de um job em execução
    - Jobs concluem (e o próximo inicia) estritamente na ordem da fila
    - Falhas nunca interrompem o scheduler nem são reexecutadas
"""
