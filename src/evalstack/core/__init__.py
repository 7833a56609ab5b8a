# src/evalstack/core/__init__.py
"""
Core do evalstack.

Este pacote contém a implementação canônica do pipeline de avaliação
ordenada, reunindo as responsabilidades de registro, geração de jobs,
execução serializada e ciclo de vida.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de dependências de event loop ou threads
    - orientado a contratos explícitos

Componentes principais:
    - config   → resolução de configuração (merge, validação, hashing)
    - pipeline → tipos, registries, escopo de job, gate e contexto de eventos
    - engine   → geração de jobs, scheduler single-flight, fail channel e Pipeline

Princípios fundamentais:
    - Nenhuma decisão silenciosa: todo comportamento é explícito e testado
    - Estado mutável é sempre privado à instância do Pipeline
    - Falhas de job nunca interrompem o scheduler
"""
