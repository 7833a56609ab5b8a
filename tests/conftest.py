"""
Fixtures compartilhados para testes do evalstack.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações mínimas e determinísticas (dict e YAML)
- um Pipeline com log de eventos em nível DEBUG
- um coletor de falhas para o Fail Channel
- um timer manual para simular conclusões adiadas sem event loop

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Dados retornados são determinísticos e isolados
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Nenhuma fixture depende de threads ou de relógio real

Este módulo existe como infraestrutura de teste e não
como validação funcional do framework.
"""

import pytest


# =====================================================
# Config Loader fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    Fixture que fornece o YAML de configuração de um pipeline (`reader.yaml`).

    É o arquivo principal passado a `load_config`; overrides locais são
    aplicados sobre ele via deep-merge.

    Returns:
        str: Conteúdo YAML do arquivo principal do pipeline.
    """
    return """\
pipeline:
  name: reader
events:
  enabled: true
  log_level: INFO
  max_events: 0
fail:
  warn_unobserved: true
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """
    Fixture que fornece um YAML de configuração local (override).

    Returns:
        str: Conteúdo YAML representando configuração local de override.
    """
    return """\
events:
  log_level: DEBUG
fail:
  warn_unobserved: false
"""


# =====================================================
# Pipeline fixtures
# =====================================================

@pytest.fixture
def dummy_config() -> dict:
    """
    Fixture que fornece uma configuração mínima e válida para testes.

    O log de eventos fica em DEBUG para que testes de observabilidade
    enxerguem eventos de job.

    Returns:
        dict: Configuração parcial, mesclada sobre DEFAULT_CONFIG.
    """
    return {
        "pipeline": {"name": "pytest"},
        "events": {"enabled": True, "log_level": "DEBUG"},
    }


@pytest.fixture
def pipeline(dummy_config):
    """
    Fixture que fornece um Pipeline novo, aberto e IDLE.

    O import é lazy para que a ausência do core produza erros legíveis
    nos próprios testes.
    """
    from evalstack.core.engine.engine import Pipeline
    return Pipeline(config=dummy_config)


@pytest.fixture
def failures():
    """Lista onde o listener `collect_failure` acumula valores de falha."""
    return []


@pytest.fixture
def collect_failure(failures):
    """Listener de falha que acumula cada valor recebido em `failures`."""
    def _collect(error):
        failures.append(error)
    return _collect


class ManualTimer:
    """
    Timer manual e determinístico.

    `call_later(delay, fn)` agenda `fn`; `run()` dispara os callbacks em
    ordem de tempo (empates por ordem de agendamento), incluindo os
    agendados durante a própria execução.
    """

    def __init__(self):
        self.now = 0.0
        self._pending = []
        self._counter = 0

    def call_later(self, delay, fn):
        self._counter += 1
        self._pending.append((self.now + delay, self._counter, fn))

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run(self) -> None:
        while self._pending:
            self._pending.sort(key=lambda entry: (entry[0], entry[1]))
            when, _, fn = self._pending.pop(0)
            self.now = when
            fn()


@pytest.fixture
def timer():
    """Fixture que fornece um ManualTimer novo."""
    return ManualTimer()
