# src/evalstack/core/pipeline/context.py
"""
Contexto de observabilidade de um Pipeline.

Este módulo define o `PipelineContext`, a estrutura canônica onde um
Pipeline registra o que aconteceu durante sua vida: itens empilhados,
avaliadores registrados, jobs iniciados/concluídos/adiados/falhos e
transições de ciclo de vida.

Logs não são strings livres, mas eventos estruturados (dicts), sempre
contendo `pipeline_id`, `event`, `level`, `message` e `timestamp`.

Princípios fundamentais:
    - Isolamento por pipeline (cada instância possui seu próprio contexto)
    - Eventos são explícitos e rastreáveis
    - Nenhum estado global compartilhado

Configuração consumida (`events.*`):
    - enabled: liga/desliga o registro de eventos
    - log_level: nível mínimo registrado
    - max_events: limite do log (0 = ilimitado; descarta os mais antigos)

Invariantes:
    - Eventos abaixo do nível configurado nunca são registrados
    - Contadores são atualizados mesmo com eventos desligados

Limites explícitos:
    - Não executa jobs
    - Não persiste eventos automaticamente
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, Optional
from uuid import uuid4

from evalstack.core.config.defaults import LOG_LEVELS
from evalstack.core.config.hashing import compute_config_hash


@dataclass
class PipelineContext:
    """
    Contexto de observabilidade de um Pipeline.

    Campos canônicos:
    - pipeline_id: identificador único da instância
    - created_at: timestamp UTC de criação
    - config: configuração efetiva (já resolvida e validada)
    - config_hash: identidade estrutural da configuração
    - events: log estruturado de eventos
    - counters: contadores de jobs (started, completed, deferred, failed, ...)
    """
    pipeline_id: str
    created_at: datetime
    config: Dict[str, Any]
    config_hash: str = ""

    events: Deque[Dict[str, Any]] = field(default_factory=deque, init=False)
    counters: Dict[str, int] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        max_events = int(self._events_cfg().get("max_events", 0) or 0)
        self.events = deque(maxlen=max_events or None)
        if not self.config_hash:
            self.config_hash = compute_config_hash(self.config)

    @classmethod
    def create(cls, config: Dict[str, Any], *, pipeline_id: Optional[str] = None) -> "PipelineContext":
        name = (config.get("pipeline", {}) or {}).get("name", "evalstack")
        return cls(
            pipeline_id=pipeline_id or f"{name}-{uuid4().hex[:12]}",
            created_at=datetime.now(timezone.utc),
            config=config,
        )

    def _events_cfg(self) -> Dict[str, Any]:
        return (self.config or {}).get("events", {}) or {}

    # -----------------------------
    # Logging
    # -----------------------------
    def is_enabled_for(self, level: str) -> bool:
        events_cfg = self._events_cfg()
        if not events_cfg.get("enabled", True):
            return False
        threshold = LOG_LEVELS[str(events_cfg.get("log_level", "INFO")).upper()]
        return LOG_LEVELS[level] >= threshold

    def log(self, *, event: str, level: str, message: str, **extra: Any) -> None:
        if not self.is_enabled_for(level):
            return
        record = {
            "pipeline_id": self.pipeline_id,
            "event": event,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        record.update(extra)
        self.events.append(record)

    # -----------------------------
    # Counters
    # -----------------------------
    def count(self, name: str, n: int = 1) -> None:
        self.counters[name] = self.counters.get(name, 0) + n

    def stats(self) -> Dict[str, int]:
        return dict(self.counters)
