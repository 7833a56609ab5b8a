# src/evalstack/core/config/hashing.py
"""
Identidade da configuração efetiva de um Pipeline.

`PipelineContext` calcula o hash uma vez, na criação, e o expõe em
`config_hash`; o evento `pipeline.closed` o repete. Dois pipelines com a
mesma configuração efetiva têm o mesmo hash, independente da ordem das
chaves ou de a configuração ter vindo de arquivo ou de dict.
"""

import json
import hashlib
from typing import Dict, Any


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    SHA-256 (hex) do JSON canônico da configuração.

    JSON canônico: chaves ordenadas, separadores compactos, UTF-8 sem escape.

    Raises:
        TypeError: Se `config` não for dict.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
