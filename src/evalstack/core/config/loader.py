# src/evalstack/core/config/loader.py
"""
Carregamento de configuração de Pipeline a partir de arquivos.

Um arquivo de configuração do evalstack contém apenas as chaves que o
usuário quer mudar em relação a `DEFAULT_CONFIG` (ex.: o nome do pipeline
ou o nível do log de eventos). Opcionalmente, um segundo arquivo local
(tipicamente fora do controle de versão) sobrescreve o primeiro.

Ordem de resolução (prioridade crescente):

    DEFAULT_CONFIG  <  arquivo do pipeline  <  arquivo local

O resultado já é a configuração efetiva e validada, pronta para
`Pipeline(config=...)`; `Pipeline.from_config_file(...)` faz as duas
etapas de uma vez.

Exemplo (`reader.yaml`)::

    pipeline:
      name: reader
    events:
      log_level: DEBUG

Invariantes:
    - O arquivo do pipeline é obrigatório; o local, quando ausente, é ignorado
    - Arquivos vazios equivalem a `{}` (todos os defaults)
    - Nenhum arquivo é escrito
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import json

import yaml  # PyYAML

from .defaults import resolve_config
from .merge import deep_merge
from .errors import (
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)

PathLike = Union[str, Path]

_YAML_SUFFIXES = {".yaml", ".yml"}


def read_config_file(path: PathLike) -> Dict[str, Any]:
    """
    Lê um único arquivo de configuração (YAML ou JSON) sem resolvê-lo.

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for .yaml, .yml ou .json.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um mapeamento.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigFileNotFoundError(f"Arquivo de configuração do pipeline não encontrado: {path}")

    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as f:
        if suffix in _YAML_SUFFIXES:
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise UnsupportedConfigFormatError(
                f"{path.name}: formato {path.suffix or '(sem extensão)'} não suportado; use .yaml, .yml ou .json"
            )

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"{path.name}: a raiz deve ser um mapeamento de seções (pipeline/events/fail), "
            f"recebido: {type(data).__name__}"
        )
    return data


def load_config(path: PathLike, *, local_path: Optional[PathLike] = None) -> Dict[str, Any]:
    """
    Carrega a configuração efetiva de um Pipeline.

    Args:
        path: Arquivo de configuração do pipeline (obrigatório).
        local_path: Overrides locais; ignorado se o arquivo não existir.

    Returns:
        Dict[str, Any]: `DEFAULT_CONFIG` + arquivo + local, validada.

    Raises:
        ConfigFileNotFoundError, UnsupportedConfigFormatError,
        InvalidConfigRootTypeError, ConfigTypeConflictError,
        InvalidConfigValueError.
    """
    overrides = read_config_file(path)

    if local_path is not None and Path(local_path).is_file():
        overrides = deep_merge(overrides, read_config_file(local_path))

    return resolve_config(overrides)
