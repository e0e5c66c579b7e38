# === FILE: bucket_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации сканера BucketScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Final, Mapping, Optional, Tuple, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from bucket_scout.prober.fetcher import RETRY_DELAYS
from bucket_scout.scanner import MAX_REDIRECT_DEPTH, POOL_SIZE

__all__ = [
    "REGIONS",
    "DEFAULT_WORDLIST",
    "ConfigurationError",
    "ScannerConfig",
    "resolve_region",
    "load_config",
]

REGIONS: Final[Dict[str, str]] = {
    "us": "http://s3.amazonaws.com",
    "ie": "http://s3-eu-west-1.amazonaws.com",
    "nc": "http://s3-us-west-1.amazonaws.com",
    "si": "http://s3-ap-southeast-1.amazonaws.com",
    "to": "http://s3-ap-northeast-1.amazonaws.com",
}

DEFAULT_WORDLIST: Final[Path] = Path(__file__).parent / "data" / "common_bucket_prefixes.txt"


class ConfigurationError(ValueError):
    """Invalid run configuration (unknown region, missing seed…)."""


def resolve_region(code: str) -> str:
    """Возвращает базовый URL провайдера для кода региона."""
    try:
        return REGIONS[code]
    except KeyError:
        raise ConfigurationError(
            f"Unknown region {code!r}, expected one of: {', '.join(REGIONS)}"
        ) from None


class ScannerConfig(BaseModel):
    """Конфигурация для одного запуска сканирования."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    domain: str = Field(..., min_length=1, description="Seed: домен или префикс имён бакетов.")
    region: str = Field("us", description="Код региона провайдера.")
    wordlist: Path = Field(DEFAULT_WORDLIST, description="Файл словаря префиксов.")
    pool_size: int = Field(POOL_SIZE, ge=1, description="Число параллельных воркеров.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    retry_delays: Tuple[float, ...] = Field(RETRY_DELAYS, description="Паузы между повторами (секунд).")
    max_redirect_depth: int = Field(MAX_REDIRECT_DEPTH, ge=0, description="Максимальная глубина редиректов.")
    user_agent: str = Field("BucketScout/1.0", min_length=1, description="Заголовок User-Agent.")
    download: bool = Field(False, description="Скачивать публичные файлы найденных бакетов.")
    download_dir: Path = Field(Path("downloads"), description="Каталог для скачанных файлов.")
    prefix_candidates: bool = Field(False, description="Добавлять seed перед каждым кандидатом.")

    @field_validator("domain", mode="before")
    def _strip_domain(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("region")
    def _check_region(cls, v: str) -> str:
        resolve_region(v)
        return v

    @field_validator("retry_delays")
    def _check_delays(cls, v: Tuple[float, ...]) -> Tuple[float, ...]:
        if any(d < 0 for d in v):
            raise ValueError("retry delays must be >= 0")
        return v

    @model_validator(mode="after")
    def _check_wordlist_exists(self) -> ScannerConfig:
        if not self.wordlist.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(self.wordlist))
        return self

    @property
    def host(self) -> str:
        return resolve_region(self.region)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(
    path: Union[str, Path, None] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> ScannerConfig:
    """
    Читает YAML или JSON (если указан), накладывает overrides (значения None
    пропускаются) и возвращает проверенный объект ScannerConfig.
    При отсутствии файла конфига или словаря бросает FileNotFoundError.
    """
    data: dict[str, Any] = {}
    if path is not None:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

        suffix = path_obj.suffix.lower()
        if suffix in (".yaml", ".yml"):
            data = _read_yaml(path_obj)
        elif suffix == ".json":
            data = _read_json(path_obj)
        else:
            raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ScannerConfig(**data)
    except ValidationError:
        raise
