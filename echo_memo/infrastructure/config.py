#!/usr/bin/env python3
"""
EchoMemo - Configuration Loader
設定の読み込み（TOML）
"""

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from echo_memo.domain import Settings

_PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_FILE_NAME = "config.toml"
LOCAL_CONFIG_FILE_NAME = "config.local.toml"


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """2つの辞書を深くマージする（overrideが優先）"""
    result = base.copy()
    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], Mapping)
            and isinstance(value, Mapping)
        ):
            result[key] = _deep_merge(dict(result[key]), value)
        else:
            result[key] = value
    return result


def _read_toml(path: Path) -> dict[str, Any]:
    """
    TOMLファイルを読み込む

    Raises:
        ValueError: TOMLとして解釈できない場合（ファイル名付き）
    """
    with path.open("rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid config file {path}: {e}") from e


def load_settings(
    config_dir: Path | None = None, extra_config: Path | None = None
) -> Settings:
    """
    TOMLファイルから設定を読み込む

    読み込み順序（後勝ち）:
    1. デフォルト値（domain/settings.py内）
    2. {config_dir}/config.toml（存在する場合）
    3. {config_dir}/config.local.toml（存在する場合）
    4. extra_config（CLIの --config で指定された場合）

    Args:
        config_dir: 設定ファイルのディレクトリ（Noneの場合はプロジェクトルート）
        extra_config: 追加で読み込む設定ファイル

    Returns:
        Settingsインスタンス
    """
    directory = config_dir or _PROJECT_ROOT
    candidates = [directory / CONFIG_FILE_NAME, directory / LOCAL_CONFIG_FILE_NAME]
    if extra_config is not None:
        if not extra_config.exists():
            raise FileNotFoundError(f"Config file not found: {extra_config}")
        candidates.append(extra_config)

    config_data: dict[str, Any] = {}
    for path in candidates:
        if path.exists():
            config_data = _deep_merge(config_data, _read_toml(path))

    return Settings(**config_data) if config_data else Settings()
