#!/usr/bin/env python3
"""
EchoMemo - Settings Schema
設定のスキーマ定義（Pydanticモデル）
"""

from enum import StrEnum
from pathlib import Path

from pydantic import Field, computed_field, model_validator
from pydantic_settings import BaseSettings
from typing_extensions import Self

from .constants import (
    CONTINUITY_WINDOW_SEC,
    DEFAULT_MEMO_TITLE,
    LEAD_MARKER,
    LEADING_FILLER_CHARS,
)

# 永続ディスクがマウントされていればそちらを優先
_PERSISTENT_DATA_DIR = Path("/data")


def _default_data_dir() -> Path:
    """データ保存ディレクトリのデフォルト値"""
    return _PERSISTENT_DATA_DIR if _PERSISTENT_DATA_DIR.is_dir() else Path.cwd()


# ========================================
# Dictation Configuration
# ========================================
class DictationSettings(BaseSettings):
    """口述テキスト整形の設定"""

    continuity_window_sec: float = Field(
        default=CONTINUITY_WINDOW_SEC,
        gt=0,
        description="同一行継続ウィンドウ（秒） - これ以上間が空くと改行して新しい行を始める",
    )
    lead_marker: str = Field(
        default=LEAD_MARKER,
        min_length=1,
        description="行頭マーカー（全角スペース）",
    )
    leading_filler_chars: str = Field(
        default=LEADING_FILLER_CHARS,
        description="認識結果の先頭から除去する文字",
    )


# ========================================
# Recognizer Configuration
# ========================================
class RecognizerSettings(BaseSettings):
    """外部音声認識の設定"""

    locale: str = Field(default="ja-JP", description="認識言語（ロケールタグ）")
    continuous: bool = Field(default=True, description="連続認識モード")
    interim_results: bool = Field(default=True, description="暫定結果を受け取るか")


# ========================================
# Storage Configuration
# ========================================
class StorageBackend(StrEnum):
    """メモ保存先バックエンド"""

    FILE = "file"
    HTTP = "http"


class StorageSettings(BaseSettings):
    """メモ保存設定"""

    backend: StorageBackend = Field(
        default=StorageBackend.FILE,
        description="保存先バックエンド（file: ローカルJSON, http: メモサーバーAPI）",
    )
    data_dir: Path = Field(
        default_factory=_default_data_dir,
        description="JSON保存ディレクトリ（/data があればそちらを使用）",
    )
    data_file_name: str = Field(default="memos.json", description="メモデータファイル名")
    backup_file_name: str = Field(
        default="memos_backup.json", description="バックアップファイル名"
    )
    api_base_url: str | None = Field(
        default="http://localhost:3000",
        description="メモサーバーのベースURL（backend='http'時に使用）",
    )
    request_timeout_sec: float = Field(
        default=10.0, gt=0, description="HTTPリクエストタイムアウト（秒）"
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def data_path(self) -> Path:
        """メモデータファイルパス"""
        return self.data_dir / self.data_file_name

    @computed_field  # type: ignore[prop-decorator]
    @property
    def backup_path(self) -> Path:
        """バックアップファイルパス"""
        return self.data_dir / self.backup_file_name

    @model_validator(mode="after")
    def validate_backend_config(self) -> Self:
        """バックエンド固有の必須設定を検証"""
        if self.backend == StorageBackend.HTTP and not self.api_base_url:
            raise ValueError("storage.api_base_url is required when backend='http'")
        return self


# ========================================
# Application Configuration
# ========================================
class AppSettings(BaseSettings):
    """アプリケーション全体設定"""

    default_title: str = Field(
        default=DEFAULT_MEMO_TITLE,
        description="本文からタイトルを取れない場合のタイトル",
    )
    script_poll_interval_sec: float = Field(
        default=0.1,
        gt=0,
        description="スクリプト再生の完了確認間隔（秒）",
    )
    stop_timeout_sec: float = Field(
        default=2.0,
        gt=0,
        description="認識停止（終了コールバック）待ちタイムアウト（秒）",
    )


# ========================================
# Main Settings Class
# ========================================
class Settings(BaseSettings):
    """
    EchoMemo全体設定

    設定の読み込み優先順位（後勝ち）:
    1. デフォルト値（各Settingsクラス内）
    2. config.toml（プロジェクトルート）
    3. config.local.toml（プロジェクトルート）
    """

    dictation: DictationSettings = Field(default_factory=DictationSettings)
    recognizer: RecognizerSettings = Field(default_factory=RecognizerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    app: AppSettings = Field(default_factory=AppSettings)
