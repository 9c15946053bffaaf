#!/usr/bin/env python3
"""
EchoMemo - Domain Layer
ドメイン層：エンティティ、イベント、設定
"""

# モデルとデータ構造
from .models import (
    Memo,
    MemoDraft,
    RecognitionState,
    RecognizerErrorKind,
    TranscriptEvent,
    TranscriptKind,
    derive_title,
    normalize_tags,
    strip_leading_filler,
)

# 例外
from .errors import (
    EchoMemoError,
    MemoNotFoundError,
    MemoStoreError,
    RecognizerError,
    RecognizerUnavailableError,
)

# イベント（Pub/Sub）
from .events import (
    DisplayTextChangedEvent,
    MessageLevel,
    MessagePostedEvent,
    RecordingIndicatorChangedEvent,
    StatusChangedEvent,
    display_text_changed,
    message_posted,
    post_message,
    recording_indicator_changed,
    status_changed,
)

# 設定スキーマ（Pydantic）
from .settings import (
    AppSettings,
    DictationSettings,
    RecognizerSettings,
    Settings,
    StorageBackend,
    StorageSettings,
)

__all__ = [
    # モデル
    "Memo",
    "MemoDraft",
    "RecognitionState",
    "RecognizerErrorKind",
    "TranscriptEvent",
    "TranscriptKind",
    "derive_title",
    "normalize_tags",
    "strip_leading_filler",
    # 例外
    "EchoMemoError",
    "MemoNotFoundError",
    "MemoStoreError",
    "RecognizerError",
    "RecognizerUnavailableError",
    # イベント
    "DisplayTextChangedEvent",
    "MessageLevel",
    "MessagePostedEvent",
    "RecordingIndicatorChangedEvent",
    "StatusChangedEvent",
    "display_text_changed",
    "message_posted",
    "post_message",
    "recording_indicator_changed",
    "status_changed",
    # 設定
    "AppSettings",
    "DictationSettings",
    "RecognizerSettings",
    "Settings",
    "StorageBackend",
    "StorageSettings",
]
