#!/usr/bin/env python3
"""
EchoMemo - Events (Pub/Sub)
ドメイン層: コアからプレゼンテーション層への通知
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from blinker import Signal

# ========================================
# イベント名定数
# ========================================
EVENT_DISPLAY_TEXT_CHANGED = "display_text_changed"
EVENT_STATUS_CHANGED = "status_changed"
EVENT_RECORDING_INDICATOR_CHANGED = "recording_indicator_changed"
EVENT_MESSAGE_POSTED = "message_posted"


# ========================================
# イベント型定義
# ========================================


class MessageLevel(str, Enum):
    """メッセージレベル"""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class DisplayTextChangedEvent:
    """
    表示テキスト更新イベント

    確定テキストまたは暫定オーバーレイが変わった際に発行される。
    """

    text: str  # 表示すべき全文（確定テキスト + 暫定オーバーレイ）
    confirmed_text: str  # 確定テキストのみ
    interim_text: str  # 暫定オーバーレイ（なければ空文字列）


@dataclass(frozen=True)
class StatusChangedEvent:
    """ステータス文言の変更イベント"""

    message: str


@dataclass(frozen=True)
class RecordingIndicatorChangedEvent:
    """録音インジケーター（マイクボタン）の点灯状態の変更イベント"""

    is_recording: bool


@dataclass(frozen=True)
class MessagePostedEvent:
    """
    メッセージ投稿イベント

    ログとして残すべき状態変化やエラーを通知する際に発行される。
    timestampは省略時に自動的に現在時刻が設定される。
    """

    message: str  # 表示するメッセージ
    level: MessageLevel  # メッセージレベル（INFO/SUCCESS/WARNING/ERROR）
    timestamp: datetime = field(
        default_factory=datetime.now
    )  # メッセージタイムスタンプ（省略時は自動設定）


# ========================================
# グローバルシグナル定義
# ========================================
display_text_changed = Signal(EVENT_DISPLAY_TEXT_CHANGED)  # DisplayTextChangedEvent
status_changed = Signal(EVENT_STATUS_CHANGED)  # StatusChangedEvent
recording_indicator_changed = Signal(
    EVENT_RECORDING_INDICATOR_CHANGED
)  # RecordingIndicatorChangedEvent
message_posted = Signal(EVENT_MESSAGE_POSTED)  # MessagePostedEvent


def post_message(message: str, level: MessageLevel = MessageLevel.INFO) -> None:
    """message_postedシグナルでメッセージを投稿"""
    message_posted.send(None, event=MessagePostedEvent(message=message, level=level))
