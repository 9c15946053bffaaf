#!/usr/bin/env python3
"""
EchoMemo - Recognizer Interface Module
外部の連続音声認識機能の抽象化を提供するモジュール
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Protocol

from echo_memo.domain import (
    RecognizerErrorKind,
    RecognizerSettings,
    TranscriptEvent,
)
from echo_memo.domain.constants import (
    PERMISSION_DENIED_ERROR_CODES,
    UNAVAILABLE_ERROR_CODES,
)


class RecognitionListener(Protocol):
    """認識エンジンからのコールバックを受け取る側のインターフェース"""

    def on_started(self) -> None: ...

    def on_result(self, events: Sequence[TranscriptEvent]) -> None: ...

    def on_ended(self) -> None: ...

    def on_error(self, kind: RecognizerErrorKind, detail: str = "") -> None: ...


class Recognizer(ABC):
    """
    連続音声認識の抽象基底クラス

    start() / stop() で認識を制御し、結果はbind()で登録された
    RecognitionListenerへのコールバックとして届く。
    認識エンジンは予告なく終了（on_ended）することがある。
    """

    def __init__(self, settings: RecognizerSettings) -> None:
        self.settings = settings
        self._listener: RecognitionListener | None = None

    def bind(self, listener: RecognitionListener) -> None:
        """コールバックの送り先を登録"""
        self._listener = listener

    @property
    def listener(self) -> RecognitionListener | None:
        return self._listener

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """この環境で音声認識が使えるかどうか"""
        pass

    @abstractmethod
    def start(self) -> None:
        """
        認識を開始（開始されるとon_startedが呼ばれる）

        Raises:
            RecognizerUnavailableError: 音声認識が利用できない場合
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """認識を停止（停止が完了するとon_endedが呼ばれる）"""
        pass


def classify_error(code: str) -> RecognizerErrorKind:
    """
    認識エンジンのエラーコードを分類

    Args:
        code: エラーコード（例: "not-allowed", "network", "no-speech"）

    Returns:
        RecognizerErrorKind: 権限拒否 / 利用不可 / その他
    """
    if code in PERMISSION_DENIED_ERROR_CODES:
        return RecognizerErrorKind.PERMISSION_DENIED
    if code in UNAVAILABLE_ERROR_CODES:
        return RecognizerErrorKind.UNAVAILABLE
    return RecognizerErrorKind.TRANSIENT
