#!/usr/bin/env python3
"""
EchoMemo - Domain Errors
ドメイン層：例外階層
"""

from .models import RecognizerErrorKind


class EchoMemoError(Exception):
    """EchoMemoの例外基底クラス"""


class RecognizerError(EchoMemoError):
    """音声認識の失敗"""

    def __init__(self, kind: RecognizerErrorKind, detail: str = "") -> None:
        super().__init__(f"{kind}: {detail}" if detail else str(kind))
        self.kind = kind
        self.detail = detail


class RecognizerUnavailableError(RecognizerError):
    """音声認識機能が利用できない（セッションにとって致命的）"""

    def __init__(self, detail: str = "") -> None:
        super().__init__(RecognizerErrorKind.UNAVAILABLE, detail)


class MemoStoreError(EchoMemoError):
    """メモ保存先の読み書き失敗"""


class MemoNotFoundError(MemoStoreError):
    """指定IDのメモが存在しない"""

    def __init__(self, memo_id: str) -> None:
        super().__init__(f"Memo not found: {memo_id}")
        self.memo_id = memo_id
