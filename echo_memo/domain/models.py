#!/usr/bin/env python3
"""
EchoMemo - Domain Models
ドメイン層：ビジネスエンティティとルール
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, StrEnum

from pydantic import BaseModel, Field

from .constants import DEFAULT_MEMO_TITLE, LEADING_FILLER_CHARS


# ========================================
# 音声認識
# ========================================
class TranscriptKind(Enum):
    """認識結果の種別"""

    INTERIM = "interim"  # 暫定（まだ変わりうる）
    FINAL = "final"  # 確定


@dataclass(frozen=True)
class TranscriptEvent:
    """1発話区間分の認識結果"""

    kind: TranscriptKind
    text: str

    @classmethod
    def interim(cls, text: str) -> "TranscriptEvent":
        return cls(kind=TranscriptKind.INTERIM, text=text)

    @classmethod
    def final(cls, text: str) -> "TranscriptEvent":
        return cls(kind=TranscriptKind.FINAL, text=text)

    @property
    def is_final(self) -> bool:
        return self.kind is TranscriptKind.FINAL


class RecognitionState(StrEnum):
    """認識セッションの状態"""

    IDLE = "idle"
    STARTING = "starting"
    LISTENING = "listening"
    STOPPING = "stopping"


class RecognizerErrorKind(StrEnum):
    """認識エラーの分類"""

    UNAVAILABLE = "unavailable"  # 環境が音声認識に非対応（再試行しない）
    PERMISSION_DENIED = "permission_denied"  # マイク権限なし
    TRANSIENT = "transient"  # その他（ユーザーが手動で再開可能）


# ========================================
# テキスト処理
# ========================================
def strip_leading_filler(text: str, filler_chars: str = LEADING_FILLER_CHARS) -> str:
    """
    認識結果の前後空白と先頭の区切り文字（中黒・全角/半角スペース）を除去

    Args:
        text: 認識結果のテキスト
        filler_chars: 先頭から除去する文字の集合

    Returns:
        str: 整形後のテキスト（空白のみなら空文字列）
    """
    return text.strip().lstrip(filler_chars)


def derive_title(
    content: str,
    default_title: str = DEFAULT_MEMO_TITLE,
    filler_chars: str = LEADING_FILLER_CHARS,
) -> str:
    """
    本文からメモのタイトルを導出

    最初の空でない行から行頭マーカーを除いたものをタイトルとする。
    該当行がなければdefault_titleを返す。
    """
    for line in content.splitlines():
        title = strip_leading_filler(line, filler_chars)
        if title:
            return title
    return default_title


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """タグの前後空白を除去し、空・重複を取り除く（順序は維持）"""
    seen: dict[str, None] = {}
    for tag in tags:
        cleaned = tag.strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


# ========================================
# メモ
# ========================================
class MemoDraft(BaseModel):
    """保存前のメモ（作成・更新リクエストの本体）"""

    title: str
    content: str
    tags: list[str] = Field(default_factory=list)

    @classmethod
    def from_content(
        cls,
        content: str,
        tags: Iterable[str] = (),
        default_title: str = DEFAULT_MEMO_TITLE,
    ) -> "MemoDraft":
        """編集中の本文からドラフトを作成（本文は前後の空白を除去）"""
        body = content.strip()
        return cls(
            title=derive_title(body, default_title),
            content=body,
            tags=normalize_tags(tags),
        )


class Memo(MemoDraft):
    """保存済みメモ"""

    id: str
    created_at: datetime
    updated_at: datetime
