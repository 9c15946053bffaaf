#!/usr/bin/env python3
"""
EchoMemo - Buffer Compositor Module
確定テキストと暫定認識結果を1つの編集用テキストに合成するモジュール
"""

from echo_memo.domain import (
    DictationSettings,
    DisplayTextChangedEvent,
    display_text_changed,
    strip_leading_filler,
)
from echo_memo.domain.constants import NEWLINE, WORD_SEPARATOR

from .segmenter import TranscriptSegmenter


class BufferCompositor:
    """
    編集中メモの確定テキスト（ConfirmedBuffer）を所有する

    - 確定結果（append_final）と強制改行（force_break）、手入力の同期
      （sync_from_manual_edit）だけが確定テキストを変更する
    - 暫定結果はオーバーレイとして保持するだけで、いつでも破棄できる
    - 表示テキストは (確定テキスト, オーバーレイ, 行継続状態) から毎回計算する

    どの入力に対しても例外は送出しない。空白だけの入力は何もしない。
    """

    def __init__(
        self, segmenter: TranscriptSegmenter, settings: DictationSettings
    ) -> None:
        self.segmenter = segmenter
        self.settings = settings
        self._confirmed = ""
        self._interim = ""

    @property
    def confirmed_text(self) -> str:
        return self._confirmed

    @property
    def interim_text(self) -> str:
        return self._interim

    # ========== 確定テキストの変更 ==========

    def append_final(self, text: str) -> bool:
        """
        確定した認識結果を追記

        Args:
            text: 認識エンジンの確定テキスト

        Returns:
            bool: 確定テキストが変更されたらTrue
        """
        cleaned = self._clean(text)
        if not cleaned:
            return False

        now = self.segmenter.clock()
        new_segment = self.segmenter.should_start_new_segment(now)
        self._confirmed += self._separator(self._confirmed, new_segment) + cleaned
        self.segmenter.touch(now)
        return True

    def force_break(self) -> None:
        """改行ボタン: 改行して行頭マーカーを置き、継続期限を延長"""
        if self._confirmed and not self._confirmed.endswith(NEWLINE):
            self._confirmed += NEWLINE
        self._confirmed += self.settings.lead_marker
        self.segmenter.touch()

    def sync_from_manual_edit(self, text: str) -> None:
        """手入力された内容で確定テキストを置き換え、オーバーレイを破棄"""
        self._confirmed = text
        self._interim = ""

    def reset(self, initial_content: str = "") -> None:
        """編集セッションの開始・終了時に状態を初期化"""
        self._confirmed = initial_content
        self._interim = ""
        self.segmenter.clear()

    # ========== 暫定オーバーレイ ==========

    def set_interim_overlay(self, text: str) -> None:
        """暫定結果を保持（空文字列ならオーバーレイを破棄）"""
        self._interim = self._clean(text)

    def clear_interim_overlay(self) -> None:
        self._interim = ""

    # ========== 表示 ==========

    def current_display_text(self) -> str:
        """確定テキスト + 暫定オーバーレイ（確定時と同じ区切り規則で連結）"""
        if not self._interim:
            return self._confirmed
        new_segment = self.segmenter.should_start_new_segment()
        return (
            self._confirmed
            + self._separator(self._confirmed, new_segment)
            + self._interim
        )

    def publish(self, sender: object = None) -> None:
        """現在の表示テキストをdisplay_text_changedで通知"""
        display_text_changed.send(
            sender,
            event=DisplayTextChangedEvent(
                text=self.current_display_text(),
                confirmed_text=self._confirmed,
                interim_text=self._interim,
            ),
        )

    # ========== 内部処理 ==========

    def _clean(self, text: str) -> str:
        return strip_leading_filler(text, self.settings.leading_filler_chars)

    def _separator(self, buffer: str, new_segment: bool) -> str:
        """
        bufferの末尾に次のテキストを続けるための区切り文字列を返す

        - 空のバッファ: 行頭マーカー
        - 新しい行: 改行（末尾が改行でなければ）+ 行頭マーカー
        - 同じ行: 末尾が改行・行頭マーカー・スペースでなければ半角スペース
        """
        marker = self.settings.lead_marker
        if not buffer:
            return marker
        if new_segment:
            # 改行ボタン直後など、既に行頭マーカーが置かれている
            if buffer == marker or buffer.endswith(NEWLINE + marker):
                return ""
            prefix = "" if buffer.endswith(NEWLINE) else NEWLINE
            return prefix + marker
        if buffer.endswith((NEWLINE, marker, WORD_SEPARATOR)):
            return ""
        return WORD_SEPARATOR
