#!/usr/bin/env python3
"""
EchoMemo - Transcript Segmenter Module
認識結果を同じ行に続けるか、新しい行として始めるかを判定するモジュール
"""

import time
from collections.abc import Callable

from echo_memo.domain import DictationSettings

Clock = Callable[[], float]


class TranscriptSegmenter:
    """
    行の継続状態（LineContinuationState）を管理する

    タイマーの代わりに期限（deadline）を保持し、判定のたびに注入された
    時計と比較する:
    - 最後の追記から continuity_window_sec 未満 → 同じ行に続ける
    - それ以上空いた、または明示的な改行要求 → 新しい行を始める

    期限は常に高々1つ。touch() は前の期限を置き換える。
    """

    def __init__(
        self, settings: DictationSettings, clock: Clock = time.monotonic
    ) -> None:
        self.settings = settings
        self.clock = clock
        self._deadline: float | None = None

    @property
    def window(self) -> float:
        return self.settings.continuity_window_sec

    @property
    def deadline(self) -> float | None:
        """現在の継続期限（なければNone）"""
        return self._deadline

    @property
    def is_same_line(self) -> bool:
        """期限内であれば同じ行の継続とみなす"""
        return not self.should_start_new_segment()

    def should_start_new_segment(
        self, now: float | None = None, explicit_break: bool = False
    ) -> bool:
        """
        次のテキストで新しい行を始めるべきか判定（状態は変更しない）

        Args:
            now: 判定時刻（Noneの場合は時計から取得）
            explicit_break: ユーザーが改行ボタンを押したか

        Returns:
            bool: 新しい行を始めるならTrue
        """
        if explicit_break or self._deadline is None:
            return True
        if now is None:
            now = self.clock()
        return now >= self._deadline

    def touch(self, now: float | None = None) -> None:
        """追記があったので継続期限を now + window に延長"""
        if now is None:
            now = self.clock()
        self._deadline = now + self.window

    def clear(self) -> None:
        """継続期限を破棄（次のテキストは必ず新しい行になる）"""
        self._deadline = None
