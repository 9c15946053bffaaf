#!/usr/bin/env python3
"""
EchoMemo - Core Application
プレゼンテーション層：メモ編集セッションのコアロジック（UI共通）
"""

import time
from collections.abc import Iterable

from echo_memo.domain import (
    Memo,
    MemoDraft,
    MemoStoreError,
    MessageLevel,
    RecognitionState,
    Settings,
    StatusChangedEvent,
    post_message,
    status_changed,
)
from echo_memo.domain.constants import STATUS_IDLE
from echo_memo.infrastructure.dictation import (
    BufferCompositor,
    RecognitionSessionController,
    TranscriptSegmenter,
)
from echo_memo.infrastructure.dictation.segmenter import Clock
from echo_memo.infrastructure.persistence import MemoStore
from echo_memo.infrastructure.recognition import Recognizer


class EchoMemoApp:
    """
    EchoMemo共通コアアプリケーション

    責務:
    - 口述整形エンジン（Segmenter / Compositor / SessionController）の組み立て
    - UIからの操作（手入力・改行ボタン・マイクボタン・開閉）の受付
    - 編集結果のメモ保存

    Note:
    - コアからUIへの通知はblinkerのSignal（display_text_changed,
      status_changed, recording_indicator_changed）で行う
    - UIは表示テキストを読み戻さない。手入力はon_manual_editで必ず同期する
    """

    def __init__(
        self,
        recognizer: Recognizer | None,
        store: MemoStore,
        settings: Settings,
        clock: Clock = time.monotonic,
    ) -> None:
        """
        Args:
            recognizer: 音声認識エンジン（Noneの場合は音声入力なし）
            store: メモ保存先
            settings: アプリケーション設定
            clock: 行継続判定に使う単調増加時計（秒）
        """
        self.settings = settings
        self.store = store

        self.segmenter = TranscriptSegmenter(settings=settings.dictation, clock=clock)
        self.compositor = BufferCompositor(
            segmenter=self.segmenter, settings=settings.dictation
        )
        self.controller = RecognitionSessionController(
            recognizer=recognizer, compositor=self.compositor
        )

        self.current_memo_id: str | None = None
        self.is_open = False

    # ========== 編集セッション ==========

    def on_session_open(
        self, initial_content: str = "", memo_id: str | None = None
    ) -> None:
        """編集画面を開く（既存メモの場合はその本文から始める）"""
        if self.controller.state is not RecognitionState.IDLE:
            self.controller.close()
        self.current_memo_id = memo_id
        self.is_open = True
        self.compositor.reset(initial_content)
        self.compositor.publish(self)
        status_changed.send(self, event=StatusChangedEvent(message=STATUS_IDLE))

    def open_memo(self, memo_id: str) -> Memo:
        """
        保存済みメモを開く

        Raises:
            MemoNotFoundError: 指定IDのメモが存在しない場合
        """
        memo = self.store.get(memo_id)
        self.on_session_open(memo.content, memo_id=memo.id)
        return memo

    def on_session_close(self) -> None:
        """編集画面を閉じる（録音中なら必ず停止）"""
        self.controller.close()
        self.compositor.reset("")
        self.compositor.publish(self)
        self.current_memo_id = None
        self.is_open = False

    def start_voice_memo(self) -> bool:
        """新規メモを開いてすぐに録音を始める"""
        self.on_session_open()
        return self.controller.start()

    # ========== UI操作 ==========

    def on_manual_edit(self, text: str) -> None:
        """ユーザーが直接入力した内容を確定テキストとして取り込む"""
        self.compositor.sync_from_manual_edit(text)
        self.compositor.publish(self)

    def on_force_break_requested(self) -> None:
        """改行ボタン"""
        self.compositor.force_break()
        self.compositor.publish(self)

    def on_toggle_recording(self) -> bool:
        """
        マイクボタン

        Returns:
            bool: 録音を開始したらTrue、停止した（または開始できなかった）らFalse
        """
        if self.controller.is_recording:
            self.controller.stop()
            return False
        if self.controller.state is RecognitionState.STOPPING:
            post_message("Recognition is still stopping", MessageLevel.WARNING)
            return False
        return self.controller.start()

    # ========== 表示・保存 ==========

    @property
    def text(self) -> str:
        """現在の表示テキスト"""
        return self.compositor.current_display_text()

    def save(self, tags: Iterable[str] = ()) -> Memo | None:
        """
        編集中のメモを保存して編集画面を閉じる

        本文が空の場合は保存せずに閉じる。
        録音中に呼ばれた場合は、その時点の確定テキストを保存する。停止処理中に
        届く最後の確定結果は反映されないため、それも含めたい場合は先に
        controller.stop() してIDLEになるのを待ってから呼ぶ（CLIはこの順序）。

        Args:
            tags: メモに付けるタグ

        Returns:
            Memo | None: 保存されたメモ（本文が空ならNone）

        Raises:
            MemoStoreError: 保存に失敗した場合（編集画面は開いたまま）
        """
        # 暫定オーバーレイは保存しない
        self.controller.stop()
        draft = MemoDraft.from_content(
            self.compositor.confirmed_text,
            tags=tags,
            default_title=self.settings.app.default_title,
        )
        if not draft.content:
            self.on_session_close()
            return None

        try:
            if self.current_memo_id is not None:
                memo = self.store.update(self.current_memo_id, draft)
            else:
                memo = self.store.create(draft)
        except MemoStoreError as e:
            post_message(f"Failed to save memo: {e}", MessageLevel.ERROR)
            raise

        post_message(f"Saved memo: {memo.title}", MessageLevel.SUCCESS)
        self.on_session_close()
        return memo

    def list_memos(self) -> list[Memo]:
        """保存済みメモを更新日時の新しい順に返す"""
        return self.store.list_memos()
