#!/usr/bin/env python3
"""
EchoMemo - CLI Controller
CLIアプリケーションのコントローラー層：口述セッションのライフサイクル管理
"""

import asyncio
import sys
import traceback
from pathlib import Path

from echo_memo.domain import (
    Memo,
    MemoStoreError,
    MessageLevel,
    RecognitionState,
    post_message,
)
from echo_memo.infrastructure.config import load_settings
from echo_memo.infrastructure.persistence import MemoStore, create_memo_store
from echo_memo.infrastructure.recognition import ScriptedRecognizer, load_script
from echo_memo.presentation.app import EchoMemoApp

from .view import CLIView


class CLIController:
    """
    CLIコントローラー

    責務:
    - 設定・保存先・認識エンジンの生成
    - App/View初期化と配線
    - スクリプト再生の完了待ちと終了処理（停止 → 保存）
    - Ctrl-C での中断（それまでの内容は保存する）
    """

    def __init__(
        self,
        script_path: Path | None = None,
        memo_id: str | None = None,
        tags: list[str] | None = None,
        config_path: Path | None = None,
        save: bool = True,
    ) -> None:
        """
        Args:
            script_path: 認識結果スクリプト（JSON Lines）のパス
            memo_id: 編集する既存メモのID（Noneの場合は新規メモ）
            tags: 保存時に付けるタグ
            config_path: 追加で読み込む設定ファイル
            save: 終了時にメモを保存するか
        """
        self.script_path = script_path
        self.memo_id = memo_id
        self.tags = tags or []
        self.save = save
        self.settings = load_settings(extra_config=config_path)

        self.view: CLIView | None = None
        self.app: EchoMemoApp | None = None
        self.saved_memo: Memo | None = None

    def list_memos(self) -> None:
        """保存済みメモの一覧を表示"""
        store = create_memo_store(self.settings.storage)
        self.view = CLIView(settings=self.settings)
        try:
            memos = store.list_memos()
        except MemoStoreError as e:
            post_message(f"Error: {e}", MessageLevel.ERROR)
            self.view.close()
            sys.exit(1)
        self.view.close()
        self.view.show_memo_list(memos)

    def run(self) -> None:
        """
        口述セッションを実行

        Raises:
            SystemExit: エラー発生時
        """
        assert self.script_path is not None

        # 1. CLIView作成（Signal受信準備）
        self.view = CLIView(settings=self.settings)

        # 2. 保存先
        store = create_memo_store(self.settings.storage)

        # 3. バナー表示
        self.view.show_banner(store.describe())

        try:
            memo = asyncio.run(self._dictate(store))
        except KeyboardInterrupt:
            # 中断時の保存は _dictate 内で完了している
            memo = self.saved_memo
        except (MemoStoreError, ValueError, OSError) as e:
            post_message(f"\nError: {e}", MessageLevel.ERROR)
            self.view.close()
            sys.exit(1)
        except Exception as e:
            post_message(f"\nError: {e}", MessageLevel.ERROR)
            self.view.close()
            traceback.print_exc()
            sys.exit(1)

        self.view.close()
        if memo is not None:
            self.view.show_memo(memo)

    async def _dictate(self, store: MemoStore) -> Memo | None:
        """スクリプトを最後まで再生し、メモを保存する"""
        assert self.script_path is not None
        loop = asyncio.get_running_loop()

        steps = load_script(self.script_path)
        recognizer = ScriptedRecognizer(
            settings=self.settings.recognizer, steps=steps, loop=loop
        )
        app = EchoMemoApp(
            recognizer=recognizer, store=store, settings=self.settings, clock=loop.time
        )
        self.app = app

        if self.memo_id:
            app.open_memo(self.memo_id)
        else:
            app.on_session_open()

        if not app.on_toggle_recording():
            app.on_session_close()
            return None

        post_message(
            "🎙️  Dictating script... (Ctrl+C to stop and save)", MessageLevel.SUCCESS
        )

        try:
            await self._wait_for_script(app, recognizer)
        except asyncio.CancelledError:
            # Ctrl-C: それまでの内容で保存する
            post_message("\nInterrupted. Saving...", MessageLevel.WARNING)

        return await self._finish(app)

    async def _wait_for_script(
        self, app: EchoMemoApp, recognizer: ScriptedRecognizer
    ) -> None:
        """スクリプトを再生し終えるか、認識セッションが終わるまで待機"""
        interval = self.settings.app.script_poll_interval_sec
        while (
            not recognizer.is_exhausted
            and app.controller.state is not RecognitionState.IDLE
        ):
            await asyncio.sleep(interval)

    async def _finish(self, app: EchoMemoApp) -> Memo | None:
        """認識を停止して終了コールバックを待ち、保存（または破棄）する"""
        app.controller.stop()

        interval = self.settings.app.script_poll_interval_sec
        waited = 0.0
        while app.controller.state is not RecognitionState.IDLE:
            if waited >= self.settings.app.stop_timeout_sec:
                post_message(
                    "Warning: recognizer did not stop cleanly", MessageLevel.WARNING
                )
                break
            await asyncio.sleep(interval)
            waited += interval

        if not self.save:
            app.on_session_close()
            return None
        self.saved_memo = app.save(self.tags)
        return self.saved_memo
