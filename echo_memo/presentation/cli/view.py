#!/usr/bin/env python3
"""
EchoMemo - CLI View
CLIのView層：Signal購読とコンソール表示の統合管理
"""

import os
import re
import sys

import wcwidth  # type: ignore[import-untyped]
from colorama import Fore, Style  # type: ignore[import-untyped]

from echo_memo import __version__
from echo_memo.domain import (
    DisplayTextChangedEvent,
    Memo,
    MessageLevel,
    MessagePostedEvent,
    RecordingIndicatorChangedEvent,
    Settings,
    StatusChangedEvent,
    display_text_changed,
    message_posted,
    recording_indicator_changed,
    status_changed,
)
from echo_memo.domain.constants import NEWLINE


class CLIView:
    """
    CLI View層

    責務:
    - Signalサブスクリプションとイベント駆動表示
    - 確定した行の表示と、入力中の行（暫定結果を含む）のライブ表示
    - ステータス・録音インジケーターの表示
    """

    # ANSIエスケープコード削除用パターン（コンパイル済み）
    _ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

    def __init__(self, settings: Settings) -> None:
        """
        CLIViewの初期化とSignalサブスクリプション設定

        Args:
            settings: アプリケーション設定
        """
        self.settings = settings
        self.status = ""
        self.is_recording = False
        self._committed_lines = 0  # 表示済みの確定行数
        self._live_line = ""

        # Signalサブスクリプション設定
        display_text_changed.connect(self._on_display_text_changed)
        status_changed.connect(self._on_status_changed)
        recording_indicator_changed.connect(self._on_recording_indicator_changed)
        message_posted.connect(self._on_message_posted)

    def close(self) -> None:
        """Signalサブスクリプションを解除してライブ行を確定"""
        display_text_changed.disconnect(self._on_display_text_changed)
        status_changed.disconnect(self._on_status_changed)
        recording_indicator_changed.disconnect(self._on_recording_indicator_changed)
        message_posted.disconnect(self._on_message_posted)
        sys.stdout.write("\r\033[K\n")
        sys.stdout.flush()

    # ========== Signalハンドラ ==========

    def _on_display_text_changed(
        self, _sender: object, event: DisplayTextChangedEvent
    ) -> None:
        lines = event.text.split(NEWLINE)
        completed = lines[:-1]

        # 手入力やリセットで行が減った場合は表示済み行数を合わせるだけ
        if len(completed) < self._committed_lines:
            self._committed_lines = len(completed)

        for line in completed[self._committed_lines :]:
            self._write_permanent(f"{Fore.WHITE}{line}{Style.RESET_ALL}")
        self._committed_lines = len(completed)

        self._live_line = self._format_live_line(lines[-1], event.interim_text)
        self._render_live()

    def _on_status_changed(self, _sender: object, event: StatusChangedEvent) -> None:
        self.status = event.message
        self._render_live()

    def _on_recording_indicator_changed(
        self, _sender: object, event: RecordingIndicatorChangedEvent
    ) -> None:
        self.is_recording = event.is_recording
        self._render_live()

    def _on_message_posted(self, _sender: object, event: MessagePostedEvent) -> None:
        self._show_message(event)

    # ========== 表示メソッド ==========

    def _format_live_line(self, line: str, interim_text: str) -> str:
        """入力中の行を整形（暫定結果部分は薄く表示）"""
        if interim_text and line.endswith(interim_text):
            confirmed = line[: len(line) - len(interim_text)]
            return f"{confirmed}{Style.DIM}{interim_text}{Style.RESET_ALL}"
        return line

    def _render_live(self) -> None:
        """ステータスと入力中の行を1行で再描画"""
        indicator = (
            f"{Fore.RED}● REC{Style.RESET_ALL}"
            if self.is_recording
            else f"{Fore.CYAN}○{Style.RESET_ALL}"
        )
        prefix = f"{indicator} {Fore.YELLOW}[{self.status}]{Style.RESET_ALL} "

        try:
            terminal_width = os.get_terminal_size().columns
        except OSError:
            terminal_width = 80

        available = terminal_width - self._get_display_width(prefix) - 1
        line = self._live_line
        if self._get_display_width(line) > available > 3:
            line = "..." + self._tail_text(line, available - 3)

        sys.stdout.write(f"\r\033[K{prefix}{line}")
        sys.stdout.flush()

    def _write_permanent(self, text: str) -> None:
        sys.stdout.write(f"\r\033[K{text}\n")
        sys.stdout.flush()

    def _show_message(self, event: MessagePostedEvent) -> None:
        """メッセージを表示"""
        color_map = {
            MessageLevel.INFO: Fore.CYAN,
            MessageLevel.SUCCESS: Fore.GREEN,
            MessageLevel.WARNING: Fore.YELLOW,
            MessageLevel.ERROR: Fore.RED,
        }
        color = color_map.get(event.level, Fore.WHITE)
        timestamp = event.timestamp.strftime("%H:%M:%S")
        self._write_permanent(
            f"{color}[{timestamp}] {event.message}{Style.RESET_ALL}"
        )
        self._render_live()

    def show_banner(self, store_info: str) -> None:
        """
        起動バナーを表示

        Args:
            store_info: メモ保存先の説明
        """
        dictation = self.settings.dictation
        recognizer = self.settings.recognizer

        banner = f"""
{Fore.CYAN}╔══════════════════════════════════════════╗
║       EchoMemo v{__version__:<23}  ║
║  Voice Memo Dictation                    ║
╚══════════════════════════════════════════╝{Style.RESET_ALL}

{Fore.YELLOW}Config:{Style.RESET_ALL}
  - Locale: {recognizer.locale} (continuous: {recognizer.continuous}, interim results: {recognizer.interim_results})
  - Line continuity window: {dictation.continuity_window_sec}s
  - Storage: {store_info}

"""
        sys.stdout.write(banner)
        sys.stdout.flush()

    def show_memo(self, memo: Memo) -> None:
        """保存されたメモを表示"""
        tags = ", ".join(f"#{tag}" for tag in memo.tags)
        print(f"\n{Fore.CYAN}{'─' * 50}{Style.RESET_ALL}")
        print(f"{Fore.GREEN}{memo.title}{Style.RESET_ALL}  {Fore.MAGENTA}{tags}{Style.RESET_ALL}")
        print(memo.content)
        print(f"{Fore.CYAN}{'─' * 50}{Style.RESET_ALL}\n")

    def show_memo_list(self, memos: list[Memo]) -> None:
        """メモ一覧を表示（更新日時の新しい順）"""
        if not memos:
            print(f"\n{Fore.YELLOW}メモがありません。{Style.RESET_ALL}\n")
            return

        print()
        for memo in memos:
            date = memo.updated_at.astimezone().strftime("%Y/%m/%d %H:%M")
            tags = " ".join(f"#{tag}" for tag in memo.tags)
            print(
                f"  {Fore.CYAN}[{memo.id}]{Style.RESET_ALL} {memo.title} "
                f"{Fore.MAGENTA}{tags}{Style.RESET_ALL} ({date})"
            )
        print()

    # ========== フォーマッティングメソッド ==========

    def _get_display_width(self, text: str) -> int:
        """ANSIエスケープコードを除いた実際の表示幅を取得"""
        plain_text = self._ANSI_ESCAPE_PATTERN.sub("", text)
        return max(0, int(wcwidth.wcswidth(plain_text)))

    def _tail_text(self, text: str, max_width: int) -> str:
        """末尾から指定の表示幅に収まる部分を切り出す（全角文字は幅2）"""
        plain_text = self._ANSI_ESCAPE_PATTERN.sub("", text)
        width = 0
        start = len(plain_text)
        for i in range(len(plain_text) - 1, -1, -1):
            char_width = max(0, wcwidth.wcwidth(plain_text[i]))
            if width + char_width > max_width:
                break
            width += char_width
            start = i
        return plain_text[start:]
