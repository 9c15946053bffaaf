#!/usr/bin/env python3
"""
EchoMemo - Scripted Recognizer Module
認識結果のスクリプト（JSON Lines）を再生する音声認識アダプタ
"""

import asyncio
import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from typing_extensions import Self

from echo_memo.domain import (
    RecognizerError,
    RecognizerErrorKind,
    RecognizerSettings,
    RecognizerUnavailableError,
    TranscriptEvent,
)

from .base import Recognizer, classify_error


class ScriptStep(BaseModel):
    """
    スクリプトの1ステップ

    例:
        {"delay": 0.8, "interim": "きょうの"}
        {"delay": 0.5, "final": "今日の予定", "interim": "ごご"}
        {"delay": 12, "end": true}
        {"error": "network"}

    final と interim は同時に指定でき、1回のコールバックにまとめて届く。
    end（予告なしの終了）と error は単独で指定する。
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    delay: float = Field(default=0.0, ge=0, description="前のステップからの待ち時間（秒）")
    final: str | None = None
    interim: str | None = None
    end: bool = False
    error: str | None = None

    @model_validator(mode="after")
    def validate_action(self) -> Self:
        """ステップの動作がちょうど1種類になっているか検証"""
        has_result = self.final is not None or self.interim is not None
        actions = [has_result, self.end, self.error is not None]
        if sum(actions) != 1:
            raise ValueError(
                "a step needs exactly one of: final/interim, end, error"
            )
        return self

    def events(self) -> list[TranscriptEvent]:
        """このステップで届ける認識結果（確定 → 暫定の順）"""
        events = []
        if self.final is not None:
            events.append(TranscriptEvent.final(self.final))
        if self.interim is not None:
            events.append(TranscriptEvent.interim(self.interim))
        return events


def load_script(path: Path) -> list[ScriptStep]:
    """
    JSON Lines形式のスクリプトを読み込む（空行と#で始まる行は無視）

    Raises:
        ValueError: 解釈できない行がある場合（ファイル名と行番号付き）
    """
    steps = []
    with path.open(encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            try:
                steps.append(ScriptStep.model_validate(json.loads(stripped)))
            except (json.JSONDecodeError, ValidationError) as e:
                raise ValueError(f"{path}:{lineno}: invalid script step: {e}") from e
    return steps


class ScriptedRecognizer(Recognizer):
    """
    スクリプトを再生する認識エンジン

    asyncioイベントループ上でコールバックを順に発行する
    （全てのコールバックは単一の制御フローで実行される）。
    end / error ステップで終了した後に start() されると、
    スクリプトの続きから再生を再開する。
    """

    def __init__(
        self,
        settings: RecognizerSettings,
        steps: Iterable[ScriptStep],
        loop: asyncio.AbstractEventLoop | None = None,
        available: bool = True,
    ) -> None:
        super().__init__(settings)
        self._steps = list(steps)
        self._position = 0
        self._loop = loop
        self._available = available
        self._active = False
        self._handle: asyncio.Handle | None = None
        self.start_count = 0

    @property
    def is_available(self) -> bool:
        return self._available

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def is_exhausted(self) -> bool:
        """全ステップを再生し終えたか"""
        return self._position >= len(self._steps)

    def start(self) -> None:
        if not self._available:
            raise RecognizerUnavailableError("scripted recognizer disabled")
        if self._active:
            raise RecognizerError(
                RecognizerErrorKind.TRANSIENT, "recognition has already started"
            )
        self._active = True
        self.start_count += 1
        self._handle = self._get_loop().call_soon(self._begin)

    def stop(self) -> None:
        if not self._active:
            return
        self._active = False
        self._cancel_pending()
        self._get_loop().call_soon(self._emit_ended)

    # ========== 再生処理 ==========

    def _begin(self) -> None:
        self._handle = None
        if self.listener is not None:
            self.listener.on_started()
        self._schedule_next()

    def _schedule_next(self) -> None:
        if not self._active or self.is_exhausted:
            return
        step = self._steps[self._position]
        self._handle = self._get_loop().call_later(step.delay, self._run_step)

    def _run_step(self) -> None:
        self._handle = None
        step = self._steps[self._position]
        self._position += 1

        if step.end:
            # 予告なしの終了
            self._active = False
            self._emit_ended()
            return

        if step.error is not None:
            self._active = False
            if self.listener is not None:
                self.listener.on_error(classify_error(step.error), step.error)
            self._emit_ended()
            return

        if self.listener is not None:
            self.listener.on_result(step.events())
        self._schedule_next()

    def _emit_ended(self) -> None:
        if self.listener is not None:
            self.listener.on_ended()

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop
