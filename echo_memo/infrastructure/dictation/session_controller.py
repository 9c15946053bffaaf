#!/usr/bin/env python3
"""
EchoMemo - Recognition Session Controller Module
外部音声認識の開始・停止・自動再開を管理するステートマシン
"""

from collections.abc import Sequence

from echo_memo.domain import (
    MessageLevel,
    RecognitionState,
    RecognizerError,
    RecognizerErrorKind,
    RecognizerUnavailableError,
    RecordingIndicatorChangedEvent,
    StatusChangedEvent,
    TranscriptEvent,
    post_message,
    recording_indicator_changed,
    status_changed,
)
from echo_memo.domain.constants import (
    STATUS_IDLE,
    STATUS_LISTENING,
    STATUS_PERMISSION_DENIED,
    STATUS_RECOGNITION_ERROR,
    STATUS_UNSUPPORTED,
)
from echo_memo.infrastructure.recognition import Recognizer

from .compositor import BufferCompositor

_ERROR_STATUS = {
    RecognizerErrorKind.UNAVAILABLE: STATUS_UNSUPPORTED,
    RecognizerErrorKind.PERMISSION_DENIED: STATUS_PERMISSION_DENIED,
    RecognizerErrorKind.TRANSIENT: STATUS_RECOGNITION_ERROR,
}


class RecognitionSessionController:
    """
    認識セッションのステートマシン（RecognitionListenerを実装）

    状態遷移:
    - IDLE --start()--> STARTING --on_started--> LISTENING
    - STARTING/LISTENING --stop()/on_error--> STOPPING --on_ended--> IDLE
    - STARTING/LISTENING --on_ended（自動再開有効）--> STARTING

    認識エンジンは予告なく終了することがあるため、should_auto_restartが
    立っている間は終了のたびに再開し、ユーザーからは1つの連続した
    口述セッションに見えるようにする。
    認識側の失敗は例外として外に出さず、ステータス文言に変換する。
    """

    def __init__(
        self, recognizer: Recognizer | None, compositor: BufferCompositor
    ) -> None:
        self.recognizer = recognizer
        self.compositor = compositor
        self.state = RecognitionState.IDLE
        self.should_auto_restart = False
        self.restart_count = 0  # 現セッションでの自動再開回数
        self.session_base_text = ""  # on_started時点の確定テキスト
        self._indicator = False
        self._closed = False  # 編集セッション終了後の遅延結果を捨てる

        if recognizer is not None:
            recognizer.bind(self)

    @property
    def is_recording(self) -> bool:
        return self.state in (RecognitionState.STARTING, RecognitionState.LISTENING)

    # ========== ユーザー操作 ==========

    def start(self) -> bool:
        """
        認識セッションを開始

        Returns:
            bool: 認識エンジンの起動を要求できたらTrue
        """
        if self.state is not RecognitionState.IDLE:
            post_message(
                f"Recognition already {self.state}; start ignored",
                MessageLevel.WARNING,
            )
            return False

        if self.recognizer is None or not self.recognizer.is_available:
            self._fail(
                RecognizerUnavailableError("speech recognition is not supported")
            )
            return False

        self.should_auto_restart = True
        self.restart_count = 0
        self._closed = False
        self._set_state(RecognitionState.STARTING)
        if not self._invoke_start():
            return False

        self._set_indicator(True)
        self._set_status(STATUS_LISTENING)
        return True

    def stop(self) -> None:
        """認識セッションを停止（IDLE/STOPPING中は何もしない）"""
        if not self.is_recording:
            return
        self._halt(STATUS_IDLE)

    def close(self) -> None:
        """編集セッション終了時の強制停止（何度呼んでもよい）"""
        self.stop()
        self._closed = True
        self.should_auto_restart = False
        self.compositor.segmenter.clear()

    # ========== 認識エンジンからのコールバック ==========

    def on_started(self) -> None:
        if self.state is not RecognitionState.STARTING:
            post_message(
                f"Ignoring recognizer start while {self.state}",
                MessageLevel.WARNING,
            )
            return

        self._set_state(RecognitionState.LISTENING)
        # 途中から再開した文書の続きとして扱うための基準
        self.session_base_text = self.compositor.confirmed_text

    def on_result(self, events: Sequence[TranscriptEvent]) -> None:
        """
        1回のコールバック分の認識結果を反映

        確定結果は順に追記し、残った暫定結果を連結してオーバーレイにする。
        停止処理中は確定結果のみ受け付ける。
        """
        if self.state is RecognitionState.LISTENING:
            accept_interim = True
        elif self.state is RecognitionState.STOPPING and not self._closed:
            accept_interim = False
        else:
            post_message(
                f"Dropping {len(events)} recognition result(s) while {self.state}",
                MessageLevel.WARNING,
            )
            return

        interim_parts: list[str] = []
        for event in events:
            if event.is_final:
                self.compositor.append_final(event.text)
            elif accept_interim:
                interim_parts.append(event.text)

        if interim_parts:
            self.compositor.set_interim_overlay("".join(interim_parts))
        else:
            self.compositor.clear_interim_overlay()
        self.compositor.publish(self)

    def on_ended(self) -> None:
        # 未確定のまま終わった暫定結果は捨てる
        if self.compositor.interim_text:
            self.compositor.clear_interim_overlay()
            self.compositor.publish(self)

        if self.should_auto_restart and self.is_recording:
            self.restart_count += 1
            post_message(
                f"Recognizer ended unexpectedly; restarting (#{self.restart_count})",
                MessageLevel.INFO,
            )
            self._set_state(RecognitionState.STARTING)
            self._invoke_start()
            return

        # 次のセッションは新しい行から始める
        self.compositor.segmenter.clear()
        self.should_auto_restart = False
        self._set_state(RecognitionState.IDLE)
        self._set_indicator(False)

    def on_error(self, kind: RecognizerErrorKind, detail: str = "") -> None:
        post_message(
            f"Speech recognition error: {kind}" + (f" ({detail})" if detail else ""),
            MessageLevel.ERROR,
        )
        status = _ERROR_STATUS[kind]
        if self.is_recording:
            self._halt(status)
        else:
            self.should_auto_restart = False
            self._set_status(status)

    # ========== 内部処理 ==========

    def _invoke_start(self) -> bool:
        """認識エンジンを起動（失敗時はIDLEに戻す）"""
        assert self.recognizer is not None
        try:
            self.recognizer.start()
        except RecognizerError as e:
            self._fail(e)
            return False
        return True

    def _halt(self, status: str) -> None:
        """自動再開を止め、オーバーレイを破棄して停止を要求（継続期限はon_endedで破棄）"""
        assert self.recognizer is not None
        self.should_auto_restart = False
        self.compositor.clear_interim_overlay()
        self._set_state(RecognitionState.STOPPING)
        self._set_indicator(False)
        self._set_status(status)
        self.compositor.publish(self)
        self.recognizer.stop()

    def _fail(self, error: RecognizerError) -> None:
        """起動に失敗したセッションを終了（自動再開しない）"""
        level = (
            MessageLevel.ERROR
            if error.kind is RecognizerErrorKind.UNAVAILABLE
            else MessageLevel.WARNING
        )
        post_message(f"Failed to start recognition: {error}", level)
        self.should_auto_restart = False
        self._set_state(RecognitionState.IDLE)
        self._set_indicator(False)
        self._set_status(_ERROR_STATUS[error.kind])

    def _set_state(self, state: RecognitionState) -> None:
        self.state = state

    def _set_status(self, message: str) -> None:
        status_changed.send(self, event=StatusChangedEvent(message=message))

    def _set_indicator(self, is_recording: bool) -> None:
        if self._indicator == is_recording:
            return
        self._indicator = is_recording
        recording_indicator_changed.send(
            self, event=RecordingIndicatorChangedEvent(is_recording=is_recording)
        )
