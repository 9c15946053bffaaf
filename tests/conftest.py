"""テスト共通フィクスチャ"""

from collections.abc import Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest
from blinker import Signal

from echo_memo.domain import (
    RecognizerError,
    RecognizerSettings,
    Settings,
    StorageSettings,
    display_text_changed,
    message_posted,
    recording_indicator_changed,
    status_changed,
)
from echo_memo.infrastructure.dictation import (
    BufferCompositor,
    RecognitionSessionController,
    TranscriptSegmenter,
)
from echo_memo.infrastructure.persistence import JsonFileMemoStore
from echo_memo.infrastructure.recognition import Recognizer


class FakeClock:
    """手動で進める単調時計（秒）"""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRecognizer(Recognizer):
    """
    呼び出しを記録するだけの認識エンジン

    コールバックはテストからコントローラーへ直接送る。
    """

    def __init__(self, available: bool = True) -> None:
        super().__init__(RecognizerSettings())
        self.available = available
        self.start_calls = 0
        self.stop_calls = 0
        self.start_error: RecognizerError | None = None

    @property
    def is_available(self) -> bool:
        return self.available

    def start(self) -> None:
        self.start_calls += 1
        if self.start_error is not None:
            raise self.start_error

    def stop(self) -> None:
        self.stop_calls += 1


class FakeDateTimes:
    """呼ぶたびに1秒ずつ進むUTC時刻"""

    def __init__(self) -> None:
        self.current = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


class SignalRecorder:
    """コアからの通知シグナルを記録する"""

    def __init__(self) -> None:
        self.display: list[Any] = []
        self.status: list[Any] = []
        self.indicator: list[Any] = []
        self.messages: list[Any] = []
        self._connections: list[tuple[Signal, Any]] = []

    def connect(self) -> None:
        for signal, sink in (
            (display_text_changed, self.display),
            (status_changed, self.status),
            (recording_indicator_changed, self.indicator),
            (message_posted, self.messages),
        ):

            def receiver(_sender: object, event: Any, _sink: list[Any] = sink) -> None:
                _sink.append(event)

            signal.connect(receiver, weak=False)
            self._connections.append((signal, receiver))

    def disconnect(self) -> None:
        for signal, receiver in self._connections:
            signal.disconnect(receiver)
        self._connections.clear()

    @property
    def last_status(self) -> str | None:
        return self.status[-1].message if self.status else None

    @property
    def last_display(self) -> str | None:
        return self.display[-1].text if self.display else None


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """一時ディレクトリに保存する設定"""
    return Settings(storage=StorageSettings(data_dir=tmp_path))


@pytest.fixture
def segmenter(settings: Settings, clock: FakeClock) -> TranscriptSegmenter:
    return TranscriptSegmenter(settings=settings.dictation, clock=clock)


@pytest.fixture
def compositor(
    segmenter: TranscriptSegmenter, settings: Settings
) -> BufferCompositor:
    return BufferCompositor(segmenter=segmenter, settings=settings.dictation)


@pytest.fixture
def recognizer() -> FakeRecognizer:
    return FakeRecognizer()


@pytest.fixture
def controller(
    recognizer: FakeRecognizer, compositor: BufferCompositor
) -> RecognitionSessionController:
    return RecognitionSessionController(recognizer=recognizer, compositor=compositor)


@pytest.fixture
def store(settings: Settings) -> JsonFileMemoStore:
    return JsonFileMemoStore(settings=settings.storage, now=FakeDateTimes())


@pytest.fixture
def signals() -> Iterator[SignalRecorder]:
    recorder = SignalRecorder()
    recorder.connect()
    yield recorder
    recorder.disconnect()
