#!/usr/bin/env python3
"""
EchoMemo - Dictation Infrastructure
口述テキスト整形エンジン（行判定・バッファ合成・認識セッション制御）
"""

# 行判定
from .segmenter import TranscriptSegmenter

# バッファ合成
from .compositor import BufferCompositor

# 認識セッション制御
from .session_controller import RecognitionSessionController

__all__ = [
    "TranscriptSegmenter",
    "BufferCompositor",
    "RecognitionSessionController",
]
