#!/usr/bin/env python3
"""
EchoMemo - Recognition Infrastructure
外部音声認識機能のインフラストラクチャ層
"""

# 認識エンジンのインターフェース
from .base import RecognitionListener, Recognizer, classify_error

# スクリプト再生アダプタ
from .scripted import ScriptedRecognizer, ScriptStep, load_script

__all__ = [
    # インターフェース
    "RecognitionListener",
    "Recognizer",
    "classify_error",
    # スクリプト再生
    "ScriptedRecognizer",
    "ScriptStep",
    "load_script",
]
