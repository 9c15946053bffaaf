#!/usr/bin/env python3
"""
EchoMemo - Infrastructure Layer
インフラストラクチャ層: 口述整形エンジン、外部認識、永続化、設定読み込み
"""

from .config import load_settings

__all__ = [
    "load_settings",
]
