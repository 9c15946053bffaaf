#!/usr/bin/env python3
"""
EchoMemo - Presentation Layer
プレゼンテーション層：UI、アプリケーションロジック
"""

# コアアプリケーション
from .app import EchoMemoApp

__all__ = [
    # コアアプリケーション
    "EchoMemoApp",
]
