#!/usr/bin/env python3
"""
EchoMemo - Persistence Infrastructure
永続化層のインフラストラクチャ（メモ保存先）
"""

# 保存先インターフェース
from .base import MemoStore

# JSONファイル
from .json_store import JsonFileMemoStore

# メモサーバーAPI
from .http_store import HttpMemoStore

# ファクトリ
from .factory import create_memo_store

__all__ = [
    "MemoStore",
    "JsonFileMemoStore",
    "HttpMemoStore",
    "create_memo_store",
]
