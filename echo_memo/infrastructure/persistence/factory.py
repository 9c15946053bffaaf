#!/usr/bin/env python3
"""
EchoMemo - Memo Store Factory
設定に応じたメモ保存先の生成
"""

from echo_memo.domain import StorageBackend, StorageSettings

from .base import MemoStore
from .http_store import HttpMemoStore
from .json_store import JsonFileMemoStore


def create_memo_store(settings: StorageSettings) -> MemoStore:
    """
    設定に基づいてMemoStoreを生成

    Args:
        settings: 保存設定（検証済み）

    Returns:
        MemoStore: ローカルJSONファイル or メモサーバーAPI
    """
    if settings.backend == StorageBackend.HTTP:
        return HttpMemoStore(settings=settings)
    return JsonFileMemoStore(settings=settings)
