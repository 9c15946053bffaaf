#!/usr/bin/env python3
"""
EchoMemo - Memo Store Interface
メモ保存先の抽象化
"""

from abc import ABC, abstractmethod

from echo_memo.domain import Memo, MemoDraft, MemoNotFoundError


class MemoStore(ABC):
    """
    メモのCRUDインターフェース

    Raises（各メソッド共通）:
        MemoNotFoundError: 指定IDのメモが存在しない場合
        MemoStoreError: 保存先の読み書きに失敗した場合
    """

    @abstractmethod
    def list_memos(self) -> list[Memo]:
        """全メモを更新日時の新しい順に返す"""
        pass

    @abstractmethod
    def create(self, draft: MemoDraft) -> Memo:
        pass

    @abstractmethod
    def update(self, memo_id: str, draft: MemoDraft) -> Memo:
        pass

    @abstractmethod
    def delete(self, memo_id: str) -> None:
        pass

    def get(self, memo_id: str) -> Memo:
        for memo in self.list_memos():
            if memo.id == memo_id:
                return memo
        raise MemoNotFoundError(memo_id)

    @abstractmethod
    def describe(self) -> str:
        """保存先の説明（例: "JSON file (/data/memos.json)"）"""
        pass
