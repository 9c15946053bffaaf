#!/usr/bin/env python3
"""
EchoMemo - JSON File Memo Store
インフラ層：メモのJSONファイル永続化（保存のたびにバックアップを更新）
"""

import json
import shutil
from collections.abc import Callable
from datetime import datetime, timezone

from pydantic import TypeAdapter, ValidationError

from echo_memo.domain import (
    Memo,
    MemoDraft,
    MemoNotFoundError,
    MemoStoreError,
    MessageLevel,
    StorageSettings,
    post_message,
)

from .base import MemoStore

_MEMO_LIST = TypeAdapter(list[Memo])


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JsonFileMemoStore(MemoStore):
    """
    メモ一覧を1つのJSONファイルに保存する

    責務:
    - memos.json の読み書き（UTF-8、インデント付き）
    - 書き込みのたびに memos_backup.json へコピー
    - ID（ミリ秒タイムスタンプ文字列）と作成・更新日時の採番
    """

    def __init__(
        self, settings: StorageSettings, now: Callable[[], datetime] = _utcnow
    ) -> None:
        self.settings = settings
        self.now = now

    def describe(self) -> str:
        return f"JSON file ({self.settings.data_path})"

    # ========== CRUD ==========

    def list_memos(self) -> list[Memo]:
        return sorted(self._read(), key=lambda m: m.updated_at, reverse=True)

    def create(self, draft: MemoDraft) -> Memo:
        memos = self._read()
        timestamp = self.now()
        memo = Memo(
            id=self._new_id(timestamp, {m.id for m in memos}),
            created_at=timestamp,
            updated_at=timestamp,
            **draft.model_dump(),
        )
        # 新しいメモは先頭
        memos.insert(0, memo)
        self._write(memos)
        return memo

    def update(self, memo_id: str, draft: MemoDraft) -> Memo:
        memos = self._read()
        for index, memo in enumerate(memos):
            if memo.id == memo_id:
                updated = memo.model_copy(
                    update={**draft.model_dump(), "updated_at": self.now()}
                )
                memos[index] = updated
                self._write(memos)
                return updated
        raise MemoNotFoundError(memo_id)

    def delete(self, memo_id: str) -> None:
        memos = self._read()
        remaining = [m for m in memos if m.id != memo_id]
        if len(remaining) == len(memos):
            raise MemoNotFoundError(memo_id)
        self._write(remaining)

    # ========== ファイル入出力 ==========

    def _read(self) -> list[Memo]:
        """データファイルを読み込む（存在しない・壊れている場合は空リスト）"""
        path = self.settings.data_path
        if not path.exists():
            return []
        try:
            return _MEMO_LIST.validate_json(path.read_bytes())
        except (OSError, ValidationError) as e:
            post_message(
                f"Could not read memo data from {path}: {e}", MessageLevel.WARNING
            )
            return []

    def _write(self, memos: list[Memo]) -> None:
        path = self.settings.data_path
        payload = [memo.model_dump(mode="json") for memo in memos]
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
        except OSError as e:
            raise MemoStoreError(f"Failed to save memo data to {path}: {e}") from e
        self._backup()

    def _backup(self) -> None:
        """データファイルをバックアップファイルへコピー"""
        try:
            shutil.copyfile(self.settings.data_path, self.settings.backup_path)
        except FileNotFoundError:
            return
        except OSError as e:
            post_message(f"[Backup] Failed: {e}", MessageLevel.WARNING)

    @staticmethod
    def _new_id(timestamp: datetime, taken: set[str]) -> str:
        """ミリ秒タイムスタンプをIDにする（衝突したら1ずつずらす）"""
        candidate = int(timestamp.timestamp() * 1000)
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)
