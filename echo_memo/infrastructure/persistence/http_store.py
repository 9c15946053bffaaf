#!/usr/bin/env python3
"""
EchoMemo - HTTP Memo Store
インフラ層：メモサーバーの /api/memos CRUD APIクライアント
"""

from typing import Any

import requests
from pydantic import TypeAdapter, ValidationError

from echo_memo.domain import (
    Memo,
    MemoDraft,
    MemoNotFoundError,
    MemoStoreError,
    StorageSettings,
)

from .base import MemoStore

_MEMO_LIST = TypeAdapter(list[Memo])


class HttpMemoStore(MemoStore):
    """
    メモサーバーAPIクライアント

    エンドポイント:
    - GET    /api/memos        一覧
    - POST   /api/memos        作成（title, content, tags）
    - PUT    /api/memos/{id}   更新
    - DELETE /api/memos/{id}   削除
    """

    def __init__(
        self, settings: StorageSettings, session: requests.Session | None = None
    ) -> None:
        # 設定検証済みのため、api_base_urlは必ず存在する
        assert settings.api_base_url is not None
        self.settings = settings
        self.base_url = settings.api_base_url.rstrip("/")
        self.session = session or requests.Session()

    def describe(self) -> str:
        return f"Memo server ({self.base_url})"

    def list_memos(self) -> list[Memo]:
        memos = self._parse(_MEMO_LIST, self._request("GET", "/api/memos"))
        return sorted(memos, key=lambda m: m.updated_at, reverse=True)

    def create(self, draft: MemoDraft) -> Memo:
        data = self._request("POST", "/api/memos", json=draft.model_dump())
        return self._parse(TypeAdapter(Memo), data)

    def update(self, memo_id: str, draft: MemoDraft) -> Memo:
        data = self._request(
            "PUT", f"/api/memos/{memo_id}", memo_id=memo_id, json=draft.model_dump()
        )
        return self._parse(TypeAdapter(Memo), data)

    def delete(self, memo_id: str) -> None:
        self._request("DELETE", f"/api/memos/{memo_id}", memo_id=memo_id)

    # ========== HTTP ==========

    def _request(
        self,
        method: str,
        path: str,
        memo_id: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """
        APIを呼び出してJSONレスポンスを返す

        Raises:
            MemoNotFoundError: 404（memo_id指定時）
            MemoStoreError: 通信エラー・その他のHTTPエラー
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, json=json, timeout=self.settings.request_timeout_sec
            )
        except requests.RequestException as e:
            raise MemoStoreError(f"{method} {url} failed: {e}") from e

        if response.status_code == 404 and memo_id is not None:
            raise MemoNotFoundError(memo_id)
        try:
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as e:
            raise MemoStoreError(f"{method} {url} failed: {e}") from e
        except ValueError as e:
            raise MemoStoreError(f"{method} {url} returned invalid JSON") from e

    @staticmethod
    def _parse(adapter: TypeAdapter[Any], data: Any) -> Any:
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            raise MemoStoreError(f"Unexpected response from memo server: {e}") from e
