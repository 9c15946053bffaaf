#!/usr/bin/env python3
"""
EchoMemo - Constants
固定値（文字種・ステータス文言・エラーコード）を管理するモジュール
"""

# ========================================
# テキスト整形
# ========================================
LEAD_MARKER = "　"  # 行頭マーカー（全角スペース）
NEWLINE = "\n"
WORD_SEPARATOR = " "  # 同一行内の区切り（半角スペース）

# 認識結果の先頭から除去する文字（中黒・全角スペース・半角スペース）
LEADING_FILLER_CHARS = "・　 "

CONTINUITY_WINDOW_SEC = 10.0  # 同一行とみなす無操作時間（秒）

# ========================================
# メモ
# ========================================
DEFAULT_MEMO_TITLE = "無題のメモ"

# ========================================
# ステータス表示文言
# ========================================
STATUS_IDLE = "タップして話す"
STATUS_LISTENING = "聞き取り中..."
STATUS_UNSUPPORTED = "音声認識非対応の環境です"
STATUS_PERMISSION_DENIED = "マイクの使用が許可されていません"
STATUS_RECOGNITION_ERROR = "音声認識でエラーが発生しました（もう一度タップして再開）"

# ========================================
# 認識エラーコード
# ========================================
PERMISSION_DENIED_ERROR_CODES = frozenset({"not-allowed", "service-not-allowed"})
UNAVAILABLE_ERROR_CODES = frozenset({"unsupported", "language-not-supported"})
