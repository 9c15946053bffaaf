#!/usr/bin/env python3
"""
EchoMemo - Package Entry Point
python -m echo_memo で実行
"""

from echo_memo.presentation.cli import main

if __name__ == "__main__":
    main()
