"""設定読み込みのテスト"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from echo_memo.domain import StorageBackend
from echo_memo.infrastructure.config import load_settings


def write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadSettings:
    """TOML設定の読み込みテスト"""

    def test_defaults_without_files(self, tmp_path: Path) -> None:
        settings = load_settings(config_dir=tmp_path)
        assert settings.dictation.continuity_window_sec == 10.0
        assert settings.recognizer.locale == "ja-JP"
        assert settings.storage.backend is StorageBackend.FILE

    def test_local_config_is_deep_merged(self, tmp_path: Path) -> None:
        """config.local.tomlはセクション単位ではなくキー単位で上書きする"""
        write(
            tmp_path / "config.toml",
            "[recognizer]\nlocale = \"en-US\"\ninterim_results = false\n"
            "[dictation]\ncontinuity_window_sec = 5\n",
        )
        write(tmp_path / "config.local.toml", '[recognizer]\nlocale = "fr-FR"\n')

        settings = load_settings(config_dir=tmp_path)
        assert settings.recognizer.locale == "fr-FR"
        assert settings.recognizer.interim_results is False
        assert settings.dictation.continuity_window_sec == 5

    def test_extra_config_wins(self, tmp_path: Path) -> None:
        write(tmp_path / "config.toml", "[dictation]\ncontinuity_window_sec = 5\n")
        extra = write(
            tmp_path / "extra.toml",
            f'[dictation]\ncontinuity_window_sec = 3\n[storage]\ndata_dir = "{tmp_path.as_posix()}"\n',
        )
        settings = load_settings(config_dir=tmp_path, extra_config=extra)
        assert settings.dictation.continuity_window_sec == 3
        assert settings.storage.data_path == tmp_path / "memos.json"

    def test_missing_extra_config(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_settings(config_dir=tmp_path, extra_config=tmp_path / "none.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """壊れたTOMLはファイル名付きのValueError"""
        write(tmp_path / "config.toml", "[dictation\n")
        with pytest.raises(ValueError, match="config.toml"):
            load_settings(config_dir=tmp_path)

    @pytest.mark.parametrize(
        "text",
        [
            "[dictation]\ncontinuity_window_sec = 0\n",
            '[storage]\nbackend = "ftp"\n',
            '[storage]\nbackend = "http"\napi_base_url = ""\n',
        ],
    )
    def test_invalid_values(self, tmp_path: Path, text: str) -> None:
        write(tmp_path / "config.toml", text)
        with pytest.raises(ValidationError):
            load_settings(config_dir=tmp_path)
