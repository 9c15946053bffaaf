"""BufferCompositorのテスト"""

import pytest

from echo_memo.domain.constants import CONTINUITY_WINDOW_SEC, LEAD_MARKER
from echo_memo.infrastructure.dictation import BufferCompositor

from .conftest import FakeClock, SignalRecorder

WITHIN_WINDOW = CONTINUITY_WINDOW_SEC - 0.1


class TestAppendFinal:
    """確定結果の追記テスト"""

    def test_first_text_gets_lead_marker(self, compositor: BufferCompositor) -> None:
        """空のバッファには行頭マーカーを付けて追記"""
        assert compositor.append_final("hello") is True
        assert compositor.confirmed_text == f"{LEAD_MARKER}hello"

    def test_strips_leading_filler_and_joins_with_space(
        self, compositor: BufferCompositor, clock: FakeClock
    ) -> None:
        """先頭の中黒・全角スペースを除き、同じ行は半角スペースで連結"""
        compositor.append_final("・　hello")
        clock.advance(1)
        compositor.append_final("world")
        assert compositor.confirmed_text == "　hello world"

    @pytest.mark.parametrize("text", ["", "   ", "　　", "・", "・　 ・", "\n\t"])
    def test_blank_text_is_noop(self, compositor: BufferCompositor, text: str) -> None:
        """空白・区切り文字だけの結果は何もしない"""
        assert compositor.append_final(text) is False
        assert compositor.confirmed_text == ""
        assert compositor.segmenter.deadline is None

    def test_blank_text_does_not_extend_window(
        self, compositor: BufferCompositor, clock: FakeClock
    ) -> None:
        """空の結果では継続期限は延びない"""
        compositor.append_final("a")
        deadline = compositor.segmenter.deadline
        clock.advance(5)
        compositor.append_final("　")
        assert compositor.segmenter.deadline == deadline

    def test_segments_within_window_use_single_space(
        self, compositor: BufferCompositor, clock: FakeClock
    ) -> None:
        """ウィンドウ内の連続した結果は半角スペース1つで区切られ、改行しない"""
        words = ["今日は", "晴れ", "明日は", "雨", "らしい"]
        for word in words:
            compositor.append_final(f"  {word} ")
            clock.advance(WITHIN_WINDOW)

        text = compositor.confirmed_text
        assert "\n" not in text
        assert text == LEAD_MARKER + " ".join(words)
        assert "  " not in text

    @pytest.mark.parametrize("gap", [CONTINUITY_WINDOW_SEC, CONTINUITY_WINDOW_SEC + 30])
    def test_gap_starts_new_line(
        self, compositor: BufferCompositor, clock: FakeClock, gap: float
    ) -> None:
        """ウィンドウ以上空くと改行 + 行頭マーカー"""
        compositor.append_final("first")
        clock.advance(gap)
        compositor.append_final("second")
        assert compositor.confirmed_text == f"{LEAD_MARKER}first\n{LEAD_MARKER}second"

    def test_new_line_does_not_double_newline(
        self, compositor: BufferCompositor, clock: FakeClock
    ) -> None:
        """末尾が改行なら改行を重ねない"""
        compositor.sync_from_manual_edit("memo\n")
        compositor.append_final("next")
        assert compositor.confirmed_text == f"memo\n{LEAD_MARKER}next"

    def test_same_line_after_trailing_space(
        self, compositor: BufferCompositor, clock: FakeClock
    ) -> None:
        """末尾がスペースなら区切りを足さない"""
        compositor.append_final("a")
        compositor.sync_from_manual_edit(f"{LEAD_MARKER}a ")
        clock.advance(1)
        compositor.append_final("b")
        assert compositor.confirmed_text == f"{LEAD_MARKER}a b"

    def test_window_is_extended_by_each_append(
        self, compositor: BufferCompositor, clock: FakeClock
    ) -> None:
        """追記のたびに期限が延びるので、合計がウィンドウを超えても同じ行"""
        for word in ["a", "b", "c"]:
            compositor.append_final(word)
            clock.advance(WITHIN_WINDOW)
        assert compositor.segmenter.is_same_line is True
        assert compositor.confirmed_text == f"{LEAD_MARKER}a b c"


class TestForceBreak:
    """改行ボタンのテスト"""

    def test_on_empty_buffer(self, compositor: BufferCompositor) -> None:
        """空のバッファでは行頭マーカーだけ"""
        compositor.force_break()
        assert compositor.confirmed_text == LEAD_MARKER

    def test_on_text(self, compositor: BufferCompositor) -> None:
        """テキストの後では改行 + 行頭マーカー"""
        compositor.sync_from_manual_edit("a")
        compositor.force_break()
        assert compositor.confirmed_text == "a\n　"

    def test_after_newline(self, compositor: BufferCompositor) -> None:
        """末尾が改行なら行頭マーカーだけ"""
        compositor.sync_from_manual_edit("a\n")
        compositor.force_break()
        assert compositor.confirmed_text == "a\n　"

    def test_next_text_continues_after_marker(
        self, compositor: BufferCompositor, clock: FakeClock
    ) -> None:
        """改行直後の結果はマーカーの後ろにそのまま続く"""
        compositor.append_final("a")
        compositor.force_break()
        assert compositor.segmenter.is_same_line is True
        clock.advance(1)
        compositor.append_final("b")
        assert compositor.confirmed_text == f"{LEAD_MARKER}a\n{LEAD_MARKER}b"

    def test_expired_break_is_not_duplicated(
        self, compositor: BufferCompositor, clock: FakeClock
    ) -> None:
        """改行後にウィンドウが切れても、既に置いたマーカーを再利用する"""
        compositor.append_final("a")
        compositor.force_break()
        clock.advance(CONTINUITY_WINDOW_SEC + 1)
        compositor.append_final("b")
        assert compositor.confirmed_text == f"{LEAD_MARKER}a\n{LEAD_MARKER}b"


class TestInterimOverlay:
    """暫定オーバーレイのテスト"""

    def test_overlay_does_not_touch_confirmed(
        self, compositor: BufferCompositor
    ) -> None:
        """オーバーレイは確定テキストを変更しない"""
        compositor.append_final("hello")
        compositor.set_interim_overlay("draft")
        assert compositor.confirmed_text == f"{LEAD_MARKER}hello"
        assert compositor.current_display_text() == f"{LEAD_MARKER}hello draft"

    def test_clearing_restores_confirmed(self, compositor: BufferCompositor) -> None:
        """空文字列で破棄すると表示は確定テキストに戻る"""
        compositor.append_final("hello")
        compositor.set_interim_overlay("draft")
        compositor.set_interim_overlay("")
        assert compositor.current_display_text() == compositor.confirmed_text
        assert compositor.interim_text == ""

    def test_overlay_on_empty_buffer(self, compositor: BufferCompositor) -> None:
        """空のバッファでは行頭マーカー付きで表示"""
        compositor.set_interim_overlay("・draft")
        assert compositor.current_display_text() == f"{LEAD_MARKER}draft"
        assert compositor.confirmed_text == ""

    def test_overlay_previews_new_line(
        self, compositor: BufferCompositor, clock: FakeClock
    ) -> None:
        """ウィンドウ切れ後のオーバーレイは改行して表示"""
        compositor.append_final("hello")
        clock.advance(CONTINUITY_WINDOW_SEC)
        compositor.set_interim_overlay("draft")
        assert compositor.current_display_text() == f"{LEAD_MARKER}hello\n{LEAD_MARKER}draft"

    def test_overlay_does_not_extend_window(
        self, compositor: BufferCompositor, clock: FakeClock
    ) -> None:
        """オーバーレイは継続期限を延ばさない"""
        compositor.append_final("hello")
        deadline = compositor.segmenter.deadline
        clock.advance(5)
        compositor.set_interim_overlay("draft")
        assert compositor.segmenter.deadline == deadline

    def test_finalizing_overlay_matches_preview(
        self, compositor: BufferCompositor, clock: FakeClock
    ) -> None:
        """確定後のテキストは暫定表示と一致する"""
        compositor.append_final("hello")
        clock.advance(2)
        compositor.set_interim_overlay("world")
        preview = compositor.current_display_text()
        compositor.append_final("world")
        compositor.clear_interim_overlay()
        assert compositor.current_display_text() == preview


class TestManualEdit:
    """手入力の同期テスト"""

    def test_manual_edit_replaces_buffer_verbatim(
        self, compositor: BufferCompositor
    ) -> None:
        """手入力の内容がそのまま確定テキストになる"""
        compositor.append_final("hello")
        compositor.set_interim_overlay("draft")
        compositor.sync_from_manual_edit("  typed by hand ")
        assert compositor.confirmed_text == "  typed by hand "
        assert compositor.interim_text == ""

    def test_deleted_text_is_not_reintroduced(
        self, compositor: BufferCompositor, clock: FakeClock
    ) -> None:
        """手入力で消したテキストは次の結果で復活しない"""
        compositor.append_final("hello")
        compositor.append_final("world")
        compositor.sync_from_manual_edit(f"{LEAD_MARKER}hello")
        clock.advance(1)
        compositor.append_final("again")
        assert compositor.confirmed_text == f"{LEAD_MARKER}hello again"
        assert "world" not in compositor.confirmed_text


class TestReset:
    """リセットのテスト"""

    def test_reset_with_existing_content(
        self, compositor: BufferCompositor, clock: FakeClock
    ) -> None:
        """既存メモの本文から始め、最初の結果は新しい行になる"""
        compositor.append_final("old")
        compositor.set_interim_overlay("draft")
        compositor.reset("memo body")
        assert compositor.confirmed_text == "memo body"
        assert compositor.current_display_text() == "memo body"
        assert compositor.segmenter.is_same_line is False

        compositor.append_final("more")
        assert compositor.confirmed_text == f"memo body\n{LEAD_MARKER}more"

    def test_reset_to_empty(self, compositor: BufferCompositor) -> None:
        compositor.append_final("old")
        compositor.reset()
        assert compositor.confirmed_text == ""


class TestPublish:
    """表示更新通知のテスト"""

    def test_publish_sends_display_text(
        self, compositor: BufferCompositor, signals: SignalRecorder
    ) -> None:
        """表示テキスト・確定テキスト・オーバーレイを通知する"""
        compositor.append_final("hello")
        compositor.set_interim_overlay("draft")
        compositor.publish()

        event = signals.display[-1]
        assert event.text == f"{LEAD_MARKER}hello draft"
        assert event.confirmed_text == f"{LEAD_MARKER}hello"
        assert event.interim_text == "draft"
