from __future__ import annotations

import pytest

from linealign.error_codes import ErrorCode
from linealign.models.annotation import AnnotationEntry, ExternalAlignmentAnnotation
from linealign.models.segment import Side, Span
from linealign.workspace import Workspace


def _annotation() -> ExternalAlignmentAnnotation:
    return ExternalAlignmentAnnotation(
        alignment_annotation=(
            AnnotationEntry(span=Span(0, 5), index=0, alignment_index=(0,)),
            AnnotationEntry(span=Span(5, 10), index=1, alignment_index=(1,)),
        ),
        target_annotation=(
            AnnotationEntry(span=Span(0, 7), index=0),
            AnnotationEntry(span=Span(7, 12), index=1),
        ),
    )


def test_load_alignment_segments_views_and_captures_originals(make_view, settings) -> None:
    ws = Workspace(make_view("source"), make_view("target"), settings)
    ws.load_alignment(_annotation(), "HelloWorld", "BonjourMonde")

    assert ws.source_view.text == "Hello\nWorld"
    assert ws.target_view.text == "Bonjour\nMonde"
    assert ws.original(Side.SOURCE).text == "Hello\nWorld"
    assert ws.external_annotation is not None
    assert ws.resolve(7, Side.SOURCE) == 8


def test_line_break_edits_keep_content_valid(make_view, settings) -> None:
    ws = Workspace(make_view("source", "Hello World"), make_view("target", "Bonjour le monde"), settings)
    ws.capture_originals()

    ws.source_view.set_text("Hello\nWorld")
    assert ws.is_content_valid()

    ws.target_view.set_text("Bonjour  le monde")
    assert not ws.is_content_valid()

    check, doc = ws.build_publish()
    assert not check.is_valid
    assert doc is None
    assert check.error_code == ErrorCode.PUBLISH_INVALID


def test_build_publish_from_current_texts(make_view, settings) -> None:
    ws = Workspace(make_view("source", "A\nB\nC"), make_view("target", "X\nY"), settings)
    ws.set_original_source_text("ABC")
    ws.set_original_target_text("XY")

    check, doc = ws.build_publish()

    assert check.is_valid
    assert doc is not None
    assert doc.segmentation == [Span(0, 1), Span(1, 2)]
    assert [e.alignment_index for e in doc.alignment_annotation] == [(0,), (1,)]


def test_build_publish_reports_validation_error(make_view, settings) -> None:
    ws = Workspace(make_view("source", "A"), make_view("target", "X\nY"), settings)

    check, doc = ws.build_publish()

    assert check.error.startswith("Target cannot have more segments than source")
    assert doc is None


@pytest.mark.asyncio
async def test_attached_scroll_sync_follows_user_scroll(make_view, settings) -> None:
    text = "\n".join(str(i) for i in range(30))
    ws = Workspace(make_view("source", text), make_view("target", text), settings)
    ws.attach_scroll_sync()
    ws.attach_scroll_sync()

    ws.source_view.scroll_by(100)
    await ws.synchronizer.drain()

    assert ws.source_view.top_line == 11
    assert ws.target_view.top_line == 9
    assert ws.synchronizer.completed == 1
    assert ws.source_view.scroll_top == 100.0


@pytest.mark.asyncio
async def test_sync_toggle_and_click_sync(make_view, settings) -> None:
    text = "\n".join(str(i) for i in range(30))
    ws = Workspace(make_view("source", text), make_view("target", text), settings)

    ws.sync_enabled = False
    assert await ws.sync_to_clicked_line(ws.source_view.line_start(12), Side.SOURCE) is False

    ws.sync_enabled = True
    assert await ws.sync_to_clicked_line(ws.source_view.line_start(12), Side.SOURCE) is True
    assert await ws.sync_text_selection(Side.SOURCE, 0, 3) is True
    assert ws.target_view.selection == (0, ws.target_view.line_end(2))


def test_build_publish_ignores_trailing_newlines(make_view, settings) -> None:
    ws = Workspace(make_view("source", "A\nB\n"), make_view("target", "X\nY\n"), settings)
    ws.capture_originals()

    check, doc = ws.build_publish()

    assert check.is_valid
    assert doc is not None
    assert doc.segmentation == [Span(0, 1), Span(1, 2)]


def test_attached_scroll_sync_outside_event_loop(make_view, settings) -> None:
    text = "\n".join(str(i) for i in range(30))
    ws = Workspace(make_view("source", text), make_view("target", text), settings)
    ws.attach_scroll_sync()

    ws.source_view.scroll_by(100)

    assert ws.source_view.scroll_top == 100.0
    assert ws.target_view.scroll_top == 0.0
