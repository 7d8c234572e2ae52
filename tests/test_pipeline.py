"""End-to-end tests for the TTML pipeline."""

from lyricfuse.core import pipeline
from lyricfuse.core.models import NormalizedLine, WordTiming


def test_trivial_document(simple_ttml):
    assert pipeline.process_ttml(simple_ttml) == [
        NormalizedLine(
            time=1000,
            duration=2000,
            original_text="Hello",
            translated_text="",
            romanized_text="",
            background_text="",
            word_timings=(WordTiming(1000, 2000, "Hello"),),
            is_duet=False,
            is_background=False,
        )
    ]


def test_word_timed_document(word_timed_ttml):
    lines = pipeline.process_ttml(word_timed_ttml)
    assert [line.original_text for line in lines] == ["Hello world", "oh oh", "Second voice"]
    assert lines[0].translated_text == "你好世界"
    assert lines[0].original_text.count("oh") == 0
    assert lines[1].is_background is True
    assert lines[1].word_timings[0] == WordTiming(2500, 500, "oh")
    assert lines[2].is_duet is True


def test_satellite_document(satellite_ttml):
    lines = pipeline.process_ttml(satellite_ttml)
    assert len(lines) == 2
    assert lines[0].translated_text == "Hello"
    assert lines[0].romanized_text == "konnichiwa"
    assert lines[1].translated_text == ""


def test_output_times_non_decreasing(word_timed_ttml, satellite_ttml):
    for doc in (word_timed_ttml, satellite_ttml):
        times = [line.time for line in pipeline.process_ttml(doc)]
        assert times == sorted(times)


def test_multi_language_document_keeps_simplified_chinese(make_ttml):
    doc = make_ttml(
        '<div>'
        '<p begin="00:01.000" end="00:02.000">'
        '<span begin="00:01.000" end="00:02.000">Hi</span>'
        '<span ttm:role="x-translation" xml:lang="zh-Hant">嗨嗨</span>'
        '<span ttm:role="x-translation" xml:lang="zh-Hans">嗨</span>'
        '</p>'
        '</div>'
    )
    lines = pipeline.process_ttml(doc)
    assert lines[0].translated_text == "嗨"


def test_garbage_returns_empty():
    assert pipeline.process_ttml("<<<") == []
    assert pipeline.process_ttml("") == []


def test_unexpected_errors_are_contained(monkeypatch, simple_ttml):
    def explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(pipeline, "merge_lines", explode)
    assert pipeline.process_ttml(simple_ttml) == []


def test_fetch_amll_lyrics_success(monkeypatch, simple_ttml):
    calls = []

    def fake_fetch(song_id, **kwargs):
        calls.append((song_id, kwargs))
        return simple_ttml

    monkeypatch.setattr(pipeline, "fetch_ttml", fake_fetch)
    lines = pipeline.fetch_amll_lyrics("12345", server="http://x/%s")
    assert calls == [("12345", {"server": "http://x/%s"})]
    assert [line.original_text for line in lines] == ["Hello"]


def test_fetch_amll_lyrics_no_document(monkeypatch):
    monkeypatch.setattr(pipeline, "fetch_ttml", lambda song_id, **kw: None)
    assert pipeline.fetch_amll_lyrics("1") is None


def test_fetch_amll_lyrics_empty_parse(monkeypatch, make_ttml):
    empty = make_ttml('<div><p begin="00:01.000" end="00:02.000"></p></div>')
    monkeypatch.setattr(pipeline, "fetch_ttml", lambda song_id, **kw: empty)
    assert pipeline.fetch_amll_lyrics("1") is None


def test_fetch_amll_lyrics_fetch_exception(monkeypatch):
    def explode(song_id, **kwargs):
        raise RuntimeError("network down")

    monkeypatch.setattr(pipeline, "fetch_ttml", explode)
    assert pipeline.fetch_amll_lyrics("1") is None


def test_background_span_is_independent_line(make_ttml):
    doc = make_ttml(
        '<div><p begin="00:10.000" end="00:14.000">'
        '<span begin="00:10.000" end="00:12.000">Sing</span>'
        '<span ttm:role="x-bg" begin="00:12.000" end="00:14.000">(oh oh)</span>'
        '</p></div>'
    )
    lines = pipeline.process_ttml(doc)
    assert [(line.original_text, line.is_background) for line in lines] == [
        ("Sing", False),
        ("oh oh", True),
    ]
    assert lines[1].time == 12000
    assert lines[1].duration == 2000
    assert lines[1].word_timings == (WordTiming(12000, 2000, "oh oh"),)


def test_empty_line_absent_from_output(make_ttml):
    doc = make_ttml(
        '<div>'
        '<p begin="00:01.000" end="00:02.000"><span begin="00:01.000" end="00:02.000"></span></p>'
        '<p begin="00:03.000" end="00:04.000">kept</p>'
        '</div>'
    )
    assert [line.original_text for line in pipeline.process_ttml(doc)] == ["kept"]


def test_untimed_line_keeps_position_but_reports_time_zero(make_ttml):
    doc = make_ttml(
        '<div>'
        '<p begin="00:05.000" end="00:06.000">five</p>'
        '<p>untimed</p>'
        '<p begin="00:07.000" end="00:08.000">seven</p>'
        '</div>'
    )
    lines = pipeline.process_ttml(doc)
    assert [line.original_text for line in lines] == ["five", "untimed", "seven"]
    assert [line.time for line in lines] == [5000, 0, 7000]
    assert lines[1].duration == 0
