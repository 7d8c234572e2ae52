"""Test configuration and fixtures.

Provides reusable fixtures for:
- Wrapping <body> content in a TTML document
- Sample documents with translations, romanizations and background vocals
"""

import os
import pytest


TTML_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<tt xmlns="http://www.w3.org/ns/ttml" '
    'xmlns:ttm="http://www.w3.org/ns/ttml#metadata" '
    'xmlns:itunes="http://music.apple.com/lyric-ttml-internal" '
    'xml:lang="ja">\n'
    '<head><metadata>'
    '<ttm:agent type="person" xml:id="v1"/>'
    '<ttm:agent type="person" xml:id="v2"/>'
    '</metadata></head>\n'
)


def wrap_body(body: str) -> str:
    """Wrap <div>/<p> content in a full TTML document."""
    return f"{TTML_HEADER}<body>\n{body}\n</body>\n</tt>\n"


def pytest_addoption(parser):
    parser.addoption(
        "--run-network",
        action="store_true",
        default=False,
        help="Run tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    run_network = config.getoption("--run-network") or os.getenv(
        "RUN_INTEGRATION_TESTS"
    ) == "1"
    if run_network:
        return

    skip_network = pytest.mark.skip(
        reason="requires network access (use --run-network or RUN_INTEGRATION_TESTS=1)"
    )
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip_network)


# =============================================================================
# Document Fixtures
# =============================================================================


@pytest.fixture
def make_ttml():
    """Expose wrap_body to tests."""
    return wrap_body


@pytest.fixture
def simple_ttml():
    """One plain line, no spans."""
    return wrap_body(
        '<div><p begin="00:00:01.000" end="00:00:03.000">Hello</p></div>'
    )


@pytest.fixture
def word_timed_ttml():
    """Word-timed lines with an inline translation and a background span."""
    return wrap_body(
        '<div>\n'
        '  <p begin="00:01.000" end="00:04.000" ttm:agent="v1">'
        '<span begin="00:01.000" end="00:01.500">Hello</span> '
        '<span begin="00:01.600" end="00:02.200">world</span>'
        '<span ttm:role="x-translation" xml:lang="zh-CN">你好世界</span>'
        '<span ttm:role="x-bg" begin="00:02.500" end="00:03.800">'
        '<span begin="00:02.500" end="00:03.000">(oh</span> '
        '<span begin="00:03.100" end="00:03.800">oh)</span>'
        '</span>'
        '</p>\n'
        '  <p begin="00:05.000" end="00:07.000" ttm:agent="v2">'
        '<span begin="00:05.000" end="00:06.000">Second</span> '
        '<span begin="00:06.000" end="00:07.000">voice</span>'
        '</p>\n'
        '</div>'
    )


@pytest.fixture
def satellite_ttml():
    """Translation and romanization delivered as separate lines."""
    return wrap_body(
        '<div>\n'
        '  <p begin="00:00:05.000" end="00:00:08.000">こんにちは</p>\n'
        '  <p begin="00:00:09.000" end="00:00:11.000">さようなら</p>\n'
        '</div>\n'
        '<div ttm:role="x-translation">\n'
        '  <p begin="00:00:05.250" end="00:00:08.000">Hello</p>\n'
        '  <p begin="00:00:09.400" end="00:00:11.000">Goodbye</p>\n'
        '</div>\n'
        '<div ttm:role="x-roman">\n'
        '  <p begin="00:00:05.100" end="00:00:08.000">konnichiwa</p>\n'
        '  <p begin="00:00:09.100" end="00:00:11.000">sayounara</p>\n'
        '</div>'
    )
