"""Open Graph extraction tests: ordered patterns, first match wins, null is valid."""

from tripgate.core.og_image import RegexOgImageExtractor

extract = RegexOgImageExtractor().extract


def test_extracts_og_image():
    html = '<head><meta property="og:image" content="https://x/a.png"></head>'
    assert extract(html) == "https://x/a.png"


def test_no_tag_returns_none():
    assert extract("<html><head><title>t</title></head></html>") is None


def test_content_before_property():
    html = '<meta content="https://x/rev.png" property="og:image" />'
    assert extract(html) == "https://x/rev.png"


def test_name_og_image():
    html = "<meta name='og:image' content='https://x/name.png'>"
    assert extract(html) == "https://x/name.png"


def test_secure_url():
    html = '<meta property="og:image:secure_url" content="https://x/secure.png">'
    assert extract(html) == "https://x/secure.png"


def test_twitter_image():
    html = '<meta name="twitter:image" content="https://x/tw.png">'
    assert extract(html) == "https://x/tw.png"


def test_og_image_wins_over_twitter_image():
    html = (
        '<meta name="twitter:image" content="https://x/tw.png">'
        '<meta property="og:image" content="https://x/og.png">'
    )
    assert extract(html) == "https://x/og.png"


def test_og_image_wins_over_secure_url():
    html = (
        '<meta property="og:image:secure_url" content="https://x/secure.png">'
        '<meta property="og:image" content="https://x/og.png">'
    )
    assert extract(html) == "https://x/og.png"


def test_case_insensitive():
    html = '<META PROPERTY="OG:IMAGE" CONTENT="https://x/upper.png">'
    assert extract(html) == "https://x/upper.png"


def test_unescapes_entities():
    html = '<meta property="og:image" content="https://x/a.png?w=1&amp;h=2">'
    assert extract(html) == "https://x/a.png?w=1&h=2"


def test_resolves_relative_url_against_page():
    html = '<meta property="og:image" content="/img/cover.jpg">'
    assert extract(html, "https://example.com/post/1") == "https://example.com/img/cover.jpg"


def test_absolute_url_not_rewritten_by_base():
    html = '<meta property="og:image" content="https://cdn.x/a.png">'
    assert extract(html, "https://example.com/") == "https://cdn.x/a.png"


def test_repeated_extraction_is_stable():
    extractor = RegexOgImageExtractor()
    html = '<meta property="og:image" content="https://x/a.png">'
    assert extractor.extract(html) == extractor.extract(html) == "https://x/a.png"
