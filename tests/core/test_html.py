"""HTML Helpers — rich-text sanitizing, escaping and plain-text rendering."""

from pvs_api.core.html import escape_html, html_to_text, markdown_to_html, sanitize_rich_text


def test_sanitize_drops_script_with_content():
    cleaned = sanitize_rich_text("<p>Hi</p><script>alert(1)</script>")
    assert cleaned == "<p>Hi</p>"


def test_sanitize_strips_disallowed_tags_keeps_text():
    assert sanitize_rich_text('<div class="x"><b>bold</b></div>') == "<b>bold</b>"


def test_sanitize_forces_safe_links():
    cleaned = sanitize_rich_text('<a href="https://pvs.test" onclick="x()">go</a>')
    assert 'href="https://pvs.test"' in cleaned
    assert 'rel="noopener noreferrer"' in cleaned
    assert 'target="_blank"' in cleaned
    assert "onclick" not in cleaned


def test_sanitize_drops_javascript_urls():
    cleaned = sanitize_rich_text('<a href="javascript:alert(1)">x</a>')
    assert "javascript" not in cleaned


def test_sanitize_empty_passthrough():
    assert sanitize_rich_text("") == ""
    assert sanitize_rich_text(None) is None


def test_escape_html():
    assert escape_html("<a href='x'>&\"") == "&lt;a href=&#039;x&#039;&gt;&amp;&quot;"


def test_html_to_text_drops_style():
    html = "<html><head><style>p{}</style></head><body><p>Hello</p><p>World</p></body></html>"
    assert html_to_text(html) == "Hello\nWorld"


def test_markdown_to_html():
    rendered = markdown_to_html("**New** *hero*\n- one\n- two")
    assert rendered.startswith("<strong>New</strong> <em>hero</em><br>")
    assert "<ul><li>one</li><li>two</li></ul>" in rendered


def test_markdown_escapes_input():
    assert markdown_to_html("<script>") == "&lt;script&gt;"
