"""
Tests for HTML sanitization helpers
"""
from sitegen.utils.sanitization import escape_attribute, escape_html, sanitize_html


class TestSanitization:
    """bleach-backed escaping and inline cleanup"""

    def test_escape_html(self):
        assert escape_html("<b>Tom & Jerry</b>") == "&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;"
        assert escape_html(None) == ""

    def test_escape_attribute_quotes(self):
        assert escape_attribute('Say "hi"') == "Say &quot;hi&quot;"

    def test_sanitize_keeps_inline_markup(self):
        assert sanitize_html("Fresh <strong>daily</strong>") == "Fresh <strong>daily</strong>"

    def test_sanitize_strips_scripts_and_bad_protocols(self):
        cleaned = sanitize_html('<script>x</script><a href="javascript:alert(1)">link</a>')
        assert "<script>" not in cleaned
        assert "javascript:" not in cleaned

    def test_sanitize_allows_contact_protocols(self):
        assert 'href="tel:0700123456"' in sanitize_html('<a href="tel:0700123456">Call</a>')
