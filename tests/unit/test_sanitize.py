from utils.sanitize import escape_html, sanitize_email, sanitize_name, sanitize_string, strip_html_tags


class TestSanitizeString:

    def test_strips_control_characters(self):
        assert sanitize_string("hi\x00 there\x07") == "hi there"

    def test_keeps_tabs_and_newlines_collapsed(self):
        assert sanitize_string("a\r\n\r\n\r\n\r\nb") == "a\n\nb"
        assert sanitize_string("a    b") == "a b"

    def test_empty(self):
        assert sanitize_string(None) == ""
        assert sanitize_string("   ") == ""


class TestSanitizeName:

    def test_collapses_whitespace(self):
        assert sanitize_name("  Jamie \n  Rivera ") == "Jamie Rivera"

    def test_truncates(self):
        assert sanitize_name("x" * 150) == "x" * 100


class TestSanitizeEmail:

    def test_lowercases(self):
        assert sanitize_email("  Pat@Example.COM ") == "pat@example.com"

    def test_rejects_malformed(self):
        assert sanitize_email("not-an-email") is None
        assert sanitize_email("") is None


def test_html_helpers():
    assert strip_html_tags("<b>Go</b> team") == "Go team"
    assert escape_html('<a href="x">') == "&lt;a href=&quot;x&quot;&gt;"
