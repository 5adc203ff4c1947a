"""
Settings tests

Tests marker configuration through AppSettings and the environment.
"""

from buildjs.config import AppSettings, appsettings
from buildjs.lib.builder import Builder


class TestMarkers:
    """Test block marker configuration"""

    def test_defaults(self):
        """Default markers are /*buildjs and */"""
        assert appsettings.open_marker == "/*buildjs"
        assert appsettings.close_marker == "*/"
        assert appsettings.encoding == "utf-8"

    def test_environment_override(self, monkeypatch):
        """BUILDJS_ prefixed variables override defaults"""
        monkeypatch.setenv("BUILDJS_OPEN_MARKER", "<!--buildjs")
        monkeypatch.setenv("BUILDJS_CLOSE_MARKER", "-->")
        settings = AppSettings()
        assert settings.open_marker == "<!--buildjs"
        assert settings.close_marker == "-->"

    def test_pattern_escapes_markers(self):
        """Markers are matched literally"""
        pattern = AppSettings(open_marker="[[", close_marker="]]").blockPattern_make()
        match = pattern.search("a [[ @def x y ]] b")
        assert match.group("body") == " @def x y "
        assert pattern.search("a (( @def x y )) b") is None

    def test_custom_markers_in_build(self, source_tree):
        """A builder with custom markers ignores the default ones"""
        settings = AppSettings(open_marker="<!--buildjs", close_marker="-->")
        root = source_tree({
            "page.html": "<!--buildjs @inc part.html -->/*buildjs @bogus */",
            "part.html": "<!--buildjs @def T Title -->T",
        })
        assert Builder(settings=settings).build(root / "page.html") == "Title/*buildjs @bogus */"
