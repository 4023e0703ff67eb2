import pytest
from guidekit.samples.filters import filter_build_script, is_build_script, split_lines, strip_tag_markers


class TestSplitLines:
    def test_trailing_terminator_adds_no_empty_line(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_inner_blank_lines_are_kept(self):
        assert split_lines("a\n\nb") == ["a", "", "b"]

    def test_all_terminator_styles(self):
        assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]

    def test_empty_text(self):
        assert split_lines("") == []


class TestStripTagMarkers:
    def test_drops_tag_and_end_lines_only(self):
        text = "// tag::x[]\nfoo\n// end::x[]\nbar"
        assert strip_tag_markers(text) == "foo\nbar\n"

    def test_indented_markers_are_dropped(self):
        text = "plugins {\n    // tag::java[]\n    id('java')\n    // end::java[]\n}\n"
        assert strip_tag_markers(text) == "plugins {\n    id('java')\n}\n"

    def test_marker_after_code_drops_whole_line(self):
        assert strip_tag_markers("apply plugin: 'java' // tag::apply[]\nrest\n") == "rest\n"

    def test_text_without_comment_prefix_is_kept(self):
        text = "println 'tag::x[]'\n"
        assert strip_tag_markers(text) == text

    def test_crlf_is_normalized_to_lf(self):
        assert strip_tag_markers("a\r\n// end::a[]\r\nb\r\n") == "a\nb\n"

    def test_blank_lines_are_preserved_in_order(self):
        assert strip_tag_markers("a\n\n// tag::t[]\n\nb\n") == "a\n\n\nb\n"

    def test_only_markers_gives_empty_text(self):
        assert strip_tag_markers("// tag::a[]\n// end::a[]\n") == ""


class TestBuildScripts:
    @pytest.mark.parametrize("name", ["build.gradle", "settings.gradle", "build.gradle.kts", "settings.gradle.kts"])
    def test_recognized_names(self, name):
        assert is_build_script(name)

    @pytest.mark.parametrize("name", ["Build.gradle", "build.gradle.bak", "gradle.properties", "init.gradle"])
    def test_other_names(self, name):
        assert not is_build_script(name)

    def test_filter_round_trips_utf8(self):
        data = "// tag::x[]\ndescription = 'Grüße'\n// end::x[]\n".encode("utf-8")
        assert filter_build_script(data) == "description = 'Grüße'\n".encode("utf-8")

    def test_invalid_utf8_raises(self):
        with pytest.raises(UnicodeDecodeError):
            filter_build_script(b"\xff\xfe\x00")
