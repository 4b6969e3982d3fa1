from llmstxt_gen.services.list_parser import (
    is_none_value,
    normalize_whitespace,
    question_key,
    split_list,
)


class TestSplitList:
    def test_newlines_and_commas(self):
        assert split_list("/pricing\n/docs, /about\r\n/blog") == ["/pricing", "/docs", "/about", "/blog"]

    def test_blank_input(self):
        assert split_list(None) == []
        assert split_list("") == []
        assert split_list("  \n ") == []

    def test_drops_none_placeholders(self):
        assert split_list("None") == []
        assert split_list("n/a, /docs, NA") == ["/docs"]

    def test_repeats_keep_first_occurrence(self):
        assert split_list("/a, /b, /a, /c") == ["/a", "/b", "/c"]

    def test_empty_segments_ignored(self):
        assert split_list(",, /docs ,,\n\n") == ["/docs"]


def test_is_none_value_is_case_insensitive():
    assert is_none_value(" N/A ")
    assert is_none_value("none")
    assert not is_none_value("nothing")


def test_question_key_ignores_case_and_punctuation():
    assert question_key("How much does it cost?") == question_key("how much does it COST")


def test_normalize_whitespace():
    assert normalize_whitespace("  a \n\t b  ") == "a b"
    assert normalize_whitespace(None) == ""
