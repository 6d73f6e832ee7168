"""Unit tests for the streaming JSON writer."""

import io
import json

import pytest

from content_search.errors import FormattingFailure
from content_search.formatting.json_writer import JSONWriter


def test_nested_document():
    buf = io.StringIO()
    w = JSONWriter(buf)
    w.object().key("items").value(2).key("results").array()
    w.write_value_map({"a": 1})
    w.object().key("b").value([1, "two", None]).end_object()
    w.end_array().end_object()
    assert json.loads(buf.getvalue()) == {"items": 2, "results": [{"a": 1}, {"b": [1, "two", None]}]}


def test_empty_containers():
    buf = io.StringIO()
    JSONWriter(buf).object().key("results").array().end_array().end_object()
    assert buf.getvalue() == '{"results":[]}'


def test_unicode_is_kept():
    buf = io.StringIO()
    JSONWriter(buf).write_value_map({"title": "Café"})
    assert buf.getvalue() == '{"title":"Café"}'


class TestMisuse:
    def test_value_without_key_in_object(self):
        w = JSONWriter(io.StringIO()).object()
        with pytest.raises(FormattingFailure):
            w.value(1)

    def test_key_outside_object(self):
        w = JSONWriter(io.StringIO()).array()
        with pytest.raises(FormattingFailure):
            w.key("x")

    def test_unbalanced_end(self):
        w = JSONWriter(io.StringIO()).array()
        with pytest.raises(FormattingFailure):
            w.end_object()

    def test_second_top_level_value(self):
        w = JSONWriter(io.StringIO()).value(1)
        with pytest.raises(FormattingFailure):
            w.value(2)

    def test_dangling_key(self):
        w = JSONWriter(io.StringIO()).object().key("x")
        with pytest.raises(FormattingFailure):
            w.end_object()

    def test_unserializable_and_nan_values(self):
        w = JSONWriter(io.StringIO()).array()
        with pytest.raises(FormattingFailure):
            w.value({1, 2})
        with pytest.raises(FormattingFailure):
            w.value(float("nan"))
