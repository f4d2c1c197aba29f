import re

import pytest

from hydrakit.xml_parser import (
    Token,
    TokenType,
    XmlParseError,
    XmlParser,
    parse_tokens,
)
from hydrakit.xml_tree import NodeType, XmlTree

_KINDS = {"<": TokenType.CARET_OPEN, ">": TokenType.CARET_CLOSE, "/": TokenType.BACKSLASH}


def tokenize(text):
    tokens = []
    for number, line in enumerate(text.splitlines(), start=1):
        for match in re.finditer(r"[<>/]|[^\s<>/]+", line):
            kind = _KINDS.get(match.group(), TokenType.IDENTIFIER)
            tokens.append(
                Token(kind, match.group(), number, match.start() + 1, line)
            )
    return tokens


def test_round_trip_through_text():
    tree = XmlTree()
    config = tree.insert("config", tree.begin(), NodeType.INTERMEDIATE)
    width = tree.insert("width", config, NodeType.INTERMEDIATE)
    tree.insert("42", width, NodeType.LEAF)
    inner = tree.insert("inner", config, NodeType.INTERMEDIATE)
    depth = tree.insert("depth", inner, NodeType.INTERMEDIATE)
    tree.insert("7", depth, NodeType.LEAF)
    text = tree.to_string()

    parsed = parse_tokens(tokenize(text), "sample.xml")
    assert parsed.to_string() == text


def test_root_carries_file_name():
    parsed = parse_tokens(tokenize("<a> 1 </a>"), "settings.xml")
    assert parsed.begin().node.identifier == "settings.xml"


def test_values_reachable_by_descending():
    parsed = parse_tokens(tokenize("<a> <b> 5 </b> <c> 6 </c> </a>"), "f")
    cursor = parsed.begin().descend("a").descend("b")
    assert cursor.leaf() == "5"
    assert parsed.begin().descend("a").mapping() == {"b": "5", "c": "6"}


def test_several_top_level_elements():
    parsed = parse_tokens(tokenize("<x> 1 </x>\n<y> 2 </y>"), "f")
    assert parsed.begin().descend("x").leaf() == "1"
    assert parsed.begin().descend("y").leaf() == "2"


def test_feed_incrementally_matches_parse_tokens():
    tokens = tokenize("<a> <b> 3 </b> </a>")
    parser = XmlParser("f")
    for token in tokens:
        parser.feed(token)
    assert parser.tree.to_string() == parse_tokens(tokens, "f").to_string()


def test_document_must_start_with_caret():
    with pytest.raises(XmlParseError, match="Expecting '<'"):
        parse_tokens(tokenize("a"), "doc.xml")


def test_error_names_file_and_offending_text():
    with pytest.raises(XmlParseError) as info:
        parse_tokens(tokenize("<a <"), "doc.xml")
    message = str(info.value)
    assert message.startswith("doc.xml( 1, 4 )")
    assert "Expecting '>'" in message
    assert message.endswith("\t<a <")


def test_tag_mismatch():
    with pytest.raises(XmlParseError, match="Tag mismatch - original was 'a'"):
        parse_tokens(tokenize("<a> 1 </b>"), "doc.xml")


def test_value_must_be_followed_by_tag():
    with pytest.raises(XmlParseError, match="Expecting '<'"):
        parse_tokens(tokenize("<a> 1 2 </a>"), "doc.xml")


def test_second_value_in_same_tag_is_rejected():
    with pytest.raises(XmlParseError):
        parse_tokens(tokenize("<a> 1 <b> 2 </b> 3 </a>"), "doc.xml")


def test_closing_needs_identifier():
    with pytest.raises(XmlParseError, match="Expecting IDENTIFIER"):
        parse_tokens(tokenize("<a> </ >"), "doc.xml")