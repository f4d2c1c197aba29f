# hydrakit

A small collection of self-contained helpers.

## Modules

- `hydrakit.xml_tree`: `XmlTree`, an ordered tree of tag nodes and value
  leaves, with node roles given by `NodeType`. `XmlTree.insert()` adds a node
  below a cursor, `erase()` removes a leaf, `clear()` empties the tree,
  `copy()` and `subtree()` make independent copies, and `write()` /
  `to_string()` produce indented XML-like text. Iterating over a tree yields
  its nodes in pre-order. `XmlTreeCursor` marks a position: `advance()` moves
  in pre-order, `descend(tag)` and `ascend()` move down and up, `leaf()`
  returns the value under the current tag and `mapping()` returns a dict of
  single-valued child tags.
- `hydrakit.xml_parser`: `XmlParser`, a state machine fed one `Token` at a
  time through `feed()`, building an `XmlTree` in its `tree` attribute.
  `parse_tokens(tokens, file_name)` runs it over a whole sequence. Malformed
  input, including mismatched closing tags, raises `XmlParseError` with the
  file name, line, column and line text of the offending token.
- `hydrakit.compression`: `decompress(data, output_size)` inflates zlib data
  that must fit in `output_size` bytes, raising `CompressionError` (with a
  zlib-style `code`) on corrupt or oversized input.
- `hydrakit.configurable`: the abstract `Configurable` base class, plus
  `parse_option()` (reads the first word of a value, converted to the type of
  the default) and `parse_string()` (reads the whole value) for
  string-to-string mappings.
- `hydrakit.bits`: fixed-width integer helpers: `is_power_of_two`,
  `mod_power_of_two`, `next_power_of_two`, `ceil_div`, `count_leading_zeros`,
  `popc`, `bfind`, `bit_extract`, `bit_insert`, `brev`, `bfe`,
  `bit_field_insert`, byte selection with `read_byte` / `permute` and
  `PermuteMode`, and wide arithmetic with `multiply_hi_lo`, `add_hi_lo` and
  `add_with_carry`.

## What it does not do

The XML parser works on tokens only. The package has no lexer, so it does not
read XML text or files: callers build `Token` objects themselves. It has no
command-line interface.

## Installing

```
pip install .
```

## Example

```python
from hydrakit.xml_tree import XmlTree, NodeType

tree = XmlTree()
section = tree.insert("section", tree.begin(), NodeType.INTERMEDIATE)
tree.insert("42", section, NodeType.LEAF)
print(tree.to_string())
# <section>
# 	42
# </section>
```

```python
from hydrakit.xml_parser import Token, TokenType, parse_tokens

tokens = [
    Token(TokenType.CARET_OPEN, "<"),
    Token(TokenType.IDENTIFIER, "size"),
    Token(TokenType.CARET_CLOSE, ">"),
    Token(TokenType.IDENTIFIER, "10"),
    Token(TokenType.CARET_OPEN, "<"),
    Token(TokenType.BACKSLASH, "/"),
    Token(TokenType.IDENTIFIER, "size"),
    Token(TokenType.CARET_CLOSE, ">"),
]
tree = parse_tokens(tokens, "example.xml")
tree.begin().descend("size").leaf()   # "10"
```

```python
from hydrakit.bits import popc, brev, next_power_of_two

popc(0b1011)            # 3
brev(1, 8)              # 128
next_power_of_two(17)   # 32
```

## Running the tests

```
pip install .[test]
pytest
```