"""Utilities: XML tree and token parser, zlib decompression, configuration and bit helpers."""

__version__ = "0.1.0"

__all__ = ["bits", "compression", "configurable", "xml_parser", "xml_tree"]