import pytest

from hydrakit.configurable import Configurable, parse_option, parse_string


class Widget(Configurable):
    def __init__(self):
        self.width = 0
        self.scale = 0.0
        self.verbose = False
        self.label = ""

    def configure(self, configuration):
        self.width = parse_option(configuration, "width", 10)
        self.scale = parse_option(configuration, "scale", 1.5)
        self.verbose = parse_option(configuration, "verbose", False)
        self.label = parse_string(configuration, "label", "none")


def test_configure_reads_values():
    configuration = {"width": "64", "scale": "0.25", "verbose": "1", "label": "a b"}
    assert parse_option(configuration, "width", 10) == 64
    assert parse_option(configuration, "scale", 1.5) == 0.25
    assert parse_option(configuration, "verbose", False) is True
    assert parse_string(configuration, "label", "none") == "a b"
    widget = Widget()
    widget.configure(configuration)
    assert (widget.width, widget.scale, widget.verbose, widget.label) == (
        64,
        0.25,
        True,
        "a b",
    )


def test_configure_uses_defaults():
    assert parse_option({}, "width", 10) == 10
    assert parse_option({}, "scale", 1.5) == 1.5
    assert parse_option({}, "verbose", False) is False
    assert parse_string({}, "label", "none") == "none"
    widget = Widget()
    widget.configure({})
    assert (widget.width, widget.scale, widget.verbose, widget.label) == (
        10,
        1.5,
        False,
        "none",
    )


def test_configurable_is_abstract():
    with pytest.raises(TypeError):
        Configurable()


def test_parse_option_string_takes_first_word():
    assert parse_option({"name": "first second"}, "name", "x") == "first"


def test_parse_string_keeps_whole_value():
    assert parse_string({"name": "first second"}, "name", "x") == "first second"


def test_parse_option_ignores_trailing_words():
    assert parse_option({"count": " 7 extra"}, "count", 0) == 7


def test_parse_option_false_value():
    assert parse_option({"flag": "0"}, "flag", True) is False


def test_parse_option_bad_number():
    with pytest.raises(ValueError):
        parse_option({"count": "many"}, "count", 0)


def test_parse_option_bad_bool():
    with pytest.raises(ValueError):
        parse_option({"flag": "maybe"}, "flag", False)


def test_parse_option_empty_value():
    with pytest.raises(ValueError):
        parse_option({"count": "   "}, "count", 3)