from threadio.config import config_key_value_pairs


def test_empty_config():
    assert config_key_value_pairs("") == {}


def test_single_item_no_value():
    assert list(config_key_value_pairs("foo").items()) == [("foo", "")]


def test_single_item_with_value():
    assert list(config_key_value_pairs("foo=3").items()) == [("foo", "3")]


def test_single_item_with_empty_value():
    assert list(config_key_value_pairs("foo=").items()) == [("foo", "")]


def test_two_items_no_values():
    assert list(config_key_value_pairs("foo:bar").items()) == [("bar", ""), ("foo", "")]


def test_two_items_with_values():
    assert list(config_key_value_pairs("foo=3:bar=cat").items()) == [
        ("bar", "cat"),
        ("foo", "3"),
    ]


def test_first_with_value_second_without():
    assert list(config_key_value_pairs("foo=3:bar").items()) == [("bar", ""), ("foo", "3")]


def test_first_without_value_second_with():
    assert list(config_key_value_pairs("foo:bar=cat").items()) == [
        ("bar", "cat"),
        ("foo", ""),
    ]


def test_first_entry_with_dot_is_file_name():
    assert config_key_value_pairs("data.pds:level=2") == {
        "fileName": "data.pds",
        "level": "2",
    }


def test_later_entry_with_dot_is_plain_key():
    assert config_key_value_pairs("a:b.c") == {"a": "", "b.c": ""}


def test_stops_at_empty_entry():
    assert config_key_value_pairs("a::b") == {"a": ""}