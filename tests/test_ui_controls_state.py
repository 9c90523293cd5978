from gringotts.dashboard.components.controls import coerce_option


def test_coerce_option_prefers_existing_value() -> None:
    options = [1, 2, 3]
    assert coerce_option(2, options, 1) == 2


def test_coerce_option_falls_back_to_default_then_first() -> None:
    options = ['D', 'W', 'MS']
    assert coerce_option('X', options, 'W') == 'W'
    assert coerce_option('X', options, 'Y') == 'D'
    assert coerce_option(None, [], 'D') == 'D'
