"""Test console formatting helpers.

Run:
    pytest tests/test_utils.py -v
"""

from allrgb.utils import format_duration, key_value_pairs_to_string, print_config_line


def test_format_duration():
    assert format_duration(0.25) == "250.0ms"
    assert format_duration(12.3456) == "12.346s"
    assert format_duration(187.2) == "3m 07.2s"


def test_key_value_pairs():
    line = key_value_pairs_to_string(
        [("Seed", "42"), ("Orient", False), ("Swaps", 12345), ("RMS", 3.14159)]
    )
    assert line == "Seed: 42  Orient: off  Swaps: 12,345  RMS: 3.142"


def test_config_line_routes_to_debug(capsys):
    print_config_line("run", [("Ascending", True)], debug=True)
    assert capsys.readouterr().out == "[debug] [run] Ascending: on\n"
