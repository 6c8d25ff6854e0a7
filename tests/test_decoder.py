"""
Tests for Decoder and Encoder composition.
"""

from roundtrip import Decoder, Encoder, Failure, Success, failure, string


def _fails_on_negative(value, context):
    if value < 0:
        return failure(value, context, message="negative")
    return Success(value)


class TestDecoder:
    def test_decode_uses_empty_context(self):
        seen = []
        d = Decoder("spy", lambda v, c: seen.append(c) or Success(v))
        d.decode(1)
        assert seen == [()]

    def test_compose(self):
        double = Decoder("double", lambda v, c: Success(v * 2))
        checked = Decoder("checked", _fails_on_negative)
        assert checked.compose(double).decode(3) == Success(6)
        assert checked.compose(double).decode(-3) == checked.decode(-3)

    def test_compose_name(self):
        assert string.decoder.compose(string.decoder).name == "string >> string"
        assert string.decoder.compose(string.decoder, "s").name == "s"

    def test_map(self):
        assert string.decoder.map(len).decode("abc") == Success(3)
        assert isinstance(string.decoder.map(len).decode(1), Failure)

    def test_deterministic(self):
        assert string.decoder.decode(1) == string.decoder.decode(1)


class TestEncoder:
    def test_identity(self):
        assert Encoder.identity().encode([1]) == [1]

    def test_compose_runs_self_first(self):
        to_str = Encoder("to_str", str)
        exclaim = Encoder("exclaim", lambda s: s + "!")
        assert to_str.compose(exclaim).encode(5) == "5!"
        assert to_str.compose(exclaim).name == "to_str >> exclaim"
