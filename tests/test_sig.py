from urllib.parse import parse_qs, urlparse

import pytest

from vidinfo.core import sig
from vidinfo.core.errors import DecipherError
from vidinfo.core.models import InfoOptions

from conftest import PLAYER_JS, FakeTransport, cipher

PLAYER_URL = "https://www.youtube.com/s/player/abc/base.js"


def test_extract_actions():
    assert sig.extract_actions(PLAYER_JS) == ["w3", "r", "p2"]


def test_extract_actions_bracket_calls():
    js = PLAYER_JS.replace('Xy.ab(a,7)', 'Xy["ab"](a,7)')
    assert sig.extract_actions(js) == ["w3", "r", "p2"]


def test_extract_actions_unknown_script():
    assert sig.extract_actions("function(){return 1}") is None


def test_decipher():
    assert sig.decipher(["w3", "r", "p2"], "abcdefghij") == "hgfeacbd"
    assert sig.decipher(["s3"], "abcdef") == "def"
    assert sig.decipher([], "abc") == "abc"


def test_get_tokens_cached_per_player():
    transport = FakeTransport({PLAYER_URL: PLAYER_JS})
    assert sig.get_tokens(PLAYER_URL, InfoOptions(), transport) == ["w3", "r", "p2"]
    sig.get_tokens(PLAYER_URL, InfoOptions(), transport)
    assert transport.count(PLAYER_URL) == 1


def test_get_tokens_unknown_player():
    transport = FakeTransport({PLAYER_URL: "var a = 1;"})
    with pytest.raises(DecipherError):
        sig.get_tokens(PLAYER_URL, InfoOptions(), transport)


class TestDecipherFormats:
    def test_ciphered_format(self):
        fmt = {"itag": 18, "signatureCipher": cipher("https://host/videoplayback?itag=18", "abcdefghij")}
        [result] = sig.decipher_formats([fmt], ["w3", "r", "p2"])

        query = parse_qs(urlparse(result["url"]).query)
        assert query["sig"] == ["hgfeacbd"]
        assert query["ratebypass"] == ["yes"]
        assert "signatureCipher" not in result
        assert "signatureCipher" in fmt

    def test_default_signature_param(self):
        fmt = {"itag": 22, "cipher": "s=xyz&url=https%3A%2F%2Fhost%2Fv"}
        [result] = sig.decipher_formats([fmt], ["r"])
        assert parse_qs(urlparse(result["url"]).query)["signature"] == ["zyx"]

    def test_plain_url_keeps_params(self):
        fmt = {"itag": 140, "url": "https://host/v?itag=140&ratebypass=yes"}
        [result] = sig.decipher_formats([fmt], ["r"])
        assert result == fmt
        assert result is not fmt

    def test_format_without_url(self):
        fmt = {"itag": 5}
        assert sig.decipher_formats([fmt], []) == [fmt]
