from xrobotstag.utils.url import encode_url, is_valid_url, normalize_url


def test_normalize_url_defaults():
    assert normalize_url("example.com") == "http://example.com/"
    assert normalize_url("HTTPS://Example.com/Path?q=1") == "https://example.com/Path?q=1"


def test_encode_url():
    assert encode_url("http://example.com/a b") == "http://example.com/a%20b"
    assert encode_url("http://example.com/a%20b") == "http://example.com/a%20b"
    assert encode_url("http://bücher.example/") == "http://xn--bcher-kva.example/"


def test_is_valid_url():
    assert is_valid_url("http://example.com/")
    assert is_valid_url("https://example.com:8443/x?y=1")
    assert not is_valid_url("ftp://example.com/")
    assert not is_valid_url("not a url")
    assert not is_valid_url("http://")
    assert not is_valid_url("http://example..com/")
    assert not is_valid_url("http://example.com:99999/")
