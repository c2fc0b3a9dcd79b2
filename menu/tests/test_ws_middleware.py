from menu.ws_middleware import token_from_scope


def test_token_from_query_string():
    scope = {"query_string": b"token=abc.def&x=1", "headers": [(b"authorization", b"Bearer other")]}

    assert token_from_scope(scope) == "abc.def"


def test_token_from_authorization_header():
    scope = {"query_string": b"", "headers": [(b"host", b"localhost"), (b"authorization", b"Bearer abc.def")]}

    assert token_from_scope(scope) == "abc.def"


def test_no_token():
    assert token_from_scope({"query_string": b"", "headers": [(b"authorization", b"Basic xyz")]}) is None
    assert token_from_scope({}) is None
