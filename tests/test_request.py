"""
Request parsing.
"""

import pytest

from nexaform.core.request import Headers, Request, parse_nested, split_field_name
from nexaform.forms.form import Form


def scope(method="POST", query=b"", headers=None, path="/signup"):
    return {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query,
        "headers": headers or [],
    }


@pytest.mark.parametrize(
    "name, keys",
    [
        ("email", ["email"]),
        ("user[name]", ["user", "name"]),
        ("user[address][city]", ["user", "address", "city"]),
        ("tags[]", ["tags", ""]),
        ("[x]", ["[x]"]),
        ("user[name", ["user[name"]),
        ("user[a]b", ["user[a]b"]),
    ],
)
def test_split_field_name(name, keys):
    assert split_field_name(name) == keys


class TestParseNested:
    def test_nested_maps(self):
        pairs = [("user[name]", "Ann"), ("user[address][city]", "Oslo"), ("terms", "1")]

        assert parse_nested(pairs) == {
            "user": {"name": "Ann", "address": {"city": "Oslo"}},
            "terms": "1",
        }

    def test_appended_lists(self):
        pairs = [("tags[]", "a"), ("tags[]", "b"), ("rows[][id]", "1"), ("rows[][id]", "2")]

        assert parse_nested(pairs) == {
            "tags": ["a", "b"],
            "rows": [{"id": "1"}, {"id": "2"}],
        }

    def test_later_value_wins(self):
        assert parse_nested([("q", "a"), ("q", "b")]) == {"q": "b"}

    def test_explicit_indexes_become_list(self):
        assert parse_nested([("n[0]", "x"), ("n[1]", "y")]) == {"n": ["x", "y"]}

    def test_sparse_indexes_stay_a_map(self):
        assert parse_nested([("n[0]", "x"), ("n[5]", "y")]) == {"n": {"0": "x", "5": "y"}}


class TestRequest:
    def test_query_payload(self):
        request = Request(scope(method="GET", query=b"q=books&filter[year]=2020&page="))

        assert request.all_query() == {"q": "books", "filter": {"year": "2020"}, "page": ""}
        assert request.get_query("q") == "books"
        assert request.get_query("missing", "x") == "x"
        assert request.query.get_list("q") == ["books"]

    def test_urlencoded_body(self):
        request = Request(
            scope(headers=[(b"content-type", b"application/x-www-form-urlencoded")]),
            b"formId=signup&user%5Bname%5D=Ann+Lee",
        )

        assert request.all_post() == {"formId": "signup", "user": {"name": "Ann Lee"}}

    def test_json_body(self):
        request = Request(
            scope(headers=[(b"content-type", b"application/json")]),
            b'{"user": {"name": "Ann"}}',
        )

        assert request.all_post() == {"user": {"name": "Ann"}}

    def test_json_array_body_is_ignored(self):
        request = Request(scope(headers=[(b"content-type", b"application/json")]), b"[1, 2]")

        assert request.all_post() == {}

    def test_other_body_types_are_ignored(self):
        request = Request(scope(headers=[(b"content-type", b"multipart/form-data; boundary=x")]), b"--x")

        assert request.all_post() == {}

    def test_empty_body(self):
        assert Request(scope()).all_post() == {}

    def test_method_and_path(self):
        request = Request(scope(method="post", path="/a"))

        assert request.method == "POST"
        assert request.path == "/a"
        assert repr(request) == "<Request POST /a>"

    def test_is_ajax(self):
        request = Request(scope(headers=[(b"X-Requested-With", b"XMLHttpRequest")]))

        assert request.is_ajax
        assert not Request(scope()).is_ajax

    def test_is_ajax_form(self):
        request = Request(scope(query=b"ajax=form&form=signup"))

        assert request.is_ajax_form("signup")
        assert not request.is_ajax_form("login")
        assert not request.is_ajax_form(None)
        assert not Request(scope(query=b"form=signup")).is_ajax_form("signup")

    def test_state_is_per_request(self):
        first, second = Request(scope()), Request(scope())
        first.state["x"] = 1

        assert second.state == {}


class TestFromData:
    def test_method_follows_payload(self):
        assert Request.from_data(post={"a": "1"}).method == "POST"
        assert Request.from_data(query={"a": "1"}).method == "GET"
        assert Request.from_data(method="put").method == "PUT"

    def test_payloads(self):
        request = Request.from_data(query={"ajax": "form"}, post={"user": {"name": "Ann"}})

        assert request.all_post() == {"user": {"name": "Ann"}}
        assert request.get_query("ajax") == "form"
        assert request.query.get("ajax") == "form"

    def test_headers(self):
        request = Request.from_data(headers={"X-Requested-With": "XMLHttpRequest"})

        assert request.is_ajax


@pytest.mark.asyncio
async def test_from_scope_reads_chunks():
    messages = [
        {"type": "http.request", "body": b"user%5Bname%5D=", "more_body": True},
        {"type": "http.request", "body": b"Ann", "more_body": False},
    ]

    async def receive():
        return messages.pop(0)

    request = await Request.from_scope(scope(), receive)

    assert request.body == b"user%5Bname%5D=Ann"
    assert request.all_post() == {"user": {"name": "Ann"}}


@pytest.mark.asyncio
async def test_from_scope_disconnect():
    async def receive():
        return {"type": "http.disconnect"}

    with pytest.raises(RuntimeError):
        await Request.from_scope(scope(), receive)


def test_headers_are_case_insensitive():
    headers = Headers([(b"Content-Type", b"text/html"), ("X-Custom", "1")])

    assert headers["content-type"] == "text/html"
    assert headers.get("x-custom") == "1"
    assert "CONTENT-TYPE" in headers
    assert headers.to_dict() == {"content-type": "text/html", "x-custom": "1"}


class TestUnusableBodies:
    def test_malformed_json(self):
        request = Request(scope(headers=[(b"content-type", b"application/json")]), b"{not json")

        assert request.all_post() == {}

    def test_non_utf8_urlencoded_body(self):
        request = Request(
            scope(headers=[(b"content-type", b"application/x-www-form-urlencoded")]),
            b"name=\xff\xfe&city=Oslo",
        )

        payload = request.all_post()

        assert payload["city"] == "Oslo"
        assert payload["name"] == "\ufffd\ufffd"

    def test_non_utf8_query_string(self):
        request = Request(scope(method="GET", query=b"q=\xff&page=2"))

        assert request.get_query("page") == "2"

    def test_form_builds_on_malformed_json(self):
        request = Request(scope(headers=[(b"content-type", b"application/json")]), b"{not json")
        form = Form(request, form_id="f1")
        form.fields.add_input("name")

        assert form.validate({"name": ["required"]}) is False
        assert 'name="name"' in form.render()
