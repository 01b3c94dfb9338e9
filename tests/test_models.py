from __future__ import annotations

from core.domain.models import BlogInfo, Envelope, Post, ResponseMeta


def test_envelope_ok_reflects_meta_status() -> None:
    assert Envelope[dict](meta=ResponseMeta(status=200, msg="OK")).ok
    assert Envelope[dict](meta=ResponseMeta(status=201)).ok
    assert not Envelope[dict](meta=ResponseMeta(status=404, msg="Not Found")).ok
    assert not Envelope[dict]().ok


def test_envelope_ignores_unknown_top_level_keys() -> None:
    raw = '{"meta": {"status": 200, "msg": "OK"}, "response": {"blog": {"name": "x"}}, "extra": 1}'

    envelope = Envelope[BlogInfo].model_validate_json(raw)

    assert envelope.response.blog.name == "x"
    assert envelope.http_response is None
    assert envelope.errors == []


def test_post_keeps_type_specific_fields() -> None:
    post = Post.model_validate({"id": 3, "type": "quote", "text": "hello", "source": "me"})

    assert post.type == "quote"
    assert post.model_extra == {"text": "hello", "source": "me"}
    assert post.tags == []


def test_envelope_redirect_status_is_ok() -> None:
    assert Envelope[dict](meta=ResponseMeta(status=301, msg="Moved Permanently")).ok


def test_error_envelope_empty_list_becomes_none() -> None:
    raw = '{"meta": {"status": 401, "msg": "Unauthorized"}, "response": []}'

    envelope = Envelope[BlogInfo].model_validate_json(raw)

    assert envelope.response is None
    assert envelope.meta.status == 401
