import threading
import time

import httpx
import pytest
from google.genai import errors as genai_errors
from google.genai import types

from moodboard.config import CallKind, Settings
from moodboard.errors import (
    ConfigurationError,
    ModelConnectionError,
    ModelTimeoutError,
    MoodboardError,
    UpstreamError,
)
from moodboard.gateway import InlineMediaPart, ModelGateway, ModelReply, TextPart
from moodboard.media import InlineMedia

from .fakes import FakeClient, image_response, text_response


def test_invoke_returns_reply_text(settings):
    client = FakeClient(response=text_response('{"roomType": "Kitchen"}'))
    gateway = ModelGateway(settings, client=client)

    assert gateway.invoke("describe") == '{"roomType": "Kitchen"}'
    call = client.models.calls[0]
    assert call["model"] == "gemini-text-test"
    assert call["config"].response_modalities is None
    assert call["config"].http_options.timeout == 60_000


def test_media_goes_first_then_instruction(settings):
    client = FakeClient(response=text_response("{}" * 10))
    gateway = ModelGateway(settings, client=client)

    gateway.invoke("describe", InlineMedia(data=b"\x89PNG...", mime_type="image/png"))

    contents = client.models.calls[0]["contents"]
    assert contents[0].inline_data.mime_type == "image/png"
    assert contents[0].inline_data.data == b"\x89PNG..."
    assert contents[1].text == "describe"


def test_image_call_requests_image_modality(settings):
    client = FakeClient(response=image_response(b"png-bytes"))
    gateway = ModelGateway(settings, client=client)

    reply = gateway.generate(CallKind.IMAGE, "draw")

    call = client.models.calls[0]
    assert call["model"] == "gemini-image-test"
    assert call["config"].response_modalities == ["IMAGE"]
    assert call["config"].temperature == 0.4
    assert call["config"].http_options.timeout == 90_000
    assert reply.first_image().data == b"png-bytes"


def test_deadline_expiry_is_timeout(settings):
    fast = Settings(api_key="k", text_model="m", text_timeout=0.05)
    gateway = ModelGateway(fast, client=FakeClient(response=text_response("late" * 10), delay=1.0))

    t0 = time.monotonic()
    with pytest.raises(ModelTimeoutError):
        gateway.invoke("describe")
    assert time.monotonic() - t0 < 0.9


def test_abandoned_call_does_not_hold_the_process():
    fast = Settings(api_key="k", text_model="m", text_timeout=0.05)
    gateway = ModelGateway(fast, client=FakeClient(response=text_response("late" * 10), delay=1.0))

    with pytest.raises(ModelTimeoutError):
        gateway.invoke("describe")

    workers = [t for t in threading.enumerate() if t.name == "gemini-analysis"]
    assert workers
    assert all(t.daemon for t in workers)


def test_http_timeout_follows_the_call_kind():
    settings = Settings(api_key="k", text_model="t", image_model="i", text_timeout=12, image_timeout=34.5)
    client = FakeClient(response=image_response(b"png"))
    gateway = ModelGateway(settings, client=client)

    gateway.generate(CallKind.ANALYSIS, "describe")
    gateway.generate(CallKind.IMAGE, "draw")

    text_call, image_call = client.models.calls
    assert text_call["config"].http_options.timeout == 12_000
    assert image_call["config"].http_options.timeout == 34_500


def test_unexpected_sdk_failure_is_still_classified(settings):
    gateway = ModelGateway(settings, client=FakeClient(exc=ValueError("bad response payload")))

    with pytest.raises(MoodboardError) as info:
        gateway.invoke("describe")

    assert isinstance(info.value, UpstreamError)
    assert info.value.status == 500
    assert info.value.message == MoodboardError.default_message
    assert "bad response payload" in info.value.body
    assert isinstance(info.value.__cause__, ValueError)


def test_sdk_read_timeout_is_timeout_not_connection_error(settings):
    gateway = ModelGateway(settings, client=FakeClient(exc=httpx.ReadTimeout("read timed out")))
    with pytest.raises(ModelTimeoutError) as info:
        gateway.invoke("describe")
    assert not isinstance(info.value, ModelConnectionError)


def test_connect_timeout_mentions_network_settings(settings):
    gateway = ModelGateway(settings, client=FakeClient(exc=httpx.ConnectTimeout("connect timed out")))
    with pytest.raises(ModelTimeoutError) as info:
        gateway.invoke("describe")
    assert "firewall" in info.value.message
    assert info.value.status == 504


def test_unreachable_service_is_connection_error(settings):
    gateway = ModelGateway(settings, client=FakeClient(exc=httpx.ConnectError("name resolution failed")))
    with pytest.raises(ModelConnectionError) as info:
        gateway.invoke("describe")
    assert info.value.status == 502


def test_non_success_response_is_upstream_error_without_echoing_body(settings):
    exc = genai_errors.ClientError(
        400, {"error": {"code": 400, "message": "API key not valid: secret-detail", "status": "INVALID_ARGUMENT"}}
    )
    gateway = ModelGateway(settings, client=FakeClient(exc=exc))

    with pytest.raises(UpstreamError) as info:
        gateway.invoke("describe")

    assert info.value.upstream_status == 400
    assert "secret-detail" in info.value.body
    assert "secret-detail" not in info.value.message


def test_missing_model_fails_before_any_call():
    client = FakeClient(response=text_response("unused" * 5))
    gateway = ModelGateway(Settings(api_key="k", text_model="m"), client=client)

    with pytest.raises(ConfigurationError):
        gateway.generate(CallKind.IMAGE, "draw")
    assert client.models.calls == []


def test_reply_scans_every_part_for_the_image():
    response = types.GenerateContentResponse(candidates=[
        types.Candidate(content=types.Content(role="model", parts=[
            types.Part(text="Here is your moodboard"),
            types.Part(inline_data=types.Blob(data=b"img", mime_type="image/jpeg")),
        ])),
    ])

    reply = ModelReply.from_response(response)

    assert reply.parts == (TextPart("Here is your moodboard"), InlineMediaPart(b"img", "image/jpeg"))
    assert reply.text == "Here is your moodboard"
    assert reply.first_image().mime_type == "image/jpeg"


def test_reply_tolerates_missing_structure():
    assert ModelReply.from_response(types.GenerateContentResponse()).parts == ()
    assert ModelReply.from_response(object()).text == ""

    empty_candidate = types.GenerateContentResponse(candidates=[types.Candidate()])
    assert ModelReply.from_response(empty_candidate).first_image() is None


def test_reply_skips_thought_parts():
    response = types.GenerateContentResponse(candidates=[
        types.Candidate(content=types.Content(role="model", parts=[
            types.Part(text="thinking about rooms", thought=True),
            types.Part(text='{"roomType": "Foyer"}'),
        ])),
    ])
    assert ModelReply.from_response(response).text == '{"roomType": "Foyer"}'
