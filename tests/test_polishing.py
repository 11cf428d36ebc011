import asyncio
import json
import time

import httpx

from newwork.services.polishing import FeedbackPolisher, fallback_polish

URL = "https://polish.invalid/models/gpt2"


def polisher_with(handler, **kwargs):
    return FeedbackPolisher(URL, transport=httpx.MockTransport(handler), **kwargs)


def run(polisher, content="  great work on the release  "):
    return asyncio.run(polisher.polish(content))


def test_generated_text_is_returned():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=[{"generated_text": " Great work on the release. "}])

    result = run(polisher_with(handler, api_token="hf_123", max_length=150))

    assert result == "Great work on the release."
    assert seen["auth"] == "Bearer hf_123"
    assert seen["body"]["parameters"]["max_length"] == 150
    assert "great work on the release" in seen["body"]["inputs"]


def test_missing_token_sends_no_authorization_header():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[{"generated_text": "ok"}])

    run(polisher_with(handler))
    assert seen["auth"] is None


def test_fallback_marks_original_text():
    assert fallback_polish("  good job ") == "[AI-Polished] good job"


def test_error_status_falls_back():
    result = run(polisher_with(lambda request: httpx.Response(503, json={"error": "loading"})))
    assert result == "[AI-Polished] great work on the release"


def test_invalid_json_falls_back():
    result = run(polisher_with(lambda request: httpx.Response(200, content=b"<html>")))
    assert result == "[AI-Polished] great work on the release"


def test_unexpected_shape_falls_back():
    result = run(polisher_with(lambda request: httpx.Response(200, json={"generated_text": "x"})))
    assert result == "[AI-Polished] great work on the release"


def test_empty_generated_text_falls_back():
    result = run(polisher_with(lambda request: httpx.Response(200, json=[{"generated_text": "  "}])))
    assert result == "[AI-Polished] great work on the release"


def test_timeout_falls_back():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    assert run(polisher_with(handler, timeout=0.1)) == "[AI-Polished] great work on the release"


def test_slow_body_hits_the_overall_deadline():
    async def trickle():
        yield b"["
        for _ in range(100):
            await asyncio.sleep(0.05)
            yield b" "
        yield b"{\"generated_text\": \"slow\"}]"

    polisher = polisher_with(lambda request: httpx.Response(200, content=trickle()), timeout=0.2)
    started = time.monotonic()
    result = run(polisher)

    assert result == "[AI-Polished] great work on the release"
    assert time.monotonic() - started < 2


def test_network_error_falls_back():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    assert run(polisher_with(handler)) == "[AI-Polished] great work on the release"


def test_disabled_backend_never_calls_out():
    def handler(request):
        raise AssertionError("should not be called")

    polisher = FeedbackPolisher("", transport=httpx.MockTransport(handler))
    assert run(polisher) == "[AI-Polished] great work on the release"
