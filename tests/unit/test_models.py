"""Tests for request, completion and response models."""

import json

import pytest
from pydantic import ValidationError

from gptbridge.models.completion import ChatMessage, ChatRole, CompletionRequest
from gptbridge.models.events import CallbackMention, HandshakeChallenge, Ignored, PlainChat
from gptbridge.models.request import InboundRequest
from gptbridge.utils import responses
from gptbridge.utils.exceptions import MalformedInputError, UpstreamError


class TestInboundRequest:
    """Tests for InboundRequest."""

    def test_from_function_url_event(self, lambda_event):
        request = InboundRequest.from_lambda_event(lambda_event(body={"message": "hi"}))

        assert request.body == '{"message": "hi"}'
        assert request.header("Authorization") == "Bearer test-token"

    def test_base64_body_decoded(self, lambda_event):
        event = lambda_event(body={"message": "héllo"}, base64_encoded=True)

        request = InboundRequest.from_lambda_event(event)

        assert json.loads(request.body) == {"message": "héllo"}

    @pytest.mark.parametrize(
        "event",
        [
            {"body": "%%%not-base64%%%", "isBase64Encoded": True},
            {"body": "aGk", "isBase64Encoded": True},
            {"body": "//4=", "isBase64Encoded": True},
            {"body": {"message": "hi"}},
            {"body": 42},
            {"headers": "authorization: Bearer x", "body": ""},
        ],
    )
    def test_malformed_event_rejected(self, event):
        with pytest.raises(MalformedInputError):
            InboundRequest.from_lambda_event(event)

    def test_missing_headers_and_body(self):
        request = InboundRequest.from_lambda_event({"headers": None, "body": None})

        assert request.headers == {}
        assert request.body == ""
        assert request.is_retry is False

    def test_header_exact_match_preferred(self):
        request = InboundRequest(headers={"X-Test": "a", "x-test": "b"})

        assert request.header("x-test") == "b"
        assert request.header("X-Test") == "a"

    def test_header_default(self):
        assert InboundRequest().header("x-missing", "none") == "none"

    def test_retry_num(self):
        request = InboundRequest(headers={"x-slack-retry-num": "3"})

        assert request.retry_num == "3"
        assert request.is_retry is True


class TestClassifiedEvents:
    """Tests for the classified event variants."""

    @pytest.mark.parametrize(
        "event,kind",
        [
            (HandshakeChallenge(challenge="xyz"), "handshake"),
            (CallbackMention(channel="C1", text="hi"), "mention"),
            (PlainChat(message="hi"), "chat"),
            (Ignored(reason="retry 1"), "ignored"),
        ],
    )
    def test_kind_tags_serialised_output(self, event, kind):
        assert event.model_dump(mode="json")["kind"] == kind


class TestCompletionRequest:
    """Tests for CompletionRequest."""

    def test_build_orders_messages(self):
        request = CompletionRequest.build("gpt-3.5-turbo", "hi", ("persona", "format"))

        assert [m.role for m in request.messages] == [ChatRole.SYSTEM, ChatRole.SYSTEM, ChatRole.USER]
        assert request.to_api_messages()[-1] == {"role": "user", "content": "hi"}

    def test_last_message_must_be_user(self):
        with pytest.raises(ValidationError):
            CompletionRequest(
                model="gpt-3.5-turbo",
                messages=[ChatMessage(role=ChatRole.SYSTEM, content="persona")],
            )

    def test_only_one_user_message(self):
        with pytest.raises(ValidationError):
            CompletionRequest(
                model="gpt-3.5-turbo",
                messages=[
                    ChatMessage(role=ChatRole.USER, content="a"),
                    ChatMessage(role=ChatRole.USER, content="b"),
                ],
            )

    def test_messages_required(self):
        with pytest.raises(ValidationError):
            CompletionRequest(model="gpt-3.5-turbo", messages=[])


class TestResponses:
    """Tests for the Lambda response helpers."""

    def test_success(self):
        response = responses.success({"response": "hello"})

        assert response["statusCode"] == 200
        assert json.loads(response["body"]) == {"response": "hello"}
        assert response["headers"]["Content-Type"] == "application/json"

    def test_text_is_verbatim(self):
        response = responses.text("xyz")

        assert response["body"] == "xyz"
        assert response["headers"]["Content-Type"].startswith("text/plain")

    def test_empty(self):
        assert responses.empty() == {"statusCode": 200, "body": ""}

    def test_from_exception(self):
        response = responses.from_exception(MalformedInputError("bad body"))

        assert response["statusCode"] == 400
        assert json.loads(response["body"]) == {
            "error": True,
            "error_code": "MALFORMED_INPUT",
            "message": "bad body",
        }

    def test_from_upstream_exception(self):
        response = responses.from_exception(UpstreamError("openai", original_error="timeout"))

        body = json.loads(response["body"])
        assert response["statusCode"] == 500
        assert body["details"]["service"] == "openai"

    def test_error(self):
        response = responses.error("Internal server error", 500, "INTERNAL_ERROR")

        assert response["statusCode"] == 500
        assert json.loads(response["body"])["error_code"] == "INTERNAL_ERROR"
