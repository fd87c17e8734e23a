"""
Unit tests for the API Gateway wrapper.
"""

import base64
import unittest

from fixtures import (
    CURRENT_GET_HEADER,
    CURRENT_POST_HEADER,
    JSON_BODY,
    JSON_BODY_SHA256,
    PIPET_CREDENTIAL,
    PIPET_ID,
    PIPET_PARAMS,
    SYSTEM_TIME,
    current_get_request,
)
from http_hmac.credentials import CredentialStore
from http_hmac.current import CurrentProtocol, normalize_query
from http_hmac.errors import ErrorType
from http_hmac.gateway import ERROR_RESPONSES, request_from_event, validate_api_gateway_event
from http_hmac.legacy import LegacyProtocol
from http_hmac.registry import VersionRegistry
from http_hmac.signer import sign_request
from http_hmac.verifier import Verifier


class TestApiGatewayValidation(unittest.TestCase):
    """Test validation of API Gateway events."""

    def setUp(self):
        self.store = CredentialStore({PIPET_ID: PIPET_CREDENTIAL.secret})
        self.verifier = Verifier(
            registry=VersionRegistry((LegacyProtocol(), CurrentProtocol())),
            timestamp_tolerance=900,
            clock=lambda: SYSTEM_TIME,
        )

    def create_test_event(self, auth_header, body=JSON_BODY, **overrides):
        """Helper to create API Gateway event."""
        event = {
            "httpMethod": "POST",
            "path": "/v1.0/task/",
            "headers": {
                "Accept": "*/*",
                "Authorization": auth_header,
                "Content-Type": "application/json",
                "Host": "example.acquiapipet.net",
                "X-Authorization-Timestamp": str(SYSTEM_TIME),
                "X-Authorization-Content-SHA256": JSON_BODY_SHA256,
            },
            "queryStringParameters": None,
            "body": body,
            "isBase64Encoded": False,
        }
        event.update(overrides)
        return event

    def test_valid_post(self):
        result = validate_api_gateway_event(self.create_test_event(CURRENT_POST_HEADER), self.store, self.verifier)

        self.assertTrue(result is True)

    def test_valid_get_with_query(self):
        event = self.create_test_event(
            CURRENT_GET_HEADER,
            body=None,
            httpMethod="GET",
            path="/v1.0/task-status/133",
            queryStringParameters={"limit": "10"},
        )
        del event["headers"]["X-Authorization-Content-SHA256"]

        result = validate_api_gateway_event(event, self.store, self.verifier)

        self.assertTrue(result is True, result)

    def test_repeated_query_keys(self):
        """Test that every value of a repeated query key is verified."""
        request = current_get_request()
        signed = type(request)(
            method="GET",
            host=request.host,
            path="/v1.0/task-status/133",
            query="tag=a&tag=b&limit=10",
            headers=request.headers,
        )
        _, header = sign_request(signed, PIPET_CREDENTIAL, PIPET_PARAMS, registry=self.verifier.registry)
        event = self.create_test_event(
            header,
            body=None,
            httpMethod="GET",
            path="/v1.0/task-status/133",
            queryStringParameters={"tag": "b", "limit": "10"},
            multiValueQueryStringParameters={"tag": ["a", "b"], "limit": ["10"]},
        )
        del event["headers"]["X-Authorization-Content-SHA256"]

        self.assertEqual(normalize_query(request_from_event(event).query), "limit=10&tag=a&tag=b")
        self.assertTrue(validate_api_gateway_event(event, self.store, self.verifier) is True)

    def test_base64_body(self):
        event = self.create_test_event(
            CURRENT_POST_HEADER,
            body=base64.b64encode(JSON_BODY.encode("utf-8")).decode("ascii"),
            isBase64Encoded=True,
        )

        self.assertTrue(validate_api_gateway_event(event, self.store, self.verifier) is True)

    def test_missing_authorization_header(self):
        event = self.create_test_event(None)

        result = validate_api_gateway_event(event, self.store, self.verifier)

        self.assertEqual(result["statusCode"], 401)
        self.assertTrue(result["body"].startswith("Invalid Authorization header"))

    def test_invalid_signature(self):
        event = self.create_test_event(CURRENT_POST_HEADER.replace("XDBa", "XDBb"))

        result = validate_api_gateway_event(event, self.store, self.verifier)

        self.assertEqual(result["statusCode"], 401)
        self.assertIn("Signature mismatch", result["body"])

    def test_request_from_event(self):
        request = request_from_event(self.create_test_event(CURRENT_POST_HEADER))

        self.assertEqual(request.method, "POST")
        self.assertEqual(request.host, "example.acquiapipet.net")
        self.assertEqual(request.body, JSON_BODY.encode("utf-8"))
        self.assertNotIn("Authorization", request_from_event(self.create_test_event(None)).headers)

    def test_every_error_type_has_a_response(self):
        self.assertEqual(set(ERROR_RESPONSES), set(ErrorType))


if __name__ == "__main__":
    unittest.main()
