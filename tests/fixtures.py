"""
Reference requests and signatures shared by the test modules.
"""

from http_hmac.models import AuthParameters, Credential, Headers, SignableRequest, SignableResponse

SYSTEM_TIME = 1432075982

LEGACY_ID = "efdde334-fe7b-11e4-a322-1697f925ec7b"
LEGACY_CREDENTIAL = Credential(id=LEGACY_ID, secret="secret-key")

PIPET_ID = "efdde334-fe7b-11e4-a322-1697f925ec7b"
PIPET_NONCE = "d1954337-5319-4821-8427-115542e08d10"
PIPET_CREDENTIAL = Credential(id=PIPET_ID, secret="W5PeGMxSItNerkNFqQMfYiJvH14WzVJMy54CPoTAYoI=")
PIPET_PARAMS = AuthParameters(id=PIPET_ID, realm="Pipet service", nonce=PIPET_NONCE, version="2.0")

JSON_BODY = '{"method":"hi.bob","params":["5","4","8"]}'
JSON_BODY_SHA256 = "6paRNxUA7WawFxJpRp4cEixDjHq3jfIKX072k9slalo="

LEGACY_GET_SIGNATURE = "7Tq3+JP3lAu4FoJz81XEx5+qfOc="
LEGACY_POST_SIGNATURE = "6DQcBYwaKdhRm/eNBKIN2jM8HF8="
LEGACY_CUSTOM_HEADER_SIGNATURE = "QRMtvnGmlP1YbaTwpWyB/6A8dRU="
CURRENT_GET_SIGNATURE = "MRlPr/Z1WQY2sMthcaEqETRMw4gPYXlPcTpaLWS2gcc="
CURRENT_POST_SIGNATURE = "XDBaXgWFCY3aAgQvXyGXMbw9Vds2WPKJe2yP+1eXQgM="
# 2.0 GET with Custom1: Value1 signed as the line "custom1:Value1"
CURRENT_CUSTOM_HEADER_SIGNATURE = "cHFRsw4BR/yjIonM59cH0FxyKrFY5m7iLT91Xk6rRCY="

# Response to the 2.0 GET, keyed with the decoded request signature
RESPONSE_BODY = '{"id": 133, "status": "done"}'
RESPONSE_SIGNATURE = "mhDcA8DSPN/Xl8XmBmekfuvu9V1/TzGR9CRLVaaTLys="
# Same response keyed with the shared secret instead
SECRET_KEYED_RESPONSE_SIGNATURE = "M4wYp1MKvDpQtVOnN7LVt9L8or4pKyVLhfUFVJxHemU="

CURRENT_GET_HEADER = (
    'acquia-http-hmac id="efdde334-fe7b-11e4-a322-1697f925ec7b",'
    'nonce="d1954337-5319-4821-8427-115542e08d10",realm="Pipet%20service",'
    'signature="MRlPr/Z1WQY2sMthcaEqETRMw4gPYXlPcTpaLWS2gcc=",version="2.0"'
)
CURRENT_POST_HEADER = (
    'acquia-http-hmac id="efdde334-fe7b-11e4-a322-1697f925ec7b",'
    'nonce="d1954337-5319-4821-8427-115542e08d10",realm="Pipet%20service",'
    'signature="XDBaXgWFCY3aAgQvXyGXMbw9Vds2WPKJe2yP+1eXQgM=",version="2.0"'
)

OAUTH_HEADER = (
    'OAuth oauth_consumer_key="xvz1evFS4wEEPTGEFPHBog",'
    'oauth_nonce="kYjzVBB8Y0ZFabxSWbWovY3uYSQ2pTgmZeNu2VS4cg",'
    'oauth_signature="tnnArxj06cWHq44gCs1OSKk%2FjLY%3D",oauth_signature_method="HMAC-SHA1",'
    'oauth_timestamp="1318622958",oauth_token="370773112-GmHxMAgYyLbNEtIKZeRNFsMKPR9EyMZeS9weJAEb",'
    'oauth_version="1.0"'
)


def legacy_get_request(headers=None):
    return SignableRequest.from_url("GET", "http://example.com/resource/1?key=value", headers=headers)


def legacy_post_request(extra_headers=None):
    headers = {
        "Content-Type": "text/plain",
        "Date": "Fri, 19 Mar 1982 00:00:04 GMT",
    }
    headers.update(extra_headers or {})
    return SignableRequest.from_url(
        "POST", "http://example.com/resource/1?key=value", headers=headers, body="test content"
    )


def current_get_request(extra_headers=None):
    headers = {"X-Authorization-Timestamp": str(SYSTEM_TIME)}
    headers.update(extra_headers or {})
    return SignableRequest.from_url(
        "GET", "https://example.acquiapipet.net/v1.0/task-status/133?limit=10", headers=headers
    )


def current_post_request(extra_headers=None, drop=(), body=JSON_BODY):
    headers = {
        "X-Authorization-Timestamp": str(SYSTEM_TIME),
        "X-Authorization-Content-SHA256": JSON_BODY_SHA256,
        "Content-Type": "application/json",
    }
    headers.update(extra_headers or {})
    for name in drop:
        headers.pop(name, None)
    return SignableRequest.from_url("POST", "https://example.acquiapipet.net/v1.0/task/", headers=headers, body=body)


def response(body=RESPONSE_BODY, headers=None):
    return SignableResponse(status=200, headers=Headers(headers), body=body.encode("utf-8"))
