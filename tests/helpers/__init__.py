from .mocks import BASE_URL, MockTransport, SentRequest, json_response, page_payload

__all__ = [
    "BASE_URL",
    "MockTransport",
    "SentRequest",
    "json_response",
    "page_payload",
]
