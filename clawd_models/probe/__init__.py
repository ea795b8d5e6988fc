from clawd_models.probe.builder import TestRequest, build_test_request, split_primary
from clawd_models.probe.masking import display_headers, is_sensitive_header, mask_value
from clawd_models.probe.transport import HttpTransport, TestResponse

__all__ = [
    "HttpTransport",
    "TestRequest",
    "TestResponse",
    "build_test_request",
    "display_headers",
    "is_sensitive_header",
    "mask_value",
    "split_primary",
]
