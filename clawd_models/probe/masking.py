from clawd_models.constants import HEADER_MASK, MASKED_HEADER_MARKERS


def is_sensitive_header(name: str) -> bool:
    lowered = name.lower()
    return any(marker in lowered for marker in MASKED_HEADER_MARKERS)


def mask_value(value: str) -> str:
    if len(value) > len(HEADER_MASK):
        return value[: -len(HEADER_MASK)] + HEADER_MASK
    return HEADER_MASK


def display_headers(headers: dict[str, str]) -> list[tuple[str, str]]:
    return [
        (name, mask_value(value) if is_sensitive_header(name) else value)
        for name, value in headers.items()
    ]
