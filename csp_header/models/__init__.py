from csp_header.models.policy_config import (
    HashDescriptor,
    KeywordConfig,
    PolicyConfig,
    SchemeKeywordConfig,
    UnsafeKeywordConfig,
)

__all__ = [
    "HashDescriptor",
    "KeywordConfig",
    "PolicyConfig",
    "SchemeKeywordConfig",
    "UnsafeKeywordConfig",
]
