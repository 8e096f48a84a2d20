"""
csp-header - Content Security Policy header builder
"""

__version__ = "0.1.0"

from csp_header.constants import (
    CSP_HEADER,
    CSP_REPORT_ONLY_HEADER,
    HASH_ALGORITHMS,
    header_name,
)
from csp_header.directive import (
    DIRECTIVE_SORT_ORDER,
    DocumentDirective,
    FetchDirective,
    NavigationDirective,
    OtherDirective,
    ReportingDirective,
    sort_directives,
)
from csp_header.exceptions import CSPError, InvalidAlgorithm, PlatformUnavailable
from csp_header.models.policy_config import HashDescriptor, PolicyConfig
from csp_header.policy import (
    build_policy,
    format_policy_directive,
    format_policy_directive_list,
    format_sorted_policy_directive_list,
    merge_policy_values,
)
from csp_header.source_list import config_to_source_expression_list
from csp_header.value import (
    KeywordValue,
    SchemeSourceValue,
    UnsafeKeywordValue,
    format_hash_value,
    format_nonce_value,
    hash_source,
    random_nonce,
)
