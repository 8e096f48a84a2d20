"""CSP directive catalog and canonical directive sort order.

Directives are grouped into five categories. When several directives appear
in one policy they are ordered as follows:

1. Fetch directives: ``default-src``, ``script-src``, ``style-src``,
   ``img-src`` and ``font-src`` first, then the remaining fetch directives
   alphabetically.
2. Navigation directives (alphabetical).
3. Other directives (alphabetical).
4. Document directives (alphabetical).
5. Reporting directives (alphabetical).
"""

from __future__ import annotations

import enum
import types
from typing import Union


class DirectiveCategory(str, enum.Enum):
    fetch = "fetch"
    navigation = "navigation"
    other = "other"
    document = "document"
    reporting = "reporting"


class FetchDirective(str, enum.Enum):
    """Control the locations from which resource types may be loaded."""

    child_src = "child-src"
    connect_src = "connect-src"
    default_src = "default-src"
    fenced_frame_src = "fenced-frame-src"  # experimental
    font_src = "font-src"
    frame_src = "frame-src"
    img_src = "img-src"
    manifest_src = "manifest-src"
    media_src = "media-src"
    object_src = "object-src"
    prefetch_src = "prefetch-src"  # deprecated, non-standard
    script_src = "script-src"
    script_src_attr = "script-src-attr"
    script_src_elem = "script-src-elem"
    style_src = "style-src"
    style_src_attr = "style-src-attr"
    style_src_elem = "style-src-elem"
    worker_src = "worker-src"


class DocumentDirective(str, enum.Enum):
    """Govern properties of the document or worker the policy applies to."""

    base_uri = "base-uri"
    sandbox = "sandbox"


class NavigationDirective(str, enum.Enum):
    """Govern where a user can navigate or submit a form."""

    form_action = "form-action"
    frame_ancestors = "frame-ancestors"


class ReportingDirective(str, enum.Enum):
    """Control where CSP violation reports are sent."""

    report_to = "report-to"
    report_uri = "report-uri"  # deprecated in favour of report-to


class OtherDirective(str, enum.Enum):
    require_trusted_types_for = "require-trusted-types-for"
    trusted_types = "trusted-types"
    upgrade_insecure_requests = "upgrade-insecure-requests"


Directive = Union[
    FetchDirective,
    DocumentDirective,
    NavigationDirective,
    ReportingDirective,
    OtherDirective,
]

_CATEGORY_ENUMS: tuple[tuple[DirectiveCategory, type[enum.Enum]], ...] = (
    (DirectiveCategory.fetch, FetchDirective),
    (DirectiveCategory.navigation, NavigationDirective),
    (DirectiveCategory.other, OtherDirective),
    (DirectiveCategory.document, DocumentDirective),
    (DirectiveCategory.reporting, ReportingDirective),
)

ALL_DIRECTIVES: tuple[Directive, ...] = tuple(
    member for _, enum_cls in _CATEGORY_ENUMS for member in enum_cls
)

_BY_NAME: types.MappingProxyType = types.MappingProxyType(
    {member.value: member for member in ALL_DIRECTIVES}
)

_CATEGORY_BY_DIRECTIVE: types.MappingProxyType = types.MappingProxyType({
    member: category
    for category, enum_cls in _CATEGORY_ENUMS
    for member in enum_cls
})

# Most common fetch directives, pinned ahead of the alphabetical remainder
FETCH_DIRECTIVE_CUSTOM_ORDER: tuple[FetchDirective, ...] = (
    FetchDirective.default_src,
    FetchDirective.script_src,
    FetchDirective.style_src,
    FetchDirective.img_src,
    FetchDirective.font_src,
)


def _alphabetical(members) -> list:
    return sorted(members, key=lambda member: member.value)


def _build_sort_order() -> tuple[Directive, ...]:
    order: list[Directive] = list(FETCH_DIRECTIVE_CUSTOM_ORDER)
    order.extend(
        _alphabetical(d for d in FetchDirective if d not in FETCH_DIRECTIVE_CUSTOM_ORDER)
    )
    order.extend(_alphabetical(NavigationDirective))
    order.extend(_alphabetical(OtherDirective))
    order.extend(_alphabetical(DocumentDirective))
    order.extend(_alphabetical(ReportingDirective))
    return tuple(order)


DIRECTIVE_SORT_ORDER: tuple[Directive, ...] = _build_sort_order()

# str-mixin members hash like their values, so raw names resolve here too
_SORT_POSITION: types.MappingProxyType = types.MappingProxyType(
    {directive: index for index, directive in enumerate(DIRECTIVE_SORT_ORDER)}
)


def get_directive(name: str) -> Directive:
    """Resolve a directive name such as ``"script-src"`` to its enum member."""
    try:
        return _BY_NAME[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown CSP directive: {name}") from None


def directive_category(directive: Directive | str) -> DirectiveCategory:
    """Return the category a directive belongs to."""
    return _CATEGORY_BY_DIRECTIVE[get_directive(directive_name(directive))]


def directive_name(directive: Directive | str) -> str:
    """Return the plain header name for a directive member or string."""
    if isinstance(directive, enum.Enum):
        return directive.value
    return directive


def directive_sort_key(directive: Directive | str) -> int:
    """Position of a directive in DIRECTIVE_SORT_ORDER, for ``sorted(key=...)``."""
    try:
        return _SORT_POSITION[directive]
    except KeyError:
        raise ValueError(f"Unknown CSP directive: {directive}") from None


def sort_directives(a: Directive | str, b: Directive | str) -> int:
    """Comparator ordering directives by DIRECTIVE_SORT_ORDER.

    Only catalog directives may be passed; anything else raises ValueError.
    """
    return directive_sort_key(a) - directive_sort_key(b)
