"""Format CSP policy directives and full policy strings."""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, Union

from pydantic import BaseModel

from csp_header.directive import Directive, directive_name, sort_directives
from csp_header.source_list import config_to_source_expression_list

DirectiveComparator = Callable[[Any, Any], int]

# (directive, value, value, ...)
PolicyDirectiveTuple = Sequence[Union[Directive, str]]

DirectiveSources = Union[BaseModel, Mapping[str, Any], Sequence[str], None]


def format_policy_directive(directive: Directive | str, *values: str) -> str:
    """Format one directive clause.

    Example:
        >>> format_policy_directive(FetchDirective.default_src, " 'self' ")
        "default-src 'self'"
        >>> format_policy_directive(DocumentDirective.sandbox)
        'sandbox'
    """
    name = directive_name(directive)
    if not values:
        return name
    return f"{name} {' '.join(value.strip() for value in values)}"


def format_sorted_policy_directive_list(
    sort: DirectiveComparator, *policies: PolicyDirectiveTuple
) -> str:
    """Format clauses ordered by ``sort`` and join them with ``"; "``.

    The comparator orders clauses only; values keep their given order.
    """
    ordered = sorted(policies, key=functools.cmp_to_key(lambda a, b: sort(a[0], b[0])))
    return "; ".join(
        format_policy_directive(directive, *values) for directive, *values in ordered
    )


def format_policy_directive_list(
    *policies: PolicyDirectiveTuple, sort: DirectiveComparator | None = None
) -> str:
    """Format a full policy, sorted with sort_directives unless ``sort`` is given.

    Example:
        >>> format_policy_directive_list(
        ...     (FetchDirective.script_src, "'self'"),
        ...     (FetchDirective.default_src, "'self'"),
        ...     (DocumentDirective.sandbox,),
        ... )
        "default-src 'self'; script-src 'self'; sandbox"
    """
    return format_sorted_policy_directive_list(sort or sort_directives, *policies)


def _source_values(sources: DirectiveSources) -> list[str]:
    if sources is None:
        return []
    if isinstance(sources, (BaseModel, Mapping)):
        rendered = config_to_source_expression_list(sources)
        return [rendered] if rendered else []
    if isinstance(sources, str):
        return [sources]
    return list(sources)


def build_policy(
    directives: Mapping[Directive | str, DirectiveSources],
    sort: DirectiveComparator | None = None,
) -> str:
    """Build a header value from a directive -> sources mapping.

    Sources may be a PolicyConfig (or its mapping form), a sequence of
    already formatted values, or None for a bare directive.
    """
    policies = [
        (directive, *_source_values(sources)) for directive, sources in directives.items()
    ]
    return format_policy_directive_list(*policies, sort=sort)


def merge_policy_values(
    base: Mapping[Directive | str, Iterable[str]],
    override: Mapping[Directive | str, Iterable[str]],
) -> dict[str, list[str]]:
    """Combine two directive -> values mappings keyed by directive name.

    Each override value is appended after the base values unless that
    directive already carries it. Directives only in override keep their
    override order. Neither input is modified.

    Example:
        >>> merge_policy_values({"img-src": ["'self'"]}, {"img-src": ["'self'", "data:"]})
        {'img-src': ["'self'", 'data:']}
    """
    merged: dict[str, list[str]] = {}
    for directive, values in base.items():
        merged[directive_name(directive)] = list(values)
    for directive, values in override.items():
        name = directive_name(directive)
        existing = merged.setdefault(name, [])
        seen = set(existing)
        for value in values:
            if value not in seen:
                existing.append(value)
                seen.add(value)
    return merged
